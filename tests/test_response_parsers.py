from datetime import date, datetime

import pytest

from domain.stock.parser import DailyCandleParser, InvestorParser, OrderBookParser, StockPriceParser

NOW = datetime(2024, 3, 15, 10, 0, 0)


# --- 체결 시세 ---

def test_price_parser_maps_first_row_only():
    response = {
        'cntr_str_tm': [
            {'cntr_tm': '095959', 'cur_prc': '+75,000', 'pred_pre': '-500', 'pred_pre_sig': '5',
             'flu_rt': '-0.66', 'trde_qty': '1,200', 'acc_trde_prica': '123,456', 'acc_trde_qty': '987,654',
             'cntr_str': '105.32', 'cntr_str_5min': '101.1', 'cntr_str_20min': '99.9',
             'cntr_str_60min': '98.0', 'stex_tp': 'KRX'},
            {'cntr_tm': '095958', 'cur_prc': '74,900'},
        ]
    }

    infos = StockPriceParser().parse('005930', response, NOW)

    assert len(infos) == 1
    info = infos[0]
    assert info.stock_code == '005930'
    assert info.time == datetime(2024, 3, 15, 9, 59, 59)
    assert info.current_price == 75000
    assert info.diff_from_prev == -500
    assert info.diff_from_prev_sign == '5'
    assert info.fluctuation_rate == pytest.approx(-0.66)
    assert info.volume == 1200
    assert info.accumulated_trade_price == 123456
    assert info.accumulated_trade_volume == 987654
    assert info.volume_power == pytest.approx(105.32)
    assert info.volume_power_60min == pytest.approx(98.0)
    assert info.exchange_type == 'KRX'


def test_price_parser_with_custom_list_key_and_fields():
    parser = StockPriceParser(
        list_key='report_list',
        fields={'time': 'time', 'current_price': 'price', 'volume': 'volume'},
    )
    response = {'report_list': [{'time': '093015', 'price': '+1,234', 'volume': ''}]}

    infos = parser.parse('005930', response, NOW)

    assert len(infos) == 1
    assert infos[0].stock_code == '005930'
    assert infos[0].time == datetime(2024, 3, 15, 9, 30, 15)
    assert infos[0].current_price == 1234
    assert infos[0].volume == 0


def test_price_parser_bad_numeric_fields_become_zero():
    response = {'cntr_str_tm': [{'cntr_tm': '093015', 'cur_prc': 'abc', 'cntr_str': ''}]}

    info = StockPriceParser().parse('005930', response, NOW)[0]

    assert info.current_price == 0
    assert info.volume_power == 0.0
    assert info.exchange_type == ''


def test_price_parser_malformed_time_uses_reference_now():
    response = {'cntr_str_tm': [{'cntr_tm': '9:30', 'cur_prc': '100'}]}

    info = StockPriceParser().parse('005930', response, NOW)[0]

    assert info.time == NOW


# --- 빈 응답 / 구조 오류 ---

@pytest.mark.parametrize("parser, response", [
    (StockPriceParser(), {'cntr_str_tm': []}),
    (StockPriceParser(), {'return_code': 0}),
    (DailyCandleParser(), {'stk_dt_pole_chart_qry': []}),
    (DailyCandleParser(), {}),
    (InvestorParser(), {'stk_invsr_orgn': []}),
    (InvestorParser(), {'return_msg': 'no data'}),
    (OrderBookParser(), {'return_code': 0, 'return_msg': 'ok'}),
    (OrderBookParser(), {'output': {}}),
])
def test_parsers_return_empty_list_when_no_data(parser, response):
    assert parser.parse('005930', response, NOW) == []


@pytest.mark.parametrize("parser", [StockPriceParser(), DailyCandleParser(), InvestorParser(), OrderBookParser()])
@pytest.mark.parametrize("response", [None, "Internal Server Error", ['not', 'an', 'object']])
def test_parsers_return_empty_list_for_non_object_response(parser, response):
    assert parser.parse('005930', response, NOW) == []


@pytest.mark.parametrize("parser, response", [
    (StockPriceParser(), {'cntr_str_tm': 'not-a-list'}),
    (StockPriceParser(), {'cntr_str_tm': ['row-is-a-string']}),
    (DailyCandleParser(), {'stk_dt_pole_chart_qry': [{'dt': '20240315'}, 42]}),
    (InvestorParser(), {'stk_invsr_orgn': {'dt': '20240315'}}),
    (OrderBookParser(), {'output': 'broken'}),
])
def test_parsers_return_empty_list_for_malformed_structure(parser, response):
    assert parser.parse('005930', response, NOW) == []


# --- 호가 ---

def test_order_book_parser_reads_wrapped_output():
    response = {'output': {'bid_req_base_tm': '100000', 'tot_sel_req': '12,345', 'tot_buy_req': '+6,789'}}

    order_books = OrderBookParser().parse('000660', response, NOW)

    assert len(order_books) == 1
    assert order_books[0].stock_code == '000660'
    assert order_books[0].time == datetime(2024, 3, 15, 10, 0, 0)
    assert order_books[0].total_sell_remain == 12345
    assert order_books[0].total_buy_remain == 6789


def test_order_book_parser_reads_top_level_fields():
    response = {'bid_req_base_tm': '093000', 'tot_sel_req': '100', 'tot_buy_req': '200', 'return_code': 0}

    order_books = OrderBookParser().parse('000660', response, NOW)

    assert len(order_books) == 1
    assert order_books[0].time == datetime(2024, 3, 15, 9, 30, 0)
    assert order_books[0].total_sell_remain == 100
    assert order_books[0].total_buy_remain == 200


# --- 일봉 ---

def test_daily_candle_parser_keeps_last_seven_days_only():
    response = {
        'stk_dt_pole_chart_qry': [
            {'dt': '20240315', 'cur_prc': '75,000', 'open_pric': '74,000', 'high_pric': '75,500',
             'low_pric': '73,900', 'trde_qty': '1,000,000', 'trde_prica': '75,000,000',
             'pred_pre': '+1,000', 'pred_pre_sig': '2', 'trde_tern_rt': '0.17'},
            {'dt': '20240308', 'cur_prc': '72,000'},
            {'dt': '20240307', 'cur_prc': '71,000'},
            {'dt': '20240201', 'cur_prc': '70,000'},
        ]
    }

    candles = DailyCandleParser().parse('005930', response, NOW)

    assert [c.date for c in candles] == [date(2024, 3, 15), date(2024, 3, 8)]
    latest = candles[0]
    assert latest.open_price == 74000
    assert latest.high_price == 75500
    assert latest.low_price == 73900
    assert latest.close_price == 75000
    assert latest.volume == 1000000
    assert latest.trading_value == 75000000
    assert latest.change_from_prev == 1000
    assert latest.change_sign == '2'
    assert latest.turnover_rate == pytest.approx(0.17)


def test_daily_candle_parser_all_rows_too_old():
    response = {'stk_dt_pole_chart_qry': [{'dt': '20240101', 'cur_prc': '1'}]}

    assert DailyCandleParser().parse('005930', response, NOW) == []


def test_daily_candle_parser_custom_lookback():
    response = {'stk_dt_pole_chart_qry': [{'dt': '20240315'}, {'dt': '20240313'}]}

    candles = DailyCandleParser(lookback_days=1).parse('005930', response, NOW)

    assert [c.date for c in candles] == [date(2024, 3, 15)]


# --- 투자자 ---

def test_investor_parser_keeps_today_only():
    response = {
        'stk_invsr_orgn': [
            {'dt': '20240315', 'cur_prc': '+75,000', 'pred_pre': '+1,000', 'flu_rt': '+1.35',
             'acc_trde_qty': '1,000', 'acc_trde_prica': '75,000',
             'ind_invsr': '-1,500', 'frgnr_invsr': '+2,000', 'orgn': '-500', 'fnnc_invt': '10',
             'insrnc': '20', 'invtrt': '30', 'etc_fnnc': '40', 'bank': '50', 'penfnd_etc': '60',
             'samo_fund': '70', 'natn': '80', 'etc_corp': '90', 'natfor': '100'},
            {'dt': '20240314', 'cur_prc': '74,000', 'ind_invsr': '1'},
        ]
    }

    investors = InvestorParser().parse('005930', response, NOW)

    assert len(investors) == 1
    investor = investors[0]
    assert investor.time == NOW
    assert investor.date == date(2024, 3, 15)
    assert investor.current_price == 75000
    assert investor.fluctuation_rate == pytest.approx(1.35)
    assert investor.individual == -1500
    assert investor.foreigner == 2000
    assert investor.institution == -500
    assert investor.financial_investment == 10
    assert investor.insurance == 20
    assert investor.investment_trust == 30
    assert investor.etc_finance == 40
    assert investor.bank == 50
    assert investor.pension_fund == 60
    assert investor.private_fund == 70
    assert investor.nation == 80
    assert investor.etc_corp == 90
    assert investor.foreign_national == 100


def test_investor_parser_no_rows_for_today():
    response = {'stk_invsr_orgn': [{'dt': '20240314'}, {'dt': '20240313'}]}

    assert InvestorParser().parse('005930', response, NOW) == []
