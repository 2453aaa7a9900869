"""
키움 API 응답 파서.

모든 파서는 같은 흐름을 따릅니다.
1. 응답 envelope에서 지정된 리스트 필드를 꺼냅니다.
2. 필드가 없거나 비어 있으면 빈 결과를 반환합니다 (오류 아님).
3. 각 원소를 FieldNormalizer로 변환해 도메인 레코드를 만듭니다.

응답 구조가 기대와 다르면 payload와 함께 로그를 남기고 빈 결과를 반환합니다.
파서에서 예외가 밖으로 전파되지 않으므로 한 종목/한 데이터 종류의 오류가
수집 주기 전체를 중단시키지 않습니다.

리스트 키와 필드 매핑(레코드 속성명 -> 응답 키)은 생성자에서 덮어쓸 수 있습니다.
"""
from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import Any, Dict, Generic, List, Mapping, Optional, TypeVar

from common.config.settings import DAILY_CANDLE_LOOKBACK_DAYS
from common.exceptions import ParseError
from domain.stock.models import StockDailyCandle, StockInvestor, StockOrderBook, StockPriceInfo
from domain.stock.parser.field_normalizer import (
    parse_float, parse_int, parse_str, reconstruct_date, reconstruct_time,
)
from infrastructure.logging import get_logger

logger = get_logger(__name__)

T = TypeVar('T')

_PARSE_FAILURES = (ParseError, AttributeError, KeyError, TypeError, ValueError)


class BaseResponseParser(ABC, Generic[T]):
    """리스트 필드 추출 -> 원소별 매핑의 공통 골격."""

    DATA_NAME: str = 'data'
    LIST_KEY: str = ''
    FIELDS: Dict[str, str] = {}

    def __init__(self, list_key: Optional[str] = None, fields: Optional[Mapping[str, str]] = None):
        self.list_key = list_key or self.LIST_KEY
        self.fields = {**self.FIELDS, **(fields or {})}

    def parse(self, stock_code: str, response: Any, now: Optional[datetime] = None) -> List[T]:
        """
        응답을 도메인 레코드 리스트로 변환합니다.

        Args:
            stock_code: 요청한 종목코드
            response: JSON으로 디코딩된 응답 본문
            now: 시각/일자 복원 및 필터링 기준 시각 (생략 시 현재 시각)

        Returns:
            List[T]: 변환된 레코드. 데이터가 없거나 구조 오류 시 빈 리스트.
        """
        now = now or datetime.now()
        try:
            rows = self._extract_rows(response)
            if not rows:
                logger.warning(f"No {self.DATA_NAME} found for {stock_code}: {response}")
                return []
            return self._build(stock_code, rows, now)
        except _PARSE_FAILURES as e:
            logger.error(f"Error parsing {self.DATA_NAME} response for {stock_code}: {e} | payload={response}")
            return []

    def _extract_rows(self, response: Any) -> List[Any]:
        if not isinstance(response, dict):
            raise ParseError(f"Unexpected response type: {type(response).__name__}", payload=response)
        rows = response.get(self.list_key)
        if rows is None:
            return []
        if not isinstance(rows, list):
            raise ParseError(f"'{self.list_key}' is not a list", payload=response)
        return rows

    def _build(self, stock_code: str, rows: List[Any], now: datetime) -> List[T]:
        return [self._map_row(stock_code, self._as_row(row), now) for row in rows]

    @staticmethod
    def _as_row(row: Any) -> Dict[str, Any]:
        if not isinstance(row, dict):
            raise ParseError(f"Unexpected row type: {type(row).__name__}", payload=row)
        return row

    def _get(self, row: Mapping[str, Any], name: str) -> Any:
        return row.get(self.fields[name])

    def _int(self, row: Mapping[str, Any], name: str) -> int:
        return parse_int(self._get(row, name))

    def _float(self, row: Mapping[str, Any], name: str) -> float:
        return parse_float(self._get(row, name))

    def _str(self, row: Mapping[str, Any], name: str) -> str:
        return parse_str(self._get(row, name))

    @abstractmethod
    def _map_row(self, stock_code: str, row: Dict[str, Any], now: datetime) -> T:
        raise NotImplementedError


class StockPriceParser(BaseResponseParser[StockPriceInfo]):
    """체결강도 추이(ka10046). 리스트의 첫 원소(가장 최근 체결)만 사용합니다."""

    DATA_NAME = 'chart data'
    LIST_KEY = 'cntr_str_tm'
    FIELDS = {
        'time': 'cntr_tm',
        'current_price': 'cur_prc',
        'diff_from_prev': 'pred_pre',
        'diff_from_prev_sign': 'pred_pre_sig',
        'fluctuation_rate': 'flu_rt',
        'volume': 'trde_qty',
        'accumulated_trade_price': 'acc_trde_prica',
        'accumulated_trade_volume': 'acc_trde_qty',
        'volume_power': 'cntr_str',
        'volume_power_5min': 'cntr_str_5min',
        'volume_power_20min': 'cntr_str_20min',
        'volume_power_60min': 'cntr_str_60min',
        'exchange_type': 'stex_tp',
    }

    def _build(self, stock_code, rows, now):
        return [self._map_row(stock_code, self._as_row(rows[0]), now)]

    def _map_row(self, stock_code, row, now):
        return StockPriceInfo(
            stock_code=stock_code,
            time=reconstruct_time(self._get(row, 'time'), now),
            current_price=self._int(row, 'current_price'),
            diff_from_prev=self._int(row, 'diff_from_prev'),
            diff_from_prev_sign=self._str(row, 'diff_from_prev_sign'),
            fluctuation_rate=self._float(row, 'fluctuation_rate'),
            volume=self._int(row, 'volume'),
            accumulated_trade_price=self._int(row, 'accumulated_trade_price'),
            accumulated_trade_volume=self._int(row, 'accumulated_trade_volume'),
            volume_power=self._float(row, 'volume_power'),
            volume_power_5min=self._float(row, 'volume_power_5min'),
            volume_power_20min=self._float(row, 'volume_power_20min'),
            volume_power_60min=self._float(row, 'volume_power_60min'),
            exchange_type=self._str(row, 'exchange_type'),
        )


class OrderBookParser(BaseResponseParser[StockOrderBook]):
    """
    주식호가(ka10004).
    필드가 "output" 객체 안에 감싸져 오거나 최상위에 바로 오는 두 형태를 모두 처리합니다.
    결과는 최대 한 건입니다.
    """

    DATA_NAME = 'order book'
    LIST_KEY = 'output'
    FIELDS = {
        'time': 'bid_req_base_tm',
        'total_sell_remain': 'tot_sel_req',
        'total_buy_remain': 'tot_buy_req',
    }

    def _extract_rows(self, response):
        if not isinstance(response, dict):
            raise ParseError(f"Unexpected response type: {type(response).__name__}", payload=response)
        data = self._as_row(response[self.list_key] if self.list_key in response else response)
        # 호가 관련 필드가 하나도 없으면 빈 응답으로 간주
        if not any(key in data for key in self.fields.values()):
            return []
        return [data]

    def _map_row(self, stock_code, row, now):
        return StockOrderBook(
            stock_code=stock_code,
            time=reconstruct_time(self._get(row, 'time'), now),
            total_sell_remain=self._int(row, 'total_sell_remain'),
            total_buy_remain=self._int(row, 'total_buy_remain'),
        )


class DailyCandleParser(BaseResponseParser[StockDailyCandle]):
    """주식일봉차트(ka10081). 최근 일주일 이내 일자만 남깁니다."""

    DATA_NAME = 'daily candle data'
    LIST_KEY = 'stk_dt_pole_chart_qry'
    FIELDS = {
        'date': 'dt',
        'close_price': 'cur_prc',
        'volume': 'trde_qty',
        'trading_value': 'trde_prica',
        'open_price': 'open_pric',
        'high_price': 'high_pric',
        'low_price': 'low_pric',
        'change_from_prev': 'pred_pre',
        'change_sign': 'pred_pre_sig',
        'turnover_rate': 'trde_tern_rt',
    }

    def __init__(self, list_key=None, fields=None, lookback_days: int = DAILY_CANDLE_LOOKBACK_DAYS):
        super().__init__(list_key, fields)
        self.lookback_days = lookback_days

    def _build(self, stock_code, rows, now):
        one_week_ago = now.date() - timedelta(days=self.lookback_days)
        candles = super()._build(stock_code, rows, now)
        return [candle for candle in candles if candle.date >= one_week_ago]

    def _map_row(self, stock_code, row, now):
        return StockDailyCandle(
            stock_code=stock_code,
            date=reconstruct_date(self._get(row, 'date'), now.date()),
            open_price=self._int(row, 'open_price'),
            high_price=self._int(row, 'high_price'),
            low_price=self._int(row, 'low_price'),
            close_price=self._int(row, 'close_price'),
            volume=self._int(row, 'volume'),
            trading_value=self._int(row, 'trading_value'),
            change_from_prev=self._int(row, 'change_from_prev'),
            change_sign=self._str(row, 'change_sign'),
            turnover_rate=self._float(row, 'turnover_rate'),
        )


class InvestorParser(BaseResponseParser[StockInvestor]):
    """종목별 투자자/기관별(ka10059). 오늘 날짜 데이터만 남깁니다."""

    DATA_NAME = 'investor data'
    LIST_KEY = 'stk_invsr_orgn'
    FIELDS = {
        'date': 'dt',
        'current_price': 'cur_prc',
        'change_from_prev': 'pred_pre',
        'fluctuation_rate': 'flu_rt',
        'volume': 'acc_trde_qty',
        'trading_value': 'acc_trde_prica',
        'individual': 'ind_invsr',
        'foreigner': 'frgnr_invsr',
        'institution': 'orgn',
        'financial_investment': 'fnnc_invt',
        'insurance': 'insrnc',
        'investment_trust': 'invtrt',
        'etc_finance': 'etc_fnnc',
        'bank': 'bank',
        'pension_fund': 'penfnd_etc',
        'private_fund': 'samo_fund',
        'nation': 'natn',
        'etc_corp': 'etc_corp',
        'foreign_national': 'natfor',
    }

    FLOW_FIELDS = (
        'individual', 'foreigner', 'institution', 'financial_investment', 'insurance',
        'investment_trust', 'etc_finance', 'bank', 'pension_fund', 'private_fund',
        'nation', 'etc_corp', 'foreign_national',
    )

    def _build(self, stock_code, rows, now):
        today = now.date()
        investors = super()._build(stock_code, rows, now)
        return [investor for investor in investors if investor.date == today]

    def _map_row(self, stock_code, row, now):
        flows = {name: self._int(row, name) for name in self.FLOW_FIELDS}
        return StockInvestor(
            time=now,
            stock_code=stock_code,
            date=reconstruct_date(self._get(row, 'date'), now.date()),
            current_price=self._int(row, 'current_price'),
            change_from_prev=self._int(row, 'change_from_prev'),
            fluctuation_rate=self._float(row, 'fluctuation_rate'),
            volume=self._int(row, 'volume'),
            trading_value=self._int(row, 'trading_value'),
            **flows,
        )
