from typing import Any, Dict

from common.exceptions import ParseError
from domain.account.models import AccountInfo, AccountStockInfo
from domain.stock.parser.field_normalizer import parse_float, parse_int, parse_str
from infrastructure.logging import get_logger

logger = get_logger(__name__)

# 레코드 속성명 -> 응답 키
ACCOUNT_FIELDS = {
    'account_name': 'acnt_nm',
    'branch_name': 'brch_nm',
    'deposit': 'entr',
    'd2_deposit': 'd2_entra',
    'total_eval_amount': 'tot_est_amt',
    'asset_eval_amount': 'aset_evlt_amt',
    'total_purchase_amount': 'tot_pur_amt',
    'estimated_deposit_asset': 'prsm_dpst_aset_amt',
    'total_loan_amount': 'tot_grnt_sella',
    'today_invest_principal': 'tdy_lspft_amt',
    'month_invest_principal': 'invt_bsamt',
    'accum_invest_principal': 'lspft_amt',
    'today_profit_loss': 'tdy_lspft',
    'month_profit_loss': 'lspft2',
    'accum_profit_loss': 'lspft',
    'today_profit_rate': 'tdy_lspft_rt',
    'month_profit_rate': 'lspft_ratio',
    'accum_profit_rate': 'lspft_rt',
}

STOCK_FIELDS = {
    'stock_code': 'stk_cd',
    'stock_name': 'stk_nm',
    'remain_qty': 'rmnd_qty',
    'avg_price': 'avg_prc',
    'current_price': 'cur_prc',
    'eval_amount': 'evlt_amt',
    'profit_loss_amount': 'pl_amt',
    'profit_loss_rate': 'pl_rt',
    'loan_date': 'loan_dt',
    'purchase_amount': 'pur_amt',
    'settlement_remain': 'setl_remn',
    'prev_buy_qty': 'pred_buyq',
    'prev_sell_qty': 'pred_sellq',
    'today_buy_qty': 'tdy_buyq',
    'today_sell_qty': 'tdy_sellq',
}

STOCK_LIST_KEY = 'stk_acnt_evlt_prst'

_STR_FIELDS = {'account_name', 'branch_name', 'stock_code', 'stock_name', 'loan_date'}
_FLOAT_FIELDS = {'today_profit_rate', 'month_profit_rate', 'accum_profit_rate', 'avg_price', 'profit_loss_rate'}


def _convert(name: str, raw: Any) -> Any:
    if name in _STR_FIELDS:
        return parse_str(raw)
    if name in _FLOAT_FIELDS:
        return parse_float(raw)
    return parse_int(raw)


def _map(data: Dict[str, Any], field_map: Dict[str, str]) -> Dict[str, Any]:
    return {name: _convert(name, data.get(key)) for name, key in field_map.items()}


class AccountParser:
    """
    계좌평가현황(kt00004) 응답 파서.
    시세 파서와 달리 구조 오류를 삼키지 않고 ParseError로 알립니다.
    """

    def parse(self, response: Any) -> AccountInfo:
        if not isinstance(response, dict):
            raise ParseError("Failed to parse account info: response is not an object", payload=response)

        account_info = AccountInfo(**_map(response, ACCOUNT_FIELDS))

        stock_list = response.get(STOCK_LIST_KEY)
        if stock_list is None:
            return account_info
        if not isinstance(stock_list, list):
            raise ParseError(f"Failed to parse account info: '{STOCK_LIST_KEY}' is not a list", payload=response)

        for stock_data in stock_list:
            if not isinstance(stock_data, dict):
                raise ParseError("Failed to parse account info: unexpected holding row", payload=stock_data)
            account_info.stock_infos.append(AccountStockInfo(**_map(stock_data, STOCK_FIELDS)))

        return account_info
