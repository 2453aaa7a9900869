from dataclasses import dataclass, field
from typing import List


@dataclass
class AccountStockInfo:
    """계좌 보유 종목별 평가 내역."""
    stock_code: str = ''
    stock_name: str = ''
    remain_qty: int = 0  # 보유수량
    avg_price: float = 0.0  # 평균단가
    current_price: int = 0
    eval_amount: int = 0  # 평가금액
    profit_loss_amount: int = 0
    profit_loss_rate: float = 0.0
    loan_date: str = ''
    purchase_amount: int = 0
    settlement_remain: int = 0  # 결제잔고
    prev_buy_qty: int = 0
    prev_sell_qty: int = 0
    today_buy_qty: int = 0
    today_sell_qty: int = 0


@dataclass
class AccountInfo:
    """
    계좌평가현황 스냅샷.
    이력이 아닌 '현재 계좌 상태' 하나만 표현합니다.
    """
    account_name: str = ''
    branch_name: str = ''
    deposit: int = 0  # 예수금
    d2_deposit: int = 0  # D+2추정예수금
    total_eval_amount: int = 0
    asset_eval_amount: int = 0
    total_purchase_amount: int = 0
    estimated_deposit_asset: int = 0
    total_loan_amount: int = 0

    today_invest_principal: int = 0
    month_invest_principal: int = 0
    accum_invest_principal: int = 0

    today_profit_loss: int = 0
    month_profit_loss: int = 0
    accum_profit_loss: int = 0

    today_profit_rate: float = 0.0
    month_profit_rate: float = 0.0
    accum_profit_rate: float = 0.0

    stock_infos: List[AccountStockInfo] = field(default_factory=list)
