from sqlalchemy import Column, Integer, String, Float, BigInteger, ForeignKey
from sqlalchemy.orm import relationship

from infrastructure.db.db_manager import Base


class AccountInfo(Base):
    """계좌평가현황(kt00004). 항상 가장 최근 스냅샷 한 행만 유지합니다."""
    __tablename__ = 'account_info'

    id = Column(Integer, primary_key=True, autoincrement=True)
    account_name = Column(String(100), default='')  # acnt_nm
    branch_name = Column(String(100), default='')  # brch_nm
    deposit = Column(BigInteger, default=0)  # entr 예수금
    d2_deposit = Column(BigInteger, default=0)  # d2_entra D+2추정예수금
    total_eval_amount = Column(BigInteger, default=0)  # tot_est_amt 유가잔고평가액
    asset_eval_amount = Column(BigInteger, default=0)  # aset_evlt_amt 예탁자산평가액
    total_purchase_amount = Column(BigInteger, default=0)  # tot_pur_amt 총매입금액
    estimated_deposit_asset = Column(BigInteger, default=0)  # prsm_dpst_aset_amt 추정예탁자산
    total_loan_amount = Column(BigInteger, default=0)  # tot_grnt_sella 매도담보대출금

    today_invest_principal = Column(BigInteger, default=0)  # tdy_lspft_amt 당일투자원금
    month_invest_principal = Column(BigInteger, default=0)  # invt_bsamt 당월투자원금
    accum_invest_principal = Column(BigInteger, default=0)  # lspft_amt 누적투자원금

    today_profit_loss = Column(BigInteger, default=0)  # tdy_lspft 당일투자손익
    month_profit_loss = Column(BigInteger, default=0)  # lspft2 당월투자손익
    accum_profit_loss = Column(BigInteger, default=0)  # lspft 누적투자손익

    today_profit_rate = Column(Float, default=0.0)  # tdy_lspft_rt 당일손익율
    month_profit_rate = Column(Float, default=0.0)  # lspft_ratio 당월손익율
    accum_profit_rate = Column(Float, default=0.0)  # lspft_rt 누적손익율

    stock_infos = relationship(
        "AccountStockInfo",
        back_populates="account_info",
        cascade="all, delete-orphan",
        order_by="AccountStockInfo.id",
        lazy="selectin",
    )


class AccountStockInfo(Base):
    """계좌 보유 종목별 평가 내역 (stk_acnt_evlt_prst)."""
    __tablename__ = 'account_stock_info'

    id = Column(Integer, primary_key=True, autoincrement=True)
    account_info_id = Column(Integer, ForeignKey('account_info.id', ondelete='CASCADE'), nullable=False)

    stock_code = Column(String(20), default='')  # stk_cd
    stock_name = Column(String(100), default='')  # stk_nm
    remain_qty = Column(BigInteger, default=0)  # rmnd_qty 보유수량
    avg_price = Column(Float, default=0.0)  # avg_prc 평균단가
    current_price = Column(BigInteger, default=0)  # cur_prc 현재가
    eval_amount = Column(BigInteger, default=0)  # evlt_amt 평가금액
    profit_loss_amount = Column(BigInteger, default=0)  # pl_amt 손익금액
    profit_loss_rate = Column(Float, default=0.0)  # pl_rt 손익율
    loan_date = Column(String(8), default='')  # loan_dt 대출일
    purchase_amount = Column(BigInteger, default=0)  # pur_amt 매입금액
    settlement_remain = Column(BigInteger, default=0)  # setl_remn 결제잔고
    prev_buy_qty = Column(BigInteger, default=0)  # pred_buyq 전일매수수량
    prev_sell_qty = Column(BigInteger, default=0)  # pred_sellq 전일매도수량
    today_buy_qty = Column(BigInteger, default=0)  # tdy_buyq 금일매수수량
    today_sell_qty = Column(BigInteger, default=0)  # tdy_sellq 금일매도수량

    account_info = relationship("AccountInfo", back_populates="stock_infos")
