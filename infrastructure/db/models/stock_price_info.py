from sqlalchemy import Column, Integer, String, Float, DateTime, BigInteger, UniqueConstraint

from infrastructure.db.db_manager import Base


class StockPriceInfo(Base):
    """
    체결강도 추이(ka10046) 응답에서 추출한 종목별 시세 스냅샷.
    특정 종목의 특정 체결 시각에는 단 하나의 행만 존재합니다.
    """
    __tablename__ = 'stock_price_info'

    id = Column(Integer, primary_key=True, autoincrement=True)
    stock_code = Column(String(20), nullable=False, index=True)  # 종목코드
    time = Column(DateTime, nullable=False)  # 체결시간 (cntr_tm)

    current_price = Column(BigInteger, default=0)  # 현재가 (cur_prc)
    diff_from_prev = Column(BigInteger, default=0)  # 전일대비 (pred_pre)
    diff_from_prev_sign = Column(String(5), default='')  # 전일대비기호 (pred_pre_sig)
    fluctuation_rate = Column(Float, default=0.0)  # 등락율 (flu_rt)
    volume = Column(BigInteger, default=0)  # 거래량 (trde_qty)
    accumulated_trade_price = Column(BigInteger, default=0)  # 누적거래대금 (acc_trde_prica)
    accumulated_trade_volume = Column(BigInteger, default=0)  # 누적거래량 (acc_trde_qty)

    # 체결강도
    volume_power = Column(Float, default=0.0)  # cntr_str
    volume_power_5min = Column(Float, default=0.0)  # cntr_str_5min
    volume_power_20min = Column(Float, default=0.0)  # cntr_str_20min
    volume_power_60min = Column(Float, default=0.0)  # cntr_str_60min

    exchange_type = Column(String(10), default='')  # 거래소구분 (stex_tp)

    __table_args__ = (
        UniqueConstraint('stock_code', 'time', name='uq_stock_price_info_code_time'),
    )

    def __repr__(self):
        return f"<StockPriceInfo(stock_code='{self.stock_code}', time='{self.time}', current_price={self.current_price})>"
