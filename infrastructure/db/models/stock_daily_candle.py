from sqlalchemy import Column, Integer, String, Float, Date, BigInteger, UniqueConstraint

from infrastructure.db.db_manager import Base


class StockDailyCandle(Base):
    """
    주식일봉차트(ka10081) 데이터.
    종목별 일자당 하나의 행만 존재합니다.
    """
    __tablename__ = 'stock_daily_candle'

    id = Column(Integer, primary_key=True, autoincrement=True)
    stock_code = Column(String(20), nullable=False, index=True)
    date = Column(Date, nullable=False)  # 일자 (dt)

    open_price = Column(BigInteger, default=0)  # 시가 (open_pric)
    high_price = Column(BigInteger, default=0)  # 고가 (high_pric)
    low_price = Column(BigInteger, default=0)  # 저가 (low_pric)
    close_price = Column(BigInteger, default=0)  # 종가 (cur_prc)
    volume = Column(BigInteger, default=0)  # 거래량 (trde_qty)
    trading_value = Column(BigInteger, default=0)  # 거래대금 (trde_prica)
    change_from_prev = Column(BigInteger, default=0)  # 전일대비 (pred_pre)
    change_sign = Column(String(5), default='')  # 전일대비기호 (pred_pre_sig)
    turnover_rate = Column(Float, default=0.0)  # 거래회전율 (trde_tern_rt)

    __table_args__ = (
        UniqueConstraint('stock_code', 'date', name='uq_stock_daily_candle_code_date'),
    )
