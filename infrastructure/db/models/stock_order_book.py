from sqlalchemy import Column, Integer, String, DateTime, BigInteger

from infrastructure.db.db_manager import Base


class StockOrderBook(Base):
    """주식호가(ka10004) 총잔량 스냅샷. 수집 주기마다 한 행씩 누적됩니다."""
    __tablename__ = 'stock_order_book'

    id = Column(Integer, primary_key=True, autoincrement=True)
    stock_code = Column(String(20), nullable=False, index=True)
    time = Column(DateTime, nullable=False)  # 호가잔량기준시간 (bid_req_base_tm)
    total_sell_remain = Column(BigInteger, default=0)  # 총매도잔량 (tot_sel_req)
    total_buy_remain = Column(BigInteger, default=0)  # 총매수잔량 (tot_buy_req)
