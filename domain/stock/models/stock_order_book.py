from dataclasses import dataclass
from datetime import datetime


@dataclass
class StockOrderBook:
    """호가 총잔량 스냅샷."""
    stock_code: str
    time: datetime
    total_sell_remain: int = 0
    total_buy_remain: int = 0
