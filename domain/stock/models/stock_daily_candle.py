from dataclasses import dataclass
from datetime import date


@dataclass
class StockDailyCandle:
    """
    일봉(OHLCV) 도메인 모델.
    (stock_code, date) 조합이 식별자 역할을 합니다.
    """
    stock_code: str
    date: date
    open_price: int = 0
    high_price: int = 0
    low_price: int = 0
    close_price: int = 0
    volume: int = 0
    trading_value: int = 0
    change_from_prev: int = 0
    change_sign: str = ''
    turnover_rate: float = 0.0
