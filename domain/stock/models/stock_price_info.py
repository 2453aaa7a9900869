from dataclasses import dataclass
from datetime import datetime


@dataclass
class StockPriceInfo:
    """
    체결 시점의 시세와 체결강도를 나타내는 도메인 모델.
    (stock_code, time) 조합이 식별자 역할을 합니다.
    """
    stock_code: str
    time: datetime
    current_price: int = 0
    diff_from_prev: int = 0
    diff_from_prev_sign: str = ''
    fluctuation_rate: float = 0.0
    volume: int = 0
    accumulated_trade_price: int = 0
    accumulated_trade_volume: int = 0
    volume_power: float = 0.0  # 체결강도
    volume_power_5min: float = 0.0
    volume_power_20min: float = 0.0
    volume_power_60min: float = 0.0
    exchange_type: str = ''
