"""Stock domain models."""
from .stock_price_info import StockPriceInfo
from .stock_order_book import StockOrderBook
from .stock_daily_candle import StockDailyCandle
from .stock_investor import StockInvestor

__all__ = [
    'StockPriceInfo',
    'StockOrderBook',
    'StockDailyCandle',
    'StockInvestor',
]
