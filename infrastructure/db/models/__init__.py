"""Database models package"""

from .stock_price_info import StockPriceInfo
from .stock_order_book import StockOrderBook
from .stock_daily_candle import StockDailyCandle
from .stock_investor import StockInvestor
from .account_info import AccountInfo, AccountStockInfo

__all__ = [
    'StockPriceInfo',
    'StockOrderBook',
    'StockDailyCandle',
    'StockInvestor',
    'AccountInfo',
    'AccountStockInfo',
]
