"""Database infrastructure package"""

from .config.settings import DATABASE_URL
from .db_manager import engine, SessionLocal, Base, init_db, get_db, create_db_and_tables
from .models import (
    StockPriceInfo,
    StockOrderBook,
    StockDailyCandle,
    StockInvestor,
    AccountInfo,
    AccountStockInfo,
)

__all__ = [
    'engine',
    'SessionLocal',
    'Base',
    'DATABASE_URL',
    'init_db',
    'get_db',
    'create_db_and_tables',
    'StockPriceInfo',
    'StockOrderBook',
    'StockDailyCandle',
    'StockInvestor',
    'AccountInfo',
    'AccountStockInfo',
]
