"""SQLAlchemy repository implementations."""
from .sql_stock_data_repository import SQLStockDataRepository
from .sql_account_repository import SQLAccountRepository

__all__ = [
    'SQLStockDataRepository',
    'SQLAccountRepository',
]
