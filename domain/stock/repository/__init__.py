from .stock_data_repository import StockDataRepository

__all__ = [
    'StockDataRepository',
]
