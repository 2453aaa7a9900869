"""Stock Domain Services."""
from .stock_data_service import StockDataService, DATA_TYPES

__all__ = [
    'StockDataService',
    'DATA_TYPES',
]
