"""Account domain models."""
from .account_info import AccountInfo, AccountStockInfo

__all__ = [
    'AccountInfo',
    'AccountStockInfo',
]
