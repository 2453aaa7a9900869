"""Scheduler Jobs Package."""
from .stock_data_collection_job import stock_data_collection_job, is_market_open
from .account_update_job import account_update_job

__all__ = [
    'stock_data_collection_job',
    'is_market_open',
    'account_update_job',
]
