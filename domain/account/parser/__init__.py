from .account_parser import AccountParser

__all__ = [
    'AccountParser',
]
