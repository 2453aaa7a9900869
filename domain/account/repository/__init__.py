from .account_repository import AccountRepository

__all__ = [
    'AccountRepository',
]
