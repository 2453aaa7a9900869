"""Kiwoom REST API Client Package."""
from .kiwoom_client import KiwoomClient

__all__ = [
    'KiwoomClient',
]
