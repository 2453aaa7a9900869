"""Kiwoom response parsing: field normalization and per-endpoint parsers."""
from .field_normalizer import parse_int, parse_float, parse_str, reconstruct_time, reconstruct_date, format_date
from .response_parsers import (
    BaseResponseParser,
    StockPriceParser,
    OrderBookParser,
    DailyCandleParser,
    InvestorParser,
)

__all__ = [
    'parse_int',
    'parse_float',
    'parse_str',
    'reconstruct_time',
    'reconstruct_date',
    'format_date',
    'BaseResponseParser',
    'StockPriceParser',
    'OrderBookParser',
    'DailyCandleParser',
    'InvestorParser',
]
