"""
Data layer: chain index, quotes, expiry helpers, session calendar, frame-backed source
"""

from .chain_index import ChainIndex
from .models import CP, Quote, ChainSnapshot, MarketDataSource, StrikeSlices
from .expiries import parse_expiry, month_label, distinct_month_labels, time_difference
from .calendars import is_market_open, is_weekday, session_window
from .frames import normalize_chain, FrameMarketData

__all__ = [
    "ChainIndex",
    "CP",
    "Quote",
    "ChainSnapshot",
    "MarketDataSource",
    "StrikeSlices",
    "parse_expiry",
    "month_label",
    "distinct_month_labels",
    "time_difference",
    "is_market_open",
    "is_weekday",
    "session_window",
    "normalize_chain",
    "FrameMarketData",
]
