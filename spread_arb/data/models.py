"""
Data models for quotes, chain snapshots and the market data interface.
"""

from dataclasses import dataclass
from typing import Dict, List, Literal, Protocol

from .chain_index import ChainIndex


CP = Literal["C", "P"]

# date -> cp -> ascending strikes
StrikeSlices = Dict[str, Dict[str, List[float]]]
# date -> cp -> strike -> value
NestedLeaves = Dict[str, Dict[str, Dict[float, object]]]


@dataclass(frozen=True)
class Quote:
    """Top-of-book snapshot for one (date, type, strike)."""

    mid_price: float
    bid: float
    ask_size: float


@dataclass
class ChainSnapshot:
    """
    One cycle's view of the chain.

    Contains:
    - dates: expiration dates in the order the source listed them
    - strikes: date -> cp -> distinct strikes
    - quotes: ChainIndex of Quote built from the two above
    """
    dates: List[str]
    strikes: StrikeSlices
    quotes: ChainIndex

    @classmethod
    def build(cls, dates: List[str], strikes: StrikeSlices, quotes: NestedLeaves) -> "ChainSnapshot":
        return cls(dates=list(dates), strikes=strikes, quotes=ChainIndex.build(dates, strikes, quotes))


class MarketDataSource(Protocol):
    """
    Protocol for market data sources.

    Sources return one discrete snapshot per call; nothing is streamed.
    """

    def get_dates(self) -> List[str]:
        """Distinct expiration dates, in listing order."""
        ...

    def get_strikes(self) -> StrikeSlices:
        """date -> cp -> distinct strikes."""
        ...

    def get_quotes(self) -> Dict[str, Dict[str, Dict[float, Quote]]]:
        """date -> cp -> strike -> Quote."""
        ...
