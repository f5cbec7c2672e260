"""
Shared helpers for the scanners.
"""

from __future__ import annotations

from typing import Iterable, List, Mapping, Sequence, Tuple

from ..data.chain_index import ChainIndex
from ..data.models import Quote
from .contenders import Contender, Leg, SpreadLegs, round_to_cents


def sorted_strikes(strikes: Iterable[float]) -> List[float]:
    return sorted({float(k) for k in strikes})


def strikes_for(strikes_by_date_type: Mapping[str, Mapping[str, Sequence[float]]], date: str, cp: str) -> List[float]:
    return sorted_strikes(strikes_by_date_type.get(date, {}).get(cp, ()))


def quote_leg(quotes: ChainIndex, date: str, cp: str, strike: float) -> Tuple[Leg, Quote]:
    """Resolve one leg; raises QuoteNotFound (a LookupError) when the quote is absent."""
    q: Quote = quotes.get(date, cp, strike)
    return Leg(date=date, cp=cp, strike=float(strike), mid_price=q.mid_price), q  # type: ignore[arg-type]


def make_contender(
    spread: SpreadLegs,
    quotes: Sequence[Quote],
    raw_arb: float,
    expiration: str,
    min_edge: float,
) -> Contender | None:
    """Contender if the cent-rounded edge clears min_edge, else None."""
    arb = round_to_cents(raw_arb)
    if not arb > min_edge or not arb > 0:
        return None
    avg_ask = sum(q.ask_size for q in quotes) / len(quotes)
    return Contender(spread=spread, arb_value=arb, avg_ask_size=avg_ask, primary_expiration=expiration)
