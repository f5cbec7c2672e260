"""
Butterfly spread scanner.

For every window of three consecutive strikes (low < mid < high) at one expiration
and type: arb = 2*mid - (low + high). Positive means the wings are cheap against
the body.
"""

from __future__ import annotations

import logging
from typing import List, Mapping, Sequence

from ..data.chain_index import ChainIndex
from .base import make_contender, quote_leg, sorted_strikes
from .contenders import ButterflyLegs, Contender
from .registry import register_scanner

logger = logging.getLogger(__name__)


@register_scanner("Butterfly")
def scan_butterfly(
    quotes: ChainIndex,
    dates: Sequence[str],
    strikes_by_date_type: Mapping[str, Mapping[str, Sequence[float]]],
    min_edge: float = 0.0,
) -> List[Contender]:
    out: List[Contender] = []
    for date in dates:
        for cp, listed in strikes_by_date_type.get(date, {}).items():
            ks = sorted_strikes(listed)
            # fewer than three strikes yields no windows
            for k_low, k_mid, k_high in zip(ks, ks[1:], ks[2:]):
                try:
                    low, low_q = quote_leg(quotes, date, cp, k_low)
                    mid, mid_q = quote_leg(quotes, date, cp, k_mid)
                    high, high_q = quote_leg(quotes, date, cp, k_high)
                except LookupError as e:
                    logger.warning(f"Butterfly {date} {cp} {k_low:g}/{k_mid:g}/{k_high:g} skipped: {e}")
                    continue
                contender = make_contender(
                    ButterflyLegs(low=low, mid=mid, high=high),
                    [low_q, mid_q, high_q],
                    2.0 * mid_q.mid_price - (low_q.mid_price + high_q.mid_price),
                    date,
                    min_edge,
                )
                if contender is not None:
                    out.append(contender)
    logger.debug(f"Butterfly scanner found {len(out)} contenders")
    return out
