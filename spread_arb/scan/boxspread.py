"""
Box spread scanner.

For each expiration and every strike pair (low < high) with calls and puts listed at
both: arb = (low_call + high_put) - (high_call + low_put).
"""

from __future__ import annotations

import logging
from typing import List, Mapping, Sequence

from ..data.chain_index import ChainIndex
from .base import make_contender, quote_leg, strikes_for
from .contenders import BoxspreadLegs, Contender
from .registry import register_scanner

logger = logging.getLogger(__name__)


@register_scanner("Boxspread")
def scan_boxspread(
    quotes: ChainIndex,
    dates: Sequence[str],
    strikes_by_date_type: Mapping[str, Mapping[str, Sequence[float]]],
    min_edge: float = 0.0,
) -> List[Contender]:
    out: List[Contender] = []
    for date in dates:
        calls = strikes_for(strikes_by_date_type, date, "C")
        puts = set(strikes_for(strikes_by_date_type, date, "P"))
        both = [k for k in calls if k in puts]
        for i, k_low in enumerate(both):
            for k_high in both[i + 1:]:
                try:
                    low_call, lc = quote_leg(quotes, date, "C", k_low)
                    high_call, hc = quote_leg(quotes, date, "C", k_high)
                    low_put, lp = quote_leg(quotes, date, "P", k_low)
                    high_put, hp = quote_leg(quotes, date, "P", k_high)
                except LookupError as e:
                    logger.warning(f"Boxspread {date} {k_low:g}/{k_high:g} skipped: {e}")
                    continue
                contender = make_contender(
                    BoxspreadLegs(low_call=low_call, high_call=high_call, low_put=low_put, high_put=high_put),
                    [lc, hc, lp, hp],
                    (lc.mid_price + hp.mid_price) - (hc.mid_price + lp.mid_price),
                    date,
                    min_edge,
                )
                if contender is not None:
                    out.append(contender)
    logger.debug(f"Boxspread scanner found {len(out)} contenders")
    return out
