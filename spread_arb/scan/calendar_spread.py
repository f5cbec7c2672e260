"""
Calendar spread scanner.

Pairs each expiration with the next one in listing order. For a (type, strike) listed
at both, the near option trading richer than the far one is an edge:
arb = near.mid - far.mid.
"""

from __future__ import annotations

import logging
from typing import List, Mapping, Sequence

from ..data.chain_index import ChainIndex
from .base import make_contender, quote_leg, sorted_strikes
from .contenders import CalendarLegs, Contender
from .registry import register_scanner

logger = logging.getLogger(__name__)


@register_scanner("Calendar")
def scan_calendar(
    quotes: ChainIndex,
    dates: Sequence[str],
    strikes_by_date_type: Mapping[str, Mapping[str, Sequence[float]]],
    min_edge: float = 0.0,
) -> List[Contender]:
    out: List[Contender] = []
    for near_date, far_date in zip(dates, dates[1:]):
        near_types = strikes_by_date_type.get(near_date, {})
        far_types = strikes_by_date_type.get(far_date, {})
        for cp, near_strikes in near_types.items():
            far_strikes = set(sorted_strikes(far_types.get(cp, ())))
            for strike in sorted_strikes(near_strikes):
                if strike not in far_strikes:
                    logger.debug(f"Calendar {near_date}/{far_date} {strike:g}{cp} skipped: not listed at {far_date}")
                    continue
                try:
                    near, near_q = quote_leg(quotes, near_date, cp, strike)
                    far, far_q = quote_leg(quotes, far_date, cp, strike)
                except LookupError as e:
                    logger.warning(f"Calendar {near_date}/{far_date} {strike:g}{cp} skipped: {e}")
                    continue
                contender = make_contender(
                    CalendarLegs(near=near, far=far),
                    [near_q, far_q],
                    near_q.mid_price - far_q.mid_price,
                    near_date,
                    min_edge,
                )
                if contender is not None:
                    out.append(contender)
    logger.debug(f"Calendar scanner found {len(out)} contenders")
    return out
