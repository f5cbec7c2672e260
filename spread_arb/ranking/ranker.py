"""
Contender ranking: liquidity- and time-weighted priority.

score = avg_ask_size * arb_value / max(1, days from reference date to expiration)
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from ..data.expiries import DateLike, time_difference
from ..scan.contenders import Contender

logger = logging.getLogger(__name__)


def rank_score(avg_ask_size: float, arb_value: float, reference_date: DateLike, expiration_date: DateLike) -> float:
    days = max(1, time_difference(reference_date, expiration_date))
    return (avg_ask_size * arb_value) / days


def rank_contenders(
    contenders: Iterable[Contender],
    reference_date: DateLike,
    depth: Optional[int] = None,
) -> List[Contender]:
    """
    Score every contender, sort descending and keep the first depth.

    Ties keep first-encountered order. depth=None keeps everything; depth <= 0 keeps nothing.
    """
    scored = [
        c.with_rank(rank_score(c.avg_ask_size, c.arb_value, reference_date, c.primary_expiration))
        for c in contenders
    ]
    # sorted() is stable with reverse=True as well
    ranked = sorted(scored, key=lambda c: c.rank_score, reverse=True)
    if depth is not None:
        ranked = ranked[: max(0, int(depth))]
    if ranked:
        logger.debug(f"Top contender: {ranked[0].strategy} {ranked[0].primary_expiration} score={ranked[0].rank_score:.4f}")
    return ranked
