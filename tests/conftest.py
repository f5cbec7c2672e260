"""
Shared chain fixtures.
"""

import pytest

from spread_arb.data.chain_index import ChainIndex
from spread_arb.data.models import Quote


def nested_quotes(rows):
    """[(date, cp, strike, mid, ask_size)] -> date -> cp -> strike -> Quote"""
    out = {}
    for date, cp, strike, mid, ask_size in rows:
        out.setdefault(date, {}).setdefault(cp, {})[float(strike)] = Quote(mid_price=mid, bid=1.3, ask_size=ask_size)
    return out


def strike_slices(rows):
    out = {}
    for date, cp, strike, *_ in rows:
        bucket = out.setdefault(date, {}).setdefault(cp, [])
        if float(strike) not in bucket:
            bucket.append(float(strike))
    return out


@pytest.fixture
def make_chain():
    """Build (quotes index, dates, strikes) from flat rows."""
    def _make(rows, dates=None):
        if dates is None:
            dates = list(dict.fromkeys(r[0] for r in rows))
        strikes = strike_slices(rows)
        return ChainIndex.build(dates, strikes, nested_quotes(rows)), dates, strikes
    return _make
