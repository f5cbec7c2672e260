"""
Contract id resolution for the legs of selected contenders.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Protocol, Sequence, Tuple

from ..data.chain_index import ChainIndex
from ..scan.contenders import Contender

LegKey = Tuple[str, str, float]


class ContractIdSource(Protocol):
    """Resolves (date, cp, strike) triples to broker contract ids."""

    def get_contract_ids(self, keys: Iterable[LegKey]) -> Dict[str, Dict[str, Dict[float, str]]]:
        ...


def leg_slices(contenders: Sequence[Contender]) -> Tuple[List[str], Dict[str, Dict[str, List[float]]]]:
    """Dates (first-seen order) and date -> cp -> strikes referenced by the contenders."""
    dates: List[str] = []
    strikes: Dict[str, Dict[str, List[float]]] = {}
    for contender in contenders:
        for leg in contender.legs:
            date, cp, strike = leg.key
            if date not in strikes:
                dates.append(date)
            bucket = strikes.setdefault(date, {}).setdefault(cp, [])
            if strike not in bucket:
                bucket.append(strike)
    for by_type in strikes.values():
        for cp in by_type:
            by_type[cp].sort()
    return dates, strikes


def resolve_contract_ids(source: ContractIdSource, contenders: Sequence[Contender]) -> ChainIndex:
    """ChainIndex of contract ids covering exactly the legs the contenders reference."""
    dates, strikes = leg_slices(contenders)
    keys = [(d, cp, k) for d in dates for cp, ks in strikes[d].items() for k in ks]
    return ChainIndex.build(dates, strikes, source.get_contract_ids(keys))
