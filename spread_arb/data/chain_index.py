"""
Nested chain lookup: date -> option type -> strike -> value.

The same structure holds quotes during scanning and contract ids during order
construction. Strikes are keyed by their exact float value; there is no tolerance
in key equality.
"""

from __future__ import annotations

import logging
import math
from typing import Dict, Generic, List, Mapping, Sequence, Tuple, TypeVar

from ..errors import QuoteNotFound

logger = logging.getLogger(__name__)

V = TypeVar("V")


class ChainIndex(Generic[V]):
    """Immutable-by-convention nested map built fresh each cycle."""

    def __init__(self) -> None:
        self._index: Dict[str, Dict[str, Dict[float, V]]] = {}

    @classmethod
    def build(
        cls,
        dates: Sequence[str],
        strikes_by_date_type: Mapping[str, Mapping[str, Sequence[float]]],
        leaf_values: Mapping[str, Mapping[str, Mapping[float, V]]],
    ) -> "ChainIndex[V]":
        """
        Insert leaf_values[date][cp][strike] for every listed (date, cp, strike).

        Dates without strikes contribute nothing. A listed triple with no leaf value is
        left out, so a later lookup raises QuoteNotFound. Repeated triples overwrite.
        """
        index: ChainIndex[V] = cls()
        missing = 0
        for date in dates:
            by_type = strikes_by_date_type.get(date)
            if not by_type:
                continue
            leaves_for_date = leaf_values.get(date, {})
            for cp, strikes in by_type.items():
                leaves = leaves_for_date.get(cp, {})
                for strike in strikes:
                    key = float(strike)
                    if math.isnan(key):
                        continue
                    if key not in leaves:
                        missing += 1
                        continue
                    index.put(date, cp, key, leaves[key])
        if missing:
            logger.debug(f"ChainIndex.build: {missing} listed strikes had no leaf value")
        return index

    def put(self, date: str, cp: str, strike: float, value: V) -> None:
        self._index.setdefault(date, {}).setdefault(cp, {})[float(strike)] = value

    def get(self, date: str, cp: str, strike: float) -> V:
        try:
            return self._index[date][cp][float(strike)]
        except KeyError:
            raise QuoteNotFound((date, cp, float(strike))) from None

    def has(self, date: str, cp: str, strike: float) -> bool:
        return float(strike) in self._index.get(date, {}).get(cp, {})

    def dates(self) -> List[str]:
        return list(self._index.keys())

    def strikes(self, date: str, cp: str) -> List[float]:
        """Strikes present for (date, cp), ascending."""
        return sorted(self._index.get(date, {}).get(cp, {}).keys())

    def __len__(self) -> int:
        return sum(len(s) for t in self._index.values() for s in t.values())

    def __contains__(self, key: Tuple[str, str, float]) -> bool:
        date, cp, strike = key
        return self.has(date, cp, strike)

    def __repr__(self) -> str:
        return f"ChainIndex(dates={len(self._index)}, entries={len(self)})"
