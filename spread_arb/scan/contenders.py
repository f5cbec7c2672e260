"""
Contender and leg representations.

Each spread family has its own named-leg structure, so a leg's role (near, mid,
high_put, ...) is carried by its field name rather than its position.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import List, Literal, Tuple, Union

from ..data.models import CP


Strategy = Literal["Calendar", "Butterfly", "Boxspread"]
Side = Literal["BUY", "SELL"]


def round_to_cents(x: float) -> float:
    """Round to 2 decimals, half away from zero."""
    return math.copysign(math.floor(abs(x) * 100.0 + 0.5), x) / 100.0


@dataclass(frozen=True)
class Leg:
    """One option in a spread."""

    date: str
    cp: CP
    strike: float
    mid_price: float

    @property
    def key(self) -> Tuple[str, str, float]:
        return (self.date, self.cp, self.strike)

    def describe(self) -> str:
        return f"{self.strike:g}{self.cp} {self.date}"


@dataclass(frozen=True)
class CalendarLegs:
    STRATEGY = "Calendar"

    near: Leg
    far: Leg

    def ordered(self) -> Tuple[Leg, ...]:
        return (self.near, self.far)

    def signed(self) -> List[Tuple[Leg, int]]:
        # sell near, buy far
        return [(self.near, -1), (self.far, 1)]


@dataclass(frozen=True)
class ButterflyLegs:
    STRATEGY = "Butterfly"

    low: Leg
    mid: Leg
    high: Leg

    def ordered(self) -> Tuple[Leg, ...]:
        return (self.low, self.mid, self.high)

    def signed(self) -> List[Tuple[Leg, int]]:
        return [(self.mid, -2), (self.low, 1), (self.high, 1)]


@dataclass(frozen=True)
class BoxspreadLegs:
    STRATEGY = "Boxspread"

    low_call: Leg
    high_call: Leg
    low_put: Leg
    high_put: Leg

    def ordered(self) -> Tuple[Leg, ...]:
        return (self.low_call, self.high_call, self.low_put, self.high_put)

    def signed(self) -> List[Tuple[Leg, int]]:
        return [(self.high_put, -1), (self.low_put, 1), (self.low_call, 1), (self.high_call, -1)]


SpreadLegs = Union[CalendarLegs, ButterflyLegs, BoxspreadLegs]


@dataclass(frozen=True)
class Contender:
    """A detected positive-edge spread pending ranking, sizing and submission."""

    spread: SpreadLegs
    arb_value: float
    avg_ask_size: float
    primary_expiration: str
    rank_score: float = 0.0

    @property
    def strategy(self) -> Strategy:
        return self.spread.STRATEGY  # type: ignore[return-value]

    @property
    def legs(self) -> Tuple[Leg, ...]:
        """Legs in the fixed per-strategy order."""
        return self.spread.ordered()

    def order_legs(self) -> List[Tuple[Leg, int]]:
        """(leg, signed ratio) in order-encoding order; + buys, - sells."""
        if isinstance(self.spread, (CalendarLegs, ButterflyLegs, BoxspreadLegs)):
            return self.spread.signed()
        raise TypeError(f"Unknown spread legs: {type(self.spread).__name__}")

    def action(self, i: int) -> Side:
        return "BUY" if self.order_legs()[i][1] > 0 else "SELL"

    def multiplier(self, num_fills: int, i: int) -> int:
        return abs(self.order_legs()[i][1]) * int(num_fills)

    def with_rank(self, rank_score: float) -> "Contender":
        return replace(self, rank_score=rank_score)
