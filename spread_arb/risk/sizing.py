"""
Capital sizing: how many distinct contenders to trade and how many fills each.

Fill types:
- "1": one contender, one unit; capital only switches trading on/off
- "2": one contender, floor(capital / floor_unit) units
- "3": floor(capital / floor_unit) contenders, one unit each

Below the capital floor the result is (0, 0): stop trading this cycle. That is a
signal, not an error.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

from ..config.schemas import OrderConfig

CAPITAL_FLOOR = 600.0


def calc_order_counts(fill_type: str, portfolio_value: float, capital_floor: float = CAPITAL_FLOOR) -> Tuple[int, int]:
    """Return (num_orders, num_fills)."""
    if fill_type not in ("1", "2", "3"):
        raise ValueError(f"Unknown fill_type: {fill_type!r}. Expected '1', '2' or '3'")
    if portfolio_value < capital_floor:
        return 0, 0
    units = int(math.floor(portfolio_value / capital_floor))
    if fill_type == "1":
        return 1, 1
    if fill_type == "2":
        return 1, units
    return units, 1


@dataclass
class SizingDecision:
    num_orders: int
    num_fills: int
    reason: str = "ok"

    @property
    def halted(self) -> bool:
        return self.num_orders == 0

    def as_tuple(self) -> Tuple[int, int]:
        return self.num_orders, self.num_fills


@dataclass
class SizingPolicy:
    cfg: OrderConfig

    def decide(self, portfolio_value: float) -> SizingDecision:
        num_orders, num_fills = calc_order_counts(self.cfg.fill_type, portfolio_value, self.cfg.capital_floor)
        if num_orders == 0:
            return SizingDecision(0, 0, reason="insufficient_capital")
        if self.cfg.ranking_depth is not None and num_orders > self.cfg.ranking_depth:
            return SizingDecision(self.cfg.ranking_depth, num_fills, reason="capped_by_ranking_depth")
        return SizingDecision(num_orders, num_fills)
