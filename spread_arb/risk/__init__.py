"""
Risk layer: capital-based sizing
"""

from .sizing import SizingPolicy, SizingDecision, calc_order_counts, CAPITAL_FLOOR

__all__ = ["SizingPolicy", "SizingDecision", "calc_order_counts", "CAPITAL_FLOOR"]
