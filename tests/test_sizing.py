"""
Tests for capital sizing.
"""

import pytest

from spread_arb.config.schemas import OrderConfig
from spread_arb.risk.sizing import SizingPolicy, calc_order_counts


def test_fill_type_1():
    assert calc_order_counts("1", 599.0) == (0, 0)
    assert calc_order_counts("1", 600.0) == (1, 1)
    assert calc_order_counts("1", 1200.0) == (1, 1)
    assert calc_order_counts("1", 1_000_000.0) == (1, 1)


def test_fill_type_2():
    assert calc_order_counts("2", 600.0) == (1, 1)
    assert calc_order_counts("2", 1200.0) == (1, 2)
    assert calc_order_counts("2", 1799.99) == (1, 2)


def test_fill_type_3():
    assert calc_order_counts("3", 600.0) == (1, 1)
    assert calc_order_counts("3", 1200.0) == (2, 1)
    assert calc_order_counts("3", 599.99) == (0, 0)


def test_unknown_fill_type():
    with pytest.raises(ValueError, match="fill_type"):
        calc_order_counts("4", 1000.0)


def test_policy_reports_insufficient_capital():
    d = SizingPolicy(OrderConfig(fill_type="3")).decide(100.0)
    assert d.as_tuple() == (0, 0)
    assert d.halted
    assert d.reason == "insufficient_capital"


def test_policy_caps_by_ranking_depth():
    d = SizingPolicy(OrderConfig(fill_type="3", ranking_depth=2)).decide(6000.0)
    assert d.as_tuple() == (2, 1)
    assert d.reason == "capped_by_ranking_depth"


def test_policy_custom_floor():
    d = SizingPolicy(OrderConfig(fill_type="2", capital_floor=1000.0)).decide(2500.0)
    assert d.as_tuple() == (1, 2)
