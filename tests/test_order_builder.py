"""
Tests for multi-leg order construction.
"""

import pytest

from spread_arb.config.schemas import OrderConfig
from spread_arb.data.chain_index import ChainIndex
from spread_arb.errors import DataInconsistency
from spread_arb.execution.orders import OrderBuilder, build_request_body, limit_price
from spread_arb.scan.contenders import BoxspreadLegs, ButterflyLegs, CalendarLegs, Contender, Leg, round_to_cents


def _ids(entries):
    """[(date, cp, strike, conid)] -> ChainIndex"""
    index = ChainIndex()
    for d, cp, k, conid in entries:
        index.put(d, cp, k, conid)
    return index


def _builder(discount):
    return OrderBuilder(OrderConfig(account_id="ACCOUNT_ID", discount_factor=discount))


def test_build_calendar_order():
    contender = Contender(
        spread=CalendarLegs(
            near=Leg(date="2021-11-01", cp="C", strike=3000.0, mid_price=10.0),
            far=Leg(date="2021-11-02", cp="C", strike=3000.0, mid_price=9.0),
        ),
        arb_value=1.0,
        avg_ask_size=5.0,
        primary_expiration="2021-11-01",
    )
    ids = _ids([("2021-11-01", "C", 3000.0, "CONID1"), ("2021-11-02", "C", 3000.0, "CONID2")])
    order = _builder(0.9).build(contender, ids, 2)
    assert order.account_id == "ACCOUNT_ID"
    assert order.leg_encoding == "CONID1/-1,CONID2/1"
    assert order.limit_price == -0.9
    assert order.quantity == 2


def test_build_butterfly_order():
    contender = Contender(
        spread=ButterflyLegs(
            low=Leg(date="2021-11-01", cp="C", strike=2900.0, mid_price=9.2),
            mid=Leg(date="2021-11-01", cp="C", strike=3000.0, mid_price=10.2),
            high=Leg(date="2021-11-01", cp="C", strike=3100.0, mid_price=11.2),
        ),
        arb_value=2.0,
        avg_ask_size=5.0,
        primary_expiration="2021-11-01",
    )
    ids = _ids([
        ("2021-11-01", "C", 2900.0, "CONID1"),
        ("2021-11-01", "C", 3000.0, "CONID2"),
        ("2021-11-01", "C", 3100.0, "CONID3"),
    ])
    order = _builder(0.95).build(contender, ids, 3)
    assert order.leg_encoding == "CONID2/-2,CONID1/1,CONID3/1"
    assert order.limit_price == -1.9
    assert order.quantity == 3


def test_build_boxspread_order():
    contender = Contender(
        spread=BoxspreadLegs(
            low_call=Leg(date="2021-11-04", cp="C", strike=2800.0, mid_price=9.2),
            high_call=Leg(date="2021-11-04", cp="C", strike=2900.0, mid_price=10.2),
            low_put=Leg(date="2021-11-04", cp="P", strike=2800.0, mid_price=11.2),
            high_put=Leg(date="2021-11-04", cp="P", strike=2900.0, mid_price=12.2),
        ),
        arb_value=2.5,
        avg_ask_size=5.0,
        primary_expiration="2021-11-04",
    )
    ids = _ids([
        ("2021-11-04", "C", 2800.0, "CONID1"),
        ("2021-11-04", "C", 2900.0, "CONID2"),
        ("2021-11-04", "P", 2800.0, "CONID3"),
        ("2021-11-04", "P", 2900.0, "CONID4"),
    ])
    order = _builder(0.9).build(contender, ids, 4)
    assert order.leg_encoding == "CONID4/-1,CONID3/1,CONID1/1,CONID2/-1"
    assert order.limit_price == -2.25
    assert order.quantity == 4


def test_fixed_submission_defaults_and_payload():
    contender = Contender(
        spread=CalendarLegs(
            near=Leg(date="210101", cp="P", strike=100.0, mid_price=2.2),
            far=Leg(date="210102", cp="P", strike=100.0, mid_price=1.9),
        ),
        arb_value=0.3,
        avg_ask_size=10.0,
        primary_expiration="210101",
    )
    ids = _ids([("210101", "P", 100.0, "11"), ("210102", "P", 100.0, "22")])
    order = _builder(1.0).build(contender, ids, 1)
    assert (order.order_type, order.venue, order.time_in_force, order.side) == ("LMT", "SMART", "DAY", "BUY")
    assert order.outside_regular_hours is False
    assert order.use_adaptive_routing is False
    assert order.underlying_symbol == "SPX"

    body = build_request_body([order], "28812380")
    payload = body["orders"][0]
    assert payload["conidex"] == "28812380;;;11/-1,22/1"
    assert payload["acctId"] == "ACCOUNT_ID"
    assert payload["price"] == -0.3
    assert payload["tif"] == "DAY"
    assert payload["referrer"] == "NO_REFERRER_PROVIDED"


def test_missing_contract_id_is_data_inconsistency():
    contender = Contender(
        spread=CalendarLegs(
            near=Leg(date="210101", cp="C", strike=100.0, mid_price=2.2),
            far=Leg(date="210102", cp="C", strike=100.0, mid_price=1.9),
        ),
        arb_value=0.3,
        avg_ask_size=10.0,
        primary_expiration="210101",
    )
    ids = _ids([("210101", "C", 100.0, "11")])
    with pytest.raises(DataInconsistency, match="100C 210102"):
        _builder(0.9).build(contender, ids, 1)


def test_round_to_cents_half_away_from_zero():
    assert round_to_cents(0.125) == 0.13
    assert round_to_cents(-0.125) == -0.13
    assert round_to_cents(2.2 - 1.9) == 0.3
    assert limit_price(2.5, 0.9) == -2.25
    assert limit_price(1.0, 1.0) == -1.0
