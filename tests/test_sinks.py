"""
Tests for contract id resolution and order sinks.
"""

import json

from spread_arb.execution.contracts import leg_slices, resolve_contract_ids
from spread_arb.execution.orders import OrderRequest
from spread_arb.execution.sinks import DryRunOrderSink, JsonFileOrderSink
from spread_arb.scan.contenders import CalendarLegs, Contender, Leg


def _calendar():
    spread = CalendarLegs(near=Leg("210101", "C", 100.0, 2.0), far=Leg("210102", "C", 100.0, 1.7))
    return Contender(spread=spread, arb_value=0.3, avg_ask_size=10.0, primary_expiration="210101")


def _order(encoding="11/-1,22/1"):
    return OrderRequest(
        account_id="DU1",
        leg_encoding=encoding,
        order_type="LMT",
        venue="SMART",
        outside_regular_hours=False,
        limit_price=-0.27,
        side="BUY",
        underlying_symbol="SPX",
        time_in_force="DAY",
        referrer_tag="NO_REFERRER_PROVIDED",
        quantity=1,
        use_adaptive_routing=False,
    )


class DictSource:
    def __init__(self, ids):
        self.ids = ids
        self.requested = None

    def get_contract_ids(self, keys):
        self.requested = list(keys)
        out = {}
        for d, cp, k in self.requested:
            if (d, cp, k) in self.ids:
                out.setdefault(d, {}).setdefault(cp, {})[k] = self.ids[(d, cp, k)]
        return out


def test_leg_slices():
    dates, strikes = leg_slices([_calendar(), _calendar()])
    assert dates == ["210101", "210102"]
    assert strikes == {"210101": {"C": [100.0]}, "210102": {"C": [100.0]}}


def test_resolve_contract_ids_partial():
    source = DictSource({("210101", "C", 100.0): "11"})
    ids = resolve_contract_ids(source, [_calendar()])
    assert source.requested == [("210101", "C", 100.0), ("210102", "C", 100.0)]
    assert ids.get("210101", "C", 100.0) == "11"
    assert not ids.has("210102", "C", 100.0)


def test_dry_run_sink_keeps_batches():
    sink = DryRunOrderSink(underlying_contract_id="28812380")
    sink.submit([_order()])
    sink.cancel_pending()
    assert len(sink.batches) == 1


def test_json_file_sink_writes_request_body(tmp_path):
    sink = JsonFileOrderSink(out_dir=tmp_path / "orders", underlying_contract_id="28812380")
    sink.submit([_order(), _order("33/1")])
    sink.submit([_order()])

    first = tmp_path / "orders" / "orders_0001.json"
    assert (tmp_path / "orders" / "orders_0002.json").exists()
    with open(first) as f:
        body = json.load(f)
    assert [o["conidex"] for o in body["orders"]] == ["28812380;;;11/-1,22/1", "28812380;;;33/1"]
    assert body["orders"][0]["price"] == -0.27
