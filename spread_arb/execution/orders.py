"""
Order construction: ranked contender + contract ids -> multi-leg limit order.

Leg encoding is "<conid>/<signed ratio>" joined by commas, in the fixed order each
spread family defines (see Contender.order_legs). The limit price is negative (a
credit) and equals the cent-rounded edge times discount_factor.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Sequence

from ..config.schemas import OrderConfig
from ..data.chain_index import ChainIndex
from ..errors import DataInconsistency
from ..scan.contenders import Contender, round_to_cents

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OrderRequest:
    account_id: str
    leg_encoding: str
    order_type: str
    venue: str
    outside_regular_hours: bool
    limit_price: float
    side: str
    underlying_symbol: str
    time_in_force: str
    referrer_tag: str
    quantity: int
    use_adaptive_routing: bool

    def conidex(self, underlying_contract_id: str = "") -> str:
        if not underlying_contract_id:
            return self.leg_encoding
        return f"{underlying_contract_id};;;{self.leg_encoding}"

    def to_payload(self, underlying_contract_id: str = "") -> Dict[str, Any]:
        """Broker JSON body for one order."""
        return {
            "acctId": self.account_id,
            "conidex": self.conidex(underlying_contract_id),
            "orderType": self.order_type,
            "listingExchange": self.venue,
            "outsideRTH": self.outside_regular_hours,
            "price": self.limit_price,
            "side": self.side,
            "ticker": self.underlying_symbol,
            "tif": self.time_in_force,
            "referrer": self.referrer_tag,
            "quantity": self.quantity,
            "useAdaptive": self.use_adaptive_routing,
        }


def build_request_body(orders: Sequence[OrderRequest], underlying_contract_id: str = "") -> Dict[str, Any]:
    """Batch body submitted in one request."""
    return {"orders": [o.to_payload(underlying_contract_id) for o in orders]}


def limit_price(arb_value: float, discount_factor: float) -> float:
    return -round_to_cents(arb_value * discount_factor)


@dataclass
class OrderBuilder:
    cfg: OrderConfig

    def encode_legs(self, contender: Contender, contract_ids: ChainIndex) -> str:
        parts: List[str] = []
        for leg, ratio in contender.order_legs():
            try:
                conid = contract_ids.get(leg.date, leg.cp, leg.strike)
            except LookupError as e:
                raise DataInconsistency(
                    f"{contender.strategy} {contender.primary_expiration}: no contract id for {leg.describe()}"
                ) from e
            parts.append(f"{conid}/{ratio}")
        return ",".join(parts)

    def build(self, contender: Contender, contract_ids: ChainIndex, num_fills: int) -> OrderRequest:
        """Raises DataInconsistency when a leg has no contract id."""
        encoding = self.encode_legs(contender, contract_ids)
        logger.debug(f"{contender.strategy} {contender.primary_expiration} -> {encoding}")
        return OrderRequest(
            account_id=self.cfg.account_id,
            leg_encoding=encoding,
            order_type=self.cfg.order_type,
            venue=self.cfg.venue,
            outside_regular_hours=self.cfg.outside_regular_hours,
            limit_price=limit_price(contender.arb_value, self.cfg.discount_factor),
            side=self.cfg.side,
            underlying_symbol=self.cfg.underlying_symbol,
            time_in_force=self.cfg.time_in_force,
            referrer_tag=self.cfg.referrer_tag,
            quantity=int(num_fills),
            use_adaptive_routing=self.cfg.use_adaptive_routing,
        )

