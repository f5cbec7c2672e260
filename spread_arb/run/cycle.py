"""
One scan -> rank -> size -> build pass over a single chain snapshot.

Everything the pass needs is passed in; nothing is kept between cycles.
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Protocol

from ..config.schemas import OrderConfig, ScanConfig
from ..data.models import ChainSnapshot, MarketDataSource
from ..errors import DataInconsistency
from ..execution.contracts import ContractIdSource, resolve_contract_ids
from ..execution.orders import OrderBuilder, OrderRequest
from ..execution.sinks import OrderSubmissionSink
from ..ranking.ranker import rank_contenders
from ..risk.sizing import SizingDecision, SizingPolicy
from ..scan import get_scanner
from ..scan.contenders import Contender

logger = logging.getLogger(__name__)


class PortfolioQuery(Protocol):
    def get_portfolio_value(self) -> float:
        ...


@dataclass
class CycleResult:
    sizing: SizingDecision
    contenders: List[Contender] = field(default_factory=list)
    selected: List[Contender] = field(default_factory=list)
    orders: List[OrderRequest] = field(default_factory=list)
    elapsed_s: float = 0.0

    @property
    def halted(self) -> bool:
        return self.sizing.halted


def load_snapshot(market: MarketDataSource) -> ChainSnapshot:
    return ChainSnapshot.build(market.get_dates(), market.get_strikes(), market.get_quotes())


def scan_snapshot(snapshot: ChainSnapshot, cfg: ScanConfig) -> List[Contender]:
    """Run the configured scanners; results are concatenated in configured order."""
    scanners = [get_scanner(name) for name in cfg.strategies]
    args = (snapshot.quotes, snapshot.dates, snapshot.strikes, cfg.min_edge)
    if cfg.parallel and len(scanners) > 1:
        with ThreadPoolExecutor(max_workers=len(scanners)) as pool:
            futures = [pool.submit(scanner, *args) for scanner in scanners]
            results = [f.result() for f in futures]
    else:
        results = [scanner(*args) for scanner in scanners]
    out: List[Contender] = []
    for name, found in zip(cfg.strategies, results):
        logger.info(f"{name}: {len(found)} contenders")
        out.extend(found)
    return out


def log_order(contender: Contender, num_fills: int) -> None:
    logger.info(
        f"Submitting Order for {num_fills} * {contender.strategy} "
        f"{contender.primary_expiration} @ {contender.arb_value:.2f}:"
    )
    for i, (leg, _) in enumerate(contender.order_legs()):
        logger.info(
            f"\tLeg {i + 1}: {contender.action(i)} {contender.multiplier(num_fills, i)} * "
            f"{int(leg.strike)}{leg.cp} {leg.date} @ {leg.mid_price:.2f}"
        )


def run_cycle(
    market: MarketDataSource,
    contract_source: ContractIdSource,
    order_cfg: OrderConfig,
    scan_cfg: ScanConfig,
    portfolio_value: float,
    reference_date: date,
    sink: Optional[OrderSubmissionSink] = None,
) -> CycleResult:
    started = time.perf_counter()

    sizing = SizingPolicy(order_cfg).decide(portfolio_value)
    if sizing.halted:
        logger.info(f"Sizing halted trading: portfolio_value={portfolio_value:.2f} floor={order_cfg.capital_floor:.2f}")
        return CycleResult(sizing=sizing, elapsed_s=time.perf_counter() - started)

    snapshot = load_snapshot(market)
    contenders = scan_snapshot(snapshot, scan_cfg)
    selected = rank_contenders(contenders, reference_date, depth=sizing.num_orders)

    orders: List[OrderRequest] = []
    if selected:
        contract_ids = resolve_contract_ids(contract_source, selected)
        builder = OrderBuilder(order_cfg)
        for contender in selected:
            try:
                orders.append(builder.build(contender, contract_ids, sizing.num_fills))
            except DataInconsistency as e:
                logger.error(f"Order dropped: {e}")
                continue
            log_order(contender, sizing.num_fills)

    if sink is not None and orders:
        sink.submit(orders)

    elapsed = time.perf_counter() - started
    logger.info(
        f"Cycle done: {len(contenders)} contenders, {len(selected)} selected, "
        f"{len(orders)} orders in {elapsed:.3f}s"
    )
    return CycleResult(sizing=sizing, contenders=contenders, selected=selected, orders=orders, elapsed_s=elapsed)
