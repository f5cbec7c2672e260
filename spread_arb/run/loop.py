"""
Polling loop: repeat run_cycle until capital runs out, the session closes or
max_cycles is reached.

Dry run (loop.live = False) uses a fixed paper portfolio value and ignores market hours.
"""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from typing import Callable, Optional
from zoneinfo import ZoneInfo

from ..config.schemas import RunConfig
from ..data.calendars import is_market_open
from ..data.models import MarketDataSource
from ..execution.contracts import ContractIdSource
from ..execution.sinks import OrderSubmissionSink
from .cycle import PortfolioQuery, run_cycle

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def run_loop(
    cfg: RunConfig,
    market: MarketDataSource,
    contract_source: ContractIdSource,
    sink: OrderSubmissionSink,
    portfolio: Optional[PortfolioQuery] = None,
    now: Callable[[], datetime] = _utcnow,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    """Run cycles; returns how many were started."""
    live = cfg.loop.live
    if live and portfolio is None:
        raise ValueError("live mode requires a portfolio query")

    tz = ZoneInfo(cfg.market.timezone)
    cycles = 0

    while True:
        current = now()
        if live and not is_market_open(current, cfg.market.open_time(), cfg.market.close_time(), tz):
            logger.info("Market is closed.")
            break

        portfolio_value = portfolio.get_portfolio_value() if live else cfg.loop.paper_portfolio_value
        result = run_cycle(
            market,
            contract_source,
            cfg.orders,
            cfg.scan,
            portfolio_value=portfolio_value,
            reference_date=current.astimezone(tz).date(),
            sink=sink,
        )
        cycles += 1

        if result.halted:
            logger.info("Not enough equity in account to make a trade.")
            break
        if cfg.loop.max_cycles is not None and cycles >= cfg.loop.max_cycles:
            break

        logger.info(f"Sleeping for {cfg.loop.seconds_to_sleep} seconds.")
        sleep(cfg.loop.seconds_to_sleep)
        logger.info(f"Awake after {cfg.loop.seconds_to_sleep} seconds.")

        if live:
            sink.cancel_pending()

    logger.info("Exiting...")
    return cycles
