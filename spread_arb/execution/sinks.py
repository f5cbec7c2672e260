"""
Order submission sinks.

Live transport (auth, retries) belongs to the broker client; these sinks cover dry
runs and file output.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Protocol, Sequence

from .orders import OrderRequest, build_request_body

logger = logging.getLogger(__name__)


class OrderSubmissionSink(Protocol):
    def submit(self, orders: Sequence[OrderRequest]) -> None:
        ...

    def cancel_pending(self) -> None:
        ...


@dataclass
class DryRunOrderSink:
    """Logs each batch and keeps it in memory."""

    underlying_contract_id: str = ""
    batches: List[List[OrderRequest]] = field(default_factory=list)

    def submit(self, orders: Sequence[OrderRequest]) -> None:
        self.batches.append(list(orders))
        for order in orders:
            logger.info(f"[dry-run] {json.dumps(order.to_payload(self.underlying_contract_id))}")

    def cancel_pending(self) -> None:
        logger.debug("[dry-run] nothing to cancel")


@dataclass
class JsonFileOrderSink:
    """Writes each batch body to <out_dir>/orders_<n>.json."""

    out_dir: Path
    underlying_contract_id: str = ""
    written: int = 0

    def submit(self, orders: Sequence[OrderRequest]) -> None:
        self.out_dir.mkdir(parents=True, exist_ok=True)
        self.written += 1
        path = self.out_dir / f"orders_{self.written:04d}.json"
        with open(path, "w", encoding="utf-8") as f:
            json.dump(build_request_body(orders, self.underlying_contract_id), f, indent=2)
        logger.info(f"Wrote {len(orders)} orders to {path}")

    def cancel_pending(self) -> None:
        pass
