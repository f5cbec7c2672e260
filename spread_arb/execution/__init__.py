"""
Execution layer: contract id resolution, order construction, submission sinks.
"""

from .contracts import ContractIdSource, leg_slices, resolve_contract_ids
from .orders import OrderRequest, OrderBuilder, build_request_body, limit_price
from .sinks import OrderSubmissionSink, DryRunOrderSink, JsonFileOrderSink

__all__ = [
    "ContractIdSource",
    "leg_slices",
    "resolve_contract_ids",
    "OrderRequest",
    "OrderBuilder",
    "build_request_body",
    "limit_price",
    "OrderSubmissionSink",
    "DryRunOrderSink",
    "JsonFileOrderSink",
]
