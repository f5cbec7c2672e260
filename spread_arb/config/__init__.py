"""
Configuration system: schemas and loaders
"""

from .schemas import (
    DataConfig,
    ScanConfig,
    OrderConfig,
    MarketConfig,
    LoopConfig,
    RunConfig,
)
from .loader import load_config, apply_env_overrides, apply_cli_overrides

__all__ = [
    "DataConfig",
    "ScanConfig",
    "OrderConfig",
    "MarketConfig",
    "LoopConfig",
    "RunConfig",
    "load_config",
    "apply_env_overrides",
    "apply_cli_overrides",
]
