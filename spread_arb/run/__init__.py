"""
Run layer: single cycle pipeline, polling loop, CLI
"""

from .cycle import CycleResult, PortfolioQuery, load_snapshot, scan_snapshot, run_cycle
from .loop import run_loop

__all__ = [
    "CycleResult",
    "PortfolioQuery",
    "load_snapshot",
    "scan_snapshot",
    "run_cycle",
    "run_loop",
]
