"""
Scanner registry.

Scanners register themselves using the @register_scanner decorator.
Registry provides lookup with friendly error messages.
"""

from typing import Callable, Dict, List, Mapping, Sequence
import logging

from ..data.chain_index import ChainIndex
from .contenders import Contender

logger = logging.getLogger(__name__)

# (quotes, dates, strikes_by_date_type, min_edge) -> contenders
Scanner = Callable[[ChainIndex, Sequence[str], Mapping[str, Mapping[str, Sequence[float]]], float], List[Contender]]

# Global registry: name -> scanner function
_scanner_registry: Dict[str, Scanner] = {}


def register_scanner(name: str):
    """
    Decorator to register a scanner function.

    Args:
        name: Scanner name (must be unique)

    Example:
        @register_scanner("Calendar")
        def scan_calendar(quotes, dates, strikes, min_edge=0.0):
            ...
    """
    def decorator(fn: Scanner) -> Scanner:
        if name in _scanner_registry:
            logger.warning(f"Scanner '{name}' is already registered. Overwriting.")
        _scanner_registry[name] = fn
        logger.debug(f"Registered scanner: {name} -> {fn.__name__}")
        return fn
    return decorator


def list_scanners() -> List[str]:
    """Registered scanner names, sorted."""
    return sorted(_scanner_registry.keys())


def get_scanner(name: str) -> Scanner:
    """
    Look up a scanner by name.

    Raises:
        ValueError: If scanner name is unknown
    """
    if name not in _scanner_registry:
        available = ", ".join(list_scanners()) or "(none)"
        raise ValueError(f"Unknown scanner: '{name}'. Available scanners: {available}")
    return _scanner_registry[name]
