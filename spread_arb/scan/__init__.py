"""
Scanners with deterministic discovery via explicit imports.

Scanners are registered via the @register_scanner decorator when their modules are
imported; this __init__.py imports all of them so registration always happens.
"""

from .contenders import (
    Leg,
    CalendarLegs,
    ButterflyLegs,
    BoxspreadLegs,
    SpreadLegs,
    Contender,
    round_to_cents,
)
from .registry import register_scanner, list_scanners, get_scanner
from .calendar_spread import scan_calendar
from .butterfly import scan_butterfly
from .boxspread import scan_boxspread

__all__ = [
    "Leg",
    "CalendarLegs",
    "ButterflyLegs",
    "BoxspreadLegs",
    "SpreadLegs",
    "Contender",
    "round_to_cents",
    "register_scanner",
    "list_scanners",
    "get_scanner",
    "scan_calendar",
    "scan_butterfly",
    "scan_boxspread",
]
