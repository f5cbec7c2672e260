"""
Options Spread Arbitrage Scanner

Scans one options-chain snapshot for calendar, butterfly and box spread mispricings,
ranks the contenders, sizes the allocation from account capital and emits multi-leg
broker order requests.
"""

__version__ = "0.1.0"
