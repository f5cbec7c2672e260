"""
Error taxonomy for the scan -> rank -> build pipeline.
"""

from typing import Tuple


class QuoteNotFound(LookupError):
    """A (date, type, strike) triple listed in the snapshot has no value in the index."""

    def __init__(self, key: Tuple[str, str, float]):
        self.key = key
        date, cp, strike = key
        super().__init__(f"no entry for date={date} type={cp} strike={strike}")


class DataInconsistency(Exception):
    """
    A contract id is missing for a leg the scanner already found in the quote snapshot.

    Raised while building a single order; the caller drops that order and keeps going.
    """
