"""
Expiration date helpers.

Supports:
- compact dates: "YYMMDD" (e.g., "211101")
- ISO dates: "YYYY-MM-DD" (e.g., "2021-11-01")
"""

from datetime import date, datetime
from typing import Iterable, List, Union

# Month abbreviations, 1-based
_MONTH_ABBR = [
    "JAN", "FEB", "MAR", "APR", "MAY", "JUN",
    "JUL", "AUG", "SEP", "OCT", "NOV", "DEC",
]

DateLike = Union[str, date]


def _split_expiry(expiry: str):
    """Return (two-digit year, month, day) strings without validating the day."""
    s = expiry.strip()
    if len(s) == 6 and s.isdigit():
        return s[0:2], s[2:4], s[4:6]
    if len(s) == 10 and s[4] == "-" and s[7] == "-":
        return s[2:4], s[5:7], s[8:10]
    raise ValueError(f"Invalid expiry date: {expiry!r}. Expected YYMMDD or YYYY-MM-DD")


def parse_expiry(expiry: DateLike) -> date:
    """
    Parse an expiration date.

    Examples:
        >>> parse_expiry("220101")
        datetime.date(2022, 1, 1)
        >>> parse_expiry("2021-11-01")
        datetime.date(2021, 11, 1)
    """
    if isinstance(expiry, datetime):
        return expiry.date()
    if isinstance(expiry, date):
        return expiry
    s = expiry.strip()
    if len(s) == 6 and s.isdigit():
        try:
            return datetime.strptime(s, "%y%m%d").date()
        except ValueError as e:
            raise ValueError(f"Invalid expiry date: {expiry!r}") from e
    try:
        return date.fromisoformat(s)
    except ValueError as e:
        raise ValueError(f"Invalid expiry date: {expiry!r}. Expected YYMMDD or YYYY-MM-DD") from e


def month_label(expiry: str) -> str:
    """
    Map an expiration date to its contract-month code.

    Examples:
        >>> month_label("211101")
        'NOV21'
        >>> month_label("240229")
        'FEB24'
    """
    yy, mm, _ = _split_expiry(expiry)
    month = int(mm)
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month in expiry date: {expiry!r}")
    return f"{_MONTH_ABBR[month - 1]}{yy}"


def distinct_month_labels(dates: Iterable[str]) -> List[str]:
    """Month codes for dates, deduplicated, first-seen order."""
    return list(dict.fromkeys(month_label(d) for d in dates))


def time_difference(reference_date: DateLike, target_date: DateLike) -> int:
    """Signed calendar days from reference_date to target_date."""
    return (parse_expiry(target_date) - parse_expiry(reference_date)).days
