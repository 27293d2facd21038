# art_provenance/date_utils.py
"""
Calendar helpers shared by the date extractor and the date model.

Month tables, day-count arithmetic, and the general date-phrase resolver that
turns a month/day/year triple into a validated calendar value using ged4py.
"""
from __future__ import annotations

import calendar
import logging
from typing import Any, Optional, Tuple

from ged4py.date import DateValue

logger = logging.getLogger(__name__)

_MONTH_ABBR_TO_NUM = {
    "JAN": 1, "FEB": 2, "MAR": 3, "APR": 4, "MAY": 5, "JUN": 6,
    "JUL": 7, "AUG": 8, "SEP": 9, "OCT": 10, "NOV": 11, "DEC": 12,
}
_NUM_TO_MONTH_ABBR = {v: k for k, v in _MONTH_ABBR_TO_NUM.items()}

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

# Every spelling the extractor accepts, longest first so regex alternation
# prefers the full name.
MONTH_WORDS = (
    "september", "febuary", "february", "november", "december", "january",
    "october", "august", "march", "april", "sept", "june", "july",
    "jan", "feb", "mar", "apr", "may", "jun", "jul", "aug", "sep", "oct", "nov", "dec",
)

ERAS = ("bce", "bc", "ce", "ad")


def month_number(word: str) -> Optional[int]:
    """
    Map a month word ('June', 'jun', 'Sept.', 'febuary') to 1-12.

    Args:
        word: Month name or abbreviation, any case, optional trailing period.

    Returns:
        Month number, or None if the word is not a month.
    """
    if not word:
        return None
    key = word.strip().rstrip(".,").upper()
    if key == "FEBUARY":
        key = "FEB"
    return _MONTH_ABBR_TO_NUM.get(key[:3]) if len(key) >= 3 else None


def is_bce(era: Optional[str]) -> bool:
    """Return True for the 'BC' and 'BCE' era markers."""
    return bool(era) and era.upper() in ("BC", "BCE")


def days_in_month(year: int, month: int) -> int:
    """Number of days in a month of the proleptic Gregorian calendar."""
    if month == 2 and calendar.isleap(year):
        return 29
    return calendar.mdays[month]


def expand_two_digit_year(year_str: str) -> int:
    """
    Expand a two-digit year from a slash or ISO date.

    Two-digit years are read as twentieth-century years so that the result
    does not depend on the current date.
    """
    year = int(year_str)
    if len(year_str) <= 2:
        return 1900 + year
    return year


def _gregorian_like_to_tuple(g: Any) -> Optional[Tuple[int, int, Optional[int]]]:
    """
    Convert a ged4py GregorianDate-like object to (year, month, day).

    Args:
        g: GregorianDate-like object with year, month, day attributes

    Returns:
        Tuple if the date has at least a year and a month, None otherwise
    """
    try:
        y = int(getattr(g, "year", None))
        m = getattr(g, "month", None)
        d = getattr(g, "day", None)
        if m is None:
            return None
        mnum = _MONTH_ABBR_TO_NUM.get(m.upper()) if isinstance(m, str) else int(m)
        if not mnum:
            return None
        return y, mnum, int(d) if d is not None else None
    except (TypeError, ValueError):
        return None


def resolve_calendar_phrase(year: int, month: int, day: Optional[int] = None) -> Optional[Tuple[int, int, Optional[int]]]:
    """
    Resolve a year/month[/day] triple to a validated calendar value.

    The triple is rendered as a GEDCOM date phrase ('9 JUN 1932') and parsed
    with ged4py, so that the same calendar rules apply to every date form the
    extractor recognises. Years are always positive here; callers negate the
    result for BCE dates.

    Args:
        year: Positive year number.
        month: Month number 1-12.
        day: Optional day of the month.

    Returns:
        (year, month, day) tuple, or None if the phrase is not a valid date.
    """
    if not 1 <= month <= 12 or year < 0:
        return None
    phrase = f"{_NUM_TO_MONTH_ABBR[month]} {year}"
    if day is not None:
        if not 1 <= day <= days_in_month(year, month):
            logger.warning('resolve_calendar_phrase: day out of range: "%s %s"', day, phrase)
            return None
        phrase = f"{day} {phrase}"
    try:
        value = DateValue.parse(phrase)
    except Exception as e:
        logger.warning(f"Failed to parse date phrase '{phrase}': {e}")
        return None
    kind = getattr(value, 'kind', None)
    if kind is None or kind.name != "SIMPLE":
        logger.warning('resolve_calendar_phrase: not a simple date: "%s"', phrase)
        return None
    return _gregorian_like_to_tuple(value.date)
