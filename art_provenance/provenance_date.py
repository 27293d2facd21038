"""
provenance_date.py - Dates of varying precision for provenance records.

Provides the ProvenanceDate class, a proleptic year with an explicit precision
(century, decade, year, month or day) and a certainty flag. Supports:
    - Comparison and equality that respect precision
    - Earliest/latest calendar bounds of the span a date represents
    - Narrowing a date to its early/mid/late part
    - Rendering back to catalogue prose ('19th century', '1920s?', 'June 9, 1932')
    - ISO-like serialization for structured export

Module: art_provenance.provenance_date
Last updated: 2026-10-18
"""

import logging
import re
from enum import IntEnum
from functools import total_ordering
from typing import Optional, Tuple

from .date_utils import MONTH_NAMES, days_in_month

logger = logging.getLogger(__name__)

__all__ = ['Precision', 'ProvenanceDate']

DateTuple = Tuple[int, int, int]


class Precision(IntEnum):
    """Granularity at which a date is known, coarse to fine."""
    CENTURY = 1
    DECADE = 2
    YEAR = 3
    MONTH = 4
    DAY = 5


def ordinal(n: int) -> str:
    """Return '1st', '2nd', '3rd', '11th', '21st' ..."""
    if 10 <= n % 100 <= 20:
        suffix = 'th'
    else:
        suffix = {1: 'st', 2: 'nd', 3: 'rd'}.get(n % 10, 'th')
    return f"{n}{suffix}"


@total_ordering
class ProvenanceDate:
    """
    A single date as written in a provenance record.

    The value is the proleptic year (negative for BCE). For CENTURY precision
    an AD value is the first year of the century ('19th century' is 1800) and
    a BCE value is the century year nearest to zero ('5th century BCE' is
    -401). A DECADE value is the first year of the decade.

    Attributes:
        value (int): Proleptic year.
        precision (Precision): Granularity of the date.
        certainty (bool): False if the source marked the date as doubtful.
        month (Optional[int]): Month 1-12, for MONTH and DAY precision.
        day (Optional[int]): Day of month, for DAY precision.
    """
    __slots__ = ['value', 'precision', 'certainty', 'month', 'day']

    ISO_RE = re.compile(r'^(-?\d{1,4})(?:-(\d{1,2}))?(?:-(\d{1,2}))?$')

    def __init__(self, value: int, precision: Precision = Precision.YEAR, certainty: bool = True,
                 month: Optional[int] = None, day: Optional[int] = None):
        if precision >= Precision.MONTH and month is None:
            raise ValueError(f"{precision.name} precision requires a month")
        if precision == Precision.DAY and day is None:
            raise ValueError("DAY precision requires a day")
        if precision >= Precision.MONTH and not 1 <= month <= 12:
            raise ValueError(f"Month out of range: {month}")
        if precision == Precision.DAY and not 1 <= day <= days_in_month(value, month):
            raise ValueError(f"Day out of range: {value}-{month:02d}-{day:02d}")
        self.value: int = int(value)
        self.precision: Precision = Precision(precision)
        self.certainty: bool = certainty
        self.month: Optional[int] = month if precision >= Precision.MONTH else None
        self.day: Optional[int] = day if precision == Precision.DAY else None

    def with_certainty(self, certainty: bool) -> "ProvenanceDate":
        """Return a copy of this date with a different certainty flag."""
        return ProvenanceDate(self.value, self.precision, certainty, self.month, self.day)

    @property
    def is_bce(self) -> bool:
        return self.value < 0

    def earliest(self) -> DateTuple:
        """First calendar day covered by this date."""
        if self.precision == Precision.CENTURY:
            start = self.value - 99 if self.value < 0 else self.value
            return (start, 1, 1)
        if self.precision in (Precision.DECADE, Precision.YEAR):
            return (self.value, 1, 1)
        if self.precision == Precision.MONTH:
            return (self.value, self.month, 1)
        return (self.value, self.month, self.day)

    def latest(self) -> DateTuple:
        """Last calendar day covered by this date."""
        if self.precision == Precision.CENTURY:
            end = self.value if self.value < 0 else self.value + 99
            return (end, 12, 31)
        if self.precision == Precision.DECADE:
            return (self.value + 9, 12, 31)
        if self.precision == Precision.YEAR:
            return (self.value, 12, 31)
        if self.precision == Precision.MONTH:
            return (self.value, self.month, days_in_month(self.value, self.month))
        return (self.value, self.month, self.day)

    def precedes(self, other: "ProvenanceDate") -> bool:
        """True if this date lies entirely before the other."""
        return self.latest() < other.earliest()

    def overlaps(self, other: "ProvenanceDate") -> bool:
        """True if the spans of the two dates share at least one day."""
        return not (self.precedes(other) or other.precedes(self))

    def narrow(self, modifier: str) -> Tuple["ProvenanceDate", "ProvenanceDate"]:
        """
        Narrow the date to its early, mid or late part.

        Returns a (first, last) pair at the next finer precision, e.g. 'early
        1920s' is (1920, 1923) and 'late June 1932' is (June 21, June 30).
        A DAY date cannot be narrowed and is returned unchanged.

        Args:
            modifier (str): 'early', 'mid' or 'late'.

        Returns:
            Tuple[ProvenanceDate, ProvenanceDate]: Bounds of the narrowed span.
        """
        part = {'early': 0, 'mid': 1, 'late': 2}[modifier.lower()]
        cert = self.certainty
        if self.precision in (Precision.CENTURY, Precision.DECADE):
            start = self.earliest()[0]
            step = 33 if self.precision == Precision.CENTURY else 3
            first = start + part * step
            last = start + (part + 1) * step if part < 2 else self.latest()[0]
            return (ProvenanceDate(first, Precision.YEAR, cert),
                    ProvenanceDate(last, Precision.YEAR, cert))
        if self.precision == Precision.YEAR:
            first, last = 1 + part * 4, 4 + part * 4
            return (ProvenanceDate(self.value, Precision.MONTH, cert, month=first),
                    ProvenanceDate(self.value, Precision.MONTH, cert, month=last))
        if self.precision == Precision.MONTH:
            first = 1 + part * 10
            last = 10 + part * 10 if part < 2 else days_in_month(self.value, self.month)
            return (ProvenanceDate(self.value, Precision.DAY, cert, self.month, first),
                    ProvenanceDate(self.value, Precision.DAY, cert, self.month, last))
        return (self, self)

    def __str__(self) -> str:
        """Render the date the way a cataloguer would write it."""
        era = " BCE" if self.value < 0 else ""
        year = abs(self.value)
        if self.precision == Precision.CENTURY:
            n = (-self.value + 99) // 100 if self.value < 0 else self.value // 100 + 1
            text = f"{ordinal(n)} century{era}"
        elif self.precision == Precision.DECADE:
            text = f"{self.value}s"
        elif self.precision == Precision.YEAR:
            if not era and year < 1000:
                era = " CE"
            text = f"{year}{era}"
        elif self.precision == Precision.MONTH:
            text = f"{MONTH_NAMES[self.month - 1]} {year}{era}"
        else:
            text = f"{MONTH_NAMES[self.month - 1]} {self.day}, {year}{era}"
        return text if self.certainty else f"{text}?"

    def __repr__(self) -> str:
        cert = "" if self.certainty else ", uncertain"
        return f"ProvenanceDate({self.to_iso()}, {self.precision.name}{cert})"

    def to_iso(self) -> str:
        """
        Serialize the calendar value ('1920', '1932-06', '1932-06-09', '-0401').

        Precision and certainty are serialized separately.
        """
        sign = "-" if self.value < 0 else ""
        text = f"{sign}{abs(self.value):04d}"
        if self.month is not None:
            text += f"-{self.month:02d}"
        if self.day is not None:
            text += f"-{self.day:02d}"
        return text

    @classmethod
    def from_iso(cls, text: str, precision: Optional[str] = None, certainty: bool = True) -> "ProvenanceDate":
        """
        Parse a value produced by to_iso().

        Args:
            text (str): ISO-like date string.
            precision (Optional[str]): Precision name; inferred from the
                number of components when omitted.
            certainty (bool): Certainty flag.

        Returns:
            ProvenanceDate

        Raises:
            ValueError: If the text or the precision name is malformed.
        """
        match = cls.ISO_RE.match(str(text).strip())
        if not match:
            raise ValueError(f"Malformed date value: {text!r}")
        year, month, day = match.groups()
        if precision:
            try:
                prec = Precision[str(precision).upper()]
            except KeyError:
                raise ValueError(f"Unknown date precision: {precision!r}")
        else:
            prec = Precision.DAY if day else Precision.MONTH if month else Precision.YEAR
        return cls(int(year), prec, certainty,
                   int(month) if month else None,
                   int(day) if day else None)

    def _key(self):
        return (self.value, self.month, self.day, self.precision)

    def __eq__(self, other):
        if not isinstance(other, ProvenanceDate):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other):
        if not isinstance(other, ProvenanceDate):
            return NotImplemented
        return (self.earliest(), self.latest()) < (other.earliest(), other.latest())

    def __hash__(self):
        return hash(self._key())
