"""
date_extractor.py - Multi-granularity date extraction from provenance prose.

Provides the DateExtractor class, which finds calendar expressions of five
granularities in a span of text and blanks them out of the residual text.
The passes run coarse to fine, each one rescanning what the previous pass left:
    1. day-month reordering ('9 June 1932' -> 'June 9, 1932')
    2. centuries ('the 5th century bc')
    3. decades ('1920s?')
    4. years ('1932', '850 AD')
    5. months ('June 1932')
    6. days ('June 9, 1932', '6/9/1932', '1932-06-09')

Later passes depend on earlier ones having removed conflicting substrings, so
the order must not change.

Module: art_provenance.date_extractor
Last updated: 2026-10-18
"""

import logging
import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Pattern, Tuple

from .date_utils import (
    ERAS, MONTH_WORDS, expand_two_digit_year, is_bce, month_number,
    resolve_calendar_phrase,
)
from .provenance_date import Precision, ProvenanceDate

logger = logging.getLogger(__name__)

__all__ = ['DateExtractor', 'DateMatch', 'DateExtraction']

_MONTHS = "|".join(MONTH_WORDS)
_ERA = "|".join(ERAS)


def _year_lookbehinds() -> str:
    """
    Negative lookbehinds reserving digits that belong to month, slash and ISO
    forms. Years after a month and day ('jan 1, 2014') are skipped by
    DateExtractor._reserved_for_day instead.

    Python lookbehinds must be fixed width, so each month word gets its own
    set of assertions.
    """
    parts = []
    for month in MONTH_WORDS:
        for tail in (r"\s", r",\s", r"\.\s", r"\.,\s"):
            parts.append(rf"(?<!{month}{tail})")
    parts += [
        r"(?<!/)",                          # 1/2/2014
        r"(?<!-)",                          # 2014-01-02
    ]
    return "".join(parts)


@dataclass(frozen=True)
class DateMatch:
    """
    One matched calendar expression.

    Attributes:
        start (int): Offset of the match in the scanned text.
        end (int): Offset just past the match.
        text (str): The matched expression.
        date (Optional[ProvenanceDate]): Resolved date, or None if the
            expression looked like a date but is not a valid calendar value
            (e.g. 'February 30, 1920'), or was discarded by policy.
        discarded (bool): True if the match was consumed but dropped by
            policy rather than by failing to resolve.
    """
    start: int
    end: int
    text: str
    date: Optional[ProvenanceDate]
    discarded: bool = False


@dataclass
class DateExtraction:
    """Result of find_dates: dates in pass order and the residual text."""
    dates: List[ProvenanceDate]
    text: str


class DateExtractor:
    """
    Finds dates of century, decade, year, month and day precision in text.

    The extractor is stateless; one instance can be shared by any number of
    pipelines.
    """

    EURO_DATE_RE = re.compile(
        rf"\b(\d{{1,2}})\s({_MONTHS})\.?,?\s(\d{{2,4}})", re.I)

    CENTURY_RE = re.compile(
        rf"\b(?:the\s)?(?P<n>\d{{1,2}})(?:st|nd|rd|th)?\s+century(?:\s+(?P<era>{_ERA}))?\b(?P<uncertain>\?)?",
        re.I)

    DECADE_RE = re.compile(
        rf"\b(?P<n>\d{{1,3}})0s(?:\s+(?P<era>{_ERA}))?\b(?P<uncertain>\?)?", re.I)

    YEAR_RE = re.compile(
        _year_lookbehinds() +
        rf"""\b
        (?:
            (?P<year4>\d{{4}})(?:\s+(?P<era4>{_ERA}))?   # 1000-9999, era optional
            |
            (?P<year3>\d{{1,3}})\s+(?P<era3>{_ERA})      # 0-999, era required
        )
        \b
        (?!\scentury)
        (?!/)
        (?!-)
        (?P<uncertain>\?)?""",
        re.I | re.X)

    MONTH_RE = re.compile(
        rf"""\b
        (?P<month>{_MONTHS})
        \.?,?\s
        (?P<year>\d{{1,4}})
        (?:\s+(?P<era>{_ERA}))?
        (?!,\s*\d)     # 'June 9, 1932' is left for the day pass; 'June 1932, to X' is a month
        (?!\s\d)
        \b
        (?P<uncertain>\?)?""",
        re.I | re.X)

    DAY_RE = re.compile(
        rf"""\b
        (?P<month>{_MONTHS})
        \.?,?\s
        (?P<day>\d{{1,2}})(?:st|nd|rd|th)?
        \s?,?\s
        (?P<year>\d{{1,4}})
        (?:\s+(?P<era>{_ERA}))?
        \b
        (?P<uncertain>\?)?""",
        re.I | re.X)

    # Month and day number ending right before a year: 'jan 1, ', 'June 9th '
    DAY_PREFIX_RE = re.compile(
        rf"\b(?:{_MONTHS})\.?,?\s\d{{1,2}}(?:st|nd|rd|th)?\s?,?\s$", re.I)

    SLASH_DAY_RE = re.compile(
        rf"\b(?P<month>\d{{1,2}})/(?P<day>\d{{1,2}})/(?P<year>\d{{2,4}})(?:\s+(?P<era>{_ERA}))?\b(?P<uncertain>\?)?",
        re.I)

    ISO_DAY_RE = re.compile(
        r"\b(?P<year>\d{2,4})-(?P<month>\d{1,2})-(?P<day>\d{1,2})\b(?P<uncertain>\?)?")

    def find_dates(self, text: str) -> DateExtraction:
        """
        Find every date in the text.

        Dates are returned grouped by pass (centuries first, days last) and,
        within a pass, in order of appearance.

        Example:
            >>> DateExtractor().find_dates("the 15th century was hard, but the 1980s were harder").dates
            [ProvenanceDate(1400, CENTURY), ProvenanceDate(1980, DECADE)]

        Args:
            text (str): Text to search.

        Returns:
            DateExtraction: Dates found and the residual text.
        """
        matches, residual = self.scan(text)
        dates = [m.date for m in matches if m.date is not None]
        return DateExtraction(dates=dates, text=self._collapse(residual))

    def find_dates_in_string(self, text: str) -> List[ProvenanceDate]:
        """Return only the dates found in the text."""
        return self.find_dates(text).dates

    def remove_dates_in_string(self, text: str) -> str:
        """Return the text with every date expression removed."""
        _, residual = self.scan(text)
        return self._collapse(residual)

    def scan(self, text: str) -> Tuple[List[DateMatch], str]:
        """
        Run all passes and report every match with its offsets.

        Offsets refer to the day-month-normalized text (see normalize_day_month)
        and stay valid in the returned residual, which blanks matches with
        spaces of equal length.

        Args:
            text (str): Text to search.

        Returns:
            Tuple[List[DateMatch], str]: Matches in pass order and residual.
        """
        working = self.normalize_day_month(text or "")
        matches: List[DateMatch] = []
        for pattern, builder in (
            (self.CENTURY_RE, self._century),
            (self.DECADE_RE, self._decade),
            (self.YEAR_RE, self._year),
            (self.MONTH_RE, self._month),
            (self.DAY_RE, self._named_day),
            (self.SLASH_DAY_RE, self._numeric_day),
            (self.ISO_DAY_RE, self._numeric_day),
        ):
            skip = self._reserved_for_day if pattern is self.YEAR_RE else None
            found, working = self._run_pass(pattern, builder, working, skip)
            matches.extend(found)
        return matches, working

    def _reserved_for_day(self, text: str, m) -> bool:
        """True if the year follows a month and day number, for the day pass."""
        return self.DAY_PREFIX_RE.search(text, max(0, m.start() - 24), m.start()) is not None

    def normalize_day_month(self, text: str) -> str:
        """Rewrite '9 June 1932' and '9 June, 1932' to 'June 9, 1932'."""
        return self.EURO_DATE_RE.sub(r" \2 \1, \3", text)

    @staticmethod
    def _collapse(text: str) -> str:
        return re.sub(r"\s\s*", " ", text)

    @staticmethod
    def _run_pass(pattern: Pattern, builder: Callable, text: str,
                  skip: Optional[Callable] = None) -> Tuple[List[DateMatch], str]:
        found = []
        pieces = []
        last = 0
        for m in pattern.finditer(text):
            if skip is not None and skip(text, m):
                continue
            date, discarded = builder(m)
            found.append(DateMatch(m.start(), m.end(), m.group(0), date, discarded))
            pieces.append(text[last:m.start()])
            pieces.append(" " * (m.end() - m.start()))
            last = m.end()
        pieces.append(text[last:])
        return found, "".join(pieces)

    # --- per-pass date builders -------------------------------------------
    # Each returns (date or None, discarded-by-policy flag).

    @staticmethod
    def _century(m) -> Tuple[Optional[ProvenanceDate], bool]:
        n = int(m.group('n'))
        value = n * 100 - 100
        if is_bce(m.group('era')):
            value = -(value + 1)
        return ProvenanceDate(value, Precision.CENTURY, m.group('uncertain') is None), False

    @staticmethod
    def _decade(m) -> Tuple[Optional[ProvenanceDate], bool]:
        value = int(m.group('n')) * 10
        # BCE decades and two-digit decades ('20s') are consumed but not kept.
        if is_bce(m.group('era')) or value <= 100:
            logger.debug('DateExtractor: discarding decade "%s"', m.group(0))
            return None, True
        return ProvenanceDate(value, Precision.DECADE, m.group('uncertain') is None), False

    @staticmethod
    def _year(m) -> Tuple[Optional[ProvenanceDate], bool]:
        if m.group('year4') is not None:
            value, era = int(m.group('year4')), m.group('era4')
        else:
            value, era = int(m.group('year3')), m.group('era3')
        if is_bce(era):
            value = -value
        return ProvenanceDate(value, Precision.YEAR, m.group('uncertain') is None), False

    @staticmethod
    def _month(m) -> Tuple[Optional[ProvenanceDate], bool]:
        resolved = resolve_calendar_phrase(int(m.group('year')), month_number(m.group('month')))
        if resolved is None:
            return None, False
        year, month, _ = resolved
        if is_bce(m.group('era')):
            year = -year
        return ProvenanceDate(year, Precision.MONTH, m.group('uncertain') is None, month=month), False

    @staticmethod
    def _named_day(m) -> Tuple[Optional[ProvenanceDate], bool]:
        return DateExtractor._day(int(m.group('year')), month_number(m.group('month')),
                                  int(m.group('day')), m), False

    @staticmethod
    def _numeric_day(m) -> Tuple[Optional[ProvenanceDate], bool]:
        return DateExtractor._day(expand_two_digit_year(m.group('year')), int(m.group('month')),
                                  int(m.group('day')), m), False

    @staticmethod
    def _day(year: int, month: Optional[int], day: int, m) -> Optional[ProvenanceDate]:
        if month is None:
            return None
        resolved = resolve_calendar_phrase(year, month, day)
        if resolved is None:
            return None
        year, month, day = resolved
        era = m.groupdict().get('era')
        if is_bce(era):
            year = -year
        return ProvenanceDate(year, Precision.DAY, m.group('uncertain') is None, month, day)
