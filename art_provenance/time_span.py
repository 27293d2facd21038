"""
time_span.py - Fuzzy ownership time ranges and the free-text range resolver.

A TimeSpan bounds the start of an ownership period between two dates and its
end between two more, each with its own precision and certainty. The
TimeSpanParser reads phrases such as 'by 1930', 'between 1920 and 1925',
'early 1920s until June 1932' or '1920-1935' out of a fragment and returns the
fragment without them.

Module: art_provenance.time_span
Last updated: 2026-10-18
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .date_extractor import DateExtractor, DateMatch
from .errors import DateError
from .provenance_date import ProvenanceDate

logger = logging.getLogger(__name__)

__all__ = ['TimeSpan', 'TimeSpanResult', 'TimeSpanParser']


@dataclass(frozen=True)
class TimeSpan:
    """
    Four bounding dates of an ownership period. Use None for unknown bounds.

    Attributes:
        botb: Begin of the begin, the earliest the period could have started.
        eotb: End of the begin, the latest the period could have started.
        bote: Begin of the end, the earliest the period could have ended.
        eote: End of the end, the latest the period could have ended.
    """
    botb: Optional[ProvenanceDate] = None
    eotb: Optional[ProvenanceDate] = None
    bote: Optional[ProvenanceDate] = None
    eote: Optional[ProvenanceDate] = None

    def is_empty(self) -> bool:
        """Check if all four bounds are None."""
        return not any((self.botb, self.eotb, self.bote, self.eote))

    @property
    def begin_earliest(self) -> Optional[ProvenanceDate]:
        return self.botb or self.eotb

    @property
    def begin_latest(self) -> Optional[ProvenanceDate]:
        return self.eotb or self.botb

    @property
    def end_earliest(self) -> Optional[ProvenanceDate]:
        return self.bote or self.eote

    @property
    def end_latest(self) -> Optional[ProvenanceDate]:
        return self.eote or self.bote

    def validate(self) -> None:
        """
        Check that the bounds are ordered.

        Raises:
            DateError: If a range ends before it begins.
        """
        pairs = (
            (self.botb, self.eotb, "start"),
            (self.bote, self.eote, "end"),
            (self.begin_earliest, self.end_latest, "period"),
        )
        for low, high, what in pairs:
            if low is not None and high is not None and high.precedes(low):
                raise DateError(f"The {what} range {low} .. {high} ends before it begins")

    def __str__(self) -> str:
        """Render the bounds as a phrase TimeSpanParser reads back."""
        parts = []
        begin = _range_phrase(self.botb, self.eotb, "by", "after")
        if begin:
            parts.append(begin)
        end = _range_phrase(self.bote, self.eote, "before", "after")
        if end:
            parts.append(f"until {end}")
        return " ".join(parts)


def _range_phrase(low: Optional[ProvenanceDate], high: Optional[ProvenanceDate],
                  high_word: str, low_word: str) -> str:
    if low is not None and high is not None:
        if low == high and low.certainty == high.certainty:
            return str(low)
        return f"between {low} and {high}"
    if high is not None:
        return f"{high_word} {high}"
    if low is not None:
        return f"{low_word} {low}"
    return ""


@dataclass
class TimeSpanResult:
    """
    Outcome of resolving the date phrases of a fragment.

    Attributes:
        time_span (Optional[TimeSpan]): Bounds found, None if the text holds
            no date or could not be resolved.
        text (str): The fragment with the date clause removed (unchanged on
            error).
        error (Optional[str]): Why resolution failed, None on success.
    """
    time_span: Optional[TimeSpan]
    text: str
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


_KEYWORDS = (
    r"sometime|some\stime|between|after|before|by|until|till|through|to|from|since"
    r"|in|on|circa|ca\.|c\.|around|about|and|-|–"
)
_KEYWORD = rf"(?:{_KEYWORDS})(?![A-Za-z])"
_LEAD = rf"""
    (?P<keywords>{_KEYWORD}(?:\s*{_KEYWORD})*)?
    \s*
    (?:the\s+)?
    (?:(?P<modifier>early|mid|late)(?:\s+|-))?
"""

_UNCERTAIN_KEYWORDS = {"sometime", "some time", "circa", "ca.", "c.", "around", "about"}
_END_KEYWORDS = {"until", "till", "to", "through", "-", "–"}


@dataclass
class _Lead:
    keywords: List[str]
    modifier: Optional[str]


class TimeSpanParser:
    """
    Resolves the date clause of a provenance fragment to a TimeSpan.

    Attributes:
        date_extractor (DateExtractor): Finds the dates in the clause.
    """
    YEAR_RANGE_RE = re.compile(r"(?<![\d/-])(\d{4})(\??)\s*[-–]\s*(\d{4})(\??)(?![\d/-])")
    LEAD_AT_END_RE = re.compile(r"(?:^|(?<=[\s,]))" + _LEAD + r"\s*$", re.I | re.X)
    GAP_RE = re.compile(r"\s*,?\s*" + _LEAD + r"\s*", re.I | re.X)
    KEYWORD_RE = re.compile(_KEYWORD, re.I)

    def __init__(self, date_extractor: Optional[DateExtractor] = None) -> None:
        self.date_extractor = date_extractor or DateExtractor()

    def resolve(self, text: str) -> TimeSpanResult:
        """
        Resolve the date clause of a fragment without raising.

        Args:
            text (str): Fragment text (life dates and stock numbers removed).

        Returns:
            TimeSpanResult: The bounds and the remaining text, or the error.
        """
        try:
            time_span, remaining = self.parse(text)
        except DateError as e:
            logger.warning('TimeSpanParser: unable to parse "%s": %s', text, e)
            return TimeSpanResult(time_span=None, text=text, error=str(e))
        return TimeSpanResult(time_span=time_span, text=remaining)

    def parse(self, text: str) -> Tuple[Optional[TimeSpan], str]:
        """
        Resolve the date clause of a fragment.

        Args:
            text (str): Fragment text.

        Returns:
            Tuple[Optional[TimeSpan], str]: Bounds (None if the text holds no
            date) and the text with the date clause removed.

        Raises:
            DateError: If a date cannot be resolved or the bounds conflict.
        """
        working = self.YEAR_RANGE_RE.sub(r"\1\2 to \3\4", text)
        matches, _ = self.date_extractor.scan(working)
        # scan() reports offsets in the day-month-normalized text
        working = self.date_extractor.normalize_day_month(working)
        matches = sorted(matches, key=lambda m: m.start)
        if not matches:
            return None, text

        for m in matches:
            if m.date is None and not m.discarded:
                raise DateError(f'"{m.text.strip()}" is not a valid date')

        clause_start, first_lead = self._lead_before(working, matches[0])
        items: List[Tuple[_Lead, DateMatch]] = [(first_lead, matches[0])]
        clause_end = matches[0].end
        for m in matches[1:]:
            gap = self.GAP_RE.fullmatch(working, clause_end, m.start)
            if gap is None:
                raise DateError(f'Unexpected date "{m.text.strip()}" outside the date clause')
            items.append((self._lead(gap), m))
            clause_end = m.end

        time_span = self._interpret([(lead, m) for lead, m in items if m.date is not None])
        remaining = working[:clause_start] + " " + working[clause_end:]
        return time_span, self._tidy(remaining)

    def _lead_before(self, text: str, match: DateMatch) -> Tuple[int, _Lead]:
        lead = self.LEAD_AT_END_RE.search(text, 0, match.start)
        if lead is None:
            return match.start, _Lead([], None)
        return lead.start(), self._lead(lead)

    def _lead(self, match: re.Match) -> _Lead:
        keywords = [k.lower() for k in self.KEYWORD_RE.findall(match.group('keywords') or "")]
        modifier = match.group('modifier')
        return _Lead(keywords, modifier.lower() if modifier else None)

    @staticmethod
    def _interpret(items: List[Tuple[_Lead, DateMatch]]) -> Optional[TimeSpan]:
        bounds = {"begin": [None, None], "end": [None, None]}
        target = "begin"
        between_open = False
        for lead, m in items:
            low = high = m.date
            if lead.modifier:
                low, high = m.date.narrow(lead.modifier)
            if _UNCERTAIN_KEYWORDS.intersection(lead.keywords):
                low, high = low.with_certainty(False), high.with_certainty(False)

            mode = "point"
            for keyword in lead.keywords:
                if keyword in _END_KEYWORDS:
                    target = "end"
                elif keyword == "between":
                    mode = "between"
                elif keyword == "and":
                    if not between_open:
                        raise DateError(f'"and {m.text.strip()}" without "between"')
                    mode = "and"
                elif keyword in ("by", "before"):
                    mode = "high"
                elif keyword in ("after", "since"):
                    mode = "low"

            if between_open and mode != "and":
                raise DateError('"between" without a closing "and"')
            bound = bounds[target]
            if mode == "between":
                bound[0] = low
                between_open = True
            elif mode == "and":
                bound[1] = high
                between_open = False
            elif mode == "high":
                bound[1] = high
            elif mode == "low":
                bound[0] = low
            else:
                bound[0], bound[1] = low, high
        if between_open:
            raise DateError('"between" without a closing "and"')

        time_span = TimeSpan(botb=bounds["begin"][0], eotb=bounds["begin"][1],
                             bote=bounds["end"][0], eote=bounds["end"][1])
        time_span.validate()
        return None if time_span.is_empty() else time_span

    @staticmethod
    def _tidy(text: str) -> str:
        text = re.sub(r"\s+", " ", text)
        text = re.sub(r"\s*,(?:\s*,)+", ",", text)
        text = re.sub(r"\s+,", ",", text)
        return text.strip(" ,")
