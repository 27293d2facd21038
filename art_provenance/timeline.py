"""
timeline.py - Ordered sequence of ownership periods.

Provides the Timeline class, which keeps the Periods of one provenance record
in ownership order. Periods live in an arena and are linked by index, so the
sequence can be walked either way without reference cycles. It supports:
    - Splicing periods before/after an anchor or at either end
    - Direct-transfer insertion that checks the dates of adjacent periods
    - Rendering the whole record back to prose with renumbered footnotes
    - CSV, dict and JSON export

Periods are never removed.

Module: art_provenance.timeline
Last updated: 2026-10-18
"""

import csv
import io
import json
import logging
from typing import Any, Dict, Iterator, List, Optional

from .errors import DateError
from .period import Period
from .period_output import PeriodOutput

logger = logging.getLogger(__name__)

__all__ = ['Timeline']


class Timeline:
    """
    The periods of a provenance record, earliest owner first.

    Attributes:
        footnote_divider (str): Token placed before the footnote block when
            rendering prose.
    """
    __slots__ = ['footnote_divider', '_periods', '_previous', '_next', '_earliest', '_latest']

    def __init__(self, footnote_divider: str = "NOTES:"):
        self.footnote_divider: str = footnote_divider
        self._periods: List[Period] = []
        self._previous: List[Optional[int]] = []
        self._next: List[Optional[int]] = []
        self._earliest: Optional[int] = None
        self._latest: Optional[int] = None

    # --- access -------------------------------------------------------------

    @property
    def earliest(self) -> Optional[Period]:
        return self._periods[self._earliest] if self._earliest is not None else None

    @property
    def latest(self) -> Optional[Period]:
        return self._periods[self._latest] if self._latest is not None else None

    def __len__(self) -> int:
        return len(self._periods)

    def __bool__(self) -> bool:
        return bool(self._periods)

    def __iter__(self) -> Iterator[Period]:
        index = self._earliest
        while index is not None:
            yield self._periods[index]
            index = self._next[index]

    def __getitem__(self, position: int) -> Period:
        """Return the period at the given position in ownership order."""
        if position < 0:
            position += len(self)
        if position < 0 or position >= len(self):
            raise IndexError("Timeline index out of range")
        for i, period in enumerate(self):
            if i == position:
                return period
        raise IndexError("Timeline index out of range")

    def previous_of(self, period: Period) -> Optional[Period]:
        """The period immediately before the given one, or None."""
        index = self._previous[self._index(period)]
        return self._periods[index] if index is not None else None

    def next_of(self, period: Period) -> Optional[Period]:
        """The period immediately after the given one, or None."""
        index = self._next[self._index(period)]
        return self._periods[index] if index is not None else None

    def _index(self, period: Period) -> int:
        index = period.index
        if index is None or index >= len(self._periods) or self._periods[index] is not period:
            raise ValueError("Period is not part of this timeline")
        return index

    def _register(self, period: Period) -> int:
        if period.index is not None:
            raise ValueError("Period is already part of a timeline")
        period.index = len(self._periods)
        self._periods.append(period)
        self._previous.append(None)
        self._next.append(None)
        return period.index

    # --- insertion ----------------------------------------------------------

    def insert_before(self, anchor: Period, period: Period) -> Period:
        """
        Splice a period in immediately before the anchor.

        Returns:
            Period: The inserted period.
        """
        a = self._index(anchor)
        n = self._register(period)
        p = self._previous[a]
        self._previous[n], self._next[n] = p, a
        self._previous[a] = n
        if p is None:
            self._earliest = n
        else:
            self._next[p] = n
        return period

    def insert_after(self, anchor: Period, period: Period) -> Period:
        """
        Splice a period in immediately after the anchor.

        Returns:
            Period: The inserted period.
        """
        a = self._index(anchor)
        n = self._register(period)
        nx = self._next[a]
        self._previous[n], self._next[n] = a, nx
        self._next[a] = n
        if nx is None:
            self._latest = n
        else:
            self._previous[nx] = n
        return period

    def insert_earliest(self, period: Period) -> Period:
        """Insert a period before every other period."""
        if self._earliest is None:
            return self._insert_first(period)
        return self.insert_before(self.earliest, period)

    def insert_latest(self, period: Period) -> Period:
        """Insert a period after every other period."""
        if self._latest is None:
            return self._insert_first(period)
        return self.insert_after(self.latest, period)

    insert = insert_latest

    def insert_direct(self, period: Period) -> Period:
        """
        Append a period that the previous owner transferred directly.

        The current latest period is marked as a direct transfer.

        Raises:
            DateError: If the new period ends before the current latest one
                begins; the timeline is left unchanged.
        """
        previous = self.latest
        if previous is not None:
            self._check_sequence(previous, period)
        self.insert_latest(period)
        if previous is not None:
            previous.direct_transfer = True
        return period

    def insert_directly_after(self, anchor: Period, period: Period) -> Period:
        """
        Splice a period in after the anchor and mark the anchor as having
        transferred the work directly to it.

        Raises:
            DateError: If the new period ends before the anchor begins.
        """
        self._check_sequence(anchor, period)
        self.insert_after(anchor, period)
        anchor.direct_transfer = True
        return period

    def _insert_first(self, period: Period) -> Period:
        n = self._register(period)
        self._earliest = self._latest = n
        return period

    @staticmethod
    def _check_sequence(before: Period, after: Period) -> None:
        start, end = before.beginning, after.ending
        if start is not None and end is not None and end.precedes(start):
            raise DateError(f"Period '{after}' ends ({end}) before '{before}' begins ({start})")

    # --- output -------------------------------------------------------------

    def provenance(self) -> str:
        """
        Render the timeline back to provenance prose.

        Footnotes are renumbered 1..k in order of first appearance; a note
        cited by several periods keeps a single number. Notes are told apart
        by their source footnote number, or by text where that is unknown.

        Returns:
            str: 'Sold to A, 1920; B [1]. NOTES: 1. text'
        """
        footnotes: List[str] = []
        numbers: Dict[Any, int] = {}
        records = []
        for period in self:
            record = period.provenance
            for key, note in period.note_keys():
                if key not in numbers:
                    footnotes.append(note)
                    numbers[key] = len(footnotes)
                record += f" [{numbers[key]}]"
            record += ";" if period.direct_transfer else "."
            records.append(record)
        text = " ".join(records)
        if footnotes:
            notes = " ".join(f"{i}. {note}" for i, note in enumerate(footnotes, start=1))
            text = f"{text} {self.footnote_divider} {notes}"
        return text.strip()

    def __str__(self) -> str:
        return self.provenance()

    def __repr__(self) -> str:
        return f"Timeline({len(self)} periods)"

    def outputs(self) -> List[PeriodOutput]:
        return [period.generate_output() for period in self]

    def to_csv(self) -> str:
        """One header row of field names, then one row per period."""
        buffer = io.StringIO()
        writer = csv.writer(buffer)
        writer.writerow(PeriodOutput.field_names())
        for output in self.outputs():
            writer.writerow(output.to_row())
        return buffer.getvalue()

    def to_dict(self) -> Dict[str, Any]:
        return {"period": [output.to_dict() for output in self.outputs()]}

    def to_json(self, **kwargs) -> str:
        return json.dumps(self.to_dict(), **kwargs)
