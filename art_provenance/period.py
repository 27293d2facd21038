"""
period.py - One ownership interval of a provenance record.

This module provides the Period class, a single node of a Timeline. It supports:
    - Holding the fields extracted from one provenance fragment
    - Rendering the period back to catalogue prose
    - Conversion to and from the flat PeriodOutput record

Module: art_provenance.period
Last updated: 2026-10-18
"""

__all__ = ['Period']

import logging
from typing import Any, List, Optional, Tuple

from .acquisition_method import AcquisitionMethod
from .party import Party
from .time_span import TimeSpan

logger = logging.getLogger(__name__)


class Period:
    """
    A contiguous interval of ownership by a single party.

    Fields are set once when the period is built; afterwards only
    `direct_transfer` and `index` are changed, by the Timeline that owns it.

    Attributes:
        certain (bool): False if the fragment began with a qualifier such as
            'possibly'.
        original_text (str): The source fragment, untouched.
        acquisition_method (Optional[AcquisitionMethod]): How the party
            acquired the work.
        note (List[str]): Footnote texts attached to the period, in order.
        note_refs (List[Optional[int]]): Footnote number each note was cited
            by in the source record, None where unknown.
        stock_number (Optional[str]): Dealer stock or auction lot number.
        party (Party): The owner.
        location (Optional[str]): Where the owner held the work.
        location_certainty (bool): False if the location was marked doubtful.
        direct_transfer (bool): True if the work passed straight to the next
            period's owner, with no gap.
        parsable (bool): False if the date phrases could not be resolved.
        time_span (Optional[TimeSpan]): Fuzzy begin and end of ownership.
        index (Optional[int]): Slot in the owning Timeline, None until
            inserted.
    """
    __slots__ = [
        'certain', 'original_text', 'acquisition_method', 'note', 'note_refs',
        'stock_number', 'party', 'location', 'location_certainty',
        'direct_transfer', 'parsable', 'time_span', 'index',
    ]

    def __init__(self, party: Optional[Party] = None, *, certain: bool = True, original_text: str = "",
                 acquisition_method: Optional[AcquisitionMethod] = None, note: Optional[List[str]] = None,
                 stock_number: Optional[str] = None, location: Optional[str] = None,
                 location_certainty: bool = True, direct_transfer: bool = False,
                 parsable: bool = True, time_span: Optional[TimeSpan] = None,
                 note_refs: Optional[List[Optional[int]]] = None):
        self.party: Party = party if party is not None else Party()
        self.certain: bool = certain
        self.original_text: str = original_text
        self.acquisition_method: Optional[AcquisitionMethod] = acquisition_method
        self.note: List[str] = list(note or [])
        refs = list(note_refs or [])
        self.note_refs: List[Optional[int]] = (refs + [None] * len(self.note))[:len(self.note)]
        self.stock_number: Optional[str] = stock_number
        self.location: Optional[str] = location
        self.location_certainty: bool = location_certainty
        self.direct_transfer: bool = direct_transfer
        self.parsable: bool = parsable
        self.time_span: Optional[TimeSpan] = time_span
        self.index: Optional[int] = None

    def __repr__(self) -> str:
        return f"[ {self.provenance} ]"

    def __str__(self) -> str:
        return self.provenance

    @property
    def beginning(self):
        """Earliest possible start of ownership, or None."""
        return self.time_span.begin_earliest if self.time_span else None

    @property
    def ending(self):
        """Latest possible end of ownership, or None."""
        return self.time_span.end_latest if self.time_span else None

    @property
    def provenance(self) -> str:
        """
        The period written as catalogue prose, without footnote markers or
        terminating punctuation.

        Example: 'Possibly sold to John Doe (1900-1950), Paris, 1920 until
        1935, stock no. 123'
        """
        text = str(self.party)
        method = self.acquisition_method
        if method is not None:
            text = method.render(text)
        if self.location:
            text += f", {self.location}" + ("" if self.location_certainty else "?")
        if self.time_span is not None and not self.time_span.is_empty():
            text = f"{text}, {self.time_span}" if text else str(self.time_span)
        if self.stock_number:
            text = f"{text}, {self.stock_number}" if text else self.stock_number
        if not self.certain:
            if method is not None and method.placement == "prefix":
                text = text[:1].lower() + text[1:]
            text = f"Possibly {text}"
        return text

    def note_keys(self) -> List[Tuple[Tuple[str, Any], str]]:
        """
        Pair each note with the key that identifies it across a Timeline:
        its source footnote number when known, otherwise its text.
        """
        return [(('ref', ref) if ref is not None else ('text', note), note)
                for ref, note in zip(self.note_refs, self.note)]

    def generate_output(self):
        """Flatten the period to a PeriodOutput record."""
        from .period_output import PeriodOutput
        return PeriodOutput.from_period(self)
