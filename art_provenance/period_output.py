"""
period_output.py - Flat export record of a Period.

PeriodOutput holds one Period as plain values (strings, booleans and lists),
with each date split into value, certainty and precision columns. It is the
row format of Timeline.to_csv() and the record format of Timeline.to_dict()
and from_dict().

Module: art_provenance.period_output
Last updated: 2026-10-18
"""
from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field, fields
from typing import Any, Dict, List, Optional

from .acquisition_method import AcquisitionMethodClassifier
from .errors import DateError, ProvenanceFormatError
from .party import Party
from .period import Period
from .provenance_date import ProvenanceDate
from .time_span import TimeSpan

logger = logging.getLogger(__name__)

__all__ = ['PeriodOutput']

BOUNDS = ('botb', 'eotb', 'bote', 'eote')


@dataclass
class PeriodOutput:
    """
    One Period as a flat record.

    Date columns hold ISO-like strings ('1920', '1932-06', '-0401'); the
    matching *_precision columns hold Precision names ('DECADE').
    """
    period_certainty: bool = True
    acquisition_method: Optional[str] = None
    party: str = ""
    party_certainty: bool = True
    birth: Optional[str] = None
    birth_certainty: Optional[bool] = None
    death: Optional[str] = None
    death_certainty: Optional[bool] = None
    location: Optional[str] = None
    location_certainty: bool = True
    botb: Optional[str] = None
    botb_certainty: Optional[bool] = None
    botb_precision: Optional[str] = None
    eotb: Optional[str] = None
    eotb_certainty: Optional[bool] = None
    eotb_precision: Optional[str] = None
    bote: Optional[str] = None
    bote_certainty: Optional[bool] = None
    bote_precision: Optional[str] = None
    eote: Optional[str] = None
    eote_certainty: Optional[bool] = None
    eote_precision: Optional[str] = None
    original_text: str = ""
    provenance: str = ""
    parsable: bool = True
    direct_transfer: bool = False
    stock_number: Optional[str] = None
    footnote: List[str] = field(default_factory=list)

    @classmethod
    def field_names(cls) -> List[str]:
        return [f.name for f in fields(cls)]

    @classmethod
    def from_period(cls, period: Period) -> PeriodOutput:
        """Flatten a Period."""
        party = period.party
        values: Dict[str, Any] = dict(
            period_certainty=period.certain,
            acquisition_method=period.acquisition_method.id if period.acquisition_method else None,
            party=party.name,
            party_certainty=party.certainty,
            location=period.location,
            location_certainty=period.location_certainty,
            original_text=period.original_text,
            provenance=period.provenance,
            parsable=period.parsable,
            direct_transfer=period.direct_transfer,
            stock_number=period.stock_number,
            footnote=list(period.note),
        )
        for name, date in (('birth', party.birth), ('death', party.death)):
            if date is not None:
                values[name] = date.to_iso()
                values[f"{name}_certainty"] = date.certainty
        span = period.time_span or TimeSpan()
        for name in BOUNDS:
            date = getattr(span, name)
            if date is not None:
                values[name] = date.to_iso()
                values[f"{name}_certainty"] = date.certainty
                values[f"{name}_precision"] = date.precision.name
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def to_row(self, footnote_sep: str = " | ") -> List[Any]:
        """Values in column order, footnotes joined into one cell."""
        row = []
        for name in self.field_names():
            value = getattr(self, name)
            if name == 'footnote':
                value = footnote_sep.join(value)
            row.append("" if value is None else value)
        return row

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> PeriodOutput:
        """
        Build a record from a dictionary, as found in to_dict() output.

        Raises:
            ProvenanceFormatError: If the data is not a mapping, has unknown
                keys, or has values of the wrong type.
        """
        if not isinstance(data, dict):
            raise ProvenanceFormatError(f"Period record must be an object, not {type(data).__name__}")
        known = set(cls.field_names())
        unknown = sorted(set(data) - known)
        if unknown:
            raise ProvenanceFormatError(f"Unknown period field(s): {', '.join(unknown)}")
        for name in ('period_certainty', 'party_certainty', 'location_certainty', 'parsable', 'direct_transfer'):
            if name in data and not isinstance(data[name], bool):
                raise ProvenanceFormatError(f"Field '{name}' must be true or false")
        footnote = data.get('footnote') or []
        if isinstance(footnote, str):
            footnote = [footnote]
        if not isinstance(footnote, list) or not all(isinstance(n, str) for n in footnote):
            raise ProvenanceFormatError("Field 'footnote' must be a list of strings")
        values = dict(data)
        values['footnote'] = footnote
        if values.get('party') is None:
            values['party'] = ""
        if values.get('original_text') is None:
            values['original_text'] = ""
        return cls(**values)

    def to_period(self, classifier: AcquisitionMethodClassifier) -> Period:
        """
        Rebuild the Period this record describes.

        Args:
            classifier (AcquisitionMethodClassifier): Resolves the method id.

        Raises:
            ProvenanceFormatError: If a date or the acquisition method cannot
                be read back.
        """
        method = None
        if self.acquisition_method:
            method = classifier.get(self.acquisition_method)
            if method is None:
                raise ProvenanceFormatError(f"Unknown acquisition method '{self.acquisition_method}'")
        party = Party(
            name=str(self.party),
            birth=self._date('birth'),
            death=self._date('death'),
            certainty=self.party_certainty,
        )
        bounds = {name: self._date(name) for name in BOUNDS}
        time_span = TimeSpan(**bounds)
        try:
            time_span.validate()
        except DateError as e:
            raise ProvenanceFormatError(str(e)) from e
        return Period(
            party,
            certain=self.period_certainty,
            original_text=str(self.original_text),
            acquisition_method=method,
            note=self.footnote,
            stock_number=self.stock_number,
            location=self.location,
            location_certainty=self.location_certainty,
            direct_transfer=self.direct_transfer,
            parsable=self.parsable,
            time_span=None if time_span.is_empty() else time_span,
        )

    def _date(self, name: str) -> Optional[ProvenanceDate]:
        value = getattr(self, name)
        if value is None or value == "":
            return None
        certainty = getattr(self, f"{name}_certainty")
        precision = getattr(self, f"{name}_precision", None)
        try:
            return ProvenanceDate.from_iso(str(value), precision, certainty is not False)
        except ValueError as e:
            raise ProvenanceFormatError(f"Field '{name}': {e}") from e

