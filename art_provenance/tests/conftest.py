"""
Pytest fixtures for art_provenance tests.
"""
from __future__ import annotations

import pytest

from art_provenance.date_extractor import DateExtractor
from art_provenance.lexicon import ProvenanceLexicon
from art_provenance.party import Party
from art_provenance.period import Period
from art_provenance.provenance import ProvenanceExtractor
from art_provenance.provenance_date import Precision, ProvenanceDate
from art_provenance.time_span import TimeSpan


@pytest.fixture
def lexicon() -> ProvenanceLexicon:
    return ProvenanceLexicon.default()


@pytest.fixture
def date_extractor() -> DateExtractor:
    return DateExtractor()


@pytest.fixture
def extractor(lexicon) -> ProvenanceExtractor:
    return ProvenanceExtractor(lexicon)


@pytest.fixture
def year():
    """Build a YEAR-precision ProvenanceDate."""
    def _year(value: int, certainty: bool = True) -> ProvenanceDate:
        return ProvenanceDate(value, Precision.YEAR, certainty)
    return _year


@pytest.fixture
def make_period(year):
    """Create a Period for a named party, optionally with begin/end years and notes."""
    def _make(name: str, begin: int = None, end: int = None, notes=None, **kwargs) -> Period:
        time_span = None
        if begin is not None or end is not None:
            time_span = TimeSpan(
                botb=year(begin) if begin is not None else None,
                eotb=year(begin) if begin is not None else None,
                bote=year(end) if end is not None else None,
                eote=year(end) if end is not None else None,
            )
        return Period(Party(name), note=notes, time_span=time_span, **kwargs)
    return _make
