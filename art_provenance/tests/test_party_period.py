import pytest

from art_provenance.party import Party
from art_provenance.period import Period
from art_provenance.period_output import PeriodOutput
from art_provenance.provenance_date import Precision, ProvenanceDate
from art_provenance.time_span import TimeSpan


@pytest.mark.parametrize("party,expected", [
    (Party("John Doe"), "John Doe"),
    (Party("John Doe", certainty=False), "John Doe?"),
    (Party("John Doe", ProvenanceDate(1900), ProvenanceDate(1950)), "John Doe (1900-1950)"),
    (Party("John Doe", ProvenanceDate(1900, certainty=False), ProvenanceDate(1950)), "John Doe (1900?-1950)"),
    (Party("John Doe", birth=ProvenanceDate(1900)), "John Doe (born 1900)"),
    (Party("John Doe", death=ProvenanceDate(1950, certainty=False)), "John Doe (died 1950?)"),
])
def test_party_str(party, expected):
    assert str(party) == expected


def test_party_equality():
    assert Party("Smith", ProvenanceDate(1900)) == Party("Smith", ProvenanceDate(1900))
    assert Party("Smith") != Party("Smith", certainty=False)
    assert Party("Smith") != "Smith"


class TestPeriodProvenance:
    """Tests for rendering a single Period."""

    def test_name_only(self):
        assert Period(Party("Smith")).provenance == "Smith"

    def test_prefix_method_location_and_span(self, lexicon):
        period = Period(
            Party("John Doe", ProvenanceDate(1900), ProvenanceDate(1950)),
            acquisition_method=lexicon.classifier.get("sale"),
            location="Paris",
            time_span=TimeSpan(ProvenanceDate(1920), ProvenanceDate(1920), ProvenanceDate(1935), ProvenanceDate(1935)),
            stock_number="stock no. 123",
        )
        assert period.provenance == "Sold to John Doe (1900-1950), Paris, 1920 until 1935, stock no. 123"

    def test_uncertain_prefix_method_is_lowercased(self, lexicon):
        period = Period(Party("Smith"), certain=False, acquisition_method=lexicon.classifier.get("sale"))
        assert period.provenance == "Possibly sold to Smith"

    def test_uncertain_suffix_method(self, lexicon):
        period = Period(Party("Smith"), certain=False, acquisition_method=lexicon.classifier.get("exchange"))
        assert period.provenance == "Possibly Smith, by exchange"

    def test_doubtful_location(self):
        assert Period(Party("Smith"), location="Paris", location_certainty=False).provenance == "Smith, Paris?"

    def test_time_span_without_party(self):
        period = Period(time_span=TimeSpan(eotb=ProvenanceDate(1930)))
        assert period.provenance == "by 1930"

    def test_beginning_and_ending(self):
        span = TimeSpan(botb=ProvenanceDate(1920), eote=ProvenanceDate(1935))
        period = Period(Party("Smith"), time_span=span)
        assert period.beginning == ProvenanceDate(1920)
        assert period.ending == ProvenanceDate(1935)
        assert Period(Party("Smith")).beginning is None


def test_generate_output(lexicon):
    period = Period(
        Party("Smith", birth=ProvenanceDate(1900, certainty=False)),
        acquisition_method=lexicon.classifier.get("gift"),
        time_span=TimeSpan(eotb=ProvenanceDate(1932, Precision.MONTH, month=6)),
        note=["See letter."],
    )
    output = period.generate_output()
    assert isinstance(output, PeriodOutput)
    assert output.acquisition_method == "gift"
    assert output.party == "Smith"
    assert (output.birth, output.birth_certainty) == ("1900", False)
    assert output.death is None
    assert (output.eotb, output.eotb_precision) == ("1932-06", "MONTH")
    assert output.botb is None
    assert output.provenance == "Gift to Smith (born 1900?), by June 1932"
    assert output.footnote == ["See letter."]
