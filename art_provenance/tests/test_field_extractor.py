import pytest

from art_provenance.field_extractor import FieldExtractor
from art_provenance.provenance_date import Precision


@pytest.fixture
def field_extractor(lexicon):
    return FieldExtractor(lexicon)


def test_life_dates(field_extractor):
    """Test '(1900-1950)' becomes birth and death years and is removed from the name."""
    period, issues = field_extractor.extract("John Doe (1900-1950)")
    party = period.party
    assert party.name == "John Doe"
    assert (party.birth.value, party.birth.precision, party.birth.certainty) == (1900, Precision.YEAR, True)
    assert (party.death.value, party.death.precision, party.death.certainty) == (1950, Precision.YEAR, True)
    assert period.location is None
    assert issues == []


@pytest.mark.parametrize("text,birth,death", [
    ("John Doe (1900?-1950)", (1900, False), (1950, True)),
    ("John Doe (died 1950)", None, (1950, True)),
    ("John Doe (DIED 1950?)", None, (1950, False)),
    ("John Doe (BORN 1900)", (1900, True), None),
    ("John Doe (850-910)", (850, True), (910, True)),
])
def test_life_date_forms(field_extractor, text, birth, death):
    party = field_extractor.extract(text)[0].party
    assert party.name == "John Doe"
    assert ((party.birth.value, party.birth.certainty) if party.birth else None) == birth
    assert ((party.death.value, party.death.certainty) if party.death else None) == death


def test_full_fragment(field_extractor, lexicon):
    period, issues = field_extractor.extract("Sold to John Smith, Paris, 1920 until 1935, stock no. 1234")
    assert period.acquisition_method is lexicon.classifier.get("sale")
    assert period.party.name == "John Smith"
    assert period.location == "Paris"
    assert period.stock_number == "stock no. 1234"
    assert str(period.time_span) == "1920 until 1935"
    assert period.parsable is True
    assert period.original_text == "Sold to John Smith, Paris, 1920 until 1935, stock no. 1234"
    assert issues == []


def test_lot_number(field_extractor):
    period, _ = field_extractor.extract("Christie's, London, lot 45")
    assert period.stock_number == "lot 45"
    assert period.party.name == "Christie's"
    assert period.location == "London"


@pytest.mark.parametrize("text,name", [
    ("Possibly Smith", "Smith"),
    ("probably, Smith", "Smith"),
])
def test_certainty_word(field_extractor, text, name):
    period, _ = field_extractor.extract(text)
    assert period.certain is False
    assert period.party.name == name


def test_certainty_word_before_method(field_extractor):
    period, _ = field_extractor.extract("Possibly sold to Smith")
    assert period.certain is False
    assert period.acquisition_method.id == "sale"
    assert period.party.name == "Smith"


def test_doubtful_party_and_location(field_extractor):
    period, _ = field_extractor.extract("Smith?, Paris?")
    assert (period.party.name, period.party.certainty) == ("Smith", False)
    assert (period.location, period.location_certainty) == ("Paris", False)


def test_suffix_method(field_extractor):
    period, _ = field_extractor.extract("John Smith, by exchange, New York")
    assert period.acquisition_method.id == "exchange"
    assert period.party.name == "John Smith"
    assert period.location == "New York"


def test_name_extenders(field_extractor):
    period, _ = field_extractor.extract("John Smith, Jr., New York")
    assert period.party.name == "John Smith, Jr."
    assert period.location == "New York"


def test_location_equal_to_name_is_dropped(field_extractor):
    period, _ = field_extractor.extract("Smith, Smith")
    assert period.location is None


class TestFootnotes:
    """Tests for footnote reference resolution."""

    def test_resolved(self, field_extractor):
        period, issues = field_extractor.extract("Smith [1]", {1: "Note text."})
        assert period.note == ["Note text."]
        assert period.party.name == "Smith"
        assert issues == []

    def test_note_reference_form(self, field_extractor):
        period, _ = field_extractor.extract("Smith [see note 2]", {2: "Second."})
        assert period.note == ["Second."]
        assert period.party.name == "Smith"

    def test_unresolved(self, field_extractor):
        period, issues = field_extractor.extract("Smith [2]", {}, fragment_index=4)
        assert period.note == ["2"]
        assert [i.issue_type for i in issues] == ["unresolved_footnote"]
        assert issues[0].fragment_index == 4


def test_unparsable_date_is_reported_not_raised(field_extractor):
    period, issues = field_extractor.extract("Smith, between 1920")
    assert period.parsable is False
    assert period.time_span is None
    assert [i.issue_type for i in issues] == ["unparsable_date"]
    assert issues[0].severity == "warning"
