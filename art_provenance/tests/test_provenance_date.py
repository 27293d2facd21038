import pytest

from art_provenance.provenance_date import Precision, ProvenanceDate, ordinal


@pytest.mark.parametrize("date,expected", [
    (ProvenanceDate(1800, Precision.CENTURY), "19th century"),
    (ProvenanceDate(-401, Precision.CENTURY), "5th century BCE"),
    (ProvenanceDate(1920, Precision.DECADE), "1920s"),
    (ProvenanceDate(1920, Precision.DECADE, certainty=False), "1920s?"),
    (ProvenanceDate(1932), "1932"),
    (ProvenanceDate(800), "800 CE"),
    (ProvenanceDate(-401), "401 BCE"),
    (ProvenanceDate(1932, Precision.MONTH, month=6), "June 1932"),
    (ProvenanceDate(1932, Precision.DAY, month=6, day=9), "June 9, 1932"),
])
def test_str(date, expected):
    """Test dates render the way a cataloguer writes them."""
    assert str(date) == expected


@pytest.mark.parametrize("n,expected", [
    (1, "1st"), (2, "2nd"), (3, "3rd"), (4, "4th"), (11, "11th"), (12, "12th"), (21, "21st"),
])
def test_ordinal(n, expected):
    assert ordinal(n) == expected


def test_century_bounds():
    """Test an AD century covers its hundred years and a BCE century is reflected across year 0."""
    ad = ProvenanceDate(1800, Precision.CENTURY)
    assert ad.earliest() == (1800, 1, 1)
    assert ad.latest() == (1899, 12, 31)
    bce = ProvenanceDate(-401, Precision.CENTURY)
    assert bce.earliest() == (-500, 1, 1)
    assert bce.latest() == (-401, 12, 31)


def test_month_bounds_respect_leap_years():
    assert ProvenanceDate(2000, Precision.MONTH, month=2).latest() == (2000, 2, 29)
    assert ProvenanceDate(1900, Precision.MONTH, month=2).latest() == (1900, 2, 28)


def test_equality_respects_precision():
    """Test a century is not equal to the first year of the century."""
    assert ProvenanceDate(1800, Precision.CENTURY) != ProvenanceDate(1800, Precision.YEAR)
    assert ProvenanceDate(1920, Precision.DECADE) == ProvenanceDate(1920, Precision.DECADE, certainty=False)


def test_ordering():
    dates = [
        ProvenanceDate(1932, Precision.MONTH, month=6),
        ProvenanceDate(1800, Precision.CENTURY),
        ProvenanceDate(1920, Precision.DECADE),
        ProvenanceDate(-401),
    ]
    assert [str(d) for d in sorted(dates)] == ["401 BCE", "19th century", "1920s", "June 1932"]


def test_precedes_and_overlaps():
    decade = ProvenanceDate(1920, Precision.DECADE)
    assert ProvenanceDate(1919).precedes(decade)
    assert decade.overlaps(ProvenanceDate(1925))
    assert not decade.precedes(ProvenanceDate(1925))


@pytest.mark.parametrize("date,modifier,first,last", [
    (ProvenanceDate(1920, Precision.DECADE), "early", "1920", "1923"),
    (ProvenanceDate(1920, Precision.DECADE), "late", "1926", "1929"),
    (ProvenanceDate(1800, Precision.CENTURY), "mid", "1833", "1866"),
    (ProvenanceDate(1932), "mid", "May 1932", "August 1932"),
    (ProvenanceDate(1932, Precision.MONTH, month=6), "late", "June 21, 1932", "June 30, 1932"),
])
def test_narrow(date, modifier, first, last):
    """Test early/mid/late narrow a date to the next finer precision."""
    low, high = date.narrow(modifier)
    assert (str(low), str(high)) == (first, last)


def test_narrow_keeps_certainty():
    low, high = ProvenanceDate(1920, Precision.DECADE, certainty=False).narrow("early")
    assert not low.certainty
    assert not high.certainty


def test_month_precision_requires_month():
    with pytest.raises(ValueError):
        ProvenanceDate(1932, Precision.MONTH)
    with pytest.raises(ValueError):
        ProvenanceDate(1932, Precision.DAY, month=6)


@pytest.mark.parametrize("date,iso", [
    (ProvenanceDate(1920, Precision.DECADE), "1920"),
    (ProvenanceDate(-401, Precision.CENTURY), "-0401"),
    (ProvenanceDate(850), "0850"),
    (ProvenanceDate(1932, Precision.MONTH, month=6), "1932-06"),
    (ProvenanceDate(1932, Precision.DAY, month=6, day=9), "1932-06-09"),
])
def test_to_iso(date, iso):
    assert date.to_iso() == iso


def test_from_iso_infers_precision():
    assert ProvenanceDate.from_iso("1932").precision == Precision.YEAR
    assert ProvenanceDate.from_iso("1932-06").precision == Precision.MONTH
    day = ProvenanceDate.from_iso("1932-06-09")
    assert (day.value, day.month, day.day, day.precision) == (1932, 6, 9, Precision.DAY)


def test_from_iso_with_precision_and_certainty():
    date = ProvenanceDate.from_iso("-0401", "CENTURY", certainty=False)
    assert date.value == -401
    assert date.precision == Precision.CENTURY
    assert date.certainty is False


@pytest.mark.parametrize("text,precision", [
    ("19x0", None),
    ("", None),
    ("1920", "FORTNIGHT"),
    ("1920-13", None),
    ("1920-00", None),
    ("1920-02-40", None),
    ("1921-02-29", None),
])
def test_from_iso_rejects_malformed_values(text, precision):
    with pytest.raises(ValueError):
        ProvenanceDate.from_iso(text, precision)


@pytest.mark.parametrize("month,day", [(0, None), (13, None), (2, 30), (6, 31), (6, 0)])
def test_calendar_fields_out_of_range(month, day):
    precision = Precision.DAY if day is not None else Precision.MONTH
    with pytest.raises(ValueError):
        ProvenanceDate(1920, precision, month=month, day=day)
