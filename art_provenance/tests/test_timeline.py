import csv
import io
import json

import pytest

from art_provenance.errors import DateError
from art_provenance.period_output import PeriodOutput
from art_provenance.timeline import Timeline


def _names(timeline):
    return [p.party.name for p in timeline]


def _assert_links_consistent(timeline):
    periods = list(timeline)
    assert timeline.previous_of(timeline.earliest) is None
    assert timeline.next_of(timeline.latest) is None
    for before, after in zip(periods, periods[1:]):
        assert timeline.next_of(before) is after
        assert timeline.previous_of(after) is before


class TestInsertion:
    """Tests for the Timeline insertion primitives."""

    def test_empty(self):
        timeline = Timeline()
        assert len(timeline) == 0
        assert timeline.earliest is None
        assert timeline.latest is None
        assert list(timeline) == []

    def test_insert_appends(self, make_period):
        timeline = Timeline()
        for name in ("A", "B", "C"):
            timeline.insert(make_period(name))
        assert _names(timeline) == ["A", "B", "C"]
        assert timeline.earliest.party.name == "A"
        assert timeline.latest.party.name == "C"
        _assert_links_consistent(timeline)

    def test_insert_earliest(self, make_period):
        timeline = Timeline()
        timeline.insert_earliest(make_period("B"))
        timeline.insert_earliest(make_period("A"))
        assert _names(timeline) == ["A", "B"]
        _assert_links_consistent(timeline)

    def test_insert_before_and_after(self, make_period):
        timeline = Timeline()
        a, c = make_period("A"), make_period("C")
        timeline.insert(a)
        timeline.insert(c)
        timeline.insert_before(c, make_period("B"))
        timeline.insert_after(c, make_period("D"))
        timeline.insert_before(a, make_period("Z"))
        assert _names(timeline) == ["Z", "A", "B", "C", "D"]
        assert timeline.earliest.party.name == "Z"
        assert timeline.latest.party.name == "D"
        _assert_links_consistent(timeline)

    def test_iteration_is_repeatable(self, make_period):
        timeline = Timeline()
        timeline.insert(make_period("A"))
        timeline.insert(make_period("B"))
        assert _names(timeline) == _names(timeline)

    def test_indexing(self, make_period):
        timeline = Timeline()
        for name in ("A", "B", "C"):
            timeline.insert(make_period(name))
        assert timeline[0].party.name == "A"
        assert timeline[2].party.name == "C"
        assert timeline[-1].party.name == "C"
        with pytest.raises(IndexError):
            timeline[3]

    def test_period_cannot_be_inserted_twice(self, make_period):
        timeline = Timeline()
        period = make_period("A")
        timeline.insert(period)
        with pytest.raises(ValueError):
            timeline.insert(period)
        with pytest.raises(ValueError):
            Timeline().insert(period)

    def test_anchor_must_belong_to_timeline(self, make_period):
        with pytest.raises(ValueError):
            Timeline().insert_after(make_period("A"), make_period("B"))


class TestDirectTransfer:
    """Tests for direct-transfer insertion."""

    def test_insert_direct_marks_previous(self, make_period):
        timeline = Timeline()
        a, b = make_period("A"), make_period("B")
        timeline.insert(a)
        timeline.insert_direct(b)
        assert a.direct_transfer is True
        assert b.direct_transfer is False

    def test_insert_direct_into_empty_timeline(self, make_period):
        timeline = Timeline()
        timeline.insert_direct(make_period("A"))
        assert len(timeline) == 1
        assert timeline.earliest.direct_transfer is False

    def test_insert_direct_conflict_leaves_timeline_unchanged(self, make_period):
        """Test a period that ends before its predecessor begins is rejected."""
        timeline = Timeline()
        a = make_period("A", begin=1950)
        timeline.insert(a)
        with pytest.raises(DateError):
            timeline.insert_direct(make_period("B", begin=1890, end=1900))
        assert len(timeline) == 1
        assert a.direct_transfer is False

    def test_insert_directly_after_marks_anchor(self, make_period):
        timeline = Timeline()
        a, c = make_period("A"), make_period("C")
        timeline.insert(a)
        timeline.insert(c)
        b = timeline.insert_directly_after(a, make_period("B"))
        assert _names(timeline) == ["A", "B", "C"]
        assert a.direct_transfer is True
        assert b.direct_transfer is False
        _assert_links_consistent(timeline)


class TestProvenance:
    """Tests for rendering a Timeline back to prose."""

    def test_terminators(self, make_period):
        timeline = Timeline()
        timeline.insert(make_period("Smith"))
        timeline.insert_direct(make_period("Jones"))
        timeline.insert(make_period("Brown"))
        assert timeline.provenance() == "Smith; Jones. Brown."

    def test_footnotes_are_renumbered_in_order_of_appearance(self, make_period):
        """Test periods citing original notes 3, 1, 1, 2 render [1] [2] [2] [3]."""
        notes = {1: "Note one.", 2: "Note two.", 3: "Note three."}
        timeline = Timeline()
        for name, ref in (("A", 3), ("B", 1), ("C", 1), ("D", 2)):
            timeline.insert(make_period(name, notes=[notes[ref]]))
        assert timeline.provenance() == (
            "A [1]. B [2]. C [2]. D [3]. "
            "NOTES: 1. Note three. 2. Note one. 3. Note two."
        )

    def test_distinct_footnotes_with_the_same_text(self, make_period):
        """Test notes cited by different source numbers keep separate numbers."""
        timeline = Timeline()
        timeline.insert(make_period("A", notes=["See letter."], note_refs=[1]))
        timeline.insert(make_period("B", notes=["See letter."], note_refs=[2]))
        timeline.insert(make_period("C", notes=["See letter."], note_refs=[1]))
        assert timeline.provenance() == (
            "A [1]. B [2]. C [1]. NOTES: 1. See letter. 2. See letter."
        )

    def test_unresolved_reference_is_not_merged_with_note_text(self, make_period):
        timeline = Timeline()
        timeline.insert(make_period("A", notes=["5"], note_refs=[5]))
        timeline.insert(make_period("B", notes=["5"], note_refs=[3]))
        assert timeline.provenance() == "A [1]. B [2]. NOTES: 1. 5 2. 5"

    def test_custom_footnote_divider(self, make_period):
        timeline = Timeline(footnote_divider="Notes --")
        timeline.insert(make_period("A", notes=["Only."]))
        assert timeline.provenance() == "A [1]. Notes -- 1. Only."

    def test_empty(self):
        assert Timeline().provenance() == ""


class TestExport:
    """Tests for CSV, dict and JSON export."""

    def test_to_csv(self, make_period):
        timeline = Timeline()
        timeline.insert(make_period("Smith", begin=1920, notes=["First.", "Second."]))
        timeline.insert(make_period("Jones"))
        rows = list(csv.reader(io.StringIO(timeline.to_csv())))
        assert rows[0] == PeriodOutput.field_names()
        assert len(rows) == 3
        record = dict(zip(rows[0], rows[1]))
        assert record["party"] == "Smith"
        assert record["botb"] == "1920"
        assert record["botb_precision"] == "YEAR"
        assert record["footnote"] == "First. | Second."

    def test_to_dict_and_json(self, make_period):
        timeline = Timeline()
        timeline.insert(make_period("Smith", begin=1920))
        timeline.insert_direct(make_period("Jones"))
        data = timeline.to_dict()
        assert [p["party"] for p in data["period"]] == ["Smith", "Jones"]
        assert [p["direct_transfer"] for p in data["period"]] == [True, False]
        assert json.loads(timeline.to_json()) == data
