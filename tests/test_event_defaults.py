"""
Tests for the defaulting stage.
"""

import pytest

from syllabus_sync.event_defaults import apply_defaults, clamp_confidence
from syllabus_sync.event_models import EventItem, EventKind, ValidationConfig


def make_item(**overrides) -> EventItem:
    values = dict(
        id="e1",
        course_id="c1",
        type=EventKind.QUIZ,
        title="Quiz 1",
        start="2025-09-20T10:00:00.000Z",
        all_day=False,
    )
    values.update(overrides)
    return EventItem(**values)


class TestTitleSynthesis:

    @pytest.mark.parametrize("title", ["", "   ", None])
    def test_blank_title_uses_kind_label(self, title):
        result = apply_defaults(make_item(title=title), ValidationConfig())
        assert result.event.title == "Quiz"
        assert result.defaults_applied is True

    @pytest.mark.parametrize(
        "kind, label",
        [
            (EventKind.ASSIGNMENT, "Assignment"),
            (EventKind.MIDTERM, "Midterm"),
            (EventKind.FINAL, "Final"),
            (EventKind.LAB, "Lab"),
            (EventKind.LECTURE, "Lecture"),
            (EventKind.OTHER, "Other"),
        ],
    )
    def test_every_kind_has_a_label(self, kind, label):
        assert apply_defaults(make_item(type=kind, title="")).event.title == label

    def test_unknown_kind_leaves_title_for_the_validator(self):
        result = apply_defaults(make_item(type="INVALID_TYPE", title="  "))
        assert result.event.title == ""
        assert result.defaults_applied is False


class TestAllDayInference:

    def test_midnight_start_is_all_day(self):
        result = apply_defaults(make_item(all_day=None, start="2025-09-20T00:00:00.000Z"))
        assert result.event.all_day is True
        assert result.defaults_applied is True

    def test_date_only_start_is_all_day(self):
        assert apply_defaults(make_item(all_day=None, start="2025-09-20")).event.all_day is True

    def test_timed_start_is_not_all_day(self):
        result = apply_defaults(make_item(all_day=None, start="2025-09-20T10:00:00.000Z"))
        assert result.event.all_day is False

    def test_explicit_flag_is_kept(self):
        result = apply_defaults(make_item(all_day=False, start="2025-09-20T00:00:00.000Z"))
        assert result.event.all_day is False
        assert result.defaults_applied is False

    def test_unparseable_start_does_not_raise(self):
        result = apply_defaults(make_item(all_day=None, start="garbage"))
        assert result.event.all_day is None


class TestTrimAndClamp:

    def test_strings_are_trimmed_without_counting_as_defaults(self):
        result = apply_defaults(make_item(
            title="  Quiz 1  ",
            location="  Room 204  ",
            notes="  Bring a calculator  ",
            course_code="  CS 101  ",
        ))
        assert result.event.title == "Quiz 1"
        assert result.event.location == "Room 204"
        assert result.event.notes == "Bring a calculator"
        assert result.event.course_code == "CS 101"
        assert result.defaults_applied is False

    @pytest.mark.parametrize("raw, clamped", [(1.5, 1.0), (-0.2, 0.0), (0.5, 0.5)])
    def test_confidence_is_clamped(self, raw, clamped):
        result = apply_defaults(make_item(confidence=raw))
        assert result.event.confidence == clamped
        assert result.defaults_applied is (raw != clamped)

    def test_clamp_confidence_passes_non_numbers_through(self):
        assert clamp_confidence(None) is None
        assert clamp_confidence("high") == "high"
        assert clamp_confidence(True) is True

    def test_input_record_is_not_changed(self):
        item = make_item(title="", confidence=2.0)
        result = apply_defaults(item)
        assert result.event is not item
        assert item.title == ""
        assert item.confidence == 2.0
