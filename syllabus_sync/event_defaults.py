"""
Default filling for canonical event records.
Only data already on the record is used, and nothing here raises.
"""

from dataclasses import replace
from typing import Any, NamedTuple, Optional

from syllabus_sync.date_utils import has_time_of_day, is_valid_iso_date
from syllabus_sync.event_models import EventItem, EventKind, ValidationConfig


class DefaultsResult(NamedTuple):
    event: EventItem
    defaults_applied: bool


def clamp_confidence(value: Any) -> Any:
    """Clamp a numeric confidence into [0.0, 1.0]; other values pass through."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return value
    return max(0.0, min(1.0, value))


def trim(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


def _infer_all_day(start: Any) -> Optional[bool]:
    if not isinstance(start, str) or not is_valid_iso_date(start):
        return None
    return not has_time_of_day(start)


def apply_defaults(event: EventItem, config: Optional[ValidationConfig] = None) -> DefaultsResult:
    """
    Fill unset optional fields of an event.

    Rules, in order:
        1. all_day unset -> True when the start has no time of day
        2. blank title -> the kind's label ("Quiz", "Lab", ...)
        3. strip title, location, notes and course code
        4. clamp confidence into [0, 1]

    Args:
        event: Record converted from a candidate
        config: Run configuration (the rules above do not depend on it)

    Returns:
        DefaultsResult with the new record and whether any default fired.
        Trimming alone does not count as a default.
    """
    changes = {}
    defaults_applied = False

    if event.all_day is None:
        inferred = _infer_all_day(event.start)
        if inferred is not None:
            changes["all_day"] = inferred
            defaults_applied = True

    title = event.title
    if (title is None or (isinstance(title, str) and not title.strip())) and isinstance(event.type, EventKind):
        title = event.type.label
        defaults_applied = True
    changes["title"] = trim(title)

    changes["location"] = trim(event.location)
    changes["notes"] = trim(event.notes)
    changes["course_code"] = trim(event.course_code)

    confidence = clamp_confidence(event.confidence)
    if confidence != event.confidence:
        defaults_applied = True
    changes["confidence"] = confidence

    return DefaultsResult(replace(event, **changes), defaults_applied)
