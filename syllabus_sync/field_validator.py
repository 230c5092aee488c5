"""
Field-level schema checks for canonical event records.

All checks run and violations accumulate, so a caller sees every problem
with a record at once. Nothing here raises or logs.
"""

import re
from dataclasses import dataclass
from typing import Any, List, Mapping, NamedTuple, Optional

from syllabus_sync.date_utils import is_valid_iso_date
from syllabus_sync.event_models import EventItem, EventKind

ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")
COURSE_CODE_PATTERN = re.compile(r"^[A-Z]{2,4}[0-9]{2,4}[A-Z]?$", re.IGNORECASE)

MAX_TITLE_LENGTH = 200
MAX_LOCATION_LENGTH = 100
MAX_NOTES_LENGTH = 1000
MAX_REMINDER_MINUTES = 43200  # 30 days

VALID_EVENT_KINDS = ", ".join(kind.value for kind in EventKind)


@dataclass(frozen=True)
class RuleProfile:
    """
    Named set of pattern rules for the loosely-specified fields.

    A pattern of None means the rule always passes.
    """
    name: str
    course_id_pattern: Optional[re.Pattern] = None
    course_code_pattern: Optional[re.Pattern] = None


# Course ids and codes arrive messy from syllabi ("CS 101", "engg*3990").
# Whether they should ever be rejected is still an open product question,
# so the default profile accepts any non-empty course id and any course code.
LENIENT = RuleProfile(name="lenient")
STRICT = RuleProfile(
    name="strict",
    course_id_pattern=ID_PATTERN,
    course_code_pattern=COURSE_CODE_PATTERN,
)


class FieldValidation(NamedTuple):
    valid: bool
    errors: List[str]


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


def _check_optional_text(record: Mapping[str, Any], key: str, max_length: int, errors: List[str]):
    value = record.get(key)
    if value is None:
        return
    if not isinstance(value, str):
        errors.append(f"{key} must be a string")
    elif len(value) > max_length:
        errors.append(f"{key} must not exceed {max_length} characters")


def _check_date(record: Mapping[str, Any], key: str, errors: List[str]):
    value = record.get(key)
    if not isinstance(value, str):
        errors.append(f"{key} must be a string")
    elif not is_valid_iso_date(value):
        errors.append(f"{key} must be a valid ISO 8601 date-time string")


def validate_event_fields(event: Any, profile: RuleProfile = LENIENT) -> FieldValidation:
    """
    Check one record against the event schema.

    Args:
        event: EventItem or a mapping in the lowerCamelCase wire shape.
            Any other value is reported as not being an object.
        profile: Rule profile for course id / course code patterns

    Returns:
        FieldValidation with every violation found, in field order
    """
    if isinstance(event, EventItem):
        record: Mapping[str, Any] = event.to_dict()
    elif isinstance(event, Mapping):
        record = event
    else:
        return FieldValidation(False, ["Event must be an object"])

    errors: List[str] = []

    # Required fields
    event_id = record.get("id")
    if _is_blank(event_id):
        errors.append("id is required and must be a non-empty string")
    elif not ID_PATTERN.fullmatch(event_id):
        errors.append(f"id must match pattern {ID_PATTERN.pattern}")

    course_id = record.get("courseId")
    if _is_blank(course_id):
        errors.append("courseId is required and must be a non-empty string")
    elif profile.course_id_pattern is not None and not profile.course_id_pattern.fullmatch(course_id):
        errors.append(f"courseId must match pattern {profile.course_id_pattern.pattern}")

    kind = record.get("type")
    if kind is None:
        errors.append(f"type is required and must be one of: {VALID_EVENT_KINDS}")
    elif not isinstance(EventKind.coerce(kind), EventKind):
        errors.append(f"type '{kind}' must be one of: {VALID_EVENT_KINDS}")

    title = record.get("title")
    if _is_blank(title):
        errors.append("title is required and must be a non-empty string")
    elif len(title) > MAX_TITLE_LENGTH:
        errors.append(f"title must not exceed {MAX_TITLE_LENGTH} characters")

    if record.get("start") is None:
        errors.append("start is required and must be a string")
    else:
        _check_date(record, "start", errors)

    # Optional fields, checked only when present
    course_code = record.get("courseCode")
    if course_code is not None:
        if not isinstance(course_code, str):
            errors.append("courseCode must be a string")
        elif (
            profile.course_code_pattern is not None
            and course_code.strip()
            and not profile.course_code_pattern.fullmatch(course_code.strip())
        ):
            errors.append(f"courseCode must match pattern {profile.course_code_pattern.pattern}")

    if record.get("end") is not None:
        _check_date(record, "end", errors)

    all_day = record.get("allDay")
    if all_day is not None and not isinstance(all_day, bool):
        errors.append("allDay must be a boolean")

    _check_optional_text(record, "location", MAX_LOCATION_LENGTH, errors)
    _check_optional_text(record, "notes", MAX_NOTES_LENGTH, errors)

    reminder = record.get("reminderMinutes")
    if reminder is not None:
        if not _is_number(reminder):
            errors.append("reminderMinutes must be a number")
        elif not 0 <= reminder <= MAX_REMINDER_MINUTES:
            errors.append(f"reminderMinutes must be between 0 and {MAX_REMINDER_MINUTES} (30 days)")

    confidence = record.get("confidence")
    if confidence is not None:
        if not _is_number(confidence):
            errors.append("confidence must be a number")
        elif not 0.0 <= confidence <= 1.0:
            errors.append("confidence must be between 0 and 1")

    return FieldValidation(not errors, errors)


def profile_for(strict: bool) -> RuleProfile:
    return STRICT if strict else LENIENT
