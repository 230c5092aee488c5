"""
Event pipeline for turning extractor candidates into canonical EventItems.
Each candidate goes through conversion, defaults, term clamping and schema
validation on its own; one bad candidate never stops the batch.
"""

from dataclasses import replace
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Union

from syllabus_sync.course_code import detect_course_code
from syllabus_sync.date_utils import format_iso
from syllabus_sync.event_defaults import apply_defaults, clamp_confidence, trim
from syllabus_sync.event_models import (
    EventCandidate,
    EventItem,
    EventKind,
    SingleEventValidation,
    ValidationConfig,
    ValidationResult,
    ValidationStats,
)
from syllabus_sync.field_validator import profile_for, validate_event_fields
from syllabus_sync.logging_helper import Log
from syllabus_sync.term_clamper import ClampOutcome, clamp_to_term

UNKNOWN_COURSE_ID = "unknown"


class EventValidationError(ValueError):
    """Raised by create_event_item when the built item breaks the schema."""

    def __init__(self, errors: Sequence[str]):
        self.errors = list(errors)
        super().__init__("EventItem validation failed: " + "; ".join(self.errors))


def candidate_to_item(
    candidate: Union[EventCandidate, Mapping[str, Any]],
    config: Optional[ValidationConfig] = None,
) -> EventItem:
    """
    Map a candidate onto the EventItem shape.

    Course id/code fall back to the config defaults when the candidate has
    none; the course id ends up as "unknown" if neither supplies one.

    Raises:
        TypeError: If the candidate is neither an EventCandidate nor a mapping
        ValueError: If a date on a mapping candidate cannot be parsed
    """
    config = config or ValidationConfig()
    if isinstance(candidate, Mapping):
        candidate = EventCandidate.from_dict(candidate)
    elif not isinstance(candidate, EventCandidate):
        raise TypeError(
            f"candidate must be an EventCandidate or a mapping, got {type(candidate).__name__}"
        )

    course_code = candidate.course_code or config.default_course_code
    if course_code is None and config.detect_course_code:
        course_code = detect_course_code(candidate.title) or detect_course_code(candidate.notes)

    return EventItem(
        id=candidate.id,
        course_id=candidate.course_id or config.default_course_id or UNKNOWN_COURSE_ID,
        course_code=course_code,
        type=EventKind.coerce(candidate.kind),
        title=candidate.title,
        start=format_iso(candidate.start),
        end=format_iso(candidate.end) if candidate.end is not None else None,
        all_day=candidate.all_day,
        location=candidate.location,
        notes=candidate.notes,
        reminder_minutes=candidate.reminder_minutes,
        confidence=candidate.confidence,
    )


def _clamp_warning(title: str, outcomes) -> str:
    if ClampOutcome.WINDOW_BOUND in outcomes and ClampOutcome.RANGE_REPAIR in outcomes:
        return f'Event "{title}" had dates clamped to term window and invalid date range corrected'
    if ClampOutcome.WINDOW_BOUND in outcomes:
        return f'Event "{title}" had dates clamped to term window'
    return f'Event "{title}" had invalid date range corrected'


def validate_events(
    candidates: Optional[Sequence[Union[EventCandidate, Mapping[str, Any]]]],
    config: Optional[ValidationConfig] = None,
) -> ValidationResult:
    """
    Run every candidate through the pipeline and collect the outcome.

    Per candidate: convert -> apply defaults -> clamp to term -> validate.
    Schema violations become "Event N: ..." errors (N is 1-based); any other
    exception raised for a candidate becomes a single "Event N: ..." error.

    Args:
        candidates: Extractor output, EventCandidate values or wire mappings
        config: Run configuration (defaults to an empty config)

    Returns:
        ValidationResult; `valid` is False if any candidate failed
    """
    config = config or ValidationConfig()
    candidates = list(candidates) if candidates is not None else []
    profile = profile_for(config.strict)

    if not candidates:
        return ValidationResult(valid=True)

    Log.section("Event Validation")
    Log.info(f"Validating {len(candidates)} candidate(s) with '{profile.name}' rules")
    Log.kv({
        "term_start": format_iso(config.term_start) if config.term_start else None,
        "term_end": format_iso(config.term_end) if config.term_end else None,
        "default_course_id": config.default_course_id,
    })

    events: List[EventItem] = []
    errors: List[str] = []
    warnings: List[str] = []
    invalid_events = 0
    clamped_events = 0
    defaults_applied = 0

    for index, candidate in enumerate(candidates, start=1):
        try:
            defaulted = apply_defaults(candidate_to_item(candidate, config), config)
            if defaulted.defaults_applied:
                defaults_applied += 1

            clamped = clamp_to_term(defaulted.event, config)
            item = clamped.event
            if clamped.was_clamped:
                clamped_events += 1
                warnings.append(_clamp_warning(item.title, clamped.outcomes))

            validation = validate_event_fields(item, profile)
        except Exception as e:
            message = str(e) or type(e).__name__
            invalid_events += 1
            errors.append(f"Event {index}: {message}")
            Log.error(f"Event {index}: conversion failed: {message}")
            continue

        if clamped.was_clamped:
            Log.info(f"Event {index}: dates adjusted ({', '.join(sorted(o.value for o in clamped.outcomes))})")

        if validation.valid:
            events.append(item)
        else:
            Log.warn(f"Event {index}: {len(validation.errors)} schema violation(s)")
            invalid_events += 1
            errors.extend(f"Event {index}: {error}" for error in validation.errors)

    stats = ValidationStats(
        total_events=len(candidates),
        valid_events=len(events),
        invalid_events=invalid_events,
        clamped_events=clamped_events,
        defaults_applied=defaults_applied,
    )
    Log.kv({
        "stage": "validate",
        "result": "success" if invalid_events == 0 else "partial",
        **stats.to_dict(),
    })

    return ValidationResult(
        valid=invalid_events == 0,
        events=tuple(events),
        errors=tuple(errors),
        warnings=tuple(warnings),
        stats=stats,
    )


def validate_single_event(event: Any, config: Optional[ValidationConfig] = None) -> SingleEventValidation:
    """
    Check one already-built record against the schema.
    No defaults or clamping are applied and no stats are kept.
    """
    config = config or ValidationConfig()
    validation = validate_event_fields(event, profile_for(config.strict))
    if not validation.valid:
        return SingleEventValidation(valid=False, errors=tuple(validation.errors))

    item = event if isinstance(event, EventItem) else EventItem.from_dict(event)
    return SingleEventValidation(valid=True, event=item)


def _normalize_item(event: Union[EventItem, Mapping[str, Any]]) -> EventItem:
    if isinstance(event, Mapping):
        event = EventItem.from_dict(event)
    return replace(
        event,
        start=format_iso(event.start),
        end=format_iso(event.end) if event.end is not None else None,
        title=trim(event.title),
        location=trim(event.location),
        notes=trim(event.notes),
        course_code=trim(event.course_code),
        confidence=clamp_confidence(event.confidence),
    )


def normalize_event_data(events: Iterable[Union[EventItem, Mapping[str, Any]]]) -> List[EventItem]:
    """
    Bring produced events into canonical form.

    Dates are re-serialized as UTC millisecond instants, strings are stripped
    and confidence is clamped. Running it on its own output changes nothing.
    """
    return [_normalize_item(event) for event in events]


def create_event_item(**fields: Any) -> EventItem:
    """
    Build an EventItem with all_day=False and confidence=1.0 unless given.

    start/end may be datetimes; they are formatted as ISO instants.

    Raises:
        EventValidationError: If the resulting item breaks the schema
    """
    values = {"all_day": False, "confidence": 1.0}
    values.update(fields)
    values["type"] = EventKind.coerce(values.get("type"))
    for key in ("start", "end"):
        if values.get(key) is not None and not isinstance(values[key], str):
            values[key] = format_iso(values[key])

    item = EventItem(**values)
    validation = validate_event_fields(item)
    if not validation.valid:
        raise EventValidationError(validation.errors)
    return item
