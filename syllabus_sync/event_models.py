"""
Event data models for syllabus event validation.
Defines EventCandidate (from the extractor), EventItem (canonical DTO),
and the config/result records used by the validation pipeline.
"""

from dataclasses import dataclass, field, fields
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from syllabus_sync.date_utils import as_datetime
from syllabus_sync.term_window import create_term_window


class EventKind(str, Enum):
    """Closed set of event kinds an item can carry."""
    ASSIGNMENT = "ASSIGNMENT"
    QUIZ = "QUIZ"
    MIDTERM = "MIDTERM"
    FINAL = "FINAL"
    LAB = "LAB"
    LECTURE = "LECTURE"
    OTHER = "OTHER"

    @property
    def label(self) -> str:
        """Title-cased label used when an item has no title."""
        return _KIND_LABELS[self]

    @classmethod
    def coerce(cls, value: Any) -> Union["EventKind", Any]:
        """
        Return the member whose value equals `value`.
        Anything else is handed back untouched so the validator can report it.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str) and value in cls._value2member_map_:
            return cls(value)
        return value


_KIND_LABELS: Dict[EventKind, str] = {
    EventKind.ASSIGNMENT: "Assignment",
    EventKind.QUIZ: "Quiz",
    EventKind.MIDTERM: "Midterm",
    EventKind.FINAL: "Final",
    EventKind.LAB: "Lab",
    EventKind.LECTURE: "Lecture",
    EventKind.OTHER: "Other",
}

# Wire (lowerCamelCase) name for each EventItem attribute
_WIRE_NAMES: Dict[str, str] = {
    "id": "id",
    "course_id": "courseId",
    "course_code": "courseCode",
    "type": "type",
    "title": "title",
    "start": "start",
    "end": "end",
    "all_day": "allDay",
    "location": "location",
    "notes": "notes",
    "reminder_minutes": "reminderMinutes",
    "confidence": "confidence",
}


@dataclass(frozen=True)
class EventCandidate:
    """
    Raw event produced by the upstream extractor.
    Dates are concrete datetimes here; nothing else is guaranteed.
    """
    id: str
    kind: Union[EventKind, str]
    title: str
    start: Union[datetime, date]
    course_id: Optional[str] = None
    course_code: Optional[str] = None
    end: Optional[Union[datetime, date]] = None
    all_day: Optional[bool] = None
    location: Optional[str] = None
    notes: Optional[str] = None
    reminder_minutes: Optional[int] = None
    confidence: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "EventCandidate":
        """
        Build a candidate from the lowerCamelCase wire shape.
        ISO strings for start/end are parsed; a bad date raises ValueError.
        """
        end = data.get("end")
        return cls(
            id=data.get("id"),
            kind=EventKind.coerce(data.get("type")),
            title=data.get("title"),
            start=as_datetime(data.get("start")),
            course_id=data.get("courseId"),
            course_code=data.get("courseCode"),
            end=as_datetime(end) if end is not None else None,
            all_day=data.get("allDay"),
            location=data.get("location"),
            notes=data.get("notes"),
            reminder_minutes=data.get("reminderMinutes"),
            confidence=data.get("confidence"),
        )


@dataclass(frozen=True)
class EventItem:
    """
    Canonical event record (DTO).
    start/end are ISO-8601 strings; `type` holds the EventKind.
    """
    id: str
    course_id: str
    type: Union[EventKind, str]
    title: str
    start: str
    course_code: Optional[str] = None
    end: Optional[str] = None
    all_day: Optional[bool] = None
    location: Optional[str] = None
    notes: Optional[str] = None
    reminder_minutes: Optional[int] = None
    confidence: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with wire field names, leaving out unset optional fields."""
        data: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            if isinstance(value, EventKind):
                value = value.value
            data[_WIRE_NAMES[f.name]] = value
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "EventItem":
        values = {name: data.get(wire) for name, wire in _WIRE_NAMES.items()}
        values["type"] = EventKind.coerce(values["type"])
        return cls(**values)


@dataclass(frozen=True)
class ValidationConfig:
    """
    Settings for one validation run.
    Naive term bounds are read as UTC.
    """
    term_start: Optional[datetime] = None
    term_end: Optional[datetime] = None
    default_course_id: Optional[str] = None
    default_course_code: Optional[str] = None
    strict: bool = False
    detect_course_code: bool = False

    @property
    def has_term_window(self) -> bool:
        return self.term_start is not None or self.term_end is not None

    @classmethod
    def for_term(cls, year: int, semester: str, **kwargs) -> "ValidationConfig":
        """Config bounded by the canonical window for a semester."""
        window = create_term_window(year, semester)
        return cls(term_start=window.term_start, term_end=window.term_end, **kwargs)


@dataclass(frozen=True)
class ValidationStats:
    total_events: int = 0
    valid_events: int = 0
    invalid_events: int = 0
    clamped_events: int = 0
    defaults_applied: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "totalEvents": self.total_events,
            "validEvents": self.valid_events,
            "invalidEvents": self.invalid_events,
            "clampedEvents": self.clamped_events,
            "defaultsApplied": self.defaults_applied,
        }


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a batch run. Built once per call and never changed."""
    valid: bool
    events: Tuple[EventItem, ...] = ()
    errors: Tuple[str, ...] = ()
    warnings: Tuple[str, ...] = ()
    stats: ValidationStats = field(default_factory=ValidationStats)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "valid": self.valid,
            "events": [event.to_dict() for event in self.events],
            "errors": list(self.errors),
            "warnings": list(self.warnings),
            "stats": self.stats.to_dict(),
        }


@dataclass(frozen=True)
class SingleEventValidation:
    """Outcome of validating one DTO outside a batch."""
    valid: bool
    errors: Tuple[str, ...] = ()
    event: Optional[EventItem] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"valid": self.valid, "errors": list(self.errors)}
        if self.event is not None:
            data["event"] = self.event.to_dict()
        return data

