"""
Term window clamping and date range repair.

clamp_to_term() does two jobs:
    - window-bound: pull start/end into [term_start, term_end] when a window
      is configured
    - range-repair: make sure end is strictly after start, always, so bad
      ranges from the extractor get fixed even without a window
"""

from dataclasses import replace
from datetime import datetime, timedelta
from enum import Enum
from typing import FrozenSet, NamedTuple, Optional

from syllabus_sync.date_utils import as_datetime, format_iso, to_utc
from syllabus_sync.event_models import EventItem, ValidationConfig

REPAIRED_DURATION = timedelta(hours=1)


class ClampOutcome(str, Enum):
    WINDOW_BOUND = "window-bound"
    RANGE_REPAIR = "range-repair"


class ClampResult(NamedTuple):
    event: EventItem
    outcomes: FrozenSet[ClampOutcome] = frozenset()

    @property
    def was_clamped(self) -> bool:
        return bool(self.outcomes)


def _ceil_ms(value: datetime) -> datetime:
    truncated = value.replace(microsecond=value.microsecond // 1000 * 1000)
    return truncated if truncated == value else truncated + timedelta(milliseconds=1)


def _floor_ms(value: datetime) -> datetime:
    return value.replace(microsecond=value.microsecond // 1000 * 1000)


def _bound(value: datetime, term_start: Optional[datetime], term_end: Optional[datetime]) -> Optional[datetime]:
    """Return the bound the value must move to, or None when it is inside."""
    if term_start is not None and value < term_start:
        return term_start
    if term_end is not None and value > term_end:
        return term_end
    return None


def clamp_to_term(event: EventItem, config: Optional[ValidationConfig] = None) -> ClampResult:
    """
    Bound an event's dates to the term window and repair its range.

    Args:
        event: Record with ISO start (and optional end)
        config: Supplies term_start / term_end; either may be missing

    Returns:
        ClampResult with the new record and the outcomes that fired

    Raises:
        ValueError: If start or end is not a parseable ISO date
    """
    config = config or ValidationConfig()
    outcomes = set()
    start_value = event.start
    end_value = event.end

    if config.has_term_window:
        # Output has millisecond precision, so bounds snap inward to whole milliseconds
        term_start = _ceil_ms(to_utc(config.term_start)) if config.term_start is not None else None
        term_end = _floor_ms(to_utc(config.term_end)) if config.term_end is not None else None

        new_start = _bound(as_datetime(start_value), term_start, term_end)
        if new_start is not None:
            start_value = format_iso(new_start)
            outcomes.add(ClampOutcome.WINDOW_BOUND)

        if end_value is not None:
            new_end = _bound(as_datetime(end_value), term_start, term_end)
            if new_end is not None:
                end_value = format_iso(new_end)
                outcomes.add(ClampOutcome.WINDOW_BOUND)

    if end_value is not None:
        start_at = as_datetime(start_value)
        if as_datetime(end_value) <= start_at:
            end_value = None if event.all_day else format_iso(start_at + REPAIRED_DURATION)
            outcomes.add(ClampOutcome.RANGE_REPAIR)

    if not outcomes:
        return ClampResult(event)
    return ClampResult(replace(event, start=start_value, end=end_value), frozenset(outcomes))
