"""
Canonical academic term windows.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Tuple

from syllabus_sync.date_utils import UTC


class ConfigurationError(ValueError):
    """Raised for a term window request that cannot be satisfied."""


@dataclass(frozen=True)
class TermWindow:
    term_start: datetime
    term_end: datetime


# (month, day) of the first and last day of each semester
SEMESTER_BOUNDS: Dict[str, Tuple[Tuple[int, int], Tuple[int, int]]] = {
    "fall": ((8, 15), (12, 20)),
    "spring": ((1, 10), (5, 15)),
    "summer": ((5, 20), (8, 10)),
}


def create_term_window(year: int, semester: str) -> TermWindow:
    """
    Build the term window for a semester of the given year.

    Bounds are midnight UTC on the first and last day. The semester label
    is matched case-insensitively.

    Raises:
        ConfigurationError: If the semester is not fall, spring or summer
    """
    key = semester.strip().lower() if isinstance(semester, str) else None
    if key not in SEMESTER_BOUNDS:
        raise ConfigurationError(
            f"Invalid semester: {semester!r}. Must be 'fall', 'spring', or 'summer'"
        )

    (start_month, start_day), (end_month, end_day) = SEMESTER_BOUNDS[key]
    return TermWindow(
        term_start=datetime(year, start_month, start_day, tzinfo=UTC),
        term_end=datetime(year, end_month, end_day, tzinfo=UTC),
    )
