"""
Shared pytest setup.

Log output is routed to a throwaway directory and the stderr echo is turned
off before any syllabus_sync module is imported.
"""

import os
import tempfile
from datetime import datetime, timezone

import pytest

os.environ.setdefault("SYLLABUS_SYNC_LOG_DIR", tempfile.mkdtemp(prefix="syllabus_sync_logs_"))
os.environ.setdefault("SYLLABUS_SYNC_QUIET", "1")

from syllabus_sync.event_models import EventCandidate, EventKind  # noqa: E402


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


@pytest.fixture
def make_candidate():
    """Factory for candidates with sensible defaults; override any field."""

    def _make(**overrides) -> EventCandidate:
        values = dict(
            id="test-123",
            kind=EventKind.ASSIGNMENT,
            title="Assignment 1",
            start=utc(2025, 9, 15, 23, 59, 59),
            all_day=False,
            confidence=0.85,
        )
        values.update(overrides)
        return EventCandidate(**values)

    return _make
