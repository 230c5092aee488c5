"""
Tests for the Log helper when the log file cannot be written.
"""

import pytest

from syllabus_sync import logging_helper
from syllabus_sync.event_normalizer import validate_events
from syllabus_sync.logging_helper import Log


@pytest.fixture
def unwritable_log_dir(tmp_path, monkeypatch):
    """Point the log directory below a regular file so it can never be created."""
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("", encoding="utf-8")
    log_dir = blocker / "logs"
    monkeypatch.setattr(logging_helper, "_log_dir", log_dir)
    monkeypatch.setattr(logging_helper, "_log_file_path", log_dir / "syllabus_sync_test.log")
    monkeypatch.setattr(logging_helper, "_log_file", None)
    monkeypatch.setattr(logging_helper, "_log_file_failed", False)
    monkeypatch.setattr(logging_helper, "_console_enabled", False)
    return log_dir


class TestUnwritableLogFile:

    def test_logging_falls_back_to_console(self, unwritable_log_dir, capsys):
        Log.info("first")
        Log.warn("second")

        err = capsys.readouterr().err
        assert err.count("Cannot write log file") == 1
        assert not unwritable_log_dir.exists()

    def test_console_still_gets_messages(self, unwritable_log_dir, capsys):
        Log.set_console(True)
        Log.info("still here")
        assert "[INFO] still here" in capsys.readouterr().err

    def test_batch_still_returns_a_result(self, unwritable_log_dir, make_candidate):
        result = validate_events([make_candidate(), make_candidate(id="", title="Broken")])

        assert result.stats.total_events == 2
        assert result.stats.valid_events == 1
        assert result.stats.invalid_events == 1
        assert len(result.errors) == 1
        assert result.errors[0].startswith("Event 2: ")
