"""
Tests for the command line entry point.
"""

import json

import pytest

from syllabus_sync.app import EXIT_INVALID, EXIT_USAGE, EXIT_VALID, main


@pytest.fixture
def no_settings(tmp_path):
    return ["--settings", str(tmp_path / "no-settings.json"), "--quiet"]


def write_json(tmp_path, data, name="input.json"):
    path = tmp_path / name
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


CANDIDATES = [
    {"id": "a1", "type": "ASSIGNMENT", "title": "Assignment 1", "start": "2025-07-01T10:00:00.000Z"},
    {"id": "q1", "type": "QUIZ", "title": "", "start": "2025-09-20"},
]


class TestMain:

    def test_valid_batch_prints_result(self, tmp_path, capsys, no_settings):
        path = write_json(tmp_path, CANDIDATES)
        code = main([path, "--year", "2025", "--semester", "fall", "--course-id", "cs101", *no_settings])

        assert code == EXIT_VALID
        output = json.loads(capsys.readouterr().out)
        assert output["valid"] is True
        assert output["stats"]["clampedEvents"] == 1
        assert output["events"][0]["start"] == "2025-08-15T00:00:00.000Z"
        assert output["events"][1]["title"] == "Quiz"
        assert output["events"][1]["courseId"] == "cs101"

    def test_invalid_batch_exits_with_failure(self, tmp_path, capsys, no_settings):
        path = write_json(tmp_path, [{"id": "x", "type": "PARTY", "title": "t", "start": "2025-09-20"}])
        assert main([path, *no_settings]) == EXIT_INVALID
        output = json.loads(capsys.readouterr().out)
        assert output["errors"][0].startswith("Event 1: type 'PARTY'")

    def test_single_mode_checks_finished_events(self, tmp_path, capsys, no_settings):
        events = [
            {"id": "e1", "courseId": "c1", "courseCode": "CS 101", "type": "LAB", "title": "Lab", "start": "2025-09-20"},
        ]
        path = write_json(tmp_path, events)

        assert main([path, "--single", *no_settings]) == EXIT_VALID
        assert main([path, "--single", "--strict", *no_settings]) == EXIT_INVALID

    def test_settings_file_is_used(self, tmp_path, capsys):
        settings = write_json(tmp_path, {"term_year": 2025, "term_semester": "spring"}, "settings.json")
        path = write_json(tmp_path, CANDIDATES)

        assert main([path, "--settings", settings, "--quiet"]) == EXIT_VALID
        output = json.loads(capsys.readouterr().out)
        assert output["events"][1]["start"] == "2025-05-15T00:00:00.000Z"

    @pytest.mark.parametrize("content", ['{"id": "not a list"}', "{broken"])
    def test_bad_input_file(self, tmp_path, no_settings, content):
        path = tmp_path / "input.json"
        path.write_text(content, encoding="utf-8")
        assert main([str(path), *no_settings]) == EXIT_USAGE

    def test_missing_input_file(self, tmp_path, no_settings):
        assert main([str(tmp_path / "missing.json"), *no_settings]) == EXIT_USAGE

    @pytest.mark.parametrize(
        "extra",
        [["--year", "2025", "--semester", "winter"], ["--semester", "fall"]],
    )
    def test_bad_term_arguments(self, tmp_path, no_settings, extra):
        path = write_json(tmp_path, CANDIDATES)
        assert main([path, *extra, *no_settings]) == EXIT_USAGE

    def test_bad_settings_year_is_ignored(self, tmp_path, capsys):
        settings = write_json(tmp_path, {"term_year": "twenty", "term_semester": "fall"}, "settings.json")
        path = write_json(tmp_path, CANDIDATES)

        assert main([path, "--settings", settings, "-q"]) == EXIT_VALID
        output = json.loads(capsys.readouterr().out)
        assert output["stats"]["clampedEvents"] == 0
        assert output["events"][0]["start"] == "2025-07-01T10:00:00.000Z"
