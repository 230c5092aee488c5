"""
Settings management for validation runs.

Tracks the current term (year + semester), course defaults and the rule
profile. Settings are persisted as JSON so a course's configuration
survives between runs.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Optional, TypedDict

from syllabus_sync.event_models import ValidationConfig
from syllabus_sync.logging_helper import Log


class SettingsSchema(TypedDict, total=False):
    term_year: Optional[int]
    term_semester: Optional[str]
    default_course_id: Optional[str]
    default_course_code: Optional[str]
    strict: bool
    detect_course_code: bool


SETTINGS_DIR = Path.home() / ".config" / "syllabus_sync"
SETTINGS_FILE = SETTINGS_DIR / "settings.json"

DEFAULT_SETTINGS: SettingsSchema = {
    "term_year": None,
    "term_semester": None,
    "default_course_id": None,
    "default_course_code": None,
    "strict": False,
    "detect_course_code": False,
}


def settings_path() -> Path:
    """Settings file location; SYLLABUS_SYNC_SETTINGS overrides the default."""
    override = os.getenv("SYLLABUS_SYNC_SETTINGS")
    return Path(override) if override else SETTINGS_FILE


def load_settings(path: Optional[Path] = None) -> SettingsSchema:
    """
    Load settings from disk, falling back to defaults if anything fails.
    """
    path = Path(path) if path else settings_path()
    if not path.exists():
        Log.info(f"Settings file not found, using defaults: {path}")
        return DEFAULT_SETTINGS.copy()

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError("Settings data is not a JSON object")
    except Exception as err:
        Log.warn(f"Failed to read settings file ({path}): {err}")
        return DEFAULT_SETTINGS.copy()

    merged: SettingsSchema = DEFAULT_SETTINGS.copy()
    # Merge only known keys
    for key in DEFAULT_SETTINGS:
        if key in data:
            merged[key] = data[key]  # type: ignore[literal-required]
    return merged


def save_settings(settings: SettingsSchema, path: Optional[Path] = None) -> None:
    """
    Persist settings to disk.
    """
    path = Path(path) if path else settings_path()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(settings, indent=2, sort_keys=True),
            encoding="utf-8",
        )
    except Exception as err:
        Log.warn(f"Failed to write settings file ({path}): {err}")
        return
    Log.info(f"Saved settings: {path}")


def build_validation_config(settings: SettingsSchema) -> ValidationConfig:
    """
    Turn stored settings into a ValidationConfig.

    The term window is only set when both year and semester are stored and
    the year is a whole number; otherwise it is dropped with a warning.

    Raises:
        ConfigurationError: If the stored semester is not a known label
    """
    options = dict(
        default_course_id=settings.get("default_course_id"),
        default_course_code=settings.get("default_course_code"),
        strict=bool(settings.get("strict", False)),
        detect_course_code=bool(settings.get("detect_course_code", False)),
    )

    year = settings.get("term_year")
    semester = settings.get("term_semester")
    if year is None or not semester:
        if year is not None or semester:
            Log.warn("Term year and semester must both be set - ignoring term window")
        return ValidationConfig(**options)

    try:
        year = int(year)
    except (TypeError, ValueError):
        Log.warn(f"Invalid term year in settings: {year!r} - ignoring term window")
        return ValidationConfig(**options)

    Log.info(f"Using term window: {semester} {year}")
    return ValidationConfig.for_term(year, semester, **options)
