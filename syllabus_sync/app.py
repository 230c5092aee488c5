"""
Command line entry point for syllabus event validation.
Reads extractor candidates from a JSON file and prints the ValidationResult.
"""

import argparse
import json
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from syllabus_sync.event_normalizer import validate_events, validate_single_event
from syllabus_sync.logging_helper import Log
from syllabus_sync.settings_manager import build_validation_config, load_settings
from syllabus_sync.term_window import ConfigurationError, create_term_window

EXIT_VALID = 0
EXIT_INVALID = 1
EXIT_USAGE = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="syllabus-sync",
        description="Validate and normalize extracted syllabus events",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  syllabus-sync candidates.json                          # Use saved settings
  syllabus-sync candidates.json --year 2025 --semester fall
  syllabus-sync events.json --single --strict            # Check finished DTOs
        """,
    )
    parser.add_argument("input", type=Path, help="JSON file holding a list of candidates")
    parser.add_argument("--settings", type=Path, help="Settings file (default: saved settings)")
    parser.add_argument("--year", type=int, help="Term year, used with --semester")
    parser.add_argument("--semester", help="fall, spring or summer")
    parser.add_argument("--course-id", help="Course id for candidates without one")
    parser.add_argument("--strict", action="store_true", help="Use the strict rule profile")
    parser.add_argument(
        "--single",
        action="store_true",
        help="Treat the input as finished events and check each one on its own",
    )
    parser.add_argument("--quiet", "-q", action="store_true", help="Only write logs to the log file")
    return parser


def _load_items(path: Path) -> list:
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError("Input must be a JSON array")
    return data


def main(argv: Optional[List[str]] = None) -> int:
    """Run the validator. Returns the process exit code."""
    args = _build_parser().parse_args(argv)
    if args.quiet:
        Log.set_console(False)

    Log.section("Syllabus Sync")
    Log.info(f"Log file: {Log.get_log_path()}")

    try:
        items = _load_items(args.input)
    except (OSError, ValueError) as e:
        Log.error(f"Could not read {args.input}: {e}")
        return EXIT_USAGE

    try:
        config = build_validation_config(load_settings(args.settings))
        if args.year is not None or args.semester:
            if args.year is None or not args.semester:
                raise ConfigurationError("--year and --semester must be given together")
            window = create_term_window(args.year, args.semester)
            config = replace(config, term_start=window.term_start, term_end=window.term_end)
    except ConfigurationError as e:
        Log.error(str(e))
        return EXIT_USAGE

    if args.course_id:
        config = replace(config, default_course_id=args.course_id)
    if args.strict:
        config = replace(config, strict=True)

    if args.single:
        results = [validate_single_event(item, config) for item in items]
        print(json.dumps([result.to_dict() for result in results], indent=2))
        return EXIT_VALID if all(result.valid for result in results) else EXIT_INVALID

    result = validate_events(items, config)
    print(json.dumps(result.to_dict(), indent=2))
    return EXIT_VALID if result.valid else EXIT_INVALID


if __name__ == "__main__":
    sys.exit(main())
