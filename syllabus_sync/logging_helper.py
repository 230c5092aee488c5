"""
Logging helper module for terminal-first logging.
All output goes to stderr with formatted prefixes, and also to a log file.
stdout is left alone so the command line tool can print JSON there.
"""

import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional, TextIO

# Get project root directory
_project_root = Path(__file__).parent.parent
_log_dir = Path(os.getenv("SYLLABUS_SYNC_LOG_DIR") or _project_root / "logs")

# Log file name is fixed at import, the file itself is opened on first write
_log_file_path = _log_dir / f"syllabus_sync_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"
_log_file: Optional[TextIO] = None
# Set once the log file could not be opened or written; later messages go to the console only
_log_file_failed = False

_console_enabled = not os.getenv("SYLLABUS_SYNC_QUIET")


def _disable_log_file(error: OSError):
    global _log_file, _log_file_failed
    _log_file_failed = True
    _log_file = None
    print(f"[WARN] Cannot write log file {_log_file_path}: {error} - logging to console only", file=sys.stderr)


def _open_log_file() -> Optional[TextIO]:
    global _log_file
    if _log_file is None and not _log_file_failed:
        try:
            _log_dir.mkdir(parents=True, exist_ok=True)
            _log_file = open(_log_file_path, 'a', encoding='utf-8')
        except OSError as e:
            _disable_log_file(e)
    return _log_file


def _log(message: str):
    """Write message to stderr (unless silenced) and to the log file when it is usable."""
    if _console_enabled:
        print(message, file=sys.stderr)
    log_file = _open_log_file()
    if log_file is None:
        return
    try:
        log_file.write(message + '\n')
        log_file.flush()
    except OSError as e:
        _disable_log_file(e)


class Log:
    """Simple logging class that outputs to stderr and log file with formatted prefixes."""

    @staticmethod
    def section(title: str):
        """Print a section header: blank line + '===== TITLE ====='"""
        _log("")
        _log(f"===== {title} =====")

    @staticmethod
    def info(message: str):
        """Print an info message: '[INFO] message'"""
        _log(f"[INFO] {message}")

    @staticmethod
    def warn(message: str):
        """Print a warning message: '[WARN] message'"""
        _log(f"[WARN] {message}")

    @staticmethod
    def error(message: str):
        """Print an error message: '[ERROR] message'"""
        _log(f"[ERROR] {message}")

    @staticmethod
    def kv(pairs: dict):
        """
        Print key-value pairs: '[KV] key=value | key2=value2'
        Pairs whose value is None are left out.

        Args:
            pairs: Dictionary of key-value pairs to print
        """
        kv_string = " | ".join([f"{k}={v}" for k, v in pairs.items() if v is not None])
        _log(f"[KV] {kv_string}")

    @staticmethod
    def set_console(enabled: bool):
        """Turn the stderr echo on or off. The log file is still written."""
        global _console_enabled
        _console_enabled = enabled

    @staticmethod
    def get_log_path() -> str:
        """Get the path to the current log file."""
        return str(_log_file_path)
