"""
Course code detection for free text such as event titles and notes.
"""

import re
from typing import Dict, Optional

COURSE_CODE_PATTERNS = [
    re.compile(r"\b([A-Z]{2,4}\s?[*\-]?\s?\d{3,4}[A-Z]?)\b"),   # CS101, ENGG*3990, MATH-151
    re.compile(r"\b([A-Z]{2,4}\s?\d{2}[A-Z]?\s?\d{2})\b"),      # ENGG 33 90
    re.compile(r"\b([A-Z]{2,4}\s?[A-Z]\s?\d{3})\b"),            # PS Y 101
    re.compile(r"\b([A-Z]{6,12}\s+\d{1,2}[A-Z]{1,2}\d{1,2})\b"),  # COMMERCE 4BB3
]


def canonical_course_code(raw: str) -> str:
    """Upper-case, collapse whitespace, and glue '*' / '-' separators."""
    value = re.sub(r"\s+", " ", raw)
    value = re.sub(r"\s*([*\-])\s*", r"\1", value)
    return value.upper().strip()


def detect_course_code(text: Optional[str]) -> Optional[str]:
    """
    Find the earliest course code in a piece of text.

    Returns:
        Canonical course code, or None if nothing looks like one
    """
    if not isinstance(text, str) or not text:
        return None

    first_seen: Dict[str, int] = {}
    for pattern in COURSE_CODE_PATTERNS:
        for match in pattern.finditer(text):
            value = canonical_course_code(match.group(1))
            if len(value) < 2:
                continue
            position = match.start(1)
            first_seen[value] = min(first_seen.get(value, position), position)

    if not first_seen:
        return None
    return min(first_seen.items(), key=lambda item: item[1])[0]
