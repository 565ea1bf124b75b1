"""
incident_analytics/parsing/csv_lines.py

Lenient line splitting for uploaded export text.

Every physical line is split on its own, so a stray quote can only shift
field boundaries inside that line instead of swallowing the rest of the
file. The csv module runs in non-strict mode: an unterminated quote turns
the remainder of the line into one field rather than raising.
"""

from __future__ import annotations

import csv
import re

BYTE_ORDER_MARK = "\ufeff"

_LINE_BREAK = re.compile(r"\r?\n")


def split_lines(content: str) -> list[str]:
    """
    Strip a leading BOM and surrounding whitespace, then split on line breaks.
    """

    cleaned = content.lstrip(BYTE_ORDER_MARK).strip()
    if not cleaned:
        return []
    return _LINE_BREAK.split(cleaned)


def split_line(line: str) -> list[str]:
    """
    Split one line into trimmed cells using standard double-quote rules.

    The csv field size limit is raised to the line length first, so one
    oversized quoted cell never falls through to the plain comma split.
    """

    if len(line) >= csv.field_size_limit():
        csv.field_size_limit(len(line) + 1)

    reader = csv.reader([line], skipinitialspace=True, strict=False)
    try:
        cells = next(reader)
    except StopIteration:
        return []
    except csv.Error:
        # NUL bytes and similar oddities: fall back to a plain comma split.
        cells = line.split(",")
    return [cell.strip() for cell in cells]


def is_blank_line(line: str) -> bool:
    return not line.strip()
