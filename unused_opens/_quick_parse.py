"""Cheap textual lookups of long identifiers on a single source line."""
from __future__ import annotations

import re
from typing import Optional

# Only these end a line for the compiler; `str.splitlines` knows many more
_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def split_lines(source: str) -> list[str]:
    """Split source text into lines numbered the way the compiler does."""
    return _LINE_BREAK.split(source)


def _is_ident_char(c: str) -> bool:
    # F# identifiers may contain apostrophes, e.g. `x'`
    return c.isalnum() or c in "_'"


def _scan_long_ident_backwards(line: str, end: int) -> list[str]:
    """Return the segments of the dotted identifier ending at `end`.

    ``Double-backtick`` quoted segments are returned without their backticks.
    """
    segments: list[str] = []
    pos = end

    while True:
        if line[:pos].endswith("``"):
            opening = line.rfind("``", 0, pos - 2)
            if opening == -1 or opening + 2 >= pos - 2:
                break
            segment = line[opening + 2:pos - 2]
            start = opening
        else:
            start = pos
            while start > 0 and _is_ident_char(line[start - 1]):
                start -= 1
            segment = line[start:pos]
            # Nothing there, or a numeric literal such as `1.0`
            if not segment or segment[0].isdigit():
                break

        segments.insert(0, segment)
        if start > 0 and line[start - 1] == ".":
            pos = start - 1
        else:
            break

    return segments


def get_complete_identifier_island(line: str, column: int) -> Optional[str]:
    """Find the complete dotted identifier at `column` on `line`.

    The column may point anywhere inside the last segment or just after it.
    """
    if column < 0 or column > len(line):
        return None

    end = column
    if not line[:end].endswith("``"):
        while end < len(line) and _is_ident_char(line[end]):
            end += 1

    segments = _scan_long_ident_backwards(line, end)
    if not segments:
        return None
    return ".".join(segments)


def get_partial_long_name(line: str, end_column: int) -> tuple[list[str], str]:
    """Split the long identifier ending at `end_column` into its parts.

    Returns:
        Tuple of (qualifying identifiers, the partial last identifier), so
        `Text.ISegment` gives (["Text"], "ISegment").
    """
    if end_column < 0 or end_column > len(line):
        return [], ""

    segments = _scan_long_ident_backwards(line, end_column)
    if not segments:
        return [], ""
    return segments[:-1], segments[-1]
