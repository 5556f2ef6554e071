"""Text serialization of diff results (the ``DIFF-JSON v1`` format)."""

from __future__ import annotations

import json
from typing import Any

from .models import DiffEntry, DiffResult, DiffType

HEADER = "DIFF-JSON v1"


def _dump(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def _line_info(entry: DiffEntry) -> str:
    if entry.left_line is not None and entry.right_line is not None:
        return f" (L{entry.left_line}:L{entry.right_line})"
    if entry.left_line is not None:
        return f" (L{entry.left_line})"
    if entry.right_line is not None:
        return f" (L{entry.right_line})"
    return ""


def _payload(entry: DiffEntry) -> str:
    if entry.diff_type is DiffType.ADDED:
        return _dump(entry.right_value)
    if entry.diff_type is DiffType.REMOVED:
        return _dump(entry.left_value)
    if entry.diff_type in (DiffType.MODIFIED, DiffType.ARRAY_ITEM_CHANGED):
        return f"{_dump(entry.left_value)} -> {_dump(entry.right_value)}"
    if entry.diff_type is DiffType.ARRAY_REORDERED:
        return "[REORDERED]"
    return "[IGNORED]"


def format_entry(entry: DiffEntry, symbols: bool = False) -> str:
    """
    Format one entry as ``<tag> <path> (L<left>:L<right>): <payload>``.

    Args:
        entry: The entry to format
        symbols: Use ``+ - ~ ! * ?`` instead of ``[ADDED]`` style tags
    """
    tag = entry.diff_type.symbol if symbols else f"[{entry.diff_type.readable_text}]"
    return f"{tag} {entry.path}{_line_info(entry)}: {_payload(entry)}"


def format_result(result: DiffResult, symbols: bool = False) -> str:
    """Format a whole result: header, blank line, one line per entry."""
    lines = [HEADER]
    if result.left_file:
        lines.append(f"LEFT: {result.left_file}")
    if result.right_file:
        lines.append(f"RIGHT: {result.right_file}")
    lines.append(f"TIMESTAMP: {result.timestamp.isoformat()}")
    lines.append("")

    for entry in result.entries:
        lines.append(format_entry(entry, symbols))

    return "\n".join(lines) + "\n"
