"""Final ordering of diff entries."""

from __future__ import annotations

import math

from .models import DiffEntry


def _sort_key(entry: DiffEntry) -> float:
    line = entry.min_line
    return math.inf if line is None else line


def sequence(entries: list[DiffEntry]) -> list[DiffEntry]:
    """
    Order entries by their earliest source line.

    Entries without any line sort last. The sort is stable, so entries on
    the same line keep their traversal order.
    """
    return sorted(entries, key=_sort_key)
