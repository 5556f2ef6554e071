"""Data models for the diffjson engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Iterable, Optional

from .jsonpath_utils import JsonPath, PathPattern, any_match, compile_pattern
from .values import MISSING


class DiffType(Enum):
    ADDED = "ADDED"
    REMOVED = "REMOVED"
    MODIFIED = "MODIFIED"
    ARRAY_ITEM_CHANGED = "ARRAY_ITEM_CHANGED"
    ARRAY_REORDERED = "ARRAY_REORDERED"
    IGNORED = "IGNORED"

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]

    @property
    def readable_text(self) -> str:
        return self.value

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]


_SYMBOLS = {
    DiffType.ADDED: "+",
    DiffType.REMOVED: "-",
    DiffType.MODIFIED: "~",
    DiffType.ARRAY_ITEM_CHANGED: "!",
    DiffType.ARRAY_REORDERED: "*",
    DiffType.IGNORED: "?",
}

_DESCRIPTIONS = {
    DiffType.ADDED: "Property exists in right document but not in left",
    DiffType.REMOVED: "Property exists in left document but not in right",
    DiffType.MODIFIED: "Property exists in both with different values",
    DiffType.ARRAY_ITEM_CHANGED: "Array item has changed",
    DiffType.ARRAY_REORDERED: "Array elements are reordered",
    DiffType.IGNORED: "Property was ignored by a profile rule",
}


@dataclass(frozen=True)
class RuleSet:
    """Compiled comparison rules, applied uniformly during one run."""
    ignore: tuple[PathPattern, ...] = ()
    unordered: tuple[PathPattern, ...] = ()
    show_nested_differences: bool = False
    identify_array_item_changes: bool = True

    @classmethod
    def from_patterns(
        cls,
        ignore: Iterable[str] = (),
        unordered: Iterable[str] = (),
        show_nested_differences: bool = False,
        identify_array_item_changes: bool = True,
    ) -> RuleSet:
        """
        Build a rule set from pattern strings.

        Raises:
            PatternError: If any pattern is malformed
        """
        return cls(
            ignore=tuple(compile_pattern(p) for p in ignore),
            unordered=tuple(compile_pattern(p) for p in unordered),
            show_nested_differences=bool(show_nested_differences),
            identify_array_item_changes=bool(identify_array_item_changes),
        )

    def is_ignored(self, path: JsonPath) -> bool:
        return any_match(self.ignore, path)

    def is_unordered(self, path: JsonPath) -> bool:
        return any_match(self.unordered, path)

    def to_dict(self) -> dict:
        return {
            "ignore": [p.pattern for p in self.ignore],
            "unordered": [p.pattern for p in self.unordered],
            "show_nested_differences": self.show_nested_differences,
            "identify_array_item_changes": self.identify_array_item_changes,
        }


@dataclass
class DiffEntry:
    """A single difference found during comparison."""
    path: JsonPath
    diff_type: DiffType
    left_value: Any = MISSING
    right_value: Any = MISSING
    left_line: Optional[int] = None
    right_line: Optional[int] = None

    @property
    def has_left_value(self) -> bool:
        return self.left_value is not MISSING

    @property
    def has_right_value(self) -> bool:
        return self.right_value is not MISSING

    @property
    def min_line(self) -> Optional[int]:
        lines = [n for n in (self.left_line, self.right_line) if n is not None]
        return min(lines) if lines else None

    def to_dict(self) -> dict:
        result = {
            "path": str(self.path),
            "type": self.diff_type.value,
        }
        if self.has_left_value:
            result["left_value"] = self.left_value
        if self.has_right_value:
            result["right_value"] = self.right_value
        if self.left_line is not None:
            result["left_line"] = self.left_line
        if self.right_line is not None:
            result["right_line"] = self.right_line
        return result


@dataclass
class DiffResult:
    """Complete comparison result between two JSON documents."""
    entries: list[DiffEntry] = field(default_factory=list)
    left_file: Optional[str] = None
    right_file: Optional[str] = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)

    @property
    def has_differences(self) -> bool:
        return any(e.diff_type is not DiffType.IGNORED for e in self.entries)

    def counts(self) -> dict[DiffType, int]:
        """Number of entries per diff type (types with no entries are omitted)."""
        counts: dict[DiffType, int] = {}
        for entry in self.entries:
            counts[entry.diff_type] = counts.get(entry.diff_type, 0) + 1
        return counts

    def to_dict(self) -> dict:
        return {
            "left_file": self.left_file,
            "right_file": self.right_file,
            "timestamp": self.timestamp.isoformat(),
            "has_differences": self.has_differences,
            "summary": {t.value: n for t, n in self.counts().items()},
            "entries": [e.to_dict() for e in self.entries],
        }
