"""Recursive structural diff of two parsed JSON documents."""

from __future__ import annotations

from typing import Any, Optional

from .jsonpath_utils import JsonPath
from .models import DiffEntry, DiffType, RuleSet
from .values import MISSING, ValueKind, kind_of, values_equal


class Differ:
    """
    Walks two value trees side by side and collects diff entries.

    Handles:
    - Ignore rules (one IGNORED entry, no recursion below it)
    - Added/removed subtrees (one entry for the whole subtree)
    - Positional array comparison
    - Unordered arrays (multiset matching, reorder detection, residue pairing)

    Entries are collected in traversal order; sequencing is done afterwards.
    """

    def __init__(
        self,
        rules: RuleSet,
        left_lines: Optional[dict] = None,
        right_lines: Optional[dict] = None
    ):
        self.rules = rules
        self.left_lines = left_lines or {}
        self.right_lines = right_lines or {}
        self.entries: list[DiffEntry] = []

    def diff(self, left: Any, right: Any) -> list[DiffEntry]:
        """Compare two documents from the root and return the raw entries."""
        root = JsonPath.root()
        self.visit(left, right, root, root)
        return self.entries

    def visit(
        self,
        left: Any,
        right: Any,
        path: JsonPath,
        right_path: JsonPath,
        item_pair: bool = False
    ):
        """
        Compare one position of the two trees.

        Args:
            left: Left value, or MISSING
            right: Right value, or MISSING
            path: Path of the left value (also the reported path)
            right_path: Path of the right value, used for its line number
            item_pair: True when comparing paired residues of an unordered
                array; a change at this exact path becomes ARRAY_ITEM_CHANGED
        """
        if left is MISSING and right is MISSING:
            return

        if self.rules.is_ignored(path):
            self._add(DiffType.IGNORED, path, right_path, left, right)
            return

        if left is MISSING:
            self._add(DiffType.ADDED, path, right_path, MISSING, right)
            return

        if right is MISSING:
            self._add(DiffType.REMOVED, path, right_path, left, MISSING)
            return

        left_kind = kind_of(left)
        if left_kind is not kind_of(right) or left_kind not in (ValueKind.OBJECT, ValueKind.ARRAY):
            if not values_equal(left, right):
                diff_type = DiffType.ARRAY_ITEM_CHANGED if item_pair else DiffType.MODIFIED
                self._add(diff_type, path, right_path, left, right)
            return

        if left_kind is ValueKind.OBJECT:
            self._diff_objects(left, right, path, right_path)
        elif self.rules.is_unordered(path):
            self._diff_unordered_arrays(left, right, path, right_path)
        else:
            self._diff_ordered_arrays(left, right, path, right_path)

    def _diff_objects(self, left: dict, right: dict, path: JsonPath, right_path: JsonPath):
        """Compare two objects key by key (left keys first, then right-only keys)."""
        for key in left:
            self.visit(left[key], right.get(key, MISSING), path.child(key), right_path.child(key))

        for key in right:
            if key not in left:
                self.visit(MISSING, right[key], path.child(key), right_path.child(key))

    def _diff_ordered_arrays(self, left: list, right: list, path: JsonPath, right_path: JsonPath):
        """Compare arrays index by index (order matters)."""
        for i in range(max(len(left), len(right))):
            left_item = left[i] if i < len(left) else MISSING
            right_item = right[i] if i < len(right) else MISSING
            self.visit(left_item, right_item, path.child(i), right_path.child(i))

    def _diff_unordered_arrays(self, left: list, right: list, path: JsonPath, right_path: JsonPath):
        """Compare arrays as multisets (order ignored, duplicates matter)."""
        right_matched = [False] * len(right)
        pairs: list[tuple[int, int]] = []
        left_residue: list[int] = []

        # Each left item takes the first structurally equal unmatched right item
        for i, left_item in enumerate(left):
            for j, right_item in enumerate(right):
                if right_matched[j]:
                    continue
                if values_equal(left_item, right_item):
                    right_matched[j] = True
                    pairs.append((i, j))
                    break
            else:
                left_residue.append(i)

        right_residue = [j for j, matched in enumerate(right_matched) if not matched]

        right_order = [j for _, j in pairs]
        reordered = any(a > b for a, b in zip(right_order, right_order[1:]))

        if reordered:
            self._add(DiffType.ARRAY_REORDERED, path, right_path, left, right)

        if not left_residue and not right_residue:
            return

        if not self.rules.identify_array_item_changes:
            self._add(DiffType.ARRAY_ITEM_CHANGED, path, right_path, left, right)
            return

        paired = min(len(left_residue), len(right_residue))
        for i, j in zip(left_residue[:paired], right_residue[:paired]):
            item_path = path.child(i)
            item_right_path = right_path.child(j)
            if self.rules.show_nested_differences:
                self.visit(left[i], right[j], item_path, item_right_path, item_pair=True)
            elif self.rules.is_ignored(item_path):
                self._add(DiffType.IGNORED, item_path, item_right_path, left[i], right[j])
            else:
                self._add(DiffType.ARRAY_ITEM_CHANGED, item_path, item_right_path, left[i], right[j])

        for i in left_residue[paired:]:
            self.visit(left[i], MISSING, path.child(i), right_path.child(i))

        for j in right_residue[paired:]:
            self.visit(MISSING, right[j], path.child(j), right_path.child(j))

    def _add(
        self,
        diff_type: DiffType,
        path: JsonPath,
        right_path: JsonPath,
        left_value: Any,
        right_value: Any
    ):
        """Add a diff entry, annotating it with the line of each present side."""
        left_line = self.left_lines.get(path) if left_value is not MISSING else None
        right_line = self.right_lines.get(right_path) if right_value is not MISSING else None

        self.entries.append(DiffEntry(
            path=path,
            diff_type=diff_type,
            left_value=left_value,
            right_value=right_value,
            left_line=left_line,
            right_line=right_line,
        ))
