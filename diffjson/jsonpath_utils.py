"""JSONPath utilities for diffjson: concrete paths and compiled rule patterns."""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Union

from jsonpath_ng import parse as jsonpath_parse
from jsonpath_ng.exceptions import JSONPathError
from jsonpath_ng.jsonpath import (
    Child,
    Descendants,
    Fields,
    Index,
    Root,
    Slice,
    This,
)

from .exceptions import PatternError

Segment = Union[str, int]

_IDENTIFIER = re.compile(r'^[a-zA-Z_][a-zA-Z0-9_]*$')


@dataclass(frozen=True)
class JsonPath:
    """A concrete location inside a JSON document, e.g. ``$.users[0].name``."""

    segments: tuple[Segment, ...] = ()

    @classmethod
    def root(cls) -> JsonPath:
        return cls()

    def child(self, key: Segment) -> JsonPath:
        return JsonPath(self.segments + (key,))

    def is_ancestor_of(self, other: JsonPath) -> bool:
        """True when ``other`` lies strictly below this path."""
        return (
            len(other.segments) > len(self.segments)
            and other.segments[:len(self.segments)] == self.segments
        )

    def __str__(self) -> str:
        parts = ["$"]
        for segment in self.segments:
            if isinstance(segment, int):
                parts.append(f"[{segment}]")
            elif _IDENTIFIER.match(segment):
                parts.append(f".{segment}")
            else:
                escaped = segment.replace("\\", "\\\\").replace("'", "\\'")
                parts.append(f"['{escaped}']")
        return "".join(parts)

    @classmethod
    def parse(cls, path: str) -> JsonPath:
        """
        Parse the canonical string form back into a path.

        Accepts ``$``, ``.name``, ``[3]`` and ``['quoted name']`` segments.
        """
        if not path.startswith("$"):
            raise ValueError(f"Path must start with '$': {path}")

        segments: list[Segment] = []
        i = 1
        while i < len(path):
            char = path[i]
            if char == ".":
                j = i + 1
                while j < len(path) and path[j] not in ".[":
                    j += 1
                if j == i + 1:
                    raise ValueError(f"Empty field name in path: {path}")
                segments.append(path[i + 1:j])
                i = j
            elif char == "[":
                if path.startswith("['", i):
                    j = i + 2
                    name = []
                    while j < len(path) and path[j] != "'":
                        if path[j] == "\\" and j + 1 < len(path):
                            j += 1
                        name.append(path[j])
                        j += 1
                    if not path.startswith("']", j):
                        raise ValueError(f"Unterminated quoted field in path: {path}")
                    segments.append("".join(name))
                    i = j + 2
                else:
                    j = path.find("]", i)
                    content = path[i + 1:j] if j != -1 else ""
                    if not content.isdigit():
                        raise ValueError(f"Invalid index in path: {path}")
                    segments.append(int(content))
                    i = j + 1
            else:
                raise ValueError(f"Unexpected character '{char}' in path: {path}")

        return cls(tuple(segments))


class _Descend:
    """Recursive descent: consumes zero or more segments."""

    def __repr__(self) -> str:
        return ".."


_DESCEND = _Descend()


@dataclass(frozen=True)
class _AnySegment:
    def accepts(self, segment: Segment) -> bool:
        return True


@dataclass(frozen=True)
class _FieldSegment:
    names: frozenset

    def accepts(self, segment: Segment) -> bool:
        return isinstance(segment, str) and segment in self.names


@dataclass(frozen=True)
class _IndexSegment:
    indices: frozenset

    def accepts(self, segment: Segment) -> bool:
        return isinstance(segment, int) and segment in self.indices


@dataclass(frozen=True)
class _SliceSegment:
    start: Optional[int]
    end: Optional[int]
    step: Optional[int]

    def accepts(self, segment: Segment) -> bool:
        if not isinstance(segment, int):
            return False
        start = self.start or 0
        if segment < start:
            return False
        if self.end is not None and segment >= self.end:
            return False
        return (segment - start) % (self.step or 1) == 0


class PathPattern:
    """
    A rule pattern compiled into a list of segment matchers.

    Supports:
    - Exact match: $.foo.bar, $.items[0], $['odd key']
    - Wildcard: $.meta.*, $.items[*].name
    - Recursive descent: $..updatedAt, $.a..id
    - Index slices: $.items[1:3]
    """

    def __init__(self, pattern: str, steps: tuple):
        self.pattern = pattern
        self.steps = steps

    def __repr__(self) -> str:
        return f"PathPattern({self.pattern!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, PathPattern) and self.pattern == other.pattern

    def __hash__(self) -> int:
        return hash(self.pattern)

    @classmethod
    def compile(cls, pattern: str) -> PathPattern:
        """Compile a pattern string, raising PatternError when malformed."""
        return _compile_cached(pattern)

    def matches(self, path: JsonPath) -> bool:
        """
        Check if a concrete path matches this pattern.

        The whole path must be consumed by the whole pattern; only
        recursive descent may skip segments.
        """
        final = len(self.steps)
        states = self._closure({0})

        for segment in path.segments:
            advanced = set()
            for state in states:
                if state == final:
                    continue
                step = self.steps[state]
                if step is _DESCEND:
                    advanced.add(state)
                elif step.accepts(segment):
                    advanced.add(state + 1)
            states = self._closure(advanced)
            if not states:
                return False

        return final in states

    def _closure(self, states: set) -> set:
        closed = set(states)
        pending = list(states)
        while pending:
            state = pending.pop()
            if state < len(self.steps) and self.steps[state] is _DESCEND:
                if state + 1 not in closed:
                    closed.add(state + 1)
                    pending.append(state + 1)
        return closed


@lru_cache(maxsize=256)
def _compile_cached(pattern: str) -> PathPattern:
    if not isinstance(pattern, str) or not pattern.strip():
        raise PatternError(str(pattern), "pattern is empty")

    source = pattern.strip()
    if source.startswith(".."):
        source = "$" + source

    try:
        expr = jsonpath_parse(source)
    except JSONPathError as e:
        raise PatternError(pattern, str(e)) from e

    steps = tuple(_flatten(expr, pattern))
    return PathPattern(pattern, steps)


def _flatten(node, pattern: str) -> list:
    """Convert a jsonpath-ng expression tree into segment matchers."""
    if isinstance(node, (Root, This)):
        return []

    if isinstance(node, Child):
        return _flatten(node.left, pattern) + _flatten(node.right, pattern)

    if isinstance(node, Descendants):
        return _flatten(node.left, pattern) + [_DESCEND] + _flatten(node.right, pattern)

    if isinstance(node, Fields):
        if "*" in node.fields:
            return [_AnySegment()]
        return [_FieldSegment(frozenset(node.fields))]

    if isinstance(node, Index):
        indices = getattr(node, "indices", None) or (node.index,)
        if any(index < 0 for index in indices):
            raise PatternError(pattern, "negative indices are not supported")
        return [_IndexSegment(frozenset(indices))]

    if isinstance(node, Slice):
        if node.start is None and node.end is None and node.step is None:
            return [_AnySegment()]
        if any(v is not None and v < 0 for v in (node.start, node.end)):
            raise PatternError(pattern, "negative slice bounds are not supported")
        if node.step is not None and node.step <= 0:
            raise PatternError(pattern, "slice step must be positive")
        return [_SliceSegment(node.start, node.end, node.step)]

    raise PatternError(pattern, f"unsupported expression '{node}'")


def compile_pattern(pattern: str) -> PathPattern:
    """Compile a textual path pattern."""
    return PathPattern.compile(pattern)


def matches(pattern: PathPattern | str, path: JsonPath | str) -> bool:
    """Check a concrete path (or its string form) against a pattern."""
    if isinstance(pattern, str):
        pattern = compile_pattern(pattern)
    if isinstance(path, str):
        path = JsonPath.parse(path)
    return pattern.matches(path)


def any_match(patterns, path: JsonPath) -> bool:
    """True if any pattern in the list matches the path."""
    return any(p.matches(path) for p in patterns)
