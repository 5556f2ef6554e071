"""Line-annotated JSON parser.

Builds the same Python values as ``json.loads`` and, alongside them, a map
from every concrete ``JsonPath`` to the 1-based line where that value starts
in the source text. Strings and numbers are scanned with the standard
library's JSON scanner pieces so decoding matches ``json`` exactly.
"""

from __future__ import annotations

import json
import re
from bisect import bisect_left
from json.decoder import scanstring
from json.scanner import NUMBER_RE
from typing import Any

from .exceptions import ParseError
from .jsonpath_utils import JsonPath

PathLineMap = dict[JsonPath, int]

_WHITESPACE = re.compile(r'[ \t\n\r]*')

_CONSTANTS = (
    ("null", None),
    ("true", True),
    ("false", False),
)


class LineAnnotatedParser:
    """Recursive-descent parser that records source lines per path."""

    def __init__(self, text: str):
        self.text = text
        self.lines: PathLineMap = {}
        self._newlines = [i for i, char in enumerate(text) if char == "\n"]

    def parse(self) -> tuple[Any, PathLineMap]:
        pos = self._skip(0)
        value, pos = self._parse_value(pos, JsonPath.root())
        pos = self._skip(pos)
        if pos != len(self.text):
            raise self._error("Extra data", pos)
        return value, self.lines

    def line_at(self, pos: int) -> int:
        return bisect_left(self._newlines, pos) + 1

    def column_at(self, pos: int) -> int:
        preceding = bisect_left(self._newlines, pos)
        line_start = self._newlines[preceding - 1] + 1 if preceding else 0
        return pos - line_start + 1

    def _error(self, message: str, pos: int) -> ParseError:
        return ParseError(message, self.line_at(pos), self.column_at(pos))

    def _skip(self, pos: int) -> int:
        return _WHITESPACE.match(self.text, pos).end()

    def _parse_value(self, pos: int, path: JsonPath) -> tuple[Any, int]:
        text = self.text
        if pos >= len(text):
            raise self._error("Expecting value", pos)

        self.lines[path] = self.line_at(pos)
        char = text[pos]

        if char == "{":
            return self._parse_object(pos + 1, path)
        if char == "[":
            return self._parse_array(pos + 1, path)
        if char == '"':
            return self._scan_string(pos + 1)

        for literal, value in _CONSTANTS:
            if text.startswith(literal, pos):
                return value, pos + len(literal)

        match = NUMBER_RE.match(text, pos)
        if match:
            integer, frac, exp = match.groups()
            if frac or exp:
                return float(integer + (frac or "") + (exp or "")), match.end()
            return int(integer), match.end()

        raise self._error("Expecting value", pos)

    def _scan_string(self, pos: int) -> tuple[str, int]:
        try:
            return scanstring(self.text, pos, True)
        except json.JSONDecodeError as e:
            raise ParseError(e.msg, e.lineno, e.colno) from e

    def _parse_object(self, pos: int, path: JsonPath) -> tuple[dict, int]:
        text = self.text
        result: dict = {}

        pos = self._skip(pos)
        if text.startswith("}", pos):
            return result, pos + 1

        while True:
            if not text.startswith('"', pos):
                raise self._error("Expecting property name enclosed in double quotes", pos)
            key, pos = self._scan_string(pos + 1)

            pos = self._skip(pos)
            if not text.startswith(":", pos):
                raise self._error("Expecting ':' delimiter", pos)
            pos = self._skip(pos + 1)

            value, pos = self._parse_value(pos, path.child(key))
            result[key] = value

            pos = self._skip(pos)
            if text.startswith("}", pos):
                return result, pos + 1
            if not text.startswith(",", pos):
                raise self._error("Expecting ',' delimiter", pos)
            pos = self._skip(pos + 1)

    def _parse_array(self, pos: int, path: JsonPath) -> tuple[list, int]:
        text = self.text
        result: list = []

        pos = self._skip(pos)
        if text.startswith("]", pos):
            return result, pos + 1

        while True:
            value, pos = self._parse_value(pos, path.child(len(result)))
            result.append(value)

            pos = self._skip(pos)
            if text.startswith("]", pos):
                return result, pos + 1
            if not text.startswith(",", pos):
                raise self._error("Expecting ',' delimiter", pos)
            pos = self._skip(pos + 1)


def parse(text: str) -> tuple[Any, PathLineMap]:
    """
    Parse JSON text into a value and its path-to-line map.

    Raises:
        ParseError: If the text is not valid JSON
    """
    return LineAnnotatedParser(text).parse()
