"""Tests for the line-annotated JSON parser."""

import json

import pytest
from diffjson import JsonPath, ParseError, parse


DOCUMENT = """{
  "a": 1,
  "b": [
    10,
    {"c": 2}
  ],
  "d":
    "late"
}"""


class TestValues:
    """Test parsed values match the standard library."""

    @pytest.mark.parametrize("text", [
        DOCUMENT,
        '[1, -2, 3.5, 1e3, -0.25E-2, 0]',
        '{"s": "caf\\u00e9 \\"quoted\\" \\n", "t": true, "f": false, "n": null}',
        '"just a string"',
        '  42  ',
        '[]',
        '{}',
        '[[[]], {"x": {}}]',
    ])
    def test_matches_json_loads(self, text):
        """Test values and their types equal json.loads output."""
        value, _ = parse(text)
        expected = json.loads(text)
        assert value == expected
        assert json.dumps(value) == json.dumps(expected)

    def test_integer_and_float(self):
        """Test numbers keep int/float distinction."""
        value, _ = parse('[1, 1.0, 1e2]')
        assert [type(v) for v in value] == [int, float, float]

    def test_duplicate_keys(self):
        """Test the last duplicate key wins."""
        value, lines = parse('{\n"a": 1,\n"a": 2\n}')
        assert value == {"a": 2}
        assert lines[JsonPath(("a",))] == 3


class TestLines:
    """Test the path-to-line map."""

    def test_line_map(self):
        """Test every element is recorded at the line its value starts."""
        _, lines = parse(DOCUMENT)
        assert lines == {
            JsonPath(()): 1,
            JsonPath(("a",)): 2,
            JsonPath(("b",)): 3,
            JsonPath(("b", 0)): 4,
            JsonPath(("b", 1)): 5,
            JsonPath(("b", 1, "c")): 5,
            JsonPath(("d",)): 8,
        }

    def test_root_after_blank_lines(self):
        """Test the root is recorded at its first token."""
        _, lines = parse('\n\n  {"a": 1}')
        assert lines[JsonPath.root()] == 3
        assert lines[JsonPath(("a",))] == 3

    def test_lookup_by_parsed_path(self):
        """Test lines can be looked up from a path string."""
        _, lines = parse(DOCUMENT)
        assert lines[JsonPath.parse("$.b[1].c")] == 5


class TestErrors:
    """Test malformed input raises ParseError with a position."""

    @pytest.mark.parametrize("text,message,line,column", [
        ('', "Expecting value", 1, 1),
        ('{"a": 1,}', "Expecting property name enclosed in double quotes", 1, 9),
        ('[1, 2,]', "Expecting value", 1, 7),
        ('{\n  "a": \n}', "Expecting value", 3, 1),
        ('{"a" 1}', "Expecting ':' delimiter", 1, 6),
        ('[1 2]', "Expecting ',' delimiter", 1, 4),
        ('{} x', "Extra data", 1, 4),
        ('[NaN]', "Expecting value", 1, 2),
        ("{'a': 1}", "Expecting property name enclosed in double quotes", 1, 2),
    ])
    def test_position(self, text, message, line, column):
        """Test the message, line and column of common errors."""
        with pytest.raises(ParseError) as excinfo:
            parse(text)
        error = excinfo.value
        assert error.message == message
        assert (error.line, error.column) == (line, column)

    def test_unterminated_string(self):
        """Test string scanning errors keep their position."""
        with pytest.raises(ParseError) as excinfo:
            parse('{\n"a": "abc')
        assert "Unterminated string" in excinfo.value.message
        assert excinfo.value.line == 2

    def test_error_message_format(self):
        """Test the string form includes the position."""
        with pytest.raises(ParseError) as excinfo:
            parse('[1 2]')
        assert str(excinfo.value) == "Expecting ',' delimiter: line 1 column 4"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
