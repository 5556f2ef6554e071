"""Tests for path handling and rule pattern matching."""

import pytest
from diffjson import JsonPath, PatternError, RuleSet, compile_pattern, matches


class TestJsonPath:
    """Test concrete paths."""

    def test_render(self):
        """Test the canonical string form."""
        assert str(JsonPath.root()) == "$"
        assert str(JsonPath(("users", 0, "name"))) == "$.users[0].name"
        assert str(JsonPath(("odd key", "it's"))) == "$['odd key']['it\\'s']"

    def test_parse_roundtrip(self):
        """Test parsing the canonical form back."""
        for segments in [(), ("a",), ("a", 2, "b"), ("odd key", 0), ("it's",)]:
            path = JsonPath(segments)
            assert JsonPath.parse(str(path)) == path

    def test_parse_invalid(self):
        """Test malformed concrete paths are rejected."""
        for text in ["a.b", "$.", "$[x]", "$['open"]:
            with pytest.raises(ValueError):
                JsonPath.parse(text)

    def test_equality_and_hash(self):
        """Test paths are equal by segments and usable as keys."""
        assert JsonPath.root().child("a").child(1) == JsonPath(("a", 1))
        assert JsonPath(("a", 1)) != JsonPath(("a", "1"))
        assert {JsonPath(("a",)): 3}[JsonPath.parse("$.a")] == 3

    def test_ancestor(self):
        """Test ancestor checks."""
        parent = JsonPath(("a",))
        assert parent.is_ancestor_of(JsonPath(("a", "b")))
        assert not parent.is_ancestor_of(parent)
        assert not parent.is_ancestor_of(JsonPath(("ab",)))


class TestPatternMatching:
    """Test compiled pattern semantics."""

    def test_exact_path_match(self):
        """Test literal patterns match only the identical path."""
        assert matches("$.user.name", "$.user.name")
        assert not matches("$.user.name", "$.user.age")
        assert not matches("$.user.name", "$.user")
        assert not matches("$.user.name", "$.user.name.first")

    def test_array_index_path(self):
        """Test literal indices."""
        assert matches("$.users[0].name", "$.users[0].name")
        assert not matches("$.users[0].name", "$.users[1].name")

    def test_wildcard_index(self):
        """Test [*] matches any single index."""
        pattern = compile_pattern("$.users[*].name")
        assert matches(pattern, "$.users[0].name")
        assert matches(pattern, "$.users[42].name")
        assert not matches(pattern, "$.users.name")
        assert not matches(pattern, "$.users[0].name.first")

    def test_wildcard_field(self):
        """Test * matches exactly one segment."""
        pattern = compile_pattern("$.meta.*")
        assert matches(pattern, "$.meta.ts")
        assert matches(pattern, "$.meta[3]")
        assert not matches(pattern, "$.meta")
        assert not matches(pattern, "$.meta.ts.deep")

    def test_recursive_descent(self):
        """Test .. matches the named leaf at any depth."""
        pattern = compile_pattern("$..id")
        assert matches(pattern, "$.id")
        assert matches(pattern, "$.a.b[3].id")
        assert not matches(pattern, "$.id.x")
        assert not matches(pattern, "$.identifier")

    def test_recursive_descent_without_root(self):
        """Test ..name is read as $..name."""
        assert matches("..name", "$.a.name")
        assert matches("..name", "$.name")

    def test_recursive_descent_after_prefix(self):
        """Test descent below a fixed prefix."""
        pattern = compile_pattern("$.a..id")
        assert matches(pattern, "$.a.id")
        assert matches(pattern, "$.a.x[0].id")
        assert not matches(pattern, "$.b.id")

    def test_slice(self):
        """Test index slices."""
        pattern = compile_pattern("$.items[1:3]")
        assert not matches(pattern, "$.items[0]")
        assert matches(pattern, "$.items[1]")
        assert matches(pattern, "$.items[2]")
        assert not matches(pattern, "$.items[3]")

    def test_quoted_field(self):
        """Test bracketed field names with spaces."""
        assert matches("$['odd key'].x", JsonPath(("odd key", "x")))

    def test_root(self):
        """Test $ matches only the root."""
        assert matches("$", "$")
        assert not matches("$", "$.a")

    def test_pattern_without_root(self):
        """Test a pattern may omit the leading $."""
        assert matches("a.b", "$.a.b")

    def test_field_does_not_match_index(self):
        """Test names and indices are distinct segments."""
        assert not matches("$.a.b", JsonPath(("a", 0)))
        assert not matches("$.a[0]", JsonPath(("a", "0")))

    def test_compile_is_cached(self):
        """Test compiling the same text twice reuses the pattern."""
        assert compile_pattern("$.a.b") is compile_pattern("$.a.b")


class TestPatternErrors:
    """Test malformed patterns are rejected at compile time."""

    @pytest.mark.parametrize("pattern", [
        "",
        "   ",
        "$.a[",
        "$.a]",
        "$.a[-1]",
        "$.a | $.b",
    ])
    def test_invalid_pattern(self, pattern):
        """Test PatternError on malformed or unsupported syntax."""
        with pytest.raises(PatternError):
            compile_pattern(pattern)

    def test_error_names_pattern(self):
        """Test the error carries the offending pattern."""
        with pytest.raises(PatternError) as excinfo:
            compile_pattern("$.a[")
        assert excinfo.value.pattern == "$.a["

    def test_rule_set_construction(self):
        """Test rule sets reject bad patterns."""
        with pytest.raises(PatternError):
            RuleSet.from_patterns(ignore=["$.ok"], unordered=["$.bad["])


class TestRuleSet:
    """Test rule membership."""

    def test_membership(self):
        """Test any matching pattern counts."""
        rules = RuleSet.from_patterns(ignore=["$.a", "$..ts"], unordered=["$.list"])
        assert rules.is_ignored(JsonPath(("a",)))
        assert rules.is_ignored(JsonPath(("x", 0, "ts")))
        assert not rules.is_ignored(JsonPath(("list",)))
        assert rules.is_unordered(JsonPath(("list",)))
        assert not rules.is_unordered(JsonPath(("a",)))

    def test_defaults(self):
        """Test default toggles."""
        rules = RuleSet()
        assert rules.show_nested_differences is False
        assert rules.identify_array_item_changes is True
        assert rules.to_dict() == {
            "ignore": [],
            "unordered": [],
            "show_nested_differences": False,
            "identify_array_item_changes": True,
        }


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
