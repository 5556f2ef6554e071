"""
diffjson - Structural JSON Comparison Engine

Compares two JSON documents under path-pattern rules (ignored paths,
unordered arrays) and produces a line-anchored, deterministic change list.
"""

__version__ = "1.0.0"

from .engine import DiffEngine, compare
from .models import (
    DiffEntry,
    DiffResult,
    DiffType,
    RuleSet,
)
from .exceptions import (
    JsonDiffError,
    PatternError,
    ParseError,
    ProfileError,
)
from .jsonpath_utils import (
    JsonPath,
    PathPattern,
    compile_pattern,
    matches,
)
from .parser import parse
from .sequencer import sequence
from .formatter import format_entry, format_result
from .profile import Profile, load_profile
from .values import MISSING, ValueKind, values_equal

__all__ = [
    # Engine
    "DiffEngine",
    "compare",
    # Results
    "DiffEntry",
    "DiffResult",
    "DiffType",
    "RuleSet",
    # Errors
    "JsonDiffError",
    "PatternError",
    "ParseError",
    "ProfileError",
    # Paths
    "JsonPath",
    "PathPattern",
    "compile_pattern",
    "matches",
    # Pipeline stages
    "parse",
    "sequence",
    # Output
    "format_entry",
    "format_result",
    # Profiles
    "Profile",
    "load_profile",
    # Values
    "MISSING",
    "ValueKind",
    "values_equal",
]
