"""Profile loading: comparison rules stored in TOML, YAML or JSON files."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from .exceptions import ProfileError
from .models import RuleSet


@dataclass
class Profile:
    """
    Comparison rules as written in a profile file.

    Example (TOML)::

        ignore = ["$.metadata.timestamp", "$..updatedAt"]
        unordered = ["$.tags"]
        show_nested_differences = true
    """
    ignore: list[str] = field(default_factory=list)
    unordered: list[str] = field(default_factory=list)
    show_nested_differences: bool = False
    identify_array_item_changes: Optional[bool] = None

    @classmethod
    def from_dict(cls, data: Optional[dict], source: str = "<profile>") -> Profile:
        """Validate a loaded mapping and build a profile from it."""
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ProfileError(source, "top level must be a mapping")

        unknown = set(data) - {f for f in cls.__dataclass_fields__}
        if unknown:
            raise ProfileError(source, f"unknown keys: {', '.join(sorted(unknown))}")

        profile = cls()
        for key in ("ignore", "unordered"):
            if key in data:
                value = data[key]
                if not isinstance(value, list) or not all(isinstance(p, str) for p in value):
                    raise ProfileError(source, f"'{key}' must be a list of strings")
                setattr(profile, key, list(value))

        for key in ("show_nested_differences", "identify_array_item_changes"):
            if key in data:
                value = data[key]
                if not isinstance(value, bool):
                    raise ProfileError(source, f"'{key}' must be a boolean")
                setattr(profile, key, value)

        return profile

    def to_rule_set(self) -> RuleSet:
        """
        Compile the profile's patterns.

        Raises:
            PatternError: If any pattern is malformed
        """
        identify = True if self.identify_array_item_changes is None else self.identify_array_item_changes
        return RuleSet.from_patterns(
            ignore=self.ignore,
            unordered=self.unordered,
            show_nested_differences=self.show_nested_differences,
            identify_array_item_changes=identify,
        )


def read_profile(path: str | Path) -> Profile:
    """Read a profile file. ``.toml`` is read as TOML, anything else as YAML/JSON."""
    path = Path(path)
    if not path.exists():
        raise ProfileError(str(path), "file not found")

    try:
        content = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ProfileError(str(path), f"not valid UTF-8 ({e.reason})") from e
    except OSError as e:
        raise ProfileError(str(path), str(e)) from e

    if path.suffix.lower() == ".toml":
        try:
            data = tomllib.loads(content)
        except tomllib.TOMLDecodeError as e:
            raise ProfileError(str(path), f"failed to parse TOML: {e}") from e
    else:
        # YAML also handles JSON since JSON is valid YAML
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ProfileError(str(path), f"failed to parse YAML: {e}") from e

    return Profile.from_dict(data, str(path))


def load_profile(path: str | Path) -> RuleSet:
    """
    Load a profile file and compile it into a rule set.

    Raises:
        ProfileError: If the file is missing, unparsable or badly shaped
        PatternError: If a pattern in the file is malformed
    """
    return read_profile(path).to_rule_set()
