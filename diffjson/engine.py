"""Main comparison engine for diffjson."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

from .differ import Differ
from .exceptions import ParseError
from .models import DiffResult, RuleSet
from .parser import parse
from .sequencer import sequence

logger = logging.getLogger(__name__)


class DiffEngine:
    """
    Comparison engine that orchestrates the pipeline:

    1. Parsing: Parse both texts, recording the source line of every path
    2. Diffing: Structural comparison under the rule set
    3. Sequencing: Order entries by source line
    """

    VERSION = "1.0.0"

    def __init__(self, rules: Optional[RuleSet] = None):
        """
        Initialize the engine.

        Args:
            rules: Comparison rules (uses defaults if not provided)
        """
        self.rules = rules or RuleSet()

    def compare(
        self,
        left_text: str,
        right_text: str,
        left_file: Optional[str] = None,
        right_file: Optional[str] = None
    ) -> DiffResult:
        """
        Compare two JSON texts.

        Args:
            left_text: The original document
            right_text: The document to compare against it
            left_file: Optional display label for the left document
            right_file: Optional display label for the right document

        Returns:
            DiffResult with sequenced entries

        Raises:
            ParseError: If either text is not valid JSON
        """
        left, left_lines = parse(left_text)
        right, right_lines = parse(right_text)

        result = self.compare_values(left, right, left_lines, right_lines)
        result.left_file = left_file
        result.right_file = right_file
        return result

    def compare_values(
        self,
        left: Any,
        right: Any,
        left_lines: Optional[dict] = None,
        right_lines: Optional[dict] = None
    ) -> DiffResult:
        """
        Compare two already parsed values.

        Line maps are optional; without them entries carry no line numbers
        and keep their traversal order.
        """
        differ = Differ(self.rules, left_lines, right_lines)
        entries = differ.diff(left, right)

        logger.debug(
            "Compared documents with %d ignore and %d unordered rules: %d entries",
            len(self.rules.ignore), len(self.rules.unordered), len(entries)
        )

        return DiffResult(entries=sequence(entries))

    def compare_files(self, left_path: str | Path, right_path: str | Path) -> DiffResult:
        """
        Read and compare two JSON files.

        Raises:
            OSError: If a file cannot be read
            ParseError: If a file is not valid UTF-8 or not valid JSON
        """
        left_path = Path(left_path)
        right_path = Path(right_path)

        logger.debug("Comparing %s with %s", left_path, right_path)

        left_text = _read_text(left_path)
        right_text = _read_text(right_path)

        return self.compare(left_text, right_text, str(left_path), str(right_path))


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        # Position of the first undecodable byte
        line_start = e.object.rfind(b"\n", 0, e.start) + 1
        line = e.object.count(b"\n", 0, e.start) + 1
        raise ParseError(f"Invalid UTF-8 in {path} ({e.reason})", line, e.start - line_start + 1) from e


def compare(
    left_text: str,
    right_text: str,
    rules: Optional[RuleSet] = None
) -> DiffResult:
    """
    Convenience function to compare two JSON texts.

    Args:
        left_text: The original document
        right_text: The document to compare against it
        rules: Optional comparison rules

    Returns:
        DiffResult with sequenced entries
    """
    engine = DiffEngine(rules)
    return engine.compare(left_text, right_text)
