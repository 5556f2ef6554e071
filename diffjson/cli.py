"""Command-line entry point for diffjson."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from . import __version__
from .engine import DiffEngine
from .exceptions import JsonDiffError
from .formatter import format_result
from .models import RuleSet
from .profile import load_profile

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="diffjson",
        description="Compare two JSON files and list their structural differences",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  diffjson left.json right.json
  diffjson left.json right.json -o diff.txt
  diffjson left.json right.json -p profile.toml
  diffjson left.json right.json --symbols
        """
    )

    parser.add_argument("file1", help="Left (original) JSON file")
    parser.add_argument("file2", help="Right (modified) JSON file")
    parser.add_argument("-p", "--profile", help="Profile with comparison rules (TOML, YAML or JSON)")
    parser.add_argument("-o", "--output", help="Output file for the diff (stdout if not given)")
    parser.add_argument(
        "-S", "--symbols",
        action="store_true",
        help="Use symbols (+ - ~ ! * ?) instead of readable tags"
    )
    parser.add_argument(
        "--format",
        choices=("text", "json"),
        default="text",
        help="Output format (default: text)"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    return parser


def run(args: argparse.Namespace) -> str:
    """Run one comparison and return the rendered output."""
    rules = load_profile(args.profile) if args.profile else RuleSet()
    engine = DiffEngine(rules)
    result = engine.compare_files(args.file1, args.file2)

    logger.debug("Found %d entries", len(result))

    if args.format == "json":
        return json.dumps(result.to_dict(), indent=2, ensure_ascii=False) + "\n"
    return format_result(result, symbols=args.symbols)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        output = run(args)
        if args.output:
            Path(args.output).write_text(output, encoding="utf-8")
        else:
            sys.stdout.write(output)
    except (JsonDiffError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
