"""Command-line entry point.

Subcommands:
- snapshot: print regression assertions for an importable object
- join: join two delimited text files on one column each
"""

import argparse
import logging
import sys
from importlib import import_module
from typing import Any, List, Optional

from assertify.config import DEFAULT_MAX_DEPTH, DIALECTS, PYTEST_DIALECT
from assertify.exceptions import AssertifyError, ConfigurationError
from assertify.files import JOIN_HOW, join_files
from assertify.generator import configure

logger = logging.getLogger(__name__)


def resolve_reference(reference: str) -> Any:
    """Import ``package.module:attr.sub_attr`` and return the attribute.

    Raises:
        ConfigurationError: If the reference is malformed or cannot be resolved
    """
    module_name, sep, attribute_path = reference.partition(":")
    if not sep or not module_name or not attribute_path:
        raise ConfigurationError(f"Expected MODULE:ATTRIBUTE, got {reference!r}")
    try:
        target: Any = import_module(module_name)
    except ImportError as e:
        raise ConfigurationError(f"Cannot import {module_name}: {e}") from e
    for part in attribute_path.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as e:
            raise ConfigurationError(f"{reference} has no attribute {part!r}") from e
    return target


def run_snapshot(args: argparse.Namespace) -> None:
    root = resolve_reference(args.target)
    generator = configure().max_depth(args.max_depth).dialect(args.dialect)
    if args.include_null:
        generator.include_null()
    if args.include_empty_lists:
        generator.include_empty_lists()
    if args.include_ids:
        generator.include_ids()
    for reference in args.ignore:
        ignored = resolve_reference(reference)
        generator.ignore(ignored)
    name = args.name or args.target.partition(":")[2].rsplit(".", 1)[-1]
    generator.print_assertions(root, name)


def run_join(args: argparse.Namespace) -> None:
    rows = join_files(
        args.left,
        args.left_sep,
        args.left_column,
        args.right,
        args.right_sep,
        args.right_column,
        how=args.how,
    )
    for row in rows:
        right = row.right if row.right is not None else ""
        sys.stdout.write(f"{row.left}{args.output_sep}{right}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="assertify",
        description="Regression assertion generator and delimited file join",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Assertions for a module-level object
  assertify snapshot myapp.fixtures:SAMPLE_ORDER --name order --include-null

  # unittest-style output, skipping a session type
  assertify snapshot myapp.fixtures:SAMPLE_ORDER --dialect unittest --ignore myapp.db:Session

  # Left join two ';'-separated files on column 6 and column 0
  assertify join names.txt dates.txt --left-column 6 --right-column 0 --how left
        """,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    snapshot_parser = subparsers.add_parser("snapshot", help="Print assertions for an object")
    snapshot_parser.add_argument("target", help="Object to describe, as MODULE:ATTRIBUTE")
    snapshot_parser.add_argument(
        "--name", default=None, help="Name of the object in the test (default: attribute name)"
    )
    snapshot_parser.add_argument(
        "--include-null", action="store_true", help="Assert accessors returning None"
    )
    snapshot_parser.add_argument(
        "--include-empty-lists", action="store_true", help="Assert the length of empty sequences"
    )
    snapshot_parser.add_argument(
        "--include-ids", action="store_true", help="Keep identifier-like accessors"
    )
    snapshot_parser.add_argument(
        "--ignore",
        action="append",
        default=[],
        metavar="MODULE:TYPE",
        help="Skip instances of this type (repeatable)",
    )
    snapshot_parser.add_argument(
        "--max-depth",
        type=int,
        default=DEFAULT_MAX_DEPTH,
        help=f"Maximum nesting depth (default: {DEFAULT_MAX_DEPTH})",
    )
    snapshot_parser.add_argument(
        "--dialect",
        choices=DIALECTS,
        default=PYTEST_DIALECT,
        help=f"Assertion style (default: {PYTEST_DIALECT})",
    )
    snapshot_parser.set_defaults(handler=run_snapshot)

    join_parser = subparsers.add_parser("join", help="Join two delimited text files")
    join_parser.add_argument("left", help="Left file")
    join_parser.add_argument("right", help="Right file")
    join_parser.add_argument("--left-column", type=int, required=True, help="Join column of LEFT")
    join_parser.add_argument("--right-column", type=int, required=True, help="Join column of RIGHT")
    join_parser.add_argument("--left-sep", default=";", help="Separator of LEFT (default: ;)")
    join_parser.add_argument("--right-sep", default=";", help="Separator of RIGHT (default: ;)")
    join_parser.add_argument(
        "--output-sep", default=";", help="Separator between joined lines (default: ;)"
    )
    join_parser.add_argument("--how", choices=JOIN_HOW, default="inner", help="Join type")
    join_parser.set_defaults(handler=run_join)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Parse command-line arguments and run the selected subcommand."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s:%(name)s:%(message)s",
    )

    try:
        args.handler(args)
    except AssertifyError as e:
        logger.error("Error: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
