#!/usr/bin/env python3
"""
Module: solutionlib.__main__

Diagnostic command line for solution files:
    python -m solutionlib inspect my.solsqlt
    python -m solutionlib convert my.solsqlt my.solxml

Output is plain text for people, not a stable interface.
"""

import argparse
import logging
import sys
from collections.abc import Sequence

from solutionlib.config import APP_NAME, APP_VERSION
from solutionlib.core.solution_storage import is_xml_path, load_model, save_model
from solutionlib.domain.errors import SolutionStoreError
from solutionlib.domain.item_types import ITEM_TYPE_TABLE, check_item_type_snapshot
from solutionlib.domain.results import StoreRecordCounts
from solutionlib.domain.solution_model import SolutionModel
from solutionlib.infra.db.solution_db import SolutionDB
from solutionlib.utils.logging.logger_factory import get_cached_logger
from solutionlib.utils.logging.logger_setup import ConfigureLogger

logger = get_cached_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=f"python -m {APP_NAME}",
        description="Inspect and convert solution files (.solsqlt / .solxml)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {APP_VERSION}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output")

    subparsers = parser.add_subparsers(dest="command", required=True)

    inspect_parser = subparsers.add_parser(
        "inspect", help="Print item types, record counts and the tree outline"
    )
    inspect_parser.add_argument("path", help="Solution file to inspect")

    convert_parser = subparsers.add_parser(
        "convert", help="Load a solution file and save it in the format of DEST"
    )
    convert_parser.add_argument("source", help="Solution file to read")
    convert_parser.add_argument("dest", help="Solution file to write (.solxml selects XML)")

    return parser


def format_outline(model: SolutionModel) -> list[str]:
    """One line per item, indented by level, in document order."""
    lines: list[str] = []
    if model.root is None:
        return lines

    stack = [model.root]
    while stack:
        item = stack.pop()
        marker = "-" if item.is_expanded else "+"
        lines.append(f"{'  ' * item.level}{marker} {item.display_name} [{item.item_type.name}]")
        stack.extend(reversed(item.children))
    return lines


def _inspect(path: str) -> int:
    if is_xml_path(path):
        model, counts = load_model(path)
    else:
        with SolutionDB() as db:
            db.open_for_read(path)
            snapshot = db.read_item_type_snapshot()
            print("Item types:")
            check = check_item_type_snapshot(snapshot)
            for code, name in snapshot.items():
                note = "" if ITEM_TYPE_TABLE.get(code) == name else "  (unknown to this version)"
                print(f"  {code:3d}  {name}{note}")
            if not check.is_compatible:
                print(f"Item types are not compatible: {check.describe()}")
                return 1
            db.validate_item_type_snapshot()
            model, item_count = db.read_hierarchy()
        counts = StoreRecordCounts(len(snapshot), item_count)

    print(f"Records: {counts}")
    for line in format_outline(model):
        print(line)
    return 0


def _convert(source: str, dest: str) -> int:
    model, read_counts = load_model(source)
    print(f"Read:    {read_counts}")
    written_counts = save_model(dest, model)
    print(f"Written: {written_counts}")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    ConfigureLogger(
        log_name=APP_NAME,
        console_level=logging.DEBUG if args.verbose else logging.WARNING,
        logger_name=APP_NAME,
        to_file=False,
    )
    logger.debug("[CLI] Running %s", args.command, extra={"dev_only": True})

    try:
        if args.command == "inspect":
            return _inspect(args.path)
        return _convert(args.source, args.dest)
    except SolutionStoreError as e:
        logger.debug("[CLI] %s failed", args.command, exc_info=True)
        print(f"error ({e.kind.value}): {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
