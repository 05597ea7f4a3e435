"""Command-line interface for rails-goto."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

import orjson

from rails_goto.classify.references import classify_line
from rails_goto.document import Position, TextDocument
from rails_goto.log import configure_logging
from rails_goto.provider import DefinitionProvider


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="rails-goto")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log search progress to stderr",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    resolve_parser = subparsers.add_parser(
        "resolve", help="Resolve the definition under a cursor position"
    )
    resolve_parser.add_argument("file", help="Ruby/ERB file containing the reference")
    resolve_parser.add_argument("line", type=int, help="0-based line number")
    resolve_parser.add_argument("column", type=int, help="0-based column")
    resolve_parser.add_argument(
        "--root",
        default=".",
        help="Rails application root (default: .)",
    )

    classify_parser = subparsers.add_parser(
        "classify", help="Print the reference category of a line of source"
    )
    classify_parser.add_argument("text", help="Line of Ruby source")

    return parser


def _handle_resolve(file: str, line: int, column: int, root: str) -> int:
    file_path = Path(file).expanduser().resolve()
    root_path = Path(root).expanduser().resolve()

    try:
        document = TextDocument.from_path(file_path)
    except (OSError, UnicodeDecodeError) as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2

    provider = DefinitionProvider([root_path])
    location = provider.go_to_definition(document, Position(line, column))
    if location is None:
        sys.stderr.write("No definition found\n")
        return 1

    payload = orjson.dumps(
        location.model_dump(), option=orjson.OPT_SORT_KEYS | orjson.OPT_INDENT_2
    )
    sys.stdout.write(payload.decode("utf-8") + "\n")
    return 0


def _handle_classify(text: str) -> int:
    sys.stdout.write(f"{classify_line(text).value}\n")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=args.verbose)

    if args.command == "resolve":
        return _handle_resolve(args.file, args.line, args.column, args.root)

    if args.command == "classify":
        return _handle_classify(args.text)

    raise AssertionError


if __name__ == "__main__":
    raise SystemExit(main())
