"""Filesystem search for convention-based Rails layouts."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import TYPE_CHECKING, cast

from gitignore_parser import parse_gitignore  # type: ignore[import-untyped]

from rails_goto.contract.models import ResolvedLocation
from rails_goto.errors import ReadFailureError
from rails_goto.log import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator, Sequence

    from loguru import Logger


def build_gitignore_matcher(root: Path) -> Callable[[str], bool] | None:
    """Build a predicate from the root ``.gitignore``, or ``None`` without one.

    Raises:
        OSError: If the ``.gitignore`` exists but cannot be read.
    """
    gitignore_path = root / ".gitignore"
    if not gitignore_path.is_file():
        return None
    return cast("Callable[[str], bool]", parse_gitignore(gitignore_path))


def _compile(pattern: re.Pattern[str] | str) -> re.Pattern[str]:
    return pattern if isinstance(pattern, re.Pattern) else re.compile(pattern)


def _children(
    directory: Path,
    depth: int,
    *,
    follow_symlinks: bool,
    ignore: Callable[[str], bool] | None,
    logger: Logger,
) -> list[tuple[Path, int, bool]]:
    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda entry: entry.name)
    except OSError as exc:
        logger.warning(f"Skipping unreadable directory {directory}: {exc}")
        return []

    children: list[tuple[Path, int, bool]] = []
    for entry in entries:
        if ignore is not None and ignore(entry.path):
            continue
        try:
            is_dir = entry.is_dir(follow_symlinks=follow_symlinks)
            is_link = entry.is_symlink()
        except OSError as exc:
            logger.warning(f"Skipping unreadable entry {entry.path}: {exc}")
            continue
        if is_link and not follow_symlinks:
            continue
        children.append((Path(entry.path), depth + 1, is_dir))
    return children


def find_files(
    root: Path,
    pattern: re.Pattern[str] | str,
    *,
    follow_symlinks: bool = True,
    max_depth: int | None = None,
    ignore: Callable[[str], bool] | None = None,
    logger: Logger | None = None,
) -> Iterator[Path]:
    """Walk ``root`` depth-first and yield files whose name matches ``pattern``.

    Entries of each directory are visited in lexical order, so the sequence
    is stable for an unchanged tree. Results are produced lazily: callers
    that stop at the first hit never list the rest of the tree.

    Args:
        root: Directory to search. A missing root yields nothing.
        pattern: Regex searched against the bare filename.
        follow_symlinks: Descend into symlinked directories. The real path
            of every visited directory is remembered, so a link cycle is
            entered at most once.
        max_depth: Maximum directory depth below ``root`` (``None`` = no limit).
        ignore: Optional predicate on the path string; matching entries are
            skipped (see :func:`build_gitignore_matcher`).
        logger: Logger for skipped directories.

    Yields:
        Paths of matching files.
    """
    log = logger or get_logger()
    regex = _compile(pattern)

    if not root.is_dir():
        log.debug(f"Search root is not a directory: {root}")
        return

    visited: set[str] = set()
    stack: list[tuple[Path, int, bool]] = [(root, 0, True)]

    while stack:
        path, depth, is_dir = stack.pop()

        if not is_dir:
            if regex.search(path.name):
                yield path
            continue

        real_path = os.path.realpath(path)
        if real_path in visited:
            log.debug(f"Skipping already visited directory {path}")
            continue
        visited.add(real_path)

        if max_depth is not None and depth > max_depth:
            continue

        children = _children(
            path,
            depth,
            follow_symlinks=follow_symlinks,
            ignore=ignore,
            logger=log,
        )
        stack.extend(reversed(children))


def read_source(file_path: Path) -> str:
    """Read a Ruby/ERB source file as UTF-8.

    Raises:
        ReadFailureError: If the file cannot be read or decoded.
    """
    try:
        return file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ReadFailureError(file_path, exc) from exc


def position_for_offset(text: str, offset: int) -> tuple[int, int]:
    """Return the 0-based ``(line, column)`` of a character offset in ``text``."""
    line = text.count("\n", 0, offset)
    line_start = text.rfind("\n", 0, offset) + 1
    return line, offset - line_start


def _location_for_match(
    file_path: Path, text: str, match: re.Match[str]
) -> ResolvedLocation:
    line, column = position_for_offset(text, match.start())
    end_line, end_column = position_for_offset(text, match.end())
    return ResolvedLocation(
        file_path=str(file_path),
        line=line,
        column=column,
        end_line=end_line,
        end_column=end_column,
    )


def file_start(file_path: Path) -> ResolvedLocation:
    return ResolvedLocation(file_path=str(file_path), line=0, column=0)


def find_definition_in_file(
    file_path: Path,
    leaf_name: str,
    namespace: str = "",
    *,
    logger: Logger | None = None,
) -> ResolvedLocation | None:
    """Search a file's text for the ``module``/``class`` declaring ``leaf_name``.

    Tiers, first hit wins:

    1. ``module Namespace::Leaf`` / ``class Namespace::Leaf``.
    2. A bare ``module Leaf`` / ``class Leaf`` anywhere in the file.
    3. With a namespace only: the file contains ``module Namespace`` and,
       separately, ``module Leaf`` or ``class Leaf``. Nesting is not
       checked, so this returns the start of the file.

    A read failure is logged and reported as no match.
    """
    log = logger or get_logger()
    try:
        content = read_source(file_path)
    except ReadFailureError as exc:
        log.warning(str(exc))
        return None

    leaf = re.escape(leaf_name)

    if namespace:
        qualified = "::".join(re.escape(part) for part in namespace.split("::"))
        match = re.search(rf"\b(?:module|class)\s+{qualified}::{leaf}\b", content)
        if match:
            return _location_for_match(file_path, content, match)

    match = re.search(rf"\b(?:module|class)\s+{leaf}\b", content)
    if match:
        return _location_for_match(file_path, content, match)

    if (
        namespace
        and f"module {namespace}" in content
        and (f"module {leaf_name}" in content or f"class {leaf_name}" in content)
    ):
        log.debug(f"Co-located {namespace} and {leaf_name} in {file_path}")
        return file_start(file_path)

    return None


def find_line_matching(
    lines: Sequence[str],
    regex: re.Pattern[str],
    file_path: Path,
) -> ResolvedLocation | None:
    """Return the first line in ``lines`` where ``regex`` matches."""
    for index, text in enumerate(lines):
        match = regex.search(text)
        if match:
            return ResolvedLocation(
                file_path=str(file_path),
                line=index,
                column=match.start(),
                end_line=index,
                end_column=match.end(),
            )
    return None


def find_line_in_file(
    file_path: Path,
    regex: re.Pattern[str],
    *,
    logger: Logger | None = None,
) -> ResolvedLocation | None:
    """Line-by-line variant of :func:`find_line_matching` reading from disk."""
    log = logger or get_logger()
    try:
        content = read_source(file_path)
    except ReadFailureError as exc:
        log.warning(str(exc))
        return None
    return find_line_matching(content.splitlines(), regex, file_path)


__all__ = [
    "build_gitignore_matcher",
    "file_start",
    "find_definition_in_file",
    "find_files",
    "find_line_in_file",
    "find_line_matching",
    "position_for_offset",
    "read_source",
]
