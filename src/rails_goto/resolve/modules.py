"""Helper and mailer resolution by directory search.

Helpers and mailers are frequently namespaced and not always stored where
their name suggests, so the lookup widens in stages:

1. files under ``app/helpers`` (or ``app/mailers``) whose name contains the
   snake-cased base name or the lowercased namespace;
2. every other Ruby file in that directory;
3. the shared fallback directories (``lib``, ``app/models``,
   ``app/controllers`` by default).

Each file is checked with the tiered content search in
:func:`rails_goto.scan.files.find_definition_in_file`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rails_goto.naming.conventions import split_namespace, strip_suffix, to_snake_case
from rails_goto.resolve.context import RUBY_FILE
from rails_goto.scan.files import find_definition_in_file

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from rails_goto.contract.models import ResolvedLocation, SourceReference
    from rails_goto.resolve.context import ResolutionContext


def _filename_hints(base_name: str, namespace: str) -> list[str]:
    hints = [base_name]
    if namespace:
        hints.append(namespace.lower().replace("::", "_"))
    return hints


def _first_definition(
    files: Iterable[Path],
    leaf_name: str,
    namespace: str,
    ctx: ResolutionContext,
) -> ResolvedLocation | None:
    for file_path in files:
        location = find_definition_in_file(
            file_path, leaf_name, namespace, logger=ctx.logger
        )
        if location is not None:
            ctx.logger.debug(f"Found {leaf_name} in {file_path}")
            return location
    return None


def _resolve_module(
    qualified_name: str,
    ctx: ResolutionContext,
    *,
    directory: str,
    suffix: str,
) -> ResolvedLocation | None:
    namespace, leaf_name = split_namespace(qualified_name)
    base_name = to_snake_case(strip_suffix(leaf_name, suffix))
    ctx.logger.debug(
        f"Searching app/{directory} for {leaf_name} "
        f"(namespace={namespace!r}, base={base_name!r})"
    )

    ruby_files = list(ctx.find_files(ctx.app_path(directory), RUBY_FILE))
    hints = _filename_hints(base_name, namespace)
    by_name = [
        path for path in ruby_files if any(hint in path.name.lower() for hint in hints)
    ]
    ctx.logger.debug(f"{len(by_name)} of {len(ruby_files)} files match by name")

    location = _first_definition(by_name, leaf_name, namespace, ctx)
    if location is not None:
        return location

    checked = set(by_name)
    remaining = (path for path in ruby_files if path not in checked)
    location = _first_definition(remaining, leaf_name, namespace, ctx)
    if location is not None:
        return location

    for fallback in ctx.config.fallback_dirs:
        fallback_dir = ctx.root / fallback
        if not fallback_dir.is_dir():
            continue
        location = _first_definition(
            ctx.find_files(fallback_dir, RUBY_FILE), leaf_name, namespace, ctx
        )
        if location is not None:
            return location

    ctx.logger.debug(f"{qualified_name} not found in any file")
    return None


def resolve_helper(
    reference: SourceReference, ctx: ResolutionContext
) -> ResolvedLocation | None:
    return _resolve_module(
        reference.qualified_name, ctx, directory="helpers", suffix="Helper"
    )


def resolve_mailer(
    reference: SourceReference, ctx: ResolutionContext
) -> ResolvedLocation | None:
    return _resolve_module(
        reference.qualified_name, ctx, directory="mailers", suffix="Mailer"
    )
