"""Resolvers for references that map to one conventional file.

Models, controllers and services each live at a path derived from the
symbol name alone; namespaced references also try the nested directory
first (``Admin::PostsController`` -> ``app/controllers/admin/``).
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from rails_goto.naming.conventions import (
    classify,
    namespace_dirs,
    singularize,
    strip_suffix,
    to_snake_case,
)
from rails_goto.scan.files import file_start, find_line_in_file

if TYPE_CHECKING:
    from pathlib import Path

    from rails_goto.contract.models import ResolvedLocation, SourceReference
    from rails_goto.resolve.context import ResolutionContext


def _candidate_paths(
    base_dir: Path,
    namespace_path: tuple[str, ...],
    filename: str,
) -> list[Path]:
    candidates: list[Path] = []
    nested = namespace_dirs(namespace_path)
    if nested:
        candidates.append(base_dir.joinpath(*nested, filename))
    candidates.append(base_dir / filename)
    return candidates


def _class_declaration(class_name: str) -> re.Pattern[str]:
    return re.compile(rf"class\s+(?:[A-Z]\w*::)*{re.escape(class_name)}\b")


def _first_existing(candidates: list[Path]) -> Path | None:
    for candidate in candidates:
        if candidate.is_file():
            return candidate
    return None


def _resolve_class_file(
    candidates: list[Path],
    class_name: str | None,
    ctx: ResolutionContext,
) -> ResolvedLocation | None:
    path = _first_existing(candidates)
    if path is None:
        ctx.logger.debug(f"No file at {', '.join(str(c) for c in candidates)}")
        return None

    if class_name is not None:
        location = find_line_in_file(
            path, _class_declaration(class_name), logger=ctx.logger
        )
        if location is not None:
            return location

    return file_start(path)


def resolve_model(
    reference: SourceReference, ctx: ResolutionContext
) -> ResolvedLocation | None:
    """``has_many :blog_posts`` -> ``app/models/blog_post.rb`` at ``class BlogPost``."""
    name = to_snake_case(singularize(reference.word))
    candidates = _candidate_paths(
        ctx.app_path("models"), reference.namespace_path, f"{name}.rb"
    )
    return _resolve_class_file(candidates, classify(name), ctx)


def resolve_controller(
    reference: SourceReference, ctx: ResolutionContext
) -> ResolvedLocation | None:
    """``PostsController`` -> ``app/controllers/posts_controller.rb``."""
    name = to_snake_case(strip_suffix(reference.word, "Controller"))
    candidates = _candidate_paths(
        ctx.app_path("controllers"),
        reference.namespace_path,
        f"{name}_controller.rb",
    )
    return _resolve_class_file(candidates, f"{classify(name)}Controller", ctx)


def resolve_service(
    reference: SourceReference, ctx: ResolutionContext
) -> ResolvedLocation | None:
    """``PaymentService`` -> start of ``app/services/payment_service.rb``."""
    name = to_snake_case(strip_suffix(reference.word, "Service"))
    candidates = _candidate_paths(
        ctx.app_path("services"),
        reference.namespace_path,
        f"{name}_service.rb",
    )
    return _resolve_class_file(candidates, None, ctx)
