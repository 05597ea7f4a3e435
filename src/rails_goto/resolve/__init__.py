"""Category resolvers and the dispatch table that selects one."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rails_goto.contract.models import ReferenceCategory
from rails_goto.resolve.classes import (
    resolve_controller,
    resolve_model,
    resolve_service,
)
from rails_goto.resolve.context import ResolutionContext
from rails_goto.resolve.methods import resolve_method
from rails_goto.resolve.modules import resolve_helper, resolve_mailer
from rails_goto.resolve.views import extract_partial_name, resolve_view

if TYPE_CHECKING:
    from collections.abc import Callable

    from rails_goto.contract.models import ResolvedLocation, SourceReference

    Resolver = Callable[[SourceReference, ResolutionContext], ResolvedLocation | None]

RESOLVERS: dict[ReferenceCategory, Resolver] = {
    ReferenceCategory.SERVICE: resolve_service,
    ReferenceCategory.CONTROLLER: resolve_controller,
    ReferenceCategory.HELPER: resolve_helper,
    ReferenceCategory.MAILER: resolve_mailer,
    ReferenceCategory.VIEW: resolve_view,
    ReferenceCategory.CALLBACK: resolve_method,
    ReferenceCategory.MODEL: resolve_model,
    ReferenceCategory.GENERIC_METHOD: resolve_method,
}


def resolve_reference(
    category: ReferenceCategory,
    reference: SourceReference,
    ctx: ResolutionContext,
) -> ResolvedLocation | None:
    """Run the resolver registered for ``category``."""
    return RESOLVERS[category](reference, ctx)


__all__ = [
    "RESOLVERS",
    "ResolutionContext",
    "extract_partial_name",
    "resolve_controller",
    "resolve_helper",
    "resolve_mailer",
    "resolve_method",
    "resolve_model",
    "resolve_reference",
    "resolve_service",
    "resolve_view",
]
