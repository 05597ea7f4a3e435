"""Method lookup for callbacks and otherwise unclassified words."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from rails_goto.naming.conventions import controller_name_from_path
from rails_goto.scan.files import find_line_in_file, find_line_matching

if TYPE_CHECKING:
    from rails_goto.contract.models import ResolvedLocation, SourceReference
    from rails_goto.resolve.context import ResolutionContext


def _method_definition(name: str) -> re.Pattern[str]:
    return re.compile(rf"\bdef\s+(?:self\.)?{re.escape(name)}\b")


def resolve_method(
    reference: SourceReference, ctx: ResolutionContext
) -> ResolvedLocation | None:
    """Find ``def <word>`` in the current file, then in the controller's helper.

    The helper step only applies when the current file is a controller:
    ``app/controllers/admin/posts_controller.rb`` falls back to
    ``app/helpers/admin/posts_helper.rb``.
    """
    if ctx.current_file is None:
        return None

    definition = _method_definition(reference.word)
    location = find_line_matching(
        ctx.current_file_lines(), definition, ctx.current_file
    )
    if location is not None:
        return location

    controller_name = controller_name_from_path(ctx.current_file)
    if controller_name is None:
        return None

    helper_path = ctx.app_path("helpers", f"{controller_name}_helper.rb")
    if not helper_path.is_file():
        return None
    return find_line_in_file(helper_path, definition, logger=ctx.logger)
