"""View and partial resolution for ``render`` calls."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from rails_goto.naming.conventions import controller_name_from_path
from rails_goto.scan.files import file_start

if TYPE_CHECKING:
    from pathlib import Path

    from rails_goto.contract.models import ResolvedLocation, SourceReference
    from rails_goto.resolve.context import ResolutionContext

_QUOTED_RENDER = re.compile(r"render[\s(]+(?:partial\s*:\s*)?['\"](.+?)['\"]")
_SYMBOL_RENDER = re.compile(r"render[\s(]+:(.+?)(?:\s|,|\)|$)")


def extract_partial_name(word: str, line: str) -> str:
    """Return the view name a ``render`` call refers to.

    The quoted or ``:symbol`` argument wins over the word under the cursor.
    When the line mentions ``partial`` the last path segment gets the
    leading underscore Rails uses for partial filenames, so
    ``render partial: "shared/form"`` becomes ``shared/_form``.
    """
    match = _QUOTED_RENDER.search(line) or _SYMBOL_RENDER.search(line)
    partial = match.group(1) if match else word

    directory, _, leaf = partial.rpartition("/")
    if not leaf.startswith("_") and "partial" in line:
        leaf = f"_{leaf}"
    return f"{directory}/{leaf}" if directory else leaf


def _view_filename_pattern(
    leaf: str, extensions: tuple[str, ...]
) -> re.Pattern[str]:
    underscore = "" if leaf.startswith("_") else "_?"
    alternatives = "|".join(re.escape(ext) for ext in extensions)
    return re.compile(
        rf"^{underscore}{re.escape(leaf)}\.(?:{alternatives})(?:\.\w+)*$"
    )


def _in_directory(path: Path, views_dir: Path, directory: str) -> bool:
    if not directory:
        return True
    parent = path.parent.relative_to(views_dir).as_posix()
    return parent == directory or parent.endswith(f"/{directory}")


def resolve_view(
    reference: SourceReference, ctx: ResolutionContext
) -> ResolvedLocation | None:
    """Resolve ``render`` targets under ``app/views``.

    Inside a controller the controller's own view directory is tried first
    (``app/views/<controller>/<partial>.html.erb``); otherwise, or when that
    file is missing, the first matching template anywhere under
    ``app/views`` is returned.
    """
    partial = extract_partial_name(reference.word, reference.line)
    views_dir = ctx.app_path("views")

    controller_name = controller_name_from_path(ctx.current_file)
    if controller_name:
        scoped = (
            views_dir / f"{partial}.html.erb"
            if "/" in partial
            else views_dir / controller_name / f"{partial}.html.erb"
        )
        if scoped.is_file():
            return file_start(scoped)

    directory, _, leaf = partial.rpartition("/")
    pattern = _view_filename_pattern(leaf, ctx.config.view_extensions)
    for view_file in ctx.find_files(views_dir, pattern):
        if _in_directory(view_file, views_dir, directory):
            return file_start(view_file)

    ctx.logger.debug(f"No template for {partial!r} under {views_dir}")
    return None
