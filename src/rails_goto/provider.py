"""Go-to-definition entry point.

Ties the pieces together for one cursor position: extract the word and its
namespace, classify the line, run the matching category resolver and fall
back to a plain method lookup. Every call re-reads the filesystem; nothing
is cached between calls.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import TYPE_CHECKING

from rails_goto.classify.references import classify_line
from rails_goto.contract.models import ReferenceCategory, SourceReference
from rails_goto.errors import (
    DefinitionNotFoundError,
    NoWorkspaceError,
    ResolutionError,
)
from rails_goto.log import get_logger
from rails_goto.resolve import ResolutionContext, resolve_reference
from rails_goto.rules.config import ConfigError, ResolverConfig, load_config
from rails_goto.scan.files import build_gitignore_matcher

if TYPE_CHECKING:
    from collections.abc import Sequence

    from loguru import Logger

    from rails_goto.contract.models import ResolvedLocation
    from rails_goto.document import Document, Position

_NAMESPACED_TAIL = re.compile(r"(\w+(?:::\w+)*)::(\w+)$", re.ASCII)

# Categories whose resolver already is the method lookup.
_METHOD_CATEGORIES = frozenset(
    {ReferenceCategory.CALLBACK, ReferenceCategory.GENERIC_METHOD}
)


def _namespace_path(line: str, word: str, word_end: int) -> tuple[str, ...]:
    match = _NAMESPACED_TAIL.search(line[:word_end])
    if match and match.group(2) == word:
        return tuple(match.group(1).split("::"))

    match = re.search(
        rf"(\w+(?:::\w+)*)::{re.escape(word)}\b", line, flags=re.ASCII
    )
    if match:
        return tuple(match.group(1).split("::"))
    return ()


def extract_reference(
    document: Document, position: Position
) -> SourceReference | None:
    """Build the :class:`SourceReference` under the cursor, if any.

    The namespace comes from the ``Foo::Bar::`` run directly before the
    word; failing that, from the first ``...::<word>`` occurrence on the
    line.
    """
    word_range = document.word_range_at(position)
    if word_range is None:
        return None

    line = document.line_text(position.line)
    word = line[word_range.start : word_range.end]
    return SourceReference(
        word=word,
        line=line,
        cursor_column=position.character,
        namespace_path=_namespace_path(line, word, word_range.end),
    )


class DefinitionProvider:
    """Resolves the definition of the symbol under a cursor.

    Only the first workspace folder is used as the project root.

    Args:
        workspace_folders: Configured workspace roots.
        config: Fixed configuration. When omitted, ``rails_goto.toml`` is
            read from the root on every call.
        logger: Logger to bind per-resolution context onto.
    """

    def __init__(
        self,
        workspace_folders: Sequence[Path | str] = (),
        *,
        config: ResolverConfig | None = None,
        logger: Logger | None = None,
    ) -> None:
        self._workspace_folders = [Path(folder) for folder in workspace_folders]
        self._config = config
        self._logger = logger or get_logger()

    def provide_definition(
        self, document: Document, position: Position
    ) -> ResolvedLocation | None:
        """Return the definition location, or ``None``. Never raises."""
        try:
            return self._resolve(document, position)
        except ResolutionError as exc:
            self._logger.debug(f"No definition: {exc}")
        except OSError as exc:
            self._logger.warning(f"Filesystem error during resolution: {exc}")
        except ValueError as exc:
            self._logger.warning(f"Rejected reference: {exc}")
        return None

    def go_to_definition(
        self, document: Document, position: Position
    ) -> ResolvedLocation | None:
        """Explicit "jump to definition" command; same result as hover/click."""
        location = self.provide_definition(document, position)
        if location is None:
            self._logger.info("No definition found")
        return location

    def _root(self) -> Path:
        if not self._workspace_folders:
            msg = "No workspace folder is open"
            raise NoWorkspaceError(msg)
        return self._workspace_folders[0]

    def _load_config(self, root: Path) -> ResolverConfig:
        if self._config is not None:
            return self._config
        try:
            return load_config(root)
        except ConfigError as exc:
            self._logger.warning(f"{exc}; using defaults")
            return ResolverConfig()

    def _context(
        self,
        root: Path,
        document: Document,
        config: ResolverConfig,
        logger: Logger,
    ) -> ResolutionContext:
        ignore = None
        if config.respect_gitignore:
            try:
                ignore = build_gitignore_matcher(root)
            except (OSError, UnicodeDecodeError) as exc:
                logger.warning(f"Ignoring unreadable .gitignore in {root}: {exc}")
        return ResolutionContext(
            root=root,
            current_file=document.file_path,
            current_lines=tuple(
                document.line_text(index) for index in range(document.line_count)
            ),
            config=config,
            logger=logger,
            ignore=ignore,
        )

    def _resolve(self, document: Document, position: Position) -> ResolvedLocation:
        root = self._root()

        reference = extract_reference(document, position)
        if reference is None:
            msg = f"No identifier at {position.line}:{position.character}"
            raise DefinitionNotFoundError(msg)

        config = self._load_config(root)
        category = classify_line(reference.line, config.category_order)
        logger = self._logger.bind(word=reference.word, category=category.value)
        logger.debug(f"Looking for definition of {reference.qualified_name}")

        ctx = self._context(root, document, config, logger)
        location = resolve_reference(category, reference, ctx)

        if (
            location is None
            and config.method_fallback
            and category not in _METHOD_CATEGORIES
        ):
            logger.debug("Category lookup failed; trying method definitions")
            location = resolve_reference(
                ReferenceCategory.GENERIC_METHOD, reference, ctx
            )

        if location is None:
            msg = f"{reference.qualified_name} ({category.value})"
            raise DefinitionNotFoundError(msg)
        return location


def resolve_definition(
    document: Document,
    position: Position,
    workspace_folders: Sequence[Path | str],
    *,
    config: ResolverConfig | None = None,
    logger: Logger | None = None,
) -> ResolvedLocation | None:
    """Resolve the symbol under ``position`` in ``document``.

    Returns:
        The definition location, or ``None`` when there is no workspace,
        no identifier under the cursor, or no heuristic matched.
    """
    provider = DefinitionProvider(workspace_folders, config=config, logger=logger)
    return provider.provide_definition(document, position)


__all__ = ["DefinitionProvider", "extract_reference", "resolve_definition"]
