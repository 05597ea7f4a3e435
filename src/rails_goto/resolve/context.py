"""Per-resolution state handed to every category resolver."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from rails_goto.errors import ReadFailureError
from rails_goto.log import get_logger
from rails_goto.rules.config import ResolverConfig
from rails_goto.scan.files import find_files, read_source

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from pathlib import Path

    from loguru import Logger

RUBY_FILE = re.compile(r"\.rb$")


@dataclass(frozen=True)
class ResolutionContext:
    """Everything a resolver may read: the root, the current file and knobs.

    Built fresh for each call and never shared, so resolvers hold no state
    between lookups.
    """

    root: Path
    current_file: Path | None = None
    current_lines: tuple[str, ...] | None = None
    config: ResolverConfig = field(default_factory=ResolverConfig)
    logger: Logger = field(default_factory=get_logger)
    ignore: Callable[[str], bool] | None = None

    def app_path(self, *parts: str) -> Path:
        return self.root.joinpath("app", *parts)

    def find_files(
        self, directory: Path, pattern: re.Pattern[str] | str
    ) -> Iterator[Path]:
        return find_files(
            directory,
            pattern,
            follow_symlinks=self.config.follow_symlinks,
            max_depth=self.config.max_depth,
            ignore=self.ignore,
            logger=self.logger,
        )

    def current_file_lines(self) -> tuple[str, ...]:
        """Lines of the originating file, preferring the editor's buffer."""
        if self.current_lines is not None:
            return self.current_lines
        if self.current_file is None:
            return ()
        try:
            return tuple(read_source(self.current_file).splitlines())
        except ReadFailureError as exc:
            self.logger.warning(str(exc))
            return ()
