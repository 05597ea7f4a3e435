"""Minimal document model consumed by the resolution facade.

Editors plug in through :class:`Document`; :class:`TextDocument` is the
in-memory implementation used by the CLI and tests.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

_IDENTIFIER = re.compile(r"\w+", re.ASCII)


@dataclass(frozen=True)
class Position:
    """0-based cursor position."""

    line: int
    character: int


@dataclass(frozen=True)
class WordRange:
    line: int
    start: int
    end: int


class Document(Protocol):
    @property
    def file_path(self) -> Path | None: ...

    @property
    def line_count(self) -> int: ...

    def line_text(self, index: int) -> str: ...

    def word_range_at(self, position: Position) -> WordRange | None: ...


def word_range_in_line(text: str, line: int, character: int) -> WordRange | None:
    """Identifier span containing ``character`` (a cursor just after a word counts)."""
    for match in _IDENTIFIER.finditer(text):
        if match.start() <= character <= match.end():
            return WordRange(line=line, start=match.start(), end=match.end())
        if match.start() > character:
            break
    return None


class TextDocument:
    """A document backed by a string, optionally tied to a path on disk."""

    def __init__(self, text: str, file_path: Path | str | None = None) -> None:
        self._lines = text.splitlines() or [""]
        self._file_path = Path(file_path) if file_path is not None else None

    @classmethod
    def from_path(cls, file_path: Path | str) -> TextDocument:
        path = Path(file_path)
        return cls(path.read_text(encoding="utf-8"), path)

    @property
    def file_path(self) -> Path | None:
        return self._file_path

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def line_text(self, index: int) -> str:
        return self._lines[index]

    def word_range_at(self, position: Position) -> WordRange | None:
        if not 0 <= position.line < len(self._lines):
            return None
        return word_range_in_line(
            self._lines[position.line], position.line, position.character
        )


__all__ = ["Document", "Position", "TextDocument", "WordRange", "word_range_in_line"]
