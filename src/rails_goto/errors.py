"""Error taxonomy for definition resolution.

None of these escape the public entry point: a missing workspace or an
exhausted search both surface to callers as ``None``, and read failures are
logged where they occur.
"""

from __future__ import annotations


class ResolutionError(Exception):
    """Base class for failures inside a single resolution."""


class NoWorkspaceError(ResolutionError):
    """Raised when no workspace folder is configured."""


class DefinitionNotFoundError(ResolutionError):
    """Raised when every heuristic was tried without a match."""


class ReadFailureError(ResolutionError):
    """Raised when a specific path could not be listed or read."""

    def __init__(self, path: object, reason: object) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to read {path}: {reason}")
