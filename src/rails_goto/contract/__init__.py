"""Data contract for rails_goto resolutions."""

from rails_goto.contract.models import (
    ReferenceCategory,
    ResolvedLocation,
    SourceReference,
)

__all__ = ["ReferenceCategory", "ResolvedLocation", "SourceReference"]
