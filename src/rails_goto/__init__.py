"""Convention-based go-to-definition for Rails source trees."""

from rails_goto.classify.references import DEFAULT_CATEGORY_ORDER, classify_line
from rails_goto.contract.models import (
    ReferenceCategory,
    ResolvedLocation,
    SourceReference,
)
from rails_goto.document import Document, Position, TextDocument
from rails_goto.provider import (
    DefinitionProvider,
    extract_reference,
    resolve_definition,
)
from rails_goto.rules.config import ConfigError, ResolverConfig, load_config

__all__ = [
    "DEFAULT_CATEGORY_ORDER",
    "ConfigError",
    "DefinitionProvider",
    "Document",
    "Position",
    "ReferenceCategory",
    "ResolvedLocation",
    "ResolverConfig",
    "SourceReference",
    "TextDocument",
    "classify_line",
    "extract_reference",
    "load_config",
    "resolve_definition",
]
