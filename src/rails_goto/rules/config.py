"""Workspace configuration loaded from ``rails_goto.toml``."""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from rails_goto.classify.references import DEFAULT_CATEGORY_ORDER
from rails_goto.contract.models import ReferenceCategory

CONFIG_FILENAME = "rails_goto.toml"

DEFAULT_FALLBACK_DIRS = ("lib", "app/models", "app/controllers")
DEFAULT_VIEW_EXTENSIONS = ("html", "erb", "haml", "slim")


class ResolverConfig(BaseModel):
    """Tunables for classification and directory search."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    category_order: tuple[ReferenceCategory, ...] = Field(
        default=DEFAULT_CATEGORY_ORDER,
        description="Category priority (first match wins)",
    )
    fallback_dirs: tuple[str, ...] = Field(
        default=DEFAULT_FALLBACK_DIRS,
        description="Directories searched after app/helpers or app/mailers",
    )
    view_extensions: tuple[str, ...] = Field(
        default=DEFAULT_VIEW_EXTENSIONS,
        description="First extension accepted after a partial name",
    )
    follow_symlinks: bool = Field(
        default=True,
        description="Descend into symlinked directories (cycles are skipped)",
    )
    max_depth: int | None = Field(
        default=None,
        ge=0,
        description="Maximum directory depth for recursive searches",
    )
    respect_gitignore: bool = Field(
        default=False,
        description="Skip files matched by the workspace root .gitignore",
    )
    method_fallback: bool = Field(
        default=True,
        description=(
            "Retry as a generic method lookup when the category resolver "
            "finds nothing"
        ),
    )

    @field_validator("category_order", mode="before")
    @classmethod
    def validate_category_order(cls, v: Any) -> Any:
        """Reject duplicate categories and an explicit generic_method entry.

        Note: this runs in `mode="before"` so we can report a clear error
        message using the raw TOML values.
        """
        if v is None:
            return DEFAULT_CATEGORY_ORDER

        if not isinstance(v, (list, tuple)):
            msg = "category_order must be a list of category names"
            raise TypeError(msg)

        seen: set[str] = set()
        for raw in v:
            value = raw.value if isinstance(raw, ReferenceCategory) else raw
            if value == ReferenceCategory.GENERIC_METHOD.value:
                msg = "category_order must not list generic_method (it is always last)"
                raise ValueError(msg)
            if value in seen:
                msg = f"Duplicate category '{value}' in category_order"
                raise ValueError(msg)
            seen.add(value)

        return v

    @field_validator("fallback_dirs")
    @classmethod
    def validate_fallback_dirs(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        for directory in v:
            path = Path(directory)
            if not directory or directory.startswith("~") or path.is_absolute():
                msg = f"fallback_dirs entry '{directory}' must be a relative path"
                raise ValueError(msg)
            if ".." in path.parts:
                msg = f"fallback_dirs entry '{directory}' escapes the workspace root"
                raise ValueError(msg)
        return v


class ConfigError(Exception):
    """Raised when config file exists but cannot be parsed."""


def load_config(root: Path) -> ResolverConfig:
    """Load configuration from rails_goto.toml if it exists."""
    config_path = Path(root) / CONFIG_FILENAME

    if not config_path.is_file():
        return ResolverConfig()

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e
    except OSError as e:
        msg = f"Cannot read {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return ResolverConfig.model_validate(data)
    except Exception as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "ResolverConfig",
    "load_config",
]
