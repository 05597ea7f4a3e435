"""Reference and location models shared across the resolution chain."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ReferenceCategory(str, Enum):
    """Classification bucket assigned to a line of Ruby source."""

    SERVICE = "service"
    CONTROLLER = "controller"
    HELPER = "helper"
    MAILER = "mailer"
    VIEW = "view"
    CALLBACK = "callback"
    MODEL = "model"
    GENERIC_METHOD = "generic_method"


class SourceReference(BaseModel):
    """The word under the cursor together with the line it sits on."""

    model_config = ConfigDict(frozen=True)

    word: str = Field(pattern=r"^[A-Za-z0-9_]+$")
    line: str
    cursor_column: int = Field(ge=0)
    namespace_path: tuple[str, ...] = Field(
        default=(),
        description="`::`-delimited segments preceding the word on the line",
    )

    @field_validator("namespace_path")
    @classmethod
    def validate_namespace_path(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        if any(not segment for segment in v):
            msg = "namespace_path segments must be non-empty"
            raise ValueError(msg)
        return v

    @property
    def namespace(self) -> str:
        return "::".join(self.namespace_path)

    @property
    def qualified_name(self) -> str:
        """Word prefixed by its namespace (e.g. `Admin::ReportsHelper`)."""
        return "::".join((*self.namespace_path, self.word))


class ResolvedLocation(BaseModel):
    """A 0-based position inside the file that defines a symbol."""

    model_config = ConfigDict(frozen=True)

    file_path: str
    line: int = Field(ge=0)
    column: int = Field(ge=0)
    end_line: int | None = Field(
        default=None, description="Last line of the matched declaration"
    )
    end_column: int | None = Field(
        default=None, description="Column just past the matched declaration"
    )


__all__ = ["ReferenceCategory", "ResolvedLocation", "SourceReference"]
