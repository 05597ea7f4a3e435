"""Rails naming-convention transforms.

These are deliberately naive: there is no irregular-plural table and no
acronym handling (``HTMLParser`` snake-cases to ``htmlparser``). Lookups
only promise parity with those rules, not with ActiveSupport.
"""

from __future__ import annotations

import re
from pathlib import PurePath

NAMESPACE_SEPARATOR = "::"

_CAMEL_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")
_CONTROLLER_PATH = re.compile(r"/controllers/(.+)_controller\.rb$")


def strip_suffix(name: str, suffix: str) -> str:
    """Remove a trailing ``suffix`` (e.g. ``Service``) when present."""
    if suffix and name.endswith(suffix):
        return name[: -len(suffix)]
    return name


def to_snake_case(name: str) -> str:
    """Convert ``BlogPost`` to ``blog_post``.

    Examples:
        >>> to_snake_case("BlogPost")
        'blog_post'
        >>> to_snake_case("Api2Client")
        'api2_client'
        >>> to_snake_case("already_snake")
        'already_snake'
    """
    return _CAMEL_BOUNDARY.sub(r"\1_\2", name).lower()


def singularize(word: str) -> str:
    """Very basic singular form: ``ies`` -> ``y``, else drop a trailing ``s``.

    Examples:
        >>> singularize("categories")
        'category'
        >>> singularize("posts")
        'post'
        >>> singularize("post")
        'post'
    """
    if word.endswith("ies"):
        return word[:-3] + "y"
    if word.endswith("s"):
        return word[:-1]
    return word


def classify(word: str) -> str:
    """Convert a snake_case word to its class name (``blog_post`` -> ``BlogPost``)."""
    return "".join(part[:1].upper() + part[1:] for part in word.split("_"))


def split_namespace(qualified_name: str) -> tuple[str, str]:
    """Split ``Admin::Reports::ExportHelper`` into its namespace and leaf.

    Returns:
        ``(namespace, leaf)``; the namespace is ``""`` for a bare name.
    """
    *namespace_parts, leaf = qualified_name.split(NAMESPACE_SEPARATOR)
    return NAMESPACE_SEPARATOR.join(namespace_parts), leaf


def namespace_dirs(namespace_path: tuple[str, ...] | list[str]) -> list[str]:
    """Directory segments for a namespace (``Admin::V2`` -> ``admin/v2``)."""
    return [to_snake_case(segment) for segment in namespace_path if segment]


def controller_name_from_path(file_path: str | PurePath | None) -> str | None:
    """Return ``admin/posts`` for ``.../app/controllers/admin/posts_controller.rb``."""
    if file_path is None:
        return None
    path_str = PurePath(file_path).as_posix()
    match = _CONTROLLER_PATH.search(path_str)
    if match is None:
        return None
    return match.group(1)


__all__ = [
    "NAMESPACE_SEPARATOR",
    "classify",
    "controller_name_from_path",
    "namespace_dirs",
    "singularize",
    "split_namespace",
    "strip_suffix",
    "to_snake_case",
]
