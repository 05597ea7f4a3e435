"""Line classification into Rails reference categories.

Each category owns a list of regexes matched against the whole line, not
the isolated word, so one line can look like several categories at once
(``FooService.new`` is both a service and a model-style call). The
priority order decides which one drives resolution.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from rails_goto.contract.models import ReferenceCategory

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

_CALLBACK_HOOKS = tuple(
    f"{timing}_{event}"
    for event in ("validation", "save", "create", "update", "destroy")
    for timing in ("before", "after")
)

MODEL_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"belongs_to\s+:(\w+)"),
    re.compile(r"has_many\s+:(\w+)"),
    re.compile(r"has_one\s+:(\w+)"),
    re.compile(r"has_and_belongs_to_many\s+:(\w+)"),
    re.compile(r"class_name\s*(?::|=>?)\s*['\"](\w+)['\"]"),
    re.compile(r"\b([A-Z]\w+)\.(?:find|where|create|new)"),
)

CONTROLLER_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\b(\w+)Controller\b"),
    re.compile(r"\bcontroller\s*:\s*['\":](\w+)"),
)

HELPER_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\bhelper\b\s*:?\s*(\w+)"),
    re.compile(r"\b(\w+)Helper\b"),
    re.compile(r"\b(\w+::)+(\w+)Helper\b"),
)

MAILER_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\bmailer\b\s*:?\s*(\w+)"),
    re.compile(r"\b(\w+)Mailer\b"),
    re.compile(r"\b(\w+::)+(\w+)Mailer\b"),
)

SERVICE_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\b(\w+)Service\b"),
    re.compile(r"\bservice\b\s*:?\s*(\w+)"),
)

VIEW_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\brender[\s(]+['\"](\w+)"),
    re.compile(r"\brender[\s(]+:(\w+)"),
    re.compile(r"\brender[\s(]+partial\s*:\s*['\"](\w+)"),
)

CALLBACK_PATTERNS: tuple[re.Pattern[str], ...] = tuple(
    re.compile(rf"\b{hook}\s+:(\w+)") for hook in _CALLBACK_HOOKS
)


def _matches_any(patterns: Sequence[re.Pattern[str]], line: str) -> bool:
    return any(pattern.search(line) for pattern in patterns)


def is_model_reference(line: str) -> bool:
    """Relation macros, ``class_name:`` values and ``Model.find``-style calls."""
    return _matches_any(MODEL_PATTERNS, line)


def is_controller_reference(line: str) -> bool:
    return _matches_any(CONTROLLER_PATTERNS, line)


def is_helper_reference(line: str) -> bool:
    return _matches_any(HELPER_PATTERNS, line)


def is_mailer_reference(line: str) -> bool:
    return _matches_any(MAILER_PATTERNS, line)


def is_service_reference(line: str) -> bool:
    return _matches_any(SERVICE_PATTERNS, line)


def is_view_reference(line: str) -> bool:
    """``render "name"``, ``render :name`` or ``render partial: "name"``."""
    return _matches_any(VIEW_PATTERNS, line)


def is_callback_reference(line: str) -> bool:
    """ActiveRecord lifecycle macros such as ``before_save :normalize``."""
    return _matches_any(CALLBACK_PATTERNS, line)


CATEGORY_PREDICATES: dict[ReferenceCategory, Callable[[str], bool]] = {
    ReferenceCategory.SERVICE: is_service_reference,
    ReferenceCategory.CONTROLLER: is_controller_reference,
    ReferenceCategory.HELPER: is_helper_reference,
    ReferenceCategory.MAILER: is_mailer_reference,
    ReferenceCategory.VIEW: is_view_reference,
    ReferenceCategory.CALLBACK: is_callback_reference,
    ReferenceCategory.MODEL: is_model_reference,
}

# Suffix signals (`*Service`, `*Controller`) are the most specific and
# outrank structural ones such as relation macros.
DEFAULT_CATEGORY_ORDER: tuple[ReferenceCategory, ...] = (
    ReferenceCategory.SERVICE,
    ReferenceCategory.CONTROLLER,
    ReferenceCategory.HELPER,
    ReferenceCategory.MAILER,
    ReferenceCategory.VIEW,
    ReferenceCategory.CALLBACK,
    ReferenceCategory.MODEL,
)


def matching_categories(line: str) -> list[ReferenceCategory]:
    """Every category whose patterns match ``line``, in default priority order."""
    return [
        category
        for category in DEFAULT_CATEGORY_ORDER
        if CATEGORY_PREDICATES[category](line)
    ]


def classify_line(
    line: str,
    order: Sequence[ReferenceCategory] = DEFAULT_CATEGORY_ORDER,
) -> ReferenceCategory:
    """Classify a line of Ruby source.

    Uses first-match-wins semantics over ``order``; a line matching no
    predicate is a generic method reference.
    """
    for category in order:
        predicate = CATEGORY_PREDICATES.get(category)
        if predicate is not None and predicate(line):
            return category
    return ReferenceCategory.GENERIC_METHOD


__all__ = [
    "CATEGORY_PREDICATES",
    "DEFAULT_CATEGORY_ORDER",
    "classify_line",
    "is_callback_reference",
    "is_controller_reference",
    "is_helper_reference",
    "is_mailer_reference",
    "is_model_reference",
    "is_service_reference",
    "is_view_reference",
    "matching_categories",
]
