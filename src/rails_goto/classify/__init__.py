"""Reference classification."""

from rails_goto.classify.references import (
    DEFAULT_CATEGORY_ORDER,
    classify_line,
    matching_categories,
)

__all__ = ["DEFAULT_CATEGORY_ORDER", "classify_line", "matching_categories"]
