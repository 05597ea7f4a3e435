"""Naming-convention helpers for"""

from rails_goto.naming.conventions import (
    classify,
    controller_name_from_path,
    namespace_dirs,
    singularize,
    split_namespace,
    strip_suffix,
    to_snake_case,
)

__all__ = [
    "classify",
    "controller_name_from_path",
    "namespace_dirs",
    "singularize",
    "split_namespace",
    "strip_suffix",
    "to_snake_case",
]
