"""Directory and file-content search."""

from rails_goto.scan.files import (
    build_gitignore_matcher,
    find_definition_in_file,
    find_files,
    find_line_in_file,
    find_line_matching,
    read_source,
)

__all__ = [
    "build_gitignore_matcher",
    "find_definition_in_file",
    "find_files",
    "find_line_in_file",
    "find_line_matching",
    "read_source",
]
