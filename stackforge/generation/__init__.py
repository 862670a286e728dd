"""Structure and content generation against the text generator."""

from .content import (
    PLACEHOLDER_TEMPLATE,
    ContentGenerationReport,
    ContentGenerator,
    FileFailure,
    placeholder_for,
    strip_markdown_fences,
)
from .structure import StructureGenerationError, StructureGenerator, parse_file_list
from .writer import (
    UnsafePathError,
    ensure_project_directory,
    read_project_file,
    remove_project_directory,
    resolve_project_path,
    write_project_file,
)

__all__ = [
    "PLACEHOLDER_TEMPLATE",
    "ContentGenerationReport",
    "ContentGenerator",
    "FileFailure",
    "StructureGenerationError",
    "StructureGenerator",
    "UnsafePathError",
    "ensure_project_directory",
    "parse_file_list",
    "placeholder_for",
    "read_project_file",
    "remove_project_directory",
    "resolve_project_path",
    "strip_markdown_fences",
    "write_project_file",
]
