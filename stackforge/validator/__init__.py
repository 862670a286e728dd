"""Validation of generated projects.

Key pieces:
    validate                - Rule-based validation against a stack standard
    diff_against_reference  - Byte-exact comparison with a reference snapshot
    validate_file_list      - Pre-generation checks on the structure response
    build_fix_summary       - Human-readable summary of a failed validation
"""

from .file_list import FileListCheck, validate_file_list
from .official import REPORT_DIR, collect_generated_files, diff_against_reference
from .results import (
    CorrectionBatch,
    CorrectionRecord,
    CorrectionType,
    DiffResult,
    IncompleteFile,
    ValidationResult,
)
from .rules import build_fix_summary, validate
from .standards import (
    BASELINE_STANDARD,
    ManifestRequirement,
    StandardDefinition,
    default_standards,
    get_standard,
    load_standards,
    standard_key_for,
)

__all__ = [
    "BASELINE_STANDARD",
    "CorrectionBatch",
    "CorrectionRecord",
    "CorrectionType",
    "DiffResult",
    "FileListCheck",
    "IncompleteFile",
    "ManifestRequirement",
    "REPORT_DIR",
    "StandardDefinition",
    "ValidationResult",
    "build_fix_summary",
    "collect_generated_files",
    "default_standards",
    "diff_against_reference",
    "get_standard",
    "load_standards",
    "standard_key_for",
    "validate",
    "validate_file_list",
]
