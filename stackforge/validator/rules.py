"""Rule-based validation of a generated project tree.

:func:`validate` runs four independent steps and accumulates every problem
instead of stopping at the first one:

1. required files exist,
2. existing files contain their required substrings,
3. dependency manifests declare the required keys,
4. stack-specific spot checks pass.

The result is valid iff no step reported an error. Validation only reads the
tree and never raises for missing, unreadable or malformed files.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path

from stackforge.models import Preferences
from stackforge.validator.checks import SPOT_CHECKS
from stackforge.validator.results import IncompleteFile, ValidationResult
from stackforge.validator.standards import (
    ManifestRequirement,
    StandardDefinition,
    get_standard,
    standard_key_for,
)

logger = logging.getLogger(__name__)


class _Collector:
    """Mutable accumulator; frozen into a ValidationResult at the end."""

    def __init__(self) -> None:
        self.errors: list[str] = []
        self.missing_files: list[str] = []
        self.incomplete_files: list[IncompleteFile] = []


# ---------------------------------------------------------------------------
# Steps
# ---------------------------------------------------------------------------

def _check_required_files(root: Path, standard: StandardDefinition, out: _Collector) -> None:
    for relative in standard.required_files:
        if not (root / relative).is_file():
            out.missing_files.append(relative)
            out.errors.append(f"Missing required file: {relative}")


def _check_file_contents(root: Path, standard: StandardDefinition, out: _Collector) -> None:
    for relative, substrings in standard.file_content_requirements.items():
        path = root / relative
        if not path.is_file():
            continue
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            out.errors.append(f"Error reading file {relative}: {exc}")
            continue
        for substring in substrings:
            if substring not in text:
                out.incomplete_files.append(IncompleteFile(file=relative, missing=substring))
                out.errors.append(f"File {relative} missing required content: {substring}")


def _check_manifest(root: Path, requirement: ManifestRequirement, out: _Collector) -> None:
    for candidate in requirement.candidates:
        path = root / candidate
        if not path.is_file():
            continue
        try:
            manifest = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            out.errors.append(f"Error parsing {candidate}: {exc}")
            continue
        if not isinstance(manifest, dict):
            out.errors.append(f"Error parsing {candidate}: top level is not an object")
            continue

        for section, keys in requirement.sections.items():
            declared = manifest.get(section)
            if not isinstance(declared, dict):
                declared = {}
            for key in keys:
                if key not in declared:
                    out.errors.append(f"Missing {section} entry in {candidate}: {key}")
        return

    out.errors.append(f"No {requirement.name} found in expected locations")


def _check_manifests(root: Path, standard: StandardDefinition, out: _Collector) -> None:
    for requirement in standard.manifests:
        _check_manifest(root, requirement, out)


def _run_spot_checks(root: Path, standard: StandardDefinition, preferences: Preferences, out: _Collector) -> None:
    for name in standard.checks:
        out.errors.extend(SPOT_CHECKS[name](root, preferences))


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def validate(
    project_path: str | Path,
    stack_id: str,
    preferences: Preferences,
    *,
    standards: Mapping[str, StandardDefinition] | None = None,
) -> ValidationResult:
    """Validate the tree under *project_path* against the standard for *stack_id*."""
    root = Path(project_path)
    key = standard_key_for(stack_id, preferences)
    standard = get_standard(key, standards)

    out = _Collector()
    _check_required_files(root, standard, out)
    _check_file_contents(root, standard, out)
    _check_manifests(root, standard, out)
    _run_spot_checks(root, standard, preferences, out)

    result = ValidationResult(
        standard=standard.key,
        errors=out.errors,
        missing_files=out.missing_files,
        incomplete_files=out.incomplete_files,
    )
    logger.info(
        "Validation finished",
        extra={
            "stack_id": stack_id,
            "standard": standard.key,
            "is_valid": result.is_valid,
            "errors": len(result.errors),
            "missing_files": len(result.missing_files),
            "incomplete_files": len(result.incomplete_files),
        },
    )
    return result


def build_fix_summary(result: ValidationResult, preferences: Preferences) -> str | None:
    """Human-readable summary of everything a validation run flagged.

    Returns None when there is nothing to fix.
    """
    if not result.has_issues:
        return None

    target = preferences.frontend_choice or preferences.backend_choice or "the selected stack"
    lines = [
        "## AUTOMATIC CORRECTION REQUIRED",
        "",
        "The following issues were detected in the generated project:",
        "",
        "### Missing Files:",
        *(f"- {path}" for path in result.missing_files),
        "",
        "### Incomplete Content:",
        *(f'- {item.file}: missing "{item.missing}"' for item in result.incomplete_files),
        "",
        "### Validation Errors:",
        *(f"- {error}" for error in result.errors),
        "",
        "## CORRECTION INSTRUCTIONS:",
        "",
        "Create only the missing files and fix only the incomplete content.",
        "Do not recreate files that already exist and work correctly.",
        f"Generate each missing file with the official standard content for a "
        f"{preferences.project_type.value} project with {target}.",
        "For each incomplete file, add only the missing lines.",
    ]
    return "\n".join(lines) + "\n"
