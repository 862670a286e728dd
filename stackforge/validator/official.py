"""Byte-exact comparison against a reference ("official") snapshot.

There is no partial credit: one missing, extra or differing file fails the
whole comparison.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path

from stackforge.utils import walk_files
from stackforge.validator.results import DiffResult

logger = logging.getLogger(__name__)

# Bookkeeping written by the pipeline itself, never part of the project.
REPORT_DIR = ".stackforge"


def collect_generated_files(project_path: str | Path, exclude: Iterable[str] = (REPORT_DIR,)) -> dict[str, bytes]:
    """Map every file under *project_path* to its raw bytes."""
    root = Path(project_path)
    excluded = tuple(f"{prefix.rstrip('/')}/" for prefix in exclude)
    return {
        relative: (root / relative).read_bytes()
        for relative in walk_files(root)
        if not relative.startswith(excluded)
    }


def _as_bytes(content: bytes | str) -> bytes:
    if isinstance(content, bytes):
        return content
    return content.encode("utf-8")


def diff_against_reference(project_path: str | Path, reference_files: Mapping[str, bytes | str]) -> DiffResult:
    """Compare the tree under *project_path* with *reference_files*.

    An empty reference set means there is nothing to compare against; the
    result is a passing, ``skipped`` diff.
    """
    if not reference_files:
        logger.info("No reference snapshot, skipping diff", extra={"path": str(project_path)})
        return DiffResult(skipped=True)

    generated = collect_generated_files(project_path)

    missing: list[str] = []
    mismatched: list[str] = []
    for relative in sorted(reference_files):
        if relative not in generated:
            missing.append(relative)
        elif generated[relative] != _as_bytes(reference_files[relative]):
            mismatched.append(relative)
    extra = sorted(relative for relative in generated if relative not in reference_files)

    result = DiffResult(missing_files=missing, extra_files=extra, mismatched_files=mismatched)
    logger.info(
        "Reference diff finished",
        extra={
            "is_valid": result.is_valid,
            "missing_files": len(missing),
            "extra_files": len(extra),
            "mismatched_files": len(mismatched),
        },
    )
    return result
