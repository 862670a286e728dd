"""Validation, diff and correction result models.

Results are built fresh for every validation attempt and are frozen once
returned. Pass/fail flags are computed from the issue lists, never stored, so
they cannot disagree with them.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field


# ---------------------------------------------------------------------------
# Rule-based validation
# ---------------------------------------------------------------------------

class IncompleteFile(BaseModel):
    """A required substring absent from an existing file."""

    model_config = ConfigDict(frozen=True)

    file: str = Field(..., description="POSIX path relative to the project root")
    missing: str = Field(..., description="Substring that must occur verbatim")


class ValidationResult(BaseModel):
    """Outcome of validating a project tree against a standard."""

    model_config = ConfigDict(frozen=True)

    standard: str = Field(default="", description="Key of the standard that was applied")
    errors: list[str] = Field(default_factory=list)
    missing_files: list[str] = Field(default_factory=list)
    incomplete_files: list[IncompleteFile] = Field(default_factory=list)

    @computed_field  # type: ignore[misc]
    @property
    def is_valid(self) -> bool:
        return not self.errors

    @computed_field  # type: ignore[misc]
    @property
    def has_issues(self) -> bool:
        """True when correction has anything to act on."""
        return bool(self.errors or self.missing_files or self.incomplete_files)


# ---------------------------------------------------------------------------
# Reference diff
# ---------------------------------------------------------------------------

class DiffResult(BaseModel):
    """Byte-exact comparison of a project tree with a reference snapshot."""

    model_config = ConfigDict(frozen=True)

    missing_files: list[str] = Field(default_factory=list, description="In the reference, not generated")
    extra_files: list[str] = Field(default_factory=list, description="Generated, not in the reference")
    mismatched_files: list[str] = Field(default_factory=list, description="In both, content differs")
    skipped: bool = Field(default=False, description="No reference snapshot was available")

    @computed_field  # type: ignore[misc]
    @property
    def is_valid(self) -> bool:
        return not (self.missing_files or self.extra_files or self.mismatched_files)


# ---------------------------------------------------------------------------
# Corrections
# ---------------------------------------------------------------------------

class CorrectionType(str, Enum):
    FILE_CREATED = "file_created"
    CONTENT_FIXED = "content_fixed"


class CorrectionRecord(BaseModel):
    """One repair attempt on one file."""

    type: CorrectionType
    file: str
    missing: str | None = Field(default=None, description="Substring requested (content fixes only)")
    success: bool = True
    error: str | None = None


class CorrectionBatch(BaseModel):
    """Everything the auto-corrector did in one round.

    ``success`` is False only when the batch stopped early on an unexpected
    error; individual file failures are recorded in ``corrections``.
    """

    success: bool = True
    corrections: list[CorrectionRecord] = Field(default_factory=list)
    error: str | None = None

    @property
    def failed(self) -> list[CorrectionRecord]:
        return [record for record in self.corrections if not record.success]
