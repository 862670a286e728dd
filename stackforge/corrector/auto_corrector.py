"""Targeted repair of the files a validation run flagged.

Every missing file gets one regeneration request and every (file, missing
substring) pair gets one patch request. Only the affected files are written.
A failed file is recorded and the batch moves on; the batch itself fails only
when something unexpected stops it early.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from rich.markup import escape

from stackforge.generation.content import strip_markdown_fences
from stackforge.generation.writer import UnsafePathError, read_project_file, write_project_file
from stackforge.llm_client import TextGenerator
from stackforge.models import Preferences
from stackforge.prompts.templates import PromptRenderer
from stackforge.utils import console
from stackforge.validator.results import (
    CorrectionBatch,
    CorrectionRecord,
    CorrectionType,
    IncompleteFile,
    ValidationResult,
)

from .prompts import content_fix_prompt, missing_file_prompt

logger = logging.getLogger(__name__)


class CorrectionRequestError(Exception):
    """The text generator did not return usable content for a file."""


# Failures confined to one file. Anything else ends the batch.
_PER_FILE_ERRORS = (CorrectionRequestError, OSError, UnicodeDecodeError, UnsafePathError)


class AutoCorrector:
    """Regenerates missing files and patches incomplete ones."""

    def __init__(
        self,
        client: TextGenerator,
        renderer: PromptRenderer | None = None,
        *,
        timeout: float = 120,
    ) -> None:
        self.client = client
        self.renderer = renderer or PromptRenderer()
        self.timeout = timeout

    # -- Public API ----------------------------------------------------------

    async def correct(
        self,
        project_path: str | Path,
        result: ValidationResult,
        preferences: Preferences,
    ) -> CorrectionBatch:
        """Apply one round of corrections for *result*."""
        if not result.has_issues:
            return CorrectionBatch(success=True)

        corrections: list[CorrectionRecord] = []
        try:
            if result.missing_files:
                console.print(f"[cyan]Generating {len(result.missing_files)} missing file(s)...[/cyan]")
            for file_path in result.missing_files:
                corrections.append(await self._create_missing(project_path, file_path, preferences))

            if result.incomplete_files:
                console.print(f"[cyan]Fixing {len(result.incomplete_files)} incomplete file(s)...[/cyan]")
            for item in result.incomplete_files:
                corrections.append(await self._fix_content(project_path, item, preferences))
        except Exception as exc:
            logger.exception("Correction batch aborted", extra={"completed": len(corrections)})
            return CorrectionBatch(success=False, corrections=corrections, error=str(exc))

        failed = sum(1 for record in corrections if not record.success)
        logger.info(
            "Correction batch finished",
            extra={"corrections": len(corrections), "failed": failed},
        )
        return CorrectionBatch(success=True, corrections=corrections)

    # -- Internal ------------------------------------------------------------

    async def _request(self, prompt: str) -> str:
        response = await self.client.generate(prompt, timeout=self.timeout)
        if not response.success:
            raise CorrectionRequestError(response.error or "Generation failed")
        content = strip_markdown_fences(response.text)
        if not content.strip():
            raise CorrectionRequestError("Empty response")
        return content

    async def _create_missing(self, project_path: str | Path, file_path: str, preferences: Preferences) -> CorrectionRecord:
        console.print(f"   Generating: {escape(file_path)}")
        try:
            content = await self._request(missing_file_prompt(self.renderer, file_path, preferences))
            await asyncio.to_thread(write_project_file, project_path, file_path, content)
        except _PER_FILE_ERRORS as exc:
            logger.warning("Could not create missing file", extra={"file": file_path, "error": str(exc)})
            console.print(f"   [red]Failed to generate {escape(file_path)}: {escape(str(exc))}[/red]")
            return CorrectionRecord(type=CorrectionType.FILE_CREATED, file=file_path, success=False, error=str(exc))

        logger.info("Created missing file", extra={"file": file_path})
        return CorrectionRecord(type=CorrectionType.FILE_CREATED, file=file_path)

    async def _fix_content(self, project_path: str | Path, item: IncompleteFile, preferences: Preferences) -> CorrectionRecord:
        console.print(f"   Fixing: {escape(item.file)} (missing: {escape(item.missing)})")
        try:
            current = await asyncio.to_thread(read_project_file, project_path, item.file)
            prompt = content_fix_prompt(self.renderer, item.file, current, item.missing, preferences)
            content = await self._request(prompt)
            await asyncio.to_thread(write_project_file, project_path, item.file, content)
        except _PER_FILE_ERRORS as exc:
            logger.warning(
                "Could not fix file content",
                extra={"file": item.file, "missing": item.missing, "error": str(exc)},
            )
            console.print(f"   [red]Failed to fix {escape(item.file)}: {escape(str(exc))}[/red]")
            return CorrectionRecord(
                type=CorrectionType.CONTENT_FIXED,
                file=item.file,
                missing=item.missing,
                success=False,
                error=str(exc),
            )

        logger.info("Fixed file content", extra={"file": item.file, "missing": item.missing})
        return CorrectionRecord(type=CorrectionType.CONTENT_FIXED, file=item.file, missing=item.missing)
