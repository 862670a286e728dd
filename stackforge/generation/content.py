"""Content generation: one request per file, written in file-list order.

A failing file never stops the batch. Its content is replaced by a visible
placeholder marker and the failure is recorded in the report.
"""

from __future__ import annotations

import asyncio
import logging
import re
from collections.abc import Sequence
from pathlib import Path

from pydantic import BaseModel, Field, computed_field
from rich.markup import escape

from stackforge.generation.writer import UnsafePathError, write_project_file
from stackforge.llm_client import LLMResponse, TextGenerator
from stackforge.models import Preferences
from stackforge.prompts import PromptBuilder
from stackforge.utils import create_progress

logger = logging.getLogger(__name__)

PLACEHOLDER_TEMPLATE = "// Error: Failed to generate content for {path}"

# One opening fence (with optional language tag) at the very start, one
# closing fence at the very end. Fences inside the body are left alone.
_LEADING_FENCE = re.compile(r"\A\s*```[\w.+#-]*[ \t]*\r?\n")
_TRAILING_FENCE = re.compile(r"(?:\r?\n)?```[ \t]*\s*\Z")


def strip_markdown_fences(text: str) -> str:
    """Remove a single leading and a single trailing Markdown code fence.

    This is a best-effort cleanup of generator output, not a Markdown parser:
    only the outermost fence pair is removed, and only when both the opening
    and the closing fence are present. Anything else is returned unchanged.
    """
    leading = _LEADING_FENCE.match(text)
    if leading is None:
        return text
    body = text[leading.end():]
    trailing = _TRAILING_FENCE.search(body)
    if trailing is None:
        return text
    return body[: trailing.start()]


def placeholder_for(path: str) -> str:
    return PLACEHOLDER_TEMPLATE.format(path=path)


class FileFailure(BaseModel):
    """A file whose content could not be generated or written."""

    path: str
    error: str


class ContentGenerationReport(BaseModel):
    """Outcome of generating every file in a file list."""

    planned: list[str] = Field(default_factory=list)
    written: list[str] = Field(default_factory=list, description="Files written with generated content")
    failures: list[FileFailure] = Field(default_factory=list)

    @computed_field  # type: ignore[misc]
    @property
    def files_written(self) -> int:
        return len(self.written)

    @property
    def failed_paths(self) -> list[str]:
        return [failure.path for failure in self.failures]


class ContentGenerator:
    """Generates and writes file contents one file at a time."""

    def __init__(
        self,
        client: TextGenerator,
        prompt_builder: PromptBuilder | None = None,
        *,
        timeout: float = 120,
    ) -> None:
        self.client = client
        self.prompt_builder = prompt_builder or PromptBuilder()
        self.timeout = timeout

    async def generate_file(
        self,
        preferences: Preferences,
        file_path: str,
        file_list: Sequence[str],
        *,
        base_prompt: str | None = None,
    ) -> LLMResponse:
        """Request the content of one file.

        Returns the response with fences stripped. An empty reply counts as
        a failure.
        """
        prompt = self.prompt_builder.content_prompt(
            preferences, file_path, file_list, base_prompt=base_prompt
        )
        logger.debug("Requesting file content", extra={"file": file_path, "prompt_length": len(prompt)})

        response = await self.client.generate(prompt, timeout=self.timeout)
        if not response.success:
            return response

        content = strip_markdown_fences(response.text)
        if not content.strip():
            return response.model_copy(update={"text": "", "success": False, "error": "Empty response"})
        return response.model_copy(update={"text": content})

    async def generate_all(
        self,
        preferences: Preferences,
        file_list: Sequence[str],
        project_path: str | Path,
        *,
        show_progress: bool = True,
    ) -> ContentGenerationReport:
        """Generate and write every file in *file_list*, strictly in order."""
        report = ContentGenerationReport(planned=list(file_list))
        base_prompt = self.prompt_builder.build_prompt(preferences)

        with create_progress(disable=not show_progress) as progress:
            task = progress.add_task("Generating files", total=len(file_list))
            for file_path in file_list:
                progress.update(task, description=f"Generating {escape(file_path)}")
                await self._generate_one(preferences, file_path, file_list, project_path, base_prompt, report)
                progress.advance(task)

        logger.info(
            "Content generation finished",
            extra={
                "files_planned": len(file_list),
                "files_written": report.files_written,
                "files_failed": len(report.failures),
            },
        )
        return report

    async def _generate_one(
        self,
        preferences: Preferences,
        file_path: str,
        file_list: Sequence[str],
        project_path: str | Path,
        base_prompt: str,
        report: ContentGenerationReport,
    ) -> None:
        try:
            response = await self.generate_file(preferences, file_path, file_list, base_prompt=base_prompt)
        except Exception as exc:
            logger.exception("Content request raised", extra={"file": file_path})
            response = LLMResponse(success=False, error=f"{type(exc).__name__}: {exc}")
        content = response.text if response.success else placeholder_for(file_path)
        try:
            await asyncio.to_thread(write_project_file, project_path, file_path, content)
        except (OSError, UnsafePathError) as exc:
            logger.error("Could not write file", extra={"file": file_path, "error": str(exc)})
            report.failures.append(FileFailure(path=file_path, error=f"Write failed: {exc}"))
            return

        if response.success:
            report.written.append(file_path)
        else:
            logger.warning(
                "Content generation failed, wrote placeholder",
                extra={"file": file_path, "error": response.error},
            )
            report.failures.append(FileFailure(path=file_path, error=response.error or "Unknown error"))
