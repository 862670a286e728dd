"""Structure generation: one request returning the project's file list."""

from __future__ import annotations

import json
import logging

from stackforge.llm_client import TextGenerator
from stackforge.models import Preferences
from stackforge.prompts import PromptBuilder

logger = logging.getLogger(__name__)


class StructureGenerationError(Exception):
    """The file list could not be obtained; nothing else can proceed."""


def parse_file_list(text: str) -> list[str]:
    """Parse a structure response into an ordered list of relative paths.

    The whole response must be a JSON array of strings. Backslashes are
    normalised to ``/`` and blank entries are rejected; duplicates are left
    for :func:`stackforge.validator.file_list.validate_file_list` to report.

    Raises:
        StructureGenerationError: If the text is not such an array or is empty.
    """
    try:
        data = json.loads(text.strip())
    except json.JSONDecodeError as exc:
        raise StructureGenerationError(f"Structure response is not valid JSON: {exc}") from exc

    if not isinstance(data, list):
        raise StructureGenerationError(
            f"Structure response is not a JSON array (got {type(data).__name__})"
        )
    if not data:
        raise StructureGenerationError("Structure response is an empty file list")

    paths: list[str] = []
    for index, entry in enumerate(data):
        if not isinstance(entry, str) or not entry.strip():
            raise StructureGenerationError(f"Entry {index} of the file list is not a path: {entry!r}")
        paths.append(entry.strip().replace("\\", "/"))
    return paths


class StructureGenerator:
    """Asks the text generator for the project's file list."""

    def __init__(
        self,
        client: TextGenerator,
        prompt_builder: PromptBuilder | None = None,
        *,
        timeout: float = 30,
    ) -> None:
        self.client = client
        self.prompt_builder = prompt_builder or PromptBuilder()
        self.timeout = timeout

    async def generate(self, preferences: Preferences) -> list[str]:
        """Return the file list for *preferences*.

        Raises:
            StructureGenerationError: On transport failure or an unparsable reply.
        """
        prompt = self.prompt_builder.structure_prompt(preferences)
        logger.info("Requesting file structure", extra={"prompt_length": len(prompt)})

        response = await self.client.generate(prompt, timeout=self.timeout)
        if not response.success:
            raise StructureGenerationError(f"Structure request failed: {response.error}")

        file_list = parse_file_list(response.text)
        logger.info(
            "File structure parsed",
            extra={"file_count": len(file_list), "duration_ms": response.duration_ms},
        )
        return file_list
