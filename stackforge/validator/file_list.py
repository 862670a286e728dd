"""Pre-generation checks on the structure response.

Runs before any content is requested. Unsafe entries (absolute paths, paths
escaping the project, duplicates) are errors and are dropped from the list
that goes on to content generation. Stack heuristics only produce warnings.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import PurePosixPath

from pydantic import BaseModel, Field, computed_field

from stackforge.models import Preferences

logger = logging.getLogger(__name__)


class FileListCheck(BaseModel):
    accepted: list[str] = Field(default_factory=list, description="Paths safe to generate, in order")
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    @computed_field  # type: ignore[misc]
    @property
    def is_valid(self) -> bool:
        return not self.errors


def _unsafe_reason(path: str) -> str | None:
    pure = PurePosixPath(path)
    if pure.is_absolute() or (len(path) > 1 and path[1] == ":"):
        return "absolute path"
    if ".." in pure.parts:
        return "path escapes the project directory"
    return None


def _stack_warnings(paths: Sequence[str], preferences: Preferences) -> list[str]:
    warnings: list[str] = []
    names = set(paths)
    frontend = preferences.frontend_choice.lower()
    backend = preferences.backend_choice.lower()

    if "README.md" not in names:
        warnings.append("Missing README.md - every project needs documentation")
    if ".gitignore" not in names:
        warnings.append("Missing .gitignore - version control hygiene required")

    if "vue" in frontend:
        if any(p.endswith("public/index.html") for p in paths):
            warnings.append("index.html should be in the app root, not public/ (Vue 3 + Vite pattern)")
        if not any(p.endswith("App.vue") for p in paths):
            warnings.append("Missing App.vue - Vue requires a root component")

    if "laravel" in backend or backend == "php":
        if not any(p.endswith("artisan") for p in paths):
            warnings.append("Missing artisan - Laravel requires the artisan CLI")
        if not any(p.endswith("bootstrap/app.php") for p in paths):
            warnings.append("Missing bootstrap/app.php - Laravel requires the application bootstrap")
        if not any(p.endswith(".env.example") for p in paths):
            warnings.append("Missing .env.example - Laravel requires an environment template")

    if preferences.is_fullstack:
        if "docker-compose.yml" not in names:
            warnings.append("Missing docker-compose.yml - fullstack projects need container orchestration")
        if preferences.frontend_choice and "frontend/Dockerfile" not in names:
            warnings.append("Missing frontend/Dockerfile - the frontend needs its own image")
        if preferences.backend_choice and "backend/Dockerfile" not in names:
            warnings.append("Missing backend/Dockerfile - the backend needs its own image")

    return warnings


def validate_file_list(file_list: Sequence[str], preferences: Preferences) -> FileListCheck:
    """Check a parsed file list before content generation."""
    accepted: list[str] = []
    errors: list[str] = []
    seen: set[str] = set()

    for path in file_list:
        reason = _unsafe_reason(path)
        if reason is not None:
            errors.append(f"Rejected {path!r}: {reason}")
            continue
        normalised = PurePosixPath(path).as_posix()
        if normalised in seen:
            errors.append(f"Rejected {path!r}: duplicate entry")
            continue
        seen.add(normalised)
        accepted.append(normalised)

    check = FileListCheck(
        accepted=accepted,
        errors=errors,
        warnings=_stack_warnings(accepted, preferences),
    )
    for message in check.errors:
        logger.error("File list entry rejected", extra={"detail": message})
    for message in check.warnings:
        logger.warning("File list warning", extra={"detail": message})
    return check
