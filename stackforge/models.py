"""Shared data models for a generation run.

``Preferences`` is produced once by whatever collects the user's choices
(the CLI in :mod:`stackforge.pipeline`, or a caller embedding the pipeline)
and is consumed read-only by every other component.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class ProjectType(str, Enum):
    """Shape of the project to scaffold."""

    FRONTEND = "frontend"
    BACKEND = "backend"
    FULLSTACK = "fullstack"


class Preferences(BaseModel):
    """Immutable record of the user's technology choices."""

    model_config = ConfigDict(frozen=True)

    project_name: str = Field(default="my-project")
    project_path: Path = Field(default=Path("./my-project"))
    project_type: ProjectType = Field(default=ProjectType.FRONTEND)
    frontend: str = Field(default="", description="Frontend technology, e.g. 'Vue'")
    frontend_framework: str = Field(default="", description="Frontend flavour, e.g. 'Vue + Vite'")
    css_framework: str = Field(default="", description="CSS framework, or 'None'")
    backend: str = Field(default="", description="Backend technology, e.g. 'PHP'")
    backend_framework: str = Field(default="", description="Backend framework, e.g. 'Laravel'")

    @property
    def is_fullstack(self) -> bool:
        return self.project_type == ProjectType.FULLSTACK

    @property
    def has_css_framework(self) -> bool:
        """True when a CSS framework other than ``"None"`` was chosen."""
        return bool(self.css_framework) and self.css_framework.strip().lower() != "none"

    @property
    def frontend_choice(self) -> str:
        """The most specific frontend name available (framework first)."""
        return self.frontend_framework or self.frontend

    @property
    def backend_choice(self) -> str:
        """The most specific backend name available (framework first)."""
        return self.backend_framework or self.backend

    def summary_lines(self) -> list[str]:
        """Human-readable bullet lines describing the selection."""
        return [
            f"- Project Type: {self.project_type.value}",
            f"- Frontend: {self.frontend or 'N/A'} ({self.frontend_framework or 'N/A'})",
            f"- CSS Framework: {self.css_framework or 'N/A'}",
            f"- Backend: {self.backend or 'N/A'} ({self.backend_framework or 'N/A'})",
        ]
