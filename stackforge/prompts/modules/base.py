"""Technology module base types.

A technology module is a stateless description of one frontend, backend, CSS
or integration choice. It knows how a correct project for that technology is
laid out, which dependencies and configuration files it needs, which checks a
generated project should pass, and which mistakes generators commonly make.
Every operation returns plain prompt text; modules never touch global state.
"""

from __future__ import annotations

from enum import Enum


class Technology(str, Enum):
    """Every technology the registry can describe."""

    # Frontend
    REACT_BASIC = "react-basic"
    REACT_VITE = "react-vite"
    NEXTJS = "nextjs"
    VUE3_BASIC = "vue3-basic"
    VUE3_VITE = "vue3-vite"
    ANGULAR_CLI = "angular-cli"
    # Backend
    EXPRESS = "express"
    NESTJS = "nestjs"
    FASTAPI = "fastapi"
    DJANGO = "django"
    LARAVEL = "laravel"
    # CSS
    TAILWIND = "tailwind"
    BOOTSTRAP = "bootstrap"
    MATERIAL_UI = "material-ui"
    VUETIFY = "vuetify"
    # Integration
    DOCKER = "docker"
    CORS = "cors"
    TYPESCRIPT = "typescript"
    AUTH = "auth"


class ModuleCategory(str, Enum):
    FRONTEND = "frontend"
    BACKEND = "backend"
    CSS = "css"
    INTEGRATION = "integration"


class TechnologyModule:
    """Base class for technology descriptors.

    Subclasses override the text-producing methods they have something to say
    about; the defaults return an empty string so the builder can call every
    method on every module unconditionally.
    """

    key: Technology
    title: str = ""
    category: ModuleCategory = ModuleCategory.INTEGRATION
    # Directory the framework builds static assets into (frontend only).
    build_output_dir: str = "dist"

    def project_structure(self) -> str:
        return ""

    def dependencies(self) -> str:
        return ""

    def configurations(self) -> str:
        return ""

    def validation_rules(self) -> str:
        return ""

    def common_errors(self) -> str:
        return ""

    def critical_requirements(self) -> list[str]:
        """Short imperative rules repeated at the end of a standalone prompt."""
        return []

    def standalone_prompt(self, css_framework: str | None = None) -> str:
        """Prompt describing only this technology.

        Args:
            css_framework: Optional CSS framework name to mention as an
                integration requirement.
        """
        sections = [
            f"# {self.title} Project Generator",
            self.project_structure(),
            self.dependencies(),
            self.configurations(),
        ]
        if css_framework:
            sections.append(f"## CSS Framework Integration\n{css_framework}")
        sections.extend([self.validation_rules(), self.common_errors()])

        requirements = self.critical_requirements()
        if requirements:
            lines = ["## CRITICAL REQUIREMENTS:"]
            lines.extend(f"{i}. **{rule}**" for i, rule in enumerate(requirements, start=1))
            sections.append("\n".join(lines))

        return "\n".join(section.strip("\n") for section in sections if section.strip()) + "\n"

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.key.value}>"
