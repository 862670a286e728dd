"""Generation prompt composition.

The builder turns a :class:`~stackforge.models.Preferences` record into the
prompt text sent to the text generator. It selects technology modules from the
registry, concatenates their sections in a fixed order and appends the task
instructions for structure or content generation. It never calls the
generator itself.

Section order:
    header, project structure, dependencies, configuration files,
    containerization, validation rules, common error prevention,
    documentation instructions.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence

from pydantic import BaseModel, ConfigDict

from stackforge.models import Preferences, ProjectType
from stackforge.prompts.modules import (
    MODULE_REGISTRY,
    BackendModule,
    DockerModule,
    ModuleCategory,
    Technology,
    TechnologyModule,
    UnknownTechnologyError,
    backend_module_for,
    css_module_for,
    frontend_module_for,
)
from stackforge.prompts.templates import PromptRenderer

logger = logging.getLogger(__name__)

GLOBAL_REQUIREMENTS = [
    "USE OFFICIAL COMMANDS: replicate EXACTLY the official installation commands",
    "AUTHENTIC STRUCTURE: create a structure identical to the official scaffolding",
    "CORRECT DEPENDENCIES: use the exact dependencies of the official tools",
    "ZERO ERRORS: prevent every documented common error",
    "PRODUCTION READY: configure for immediate deployment",
    "DOCKER FIRST: everything must work via Docker without local installations",
]

_STRUCTURE_EXAMPLE = [
    "docker-compose.yml",
    "README.md",
    "frontend/package.json",
    "frontend/Dockerfile",
    "frontend/src/App.vue",
    "backend/composer.json",
    "backend/Dockerfile",
    "backend/bootstrap/app.php",
]

# Extra README sections per technology.
_README_NOTES: dict[Technology, tuple[str, str]] = {
    Technology.VUE3_VITE: ("Vue.js specifics", "the dev server, the router and the Pinia stores"),
    Technology.VUE3_BASIC: ("Vue.js specifics", "the dev server and the component layout"),
    Technology.REACT_VITE: ("React specifics", "the dev server, the entry point and the component layout"),
    Technology.REACT_BASIC: ("React specifics", "the react-scripts commands and the build directory"),
    Technology.LARAVEL: ("Laravel specifics", "artisan commands run inside the container, migrations and the .env file"),
}


class PromptConfig(BaseModel):
    """Inputs of :meth:`PromptBuilder.build_prompt`."""

    model_config = ConfigDict(frozen=True)

    preferences: Preferences
    include_auth: bool = False
    # None infers TypeScript from the chosen technology names.
    include_typescript: bool | None = None


def _wants_typescript(preferences: Preferences) -> bool:
    names = (preferences.frontend, preferences.frontend_framework, preferences.backend, preferences.backend_framework)
    return any("typescript" in name.lower() for name in names)


class PromptBuilder:
    """Composes generation prompts from the technology module registry."""

    def __init__(
        self,
        registry: Mapping[Technology, TechnologyModule] = MODULE_REGISTRY,
        renderer: PromptRenderer | None = None,
    ) -> None:
        self.registry = registry
        self.renderer = renderer or PromptRenderer()

    # -- Module selection ----------------------------------------------------

    def determine_required_modules(self, config: PromptConfig | Preferences) -> list[Technology]:
        """Ordered technologies for a run.

        One frontend module, one backend module, one CSS module when a
        framework other than "None" was chosen, then containerization, which
        every project gets regardless of preferences. Auth, TypeScript and
        CORS (fullstack only) follow.
        """
        if isinstance(config, Preferences):
            config = PromptConfig(preferences=config)
        prefs = config.preferences

        technologies: list[Technology] = []
        frontend: Technology | None = None
        if prefs.frontend_choice and prefs.project_type != ProjectType.BACKEND:
            frontend = frontend_module_for(prefs.frontend_choice).technology
            technologies.append(frontend)
        if prefs.backend_choice and prefs.project_type != ProjectType.FRONTEND:
            technologies.append(backend_module_for(prefs.backend_choice).technology)
        if prefs.has_css_framework:
            technologies.append(css_module_for(prefs.css_framework, frontend).technology)

        technologies.append(Technology.DOCKER)

        if config.include_auth:
            technologies.append(Technology.AUTH)
        include_typescript = config.include_typescript
        if include_typescript is None:
            include_typescript = _wants_typescript(prefs)
        if include_typescript:
            technologies.append(Technology.TYPESCRIPT)
        if prefs.is_fullstack:
            technologies.append(Technology.CORS)

        logger.debug(
            "Selected prompt modules",
            extra={"modules": [t.value for t in technologies]},
        )
        return technologies

    def resolve_modules(self, technologies: Sequence[Technology]) -> list[TechnologyModule]:
        try:
            return [self.registry[technology] for technology in technologies]
        except KeyError as exc:
            raise UnknownTechnologyError(exc.args[0]) from None

    # -- Prompt assembly -----------------------------------------------------

    def build_prompt(self, config: PromptConfig | Preferences) -> str:
        """Compose the shared generation prompt for *config*."""
        if isinstance(config, Preferences):
            config = PromptConfig(preferences=config)
        modules = self.resolve_modules(self.determine_required_modules(config))

        sections = [
            self._header(config.preferences, modules),
            self._collect("PROJECT STRUCTURE", modules, lambda m: m.project_structure()),
            self._collect("DEPENDENCIES AND INSTALLATION", modules, lambda m: m.dependencies()),
            self._collect("CONFIGURATION FILES", modules, lambda m: m.configurations()),
            self._containerization(modules),
            self._collect("VALIDATION RULES", modules, lambda m: m.validation_rules()),
            self._collect("COMMON ERROR PREVENTION", modules, lambda m: m.common_errors()),
            self._documentation(config.preferences, modules),
        ]
        prompt = "\n".join(section.rstrip("\n") + "\n" for section in sections if section)
        logger.debug("Built generation prompt", extra={"prompt_length": len(prompt)})
        return prompt

    def structure_prompt(self, preferences: Preferences) -> str:
        """Shared prompt plus the file-list task."""
        task = self.renderer.render(
            "structure_task.md.j2",
            summary_lines=preferences.summary_lines(),
            example=_STRUCTURE_EXAMPLE,
        )
        return f"{self.build_prompt(preferences)}\n{task}"

    def content_prompt(
        self,
        preferences: Preferences,
        file_path: str,
        file_list: Sequence[str],
        *,
        base_prompt: str | None = None,
    ) -> str:
        """Shared prompt plus the task for one file.

        *base_prompt* lets callers reuse an already built shared prompt when
        generating many files for the same preferences.
        """
        task = self.renderer.render(
            "content_task.md.j2",
            summary_lines=preferences.summary_lines(),
            project_name=preferences.project_name,
            file_list=list(file_list),
            file_path=file_path,
        )
        base = base_prompt if base_prompt is not None else self.build_prompt(preferences)
        return f"{base}\n{task}"

    def single_technology_prompt(self, technology: Technology | str, css_framework: str | None = None) -> str:
        """Prompt describing a single registered technology.

        Raises:
            UnknownTechnologyError: If *technology* is not registered.
        """
        try:
            key = Technology(technology)
        except ValueError:
            raise UnknownTechnologyError(technology) from None
        module = self.resolve_modules([key])[0]
        return module.standalone_prompt(css_framework)

    # -- Sections ------------------------------------------------------------

    def _header(self, preferences: Preferences, modules: Sequence[TechnologyModule]) -> str:
        has_frontend = any(m.category is ModuleCategory.FRONTEND for m in modules)
        has_backend = any(m.category is ModuleCategory.BACKEND for m in modules)
        if has_frontend and has_backend:
            stack_type = "Full Stack"
        elif has_frontend:
            stack_type = "Frontend"
        else:
            stack_type = "Backend"

        return self.renderer.render(
            "header.md.j2",
            stack_type=stack_type,
            frontend=preferences.frontend_choice if has_frontend else "",
            backend=preferences.backend_choice if has_backend else "",
            css=preferences.css_framework if preferences.has_css_framework else "",
            requirements=GLOBAL_REQUIREMENTS,
        )

    @staticmethod
    def _collect(
        title: str,
        modules: Sequence[TechnologyModule],
        section: Callable[[TechnologyModule], str],
    ) -> str:
        parts = [text.strip("\n") for text in (section(m) for m in modules) if text.strip()]
        if not parts:
            return ""
        return f"## {title}\n\n" + "\n\n".join(parts)

    @staticmethod
    def _containerization(modules: Sequence[TechnologyModule]) -> str:
        docker = next((m for m in modules if isinstance(m, DockerModule)), None)
        if docker is None:
            return ""
        return docker.compose_configuration(modules)

    def _documentation(self, preferences: Preferences, modules: Sequence[TechnologyModule]) -> str:
        frontend = any(m.category is ModuleCategory.FRONTEND for m in modules)
        backend = next((m for m in modules if isinstance(m, BackendModule)), None)

        urls = []
        if frontend:
            urls.append("Frontend: http://localhost:8080")
        if backend is not None:
            urls.append(f"Backend: http://localhost:{backend.port}")

        notes = []
        for module in modules:
            if module.key in _README_NOTES:
                title, text = _README_NOTES[module.key]
                notes.append({"title": title, "text": text})
        return self.renderer.render(
            "documentation.md.j2",
            project_name=preferences.project_name,
            urls=urls,
            notes=notes,
        )
