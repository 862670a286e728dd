"""Technology modules and the static registry that holds them."""

from stackforge.prompts.modules.backend import BackendModule
from stackforge.prompts.modules.base import ModuleCategory, Technology, TechnologyModule
from stackforge.prompts.modules.integration import DockerModule
from stackforge.prompts.modules.registry import (
    DEFAULT_BACKEND,
    DEFAULT_CSS,
    DEFAULT_FRONTEND,
    MODULE_REGISTRY,
    ModuleChoice,
    UnknownTechnologyError,
    backend_module_for,
    css_module_for,
    frontend_module_for,
    get_module,
)

__all__ = [
    "BackendModule",
    "DEFAULT_BACKEND",
    "DEFAULT_CSS",
    "DEFAULT_FRONTEND",
    "DockerModule",
    "MODULE_REGISTRY",
    "ModuleCategory",
    "ModuleChoice",
    "Technology",
    "TechnologyModule",
    "UnknownTechnologyError",
    "backend_module_for",
    "css_module_for",
    "frontend_module_for",
    "get_module",
]
