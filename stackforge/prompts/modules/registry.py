"""Static module registry and human-name lookup tables.

The registry is built once at import and exposed read-only. Lookups from the
free-form names a user picks ("Vue + Vite", "Tailwind CSS") go through total
functions: an unrecognised name resolves to the table's default technology and
the fallback is logged at WARNING.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import NamedTuple

from stackforge.prompts.modules.backend import (
    DjangoModule,
    ExpressModule,
    FastAPIModule,
    LaravelModule,
    NestJSModule,
)
from stackforge.prompts.modules.base import Technology, TechnologyModule
from stackforge.prompts.modules.css import (
    BootstrapModule,
    MaterialUIModule,
    TailwindModule,
    VuetifyModule,
)
from stackforge.prompts.modules.frontend import (
    AngularCLIModule,
    NextJSModule,
    ReactBasicModule,
    ReactViteModule,
    Vue3BasicModule,
    Vue3ViteModule,
)
from stackforge.prompts.modules.integration import (
    AuthModule,
    CORSModule,
    DockerModule,
    TypeScriptModule,
)

logger = logging.getLogger(__name__)


class UnknownTechnologyError(KeyError):
    """Raised when a technology has no registered module."""


MODULE_REGISTRY: Mapping[Technology, TechnologyModule] = MappingProxyType({
    module.key: module
    for module in (
        ReactBasicModule(),
        ReactViteModule(),
        NextJSModule(),
        Vue3BasicModule(),
        Vue3ViteModule(),
        AngularCLIModule(),
        ExpressModule(),
        NestJSModule(),
        FastAPIModule(),
        DjangoModule(),
        LaravelModule(),
        TailwindModule(),
        BootstrapModule(),
        MaterialUIModule(),
        VuetifyModule(),
        DockerModule(),
        CORSModule(),
        TypeScriptModule(),
        AuthModule(),
    )
})

DEFAULT_FRONTEND = Technology.VUE3_BASIC
DEFAULT_BACKEND = Technology.EXPRESS
DEFAULT_CSS = Technology.BOOTSTRAP

# Keys are lowercased display names.
_FRONTEND_NAMES: Mapping[str, Technology] = MappingProxyType({
    "react (basic)": Technology.REACT_BASIC,
    "react + vite": Technology.REACT_VITE,
    "react": Technology.REACT_VITE,
    "next.js": Technology.NEXTJS,
    "nextjs": Technology.NEXTJS,
    "vue (vue 3)": Technology.VUE3_BASIC,
    "vue 3": Technology.VUE3_BASIC,
    "vue + vite": Technology.VUE3_VITE,
    "vue": Technology.VUE3_VITE,
    "angular (cli)": Technology.ANGULAR_CLI,
    "angular cli": Technology.ANGULAR_CLI,
    "angular": Technology.ANGULAR_CLI,
})

_BACKEND_NAMES: Mapping[str, Technology] = MappingProxyType({
    "express": Technology.EXPRESS,
    "express.js": Technology.EXPRESS,
    "node.js": Technology.EXPRESS,
    "nestjs": Technology.NESTJS,
    "fastapi": Technology.FASTAPI,
    "django": Technology.DJANGO,
    "laravel": Technology.LARAVEL,
    "php": Technology.LARAVEL,
})

_CSS_NAMES: Mapping[str, Technology] = MappingProxyType({
    "tailwind css": Technology.TAILWIND,
    "tailwind": Technology.TAILWIND,
    "bootstrap": Technology.BOOTSTRAP,
    "material ui": Technology.MATERIAL_UI,
    "vuetify": Technology.VUETIFY,
})

_REACT_FAMILY = frozenset({Technology.REACT_BASIC, Technology.REACT_VITE, Technology.NEXTJS})


class ModuleChoice(NamedTuple):
    """Result of a name lookup; ``fallback`` is True when the default was used."""

    technology: Technology
    fallback: bool = False


def get_module(technology: Technology | str) -> TechnologyModule:
    """Return the registered module for *technology*.

    Raises:
        UnknownTechnologyError: If *technology* is not a known key.
    """
    try:
        return MODULE_REGISTRY[Technology(technology)]
    except (KeyError, ValueError):
        raise UnknownTechnologyError(technology) from None


def _lookup(kind: str, name: str, table: Mapping[str, Technology], default: Technology) -> ModuleChoice:
    technology = table.get(name.strip().lower())
    if technology is not None:
        return ModuleChoice(technology)
    logger.warning(
        "Unrecognised %s technology %r, falling back to %s",
        kind,
        name,
        default.value,
        extra={"kind": kind, "requested": name, "fallback": default.value},
    )
    return ModuleChoice(default, fallback=True)


def frontend_module_for(name: str) -> ModuleChoice:
    return _lookup("frontend", name, _FRONTEND_NAMES, DEFAULT_FRONTEND)


def backend_module_for(name: str) -> ModuleChoice:
    return _lookup("backend", name, _BACKEND_NAMES, DEFAULT_BACKEND)


def css_module_for(name: str, frontend: Technology | None = None) -> ModuleChoice:
    """Map a CSS framework name; Material UI becomes Vuetify outside React."""
    choice = _lookup("css", name, _CSS_NAMES, DEFAULT_CSS)
    if choice.technology is Technology.MATERIAL_UI and frontend not in _REACT_FAMILY:
        return ModuleChoice(Technology.VUETIFY, choice.fallback)
    return choice
