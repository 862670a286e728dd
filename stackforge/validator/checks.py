"""Stack-specific spot checks.

Each check is a predicate ``(project_path, preferences) -> list[str]``
returning error messages; an empty list means the check passed. Standards
name the checks they run in ``standards.yaml``.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path

from stackforge.models import Preferences

SpotCheck = Callable[[Path, Preferences], list[str]]

SPOT_CHECKS: dict[str, SpotCheck] = {}

VITE_CONFIG_CANDIDATES = ("vite.config.js", "frontend/vite.config.js")
PACKAGE_JSON_CANDIDATES = ("package.json", "frontend/package.json")
ENV_EXAMPLE_CANDIDATES = (".env.example", "backend/.env.example")


def spot_check(name: str) -> Callable[[SpotCheck], SpotCheck]:
    """Register a check under *name*."""

    def decorator(func: SpotCheck) -> SpotCheck:
        SPOT_CHECKS[name] = func
        return func

    return decorator


def _first_existing(project_path: Path, candidates: Sequence[str]) -> str | None:
    for candidate in candidates:
        if (project_path / candidate).is_file():
            return candidate
    return None


def _file_must_mention(project_path: Path, candidates: Sequence[str], needle: str, message: str) -> list[str]:
    # A missing file is reported by the required-files step, not here.
    relative = _first_existing(project_path, candidates)
    if relative is None:
        return []
    try:
        text = (project_path / relative).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        return [f"Error reading file {relative}: {exc}"]
    if needle not in text:
        return [message.format(file=relative)]
    return []


@spot_check("vite_vue_plugin")
def vite_vue_plugin(project_path: Path, preferences: Preferences) -> list[str]:
    return _file_must_mention(project_path, VITE_CONFIG_CANDIDATES, "plugin-vue", "{file} missing Vue plugin import")


@spot_check("vite_react_plugin")
def vite_react_plugin(project_path: Path, preferences: Preferences) -> list[str]:
    return _file_must_mention(
        project_path, VITE_CONFIG_CANDIDATES, "plugin-react", "{file} missing React plugin import"
    )


@spot_check("bootstrap_dependency")
def bootstrap_dependency(project_path: Path, preferences: Preferences) -> list[str]:
    """Bootstrap projects must list bootstrap in their package.json."""
    if preferences.css_framework.strip().lower() != "bootstrap":
        return []
    return _file_must_mention(
        project_path, PACKAGE_JSON_CANDIDATES, "bootstrap", "Bootstrap dependency missing in {file}"
    )


@spot_check("laravel_env_example")
def laravel_env_example(project_path: Path, preferences: Preferences) -> list[str]:
    if _first_existing(project_path, ENV_EXAMPLE_CANDIDATES) is None:
        return ["Laravel project missing .env.example file"]
    return []
