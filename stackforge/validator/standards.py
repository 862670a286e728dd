"""Declarative validation standards.

Standards are read from the packaged ``standards.yaml`` once, on first use,
and returned as a read-only mapping of frozen pydantic models.
"""

from __future__ import annotations

import functools
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from stackforge.models import Preferences, ProjectType
from stackforge.validator.checks import SPOT_CHECKS

STANDARDS_FILE = Path(__file__).with_name("standards.yaml")
BASELINE_STANDARD = "baseline"


class ManifestRequirement(BaseModel):
    """Keys that must be present in a JSON dependency manifest.

    ``candidates`` are tried in order; the first one that exists and parses
    is checked. ``sections`` maps a top-level manifest key (``dependencies``,
    ``scripts``, ``require`` ...) to the keys required inside it.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    candidates: list[str]
    sections: dict[str, list[str]] = Field(default_factory=dict)


class StandardDefinition(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str = ""
    required_files: list[str] = Field(default_factory=list)
    manifests: list[ManifestRequirement] = Field(default_factory=list)
    file_content_requirements: dict[str, list[str]] = Field(default_factory=dict)
    checks: list[str] = Field(default_factory=list)

    @field_validator("checks")
    @classmethod
    def _known_checks(cls, value: list[str]) -> list[str]:
        unknown = [name for name in value if name not in SPOT_CHECKS]
        if unknown:
            raise ValueError(f"Unknown spot checks: {', '.join(unknown)}")
        return value


def load_standards(path: str | Path = STANDARDS_FILE) -> Mapping[str, StandardDefinition]:
    """Parse a standards YAML file.

    Raises:
        pydantic.ValidationError: If a standard is malformed or names an
            unknown spot check.
    """
    raw = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    standards = {
        key: StandardDefinition.model_validate({**(body or {}), "key": key})
        for key, body in raw.items()
    }
    return MappingProxyType(standards)


@functools.lru_cache(maxsize=1)
def default_standards() -> Mapping[str, StandardDefinition]:
    return load_standards()


def _mentions(name: str, needle: str) -> bool:
    return needle in name.lower()


def standard_key_for(stack_id: str, preferences: Preferences) -> str:
    """Pick the standard that applies to a resolved stack.

    Stacks without a dedicated standard use ``baseline``.
    """
    frontend = preferences.frontend_choice
    backend = preferences.backend_choice

    if preferences.project_type == ProjectType.FULLSTACK:
        if _mentions(frontend, "react") and _mentions(backend, "laravel"):
            return "react-laravel-fullstack"
        if _mentions(frontend, "vue"):
            return "vue-vite-fullstack"
        return BASELINE_STANDARD

    if preferences.project_type == ProjectType.BACKEND:
        if stack_id in ("laravel", "express"):
            return stack_id
        return BASELINE_STANDARD

    if stack_id in ("vue-vite", "vue-basic"):
        return "vue-vite-full" if preferences.has_css_framework else "vue-vite"
    if stack_id in ("react-vite", "react-basic"):
        return "react-vite"
    return BASELINE_STANDARD


def get_standard(key: str, standards: Mapping[str, StandardDefinition] | None = None) -> StandardDefinition:
    standards = standards if standards is not None else default_standards()
    return standards.get(key) or standards[BASELINE_STANDARD]
