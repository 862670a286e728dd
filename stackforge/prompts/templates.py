"""Jinja2 rendering for prompt text.

The fixed prose around the module sections (header, task instructions,
documentation instructions, correction requests) lives in ``.j2`` files under
``stackforge/prompts/templates/`` and is rendered by :class:`PromptRenderer`.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined


_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


def _pretty_json_filter(value: Any) -> str:
    """Indented JSON without HTML escaping (unlike jinja's ``tojson``)."""
    return json.dumps(value, indent=2, ensure_ascii=False)


def _numbered_filter(items: list[str]) -> str:
    return "\n".join(f"{i}. {item}" for i, item in enumerate(items, start=1))


class PromptRenderer:
    """Renders prompt templates with a context dictionary.

    Undefined variables raise instead of rendering as empty strings, so a
    template and its caller cannot silently drift apart.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=False,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )
        self.env.filters["pretty_json"] = _pretty_json_filter
        self.env.filters["numbered"] = _numbered_filter

    def render(self, template_name: str, context: dict[str, Any] | None = None, **extra: Any) -> str:
        """Render *template_name* (relative to the template directory)."""
        template = self.env.get_template(template_name)
        return template.render(**(context or {}), **extra)

    def render_string(self, template_string: str, context: dict[str, Any]) -> str:
        template = self.env.from_string(template_string)
        return template.render(**context)

    def list_templates(self) -> list[str]:
        return sorted(self.env.list_templates(extensions=["j2"]))
