"""Shared pytest fixtures for the Stackforge test suite.

Provides reusable fixtures for:
- Preferences for the common stacks
- A complete, valid Vue 3 + Vite project tree
- A scripted text generator that answers by prompt kind
- Helpers to materialise file trees on disk
"""

from __future__ import annotations

import json
import logging
import re
import textwrap
from collections.abc import Callable, Iterable
from pathlib import Path

import pytest

from stackforge.llm_client import LLMResponse
from stackforge.models import Preferences, ProjectType


# ---------------------------------------------------------------------------
# Preferences
# ---------------------------------------------------------------------------

@pytest.fixture
def vue_preferences(tmp_path: Path) -> Preferences:
    """Frontend-only Vue 3 + Vite project without a CSS framework."""
    return Preferences(
        project_name="demo",
        project_path=tmp_path / "demo",
        project_type=ProjectType.FRONTEND,
        frontend="Vue",
        frontend_framework="Vue + Vite",
        css_framework="None",
    )


@pytest.fixture
def fullstack_preferences(tmp_path: Path) -> Preferences:
    """Vue + Laravel fullstack project with Tailwind."""
    return Preferences(
        project_name="shop",
        project_path=tmp_path / "shop",
        project_type=ProjectType.FULLSTACK,
        frontend="Vue",
        frontend_framework="Vue + Vite",
        css_framework="Tailwind CSS",
        backend="PHP",
        backend_framework="Laravel",
    )


@pytest.fixture
def laravel_preferences(tmp_path: Path) -> Preferences:
    return Preferences(
        project_name="api",
        project_path=tmp_path / "api",
        project_type=ProjectType.BACKEND,
        backend="PHP",
        backend_framework="Laravel",
    )


# ---------------------------------------------------------------------------
# Project trees
# ---------------------------------------------------------------------------

VALID_VITE_CONFIG = textwrap.dedent("""\
    import { defineConfig } from 'vite'
    import vue from '@vitejs/plugin-vue'

    export default defineConfig({
      plugins: [vue()],
    })
    """)

# Imports the plugin but never registers it.
BROKEN_VITE_CONFIG = textwrap.dedent("""\
    import { defineConfig } from 'vite'
    import vue from '@vitejs/plugin-vue'

    export default defineConfig({
      plugins: [],
    })
    """)


@pytest.fixture
def vue_vite_files() -> dict[str, str]:
    """Every file the vue-vite standard requires, with passing content."""
    package_json = {
        "name": "demo",
        "private": True,
        "version": "0.0.0",
        "type": "module",
        "scripts": {"dev": "vite", "build": "vite build", "preview": "vite preview"},
        "dependencies": {"vue": "^3.4.0"},
        "devDependencies": {"@vitejs/plugin-vue": "^5.0.0", "vite": "^5.0.0"},
    }
    return {
        "package.json": json.dumps(package_json, indent=2) + "\n",
        "vite.config.js": VALID_VITE_CONFIG,
        "index.html": textwrap.dedent("""\
            <!DOCTYPE html>
            <html lang="en">
              <head>
                <meta charset="UTF-8">
                <title>demo</title>
              </head>
              <body>
                <div id="app"></div>
                <script type="module" src="/src/main.js"></script>
              </body>
            </html>
            """),
        "src/main.js": textwrap.dedent("""\
            import { createApp } from 'vue'
            import App from './App.vue'

            createApp(App).mount('#app')
            """),
        "src/App.vue": "<template>\n  <h1>demo</h1>\n</template>\n",
        "README.md": "# demo\n\nRun `docker compose up --build`.\n",
        "Dockerfile": "FROM node:20-alpine AS build\n",
        "docker-compose.yml": "services:\n  frontend:\n    build: .\n",
        "nginx.conf": "server {\n    listen 80;\n}\n",
        ".gitignore": "node_modules/\ndist/\n",
        ".dockerignore": "node_modules\n",
    }


@pytest.fixture
def broken_vite_config() -> str:
    return BROKEN_VITE_CONFIG


@pytest.fixture
def valid_vite_config() -> str:
    return VALID_VITE_CONFIG


def _write_tree(root: Path, files: dict[str, str]) -> Path:
    for relative, content in files.items():
        target = root / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def write_tree() -> Callable[[Path, dict[str, str]], Path]:
    """Return a helper that writes ``{relative_path: content}`` under a root."""
    return _write_tree


# ---------------------------------------------------------------------------
# Scripted text generator
# ---------------------------------------------------------------------------

_STRUCTURE_MARKER = "CURRENT TASK: Generate the complete file structure"
_CONTENT_TASK = re.compile(r"\*\*File to Generate:\*\* `([^`]+)`")
_MISSING_TASK = re.compile(r"GENERATE ONLY THE CONTENT of the file: (\S+)")
_FIX_TASK = re.compile(r"FIX the file: (\S+)")


class ScriptedGenerator:
    """In-memory ``TextGenerator`` that answers according to the prompt kind.

    - structure prompts get ``structure``
    - content prompts get ``files[path]``
    - missing-file and content-fix prompts get ``fixes[path]``

    Anything without a scripted answer fails like a transport error would.
    Every call is recorded as ``(kind, path)`` in ``calls``.
    """

    def __init__(
        self,
        *,
        structure: str | list[str] | None = None,
        files: dict[str, str] | None = None,
        fixes: dict[str, str] | None = None,
    ) -> None:
        if isinstance(structure, list):
            structure = json.dumps(structure)
        self.structure = structure
        self.files = dict(files or {})
        self.fixes = dict(fixes or {})
        self.prompts: list[str] = []
        self.calls: list[tuple[str, str | None]] = []
        self.timeouts: list[float | None] = []

    def _classify(self, prompt: str) -> tuple[str, str | None]:
        if _STRUCTURE_MARKER in prompt:
            return "structure", None
        for kind, pattern in (("fix", _FIX_TASK), ("missing", _MISSING_TASK), ("content", _CONTENT_TASK)):
            match = pattern.search(prompt)
            if match:
                return kind, match.group(1)
        return "unknown", None

    def _answer(self, kind: str, path: str | None) -> str | None:
        if kind == "structure":
            return self.structure
        if kind == "content":
            return self.files.get(path)
        if kind in ("missing", "fix"):
            return self.fixes.get(path)
        return None

    async def generate(self, prompt: str, *, timeout: float | None = None) -> LLMResponse:
        kind, path = self._classify(prompt)
        self.prompts.append(prompt)
        self.calls.append((kind, path))
        self.timeouts.append(timeout)

        text = self._answer(kind, path)
        if text is None:
            return LLMResponse(model="scripted", success=False, error=f"No scripted reply for {kind} {path}")
        return LLMResponse(text=text, model="scripted", success=True)

    def calls_of(self, kind: str) -> list[str | None]:
        return [path for call_kind, path in self.calls if call_kind == kind]


@pytest.fixture
def scripted_generator() -> type[ScriptedGenerator]:
    """The ``ScriptedGenerator`` class, for tests to instantiate with a script."""
    return ScriptedGenerator


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

@pytest.fixture
def reset_stackforge_logging() -> Iterable[None]:
    """Undo ``setup_logging`` so later tests see default propagation."""
    yield
    root = logging.getLogger("stackforge")
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.setLevel(logging.NOTSET)
    root.propagate = True
