"""Narrow prompts for regenerating or patching a single file."""

from __future__ import annotations

import textwrap
from pathlib import PurePosixPath

from stackforge.models import Preferences
from stackforge.prompts.templates import PromptRenderer

_DEFAULT_INSTRUCTIONS = "Follow the official standards of the framework."


def _file_instructions(file_path: str, preferences: Preferences) -> str:
    """Extra guidance for well-known files, matched on the file name."""
    frontend = preferences.frontend_choice or "the project"
    css = preferences.css_framework if preferences.has_css_framework else "plain CSS"
    name = PurePosixPath(file_path).name

    instructions = {
        "package.json": f"""\
            For the package.json of {frontend} with {css}:
            - Include ALL required dependencies
            - Standard scripts: dev, build, preview
            - Current, mutually compatible versions
            - An appropriate project name""",
        "vite.config.js": f"""\
            For vite.config.js:
            - Correct plugin import and registration
            - @ alias pointing to src/
            - Configuration suited to {frontend}""",
        "main.js": """\
            For a Vue main.js:
            - Import createApp from vue
            - Mount on #app
            - Register router and pinia when the project uses them""",
        "main.jsx": """\
            For a React main.jsx:
            - Import React and ReactDOM
            - Render the App component
            - Wrap it in StrictMode""",
        "README.md": """\
            For README.md:
            - Project title
            - Complete Docker instructions
            - Development commands
            - Project structure
            - Prerequisites section""",
        "docker-compose.yml": """\
            For docker-compose.yml:
            - Modern format (no top-level version key)
            - Health checks
            - Correct ports
            - Dependencies between services""",
        "nginx.conf": """\
            For nginx.conf:
            - SPA routing with try_files
            - Proxy for the backend API when there is one""",
        ".gitignore": f"""\
            For the .gitignore of a {preferences.project_type.value} project:
            - node_modules/, vendor/ and build output
            - .env files
            - IDE and OS files""",
        "Dockerfile": """\
            For a Dockerfile:
            - Multi-stage build where the stack has a build step
            - Alpine base images
            - Dependency manifests copied before the sources
            - A health check""",
    }
    text = instructions.get(name)
    return textwrap.dedent(text) if text else _DEFAULT_INSTRUCTIONS


def missing_file_prompt(renderer: PromptRenderer, file_path: str, preferences: Preferences) -> str:
    return renderer.render(
        "fix_missing_file.md.j2",
        file_path=file_path,
        summary_lines=preferences.summary_lines(),
        instructions=_file_instructions(file_path, preferences),
    )


def content_fix_prompt(
    renderer: PromptRenderer,
    file_path: str,
    current_content: str,
    missing: str,
    preferences: Preferences,
) -> str:
    return renderer.render(
        "fix_content.md.j2",
        file_path=file_path,
        current_content=current_content,
        missing=missing,
        project_type=preferences.project_type.value,
    )
