"""Unit tests for stack resolution (stackforge.stack.resolver).

Tests cover:
- resolve_stack_id rule order and case-insensitivity
- load_reference_files from a directory and from a JSON export
- export_reference_files
- resolve_stack with and without a snapshot on disk
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from stackforge.models import Preferences, ProjectType
from stackforge.stack import (
    CUSTOM_STACK,
    export_reference_files,
    load_reference_files,
    official_files_dir,
    resolve_stack,
    resolve_stack_id,
)


FAVICON = b"\x00\x00\x01\x00\xff\xfe"


def _prefs(**kwargs) -> Preferences:
    return Preferences(project_name="p", **kwargs)


class TestResolveStackId:
    @pytest.mark.unit
    @pytest.mark.parametrize(
        "frontend, framework, expected",
        [
            ("Vue", "Vue + Vite", "vue-vite"),
            ("Vue", "Vue (Vue 3)", "vue-basic"),
            ("React", "React + Vite", "react-vite"),
            ("React", "React (Basic)", "react-basic"),
            ("React", "Next.js", "nextjs"),
            ("Angular", "Angular (CLI)", "angular-cli"),
            ("VUE", "", "vue-basic"),
        ],
    )
    def test_frontend_rules(self, frontend, framework, expected):
        assert resolve_stack_id(_prefs(frontend=frontend, frontend_framework=framework)) == expected

    @pytest.mark.unit
    def test_framework_takes_precedence(self):
        # "React" alone would be react-basic; the framework names Next.js.
        prefs = _prefs(frontend="React", frontend_framework="Next.js")
        assert resolve_stack_id(prefs) == "nextjs"

    @pytest.mark.unit
    def test_frontend_wins_over_backend(self):
        prefs = _prefs(
            project_type=ProjectType.FULLSTACK,
            frontend="Vue",
            frontend_framework="Vue + Vite",
            backend="PHP",
            backend_framework="Laravel",
        )
        assert resolve_stack_id(prefs) == "vue-vite"

    @pytest.mark.unit
    def test_backend_only(self):
        prefs = _prefs(project_type=ProjectType.BACKEND, backend="PHP", backend_framework="Laravel")
        assert resolve_stack_id(prefs) == "laravel"

    @pytest.mark.unit
    def test_unknown_is_custom(self):
        prefs = _prefs(frontend="Svelte", backend="Go")
        assert resolve_stack_id(prefs) == CUSTOM_STACK


class TestReferenceFiles:
    @pytest.mark.unit
    def test_load_directory(self, tmp_path: Path):
        ref = tmp_path / "vue-vite"
        (ref / "src").mkdir(parents=True)
        (ref / "src" / "main.js").write_bytes(b"createApp(App)\r\n")
        (ref / "package.json").write_text("{}\n", encoding="utf-8")

        files = load_reference_files(ref)
        assert files == {"package.json": b"{}\n", "src/main.js": b"createApp(App)\r\n"}

    @pytest.mark.unit
    def test_missing_source_is_empty(self, tmp_path: Path):
        assert load_reference_files(tmp_path / "nothing") == {}

    @pytest.mark.unit
    def test_export_then_load_json(self, tmp_path: Path):
        ref = tmp_path / "laravel"
        ref.mkdir()
        (ref / "artisan").write_text("#!/usr/bin/env php\n", encoding="utf-8")

        exported = export_reference_files(ref)
        assert exported == tmp_path / "laravel-files.json"
        assert json.loads(exported.read_text(encoding="utf-8")) == {"artisan": "#!/usr/bin/env php\n"}
        assert load_reference_files(exported) == {"artisan": b"#!/usr/bin/env php\n"}

    @pytest.mark.unit
    def test_binary_file_loads_unchanged(self, tmp_path: Path):
        ref = tmp_path / "vue-vite"
        (ref / "public").mkdir(parents=True)
        (ref / "public" / "favicon.ico").write_bytes(FAVICON)

        assert load_reference_files(ref) == {"public/favicon.ico": FAVICON}

    @pytest.mark.unit
    def test_binary_file_survives_json_export(self, tmp_path: Path):
        ref = tmp_path / "vue-vite"
        (ref / "public").mkdir(parents=True)
        (ref / "public" / "favicon.ico").write_bytes(FAVICON)
        (ref / "index.html").write_text("<title>café</title>\n", encoding="utf-8")

        exported = export_reference_files(ref, tmp_path / "out" / "snapshot.json")

        assert load_reference_files(exported) == load_reference_files(ref)


class TestResolveStack:
    @pytest.mark.unit
    def test_loads_snapshot(self, tmp_path: Path, vue_preferences):
        root = tmp_path / "official"
        (root / "vue-vite").mkdir(parents=True)
        (root / "vue-vite" / "index.html").write_text('<div id="app"></div>\n', encoding="utf-8")

        resolution = resolve_stack(vue_preferences, root)
        assert resolution.stack_id == "vue-vite"
        assert resolution.reference_dir == official_files_dir("vue-vite", root)
        assert resolution.reference_files == {"index.html": b'<div id="app"></div>\n'}
        assert resolution.has_reference is True

    @pytest.mark.unit
    def test_snapshot_not_loaded_when_not_requested(self, tmp_path: Path, vue_preferences):
        root = tmp_path / "official"
        (root / "vue-vite").mkdir(parents=True)
        (root / "vue-vite" / "index.html").write_text("<div></div>\n", encoding="utf-8")

        resolution = resolve_stack(vue_preferences, root, load_reference=False)
        assert resolution.stack_id == "vue-vite"
        assert resolution.reference_files == {}

    @pytest.mark.unit
    def test_missing_snapshot_is_empty(self, tmp_path: Path, vue_preferences):
        resolution = resolve_stack(vue_preferences, tmp_path / "official")
        assert resolution.stack_id == "vue-vite"
        assert resolution.reference_files == {}
        assert resolution.has_reference is False

    @pytest.mark.unit
    def test_custom_never_loads(self, tmp_path: Path):
        (tmp_path / "custom").mkdir()
        (tmp_path / "custom" / "x.txt").write_text("x")
        resolution = resolve_stack(_prefs(frontend="Svelte"), tmp_path)
        assert resolution.is_custom
        assert resolution.reference_dir is None
        assert resolution.reference_files == {}
