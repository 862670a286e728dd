"""Unit tests for validation standards and spot checks.

Tests cover:
- Packaged standards.yaml loads and is well-formed
- Custom standards files and unknown spot checks
- standard_key_for selection
- Individual spot checks
"""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from stackforge.models import Preferences, ProjectType
from stackforge.validator import (
    BASELINE_STANDARD,
    default_standards,
    get_standard,
    load_standards,
    standard_key_for,
    validate,
)
from stackforge.validator.checks import SPOT_CHECKS, bootstrap_dependency, laravel_env_example, vite_vue_plugin


class TestPackagedStandards:
    @pytest.mark.unit
    def test_keys(self):
        assert set(default_standards()) == {
            "vue-vite",
            "vue-vite-full",
            "vue-vite-fullstack",
            "react-vite",
            "react-laravel-fullstack",
            "laravel",
            "express",
            BASELINE_STANDARD,
        }

    @pytest.mark.unit
    def test_no_lock_files_required(self):
        for standard in default_standards().values():
            for path in standard.required_files:
                assert not path.endswith((".lock", "package-lock.json")), (standard.key, path)

    @pytest.mark.unit
    def test_content_requirements_target_required_files(self):
        for standard in default_standards().values():
            for path in standard.file_content_requirements:
                assert path in standard.required_files, (standard.key, path)

    @pytest.mark.unit
    def test_read_only(self):
        with pytest.raises(TypeError):
            default_standards()["x"] = None  # type: ignore[index]


class TestLoadStandards:
    @pytest.mark.unit
    def test_custom_file(self, tmp_path: Path, vue_preferences):
        path = tmp_path / "standards.yaml"
        path.write_text(
            "baseline:\n"
            "  required_files: [LICENSE]\n",
            encoding="utf-8",
        )
        standards = load_standards(path)
        assert standards["baseline"].key == "baseline"

        result = validate(tmp_path, "custom", vue_preferences, standards=standards)
        assert result.errors == ["Missing required file: LICENSE"]

    @pytest.mark.unit
    def test_unknown_check_rejected(self, tmp_path: Path):
        path = tmp_path / "standards.yaml"
        path.write_text("baseline:\n  checks: [does_not_exist]\n", encoding="utf-8")
        with pytest.raises(ValidationError):
            load_standards(path)

    @pytest.mark.unit
    def test_unknown_key_falls_back_to_baseline(self):
        assert get_standard("angular-cli").key == BASELINE_STANDARD


class TestStandardKeyFor:
    @pytest.mark.unit
    @pytest.mark.parametrize(
        "stack_id, css, expected",
        [
            ("vue-vite", "None", "vue-vite"),
            ("vue-vite", "", "vue-vite"),
            ("vue-vite", "Tailwind CSS", "vue-vite-full"),
            ("vue-basic", "Bootstrap", "vue-vite-full"),
            ("react-vite", "None", "react-vite"),
            ("nextjs", "None", BASELINE_STANDARD),
            ("custom", "None", BASELINE_STANDARD),
        ],
    )
    def test_frontend(self, stack_id, css, expected):
        prefs = Preferences(project_type=ProjectType.FRONTEND, css_framework=css)
        assert standard_key_for(stack_id, prefs) == expected

    @pytest.mark.unit
    def test_fullstack(self, fullstack_preferences):
        assert standard_key_for("vue-vite", fullstack_preferences) == "vue-vite-fullstack"
        react = fullstack_preferences.model_copy(update={"frontend": "React", "frontend_framework": "React + Vite"})
        assert standard_key_for("react-vite", react) == "react-laravel-fullstack"

    @pytest.mark.unit
    def test_backend(self, laravel_preferences):
        assert standard_key_for("laravel", laravel_preferences) == "laravel"
        assert standard_key_for("custom", laravel_preferences) == BASELINE_STANDARD


class TestSpotChecks:
    @pytest.mark.unit
    def test_registry(self):
        assert set(SPOT_CHECKS) == {"vite_vue_plugin", "vite_react_plugin", "bootstrap_dependency", "laravel_env_example"}

    @pytest.mark.unit
    def test_vite_plugin_missing_file_skipped(self, tmp_path: Path, vue_preferences):
        assert vite_vue_plugin(tmp_path, vue_preferences) == []

    @pytest.mark.unit
    def test_vite_plugin_in_frontend_dir(self, tmp_path: Path, vue_preferences):
        (tmp_path / "frontend").mkdir()
        (tmp_path / "frontend" / "vite.config.js").write_text("export default {}")
        assert vite_vue_plugin(tmp_path, vue_preferences) == ["frontend/vite.config.js missing Vue plugin import"]

    @pytest.mark.unit
    def test_bootstrap_only_when_selected(self, tmp_path: Path, vue_preferences):
        (tmp_path / "package.json").write_text('{"dependencies": {"vue": "3"}}')
        assert bootstrap_dependency(tmp_path, vue_preferences) == []
        prefs = vue_preferences.model_copy(update={"css_framework": "Bootstrap"})
        assert bootstrap_dependency(tmp_path, prefs) == ["Bootstrap dependency missing in package.json"]

    @pytest.mark.unit
    def test_laravel_env_example(self, tmp_path: Path, laravel_preferences):
        assert laravel_env_example(tmp_path, laravel_preferences) == ["Laravel project missing .env.example file"]
        (tmp_path / "backend").mkdir()
        (tmp_path / "backend" / ".env.example").write_text("APP_KEY=")
        assert laravel_env_example(tmp_path, laravel_preferences) == []
