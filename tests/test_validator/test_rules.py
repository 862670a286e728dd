"""Unit tests for rule-based validation (stackforge.validator.rules).

Tests cover:
- A complete Vue 3 + Vite project passes
- A single missing substring yields exactly one incomplete entry
- Missing files (exactly the removed subset), manifest keys and parse errors
- Validation never raises and is idempotent
- build_fix_summary
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from stackforge.models import Preferences, ProjectType
from stackforge.validator import IncompleteFile, build_fix_summary, get_standard, validate


@pytest.fixture
def vue_project(tmp_path: Path, write_tree, vue_vite_files) -> Path:
    return write_tree(tmp_path / "demo", vue_vite_files)


class TestValidateVueVite:
    @pytest.mark.unit
    def test_complete_project_passes(self, vue_project, vue_preferences):
        result = validate(vue_project, "vue-vite", vue_preferences)
        assert result.standard == "vue-vite"
        assert result.is_valid
        assert not result.has_issues

    @pytest.mark.unit
    def test_unregistered_plugin_is_one_issue(self, vue_project, vue_preferences, broken_vite_config):
        (vue_project / "vite.config.js").write_text(broken_vite_config, encoding="utf-8")

        result = validate(vue_project, "vue-vite", vue_preferences)

        assert result.is_valid is False
        assert result.missing_files == []
        assert result.incomplete_files == [IncompleteFile(file="vite.config.js", missing="plugins: [vue()]")]
        assert result.errors == ["File vite.config.js missing required content: plugins: [vue()]"]

    @pytest.mark.unit
    def test_missing_file(self, vue_project, vue_preferences):
        (vue_project / ".dockerignore").unlink()

        result = validate(vue_project, "vue-vite", vue_preferences)

        assert result.missing_files == [".dockerignore"]
        assert result.errors == ["Missing required file: .dockerignore"]

    @pytest.mark.unit
    def test_missing_manifest_keys(self, vue_project, vue_preferences):
        manifest = json.loads((vue_project / "package.json").read_text())
        del manifest["scripts"]["preview"]
        del manifest["devDependencies"]
        (vue_project / "package.json").write_text(json.dumps(manifest))

        errors = validate(vue_project, "vue-vite", vue_preferences).errors

        assert "Missing scripts entry in package.json: preview" in errors
        assert "Missing devDependencies entry in package.json: @vitejs/plugin-vue" in errors
        assert "Missing devDependencies entry in package.json: vite" in errors

    @pytest.mark.unit
    def test_empty_version_still_declared(self, vue_project, vue_preferences):
        manifest = json.loads((vue_project / "package.json").read_text())
        manifest["dependencies"]["vue"] = ""
        (vue_project / "package.json").write_text(json.dumps(manifest))

        assert validate(vue_project, "vue-vite", vue_preferences).is_valid

    @pytest.mark.unit
    def test_malformed_manifest(self, vue_project, vue_preferences):
        (vue_project / "package.json").write_text("{ not json")

        errors = validate(vue_project, "vue-vite", vue_preferences).errors

        assert any(e.startswith("Error parsing package.json:") for e in errors)
        assert "No package.json found in expected locations" in errors

    @pytest.mark.unit
    def test_manifest_fallback_candidate(self, vue_project, vue_preferences):
        (vue_project / "package.json").write_text("[]")
        (vue_project / "frontend").mkdir()
        (vue_project / "frontend" / "package.json").write_text(
            json.dumps({"dependencies": {"vue": "3"}, "devDependencies": {"@vitejs/plugin-vue": "5", "vite": "5"},
                        "scripts": {"dev": "", "build": "", "preview": ""}})
        )

        errors = validate(vue_project, "vue-vite", vue_preferences).errors
        assert errors == ["Error parsing package.json: top level is not an object"]

    @pytest.mark.unit
    def test_bootstrap_spot_check(self, vue_project, vue_preferences):
        prefs = vue_preferences.model_copy(update={"css_framework": "Bootstrap"})
        result = validate(vue_project, "vue-vite", prefs)
        # With a CSS framework the richer standard applies.
        assert result.standard == "vue-vite-full"
        assert "Bootstrap dependency missing in package.json" in result.errors

    @pytest.mark.unit
    def test_unreadable_file_reported(self, vue_project, vue_preferences):
        (vue_project / "src" / "main.js").write_bytes(b"\xff\xfe\x00broken")
        errors = validate(vue_project, "vue-vite", vue_preferences).errors
        assert any(e.startswith("Error reading file src/main.js") for e in errors)

    @pytest.mark.unit
    def test_empty_directory_never_raises(self, tmp_path: Path, vue_preferences):
        result = validate(tmp_path / "does-not-exist", "vue-vite", vue_preferences)
        assert len(result.missing_files) == 11
        assert "No package.json found in expected locations" in result.errors

    @pytest.mark.unit
    def test_idempotent(self, vue_project, vue_preferences, broken_vite_config):
        (vue_project / "vite.config.js").write_text(broken_vite_config, encoding="utf-8")
        (vue_project / "README.md").unlink()
        first = validate(vue_project, "vue-vite", vue_preferences)
        second = validate(vue_project, "vue-vite", vue_preferences)
        assert first == second


class TestResultProperties:
    @pytest.mark.unit
    def test_issue_lists_subset_of_errors(self, tmp_path: Path, write_tree, vue_vite_files, vue_preferences):
        files = dict(vue_vite_files)
        del files["nginx.conf"]
        files["index.html"] = "<html></html>"
        project = write_tree(tmp_path / "p", files)

        result = validate(project, "vue-vite", vue_preferences)

        for path in result.missing_files:
            assert f"Missing required file: {path}" in result.errors
        for item in result.incomplete_files:
            assert f"File {item.file} missing required content: {item.missing}" in result.errors
        assert len(result.incomplete_files) == 2


ALL = "*"


class TestMissingFileSubsets:
    """Removing any subset of the required files reports exactly that subset."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "stack_id, prefs_fixture, removed",
        [
            ("vue-vite", "vue_preferences", []),
            ("vue-vite", "vue_preferences", [".dockerignore"]),
            ("vue-vite", "vue_preferences", ["package.json", "src/App.vue", "nginx.conf"]),
            ("vue-vite", "vue_preferences", ["vite.config.js", "index.html", "src/main.js", "README.md"]),
            ("vue-vite", "vue_preferences", ALL),
            ("laravel", "laravel_preferences", []),
            ("laravel", "laravel_preferences", ["artisan"]),
            ("laravel", "laravel_preferences", ["composer.json", "routes/api.php", ".env.example"]),
            ("laravel", "laravel_preferences", ["bootstrap/app.php", "app/Models/User.php", ".dockerignore"]),
            ("laravel", "laravel_preferences", ALL),
        ],
    )
    def test_reports_exactly_removed(
        self, request, tmp_path: Path, write_tree, vue_vite_files, stack_id, prefs_fixture, removed
    ):
        prefs = request.getfixturevalue(prefs_fixture)
        standard = get_standard(stack_id)
        removed = list(standard.required_files) if removed == ALL else removed
        files = {
            path: vue_vite_files.get(path, "placeholder\n")
            for path in standard.required_files
            if path not in removed
        }
        project = write_tree(tmp_path / "p", files)
        project.mkdir(parents=True, exist_ok=True)

        result = validate(project, stack_id, prefs)

        assert result.standard == stack_id
        assert result.missing_files == [path for path in standard.required_files if path in removed]

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "stack_id, prefs_fixture", [("vue-vite", "vue_preferences"), ("laravel", "laravel_preferences")]
    )
    def test_every_single_file(self, request, tmp_path: Path, write_tree, stack_id, prefs_fixture):
        prefs = request.getfixturevalue(prefs_fixture)
        required = get_standard(stack_id).required_files

        for index, removed in enumerate(required):
            files = {path: "placeholder\n" for path in required if path != removed}
            project = write_tree(tmp_path / str(index), files)
            assert validate(project, stack_id, prefs).missing_files == [removed]


class TestOtherStandards:
    @pytest.mark.unit
    def test_laravel_requires_env_example(self, tmp_path: Path, laravel_preferences):
        result = validate(tmp_path, "laravel", laravel_preferences)
        assert result.standard == "laravel"
        assert "Laravel project missing .env.example file" in result.errors
        assert "No composer.json found in expected locations" in result.errors

    @pytest.mark.unit
    def test_custom_stack_uses_baseline(self, tmp_path: Path, write_tree):
        prefs = Preferences(frontend="Svelte", project_type=ProjectType.FRONTEND)
        project = write_tree(tmp_path / "p", {"README.md": "x", ".gitignore": "x", "docker-compose.yml": "x"})
        result = validate(project, "custom", prefs)
        assert result.standard == "baseline"
        assert result.is_valid


class TestBuildFixSummary:
    @pytest.mark.unit
    def test_none_when_clean(self, vue_project, vue_preferences):
        assert build_fix_summary(validate(vue_project, "vue-vite", vue_preferences), vue_preferences) is None

    @pytest.mark.unit
    def test_lists_every_issue(self, vue_project, vue_preferences, broken_vite_config):
        (vue_project / "vite.config.js").write_text(broken_vite_config, encoding="utf-8")
        (vue_project / ".gitignore").unlink()

        summary = build_fix_summary(validate(vue_project, "vue-vite", vue_preferences), vue_preferences)

        assert summary.startswith("## AUTOMATIC CORRECTION REQUIRED")
        assert "### Missing Files:\n- .gitignore" in summary
        assert '- vite.config.js: missing "plugins: [vue()]"' in summary
        assert "frontend project with Vue + Vite" in summary
