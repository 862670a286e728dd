"""Unit tests for project file writing (stackforge.generation.writer)."""

from __future__ import annotations

from pathlib import Path

import pytest

from stackforge.generation import (
    UnsafePathError,
    ensure_project_directory,
    read_project_file,
    remove_project_directory,
    resolve_project_path,
    write_project_file,
)


class TestResolveProjectPath:
    @pytest.mark.unit
    def test_nested(self, tmp_path: Path):
        assert resolve_project_path(tmp_path, "src/components/Nav.vue") == tmp_path / "src" / "components" / "Nav.vue"

    @pytest.mark.unit
    @pytest.mark.parametrize("relative", ["/etc/passwd", "../outside.txt", "src/../../x", "", "."])
    def test_rejects_unsafe(self, tmp_path: Path, relative):
        with pytest.raises(UnsafePathError):
            resolve_project_path(tmp_path, relative)


class TestWriteAndRead:
    @pytest.mark.unit
    def test_creates_parents(self, tmp_path: Path):
        target = write_project_file(tmp_path, "backend/app/Models/User.php", "<?php\n")
        assert target.read_text(encoding="utf-8") == "<?php\n"
        assert read_project_file(tmp_path, "backend/app/Models/User.php") == "<?php\n"

    @pytest.mark.unit
    def test_overwrites(self, tmp_path: Path):
        write_project_file(tmp_path, "README.md", "old")
        write_project_file(tmp_path, "README.md", "new")
        assert read_project_file(tmp_path, "README.md") == "new"

    @pytest.mark.unit
    def test_read_missing(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            read_project_file(tmp_path, "nope.txt")


class TestProjectDirectory:
    @pytest.mark.unit
    def test_ensure_is_idempotent(self, tmp_path: Path):
        project = tmp_path / "a" / "demo"
        assert ensure_project_directory(project) == project
        (project / "keep.txt").write_text("x")
        ensure_project_directory(project)
        assert (project / "keep.txt").exists()

    @pytest.mark.unit
    def test_remove(self, tmp_path: Path):
        project = tmp_path / "demo"
        write_project_file(project, "src/main.js", "x")
        assert remove_project_directory(project) is True
        assert not project.exists()

    @pytest.mark.unit
    def test_remove_missing(self, tmp_path: Path):
        assert remove_project_directory(tmp_path / "missing") is False
