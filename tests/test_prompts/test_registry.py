"""Unit tests for the technology module registry (stackforge.prompts.modules.registry)."""

from __future__ import annotations

import logging

import pytest

from stackforge.prompts.modules import (
    DEFAULT_BACKEND,
    DEFAULT_CSS,
    DEFAULT_FRONTEND,
    MODULE_REGISTRY,
    ModuleCategory,
    ModuleChoice,
    Technology,
    UnknownTechnologyError,
    backend_module_for,
    css_module_for,
    frontend_module_for,
    get_module,
)


class TestRegistry:
    @pytest.mark.unit
    def test_every_technology_registered(self):
        assert set(MODULE_REGISTRY) == set(Technology)

    @pytest.mark.unit
    def test_keys_match_modules(self):
        for key, module in MODULE_REGISTRY.items():
            assert module.key is key

    @pytest.mark.unit
    def test_read_only(self):
        with pytest.raises(TypeError):
            MODULE_REGISTRY[Technology.DOCKER] = None  # type: ignore[index]

    @pytest.mark.unit
    def test_categories(self):
        assert MODULE_REGISTRY[Technology.VUE3_VITE].category is ModuleCategory.FRONTEND
        assert MODULE_REGISTRY[Technology.LARAVEL].category is ModuleCategory.BACKEND
        assert MODULE_REGISTRY[Technology.TAILWIND].category is ModuleCategory.CSS
        assert MODULE_REGISTRY[Technology.DOCKER].category is ModuleCategory.INTEGRATION

    @pytest.mark.unit
    def test_get_module_by_value(self):
        assert get_module("laravel") is MODULE_REGISTRY[Technology.LARAVEL]

    @pytest.mark.unit
    def test_get_module_unknown(self):
        with pytest.raises(UnknownTechnologyError):
            get_module("svelte")


class TestNameLookup:
    @pytest.mark.unit
    @pytest.mark.parametrize(
        "name, expected",
        [
            ("Vue + Vite", Technology.VUE3_VITE),
            ("vue", Technology.VUE3_VITE),
            ("Vue (Vue 3)", Technology.VUE3_BASIC),
            ("React + Vite", Technology.REACT_VITE),
            ("React (Basic)", Technology.REACT_BASIC),
            ("Next.js", Technology.NEXTJS),
            ("  Angular  ", Technology.ANGULAR_CLI),
        ],
    )
    def test_frontend_names(self, name, expected):
        assert frontend_module_for(name) == ModuleChoice(expected)

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "name, expected",
        [
            ("Laravel", Technology.LARAVEL),
            ("PHP", Technology.LARAVEL),
            ("Express.js", Technology.EXPRESS),
            ("FastAPI", Technology.FASTAPI),
        ],
    )
    def test_backend_names(self, name, expected):
        assert backend_module_for(name).technology is expected

    @pytest.mark.unit
    def test_unknown_falls_back_with_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="stackforge"):
            frontend = frontend_module_for("Svelte")
            backend = backend_module_for("Rails")
            css = css_module_for("Bulma")

        assert frontend == ModuleChoice(DEFAULT_FRONTEND, fallback=True)
        assert backend == ModuleChoice(DEFAULT_BACKEND, fallback=True)
        assert css == ModuleChoice(DEFAULT_CSS, fallback=True)
        assert "Svelte" in caplog.text
        assert "Rails" in caplog.text

    @pytest.mark.unit
    def test_material_ui_kept_for_react(self):
        assert css_module_for("Material UI", Technology.REACT_VITE).technology is Technology.MATERIAL_UI

    @pytest.mark.unit
    @pytest.mark.parametrize("frontend", [Technology.VUE3_VITE, Technology.ANGULAR_CLI, None])
    def test_material_ui_becomes_vuetify_elsewhere(self, frontend):
        assert css_module_for("Material UI", frontend).technology is Technology.VUETIFY
