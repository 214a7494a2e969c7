# tests/plugins/test_manager.py
"""Tests for plugin manager."""

import pytest

from falsify.contracts import ConfigurationError


class TestPluginManager:
    """Plugin discovery, registration, and lookup."""

    def test_create_manager(self) -> None:
        from falsify.plugins.manager import PluginManager

        manager = PluginManager()
        assert manager is not None
        assert manager.guidance_names == []
        assert manager.reporter_names == []

    def test_builtin_plugins(self) -> None:
        from falsify.plugins import BoundaryGuidance, LoggingReporter, NoGuidance, RaisingReporter
        from falsify.plugins.manager import PluginManager

        manager = PluginManager()
        manager.register_builtin_plugins()

        assert manager.guidance_names == ["boundary", "none"]
        assert manager.reporter_names == ["log", "raise"]
        assert manager.require_guidance("none") is NoGuidance
        assert manager.require_guidance("boundary") is BoundaryGuidance
        assert manager.require_reporter("raise") is RaisingReporter
        assert manager.require_reporter("log") is LoggingReporter

    def test_unknown_name_lookup(self) -> None:
        from falsify.plugins.manager import PluginManager

        manager = PluginManager()
        manager.register_builtin_plugins()

        with pytest.raises(ConfigurationError, match=r"Available: \[.boundary., .none.\]"):
            manager.require_guidance("annealing")
        with pytest.raises(ConfigurationError):
            manager.require_reporter("email")

    def test_register_custom_plugin(self) -> None:
        from falsify.plugins.hookspecs import hookimpl
        from falsify.plugins.manager import PluginManager

        class EdgeGuidance:
            name = "edges"

            def __init__(self, prng: object) -> None:
                pass

        class EdgePlugin:
            @hookimpl
            def falsify_get_guidance(self) -> list[type]:
                return [EdgeGuidance]

        manager = PluginManager()
        manager.register_builtin_plugins()
        manager.register(EdgePlugin())

        assert manager.require_guidance("edges") is EdgeGuidance
        assert manager.guidance_names == ["boundary", "edges", "none"]


class TestDuplicateNameValidation:
    """Duplicate plugin names are rejected and leave the manager usable."""

    def test_duplicate_guidance_name_raises(self) -> None:
        from falsify.plugins.hookspecs import hookimpl
        from falsify.plugins.manager import PluginManager

        class ShadowBoundary:
            name = "boundary"

        class ShadowPlugin:
            @hookimpl
            def falsify_get_guidance(self) -> list[type]:
                return [ShadowBoundary]

        manager = PluginManager()
        manager.register_builtin_plugins()

        with pytest.raises(ValueError, match="Duplicate guidance plugin name: 'boundary'"):
            manager.register(ShadowPlugin())

        from falsify.plugins import BoundaryGuidance

        assert manager.require_guidance("boundary") is BoundaryGuidance

    def test_duplicate_reporter_name_raises(self) -> None:
        from falsify.plugins.hookspecs import hookimpl
        from falsify.plugins.manager import PluginManager

        class LoudReporter:
            name = "raise"

        class LoudPlugin:
            @hookimpl
            def falsify_get_reporters(self) -> list[type]:
                return [LoudReporter]

        manager = PluginManager()
        manager.register_builtin_plugins()

        with pytest.raises(ValueError, match="Duplicate reporter plugin name"):
            manager.register(LoudPlugin())

        # Rejected plugin is unregistered; registering it again fails the same way
        with pytest.raises(ValueError, match="Duplicate reporter plugin name"):
            manager.register(LoudPlugin())
