# src/falsify/plugins/manager.py
"""Plugin manager for guidance and reporter discovery.

Uses pluggy for hook-based plugin registration. Profiles name a guidance
strategy and a reporter; the manager resolves those names to classes.
"""

from typing import Any

import pluggy

from falsify.contracts.errors import ConfigurationError
from falsify.plugins.guidance import BoundaryGuidance, NoGuidance
from falsify.plugins.hookspecs import (
    PROJECT_NAME,
    FalsifyGuidanceSpec,
    FalsifyReporterSpec,
    hookimpl,
)
from falsify.plugins.reporters import LoggingReporter, RaisingReporter


class BuiltinPlugins:
    """Registers the guidance strategies and reporters shipped with Falsify."""

    @hookimpl
    def falsify_get_guidance(self) -> list[type[Any]]:
        return [NoGuidance, BoundaryGuidance]

    @hookimpl
    def falsify_get_reporters(self) -> list[type[Any]]:
        return [RaisingReporter, LoggingReporter]


class PluginManager:
    """Manages plugin discovery, registration, and lookup.

    Usage:
        manager = PluginManager()
        manager.register_builtin_plugins()
        manager.register(MyPlugin())

        guidance_cls = manager.require_guidance("boundary")
    """

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)

        self._pm.add_hookspecs(FalsifyGuidanceSpec)
        self._pm.add_hookspecs(FalsifyReporterSpec)

        # Caches - map name to plugin class for duplicate detection
        self._guidance: dict[str, type[Any]] = {}
        self._reporters: dict[str, type[Any]] = {}

    def register_builtin_plugins(self) -> None:
        """Register the built-in guidance strategies and reporters."""
        self.register(BuiltinPlugins())

    def register(self, plugin: Any) -> None:
        """Register a plugin.

        Args:
            plugin: Plugin instance implementing hook methods

        Raises:
            ValueError: If the plugin provides a name that is already registered
        """
        self._pm.register(plugin)
        try:
            self._refresh_caches()
        except ValueError:
            self._pm.unregister(plugin)
            raise

    def _refresh_caches(self) -> None:
        """Refresh plugin caches from hooks.

        Raises:
            ValueError: If a plugin with the same name and type is already registered
        """
        new_guidance: dict[str, type[Any]] = {}
        new_reporters: dict[str, type[Any]] = {}

        for guidance in self._pm.hook.falsify_get_guidance():
            for cls in guidance:
                name = cls.name
                if name in new_guidance:
                    raise ValueError(f"Duplicate guidance plugin name: '{name}'. Already registered by {new_guidance[name].__name__}")
                new_guidance[name] = cls

        for reporters in self._pm.hook.falsify_get_reporters():
            for cls in reporters:
                name = cls.name
                if name in new_reporters:
                    raise ValueError(f"Duplicate reporter plugin name: '{name}'. Already registered by {new_reporters[name].__name__}")
                new_reporters[name] = cls

        # All validated, update caches
        self._guidance = new_guidance
        self._reporters = new_reporters

    @property
    def guidance_names(self) -> list[str]:
        """Names of the registered guidance strategies, sorted."""
        return sorted(self._guidance)

    @property
    def reporter_names(self) -> list[str]:
        """Names of the registered reporters, sorted."""
        return sorted(self._reporters)

    def require_guidance(self, name: str) -> type[Any]:
        """Look up a guidance class, failing loudly for unknown names.

        Raises:
            ConfigurationError: If no guidance is registered under name
        """
        cls = self._guidance.get(name)
        if cls is None:
            raise ConfigurationError(f"Unknown guidance '{name}'. Available: {self.guidance_names}")
        return cls

    def require_reporter(self, name: str) -> type[Any]:
        """Look up a reporter class, failing loudly for unknown names.

        Raises:
            ConfigurationError: If no reporter is registered under name
        """
        cls = self._reporters.get(name)
        if cls is None:
            raise ConfigurationError(f"Unknown reporter '{name}'. Available: {self.reporter_names}")
        return cls
