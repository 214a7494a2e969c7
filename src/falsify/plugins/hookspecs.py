# src/falsify/plugins/hookspecs.py
"""pluggy hook specifications for Falsify plugins.

Plugins implement these hooks to make guidance strategies and reporters
available by name, so profiles can refer to them ("guidance: boundary").

Usage (implementing a plugin):
    from falsify.plugins.hookspecs import hookimpl

    class MyPlugin:
        @hookimpl  # NOT @hookspec - that's for defining specs
        def falsify_get_guidance(self):
            return [MyGuidance]

Note: @hookspec defines the hook interface (done here).
      @hookimpl marks plugin implementations of those hooks.
"""

from typing import Any

import pluggy

# Project name for pluggy
PROJECT_NAME = "falsify"

# Hook specification marker
hookspec = pluggy.HookspecMarker(PROJECT_NAME)

# Hook implementation marker (for plugins to use)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class FalsifyGuidanceSpec:
    """Hook specifications for guidance plugins."""

    @hookspec
    def falsify_get_guidance(self) -> list[type[Any]]:  # type: ignore[empty-body]
        """Return guidance classes.

        Each class must have a `name` class attribute and accept a
        SeededRandom as its only constructor argument, so the class itself
        serves as the GuidanceFactory.

        Returns:
            List of guidance classes (not instances)
        """


class FalsifyReporterSpec:
    """Hook specifications for reporter plugins."""

    @hookspec
    def falsify_get_reporters(self) -> list[type[Any]]:  # type: ignore[empty-body]
        """Return reporter classes.

        Each class must have a `name` class attribute and a no-argument
        constructor.

        Returns:
            List of reporter classes
        """
