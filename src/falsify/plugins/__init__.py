"""Plugin system: guidance strategies and reporters, discovered through pluggy."""

from falsify.plugins.guidance import BoundaryGuidance, NoGuidance
from falsify.plugins.hookspecs import hookimpl
from falsify.plugins.manager import PluginManager
from falsify.plugins.reporters import LoggingReporter, RaisingReporter

__all__ = [
    "BoundaryGuidance",
    "LoggingReporter",
    "NoGuidance",
    "PluginManager",
    "RaisingReporter",
    "hookimpl",
]
