# src/falsify/core/config.py
"""
Configuration for property checks.

Strategy is the immutable runtime bundle one check runs under: seed source,
budgets, reporter and guidance factory. Every with_*() returns a new
Strategy, so overriding configuration for one check never leaks into
another check running alongside it.

Profiles are named, partial overrides validated with Pydantic and loaded
with Dynaconf. They live in an explicit ProfileRegistry that callers pass
around; there is no process-wide profile table.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

from falsify.contracts.errors import ConfigurationError
from falsify.core.randomness import PseudoRandom
from falsify.plugins.guidance import NoGuidance
from falsify.plugins.manager import PluginManager
from falsify.plugins.reporters import RaisingReporter

if TYPE_CHECKING:
    from falsify.contracts.protocols import GuidanceFactory, Reporter

DEFAULT_EXAMPLES = 1000
DEFAULT_TESTING_TIME_SECONDS = 0.0
DEFAULT_SHRINK_CYCLES = 10_000
DEFAULT_GENERATE_ATTEMPTS = 10

UNLIMITED = -1


def system_seed() -> int:
    """Fresh seed from the wall clock."""
    return time.time_ns()


@dataclass(frozen=True)
class FixedSeed:
    """Seed source that always returns the same seed."""

    seed: int

    def __call__(self) -> int:
        return self.seed


@dataclass(frozen=True)
class Strategy:
    """Immutable budgets and collaborators for one property check.

    Budgets:
        examples: Trials to run; -1 for unlimited
        testing_time_seconds: Wall-clock budget; applies only when > 0
        shrink_cycles: Property executions allowed while shrinking
        generate_attempts: Draws allowed per filtered value, and consecutive
            predicate-level rejections tolerated before giving up

    Examples -1 with no time budget runs until the property is falsified or
    generation is exhausted.

    Example:
        strategy = Strategy().with_fixed_seed(42).with_examples(200)
        strategy.prng().initial_seed  # 42
    """

    seed_source: Callable[[], int] = system_seed
    examples: int = DEFAULT_EXAMPLES
    testing_time_seconds: float = DEFAULT_TESTING_TIME_SECONDS
    shrink_cycles: int = DEFAULT_SHRINK_CYCLES
    generate_attempts: int = DEFAULT_GENERATE_ATTEMPTS
    reporter: Reporter = field(default_factory=RaisingReporter)
    guidance_factory: GuidanceFactory = NoGuidance

    def __post_init__(self) -> None:
        if self.examples < UNLIMITED:
            raise ConfigurationError(f"examples must be >= -1, got {self.examples}")
        if self.testing_time_seconds < UNLIMITED:
            raise ConfigurationError(f"testing_time_seconds must be >= -1, got {self.testing_time_seconds}")
        if self.shrink_cycles < 0:
            raise ConfigurationError(f"shrink_cycles must be >= 0, got {self.shrink_cycles}")
        if self.generate_attempts < 1:
            raise ConfigurationError(f"generate_attempts must be > 0, got {self.generate_attempts}")

    def prng(self) -> PseudoRandom:
        """New PRNG seeded from seed_source. Called once per run."""
        return PseudoRandom(self.seed_source())

    @property
    def has_time_budget(self) -> bool:
        return self.testing_time_seconds > 0

    # === Mutators (each returns a new Strategy) ===

    def with_fixed_seed(self, seed: int) -> Strategy:
        return replace(self, seed_source=FixedSeed(seed))

    def with_seed_source(self, seed_source: Callable[[], int]) -> Strategy:
        return replace(self, seed_source=seed_source)

    def with_examples(self, examples: int) -> Strategy:
        return replace(self, examples=examples)

    def with_unlimited_examples(self) -> Strategy:
        return replace(self, examples=UNLIMITED)

    def with_testing_time(self, seconds: float) -> Strategy:
        return replace(self, testing_time_seconds=seconds)

    def with_unlimited_testing_time(self) -> Strategy:
        return replace(self, testing_time_seconds=UNLIMITED)

    def with_shrink_cycles(self, shrink_cycles: int) -> Strategy:
        return replace(self, shrink_cycles=shrink_cycles)

    def with_generate_attempts(self, generate_attempts: int) -> Strategy:
        return replace(self, generate_attempts=generate_attempts)

    def with_reporter(self, reporter: Reporter) -> Strategy:
        return replace(self, reporter=reporter)

    def with_guidance(self, guidance_factory: GuidanceFactory) -> Strategy:
        return replace(self, guidance_factory=guidance_factory)


def _builtin_plugins() -> PluginManager:
    manager = PluginManager()
    manager.register_builtin_plugins()
    return manager


class ProfileSettings(BaseModel):
    """Named partial override of a Strategy.

    Unset fields (None) keep the base Strategy's value. guidance and
    reporter name registered plugins.

    Example YAML:
        profiles:
          ci:
            examples: 100
          nightly:
            examples: -1
            testing_time_seconds: 600
            guidance: boundary
    """

    model_config = {"frozen": True, "extra": "forbid"}

    examples: int | None = Field(default=None, ge=UNLIMITED, description="Trials to run; -1 for unlimited")
    testing_time_seconds: float | None = Field(default=None, ge=UNLIMITED, description="Wall-clock budget in seconds")
    shrink_cycles: int | None = Field(default=None, ge=0, description="Property executions allowed while shrinking")
    generate_attempts: int | None = Field(default=None, gt=0, description="Draws allowed per filtered value")
    seed: int | None = Field(default=None, description="Fixed seed for reproducible runs")
    guidance: str | None = Field(default=None, min_length=1, description="Registered guidance plugin name")
    reporter: str | None = Field(default=None, min_length=1, description="Registered reporter plugin name")

    def apply(self, base: Strategy, plugins: PluginManager | None = None) -> Strategy:
        """Return base with every set field overridden.

        Raises:
            ConfigurationError: If guidance or reporter names an unknown plugin
        """
        strategy = base
        if self.seed is not None:
            strategy = strategy.with_fixed_seed(self.seed)
        if self.examples is not None:
            strategy = strategy.with_examples(self.examples)
        if self.testing_time_seconds is not None:
            strategy = strategy.with_testing_time(self.testing_time_seconds)
        if self.shrink_cycles is not None:
            strategy = strategy.with_shrink_cycles(self.shrink_cycles)
        if self.generate_attempts is not None:
            strategy = strategy.with_generate_attempts(self.generate_attempts)
        if self.guidance is not None or self.reporter is not None:
            manager = plugins if plugins is not None else _builtin_plugins()
            if self.guidance is not None:
                strategy = strategy.with_guidance(manager.require_guidance(self.guidance))
            if self.reporter is not None:
                strategy = strategy.with_reporter(manager.require_reporter(self.reporter)())
        return strategy


class ProfileRegistry:
    """Profiles keyed by name.

    Owned and passed around by the caller; nothing is registered globally.

    Usage:
        registry = ProfileRegistry()
        registry.register("ci", ProfileSettings(examples=100))
        strategy = registry.strategy_for("ci", base=Strategy().with_fixed_seed(7))
    """

    def __init__(
        self,
        profiles: Mapping[str, ProfileSettings] | None = None,
        *,
        plugins: PluginManager | None = None,
    ) -> None:
        self._profiles: dict[str, ProfileSettings] = {}
        self._plugins = plugins
        for name, settings in (profiles or {}).items():
            self.register(name, settings)

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(sorted(self._profiles))

    def __contains__(self, name: object) -> bool:
        return name in self._profiles

    def register(self, name: str, settings: ProfileSettings) -> None:
        """Add a profile.

        Raises:
            ConfigurationError: If name is empty or already registered
        """
        if not name:
            raise ConfigurationError("Profile name must not be empty")
        if name in self._profiles:
            raise ConfigurationError(f"Duplicate profile name: '{name}'")
        self._profiles[name] = settings

    def get(self, name: str) -> ProfileSettings:
        """Look up a profile.

        Raises:
            ConfigurationError: If no profile is registered under name
        """
        if name not in self._profiles:
            raise ConfigurationError(f"Unknown profile '{name}'. Available: {list(self.names)}")
        return self._profiles[name]

    def strategy_for(self, name: str, base: Strategy | None = None) -> Strategy:
        """Strategy for the named profile, layered over base (or defaults)."""
        return self.get(name).apply(base if base is not None else Strategy(), self._plugins)


def _lower_keys(raw: Mapping[str, Any]) -> dict[str, Any]:
    return {str(k).lower(): v for k, v in raw.items()}


def load_profiles(config_path: Path, *, plugins: PluginManager | None = None) -> ProfileRegistry:
    """Load profiles from a YAML file with environment variable overrides.

    Uses Dynaconf for multi-source loading with precedence:
    1. Environment variables (FALSIFY_*) - highest priority
    2. Config file
    3. Defaults of the base Strategy - lowest priority

    Environment variable format: FALSIFY_PROFILES__CI__EXAMPLES for nested keys.
    Profile names are case-insensitive and stored lowercase.

    Args:
        config_path: Path to YAML file with a top-level `profiles` mapping
        plugins: Plugin manager used to resolve guidance/reporter names

    Returns:
        Registry holding every profile in the file

    Raises:
        FileNotFoundError: If config file doesn't exist
        ConfigurationError: If `profiles` is not a mapping
        ValidationError: If a profile fails Pydantic validation
    """
    from dynaconf import Dynaconf

    # Explicit check for file existence (Dynaconf silently accepts missing files)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    dynaconf_settings = Dynaconf(
        envvar_prefix="FALSIFY",
        settings_files=[str(config_path)],
        environments=False,  # No [default]/[production] sections
        load_dotenv=False,  # Don't auto-load .env
        merge_enabled=True,  # Deep merge nested dicts
    )

    # Dynaconf returns uppercase keys; convert to lowercase for Pydantic
    raw_config = _lower_keys(dynaconf_settings.as_dict())
    raw_profiles = raw_config.get("profiles", {})
    if not isinstance(raw_profiles, Mapping):
        raise ConfigurationError(f"'profiles' must be a mapping of name to settings, got {type(raw_profiles).__name__}")

    registry = ProfileRegistry(plugins=plugins)
    for name, body in raw_profiles.items():
        if not isinstance(body, Mapping):
            raise ConfigurationError(f"Profile '{name}' must be a mapping, got {type(body).__name__}")
        registry.register(str(name).lower(), ProfileSettings.model_validate(_lower_keys(body)))
    return registry


def system_strategy(base: Strategy | None = None, *, plugins: PluginManager | None = None) -> Strategy:
    """Default Strategy with FALSIFY_* environment variable overrides.

    Recognised variables mirror ProfileSettings fields: FALSIFY_SEED,
    FALSIFY_EXAMPLES, FALSIFY_TESTING_TIME_SECONDS, FALSIFY_SHRINK_CYCLES,
    FALSIFY_GENERATE_ATTEMPTS, FALSIFY_GUIDANCE, FALSIFY_REPORTER.

    Raises:
        ValidationError: If a variable holds an invalid value
        ConfigurationError: If a named plugin is unknown
    """
    from dynaconf import Dynaconf

    environment = Dynaconf(envvar_prefix="FALSIFY", environments=False, load_dotenv=False)
    raw = _lower_keys(environment.as_dict())
    overrides = {key: raw[key] for key in ProfileSettings.model_fields if key in raw}
    settings = ProfileSettings.model_validate(overrides)
    return settings.apply(base if base is not None else Strategy(), plugins)
