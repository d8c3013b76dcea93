"""Engine tunables with environment overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields

from urlbar_suggestions.exceptions import ConfigError

ENV_PREFIX = "URLBAR_"


@dataclass(frozen=True)
class SuggestionConfig:
    """Limits, decay and debounce settings for one suggestion engine.

    Every field can be overridden from the environment by its upper-cased
    name with the ``URLBAR_`` prefix, e.g. ``URLBAR_MAX_TOP_SITES=5``.
    """

    age_decay_constant: float = 50.0
    max_history_sites: int = 10
    max_about_pages: int = 2
    max_opened_frames: int = 2
    max_search: int = 3
    max_top_sites: int = 3
    list_debounce_seconds: float = 0.005
    search_debounce_seconds: float = 0.010

    def __post_init__(self):
        if self.age_decay_constant <= 0:
            raise ConfigError("age_decay_constant must be greater than 0")
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name.startswith("max_") and value < 0:
                raise ConfigError(f"{f.name} must be non-negative")
            if f.name.endswith("_seconds") and value < 0:
                raise ConfigError(f"{f.name} must be non-negative")

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> SuggestionConfig:
        """Build a config, applying any ``URLBAR_*`` overrides."""
        env = os.environ if environ is None else environ
        overrides = {}
        for f in fields(cls):
            raw = env.get(ENV_PREFIX + f.name.upper())
            if raw is None or raw.strip() == "":
                continue
            cast = int if f.type in ("int", int) else float
            try:
                overrides[f.name] = cast(raw)
            except ValueError as e:
                raise ConfigError(
                    f"Invalid value for {ENV_PREFIX + f.name.upper()}: {raw!r}"
                ) from e
        return cls(**overrides)


DEFAULT_CONFIG = SuggestionConfig()
