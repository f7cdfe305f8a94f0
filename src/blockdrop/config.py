"""Session configuration for the engine."""

from __future__ import annotations

from dataclasses import dataclass
from numbers import Integral, Real
from typing import Any, Mapping, Optional

from .board import HEIGHT, WIDTH


DEFAULT_DROP_INTERVAL_MS = 1000

# Smallest board that fits every piece at its spawn position.
MIN_BOARD_SIZE = 4

# Keys under which hosts store the drop interval.
DROP_SPEED_KEYS = ("dropSpeed", "tetris.dropSpeed")


class ConfigError(ValueError):
    """Raised when the engine configuration cannot produce a valid session."""


@dataclass(frozen=True)
class EngineConfig:
    """Settings read once when an engine is created."""

    drop_interval_ms: float = DEFAULT_DROP_INTERVAL_MS
    width: int = WIDTH
    height: int = HEIGHT
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        interval = self.drop_interval_ms
        if interval is None:
            raise ConfigError("drop_interval_ms is required")
        if isinstance(interval, bool) or not isinstance(interval, Real):
            raise ConfigError(f"drop_interval_ms must be a number, got {interval!r}")
        if not interval > 0:
            raise ConfigError(f"drop_interval_ms must be positive, got {interval!r}")
        for name in ("width", "height"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, Integral) or value < MIN_BOARD_SIZE:
                raise ConfigError(f"{name} must be an integer >= {MIN_BOARD_SIZE}, got {value!r}")

    @classmethod
    def from_mapping(cls, settings: Mapping[str, Any]) -> "EngineConfig":
        """Build a config from host settings.

        The drop interval is looked up under ``dropSpeed`` (or
        ``tetris.dropSpeed``) and falls back to the default when neither key
        is present.  Optional ``width``, ``height`` and ``seed`` keys are
        passed through.
        """

        interval: Any = DEFAULT_DROP_INTERVAL_MS
        for key in DROP_SPEED_KEYS:
            if key in settings:
                interval = settings[key]
                break
        return cls(
            drop_interval_ms=interval,
            width=settings.get("width", WIDTH),
            height=settings.get("height", HEIGHT),
            seed=settings.get("seed"),
        )
