"""Runtime settings for the simulation loop."""

import json
from dataclasses import dataclass, fields, replace
from pathlib import Path

# field name, accepted types, whether None is allowed
_FIELD_TYPES = [
    ("tick_interval_ms", int, False),
    ("event_chance", (int, float), False),
    ("recent_events", int, False),
    ("max_events", int, True),
    ("seed", int, True),
]


@dataclass(frozen=True)
class SimulationConfig:
    """Cadence, event odds and display settings."""

    tick_interval_ms: int = 500
    event_chance: float = 0.02  # per loop iteration
    recent_events: int = 3  # shown by the renderer
    max_events: int | None = 100  # event log cap, None keeps everything
    seed: int | None = None

    def __post_init__(self) -> None:
        for name, allowed, optional in _FIELD_TYPES:
            value = getattr(self, name)
            if value is None and optional:
                continue
            if isinstance(value, bool) or not isinstance(value, allowed):
                raise ValueError(f"{name} has invalid type: {value!r}")

        if self.tick_interval_ms <= 0:
            raise ValueError(
                f"tick_interval_ms must be positive, got {self.tick_interval_ms}"
            )
        if not 0.0 <= self.event_chance <= 1.0:
            raise ValueError(
                f"event_chance must be between 0 and 1, got {self.event_chance}"
            )
        if self.recent_events < 0:
            raise ValueError(
                f"recent_events must not be negative, got {self.recent_events}"
            )
        if self.max_events is not None and self.max_events < 1:
            raise ValueError(f"max_events must be at least 1, got {self.max_events}")

    @property
    def tick_interval_seconds(self) -> float:
        return self.tick_interval_ms / 1000.0

    def with_overrides(self, **overrides: object) -> "SimulationConfig":
        """Return a copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes)


def load_config(config_path: Path | None = None) -> SimulationConfig:
    """
    Load simulation settings from a JSON object.

    Example:
        {"tick_interval_ms": 250, "event_chance": 0.05, "seed": 7}
    """
    if config_path is None:
        return SimulationConfig()

    with open(config_path) as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Config must be a JSON object: {config_path}")

    known = {f.name for f in fields(SimulationConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown config keys in {config_path}: {', '.join(unknown)}")

    return SimulationConfig(**data)
