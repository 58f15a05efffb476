"""
Engine Configuration

Settings are read from the environment so the API process and scripts
share one source of truth:

- ENGINE_SEED: Optional integer seed for reproducible traces
- ENGINE_TICK_SECONDS: Simulated seconds per coalesced fleet tick (default 1.0)
- ENGINE_NOISE: "true"/"false" - per-accessor measurement noise (default true)
"""

import os
from dataclasses import dataclass
from typing import Optional


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class EngineConfig:
    """
    Settings shared by the fleet engine and the aggregate motor.

    Attributes:
        seed: Seed for the engine's random source (None = OS entropy)
        tick_seconds: Simulated time advanced by one coalesced fleet tick
        noise: Whether accessors add per-call measurement noise
    """
    seed: Optional[int] = None
    tick_seconds: float = 1.0
    noise: bool = True

    def __post_init__(self):
        if self.tick_seconds <= 0:
            raise ValueError(f"tick_seconds must be positive, got {self.tick_seconds}")

    @classmethod
    def from_env(cls) -> "EngineConfig":
        """Build configuration from ENGINE_* environment variables."""
        seed = os.getenv("ENGINE_SEED")
        return cls(
            seed=int(seed) if seed not in (None, "") else None,
            tick_seconds=float(os.getenv("ENGINE_TICK_SECONDS", "1.0")),
            noise=_env_bool("ENGINE_NOISE", True),
        )
