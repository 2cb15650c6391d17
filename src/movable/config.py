"""Process-wide settings for movable.

Leak tracking is off by default.  Enable it for a debug run by setting
``MOVABLE_TRACK_LEAKS=1`` in the environment before the package is
imported, or programmatically::

    import movable
    movable.configure(movable.MovableConfig(track_leaks=True))
"""
from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

_TRUTHY = frozenset({"1", "true", "yes", "on"})


def _flag(value: str | None, default: bool) -> bool:
    if value is None or not value.strip():
        return default
    return value.strip().lower() in _TRUTHY


@dataclass(frozen=True)
class MovableConfig:
    """Settings consulted by :mod:`movable.tracking`.

    Parameters
    ----------
    track_leaks:
        Count live owned cells and report cells finalized while still
        owned (default False).
    warn_on_leak:
        When tracking, emit a ``ResourceWarning`` for each leaked cell
        (default True).
    """

    track_leaks: bool = False
    warn_on_leak: bool = True

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "MovableConfig":
        """Build a config from ``MOVABLE_*`` environment variables."""
        env = os.environ if environ is None else environ
        return cls(
            track_leaks=_flag(env.get("MOVABLE_TRACK_LEAKS"), cls.track_leaks),
            warn_on_leak=_flag(env.get("MOVABLE_WARN_ON_LEAK"), cls.warn_on_leak),
        )


_config = MovableConfig.from_env()


def get_config() -> MovableConfig:
    """Return the active configuration."""
    return _config


def configure(config: MovableConfig) -> MovableConfig:
    """Install ``config`` as the active configuration and return the old one."""
    global _config
    previous, _config = _config, config
    return previous
