"""
Runtime Settings

Process-wide knobs for future behaviour, validated with pydantic.
Settings are read at settlement time, so changes apply to futures
that already exist.
"""

import logging
import os
from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, field_validator

ENV_PREFIX = "PROMISSORY_"

UnhandledPolicy = Literal["raise", "log", "ignore"]
DrainOrder = Literal["fifo", "lifo"]


class FutureSettings(BaseModel):
    """
    Validated future settings.

    Attributes:
        unhandled_rejection: What to do when a future rejects with no
            rejection handler attached ("raise", "log" or "ignore")
        drain_order: Order in which queued continuations run ("fifo" or
            "lifo")
        log_level: Level applied to the ``promissory`` logger; None leaves
            the logger alone
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    unhandled_rejection: UnhandledPolicy = "raise"
    drain_order: DrainOrder = "fifo"
    log_level: Optional[str] = None

    @field_validator("unhandled_rejection", "drain_order", mode="before")
    @classmethod
    def normalise_choice(cls, value: Any) -> Any:
        return value.strip().lower() if isinstance(value, str) else value

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> "FutureSettings":
        """
        Build settings from ``PROMISSORY_*`` environment variables.

        Args:
            environ: Mapping to read instead of ``os.environ``

        Returns:
            Validated settings; unset variables keep their defaults
        """
        environ = os.environ if environ is None else environ
        values = {}
        for name in cls.model_fields:
            raw = environ.get(ENV_PREFIX + name.upper())
            if raw:
                values[name] = raw
        return cls(**values)


_settings: Optional[FutureSettings] = None


def _apply(settings: FutureSettings) -> FutureSettings:
    global _settings
    _settings = settings
    if settings.log_level is not None:
        logging.getLogger("promissory").setLevel(settings.log_level)
    return settings


def get_settings() -> FutureSettings:
    """Current settings, loaded from the environment on first use."""
    if _settings is None:
        return _apply(FutureSettings.from_env())
    return _settings


def configure(**overrides: Any) -> FutureSettings:
    """
    Override individual settings.

    Raises:
        pydantic.ValidationError: if a value is invalid; the current
            settings are left untouched
    """
    merged = {**get_settings().model_dump(), **overrides}
    return _apply(FutureSettings(**merged))


def reset_settings() -> None:
    """Drop overrides; the next read reloads from the environment."""
    global _settings
    _settings = None
