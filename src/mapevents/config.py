"""Configuration for mapevents."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from mapevents.exceptions import MapEventsConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class MapEventsConfig:
    """Per-owner event layer configuration.

    Parameters
    ----------
    raise_listener_errors : bool
        Raise :class:`~mapevents.exceptions.ListenerError` from ``fire``
        once every listener has run.  When ``False`` the aggregate error
        is logged and returned instead.
    dispatch_trace_enabled : bool
        Emit a DEBUG log line for every dispatched event.
    track_lifecycle : bool
        Feed data and error events through the lifecycle tracker before
        they are delivered.
    error_logger_name : str
        Logger used by the default error sink for unhandled ``error``
        events.
    log_max_string : int
        Strings longer than this are truncated in log output.
    """

    raise_listener_errors: bool = True
    dispatch_trace_enabled: bool = False
    track_lifecycle: bool = True
    error_logger_name: str = "mapevents.errors"
    log_max_string: int = 512

    def __post_init__(self) -> None:
        if self.log_max_string < 1:
            raise MapEventsConfigError(f"log_max_string must be >= 1, got {self.log_max_string}")
        if not self.error_logger_name.strip():
            raise MapEventsConfigError("error_logger_name must be non-empty")

    @classmethod
    def from_env(cls, **overrides: Any) -> MapEventsConfig:
        """Create configuration from ``MAPEVENTS_*`` environment variables.

        Explicit keyword arguments override environment values.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        _ENV_BOOL_MAP = {
            "MAPEVENTS_RAISE_LISTENER_ERRORS": ("raise_listener_errors", True),
            "MAPEVENTS_DISPATCH_TRACE": ("dispatch_trace_enabled", False),
            "MAPEVENTS_TRACK_LIFECYCLE": ("track_lifecycle", True),
        }
        for env_key, (field_name, default) in _ENV_BOOL_MAP.items():
            if field_name not in overrides:
                config_kwargs[field_name] = _env_bool(env.get(env_key), default)

        logger_env = env.get("MAPEVENTS_ERROR_LOGGER")
        if logger_env is not None and "error_logger_name" not in overrides:
            config_kwargs["error_logger_name"] = logger_env

        max_string_env = env.get("MAPEVENTS_LOG_MAX_STRING")
        if max_string_env is not None and "log_max_string" not in overrides:
            try:
                config_kwargs["log_max_string"] = int(max_string_env)
            except ValueError as exc:
                raise MapEventsConfigError(
                    f"MAPEVENTS_LOG_MAX_STRING must be an integer, got {max_string_env!r}"
                ) from exc

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
