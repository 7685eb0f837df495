"""Fallback for ``error`` events nobody is listening to.

A map reports problems as ``error`` events instead of raising, so an
unobserved error would otherwise vanish.  The dispatcher hands such
payloads to an :class:`ErrorSink`.
"""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

from mapevents._redact import redact_for_log
from mapevents.models.payloads import ErrorEvent


@runtime_checkable
class ErrorSink(Protocol):
    def report(self, payload: ErrorEvent) -> None:
        """Render *payload* somewhere a developer will see it.  Must not raise."""


class LoggingErrorSink:
    """Writes unhandled map errors to a :mod:`logging` logger at ERROR level."""

    def __init__(self, logger: logging.Logger | str = "mapevents.errors", *, max_string: int = 512) -> None:
        self._logger = logging.getLogger(logger) if isinstance(logger, str) else logger
        self._max_string = max_string

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def report(self, payload: ErrorEvent) -> None:
        try:
            message = redact_for_log(payload.error.message, max_string=self._max_string)
            correlation = (
                ("data_type", payload.data_type),
                ("resource_id", payload.resource_id),
                ("coordinate", payload.coordinate),
            )
            context = redact_for_log(
                {key: str(value) for key, value in correlation if value is not None},
                max_string=self._max_string,
            )
            cause = payload.error.cause
            exc_info = (type(cause), cause, cause.__traceback__) if cause is not None else None
            if context:
                self._logger.error("Unhandled map error: %s %s", message, context, exc_info=exc_info)
            else:
                self._logger.error("Unhandled map error: %s", message, exc_info=exc_info)
        except Exception:
            # Rendering must never turn an unhandled error into a crash.
            self._logger.error("Unhandled map error (unrenderable payload of type %s)", type(payload).__name__)
