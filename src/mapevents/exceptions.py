"""Custom exception hierarchy for mapevents."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any


class MapEventsError(Exception):
    """Base exception for all mapevents errors."""


class MapEventsConfigError(MapEventsError):
    """Invalid configuration value."""


class UnknownEventKindError(MapEventsError, ValueError):
    """An event kind outside the closed taxonomy was used.

    Raised by subscription and dispatch calls.  This is a programmer
    error and is never recovered from internally.
    """

    def __init__(self, kind: object) -> None:
        self.kind = kind
        super().__init__(f"unknown event kind: {kind!r}")


class PayloadValidationError(MapEventsError, ValueError):
    """A payload failed a structural invariant and was not delivered."""

    def __init__(self, message: str, *, kind: str | None = None) -> None:
        self.kind = kind
        super().__init__(message)


class ProjectionError(MapEventsError):
    """The coordinate projection capability failed for a pixel point.

    The original failure, when there is one, is available as
    ``__cause__``.
    """

    def __init__(self, message: str, *, point: Any = None) -> None:
        self.point = point
        super().__init__(message)


class ListenerError(MapEventsError):
    """One or more listeners failed while an event was being delivered.

    Delivery is never aborted by a failing listener; the failures are
    collected in registration order and surfaced once every listener
    in the snapshot has run.
    """

    def __init__(self, kind: str, errors: Sequence[BaseException]) -> None:
        self.kind = kind
        self.errors: tuple[BaseException, ...] = tuple(errors)
        noun = "listener" if len(self.errors) == 1 else "listeners"
        super().__init__(f"{len(self.errors)} {noun} failed during '{kind}' dispatch")
