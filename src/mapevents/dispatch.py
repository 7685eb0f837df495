"""Per-owner synchronous event dispatch.

Each map owns one :class:`Dispatcher`; listener state is never shared
between maps.  Delivery is synchronous and in subscription order, over
a snapshot of the listeners taken when :meth:`Dispatcher.fire` starts:

- listeners added during delivery are first invoked by the next ``fire``,
- listeners removed during delivery are still invoked if they were in
  the snapshot,
- a failing listener never stops delivery; failures are reported
  together once the snapshot is exhausted.
"""

from __future__ import annotations

import asyncio
import functools
import inspect
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from mapevents._redact import redact_for_log
from mapevents.builders import build_event_payload
from mapevents.config import MapEventsConfig
from mapevents.exceptions import ListenerError, PayloadValidationError
from mapevents.models.kinds import EventKind
from mapevents.models.payloads import MapEvent
from mapevents.sink import ErrorSink, LoggingErrorSink
from mapevents.taxonomy import parse_kind, payload_shape_for

_logger = logging.getLogger(__name__)

Listener = Callable[[Any], Any]


def _describe(callback: Listener) -> str:
    return getattr(callback, "__qualname__", None) or repr(callback)


@dataclass(slots=True, eq=False)
class ListenerRegistration:
    """One subscription; also the handle passed back to :meth:`Dispatcher.off`.

    Handles compare by identity, so subscribing the same callback twice
    yields two independent registrations.
    """

    kind: EventKind
    callback: Listener
    owner: Any
    once: bool = False
    spent: bool = field(default=False, init=False, repr=False)


class Dispatcher:
    """Registry of ``kind -> [ListenerRegistration]`` for one owner."""

    def __init__(
        self,
        owner: Any,
        *,
        config: MapEventsConfig | None = None,
        error_sink: ErrorSink | None = None,
    ) -> None:
        self._owner = owner
        self._config = config or MapEventsConfig()
        if error_sink is None:
            error_sink = LoggingErrorSink(self._config.error_logger_name, max_string=self._config.log_max_string)
        self._error_sink = error_sink
        self._listeners: dict[EventKind, list[ListenerRegistration]] = {}
        # Strong references to scheduled coroutine listeners until they finish.
        self._tasks: set[asyncio.Future[Any]] = set()

    @property
    def owner(self) -> Any:
        return self._owner

    @property
    def error_sink(self) -> ErrorSink:
        return self._error_sink

    # ------------------------------------------------------------------
    # Subscription
    # ------------------------------------------------------------------

    def on(self, kind: EventKind | str, callback: Listener) -> ListenerRegistration:
        """Subscribe *callback* to every future ``kind`` event."""
        return self._register(kind, callback, once=False)

    def once(self, kind: EventKind | str, callback: Listener) -> ListenerRegistration:
        """Subscribe *callback* to the next ``kind`` event only."""
        return self._register(kind, callback, once=True)

    def _register(self, kind: EventKind | str, callback: Listener, *, once: bool) -> ListenerRegistration:
        event_kind = parse_kind(kind)
        if not callable(callback):
            raise TypeError(f"listener for '{event_kind}' must be callable, got {type(callback).__name__}")
        registration = ListenerRegistration(event_kind, callback, self._owner, once)
        self._listeners.setdefault(event_kind, []).append(registration)
        _logger.debug("Subscribed %s to '%s'%s", _describe(callback), event_kind, " (once)" if once else "")
        return registration

    def off(self, handle: ListenerRegistration) -> None:
        """Remove a subscription.  Removing one that is already gone is a no-op."""
        listeners = self._listeners.get(handle.kind)
        if not listeners:
            return
        for index, registration in enumerate(listeners):
            if registration is handle:
                del listeners[index]
                break
        else:
            return
        if not listeners:
            del self._listeners[handle.kind]
        _logger.debug("Unsubscribed %s from '%s'", _describe(handle.callback), handle.kind)

    def listens(self, kind: EventKind | str) -> bool:
        return bool(self._listeners.get(parse_kind(kind)))

    def listener_count(self, kind: EventKind | str) -> int:
        return len(self._listeners.get(parse_kind(kind), ()))

    def clear(self) -> None:
        """Drop every subscription (owner teardown)."""
        self._listeners.clear()

    # ------------------------------------------------------------------
    # Delivery
    # ------------------------------------------------------------------

    def prepare(self, kind: EventKind | str, payload: MapEvent | None = None) -> MapEvent:
        """Validate *payload* against the shape of *kind* without delivering it.

        A payload built without an owner is stamped with this dispatcher's
        owner.  A payload owned by a different map is rejected.
        """
        shape = payload_shape_for(kind)
        if payload is None:
            return build_event_payload(shape.kind, self._owner)
        if not shape.accepts(payload):
            raise PayloadValidationError(
                f"{type(payload).__name__} payload cannot be fired as '{shape.kind}'",
                kind=shape.kind,
            )
        if payload.owner is None:
            return payload.model_copy(update={"owner": self._owner})
        if payload.owner is not self._owner and payload.owner != self._owner:
            raise PayloadValidationError(
                f"{type(payload).__name__} payload belongs to another owner ({type(payload.owner).__name__})",
                kind=shape.kind,
            )
        return payload

    def fire(self, kind: EventKind | str, payload: MapEvent | None = None) -> ListenerError | None:
        """Deliver *payload* to every listener subscribed to *kind*.

        ``payload`` may be omitted for kinds without fields.  An ``error``
        event with no listeners goes to the error sink.

        Returns ``None`` when every listener succeeded.  Otherwise a
        :class:`ListenerError` is raised after delivery completes, or
        returned when ``raise_listener_errors`` is disabled.
        """
        event_kind = parse_kind(kind)
        event = self.prepare(event_kind, payload)
        snapshot = tuple(self._listeners.get(event_kind, ()))

        if self._config.dispatch_trace_enabled:
            _logger.debug(
                "Dispatching '%s' to %d listener(s): %s",
                event_kind,
                len(snapshot),
                redact_for_log(event, max_string=self._config.log_max_string),
            )

        if not snapshot:
            if event_kind is EventKind.ERROR:
                try:
                    self._error_sink.report(event)
                except Exception:
                    _logger.error(
                        "Error sink %s failed to report an unhandled error",
                        type(self._error_sink).__name__,
                        exc_info=True,
                    )
            return None

        failures: list[Exception] = []
        for registration in snapshot:
            if registration.once:
                # A nested fire of the same kind may already have used it.
                if registration.spent:
                    continue
                registration.spent = True
            try:
                result = registration.callback(event)
                if inspect.isawaitable(result):
                    self._schedule(event_kind, result)
            except Exception as exc:
                _logger.debug(
                    "Listener %s for '%s' failed",
                    _describe(registration.callback),
                    event_kind,
                    exc_info=True,
                )
                failures.append(exc)
            finally:
                if registration.once:
                    self.off(registration)

        if not failures:
            return None

        error = ListenerError(event_kind, failures)
        if self._config.raise_listener_errors:
            raise error from failures[0]
        _logger.warning("%s", error, exc_info=failures[0])
        return error

    def _schedule(self, kind: EventKind, awaitable: Any) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            if inspect.iscoroutine(awaitable):
                awaitable.close()
            raise RuntimeError(f"coroutine listener for '{kind}' needs a running event loop") from None

        task = asyncio.ensure_future(awaitable, loop=loop)
        self._tasks.add(task)
        task.add_done_callback(functools.partial(self._on_task_done, kind))

    def _on_task_done(self, kind: EventKind, task: asyncio.Future[Any]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            _logger.error("Async listener for '%s' failed", kind, exc_info=exc)
