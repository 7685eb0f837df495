"""Per-map event surface.

:class:`MapEvents` is what a map object holds: one dispatcher, one
lifecycle tracker and one error sink, all scoped to that map.

Usage::

    events = MapEvents(owner=my_map)
    events.on("sourcedata", on_source)
    events.fire("sourcedataloading", build_data_payload("sourcedataloading", "source", resource_id="roads"))
    events.is_outstanding("source", "roads")  # True until sourcedata/error
"""

from __future__ import annotations

import logging
from typing import Any

from mapevents.config import MapEventsConfig
from mapevents.dispatch import Dispatcher, Listener, ListenerRegistration
from mapevents.exceptions import ListenerError
from mapevents.lifecycle.tracker import DataLifecycleTracker
from mapevents.models.kinds import DataType, EventKind
from mapevents.models.payloads import MapEvent
from mapevents.sink import ErrorSink
from mapevents.taxonomy import parse_kind

_logger = logging.getLogger(__name__)


class MapEvents:
    """Event contract surface for a single map instance.

    ``fire`` runs data and error events through the lifecycle tracker
    before delivering them, so listeners calling :meth:`is_outstanding`
    already see the updated state.  Once a ``remove`` event has been
    delivered the surface is torn down: subscriptions and lifecycle
    state are dropped.
    """

    def __init__(
        self,
        owner: Any,
        *,
        config: MapEventsConfig | None = None,
        error_sink: ErrorSink | None = None,
    ) -> None:
        self._config = config or MapEventsConfig()
        self._dispatcher = Dispatcher(owner, config=self._config, error_sink=error_sink)
        self._tracker = DataLifecycleTracker()

    @property
    def owner(self) -> Any:
        return self._dispatcher.owner

    @property
    def config(self) -> MapEventsConfig:
        return self._config

    def on(self, kind: EventKind | str, callback: Listener) -> ListenerRegistration:
        return self._dispatcher.on(kind, callback)

    def once(self, kind: EventKind | str, callback: Listener) -> ListenerRegistration:
        return self._dispatcher.once(kind, callback)

    def off(self, handle: ListenerRegistration) -> None:
        self._dispatcher.off(handle)

    def listens(self, kind: EventKind | str) -> bool:
        return self._dispatcher.listens(kind)

    def fire(self, kind: EventKind | str, payload: MapEvent | None = None) -> ListenerError | None:
        event_kind = parse_kind(kind)
        event = self._dispatcher.prepare(event_kind, payload)
        if self._config.track_lifecycle:
            self._tracker.observe(event_kind, event)
        try:
            return self._dispatcher.fire(event_kind, event)
        finally:
            if event_kind is EventKind.REMOVE:
                self.teardown()

    def is_outstanding(self, data_type: DataType | str, resource_id: str, coordinate: Any = None) -> bool:
        return self._tracker.is_outstanding(data_type, resource_id, coordinate)

    def is_source_loaded(self, source_id: str) -> bool:
        """Value collaborators put in ``is_source_loaded`` for *source_id*."""
        return not self._tracker.is_outstanding(DataType.SOURCE, source_id)

    def teardown(self) -> None:
        _logger.debug("Tearing down event surface for %s", type(self.owner).__name__)
        self._dispatcher.clear()
        self._tracker.reset()
