"""Per-owner lifecycle state map.

The tracker does no reordering or buffering: events for one key must be
observed in the order they were emitted.  Events for different keys may
interleave freely.
"""

from __future__ import annotations

import logging
from typing import Any

from mapevents.lifecycle.keys import LifecycleKey, LifecycleState
from mapevents.lifecycle.policy import next_state, phase_of
from mapevents.models.kinds import DataType
from mapevents.models.payloads import DataEvent, ErrorEvent, MapEvent
from mapevents.taxonomy import parse_kind

_logger = logging.getLogger(__name__)


class DataLifecycleTracker:
    """Tracks ``loading -> data|error`` sequencing per :class:`LifecycleKey`.

    State is private; the only query is :meth:`is_outstanding`.
    """

    def __init__(self) -> None:
        # Only LOADING keys are kept, grouped by (data_type, resource_id).
        self._loading: dict[tuple[DataType, str], set[LifecycleKey]] = {}

    def observe(self, kind: Any, payload: MapEvent) -> LifecycleState | None:
        """Apply one emitted event.

        Returns the key's state after the event, or ``None`` when the
        event does not concern a trackable load.
        """
        phase = phase_of(parse_kind(kind))
        if phase is None or not isinstance(payload, (DataEvent, ErrorEvent)):
            return None

        key = LifecycleKey.from_event(payload)
        if key is None:
            _logger.debug("Untracked %s event (no resource key)", kind)
            return None

        resource = (key.data_type, key.resource_id)
        pending = self._loading.get(resource, ())
        current = LifecycleState.LOADING if key in pending else LifecycleState.IDLE
        new = next_state(current, phase)
        if new is LifecycleState.LOADING:
            self._loading.setdefault(resource, set()).add(key)
        elif key in pending:
            pending.discard(key)
            if not pending:
                del self._loading[resource]
        if new is not current:
            _logger.debug("Lifecycle %s: %s -> %s", key, current, new)
        return new

    def is_outstanding(self, data_type: DataType | str, resource_id: str, coordinate: Any = None) -> bool:
        """Return ``True`` while a load for the resource is unresolved.

        With a *coordinate* only that tile's load is considered.  Without
        one, the resource counts as outstanding if its own load or any of
        its tile loads is still pending.
        """
        key = LifecycleKey.of(data_type, resource_id, coordinate)
        pending = self._loading.get((key.data_type, key.resource_id), ())
        if key.coordinate is not None:
            return key in pending
        return bool(pending)

    def reset(self) -> None:
        """Forget every load, e.g. when the owning map is torn down."""
        self._loading.clear()

    def __len__(self) -> int:
        return sum(len(keys) for keys in self._loading.values())
