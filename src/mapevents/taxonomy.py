"""Kind -> payload shape table.

This is the lookup every other component uses to decide whether a kind
exists and which payload models may be emitted under it.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from types import MappingProxyType

from mapevents.exceptions import UnknownEventKindError
from mapevents.models.kinds import (
    DATA_KINDS,
    MOVE_KINDS,
    POINTER_KINDS,
    TOUCH_KINDS,
    EventCategory,
    EventKind,
    category_of,
)
from mapevents.models.payloads import (
    DataEvent,
    ErrorEvent,
    MapEvent,
    MotionEvent,
    PointerEvent,
    TouchEvent,
)


@dataclasses.dataclass(frozen=True)
class ShapeDescriptor:
    """Payload contract for one event kind.

    Parameters
    ----------
    kind : EventKind
        The described kind.
    category : EventCategory
        Taxonomy group the kind belongs to.
    payload_types : tuple of type
        Payload models that may be emitted under ``kind``.
    required_fields : frozenset of str
        Field names every accepted payload carries besides ``kind`` and
        ``owner``.  Empty for the field-less kinds.
    """

    kind: EventKind
    category: EventCategory
    payload_types: tuple[type[MapEvent], ...]
    required_fields: frozenset[str] = frozenset()

    def accepts(self, payload: object) -> bool:
        """Return ``True`` when *payload* may be delivered as ``kind``."""
        if not isinstance(payload, self.payload_types):
            return False
        return payload.kind == self.kind


def _shape_for(kind: EventKind) -> ShapeDescriptor:
    category = category_of(kind)
    if kind in POINTER_KINDS:
        return ShapeDescriptor(kind, category, (PointerEvent,), frozenset({"original_event", "point", "lng_lat"}))
    if kind in TOUCH_KINDS:
        return ShapeDescriptor(
            kind,
            category,
            (TouchEvent,),
            frozenset({"original_event", "points", "lng_lats", "point", "lng_lat"}),
        )
    if kind in MOVE_KINDS:
        return ShapeDescriptor(kind, category, (PointerEvent, TouchEvent, MotionEvent), frozenset({"original_event"}))
    if kind is EventKind.ERROR:
        return ShapeDescriptor(kind, category, (ErrorEvent,), frozenset({"error"}))
    if kind in DATA_KINDS and kind is not EventKind.STYLE_LOAD:
        return ShapeDescriptor(kind, category, (DataEvent,), frozenset({"data_type"}))
    return ShapeDescriptor(kind, category, (MapEvent,))


_SHAPES: Mapping[EventKind, ShapeDescriptor] = MappingProxyType({kind: _shape_for(kind) for kind in EventKind})


def parse_kind(kind: object) -> EventKind:
    """Normalise *kind* to an :class:`EventKind`.

    Raises :class:`UnknownEventKindError` for anything outside the
    taxonomy, including non-string values.
    """
    if isinstance(kind, EventKind):
        return kind
    if isinstance(kind, str):
        try:
            return EventKind(kind)
        except ValueError:
            raise UnknownEventKindError(kind) from None
    raise UnknownEventKindError(kind)


def payload_shape_for(kind: object) -> ShapeDescriptor:
    return _SHAPES[parse_kind(kind)]


def all_shapes() -> Mapping[EventKind, ShapeDescriptor]:
    """Read-only view of the full kind -> shape table."""
    return _SHAPES
