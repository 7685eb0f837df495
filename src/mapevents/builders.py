"""Payload construction.

Collaborators hand raw input (native events, pixel points, resource
descriptors) to these functions and get back a validated, immutable
payload ready for :meth:`mapevents.dispatch.Dispatcher.fire`.

Builders are pure: they hold no state and only call the projection
capability they are given.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

from pydantic import TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel

from mapevents.exceptions import PayloadValidationError, ProjectionError
from mapevents.models.geometry import LngLat, Point
from mapevents.models.kinds import DataType, EventKind
from mapevents.models.payloads import (
    DataEventPayload,
    ErrorDetail,
    ErrorEvent,
    MapEvent,
    MotionEvent,
    PointerEvent,
    SourceDataEvent,
    StyleDataEvent,
    TouchEvent,
)
from mapevents.taxonomy import payload_shape_for

Projector = Callable[[Point], Any]
"""Maps a pixel point to a geographic coordinate (``LngLat`` or ``(lng, lat)``)."""

_SOURCE_ONLY_FIELDS: tuple[str, ...] = ("source_data_type", "tile", "coordinate", "is_source_loaded")

_DATA_EVENT_ADAPTER: TypeAdapter[SourceDataEvent | StyleDataEvent] = TypeAdapter(DataEventPayload)


def _spellings(name: str) -> set[str]:
    return {name, to_camel(name), SourceDataEvent.model_fields[name].alias or name}


def _carries(accepted: tuple[type[MapEvent], ...], payload_type: type[MapEvent]) -> bool:
    # The bare MapEvent shape only admits MapEvent itself.
    return any(payload_type is t or (t is not MapEvent and issubclass(payload_type, t)) for t in accepted)


def _require_shape(kind: Any, payload_type: type[MapEvent]) -> EventKind:
    shape = payload_shape_for(kind)
    if not _carries(shape.payload_types, payload_type):
        raise PayloadValidationError(
            f"'{shape.kind}' events do not carry a {payload_type.__name__} payload",
            kind=shape.kind,
        )
    return shape.kind


def _construct(model: type[MapEvent], kind: EventKind, **fields: Any) -> Any:
    try:
        return model(kind=kind, **fields)
    except ValidationError as exc:
        raise PayloadValidationError(f"invalid '{kind}' payload: {exc}", kind=kind) from exc


def _project(project: Projector, point: Point) -> LngLat:
    try:
        result = project(point)
    except Exception as exc:
        raise ProjectionError(f"projection failed for point {tuple(point)}", point=point) from exc
    try:
        return LngLat.convert(result)
    except (TypeError, ValueError, KeyError) as exc:
        raise ProjectionError(
            f"projection returned {result!r} for point {tuple(point)}, not a longitude/latitude",
            point=point,
        ) from exc


def _convert_point(value: Any, kind: EventKind) -> Point:
    try:
        return Point.convert(value)
    except (TypeError, ValueError, KeyError) as exc:
        raise PayloadValidationError(f"invalid pixel point {value!r}", kind=kind) from exc


def build_pointer_payload(
    kind: EventKind | str,
    owner: Any,
    original_event: Any,
    pixel_point: Any,
    project: Projector,
) -> PointerEvent:
    """Build a mouse/pointer payload.

    ``lng_lat`` is computed here by calling *project* once, so it always
    matches ``point`` at the moment of emission.  A failing projection
    raises :class:`ProjectionError` and no payload is built.
    """
    event_kind = _require_shape(kind, PointerEvent)
    point = _convert_point(pixel_point, event_kind)
    lng_lat = _project(project, point)
    return _construct(
        PointerEvent,
        event_kind,
        owner=owner,
        original_event=original_event,
        point=point,
        lng_lat=lng_lat,
    )


def build_touch_payload(
    kind: EventKind | str,
    owner: Any,
    original_event: Any,
    pixel_points: Iterable[Any],
    project: Projector,
) -> TouchEvent:
    """Build a touch payload from the contacts reported by the input layer.

    Contacts keep their input order; ``lng_lats[i]`` is always the
    projection of ``points[i]``.  The centroid of the contacts is
    projected as well and stored in ``point``/``lng_lat``.
    """
    event_kind = _require_shape(kind, TouchEvent)
    points = tuple(_convert_point(p, event_kind) for p in pixel_points)
    if not points:
        raise PayloadValidationError("a touch event needs at least one contact", kind=event_kind)

    lng_lats = tuple(_project(project, p) for p in points)
    centroid = Point(sum(p.x for p in points) / len(points), sum(p.y for p in points) / len(points))
    return _construct(
        TouchEvent,
        event_kind,
        owner=owner,
        original_event=original_event,
        points=points,
        lng_lats=lng_lats,
        point=centroid,
        lng_lat=_project(project, centroid),
    )


def build_motion_payload(kind: EventKind | str, owner: Any, original_event: Any = None) -> MotionEvent:
    """Build a ``movestart``/``move``/``moveend`` payload without pointer data."""
    event_kind = _require_shape(kind, MotionEvent)
    return _construct(MotionEvent, event_kind, owner=owner, original_event=original_event)


def build_event_payload(kind: EventKind | str, owner: Any) -> MapEvent:
    """Build the payload for a kind that carries no fields (``zoom``, ``load``, ...)."""
    shape = payload_shape_for(kind)
    if shape.required_fields:
        raise PayloadValidationError(f"'{shape.kind}' events require {sorted(shape.required_fields)}", kind=shape.kind)
    return _construct(MapEvent, shape.kind, owner=owner)


def build_error_payload(
    owner: Any,
    error: BaseException | str,
    *,
    data_type: DataType | str | None = None,
    resource_id: str | None = None,
    coordinate: Any = None,
) -> ErrorEvent:
    """Build an ``error`` payload from a message or an exception.

    Passing ``data_type``/``resource_id`` (and ``coordinate`` for tiles)
    correlates the error with the load it terminates.
    """
    if isinstance(error, BaseException):
        detail = ErrorDetail(message=str(error) or type(error).__name__, cause=error)
    else:
        detail = ErrorDetail(message=str(error))
    return _construct(
        ErrorEvent,
        EventKind.ERROR,
        owner=owner,
        error=detail,
        data_type=data_type,
        resource_id=resource_id,
        coordinate=coordinate,
    )


def build_data_payload(
    kind: EventKind | str,
    data_type: DataType | str,
    *,
    owner: Any = None,
    **extras: Any,
) -> SourceDataEvent | StyleDataEvent:
    """Build a data lifecycle payload.

    ``extras`` may hold ``resource_id``, ``resource_descriptor`` and, for
    source events only, ``is_source_loaded``, ``source_data_type``,
    ``tile`` and ``coordinate`` (by field name, camelCase or alias such
    as ``coord``).  Source-only fields on a style event are rejected
    with :class:`PayloadValidationError`, never silently dropped.
    """
    event_kind = _require_shape(kind, SourceDataEvent)
    try:
        resolved_type = DataType(data_type)
    except ValueError as exc:
        raise PayloadValidationError(f"unknown data_type {data_type!r}", kind=event_kind) from exc

    if resolved_type is not DataType.SOURCE:
        offending = [
            name
            for name in _SOURCE_ONLY_FIELDS
            if any(extras.get(key) is not None for key in _spellings(name))
        ]
        if offending:
            raise PayloadValidationError(
                f"{', '.join(offending)} only allowed when data_type is 'source', got '{resolved_type}'",
                kind=event_kind,
            )

    # None means "not provided"; style events must not even carry the key.
    populated = {key: value for key, value in extras.items() if value is not None}
    values = {"kind": event_kind, "owner": owner, "data_type": resolved_type, **populated}
    try:
        return _DATA_EVENT_ADAPTER.validate_python(values)
    except ValidationError as exc:
        raise PayloadValidationError(f"invalid '{event_kind}' payload: {exc}", kind=event_kind) from exc
