"""Event payload models.

One model per payload shape.  Each model declares the kinds it may be
emitted under in ``_KINDS``; :class:`MapEvent` rejects any other kind.
Data events form a discriminated union on ``data_type`` so fields that
only make sense for sources cannot appear on style events at all.
"""

from __future__ import annotations

from typing import Annotated, Any, ClassVar, Literal

from pydantic import Field, field_validator, model_validator

from mapevents.models._base import MapEventModel
from mapevents.models.geometry import LngLat, Point, TileCoordinate
from mapevents.models.kinds import (
    LOADING_KINDS,
    MOVE_KINDS,
    POINTER_KINDS,
    REQUIRED_DATA_TYPE,
    SOURCE_DATA_TYPE_KINDS,
    TERMINAL_DATA_KINDS,
    TOUCH_KINDS,
    DataType,
    EventKind,
    SourceDataType,
)

FIELDLESS_KINDS: frozenset[EventKind] = frozenset(
    {
        EventKind.ZOOM,
        EventKind.ROTATE,
        EventKind.PITCH,
        EventKind.RESIZE,
        EventKind.LOAD,
        EventKind.REMOVE,
        EventKind.RENDER,
        EventKind.STYLE_LOAD,
    }
)


class MapEvent(MapEventModel):
    """Payload with no fields beyond the kind and the owning map."""

    _KINDS: ClassVar[frozenset[EventKind]] = FIELDLESS_KINDS

    kind: EventKind
    owner: Any

    @model_validator(mode="after")
    def _check_kind(self) -> MapEvent:
        allowed = type(self)._KINDS
        if self.kind not in allowed:
            names = ", ".join(sorted(allowed))
            raise ValueError(f"{type(self).__name__} cannot be emitted as '{self.kind}' (allowed: {names})")
        return self


class MotionEvent(MapEvent):
    """A view transition carrying only the native input that caused it."""

    _KINDS: ClassVar[frozenset[EventKind]] = MOVE_KINDS

    original_event: Any = None


class PointerEvent(MapEvent):
    """Mouse/pointer event.

    ``lng_lat`` is the projection of ``point`` taken when the payload was
    built.
    """

    _KINDS: ClassVar[frozenset[EventKind]] = POINTER_KINDS | MOVE_KINDS

    original_event: Any = None
    point: Point
    lng_lat: LngLat

    @field_validator("point", mode="before")
    @classmethod
    def _coerce_point(cls, value: Any) -> Point:
        return Point.convert(value)

    @field_validator("lng_lat", mode="before")
    @classmethod
    def _coerce_lng_lat(cls, value: Any) -> LngLat:
        return LngLat.convert(value)


class TouchEvent(MapEvent):
    """Touch event with one entry per contact.

    ``points[i]`` and ``lng_lats[i]`` describe the same contact, in the
    order the input layer reported them.  ``point``/``lng_lat`` describe
    the centroid of all contacts.
    """

    _KINDS: ClassVar[frozenset[EventKind]] = TOUCH_KINDS | MOVE_KINDS

    original_event: Any = None
    points: tuple[Point, ...]
    lng_lats: tuple[LngLat, ...]
    point: Point
    lng_lat: LngLat

    @field_validator("points", mode="before")
    @classmethod
    def _coerce_points(cls, value: Any) -> tuple[Point, ...]:
        return tuple(Point.convert(p) for p in value)

    @field_validator("lng_lats", mode="before")
    @classmethod
    def _coerce_lng_lats(cls, value: Any) -> tuple[LngLat, ...]:
        return tuple(LngLat.convert(ll) for ll in value)

    @field_validator("point", mode="before")
    @classmethod
    def _coerce_point(cls, value: Any) -> Point:
        return Point.convert(value)

    @field_validator("lng_lat", mode="before")
    @classmethod
    def _coerce_lng_lat(cls, value: Any) -> LngLat:
        return LngLat.convert(value)

    @model_validator(mode="after")
    def _check_contacts(self) -> TouchEvent:
        if not self.points:
            raise ValueError("a touch event needs at least one contact")
        if len(self.points) != len(self.lng_lats):
            raise ValueError(f"{len(self.points)} pixel points but {len(self.lng_lats)} geographic points")
        return self


class ErrorDetail(MapEventModel):
    message: str
    cause: BaseException | None = None


class ErrorEvent(MapEvent):
    """The map's ``error`` event.

    The optional ``data_type``/``resource_id``/``coordinate`` fields tie
    the error to one outstanding load so the lifecycle tracker can settle
    it.
    """

    _KINDS: ClassVar[frozenset[EventKind]] = frozenset({EventKind.ERROR})

    error: ErrorDetail
    data_type: DataType | None = None
    resource_id: str | None = None
    coordinate: TileCoordinate | None = None

    @field_validator("coordinate", mode="before")
    @classmethod
    def _coerce_coordinate(cls, value: Any) -> TileCoordinate | None:
        return None if value is None else TileCoordinate.convert(value)

    @model_validator(mode="after")
    def _check_correlation(self) -> ErrorEvent:
        if self.resource_id is not None and self.data_type is None:
            raise ValueError("resource_id requires data_type")
        if self.coordinate is not None and self.data_type != DataType.SOURCE:
            raise ValueError("coordinate is only valid for source errors")
        return self


class DataEvent(MapEvent):
    """Fields shared by source and style data events."""

    _KINDS: ClassVar[frozenset[EventKind]] = LOADING_KINDS | TERMINAL_DATA_KINDS

    data_type: DataType
    resource_id: str | None = None
    resource_descriptor: Any = None

    @model_validator(mode="after")
    def _check_data_type(self) -> DataEvent:
        required = REQUIRED_DATA_TYPE.get(self.kind)
        if required is not None and self.data_type != required:
            raise ValueError(f"'{self.kind}' events must have data_type '{required}', got '{self.data_type}'")
        return self


class SourceDataEvent(DataEvent):
    data_type: Literal[DataType.SOURCE] = DataType.SOURCE
    is_source_loaded: bool | None = None
    source_data_type: SourceDataType | None = None
    tile: Any = None
    coordinate: TileCoordinate | None = Field(default=None, alias="coord")

    @field_validator("coordinate", mode="before")
    @classmethod
    def _coerce_coordinate(cls, value: Any) -> TileCoordinate | None:
        return None if value is None else TileCoordinate.convert(value)

    @model_validator(mode="after")
    def _check_source_data_type(self) -> SourceDataEvent:
        if self.source_data_type is not None and self.kind not in SOURCE_DATA_TYPE_KINDS:
            raise ValueError(f"source_data_type is not allowed on '{self.kind}' events")
        return self


class StyleDataEvent(DataEvent):
    data_type: Literal[DataType.STYLE] = DataType.STYLE


DataEventPayload = Annotated[SourceDataEvent | StyleDataEvent, Field(discriminator="data_type")]
"""Discriminated union of data event payloads keyed by ``data_type``."""
