"""Event kinds, coordinates and payload models."""

from mapevents.models.geometry import LngLat, Point, TileCoordinate
from mapevents.models.kinds import (
    DATA_KINDS,
    LOADING_KINDS,
    MOVE_KINDS,
    POINTER_KINDS,
    TERMINAL_DATA_KINDS,
    TOUCH_KINDS,
    DataType,
    EventCategory,
    EventKind,
    SourceDataType,
)
from mapevents.models.payloads import (
    DataEvent,
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

__all__ = [
    "DATA_KINDS",
    "DataEvent",
    "DataEventPayload",
    "DataType",
    "ErrorDetail",
    "ErrorEvent",
    "EventCategory",
    "EventKind",
    "LOADING_KINDS",
    "LngLat",
    "MOVE_KINDS",
    "MapEvent",
    "MotionEvent",
    "POINTER_KINDS",
    "Point",
    "PointerEvent",
    "SourceDataEvent",
    "SourceDataType",
    "StyleDataEvent",
    "TERMINAL_DATA_KINDS",
    "TOUCH_KINDS",
    "TileCoordinate",
    "TouchEvent",
]
