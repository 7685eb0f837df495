"""mapevents - event contracts for interactive map surfaces."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("mapevents")
except PackageNotFoundError:
    __version__ = "0+local"
from mapevents.builders import (
    build_data_payload,
    build_error_payload,
    build_event_payload,
    build_motion_payload,
    build_pointer_payload,
    build_touch_payload,
)
from mapevents.config import MapEventsConfig
from mapevents.dispatch import Dispatcher, ListenerRegistration
from mapevents.exceptions import (
    ListenerError,
    MapEventsConfigError,
    MapEventsError,
    PayloadValidationError,
    ProjectionError,
    UnknownEventKindError,
)
from mapevents.lifecycle import DataLifecycleTracker, LifecycleKey, LifecycleState
from mapevents.models import (
    DataEvent,
    DataType,
    ErrorDetail,
    ErrorEvent,
    EventCategory,
    EventKind,
    LngLat,
    MapEvent,
    MotionEvent,
    Point,
    PointerEvent,
    SourceDataEvent,
    SourceDataType,
    StyleDataEvent,
    TileCoordinate,
    TouchEvent,
)
from mapevents.sink import ErrorSink, LoggingErrorSink
from mapevents.surface import MapEvents
from mapevents.taxonomy import ShapeDescriptor, parse_kind, payload_shape_for

__all__ = [
    "__version__",
    "DataEvent",
    "DataLifecycleTracker",
    "DataType",
    "Dispatcher",
    "ErrorDetail",
    "ErrorEvent",
    "ErrorSink",
    "EventCategory",
    "EventKind",
    "LifecycleKey",
    "LifecycleState",
    "ListenerError",
    "ListenerRegistration",
    "LngLat",
    "LoggingErrorSink",
    "MapEvent",
    "MapEvents",
    "MapEventsConfig",
    "MapEventsConfigError",
    "MapEventsError",
    "MotionEvent",
    "PayloadValidationError",
    "Point",
    "PointerEvent",
    "ProjectionError",
    "ShapeDescriptor",
    "SourceDataEvent",
    "SourceDataType",
    "StyleDataEvent",
    "TileCoordinate",
    "TouchEvent",
    "UnknownEventKindError",
    "build_data_payload",
    "build_error_payload",
    "build_event_payload",
    "build_motion_payload",
    "build_pointer_payload",
    "build_touch_payload",
    "parse_kind",
    "payload_shape_for",
]
