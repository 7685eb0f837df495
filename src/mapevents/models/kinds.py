"""Closed event taxonomy.

Every event a map surface can emit is one :class:`EventKind` member.
The kind groups below are the only place membership is decided; payload
models and the shape table in :mod:`mapevents.taxonomy` consult them.
"""

from __future__ import annotations

from enum import StrEnum


class EventKind(StrEnum):
    # Pointer
    MOUSEDOWN = "mousedown"
    MOUSEUP = "mouseup"
    CLICK = "click"
    DBLCLICK = "dblclick"
    MOUSEMOVE = "mousemove"
    MOUSEENTER = "mouseenter"
    MOUSELEAVE = "mouseleave"
    MOUSEOVER = "mouseover"
    MOUSEOUT = "mouseout"
    CONTEXTMENU = "contextmenu"
    # Touch
    TOUCHSTART = "touchstart"
    TOUCHEND = "touchend"
    TOUCHMOVE = "touchmove"
    TOUCHCANCEL = "touchcancel"
    # Motion
    MOVESTART = "movestart"
    MOVE = "move"
    MOVEEND = "moveend"
    ZOOM = "zoom"
    ROTATE = "rotate"
    PITCH = "pitch"
    RESIZE = "resize"
    # Lifecycle
    LOAD = "load"
    REMOVE = "remove"
    ERROR = "error"
    RENDER = "render"
    # Data
    DATA = "data"
    STYLEDATA = "styledata"
    SOURCEDATA = "sourcedata"
    DATALOADING = "dataloading"
    STYLEDATALOADING = "styledataloading"
    SOURCEDATALOADING = "sourcedataloading"
    STYLE_LOAD = "style.load"


class EventCategory(StrEnum):
    POINTER = "pointer"
    TOUCH = "touch"
    MOTION = "motion"
    LIFECYCLE = "lifecycle"
    DATA = "data"


class DataType(StrEnum):
    """What a data event is about: a data source or the map style."""

    SOURCE = "source"
    STYLE = "style"


class SourceDataType(StrEnum):
    """Sub-classification of source data events."""

    METADATA = "metadata"
    CONTENT = "content"


POINTER_KINDS: frozenset[EventKind] = frozenset(
    {
        EventKind.MOUSEDOWN,
        EventKind.MOUSEUP,
        EventKind.CLICK,
        EventKind.DBLCLICK,
        EventKind.MOUSEMOVE,
        EventKind.MOUSEENTER,
        EventKind.MOUSELEAVE,
        EventKind.MOUSEOVER,
        EventKind.MOUSEOUT,
        EventKind.CONTEXTMENU,
    }
)

TOUCH_KINDS: frozenset[EventKind] = frozenset(
    {EventKind.TOUCHSTART, EventKind.TOUCHEND, EventKind.TOUCHMOVE, EventKind.TOUCHCANCEL}
)

# Transition kinds that may carry the pointer/touch input that caused them.
MOVE_KINDS: frozenset[EventKind] = frozenset({EventKind.MOVESTART, EventKind.MOVE, EventKind.MOVEEND})

MOTION_KINDS: frozenset[EventKind] = MOVE_KINDS | {
    EventKind.ZOOM,
    EventKind.ROTATE,
    EventKind.PITCH,
    EventKind.RESIZE,
}

LIFECYCLE_KINDS: frozenset[EventKind] = frozenset(
    {EventKind.LOAD, EventKind.REMOVE, EventKind.ERROR, EventKind.RENDER}
)

LOADING_KINDS: frozenset[EventKind] = frozenset(
    {EventKind.DATALOADING, EventKind.STYLEDATALOADING, EventKind.SOURCEDATALOADING}
)

TERMINAL_DATA_KINDS: frozenset[EventKind] = frozenset(
    {EventKind.DATA, EventKind.STYLEDATA, EventKind.SOURCEDATA}
)

DATA_KINDS: frozenset[EventKind] = LOADING_KINDS | TERMINAL_DATA_KINDS | {EventKind.STYLE_LOAD}

# Only these kinds may carry ``source_data_type``.
SOURCE_DATA_TYPE_KINDS: frozenset[EventKind] = frozenset({EventKind.SOURCEDATA, EventKind.SOURCEDATALOADING})

# Data kinds pinned to one data type; ``data``/``dataloading`` accept either.
REQUIRED_DATA_TYPE: dict[EventKind, DataType] = {
    EventKind.STYLEDATA: DataType.STYLE,
    EventKind.STYLEDATALOADING: DataType.STYLE,
    EventKind.SOURCEDATA: DataType.SOURCE,
    EventKind.SOURCEDATALOADING: DataType.SOURCE,
}


def category_of(kind: EventKind) -> EventCategory:
    if kind in POINTER_KINDS:
        return EventCategory.POINTER
    if kind in TOUCH_KINDS:
        return EventCategory.TOUCH
    if kind in MOTION_KINDS:
        return EventCategory.MOTION
    if kind in LIFECYCLE_KINDS:
        return EventCategory.LIFECYCLE
    return EventCategory.DATA
