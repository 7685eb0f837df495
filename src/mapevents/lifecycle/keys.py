"""Identity and state of one trackable load."""

from __future__ import annotations

import dataclasses
from enum import StrEnum
from typing import Any

from mapevents.models.geometry import TileCoordinate
from mapevents.models.kinds import DataType
from mapevents.models.payloads import DataEvent, ErrorEvent, SourceDataEvent

# A map has exactly one style, so style loads share one key unless the
# emitter names the style explicitly.
DEFAULT_STYLE_ID = "style"


class LifecycleState(StrEnum):
    IDLE = "idle"
    LOADING = "loading"
    SETTLED = "settled"


@dataclasses.dataclass(frozen=True, slots=True)
class LifecycleKey:
    """``(data_type, resource_id, coordinate)``; ``coordinate`` only for tiles."""

    data_type: DataType
    resource_id: str
    coordinate: TileCoordinate | None = None

    @classmethod
    def of(cls, data_type: DataType | str, resource_id: str, coordinate: Any = None) -> LifecycleKey:
        resolved = DataType(data_type)
        coord = None if coordinate is None else TileCoordinate.convert(coordinate)
        if coord is not None and resolved is not DataType.SOURCE:
            raise ValueError("only source loads can be keyed by tile coordinate")
        return cls(resolved, resource_id, coord)

    @classmethod
    def from_event(cls, event: DataEvent | ErrorEvent) -> LifecycleKey | None:
        """Derive the key a data or error payload refers to.

        Returns ``None`` when the payload cannot be tied to one load: a
        source event without ``resource_id`` or an error without
        correlation fields.
        """
        if event.data_type is None:
            return None
        data_type = DataType(event.data_type)
        resource_id = event.resource_id
        if resource_id is None:
            if data_type is not DataType.STYLE:
                return None
            resource_id = DEFAULT_STYLE_ID
        coordinate = event.coordinate if isinstance(event, (SourceDataEvent, ErrorEvent)) else None
        return cls(data_type, resource_id, coordinate)

    def __str__(self) -> str:
        base = f"{self.data_type}:{self.resource_id}"
        return f"{base}@{self.coordinate}" if self.coordinate is not None else base
