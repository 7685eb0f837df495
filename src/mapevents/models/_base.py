"""Base model for event payloads.

Every payload model inherits from :class:`MapEventModel` which provides:

* immutability (``frozen=True``) so a payload cannot change between
  listeners,
* ``extra="forbid"`` so a field that does not belong to the shape is
  rejected rather than silently dropped,
* ``alias_generator=to_camel`` so ``model_dump(by_alias=True)``
  produces the camelCase keys map clients expect (``lngLat``,
  ``originalEvent``, ``sourceDataType``).
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class MapEventModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        alias_generator=to_camel,
        arbitrary_types_allowed=True,
    )
