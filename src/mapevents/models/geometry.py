"""Pixel, geographic and tile coordinates.

All three are ``NamedTuple``s so they are hashable, compare equal to
plain tuples, and can be used as parts of lifecycle keys.  Use the
``convert`` classmethods to normalise loosely-typed collaborator input.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any, NamedTuple


def _finite(value: Any, name: str) -> float:
    if isinstance(value, bool):
        raise ValueError(f"{name} must be a number, got {value!r}")
    number = float(value)
    if not math.isfinite(number):
        raise ValueError(f"{name} must be finite, got {value!r}")
    return number


class Point(NamedTuple):
    """Pixel coordinate relative to the map surface, origin top-left."""

    x: float
    y: float

    @classmethod
    def convert(cls, value: Any) -> Point:
        """Accept a ``Point``, an ``(x, y)`` pair or a mapping with ``x``/``y``."""
        if isinstance(value, Point):
            return value
        if isinstance(value, Mapping):
            return cls(_finite(value["x"], "x"), _finite(value["y"], "y"))
        x, y = value
        return cls(_finite(x, "x"), _finite(y, "y"))


class LngLat(NamedTuple):
    """Geographic coordinate in degrees."""

    lng: float
    lat: float

    @classmethod
    def convert(cls, value: Any) -> LngLat:
        """Accept a ``LngLat``, a ``(lng, lat)`` pair or a mapping.

        Mappings may use ``lng``/``lon``/``longitude`` and
        ``lat``/``latitude``.  Raises :class:`ValueError` when the
        latitude is outside [-90, 90].
        """
        if isinstance(value, Mapping):
            lng = next((value[k] for k in ("lng", "lon", "longitude") if k in value), None)
            lat = next((value[k] for k in ("lat", "latitude") if k in value), None)
            if lng is None or lat is None:
                raise ValueError(f"mapping has no longitude/latitude: {sorted(value)!r}")
        else:
            lng, lat = value
        lng_f = _finite(lng, "lng")
        lat_f = _finite(lat, "lat")
        if not -90.0 <= lat_f <= 90.0:
            raise ValueError(f"latitude must be between -90 and 90, got {lat_f}")
        return cls(lng_f, lat_f)


class TileCoordinate(NamedTuple):
    """Tile address at zoom ``z``."""

    z: int
    x: int
    y: int

    @classmethod
    def convert(cls, value: Any) -> TileCoordinate:
        if isinstance(value, Mapping):
            z, x, y = value["z"], value["x"], value["y"]
        else:
            z, x, y = value
        coord = cls(int(z), int(x), int(y))
        if coord.z < 0:
            raise ValueError(f"tile zoom must be >= 0, got {coord.z}")
        extent = 1 << coord.z
        if not (0 <= coord.x < extent and 0 <= coord.y < extent):
            raise ValueError(f"tile {coord.x}/{coord.y} is outside zoom {coord.z}")
        return coord

    def __str__(self) -> str:
        return f"{self.z}/{self.x}/{self.y}"
