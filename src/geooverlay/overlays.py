"""Overlay dataclasses produced by the parsers.

These are the only objects handed to a rendering surface. Points are stored
as LatLng (latitude first), unlike GeoJSON which stores [lng, lat].
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, NamedTuple


class LatLng(NamedTuple):
    """A (latitude, longitude) pair in degrees."""

    lat: float
    lng: float


TapCallback = Callable[[dict[str, Any]], None]


@dataclass
class MarkerIcon:
    """Render payload of a default marker.

    Attributes:
        icon: Icon name understood by the renderer.
        color: ``#RRGGBBAA`` icon colour.
        properties: Properties of the feature the marker came from.
        on_tap: Optional handler that receives ``properties`` on tap.
    """

    icon: str
    color: str
    properties: dict[str, Any] = field(default_factory=dict)
    on_tap: TapCallback | None = None

    def tap(self) -> None:
        if self.on_tap is not None:
            self.on_tap(self.properties)


@dataclass
class Marker:
    """A single anchored marker with an opaque render payload."""

    point: LatLng
    icon: Any = None


@dataclass
class CircleMarker:
    """A circle around ``point``.

    Attributes:
        point: Circle centre.
        radius: Radius, in meters when ``use_radius_in_meter`` is set.
        color: Fill colour.
        border_color: Outline colour.
        border_stroke_width: Outline width in pixels.
        is_filled: Whether the fill colour is drawn.
        on_tap: Optional handler receiving the feature properties.
    """

    point: LatLng
    radius: float
    use_radius_in_meter: bool = True
    color: str = "#00000000"
    border_color: str = "#00000000"
    border_stroke_width: float = 0.0
    is_filled: bool = True
    properties: dict[str, Any] = field(default_factory=dict)
    on_tap: TapCallback | None = None

    def tap(self) -> None:
        if self.on_tap is not None:
            self.on_tap(self.properties)


@dataclass
class Polyline:
    """An open line through ``points``."""

    points: list[LatLng]
    color: str = "#000000ff"
    stroke_width: float = 1.0


@dataclass
class Polygon:
    """An area bounded by ``points`` with zero or more holes cut out of it."""

    points: list[LatLng]
    hole_points_list: list[list[LatLng]] = field(default_factory=list)
    border_color: str = "#000000ff"
    color: str = "#00000000"
    is_filled: bool = True
    border_stroke_width: float = 1.0
