"""Geometry extraction — GeoJSON coordinate arrays to LatLng data.

GeoJSON positions are [lng, lat(, alt)]. Everything returned here is LatLng
(lat first). Elevation is dropped. Ring winding and closure are not checked.

Polygon rings follow RFC 7946: the first ring is the outer boundary and every
later ring is a hole. A MultiPolygon applies that rule to each member.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from numbers import Real
from typing import Any

from geooverlay.errors import ShapeError, UnknownGeometryKindError
from geooverlay.overlays import LatLng

Ring = list[LatLng]


class FeatureType(str, Enum):
    """Geometry kinds the parser can dispatch on."""
    POINT = "point"
    CIRCLE = "circle"                     # Point-shaped, radius in properties
    MULTI_POINT = "multiPoint"
    LINE_STRING = "lineString"
    MULTI_LINE_STRING = "multiLineString"
    POLYGON = "polygon"
    MULTI_POLYGON = "multiPolygon"


def normalize_kind(kind: str) -> str:
    """Lowercase the first character of a geometry tag ("MultiPoint" -> "multiPoint")."""
    return kind[:1].lower() + kind[1:]


def feature_type(kind: Any) -> FeatureType:
    """Resolve a raw geometry ``type`` tag to a FeatureType.

    Raises:
        UnknownGeometryKindError: If the tag is not a supported kind.
    """
    if not isinstance(kind, str):
        raise UnknownGeometryKindError(kind)
    try:
        return FeatureType(normalize_kind(kind))
    except ValueError:
        raise UnknownGeometryKindError(kind) from None


def is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def to_latlng(position: Any) -> LatLng:
    """Convert one [lng, lat(, alt)] position to LatLng."""
    if not is_sequence(position) or len(position) < 2:
        raise ShapeError(f"Invalid position: {position!r}")
    lng, lat = position[0], position[1]
    for value in (lng, lat):
        if isinstance(value, bool) or not isinstance(value, Real):
            raise ShapeError(f"Non-numeric coordinate in position: {position!r}")
    return LatLng(float(lat), float(lng))


def _to_ring(positions: Any) -> Ring:
    if not is_sequence(positions):
        raise ShapeError(f"Expected a list of positions, got {positions!r}")
    return [to_latlng(p) for p in positions]


def _to_rings(value: Any) -> list[Ring]:
    if not is_sequence(value):
        raise ShapeError(f"Expected a list of rings, got {value!r}")
    return [_to_ring(r) for r in value]


def extract_point(coordinates: Any) -> LatLng:
    """Point / Circle coordinates -> single LatLng."""
    return to_latlng(coordinates)


def extract_points(coordinates: Any) -> list[LatLng]:
    """MultiPoint coordinates -> one LatLng per position."""
    return _to_ring(coordinates)


def extract_line(coordinates: Any) -> Ring:
    """LineString coordinates -> a single ring."""
    return _to_ring(coordinates)


def extract_lines(coordinates: Any) -> list[Ring]:
    """MultiLineString coordinates -> one ring per line."""
    return _to_rings(coordinates)


def extract_polygon(coordinates: Any) -> tuple[Ring, list[Ring]]:
    """Polygon coordinates -> (outer ring, hole rings).

    An empty ring list yields an empty outer ring and no holes.
    """
    rings = _to_rings(coordinates)
    if not rings:
        return [], []
    return rings[0], rings[1:]


def extract_polygons(coordinates: Any) -> list[tuple[Ring, list[Ring]]]:
    """MultiPolygon coordinates -> one (outer, holes) pair per member polygon."""
    if not is_sequence(coordinates):
        raise ShapeError(f"Expected a list of polygons, got {coordinates!r}")
    return [extract_polygon(polygon) for polygon in coordinates]
