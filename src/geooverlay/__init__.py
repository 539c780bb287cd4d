"""GeoJSON FeatureCollection to map overlays.

Parses RFC 7946 FeatureCollections (plus the non-standard Circle geometry)
into markers, circles, polylines and polygons using pluggable factories.
Decoding uses the stdlib json module.
"""

from geooverlay.errors import DecodeError, ParseError, ShapeError, UnknownGeometryKindError
from geooverlay.feature import Feature, Geometry
from geooverlay.geometry import FeatureType
from geooverlay.overlays import CircleMarker, LatLng, Marker, MarkerIcon, Polygon, Polyline
from geooverlay.parsers import CircleParser, GeoJsonParser
from geooverlay.styles import OverlayDefaults, with_opacity

__all__ = [
    "CircleMarker",
    "CircleParser",
    "DecodeError",
    "Feature",
    "FeatureType",
    "GeoJsonParser",
    "Geometry",
    "LatLng",
    "Marker",
    "MarkerIcon",
    "OverlayDefaults",
    "ParseError",
    "Polygon",
    "Polyline",
    "ShapeError",
    "UnknownGeometryKindError",
    "with_opacity",
]
