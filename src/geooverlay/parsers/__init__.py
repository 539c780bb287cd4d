"""GeoJSON parsers that produce map overlays."""

from geooverlay.parsers.circles import CircleParser
from geooverlay.parsers.geojson import GeoJsonParser

__all__ = ["CircleParser", "GeoJsonParser"]
