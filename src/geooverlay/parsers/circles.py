"""Circle-only GeoJSON parser.

Every accepted feature becomes one CircleMarker at its Point (or Circle)
position, sized by ``properties["radius"]`` in meters. Unlike GeoJsonParser,
defaults are applied when the parser is constructed, and its fill, border and
station-keeping colours come from the ``circle_parser_*`` settings.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from loguru import logger

from geooverlay.config import Settings, settings as default_settings
from geooverlay.errors import DecodeError, ShapeError, UnknownGeometryKindError
from geooverlay.feature import Feature
from geooverlay.geometry import FeatureType, extract_point, feature_type, is_sequence
from geooverlay.overlays import CircleMarker, LatLng, TapCallback
from geooverlay.parsers.geojson import (
    STATION_KEEPING_TYPE,
    CircleMarkerCreationCallback,
    FilterFunction,
    resolve_radius,
)


class CircleParser:
    """Builds a list of CircleMarker objects from point-shaped features."""

    def __init__(
        self,
        circle_marker_creation_callback: CircleMarkerCreationCallback | None = None,
        filter_function: FilterFunction | None = None,
        default_circle_marker_color: str | None = None,
        default_circle_marker_border_color: str | None = None,
        default_circle_marker_is_filled: bool | None = None,
        on_circle_marker_tap: TapCallback | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.circles: list[CircleMarker] = []
        self.settings = settings or default_settings

        self.circle_marker_creation_callback = (
            circle_marker_creation_callback or self.create_default_circle_marker
        )
        self.filter_function = filter_function or self.default_filter_function
        self.on_circle_marker_tap = on_circle_marker_tap

        self.default_circle_marker_color = default_circle_marker_color or self.settings.circle_parser_color
        self.default_circle_marker_border_color = (
            default_circle_marker_border_color or self.settings.circle_parser_border_color
        )
        self.default_circle_marker_is_filled = (
            True if default_circle_marker_is_filled is None else default_circle_marker_is_filled
        )

    def set_default_circle_marker_color(self, color: str) -> None:
        self.default_circle_marker_color = color

    def set_default_circle_marker_tap_callback(self, on_tap: TapCallback) -> None:
        self.on_circle_marker_tap = on_tap

    def parse_geojson_from_text(self, geojson_string: str) -> None:
        """Decode GeoJSON text and parse it (see ``parse_geojson``)."""
        try:
            document = json.loads(geojson_string)
        except (json.JSONDecodeError, TypeError, RecursionError) as e:
            raise DecodeError(f"Invalid GeoJSON text: {e}") from e
        self.parse_geojson(document)

    def parse_geojson(self, geojson: Mapping[str, Any]) -> None:
        """Append one circle per accepted feature; nothing is added if any feature fails.

        Raises:
            ShapeError: If ``features`` is missing or a feature is malformed.
            UnknownGeometryKindError: If a feature is not a Point or Circle.
        """
        if not isinstance(geojson, Mapping):
            raise ShapeError("GeoJSON document is not an object")
        raw_features = geojson.get("features")
        if not is_sequence(raw_features):
            raise ShapeError("GeoJSON document has no 'features' list")

        staged: list[CircleMarker] = []
        for idx, raw in enumerate(raw_features):
            feature = Feature.from_dict(raw, idx)
            if not self.filter_function(feature):
                continue
            staged.append(self.make_circle(feature))

        self.circles.extend(staged)
        logger.debug(f"Parsed {len(raw_features)} features into {len(staged)} circles")

    def make_circle(self, feature: Feature) -> CircleMarker:
        """Build the circle for one feature without storing it."""
        kind = feature_type(feature.geometry.kind)
        if kind not in (FeatureType.POINT, FeatureType.CIRCLE):
            raise UnknownGeometryKindError(feature.geometry.kind)
        point = extract_point(feature.geometry.coordinates)
        return self.circle_marker_creation_callback(point, feature)

    def create_default_circle_marker(self, point: LatLng, feature: Feature) -> CircleMarker:
        properties = feature.properties
        radius = resolve_radius(properties, self.settings.circle_radius)
        if properties.get("type") == STATION_KEEPING_TYPE:
            return CircleMarker(
                point=point,
                radius=radius,
                use_radius_in_meter=True,
                color=self.settings.circle_parser_station_keeping_color,
                border_color=self.settings.station_keeping_border_color,
                border_stroke_width=self.settings.station_keeping_border_stroke,
                properties=properties,
                on_tap=self._circle_marker_tapped,
            )
        return CircleMarker(
            point=point,
            radius=radius,
            use_radius_in_meter=True,
            color=self.default_circle_marker_color,
            border_color=self.default_circle_marker_border_color,
            is_filled=self.default_circle_marker_is_filled,
            properties=properties,
            on_tap=self._circle_marker_tapped,
        )

    def default_filter_function(self, feature: Feature) -> bool:
        return True

    def _circle_marker_tapped(self, properties: dict[str, Any]) -> None:
        if self.on_circle_marker_tap is not None:
            self.on_circle_marker_tap(properties)
