"""Parse a GeoJSON FeatureCollection into map overlays.

GeoJsonParser fills four overlay lists (markers, circles, polylines and
polygons) that a map widget can draw directly. How each overlay is built is decided by
per-kind factory callbacks; the built-in factories are used for any callback
left unset.

Supported geometry types: Point, MultiPoint, LineString, MultiLineString,
Polygon, MultiPolygon and the non-standard Circle (a Point whose radius in
meters is stored in ``properties["radius"]``). GeometryCollection and CRS
members are not supported. See https://www.rfc-editor.org/rfc/rfc7946
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from numbers import Real
from typing import Any, Callable

from loguru import logger

from geooverlay.config import Settings, settings as default_settings
from geooverlay.errors import DecodeError, ShapeError
from geooverlay.feature import Feature
from geooverlay.geometry import (
    FeatureType,
    Ring,
    extract_line,
    extract_lines,
    extract_point,
    extract_points,
    extract_polygon,
    extract_polygons,
    feature_type,
    is_sequence,
)
from geooverlay.overlays import (
    CircleMarker,
    LatLng,
    Marker,
    MarkerIcon,
    Polygon,
    Polyline,
    TapCallback,
)
from geooverlay.styles import OverlayDefaults

MarkerCreationCallback = Callable[[LatLng, Feature], Marker]
CircleMarkerCreationCallback = Callable[[LatLng, Feature], CircleMarker]
PolylineCreationCallback = Callable[[Ring, Feature], Polyline]
PolygonCreationCallback = Callable[[Ring, list[Ring], Feature], Polygon]
FilterFunction = Callable[[Feature], bool]

CIRCLE_SUBTYPE = "Circle"
ASSET_TYPE = "asset"
STATION_KEEPING_TYPE = "stationKeeping"


def resolve_radius(properties: Mapping[str, Any], fallback: float) -> float:
    """Read ``properties["radius"]`` as meters, or ``fallback`` if it is not a number."""
    radius = properties.get("radius")
    if isinstance(radius, Real) and not isinstance(radius, bool):
        return float(radius)
    logger.warning(f"Circle has no numeric radius ({radius!r}), using {fallback}")
    return fallback


@dataclass
class _Staged:
    """Overlays built by one parse call, committed only if the call succeeds."""

    markers: list[Marker] = field(default_factory=list)
    circles: list[CircleMarker] = field(default_factory=list)
    polylines: list[Polyline] = field(default_factory=list)
    polygons: list[Polygon] = field(default_factory=list)


class GeoJsonParser:
    """Turns GeoJSON features into Marker, CircleMarker, Polyline and Polygon lists.

    Every constructor argument is optional and may also be assigned later.
    Default styles and factories are seeded on the first ``parse_geojson``
    call, not at construction; values already set are never overwritten.

    Each parse appends to the same four lists. Call ``clear()`` or create a
    new parser for a fresh result set.

    A parse call is all-or-nothing: if any feature fails (bad shape, unknown
    geometry type, or an exception from a user callback) the error propagates
    and none of that call's overlays are added.

    Not thread-safe. Callers sharing one parser across threads must serialize
    parse calls themselves, e.g. with a ``threading.Lock``.
    """

    def __init__(
        self,
        marker_creation_callback: MarkerCreationCallback | None = None,
        polyline_creation_callback: PolylineCreationCallback | None = None,
        polygon_creation_callback: PolygonCreationCallback | None = None,
        circle_marker_creation_callback: CircleMarkerCreationCallback | None = None,
        filter_function: FilterFunction | None = None,
        default_marker_color: str | None = None,
        default_marker_icon: str | None = None,
        on_marker_tap: TapCallback | None = None,
        default_polyline_color: str | None = None,
        default_polyline_stroke: float | None = None,
        default_polygon_border_color: str | None = None,
        default_polygon_fill_color: str | None = None,
        default_polygon_border_stroke: float | None = None,
        default_polygon_is_filled: bool | None = None,
        default_circle_marker_color: str | None = None,
        default_circle_marker_border_color: str | None = None,
        default_circle_marker_is_filled: bool | None = None,
        on_circle_marker_tap: TapCallback | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.markers: list[Marker] = []
        self.circles: list[CircleMarker] = []
        self.polylines: list[Polyline] = []
        self.polygons: list[Polygon] = []

        self.marker_creation_callback = marker_creation_callback
        self.polyline_creation_callback = polyline_creation_callback
        self.polygon_creation_callback = polygon_creation_callback
        self.circle_marker_creation_callback = circle_marker_creation_callback
        self.filter_function = filter_function

        self.on_marker_tap = on_marker_tap
        self.on_circle_marker_tap = on_circle_marker_tap

        self.settings = settings or default_settings
        self.defaults = OverlayDefaults(
            marker_color=default_marker_color,
            marker_icon=default_marker_icon,
            polyline_color=default_polyline_color,
            polyline_stroke=default_polyline_stroke,
            polygon_border_color=default_polygon_border_color,
            polygon_fill_color=default_polygon_fill_color,
            polygon_border_stroke=default_polygon_border_stroke,
            polygon_is_filled=default_polygon_is_filled,
            circle_marker_color=default_circle_marker_color,
            circle_marker_border_color=default_circle_marker_border_color,
            circle_marker_is_filled=default_circle_marker_is_filled,
        )

        self._handlers: dict[FeatureType, Callable[[Feature, _Staged], None]] = {
            FeatureType.POINT: self._make_point,
            FeatureType.CIRCLE: self._make_circle,
            FeatureType.MULTI_POINT: self._make_multi_point,
            FeatureType.LINE_STRING: self._make_line_string,
            FeatureType.MULTI_LINE_STRING: self._make_multi_line_string,
            FeatureType.POLYGON: self._make_polygon,
            FeatureType.MULTI_POLYGON: self._make_multi_polygon,
        }

    # ==================
    # Parsing
    # ==================

    def parse_geojson_from_text(self, geojson_string: str) -> None:
        """Decode GeoJSON text and parse it.

        Raises:
            DecodeError: If the text is not valid JSON.
            ShapeError: If the decoded value is not a feature collection.
        """
        try:
            document = json.loads(geojson_string)
        except (json.JSONDecodeError, TypeError, RecursionError) as e:
            raise DecodeError(f"Invalid GeoJSON text: {e}") from e
        self.parse_geojson(document)

    def parse_geojson(self, geojson: Mapping[str, Any]) -> None:
        """Parse a decoded FeatureCollection and append the resulting overlays.

        Args:
            geojson: Decoded GeoJSON with a ``features`` list.

        Raises:
            ShapeError: If ``features`` is missing or a feature is malformed.
            UnknownGeometryKindError: If a feature has an unsupported geometry type.
        """
        if not isinstance(geojson, Mapping):
            raise ShapeError("GeoJSON document is not an object")
        raw_features = geojson.get("features")
        if not is_sequence(raw_features):
            raise ShapeError("GeoJSON document has no 'features' list")

        self.ensure_defaults()

        staged = _Staged()
        filtered = 0
        for idx, raw in enumerate(raw_features):
            feature = Feature.from_dict(raw, idx)
            if not self.filter_function(feature):
                filtered += 1
                continue
            kind = feature_type(feature.geometry.kind)
            self._handlers[kind](feature, staged)

        self.markers.extend(staged.markers)
        self.circles.extend(staged.circles)
        self.polylines.extend(staged.polylines)
        self.polygons.extend(staged.polygons)

        logger.debug(
            f"Parsed {len(raw_features)} features ({filtered} filtered): "
            f"{len(staged.markers)} markers, {len(staged.circles)} circles, "
            f"{len(staged.polylines)} polylines, {len(staged.polygons)} polygons"
        )

    def ensure_defaults(self) -> None:
        """Fill every unset factory, filter and default style value."""
        if self.marker_creation_callback is None:
            self.marker_creation_callback = self.create_default_marker
        if self.circle_marker_creation_callback is None:
            self.circle_marker_creation_callback = self.create_default_circle_marker
        if self.polyline_creation_callback is None:
            self.polyline_creation_callback = self.create_default_polyline
        if self.polygon_creation_callback is None:
            self.polygon_creation_callback = self.create_default_polygon
        if self.filter_function is None:
            self.filter_function = self.default_filter_function

        seeded = self.defaults.ensure_defaults(self.settings)
        if seeded:
            logger.debug(f"Seeded {len(seeded)} default style values")

    def clear(self) -> None:
        """Empty all four overlay lists."""
        self.markers.clear()
        self.circles.clear()
        self.polylines.clear()
        self.polygons.clear()

    # ==================
    # Per-kind handlers
    # ==================

    def _make_point(self, feature: Feature, out: _Staged) -> None:
        if feature.properties.get("subType") == CIRCLE_SUBTYPE:
            self._make_circle(feature, out)
            return
        self._add_marker(extract_point(feature.geometry.coordinates), feature, out)

    def _make_circle(self, feature: Feature, out: _Staged) -> None:
        point = extract_point(feature.geometry.coordinates)
        out.circles.append(self.circle_marker_creation_callback(point, feature))

    def _make_multi_point(self, feature: Feature, out: _Staged) -> None:
        for point in extract_points(feature.geometry.coordinates):
            self._add_marker(point, feature, out)

    def _make_line_string(self, feature: Feature, out: _Staged) -> None:
        line = extract_line(feature.geometry.coordinates)
        out.polylines.append(self.polyline_creation_callback(line, feature))

    def _make_multi_line_string(self, feature: Feature, out: _Staged) -> None:
        for line in extract_lines(feature.geometry.coordinates):
            out.polylines.append(self.polyline_creation_callback(line, feature))

    def _make_polygon(self, feature: Feature, out: _Staged) -> None:
        outer, holes = extract_polygon(feature.geometry.coordinates)
        out.polygons.append(self.polygon_creation_callback(outer, holes, feature))

    def _make_multi_polygon(self, feature: Feature, out: _Staged) -> None:
        for outer, holes in extract_polygons(feature.geometry.coordinates):
            out.polygons.append(self.polygon_creation_callback(outer, holes, feature))

    def _add_marker(self, point: LatLng, feature: Feature, out: _Staged) -> None:
        """Add a marker plus one circle per ``properties["metadata"]`` entry.

        Each metadata circle's factory gets a copy of the feature whose
        properties carry that entry's ``subType`` and ``radius``.
        """
        metadata = feature.properties.get("metadata")
        if is_sequence(metadata):
            for entry in metadata:
                if not isinstance(entry, Mapping):
                    raise ShapeError(f"Metadata entry is not an object: {entry!r}")
                overrides = {k: entry[k] for k in ("subType", "radius") if k in entry}
                view = feature.with_properties(**overrides)
                out.circles.append(self.circle_marker_creation_callback(point, view))
        out.markers.append(self.marker_creation_callback(point, feature))

    # ==================
    # Default factories
    # ==================

    def create_default_marker(self, point: LatLng, feature: Feature) -> Marker:
        """Marker with a tappable icon; "asset" features get the asset colour."""
        properties = feature.properties
        if properties.get("type") == ASSET_TYPE:
            color = self.defaults.asset_marker_color
        else:
            color = self.defaults.marker_color
        return Marker(
            point=point,
            icon=MarkerIcon(
                icon=self.defaults.marker_icon,
                color=color,
                properties=properties,
                on_tap=self._marker_tapped,
            ),
        )

    def create_default_circle_marker(self, point: LatLng, feature: Feature) -> CircleMarker:
        """Circle sized by ``properties["radius"]`` in meters."""
        properties = feature.properties
        radius = self._radius(properties)
        if properties.get("type") == STATION_KEEPING_TYPE:
            return CircleMarker(
                point=point,
                radius=radius,
                use_radius_in_meter=True,
                color=self.defaults.station_keeping_color,
                border_color=self.defaults.station_keeping_border_color,
                border_stroke_width=self.defaults.station_keeping_border_stroke,
                properties=properties,
                on_tap=self._circle_marker_tapped,
            )
        return CircleMarker(
            point=point,
            radius=radius,
            use_radius_in_meter=True,
            color=self.defaults.circle_marker_color,
            border_color=self.defaults.circle_marker_border_color,
            is_filled=self.defaults.circle_marker_is_filled,
            properties=properties,
            on_tap=self._circle_marker_tapped,
        )

    def create_default_polyline(self, points: Ring, feature: Feature) -> Polyline:
        return Polyline(
            points=points,
            color=self.defaults.polyline_color,
            stroke_width=self.defaults.polyline_stroke,
        )

    def create_default_polygon(self, outer_ring: Ring, holes_list: list[Ring], feature: Feature) -> Polygon:
        return Polygon(
            points=outer_ring,
            hole_points_list=holes_list,
            border_color=self.defaults.polygon_border_color,
            color=self.defaults.polygon_fill_color,
            is_filled=self.defaults.polygon_is_filled,
            border_stroke_width=self.defaults.polygon_border_stroke,
        )

    def default_filter_function(self, feature: Feature) -> bool:
        """Accept every feature."""
        return True

    def _radius(self, properties: Mapping[str, Any]) -> float:
        fallback = self.defaults.circle_radius
        if fallback is None:
            fallback = self.settings.circle_radius
        return resolve_radius(properties, fallback)

    def _marker_tapped(self, properties: dict[str, Any]) -> None:
        if self.on_marker_tap is not None:
            self.on_marker_tap(properties)

    def _circle_marker_tapped(self, properties: dict[str, Any]) -> None:
        if self.on_circle_marker_tap is not None:
            self.on_circle_marker_tap(properties)

    # ==================
    # Setters
    # ==================

    def set_default_marker_color(self, color: str) -> None:
        self.defaults.marker_color = color

    def set_default_marker_icon(self, icon: str) -> None:
        self.defaults.marker_icon = icon

    def set_default_marker_tap_callback(self, on_tap: TapCallback) -> None:
        self.on_marker_tap = on_tap

    def set_default_circle_marker_color(self, color: str) -> None:
        self.defaults.circle_marker_color = color

    def set_default_circle_marker_tap_callback(self, on_tap: TapCallback) -> None:
        self.on_circle_marker_tap = on_tap

    def set_default_polyline_color(self, color: str) -> None:
        self.defaults.polyline_color = color

    def set_default_polyline_stroke(self, stroke: float) -> None:
        self.defaults.polyline_stroke = stroke

    def set_default_polygon_fill_color(self, color: str) -> None:
        self.defaults.polygon_fill_color = color

    def set_default_polygon_border_stroke(self, stroke: float) -> None:
        self.defaults.polygon_border_stroke = stroke

    def set_default_polygon_border_color(self, color: str) -> None:
        self.defaults.polygon_border_color = color

    def set_default_polygon_is_filled(self, filled: bool) -> None:
        self.defaults.polygon_is_filled = filled
