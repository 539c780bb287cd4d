"""Tests for CircleParser — circle-only parsing with eager defaults."""

import pytest

from geooverlay import (
    CircleMarker,
    CircleParser,
    DecodeError,
    LatLng,
    ParseError,
    ShapeError,
    UnknownGeometryKindError,
)
from geooverlay.config import Settings

DEFAULT_CIRCLE_COLOR = "#2196f326"

DOCUMENT = {
    "type": "FeatureCollection",
    "features": [
        {"geometry": {"type": "Point", "coordinates": [14.481, 45.982]}, "properties": {"radius": 500, "type": "stationKeeping"}},
        {"geometry": {"type": "Circle", "coordinates": [14.49, 45.99]}, "properties": {"radius": 1000, "section": "M-4"}},
    ],
}


@pytest.fixture
def circle_parser():
    return CircleParser()


class TestCircleParser:
    """CircleParser."""

    @pytest.mark.unit
    def test_defaults_applied_at_construction(self, circle_parser):
        assert circle_parser.circle_marker_creation_callback == circle_parser.create_default_circle_marker
        assert circle_parser.default_circle_marker_color == DEFAULT_CIRCLE_COLOR
        assert circle_parser.default_circle_marker_border_color == "#00000080"
        assert circle_parser.default_circle_marker_is_filled is True

    @pytest.mark.unit
    def test_one_circle_per_feature(self, circle_parser):
        circle_parser.parse_geojson(DOCUMENT)
        assert len(circle_parser.circles) == 2
        assert circle_parser.circles[0].point == LatLng(45.982, 14.481)
        assert [c.radius for c in circle_parser.circles] == [500, 1000]

    @pytest.mark.unit
    def test_station_keeping_style(self, circle_parser):
        circle_parser.parse_geojson(DOCUMENT)
        keeping, plain = circle_parser.circles
        assert keeping.border_color == "#ffeb3bff"
        assert keeping.color == "#ffeb3b80"
        assert keeping.border_stroke_width == 4.0
        assert plain.color == DEFAULT_CIRCLE_COLOR

    @pytest.mark.unit
    def test_filter(self):
        parser = CircleParser(filter_function=lambda f: f.properties.get("section") == "M-4")
        parser.parse_geojson(DOCUMENT)
        assert len(parser.circles) == 1
        assert parser.circles[0].radius == 1000

    @pytest.mark.unit
    def test_custom_factory(self):
        parser = CircleParser(circle_marker_creation_callback=lambda point, feature: CircleMarker(point, 42.0))
        parser.parse_geojson(DOCUMENT)
        assert [c.radius for c in parser.circles] == [42.0, 42.0]

    @pytest.mark.unit
    def test_set_colour(self, circle_parser):
        circle_parser.set_default_circle_marker_color("#ff000080")
        circle_parser.parse_geojson(DOCUMENT)
        assert circle_parser.circles[1].color == "#ff000080"

    @pytest.mark.unit
    def test_make_circle_does_not_store(self, circle_parser):
        from geooverlay.feature import Feature

        circle = circle_parser.make_circle(Feature.from_dict(DOCUMENT["features"][1]))
        assert circle.radius == 1000
        assert circle_parser.circles == []

    @pytest.mark.unit
    def test_non_point_geometry_rejected(self, circle_parser):
        document = {"features": [
            DOCUMENT["features"][0],
            {"geometry": {"type": "LineString", "coordinates": [[1, 2], [3, 4]]}, "properties": {}},
        ]}
        with pytest.raises(UnknownGeometryKindError):
            circle_parser.parse_geojson(document)
        assert circle_parser.circles == []

    @pytest.mark.unit
    def test_text_errors(self, circle_parser):
        with pytest.raises(DecodeError):
            circle_parser.parse_geojson_from_text("{")
        with pytest.raises(ShapeError):
            circle_parser.parse_geojson_from_text("[]")

    @pytest.mark.unit
    def test_tap(self, circle_parser):
        tapped = []
        circle_parser.set_default_circle_marker_tap_callback(tapped.append)
        circle_parser.parse_geojson(DOCUMENT)
        circle_parser.circles[1].tap()
        assert tapped == [{"radius": 1000, "section": "M-4"}]

    @pytest.mark.unit
    def test_deeply_nested_text_is_decode_error(self, circle_parser):
        with pytest.raises(DecodeError):
            circle_parser.parse_geojson_from_text("[" * 200000)
        assert circle_parser.circles == []

    @pytest.mark.unit
    def test_decode_error_is_parse_error(self, circle_parser):
        with pytest.raises(ParseError):
            circle_parser.parse_geojson_from_text("[" * 200000)


class TestCircleParserSettings:
    """CircleParser palette comes from Settings."""

    @pytest.mark.unit
    def test_palette_from_settings(self):
        settings = Settings(
            circle_parser_color="#00ff0040",
            circle_parser_border_color="#0000ffff",
            circle_parser_station_keeping_color="#ff000080",
        )
        parser = CircleParser(settings=settings)
        parser.parse_geojson(DOCUMENT)
        keeping, plain = parser.circles
        assert keeping.color == "#ff000080"
        assert plain.color == "#00ff0040"
        assert plain.border_color == "#0000ffff"

    @pytest.mark.unit
    def test_palette_from_env(self, monkeypatch):
        monkeypatch.setenv("GEOOVERLAY_CIRCLE_PARSER_COLOR", "#abcdef40")
        parser = CircleParser(settings=Settings())
        assert parser.default_circle_marker_color == "#abcdef40"

    @pytest.mark.unit
    def test_constructor_colour_beats_settings(self):
        parser = CircleParser(
            default_circle_marker_color="#11111111",
            settings=Settings(circle_parser_color="#00ff0040"),
        )
        assert parser.default_circle_marker_color == "#11111111"
