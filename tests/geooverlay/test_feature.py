"""Tests for Feature.from_dict shape checks and augmented property views."""

import dataclasses

import pytest

from geooverlay.errors import ShapeError
from geooverlay.feature import Feature, Geometry

RAW = {
    "type": "Feature",
    "id": 7,
    "geometry": {"type": "Point", "coordinates": [14.481, 45.982]},
    "properties": {"name": "HQ", "radius": 400},
}


class TestFromDict:
    """Feature.from_dict."""

    @pytest.mark.unit
    def test_reads_geometry_and_properties(self):
        f = Feature.from_dict(RAW)
        assert f.geometry == Geometry("Point", [14.481, 45.982])
        assert f.properties == {"name": "HQ", "radius": 400}
        assert f.feature_id == "7"

    @pytest.mark.unit
    def test_properties_are_copied(self):
        """The caller's property mapping is not aliased."""
        raw = {"geometry": {"type": "Point", "coordinates": [0, 0]}, "properties": {"a": 1}}
        f = Feature.from_dict(raw)
        f.properties["b"] = 2
        assert raw["properties"] == {"a": 1}

    @pytest.mark.unit
    def test_null_properties_read_as_empty(self):
        f = Feature.from_dict({"geometry": {"type": "Point", "coordinates": [0, 0]}, "properties": None})
        assert f.properties == {}

    @pytest.mark.unit
    def test_frozen(self):
        f = Feature.from_dict(RAW)
        with pytest.raises(dataclasses.FrozenInstanceError):
            f.properties = {}

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "raw,message",
        [
            ([], "not an object"),
            ({"properties": {}}, "no geometry"),
            ({"geometry": None, "properties": {}}, "no geometry"),
            ({"geometry": {"coordinates": [0, 0]}, "properties": {}}, "no type"),
            ({"geometry": {"type": "Point"}, "properties": {}}, "no coordinates"),
            ({"geometry": {"type": "Point", "coordinates": [0, 0]}}, "no properties"),
            ({"geometry": {"type": "Point", "coordinates": [0, 0]}, "properties": [1]}, "not an object"),
        ],
    )
    def test_malformed_feature_raises(self, raw, message):
        with pytest.raises(ShapeError, match=message):
            Feature.from_dict(raw, 3)

    @pytest.mark.unit
    def test_error_names_feature_index(self):
        with pytest.raises(ShapeError, match="Feature 5"):
            Feature.from_dict({"properties": {}}, 5)


class TestWithProperties:
    """Augmented views for factories."""

    @pytest.mark.unit
    def test_overlay_leaves_original_untouched(self):
        f = Feature.from_dict(RAW)
        view = f.with_properties(radius=1000, subType="Circle")
        assert view.properties["radius"] == 1000
        assert view.properties["subType"] == "Circle"
        assert view.properties["name"] == "HQ"
        assert f.properties == {"name": "HQ", "radius": 400}
        assert view.geometry is f.geometry
