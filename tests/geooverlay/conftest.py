"""Shared fixtures for geooverlay tests."""

from __future__ import annotations

import pytest
from loguru import logger

from geooverlay import GeoJsonParser


def point_feature(lng, lat, **properties):
    return {
        "type": "Feature",
        "geometry": {"type": "Point", "coordinates": [lng, lat]},
        "properties": properties,
    }


def collection(*features):
    return {"type": "FeatureCollection", "features": list(features)}


@pytest.fixture
def parser():
    return GeoJsonParser()


@pytest.fixture
def mixed_collection():
    """One feature of every supported geometry type."""
    return collection(
        point_feature(14.481, 45.982, section="Point M-4"),
        {
            "type": "Feature",
            "geometry": {"type": "Circle", "coordinates": [14.481, 45.982]},
            "properties": {"radius": 250},
        },
        {
            "type": "Feature",
            "geometry": {
                "type": "MultiPoint",
                "coordinates": [[14.482672, 45.989040], [14.489469, 45.990370]],
            },
            "properties": {"section": "Multipoint M-10"},
        },
        {
            "type": "Feature",
            "geometry": {
                "type": "LineString",
                "coordinates": [[14.48, 45.98], [14.49, 45.99], [14.50, 46.0]],
            },
            "properties": {"name": "Route"},
        },
        {
            "type": "Feature",
            "geometry": {
                "type": "MultiLineString",
                "coordinates": [
                    [[14.48, 45.98], [14.49, 45.99]],
                    [[14.50, 46.0], [14.51, 46.01]],
                ],
            },
            "properties": {"name": "Routes"},
        },
        {
            "type": "Feature",
            "geometry": {
                "type": "Polygon",
                "coordinates": [
                    [[14.48, 45.98], [14.49, 45.98], [14.49, 45.99], [14.48, 45.98]],
                ],
            },
            "properties": {"name": "Zone"},
        },
        {
            "type": "Feature",
            "geometry": {
                "type": "MultiPolygon",
                "coordinates": [
                    [[[14.48, 45.98], [14.49, 45.98], [14.49, 45.99], [14.48, 45.98]]],
                    [[[14.50, 46.0], [14.51, 46.0], [14.51, 46.01], [14.50, 46.0]]],
                ],
            },
            "properties": {"gid": 14},
        },
    )


@pytest.fixture
def log_messages():
    """Collect loguru messages emitted during a test."""
    messages: list[str] = []
    sink_id = logger.add(lambda m: messages.append(m.record["message"]), level="DEBUG")
    yield messages
    logger.remove(sink_id)
