"""Feature and Geometry records read from a GeoJSON document."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any

from geooverlay.errors import ShapeError


@dataclass(frozen=True)
class Geometry:
    """Geometry of a feature.

    Attributes:
        kind: The raw ``type`` tag, e.g. "Point" or "MultiPolygon".
        coordinates: Nested coordinate arrays in [lng, lat] order.
    """

    kind: str
    coordinates: Any


@dataclass(frozen=True)
class Feature:
    """One GeoJSON feature: a geometry plus an open property mapping.

    Instances are read-only. Use ``with_properties`` to get an augmented view
    for a factory instead of writing to ``properties``.
    """

    geometry: Geometry
    properties: dict[str, Any] = field(default_factory=dict)
    feature_id: str | None = None

    @classmethod
    def from_dict(cls, raw: Any, idx: int = 0) -> Feature:
        """Build a Feature from a decoded GeoJSON feature object.

        Args:
            raw: The decoded feature (a mapping).
            idx: Position of the feature in its collection, for error messages.

        Raises:
            ShapeError: If the feature, its geometry or its properties have
                the wrong structure.
        """
        if not isinstance(raw, Mapping):
            raise ShapeError(f"Feature {idx} is not an object")

        geometry = raw.get("geometry")
        if not isinstance(geometry, Mapping):
            raise ShapeError(f"Feature {idx} has no geometry object")

        kind = geometry.get("type")
        if not isinstance(kind, str):
            raise ShapeError(f"Feature {idx} geometry has no type")
        if "coordinates" not in geometry:
            raise ShapeError(f"Feature {idx} geometry has no coordinates")

        if "properties" not in raw:
            raise ShapeError(f"Feature {idx} has no properties")
        properties = raw["properties"]
        # RFC 7946 allows "properties": null
        if properties is None:
            properties = {}
        if not isinstance(properties, Mapping):
            raise ShapeError(f"Feature {idx} properties is not an object")

        feature_id = raw.get("id")
        if feature_id is not None and not isinstance(feature_id, str):
            feature_id = str(feature_id)

        return cls(
            geometry=Geometry(kind=kind, coordinates=geometry["coordinates"]),
            properties=dict(properties),
            feature_id=feature_id,
        )

    def with_properties(self, **overrides: Any) -> Feature:
        """Return a copy whose properties are overlaid with ``overrides``."""
        return replace(self, properties={**self.properties, **overrides})
