"""Colour helpers and per-parser default styling.

Colours are ``#RRGGBBAA`` hex strings so they pass straight through to any
renderer that understands CSS-style colours.
"""

from __future__ import annotations

from dataclasses import dataclass, fields

from geooverlay.config import Settings


def with_opacity(color: str, opacity: float) -> str:
    """Return ``color`` with its alpha channel replaced by ``opacity``.

    Args:
        color: ``#RRGGBB`` or ``#RRGGBBAA`` hex string.
        opacity: 0.0 (transparent) to 1.0 (opaque).

    Raises:
        ValueError: If the colour string is malformed or opacity out of range.
    """
    if not 0.0 <= opacity <= 1.0:
        raise ValueError(f"Opacity must be between 0 and 1: {opacity}")
    rgb = color.lstrip("#")
    if len(rgb) not in (6, 8):
        raise ValueError(f"Invalid hex colour: {color}")
    int(rgb, 16)
    alpha = round(opacity * 255)
    return f"#{rgb[:6].lower()}{alpha:02x}"


# Maps each default attribute to the Settings field that seeds it.
_SEED_MAP = {
    "marker_color": "marker_color",
    "marker_icon": "marker_icon",
    "asset_marker_color": "asset_marker_color",
    "polyline_color": "polyline_color",
    "polyline_stroke": "polyline_stroke",
    "polygon_border_color": "polygon_border_color",
    "polygon_fill_color": "polygon_fill_color",
    "polygon_border_stroke": "polygon_border_stroke",
    "polygon_is_filled": "polygon_is_filled",
    "circle_marker_color": "circle_color",
    "circle_marker_border_color": "circle_border_color",
    "circle_marker_is_filled": "circle_is_filled",
    "circle_radius": "circle_radius",
    "station_keeping_color": "station_keeping_color",
    "station_keeping_border_color": "station_keeping_border_color",
    "station_keeping_border_stroke": "station_keeping_border_stroke",
}


@dataclass
class OverlayDefaults:
    """Style values used by the built-in overlay factories.

    Every field starts unset (None). ``ensure_defaults`` fills the unset ones
    from a Settings instance and leaves anything already set alone, so it can
    be called before every parse.
    """

    marker_color: str | None = None
    marker_icon: str | None = None
    asset_marker_color: str | None = None
    polyline_color: str | None = None
    polyline_stroke: float | None = None
    polygon_border_color: str | None = None
    polygon_fill_color: str | None = None
    polygon_border_stroke: float | None = None
    polygon_is_filled: bool | None = None
    circle_marker_color: str | None = None
    circle_marker_border_color: str | None = None
    circle_marker_is_filled: bool | None = None
    circle_radius: float | None = None
    station_keeping_color: str | None = None
    station_keeping_border_color: str | None = None
    station_keeping_border_stroke: float | None = None

    def ensure_defaults(self, settings: Settings) -> list[str]:
        """Seed unset fields from ``settings``.

        Returns:
            Names of the fields that were seeded by this call.
        """
        seeded = []
        for f in fields(self):
            if getattr(self, f.name) is None:
                setattr(self, f.name, getattr(settings, _SEED_MAP[f.name]))
                seeded.append(f.name)
        return seeded

    def is_seeded(self) -> bool:
        return all(getattr(self, f.name) is not None for f in fields(self))
