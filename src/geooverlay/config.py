"""Fallback style configuration using Pydantic settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Fallback overlay styling loaded from environment variables.

    These values are only read when a parser seeds its defaults; anything a
    caller sets on the parser itself wins.
    """

    model_config = SettingsConfigDict(
        env_prefix="GEOOVERLAY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Markers
    marker_color: str = "#f44336cc"
    marker_icon: str = "location_pin"
    asset_marker_color: str = "#ff9800ff"

    # Polylines
    polyline_color: str = "#2196f3cc"
    polyline_stroke: float = 3.0

    # Polygons
    polygon_border_color: str = "#000000cc"
    polygon_fill_color: str = "#0000001a"
    polygon_border_stroke: float = 1.0
    polygon_is_filled: bool = True

    # Circles (radius in meters)
    circle_color: str = "#2196f340"
    circle_border_color: str = "#000000cc"
    circle_is_filled: bool = True
    circle_radius: float = 0.0

    # Station-keeping circles
    station_keeping_color: str = "#ffeb3b00"
    station_keeping_border_color: str = "#ffeb3bff"
    station_keeping_border_stroke: float = 4.0

    # CircleParser palette
    circle_parser_color: str = "#2196f326"
    circle_parser_border_color: str = "#00000080"
    circle_parser_station_keeping_color: str = "#ffeb3b80"


settings = Settings()
