"""Exceptions raised while ingesting GeoJSON."""

from __future__ import annotations


class ParseError(ValueError):
    """Base class for every failure raised by a parse call."""


class DecodeError(ParseError):
    """Raised when GeoJSON text is not valid JSON."""


class ShapeError(ParseError):
    """Raised when the decoded document or a feature has the wrong structure."""


class UnknownGeometryKindError(ParseError):
    """Raised when a feature's geometry type is not one of the supported kinds."""

    def __init__(self, kind: object) -> None:
        super().__init__(f"Unsupported geometry type: {kind!r}")
        self.kind = kind
