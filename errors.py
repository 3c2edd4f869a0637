from __future__ import annotations


class VectorCanvasError(Exception):
    """Base error for the drawing core."""


class ColorParseError(VectorCanvasError, ValueError):
    """A hex color string could not be parsed."""


class HSVRangeError(VectorCanvasError, ValueError):
    """HSV components are out of range."""


class CanvasConfigError(VectorCanvasError, ValueError):
    """Invalid canvas size or extent."""


class RendererConfigError(VectorCanvasError, ValueError):
    """Invalid renderer configuration, raised at construction."""
