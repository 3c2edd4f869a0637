from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, Union
from colors import Color
from geometry import Point, as_point
from path_builder import Path, PathBuilder

class LineEnd(Enum):
    BUTT = 'butt'
    ROUND = 'round'
    SQUARE = 'square'

@dataclass(frozen=True)
class Stroke:
    color: Color
    width: float = 1.0
    line_end: LineEnd = LineEnd.BUTT

    # Color is unhashable, so neither is a stroke
    __hash__ = None

    @classmethod
    def new(cls, color: Color, width: float, line_end: LineEnd) -> 'Stroke':
        return cls(color, width, line_end)

    def copy(self) -> 'Stroke':
        return replace(self, color=self.color.copy())

@dataclass(frozen=True)
class Circle:
    center: Point
    radius: float

    def __post_init__(self):
        object.__setattr__(self, 'center', as_point(self.center))
        object.__setattr__(self, 'radius', float(self.radius))

@dataclass(frozen=True)
class Line:
    start: Point
    end: Point

    def __post_init__(self):
        object.__setattr__(self, 'start', as_point(self.start))
        object.__setattr__(self, 'end', as_point(self.end))

    def to_path(self) -> Path:
        return PathBuilder.from_line(self.start, self.end)

@dataclass(frozen=True)
class QuadraticBezier:
    start: Point
    control: Point
    end: Point

    def __post_init__(self):
        object.__setattr__(self, 'start', as_point(self.start))
        object.__setattr__(self, 'control', as_point(self.control))
        object.__setattr__(self, 'end', as_point(self.end))

    def to_path(self) -> Path:
        return PathBuilder.from_quadratic(self.start, self.control, self.end)

Shape = Union[Circle, Line, QuadraticBezier, Path]

@dataclass(frozen=True)
class DrawCommand:
    """One canvas entry: a shape with its optional outline and fill."""

    shape: Shape
    stroke: Optional[Stroke] = None
    fill: Optional[Color] = field(default=None)

    __hash__ = None

    @property
    def is_visible(self) -> bool:
        return self.stroke is not None or self.fill is not None

    def copy(self) -> 'DrawCommand':
        """Detach the command from the caller's mutable colors."""
        stroke = self.stroke.copy() if self.stroke is not None else None
        fill = self.fill.copy() if self.fill is not None else None
        return DrawCommand(self.shape, stroke, fill)
