from __future__ import annotations
import math
import numbers
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Generic, Optional, Tuple, TypeVar
from colors import Color
from errors import RendererConfigError
from path_builder import Path
from shapes import Circle, DrawCommand, Line, QuadraticBezier, Stroke

if TYPE_CHECKING:
    from canvas import Canvas

Target = TypeVar('Target')
Output = TypeVar('Output')

class Renderer(ABC, Generic[Target, Output]):
    """Turns a canvas' shape list into one output value.

    A render call is ``begin`` once, ``draw`` per command in canvas order, then
    ``finish``. Everything a single call needs lives in the target returned by
    ``begin``; the renderer itself only carries its configuration.
    """

    @abstractmethod
    def begin(self, canvas: 'Canvas') -> Target:
        ...

    @abstractmethod
    def finish(self, target: Target) -> Output:
        ...

    def draw(self, target: Target, command: DrawCommand):
        shape = command.shape
        if isinstance(shape, Circle):
            self.draw_circle(target, shape, command.stroke, command.fill)
        elif isinstance(shape, Line):
            self.draw_line(target, shape, command.stroke, command.fill)
        elif isinstance(shape, QuadraticBezier):
            self.draw_quadratic_bezier(target, shape, command.stroke, command.fill)
        elif isinstance(shape, Path):
            self.draw_path(target, shape, command.stroke, command.fill)
        else:
            raise TypeError(f"{type(self).__name__} cannot draw {type(shape).__name__}")

    @abstractmethod
    def draw_circle(self, target: Target, circle: Circle, stroke: Optional[Stroke],
                    fill: Optional[Color]):
        ...

    @abstractmethod
    def draw_line(self, target: Target, line: Line, stroke: Optional[Stroke],
                  fill: Optional[Color]):
        ...

    @abstractmethod
    def draw_quadratic_bezier(self, target: Target, curve: QuadraticBezier,
                              stroke: Optional[Stroke], fill: Optional[Color]):
        ...

    @abstractmethod
    def draw_path(self, target: Target, path: Path, stroke: Optional[Stroke],
                  fill: Optional[Color]):
        ...

def normalize_size(size, integral: bool) -> Optional[Tuple[float, float]]:
    """Accept ``None``, a scalar (square) or a ``(width, height)`` pair."""
    if size is None:
        return None
    if isinstance(size, numbers.Real):
        size = (size, size)
    try:
        width, height = size
    except (TypeError, ValueError):
        raise RendererConfigError(f"output size must be a number or a (width, height) pair, got {size!r}") from None

    for value in (width, height):
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            raise RendererConfigError(f"output size must be numeric, got {size!r}")
        if integral and not isinstance(value, numbers.Integral):
            raise RendererConfigError(f"output size must be whole pixels, got {size!r}")
        if not math.isfinite(value) or value <= 0:
            raise RendererConfigError(f"output size must be positive, got {size!r}")

    if integral:
        return (int(width), int(height))
    return (float(width), float(height))

def check_background(background: Optional[Color]) -> Optional[Color]:
    if background is not None and not isinstance(background, Color):
        raise RendererConfigError(f"background must be a Color or None, got {type(background).__name__}")
    return background
