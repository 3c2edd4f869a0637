from __future__ import annotations
import logging
import math
from typing import TYPE_CHECKING, Iterator, List, Optional, Tuple, TypeVar
from colors import Color
from errors import CanvasConfigError
from path_builder import Path
from shapes import Circle, DrawCommand, Line, QuadraticBezier, Shape, Stroke

if TYPE_CHECKING:
    from renderer import Renderer

LOGGER = logging.getLogger(__name__)

Output = TypeVar('Output')

class Canvas:
    """An ordered list of styled shapes over a square logical world.

    The visible world spans [-extent, extent] on both axes, centered on the
    origin, with y pointing up. ``size`` is the nominal output size used by
    renderers that were built without explicit dimensions.
    """

    def __init__(self, size: float, extent: float = 1.0):
        if not _is_positive(size):
            raise CanvasConfigError(f"canvas size must be a positive number, got {size!r}")
        if not _is_positive(extent):
            raise CanvasConfigError(f"canvas extent must be a positive number, got {extent!r}")
        self.size = size
        self.extent = float(extent)
        self._commands: List[DrawCommand] = []

    @property
    def commands(self) -> Tuple[DrawCommand, ...]:
        return tuple(command.copy() for command in self._commands)

    def __len__(self) -> int:
        return len(self._commands)

    def __iter__(self) -> Iterator[DrawCommand]:
        return iter(self.commands)

    def draw(self, shape: Shape, stroke: Optional[Stroke] = None, fill: Optional[Color] = None):
        self._commands.append(DrawCommand(shape, stroke, fill).copy())

    def draw_circle(self, center, radius: float, stroke: Optional[Stroke] = None,
                    fill: Optional[Color] = None):
        self.draw(Circle(center, radius), stroke, fill)

    def draw_line(self, start, end, stroke: Optional[Stroke] = None,
                  fill: Optional[Color] = None):
        self.draw(Line(start, end), stroke, fill)

    def draw_quadratic_bezier(self, p0, p1, p2, stroke: Optional[Stroke] = None,
                              fill: Optional[Color] = None):
        self.draw(QuadraticBezier(p0, p1, p2), stroke, fill)

    def draw_path(self, path: Path, stroke: Optional[Stroke] = None,
                  fill: Optional[Color] = None):
        self.draw(path, stroke, fill)

    def render(self, renderer: 'Renderer[object, Output]') -> Output:
        commands = tuple(self._commands)
        LOGGER.debug("rendering %d shape(s) with %s", len(commands), type(renderer).__name__)
        target = renderer.begin(self)
        for command in commands:
            renderer.draw(target, command)
        return renderer.finish(target)

    def __repr__(self) -> str:
        return f"Canvas(size={self.size!r}, extent={self.extent!r}, shapes={len(self._commands)})"

def _is_positive(value) -> bool:
    try:
        return math.isfinite(value) and value > 0
    except TypeError:
        return False
