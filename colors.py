from __future__ import annotations
import math
import string
from typing import Iterator, Tuple
import numpy as np
from errors import ColorParseError, HSVRangeError

HEX_PREFIXES = ('#', '0x', '0X')

class Color:
    """An RGBA color with float32 channels, nominally in 0.0..=1.0.

    Channels are never clamped here; arithmetic may leave the range and
    backends clamp when they consume the value.
    """

    __slots__ = ('_rgba',)
    __hash__ = None

    def __init__(self, r: float = 0.0, g: float = 0.0, b: float = 0.0, a: float = 0.0):
        with np.errstate(over='ignore'):
            self._rgba = np.array([r, g, b, a], dtype=np.float32)

    @classmethod
    def _wrap(cls, rgba: np.ndarray) -> 'Color':
        color = cls.__new__(cls)
        color._rgba = np.asarray(rgba, dtype=np.float32).copy()
        return color

    @classmethod
    def new(cls, r: float, g: float, b: float, a: float) -> 'Color':
        return cls(r, g, b, a)

    @classmethod
    def white(cls) -> 'Color':
        return cls(1.0, 1.0, 1.0, 1.0)

    @classmethod
    def black(cls) -> 'Color':
        return cls(0.0, 0.0, 0.0, 1.0)

    @classmethod
    def red(cls) -> 'Color':
        return cls(1.0, 0.0, 0.0, 1.0)

    @classmethod
    def green(cls) -> 'Color':
        return cls(0.0, 1.0, 0.0, 1.0)

    @classmethod
    def blue(cls) -> 'Color':
        return cls(0.0, 0.0, 1.0, 1.0)

    @classmethod
    def transparent(cls) -> 'Color':
        return cls(0.0, 0.0, 0.0, 0.0)

    @classmethod
    def from_rgba8(cls, r: int, g: int, b: int, a: int = 255) -> 'Color':
        return cls(r / 255.0, g / 255.0, b / 255.0, a / 255.0)

    @classmethod
    def from_hsv(cls, hue: float, saturation: float, value: float) -> 'Color':
        """Build an opaque color from HSV fractions.

        All inputs are expected in 0..1, hue being a fraction of a full turn.
        Raises HSVRangeError when their sum exceeds 3.0.
        """
        if hue + saturation + value > 3.0:
            raise HSVRangeError(
                f"HSV components must each be within 0..1, got ({hue}, {saturation}, {value})")

        hp = hue / (1.0 / 6.0)
        c = saturation * value
        x = c * (1.0 - abs(math.fmod(hp, 2.0) - 1.0))
        m = value - c
        r = g = b = 0.0
        if hp <= 1.0:
            r, g = c, x
        elif hp <= 2.0:
            r, g = x, c
        elif hp <= 3.0:
            g, b = c, x
        elif hp <= 4.0:
            g, b = x, c
        elif hp <= 5.0:
            r, b = x, c
        else:
            r, b = c, x
        return cls(r + m, g + m, b + m, 1.0)

    @classmethod
    def from_hex(cls, text: str) -> 'Color':
        """Parse ``RRGGBB`` or ``RRGGBBAA`` with an optional ``#`` or ``0x`` prefix.

        Alpha defaults to 1.0 when omitted.
        """
        digits = text
        for prefix in HEX_PREFIXES:
            if text.startswith(prefix):
                digits = text[len(prefix):]
                break

        if len(digits) < 6:
            raise ColorParseError(f"hex color {text!r} needs at least 6 digits")

        r = _parse_hex_pair(text, digits, 0)
        g = _parse_hex_pair(text, digits, 2)
        b = _parse_hex_pair(text, digits, 4)
        if len(digits) == 6:
            return cls(r, g, b, 1.0)

        a = _parse_hex_pair(text, digits, 6)
        return cls(r, g, b, a)

    @property
    def r(self) -> float:
        return float(self._rgba[0])

    @r.setter
    def r(self, value: float):
        self._rgba[0] = value

    @property
    def g(self) -> float:
        return float(self._rgba[1])

    @g.setter
    def g(self, value: float):
        self._rgba[1] = value

    @property
    def b(self) -> float:
        return float(self._rgba[2])

    @b.setter
    def b(self, value: float):
        self._rgba[2] = value

    @property
    def a(self) -> float:
        return float(self._rgba[3])

    @a.setter
    def a(self, value: float):
        self._rgba[3] = value

    def value(self) -> float:
        # alpha is not part of the average
        return float((self._rgba[0] + self._rgba[1] + self._rgba[2]) / np.float32(3.0))

    def with_r(self, r: float) -> 'Color':
        color = self.copy()
        color.r = r
        return color

    def with_g(self, g: float) -> 'Color':
        color = self.copy()
        color.g = g
        return color

    def with_b(self, b: float) -> 'Color':
        color = self.copy()
        color.b = b
        return color

    def with_a(self, a: float) -> 'Color':
        color = self.copy()
        color.a = a
        return color

    def copy(self) -> 'Color':
        return Color._wrap(self._rgba)

    def clamped(self) -> 'Color':
        return Color._wrap(np.clip(np.nan_to_num(self._rgba, nan=0.0), 0.0, 1.0))

    def to_rgba8(self) -> Tuple[int, int, int, int]:
        channels = np.rint(self.clamped()._rgba.astype(np.float64) * 255.0).astype(np.uint8)
        return tuple(int(c) for c in channels)

    def to_tuple(self) -> Tuple[float, float, float, float]:
        return (self.r, self.g, self.b, self.a)

    def as_hex(self, include_alpha: bool = False) -> str:
        channels = self.to_rgba8()
        if not include_alpha:
            channels = channels[:3]
        return '#' + ''.join(f'{c:02X}' for c in channels)

    def __iter__(self) -> Iterator[float]:
        return iter(self.to_tuple())

    def __eq__(self, other) -> bool:
        if not isinstance(other, Color):
            return NotImplemented
        return bool(np.array_equal(self._rgba, other._rgba))

    def __repr__(self) -> str:
        return f"Color(r={self.r!r}, g={self.g!r}, b={self.b!r}, a={self.a!r})"

    def _apply(self, other, op, allow_scalar: bool = True):
        if isinstance(other, Color):
            rhs = other._rgba
        elif allow_scalar and isinstance(other, (int, float, np.integer, np.floating)):
            rhs = np.float32(other)
        else:
            return NotImplemented
        with np.errstate(divide='ignore', invalid='ignore', over='ignore'):
            return Color._wrap(op(self._rgba, rhs))

    def __add__(self, other):
        return self._apply(other, np.add, allow_scalar=False)

    def __sub__(self, other):
        return self._apply(other, np.subtract, allow_scalar=False)

    def __mul__(self, other):
        return self._apply(other, np.multiply)

    def __rmul__(self, other):
        if isinstance(other, Color):
            return NotImplemented
        return self._apply(other, np.multiply)

    def __truediv__(self, other):
        return self._apply(other, np.divide)

    def __mod__(self, other):
        return self._apply(other, np.fmod)


def _parse_hex_pair(text: str, digits: str, offset: int) -> float:
    pair = digits[offset:offset + 2]
    if len(pair) != 2 or any(ch not in string.hexdigits for ch in pair):
        raise ColorParseError(f"invalid hex color {text!r} at digit {offset}")
    return int(pair, 16) / 255.0

def blend_colors(background: np.ndarray, color: Color, coverage: np.ndarray) -> None:
    """Composite ``color`` over a float32 RGBA window in place (straight alpha)."""
    src = color.clamped()._rgba
    src_alpha = (src[3] * coverage)[..., np.newaxis]
    dst_alpha = background[..., 3:4]
    out_alpha = src_alpha + dst_alpha * (1.0 - src_alpha)

    with np.errstate(divide='ignore', invalid='ignore'):
        out_rgb = (src[:3] * src_alpha + background[..., :3] * dst_alpha * (1.0 - src_alpha)) / out_alpha

    background[..., :3] = np.where(out_alpha > 0.0, out_rgb, 0.0)
    background[..., 3:4] = out_alpha
