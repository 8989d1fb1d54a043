# core/color.py
from typing import Iterator

from whitted.core.utils import equal


class Color:
    """
    An RGB color. Channels are unbounded; clamping to [0, 1] only happens
    when a canvas is serialized.
    """
    __slots__ = ("red", "green", "blue")

    def __init__(self, red: float, green: float, blue: float):
        self.red = float(red)
        self.green = float(green)
        self.blue = float(blue)

    __hash__ = None

    def __add__(self, other: "Color") -> "Color":
        return Color(self.red + other.red, self.green + other.green, self.blue + other.blue)

    def __sub__(self, other: "Color") -> "Color":
        return Color(self.red - other.red, self.green - other.green, self.blue - other.blue)

    def __mul__(self, other):
        # Scalar scaling or the Hadamard (component-wise) product.
        if isinstance(other, Color):
            return Color(self.red * other.red, self.green * other.green, self.blue * other.blue)
        return Color(self.red * other, self.green * other, self.blue * other)

    def __rmul__(self, other: float) -> "Color":
        return self.__mul__(other)

    def __truediv__(self, scalar: float) -> "Color":
        return Color(self.red / scalar, self.green / scalar, self.blue / scalar)

    def hadamard(self, other: "Color") -> "Color":
        return Color(self.red * other.red, self.green * other.green, self.blue * other.blue)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Color):
            return NotImplemented
        return (equal(self.red, other.red) and equal(self.green, other.green)
                and equal(self.blue, other.blue))

    def __iter__(self) -> Iterator[float]:
        return iter((self.red, self.green, self.blue))

    def __repr__(self) -> str:
        return f"Color({self.red}, {self.green}, {self.blue})"


BLACK = Color(0.0, 0.0, 0.0)
WHITE = Color(1.0, 1.0, 1.0)
