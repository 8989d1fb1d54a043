# core/vector.py
import math
from typing import Iterator

from whitted.core.utils import equal


class Vector4:
    """
    A homogeneous 3D tuple. w == 1 marks a point, w == 0 a vector.

    Instances are treated as immutable values: every operation returns a
    new tuple. Operations that would turn a point into something that is
    neither a point nor a vector (point + point, vector - point) raise
    ValueError instead of silently producing a meaningless w.
    """
    __slots__ = ("x", "y", "z", "w")

    def __init__(self, x: float, y: float, z: float, w: float):
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)
        self.w = float(w)

    __hash__ = None  # equality is approximate

    def is_point(self) -> bool:
        return equal(self.w, 1.0)

    def is_vector(self) -> bool:
        return equal(self.w, 0.0)

    def __add__(self, other: "Vector4") -> "Vector4":
        w = self.w + other.w
        if w > 1.5:
            raise ValueError("cannot add two points")
        return Vector4(self.x + other.x, self.y + other.y, self.z + other.z, w)

    def __sub__(self, other: "Vector4") -> "Vector4":
        w = self.w - other.w
        if w < -0.5:
            raise ValueError("cannot subtract a point from a vector")
        return Vector4(self.x - other.x, self.y - other.y, self.z - other.z, w)

    def __neg__(self) -> "Vector4":
        if not self.is_vector():
            raise ValueError("only vectors can be negated")
        return Vector4(-self.x, -self.y, -self.z, 0.0)

    def __mul__(self, scalar: float) -> "Vector4":
        return Vector4(self.x * scalar, self.y * scalar, self.z * scalar, self.w)

    def __rmul__(self, scalar: float) -> "Vector4":
        return self.__mul__(scalar)

    def __truediv__(self, scalar: float) -> "Vector4":
        return Vector4(self.x / scalar, self.y / scalar, self.z / scalar, self.w)

    def dot(self, other: "Vector4") -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z + self.w * other.w

    def cross(self, other: "Vector4") -> "Vector4":
        if not (self.is_vector() and other.is_vector()):
            raise ValueError("cross product is only defined for vectors")
        return Vector4(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
            0.0,
        )

    def magnitude(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def normalize(self) -> "Vector4":
        """
        Returns a unit vector in the same direction. A zero-length vector
        normalizes to the zero vector.
        """
        length = self.magnitude()
        if length == 0:
            return Vector4(0.0, 0.0, 0.0, self.w)
        return Vector4(self.x / length, self.y / length, self.z / length, self.w)

    def reflect(self, normal: "Vector4") -> "Vector4":
        """
        Reflects this vector about the normal.
        """
        return self - normal * (2.0 * self.dot(normal))

    def __eq__(self, other) -> bool:
        if not isinstance(other, Vector4):
            return NotImplemented
        return (equal(self.x, other.x) and equal(self.y, other.y)
                and equal(self.z, other.z) and equal(self.w, other.w))

    def __iter__(self) -> Iterator[float]:
        return iter((self.x, self.y, self.z, self.w))

    def __repr__(self) -> str:
        if self.is_point():
            return f"point({self.x}, {self.y}, {self.z})"
        if self.is_vector():
            return f"vector({self.x}, {self.y}, {self.z})"
        return f"Vector4({self.x}, {self.y}, {self.z}, {self.w})"


def point(x: float, y: float, z: float) -> Vector4:
    return Vector4(x, y, z, 1.0)


def vector(x: float, y: float, z: float) -> Vector4:
    return Vector4(x, y, z, 0.0)


ORIGIN = point(0.0, 0.0, 0.0)
