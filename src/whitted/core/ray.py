# core/ray.py
from whitted.core.matrix import Matrix4
from whitted.core.vector import Vector4


class Ray:
    """
    Represents a ray in 3D space with an origin point and direction vector.
    """
    __slots__ = ("origin", "direction")

    def __init__(self, origin: Vector4, direction: Vector4):
        self.origin = origin
        self.direction = direction

    def at(self, t: float) -> Vector4:
        """
        Returns the point along the ray at parameter t.
        """
        return self.origin + self.direction * t

    def transform(self, matrix: Matrix4) -> "Ray":
        """
        Returns a new ray with origin and direction multiplied by matrix.
        The direction is not renormalized so t values stay comparable.
        """
        return Ray(matrix.multiply_tuple(self.origin), matrix.multiply_tuple(self.direction))

    def __repr__(self) -> str:
        return f"Ray({self.origin!r}, {self.direction!r})"
