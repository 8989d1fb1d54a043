# materials/patterns.py
import math
from typing import TYPE_CHECKING

import numpy as np

from whitted.core.color import BLACK, WHITE, Color
from whitted.core.matrix import IDENTITY, Matrix4
from whitted.core.vector import Vector4, point

if TYPE_CHECKING:
    from whitted.geometry.hittable import Shape


class Pattern:
    """
    Base class for procedural color patterns.

    A pattern is a pure function of a point in its own local space. The
    pattern transform positions it relative to the shape it decorates.
    """

    def __init__(self, transform: Matrix4 = IDENTITY):
        self.transform = transform

    @property
    def transform(self) -> Matrix4:
        return self._transform

    @transform.setter
    def transform(self, value: Matrix4):
        self._inverse = value.inverse()
        self._transform = value

    def pattern_at(self, local_point: Vector4) -> Color:
        """Color at a point already in pattern space."""
        raise NotImplementedError("pattern_at() must be implemented by pattern subclasses.")

    def sample(self, object_point: Vector4) -> Color:
        """Color at a point in the space of the decorated object."""
        return self.pattern_at(self._inverse.multiply_tuple(object_point))

    def pattern_at_shape(self, shape: "Shape", world_point: Vector4) -> Color:
        return self.sample(shape.world_to_object(world_point))


class SolidPattern(Pattern):
    """A single color everywhere."""

    def __init__(self, color: Color, transform: Matrix4 = IDENTITY):
        super().__init__(transform)
        self.color = color

    def pattern_at(self, local_point: Vector4) -> Color:
        return self.color

    def pattern_at_shape(self, shape: "Shape", world_point: Vector4) -> Color:
        # No need to walk the transform chain for a constant.
        return self.color


class TwoColorPattern(Pattern):
    def __init__(self, a: Color = WHITE, b: Color = BLACK, transform: Matrix4 = IDENTITY):
        super().__init__(transform)
        self.a = a
        self.b = b


class StripePattern(TwoColorPattern):
    """Alternates a and b on unit-wide bands along x."""

    def pattern_at(self, local_point: Vector4) -> Color:
        if math.floor(local_point.x) % 2 == 0:
            return self.a
        return self.b


class GradientPattern(TwoColorPattern):
    """Blends linearly from a to b over each unit interval of x."""

    def pattern_at(self, local_point: Vector4) -> Color:
        fraction = local_point.x - math.floor(local_point.x)
        return self.a + (self.b - self.a) * fraction


class RingPattern(TwoColorPattern):
    """Concentric rings around the y axis."""

    def pattern_at(self, local_point: Vector4) -> Color:
        distance = math.sqrt(local_point.x * local_point.x + local_point.z * local_point.z)
        if math.floor(distance) % 2 == 0:
            return self.a
        return self.b


class CheckerPattern(TwoColorPattern):
    """3D checkerboard of unit cubes."""

    def pattern_at(self, local_point: Vector4) -> Color:
        total = math.floor(local_point.x) + math.floor(local_point.y) + math.floor(local_point.z)
        if total % 2 == 0:
            return self.a
        return self.b


class BlendedPattern(Pattern):
    """Mean of two patterns, each sampled through its own transform."""

    def __init__(self, first: Pattern, second: Pattern, transform: Matrix4 = IDENTITY):
        super().__init__(transform)
        self.first = first
        self.second = second

    def pattern_at(self, local_point: Vector4) -> Color:
        return (self.first.sample(local_point) + self.second.sample(local_point)) / 2.0


class PerlinNoise:
    """
    Improved 3D gradient noise. The permutation table is drawn from a
    seeded generator, so equal seeds give identical noise fields.
    """

    def __init__(self, seed: int = 0):
        self.seed = seed
        self.p = np.random.default_rng(seed).permutation(256).tolist() * 2

    @staticmethod
    def _fade(t: float) -> float:
        return t * t * t * (t * (t * 6 - 15) + 10)

    @staticmethod
    def _lerp(t: float, a: float, b: float) -> float:
        return a + t * (b - a)

    @staticmethod
    def _grad(hash_value: int, x: float, y: float, z: float) -> float:
        h = hash_value & 15
        u = x if h < 8 else y
        if h < 4:
            v = y
        elif h in (12, 14):
            v = x
        else:
            v = z
        return (u if h & 1 == 0 else -u) + (v if h & 2 == 0 else -v)

    def noise(self, x: float, y: float, z: float) -> float:
        """Noise value in roughly [-1, 1]; zero at every lattice point."""
        xf, yf, zf = math.floor(x), math.floor(y), math.floor(z)
        xi, yi, zi = int(xf) & 255, int(yf) & 255, int(zf) & 255
        x, y, z = x - xf, y - yf, z - zf
        u, v, w = self._fade(x), self._fade(y), self._fade(z)

        p = self.p
        a = p[xi] + yi
        aa = p[a] + zi
        ab = p[a + 1] + zi
        b = p[xi + 1] + yi
        ba = p[b] + zi
        bb = p[b + 1] + zi

        grad, lerp = self._grad, self._lerp
        return lerp(w,
                    lerp(v,
                         lerp(u, grad(p[aa], x, y, z), grad(p[ba], x - 1, y, z)),
                         lerp(u, grad(p[ab], x, y - 1, z), grad(p[bb], x - 1, y - 1, z))),
                    lerp(v,
                         lerp(u, grad(p[aa + 1], x, y, z - 1), grad(p[ba + 1], x - 1, y, z - 1)),
                         lerp(u, grad(p[ab + 1], x, y - 1, z - 1),
                              grad(p[bb + 1], x - 1, y - 1, z - 1))))


class PerturbedPattern(Pattern):
    """
    Jitters the sampling point with Perlin noise before delegating to the
    wrapped pattern, giving organic-looking surfaces.
    """

    def __init__(self, base: Pattern, factor: float = 1.0, transform: Matrix4 = IDENTITY,
                 seed: int = 0):
        super().__init__(transform)
        self.base = base
        self.factor = factor
        self.noise = PerlinNoise(seed)

    def pattern_at(self, local_point: Vector4) -> Color:
        offset = self.noise.noise(local_point.x, local_point.y, local_point.z) * self.factor
        jittered = point(local_point.x + offset, local_point.y + offset, local_point.z + offset)
        return self.base.sample(jittered)
