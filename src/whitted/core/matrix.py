# core/matrix.py
import math
from typing import Sequence

import numpy as np

from whitted.core.utils import EPSILON
from whitted.core.vector import Vector4

# A determinant smaller than this is treated as zero. It is far below
# EPSILON so that legitimately small scalings (e.g. 0.01 on each axis)
# stay invertible.
SINGULAR_THRESHOLD = 1e-12


class NonInvertibleMatrixError(ValueError):
    """Raised when inverting a matrix whose determinant is zero."""


def _submatrix(m: np.ndarray, row: int, col: int) -> np.ndarray:
    return np.delete(np.delete(m, row, axis=0), col, axis=1)


def _determinant(m: np.ndarray) -> float:
    # Cofactor expansion along the first row, down to the 2x2 case.
    if m.shape == (2, 2):
        return float(m[0, 0] * m[1, 1] - m[0, 1] * m[1, 0])
    return sum(float(m[0, col]) * _cofactor(m, 0, col) for col in range(m.shape[1]))


def _cofactor(m: np.ndarray, row: int, col: int) -> float:
    minor = _determinant(_submatrix(m, row, col))
    return -minor if (row + col) % 2 else minor


class Matrix4:
    """
    A 4x4 transformation matrix backed by a numpy array.

    Matrices are immutable once built, so the inverse is computed lazily
    and cached.
    """

    def __init__(self, rows: Sequence[Sequence[float]]):
        m = np.array(rows, dtype=np.float64)
        if m.shape != (4, 4):
            raise ValueError(f"Matrix4 needs 4x4 members, got shape {m.shape}")
        m.setflags(write=False)
        self._m = m
        self._rows = tuple(tuple(float(v) for v in row) for row in m)
        # Affine transforms never touch w; multiplying keeps it exact.
        self._affine = bool(np.all(np.abs(m[3] - (0.0, 0.0, 0.0, 1.0)) < EPSILON))
        self._inverse = None

    @property
    def members(self) -> np.ndarray:
        return self._m

    def __getitem__(self, index) -> float:
        row, col = index
        return self._rows[row][col]

    def multiply(self, other: "Matrix4") -> "Matrix4":
        return Matrix4(self._m @ other._m)

    def multiply_tuple(self, t: Vector4) -> Vector4:
        r0, r1, r2, r3 = self._rows
        x, y, z, w = t.x, t.y, t.z, t.w
        return Vector4(
            r0[0] * x + r0[1] * y + r0[2] * z + r0[3] * w,
            r1[0] * x + r1[1] * y + r1[2] * z + r1[3] * w,
            r2[0] * x + r2[1] * y + r2[2] * z + r2[3] * w,
            w if self._affine else r3[0] * x + r3[1] * y + r3[2] * z + r3[3] * w,
        )

    def __matmul__(self, other):
        if isinstance(other, Matrix4):
            return self.multiply(other)
        if isinstance(other, Vector4):
            return self.multiply_tuple(other)
        return NotImplemented

    def transpose(self) -> "Matrix4":
        return Matrix4(self._m.T)

    def submatrix(self, row: int, col: int) -> np.ndarray:
        return _submatrix(self._m, row, col)

    def minor(self, row: int, col: int) -> float:
        return _determinant(self.submatrix(row, col))

    def cofactor(self, row: int, col: int) -> float:
        return _cofactor(self._m, row, col)

    def determinant(self) -> float:
        return _determinant(self._m)

    def is_invertible(self) -> bool:
        return abs(self.determinant()) >= SINGULAR_THRESHOLD

    def inverse(self) -> "Matrix4":
        """
        Returns the inverse via the adjugate (transposed cofactor matrix).

        Raises:
            NonInvertibleMatrixError: if the determinant is zero.
        """
        if self._inverse is None:
            det = self.determinant()
            if abs(det) < SINGULAR_THRESHOLD:
                raise NonInvertibleMatrixError(
                    f"Matrix is not invertible (determinant {det!r}):\n{self._m}"
                )
            cofactors = np.array([[_cofactor(self._m, row, col) for col in range(4)]
                                  for row in range(4)])
            self._inverse = Matrix4(cofactors.T / det)
        return self._inverse

    def __eq__(self, other) -> bool:
        if not isinstance(other, Matrix4):
            return NotImplemented
        return bool(np.all(np.abs(self._m - other._m) < EPSILON))

    __hash__ = None

    def __repr__(self) -> str:
        return f"Matrix4({self._m.tolist()})"


IDENTITY = Matrix4(np.identity(4))


def translation(x: float, y: float, z: float) -> Matrix4:
    return Matrix4([
        [1.0, 0.0, 0.0, x],
        [0.0, 1.0, 0.0, y],
        [0.0, 0.0, 1.0, z],
        [0.0, 0.0, 0.0, 1.0],
    ])


def scaling(x: float, y: float, z: float) -> Matrix4:
    return Matrix4([
        [x, 0.0, 0.0, 0.0],
        [0.0, y, 0.0, 0.0],
        [0.0, 0.0, z, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ])


def rotation_x(radians: float) -> Matrix4:
    c, s = math.cos(radians), math.sin(radians)
    return Matrix4([
        [1.0, 0.0, 0.0, 0.0],
        [0.0, c, -s, 0.0],
        [0.0, s, c, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ])


def rotation_y(radians: float) -> Matrix4:
    c, s = math.cos(radians), math.sin(radians)
    return Matrix4([
        [c, 0.0, s, 0.0],
        [0.0, 1.0, 0.0, 0.0],
        [-s, 0.0, c, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ])


def rotation_z(radians: float) -> Matrix4:
    c, s = math.cos(radians), math.sin(radians)
    return Matrix4([
        [c, -s, 0.0, 0.0],
        [s, c, 0.0, 0.0],
        [0.0, 0.0, 1.0, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ])


def shearing(xy: float, xz: float, yx: float, yz: float, zx: float, zy: float) -> Matrix4:
    return Matrix4([
        [1.0, xy, xz, 0.0],
        [yx, 1.0, yz, 0.0],
        [zx, zy, 1.0, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ])


def chain(*transforms: Matrix4) -> Matrix4:
    """
    Composes transforms in the order they are applied, so
    chain(rotate, scale, move) == move @ scale @ rotate.
    """
    result = IDENTITY
    for transform in transforms:
        result = transform.multiply(result)
    return result
