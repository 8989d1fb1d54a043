# camera/camera.py
import logging
import math
import time
from concurrent.futures import ThreadPoolExecutor
from typing import List

from whitted.core.color import Color
from whitted.core.matrix import IDENTITY, Matrix4, translation
from whitted.core.ray import Ray
from whitted.core.vector import ORIGIN, Vector4, point, vector
from whitted.geometry.world import MAX_RECURSION_DEPTH, World
from whitted.renderer.canvas import Canvas

logger = logging.getLogger(__name__)


def view_transform(from_point: Vector4, to: Vector4, up: Vector4) -> Matrix4:
    """
    Orients the world relative to an eye at from_point looking at to.
    """
    forward = (to - from_point).normalize()
    left = forward.cross(vector(up.x, up.y, up.z).normalize())
    true_up = left.cross(forward)
    orientation = Matrix4([
        [left.x, left.y, left.z, 0.0],
        [true_up.x, true_up.y, true_up.z, 0.0],
        [-forward.x, -forward.y, -forward.z, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ])
    return orientation.multiply(translation(-from_point.x, -from_point.y, -from_point.z))


class Camera:
    """
    A pinhole camera one unit in front of a canvas of hsize x vsize pixels.
    """

    def __init__(self, hsize: int, vsize: int, field_of_view: float,
                 transform: Matrix4 = IDENTITY):
        if hsize <= 0 or vsize <= 0:
            raise ValueError(f"Camera size must be positive, got {hsize}x{vsize}")
        self.hsize = hsize
        self.vsize = vsize
        self.field_of_view = field_of_view
        self.transform = transform

        half_view = math.tan(field_of_view / 2.0)
        aspect = hsize / vsize
        if aspect >= 1.0:
            self.half_width = half_view
            self.half_height = half_view / aspect
        else:
            self.half_width = half_view * aspect
            self.half_height = half_view
        self.pixel_size = self.half_width * 2.0 / hsize

    @property
    def transform(self) -> Matrix4:
        return self._transform

    @transform.setter
    def transform(self, value: Matrix4):
        self._inverse = value.inverse()
        self._transform = value

    def ray_for_pixel(self, px: float, py: float) -> Ray:
        """
        Returns the ray from the eye through the center of pixel (px, py).
        """
        x_offset = (px + 0.5) * self.pixel_size
        y_offset = (py + 0.5) * self.pixel_size
        # The camera looks toward -z, so +x is to the left.
        world_x = self.half_width - x_offset
        world_y = self.half_height - y_offset

        pixel = self._inverse.multiply_tuple(point(world_x, world_y, -1.0))
        origin = self._inverse.multiply_tuple(ORIGIN)
        return Ray(origin, (pixel - origin).normalize())

    def _render_row(self, world: World, y: int, max_depth: int) -> List[Color]:
        return [world.color_at(self.ray_for_pixel(x, y), max_depth) for x in range(self.hsize)]

    def render(self, world: World, max_depth: int = MAX_RECURSION_DEPTH, workers: int = 1) -> Canvas:
        """
        Renders every pixel of the image.

        The world is read-only during rendering, so rows can be traced on a
        thread pool without locking when workers > 1.
        """
        if max_depth < 0:
            raise ValueError(f"max_depth must be >= 0, got {max_depth}")
        world.prepare()
        canvas = Canvas(self.hsize, self.vsize)
        start = time.perf_counter()
        logger.info("Rendering %dx%d (depth %d, %d worker(s))",
                    self.hsize, self.vsize, max_depth, workers)

        if workers > 1:
            with ThreadPoolExecutor(max_workers=workers) as executor:
                rows = executor.map(lambda y: self._render_row(world, y, max_depth),
                                    range(self.vsize))
                for y, row in enumerate(rows):
                    canvas.write_row(y, row)
        else:
            for y in range(self.vsize):
                canvas.write_row(y, self._render_row(world, y, max_depth))

        logger.info("Rendered %d pixels in %.2fs", self.hsize * self.vsize,
                    time.perf_counter() - start)
        return canvas
