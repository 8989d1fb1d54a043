# camera/dof.py
import logging

from whitted.camera.camera import Camera, view_transform
from whitted.core.matrix import translation
from whitted.core.vector import Vector4
from whitted.geometry.world import MAX_RECURSION_DEPTH, World
from whitted.renderer.canvas import Canvas

logger = logging.getLogger(__name__)


class DepthOfField:
    """
    Cheap depth of field: renders several takes with the eye nudged a
    little further along x and y each time, always looking at the same
    target, and averages them. Objects near the target stay sharp.
    """

    def __init__(self, camera: Camera, takes: int, from_point: Vector4, to: Vector4,
                 up: Vector4, jitter: float = 0.0005):
        if takes < 1:
            raise ValueError(f"takes must be >= 1, got {takes}")
        self.camera = camera
        self.takes = takes
        self.from_point = from_point
        self.to = to
        self.up = up
        self.jitter = jitter

    def render(self, world: World, max_depth: int = MAX_RECURSION_DEPTH, workers: int = 1) -> Canvas:
        canvases = []
        original_transform = self.camera.transform
        try:
            for take in range(self.takes):
                offset = self.jitter * take
                eye = translation(offset, offset, 0.0).multiply_tuple(self.from_point)
                self.camera.transform = view_transform(eye, self.to, self.up)
                logger.debug("Depth of field take %d/%d from %r", take + 1, self.takes, eye)
                canvases.append(self.camera.render(world, max_depth, workers))
        finally:
            self.camera.transform = original_transform
        return Canvas.average(canvases)
