# materials/light.py
from whitted.core.color import WHITE, Color
from whitted.core.vector import Vector4


class PointLight:
    """
    A light source with no size at a single point in space.
    """
    def __init__(self, position: Vector4, intensity: Color = WHITE):
        self.position = position
        self.intensity = intensity

    def __repr__(self) -> str:
        return f"PointLight({self.position!r}, {self.intensity!r})"
