# materials/material.py
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from whitted.core.color import BLACK, WHITE, Color
from whitted.core.vector import Vector4
from whitted.materials.light import PointLight
from whitted.materials.patterns import Pattern, SolidPattern

if TYPE_CHECKING:
    from whitted.geometry.hittable import Shape


@dataclass
class Material:
    """
    Phong surface description plus the reflective and refractive
    properties used by the recursive tracer. The defaults approximate a
    matte white plastic.
    """
    ambient: float = 0.1
    diffuse: float = 0.9
    specular: float = 0.9
    shininess: float = 200.0
    reflective: float = 0.0
    transparency: float = 0.0
    refractive_index: float = 1.0
    pattern: Pattern = field(default_factory=lambda: SolidPattern(WHITE))

    @property
    def color(self) -> Color:
        """Convenience accessor for solid-colored materials."""
        if isinstance(self.pattern, SolidPattern):
            return self.pattern.color
        raise AttributeError("material color is only defined for solid patterns")

    @color.setter
    def color(self, value: Color):
        self.pattern = SolidPattern(value)


def lighting(material: Material, shape: "Shape", light: PointLight, position: Vector4,
             eyev: Vector4, normalv: Vector4, in_shadow: bool = False) -> Color:
    """
    Phong reflection at a single surface point.

    The ambient term is always applied. Diffuse and specular contributions
    are dropped, never made negative, when the light sits behind the
    surface or the reflection points away from the eye.
    """
    color = material.pattern.pattern_at_shape(shape, position)
    effective_color = color * light.intensity
    ambient = effective_color * material.ambient
    if in_shadow:
        return ambient

    lightv = (light.position - position).normalize()
    light_dot_normal = lightv.dot(normalv)
    if light_dot_normal < 0:
        return ambient

    diffuse = effective_color * (material.diffuse * light_dot_normal)
    specular = BLACK
    reflectv = (-lightv).reflect(normalv)
    reflect_dot_eye = reflectv.dot(eyev)
    if reflect_dot_eye > 0:
        factor = reflect_dot_eye ** material.shininess
        specular = light.intensity * (material.specular * factor)
    return ambient + diffuse + specular
