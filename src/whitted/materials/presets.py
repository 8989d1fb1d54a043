# materials/presets.py
from typing import Optional

from whitted.core.color import Color
from whitted.core.matrix import scaling
from whitted.materials.material import Material
from whitted.materials.patterns import (
    CheckerPattern,
    PerturbedPattern,
    RingPattern,
    SolidPattern,
)


class ColorPresets:
    """Common color presets for materials."""

    # Warm colors
    RED = Color(0.9, 0.2, 0.2)
    ORANGE = Color(0.9, 0.6, 0.1)
    YELLOW = Color(0.9, 0.9, 0.1)

    # Cool colors
    BLUE = Color(0.2, 0.3, 0.9)
    GREEN = Color(0.2, 0.8, 0.2)
    PURPLE = Color(0.6, 0.2, 0.8)

    # Neutral colors
    WHITE = Color(0.9, 0.9, 0.9)
    GRAY = Color(0.5, 0.5, 0.5)
    BLACK = Color(0.1, 0.1, 0.1)

    @staticmethod
    def matte(color: Color) -> Material:
        """Create a matte material with the given color."""
        return Material(pattern=SolidPattern(color), specular=0.1, shininess=10.0)


class DielectricPresets:
    """Transparent materials with realistic refractive indices."""

    @staticmethod
    def clear(refractive_index: float) -> Material:
        # Nearly all of the color comes from reflection and refraction.
        return Material(
            pattern=SolidPattern(Color(0.0, 0.0, 0.0)),
            ambient=0.0,
            diffuse=0.1,
            specular=1.0,
            shininess=300.0,
            reflective=0.9,
            transparency=0.9,
            refractive_index=refractive_index,
        )

    @staticmethod
    def glass() -> Material:
        return DielectricPresets.clear(1.52)  # Common glass

    @staticmethod
    def water() -> Material:
        return DielectricPresets.clear(1.333)

    @staticmethod
    def diamond() -> Material:
        return DielectricPresets.clear(2.417)


class MetalPresets:
    """Mirror-like materials. Reflectivity stands in for polish."""

    @staticmethod
    def mirror() -> Material:
        return Material(pattern=SolidPattern(Color(0.05, 0.05, 0.05)), diffuse=0.1,
                        specular=1.0, shininess=300.0, reflective=1.0)

    @staticmethod
    def chrome() -> Material:
        return Material(pattern=SolidPattern(Color(0.2, 0.2, 0.2)), diffuse=0.3,
                        specular=0.9, shininess=250.0, reflective=0.7)

    @staticmethod
    def gold() -> Material:
        return Material(pattern=SolidPattern(Color(1.0, 0.78, 0.34)), diffuse=0.4,
                        specular=0.8, shininess=150.0, reflective=0.4)


class PatternPresets:
    """Predefined procedural patterns."""

    @staticmethod
    def checkerboard(color1: Optional[Color] = None, color2: Optional[Color] = None,
                     scale: float = 1.0) -> CheckerPattern:
        """Create a checkerboard with default or custom colors."""
        if color1 is None:
            color1 = ColorPresets.WHITE
        if color2 is None:
            color2 = ColorPresets.BLACK
        return CheckerPattern(color1, color2, transform=scaling(scale, scale, scale))

    @staticmethod
    def marble(color1: Optional[Color] = None, color2: Optional[Color] = None,
               turbulence: float = 0.3, seed: int = 0) -> PerturbedPattern:
        """Rings pushed around by Perlin noise."""
        if color1 is None:
            color1 = ColorPresets.WHITE
        if color2 is None:
            color2 = ColorPresets.GRAY
        rings = RingPattern(color1, color2, transform=scaling(0.2, 0.2, 0.2))
        return PerturbedPattern(rings, factor=turbulence, seed=seed)
