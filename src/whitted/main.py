# main.py
import argparse
import logging
import math
import sys
from pathlib import Path
from typing import List, Optional

from whitted.camera.camera import Camera, view_transform
from whitted.camera.dof import DepthOfField
from whitted.config import LOG_LEVELS, QUALITY_PRESETS, RenderSettings
from whitted.core.color import Color
from whitted.core.matrix import chain, rotation_y, scaling, translation
from whitted.core.vector import point, vector
from whitted.geometry.cube import Cube
from whitted.geometry.cylinder import Cylinder
from whitted.geometry.plane import Plane
from whitted.geometry.sphere import Sphere
from whitted.geometry.world import World
from whitted.logging_config import setup_logging
from whitted.materials.light import PointLight
from whitted.materials.material import Material
from whitted.materials.patterns import PerturbedPattern
from whitted.materials.presets import (
    ColorPresets,
    DielectricPresets,
    MetalPresets,
    PatternPresets,
)
from whitted.parser.obj_loader import ObjParseError, load_obj

logger = logging.getLogger(__name__)

CAMERA_FROM = point(0.0, 1.8, -6.0)
CAMERA_TO = point(0.0, 1.0, 0.0)
CAMERA_UP = vector(0.0, 1.0, 0.0)


def create_world(obj_file: Optional[Path] = None) -> World:
    """The demo scene: a checkered floor with a few shapes on it."""
    world = World(light=PointLight(point(-10.0, 10.0, -10.0), Color(1.0, 1.0, 1.0)))

    # Floor with a slightly wobbly checkerboard
    checker = PatternPresets.checkerboard(ColorPresets.WHITE * 0.8, ColorPresets.BLACK * 2.0)
    floor_pattern = PerturbedPattern(checker, factor=0.15)
    world.add(Plane(material=Material(pattern=floor_pattern, specular=0.0, reflective=0.1)))

    # Mirror sphere
    world.add(Sphere(
        transform=translation(-1.5, 1.0, 0.5),
        material=MetalPresets.mirror(),
    ))

    # Glass sphere in front
    world.add(Sphere(
        transform=chain(scaling(0.6, 0.6, 0.6), translation(0.3, 0.6, -1.5)),
        material=DielectricPresets.glass(),
    ))

    # Red cube, turned a little
    world.add(Cube(
        transform=chain(scaling(0.5, 0.5, 0.5), rotation_y(math.pi / 5), translation(1.8, 0.5, 0.8)),
        material=ColorPresets.matte(ColorPresets.RED),
    ))

    # Capped blue cylinder
    world.add(Cylinder(
        transform=chain(scaling(0.4, 1.0, 0.4), translation(0.2, 0.0, 2.0)),
        material=ColorPresets.matte(ColorPresets.BLUE),
        minimum=0.0,
        maximum=1.5,
        closed=True,
    ))

    if obj_file is not None:
        model = load_obj(obj_file, ColorPresets.matte(ColorPresets.GREEN))
        mesh = model.to_group()
        mesh.transform = translation(-0.5, 0.0, 3.0)
        world.add(mesh)
        logger.info("Added mesh from %s", obj_file)

    return world


def render(settings: RenderSettings, world: World):
    camera = Camera(settings.width, settings.height, settings.field_of_view,
                    view_transform(CAMERA_FROM, CAMERA_TO, CAMERA_UP))
    if settings.dof_takes > 1:
        dof = DepthOfField(camera, settings.dof_takes, CAMERA_FROM, CAMERA_TO, CAMERA_UP)
        return dof.render(world, settings.max_depth, settings.workers)
    return camera.render(world, settings.max_depth, settings.workers)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="whitted",
                                     description="Render the demo scene with a recursive ray tracer.")
    parser.add_argument("-q", "--quality", choices=sorted(QUALITY_PRESETS), default="preview",
                        help="quality preset (default: preview)")
    parser.add_argument("--width", type=int, help="image width in pixels")
    parser.add_argument("--height", type=int, help="image height in pixels")
    parser.add_argument("-d", "--depth", dest="max_depth", type=int,
                        help="maximum reflection/refraction bounces")
    parser.add_argument("-j", "--workers", type=int, help="rows traced in parallel")
    parser.add_argument("--dof-takes", type=int, help="depth of field takes to average")
    parser.add_argument("--obj", type=Path, help="OBJ model to add to the scene")
    parser.add_argument("-o", "--output", type=Path, help="output image (.ppm, .png, ...)")
    parser.add_argument("--log-level", choices=LOG_LEVELS, help="logging level")
    parser.add_argument("--log-file", type=Path, help="also write logs to this file")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings = RenderSettings.from_preset(
            args.quality,
            width=args.width,
            height=args.height,
            max_depth=args.max_depth,
            workers=args.workers,
            dof_takes=args.dof_takes,
            output=args.output,
            log_level=args.log_level,
        )
    except ValueError as e:
        print(f"whitted: {e}", file=sys.stderr)
        return 2

    setup_logging(level=settings.log_level, log_file=args.log_file)
    logger.info("Settings: %s", settings)

    try:
        world = create_world(args.obj)
    except (OSError, ObjParseError) as e:
        logger.error("Could not load %s: %s", args.obj, e)
        return 1

    canvas = render(settings, world)
    canvas.save(settings.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
