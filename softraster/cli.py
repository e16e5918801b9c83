import argparse
import logging
import sys

from . import preview
from .config import RenderConfig, parse_hex_color
from .logging_config import setup_logging
from .painter import Painter
from .pipeline import render
from .scene import get_cube_model, get_triangle_model

logger = logging.getLogger(__name__)


def _hex_colour(text):
    rgb = parse_hex_color(text)
    if rgb is None:
        raise argparse.ArgumentTypeError(f"not a #RRGGBB colour: {text!r}")
    return rgb


def parse_args(argv=None):
    epilog = """\
examples:
  %(prog)s                                   Cube, 512x512, written to img.png
  %(prog)s cube.png --yaw 30 --fov 60        Rotated cube, wider lens
  %(prog)s --eye 0 0 -5 --show               Head-on view, open a preview window
  %(prog)s tri.png --scene triangle          Single RGB triangle in raster space
  %(prog)s --background #1A1A2E -v           Dark blue background, debug logging
"""
    defaults = RenderConfig()
    parser = argparse.ArgumentParser(
        prog="softraster",
        description="Software triangle rasterizer",
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument("output", nargs="?", default=defaults.output,
                        help=f"Output image path (default: {defaults.output})")
    parser.add_argument("--scene", choices=("cube", "triangle"), default=defaults.scene,
                        help="Geometry to render (default: cube)")
    parser.add_argument("--width", type=int, default=defaults.width,
                        help=f"Image width in pixels (default: {defaults.width})")
    parser.add_argument("--height", type=int, default=defaults.height,
                        help=f"Image height in pixels (default: {defaults.height})")
    parser.add_argument("--fov", type=float, default=defaults.fov,
                        help=f"Vertical field of view in degrees (default: {defaults.fov})")
    parser.add_argument("--near", type=float, default=defaults.near,
                        help=f"Near plane distance (default: {defaults.near})")
    parser.add_argument("--far", type=float, default=defaults.far,
                        help=f"Far plane distance (default: {defaults.far})")
    parser.add_argument("--yaw", type=float, default=defaults.yaw,
                        help="Model rotation about Y in degrees (default: 0)")
    parser.add_argument("--eye", type=float, nargs=3, metavar=("X", "Y", "Z"),
                        default=defaults.eye, help="Camera position")
    parser.add_argument("--target", type=float, nargs=3, metavar=("X", "Y", "Z"),
                        default=defaults.target, help="Point the camera looks at")
    parser.add_argument("--up", type=float, nargs=3, metavar=("X", "Y", "Z"),
                        default=defaults.up, help="Camera up direction")
    parser.add_argument("--colour-scale", type=float, default=defaults.colour_scale,
                        help="Multiplier from [0,1] colour to 8-bit channel (default: 255)")
    parser.add_argument("--background", type=_hex_colour, default=defaults.background,
                        help="Background colour in hex #RRGGBB (default: #000000)")
    parser.add_argument("--show", action="store_true",
                        help="Open a preview window after saving")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Debug logging")
    parser.add_argument("--log-file", help="Also write the log to this file")
    return parser, parser.parse_args(argv)


def build_config(args) -> RenderConfig:
    return RenderConfig(
        width=args.width,
        height=args.height,
        fov=args.fov,
        near=args.near,
        far=args.far,
        eye=tuple(args.eye),
        target=tuple(args.target),
        up=tuple(args.up),
        yaw=args.yaw,
        colour_scale=args.colour_scale,
        background=tuple(args.background),
        output=args.output,
        scene=args.scene,
    )


def render_scene(config: RenderConfig) -> Painter:
    """Build the configured scene and rasterize it into a fresh Painter."""
    painter = Painter(config.width, config.height,
                      background=config.background,
                      colour_scale=config.colour_scale)

    if config.scene == "triangle":
        # Already in raster space: skip the transform chain
        for a, b, c in get_triangle_model().triangles():
            painter.draw_triangle(a, b, c)
    else:
        render(get_cube_model(), config.view_matrix(),
               config.projection_matrix(), painter)
    return painter


def main(argv=None) -> int:
    parser, args = parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO, args.log_file)

    try:
        config = build_config(args)
    except ValueError as e:
        parser.error(str(e))

    logger.info("rendering %s scene at %dx%d", config.scene, config.width, config.height)
    painter = render_scene(config)

    try:
        painter.save(config.output)
    except (OSError, ValueError) as e:
        logger.error("unable to save %s: %s", config.output, e)
        return 1

    if args.show:
        preview.show(painter.frame, title=f"softraster - {config.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
