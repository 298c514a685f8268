from __future__ import annotations

import argparse
import json
import logging
import sys
from time import perf_counter

from .config import DEFAULT_CONFIG, ProjectionConfig
from .errors import ProjectionError
from .models import GeographicBounds
from .projection import Projection

logger = logging.getLogger(__name__)

_LOG_FORMAT = "%(asctime)s [%(relativeCreated).0fms] %(levelname)s %(name)s: %(message)s"

# views used by the demo: whole world, south-west quadrant, north-east quadrant
_DEMO_VIEWS = {
    "zoomed_out": (-180, -90, 180, 90),
    "bottom_left": (-180, -90, 0, 0),
    "top_right": (0, 0, 180, 90),
}


def build_projection(args) -> Projection:
    if args.config:
        config = ProjectionConfig.from_json_file(args.config)
    else:
        config = DEFAULT_CONFIG

    overrides = {
        "width_in_pixels": args.width,
        "height_in_pixels": args.height,
        "min_x_in_domain": args.min_x,
        "max_x_in_domain": args.max_x,
        "min_y_in_domain": args.min_y,
        "max_y_in_domain": args.max_y,
    }
    data = config.to_dict()
    data.update({k: v for k, v in overrides.items() if v is not None})
    if args.bounds is not None:
        data["bounds"] = args.bounds

    projection = ProjectionConfig.from_mapping(data).build()
    logger.info("Using %r", projection)
    return projection


def _point(p):
    return dict(p._asdict())


def run_demo(projection: Projection) -> dict:
    extent = projection.extent
    width, height = projection.width_in_pixels, projection.height_in_pixels

    samples = {}
    for name, (x, y) in (
        ("bottom_left", (extent.min_x, extent.min_y)),
        ("center", tuple(extent.center)),
        ("top_right", (extent.max_x, extent.max_y)),
    ):
        samples[name] = {
            "meters": _point(projection.project_domain_xy_to_web_mercator_xy(x, y)),
            "lonlat": _point(projection.convert_domain_xy_to_lon_lat(x, y)),
        }

    tiles = {"0/0/0": projection.convert_tile_xyz_to_domain_bbox(0, 0, 0).to_dict()}
    for x in (0, 1):
        for y in (0, 1):
            tiles[f"1/{x}/{y}"] = projection.convert_tile_xyz_to_domain_bbox(x, y, 1).to_dict()

    pixels = {}
    for view_name, view in _DEMO_VIEWS.items():
        corners = {
            "top_left": (0, 0),
            "bottom_left": (0, height),
            "middle": (width / 2, height / 2),
            "top_right": (width, 0),
            "bottom_right": (width, height),
        }
        pixels[view_name] = {
            corner: _point(projection.convert_pixel_xy_to_domain_xy(px, py, *view))
            for corner, (px, py) in corners.items()
        }

    return {
        "domain": samples,
        "tiles": tiles,
        "pixels": pixels,
        "null_island": _point(projection.convert_lon_lat_to_domain_xy(0, 0)),
    }


def _parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="domain-projection",
        description="Convert between domain coordinates, Web Mercator meters, lon/lat, tiles and viewport pixels.",
    )
    ap.add_argument("--config", help="JSON file with the projection parameters.")
    ap.add_argument("--width", type=float, help="Viewport width in pixels.")
    ap.add_argument("--height", type=float, help="Viewport height in pixels.")
    ap.add_argument("--min-x", type=float, help="Domain minimum x.")
    ap.add_argument("--max-x", type=float, help="Domain maximum x.")
    ap.add_argument("--min-y", type=float, help="Domain minimum y.")
    ap.add_argument("--max-y", type=float, help="Domain maximum y.")
    ap.add_argument("--bounds", type=float, nargs=4, metavar=("W", "S", "E", "N"),
                    help="Geographic bounds the domain is stretched over (default: whole world).")
    ap.add_argument("--log-level", default="WARNING", help="Logging level (DEBUG, INFO, WARNING, ERROR)")

    sub = ap.add_subparsers(dest="command", required=True)

    sub.add_parser("demo", help="Print a set of sample conversions.")

    p = sub.add_parser("tile", help="Domain bbox of tile Z/X/Y.")
    p.add_argument("z", type=int)
    p.add_argument("x", type=int)
    p.add_argument("y", type=int)

    p = sub.add_parser("to-lonlat", help="Domain x/y to lon/lat.")
    p.add_argument("x", type=float)
    p.add_argument("y", type=float)

    p = sub.add_parser("to-meters", help="Domain x/y to Web Mercator meters.")
    p.add_argument("x", type=float)
    p.add_argument("y", type=float)

    p = sub.add_parser("to-domain", help="Lon/lat to domain x/y.")
    p.add_argument("lon", type=float)
    p.add_argument("lat", type=float)

    p = sub.add_parser("pixel", help="Viewport pixel to domain x/y.")
    p.add_argument("px", type=float)
    p.add_argument("py", type=float)
    p.add_argument("--view", type=float, nargs=4, metavar=("W", "S", "E", "N"),
                   default=list(GeographicBounds()), help="Lon/lat bounds currently on screen.")
    return ap


def main(argv=None) -> int:
    args = _parser().parse_args(argv)

    level = getattr(logging, args.log_level.upper(), logging.WARNING)
    logging.basicConfig(level=level, format=_LOG_FORMAT)

    start = perf_counter()
    try:
        projection = build_projection(args)
        if args.command == "demo":
            result = run_demo(projection)
        elif args.command == "tile":
            result = projection.convert_tile_xyz_to_domain_bbox(args.x, args.y, args.z).to_dict()
        elif args.command == "to-lonlat":
            result = _point(projection.convert_domain_xy_to_lon_lat(args.x, args.y))
        elif args.command == "to-meters":
            result = _point(projection.project_domain_xy_to_web_mercator_xy(args.x, args.y))
        elif args.command == "to-domain":
            result = _point(projection.convert_lon_lat_to_domain_xy(args.lon, args.lat))
        else:
            result = _point(projection.convert_pixel_xy_to_domain_xy(args.px, args.py, *args.view))
    except ProjectionError as e:
        logger.error("%s", e)
        return 2

    print(json.dumps(result, indent=2))
    logger.info("%s finished in %.2f ms", args.command, (perf_counter() - start) * 1000)
    return 0


if __name__ == "__main__":
    sys.exit(main())
