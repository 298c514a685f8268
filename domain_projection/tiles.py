from __future__ import annotations

import math
from typing import Tuple

from shapely.geometry import box

from . import mercator
from .models import MAX_LATITUDE, GeographicBounds, TileAddress

# -------------------------------------------------------------------
# Tile pyramid math (row 0 is the northern edge)
# -------------------------------------------------------------------

def get_tile_count(z: int) -> int:
    return 2 ** z


def tile_to_longitude(x: float, tile_count: int) -> float:
    return (x / tile_count) * 360 - 180


def tile_to_latitude(y: float, tile_count: int) -> float:
    radians = math.atan(math.sinh(math.pi - (2 * math.pi * y) / tile_count))
    return (180 / math.pi) * radians


def tile2long(x: float, z: int) -> float:
    return tile_to_longitude(x, get_tile_count(z))


def tile2lat(y: float, z: int) -> float:
    return tile_to_latitude(y, get_tile_count(z))


def tile_lon_lat_bounds(x: int, y: int, z: int) -> GeographicBounds:
    # indices outside [0, 2**z) are extrapolated, not rejected
    n = get_tile_count(z)
    return GeographicBounds(
        west=tile_to_longitude(x, n),
        south=tile_to_latitude(y + 1, n),
        east=tile_to_longitude(x + 1, n),
        north=tile_to_latitude(y, n),
    )


def lon_lat_to_tile(lon: float, lat: float, z: int) -> TileAddress:
    n = get_tile_count(z)
    lat = max(-MAX_LATITUDE, min(MAX_LATITUDE, lat))
    lat_rad = math.radians(lat)
    x = int(math.floor((lon + 180.0) / 360.0 * n))
    y = int(math.floor((1.0 - math.asinh(math.tan(lat_rad)) / math.pi) / 2.0 * n))
    return TileAddress(max(0, min(n - 1, x)), max(0, min(n - 1, y)), z)


def meters_to_tile_range(z, minx, miny, maxx, maxy) -> Tuple[int, int, int, int]:
    """Inclusive (x0, y0, x1, y1) range of tiles touching a Web Mercator rectangle."""
    n = get_tile_count(z)
    lim = mercator.MAX_EXTENT
    tile_w = (2 * lim) / n

    tx0 = int((minx + lim) // tile_w)
    tx1 = int((maxx + lim) // tile_w)
    ty0 = int((lim - maxy) // tile_w)
    ty1 = int((lim - miny) // tile_w)

    tx0 = max(tx0, 0)
    ty0 = max(ty0, 0)
    tx1 = min(tx1, n - 1)
    ty1 = min(ty1, n - 1)

    return tx0, ty0, tx1, ty1


class TileBounds:
    def __init__(self, z, x, y):
        self.z = z
        self.x = x
        self.y = y
        self.bbox_4326 = tile_lon_lat_bounds(x, y, z)
        self.bbox_3857 = self.compute_mercator_bounds()
        self.tile_poly_3857 = box(*self.bbox_3857)

    @property
    def address(self) -> TileAddress:
        return TileAddress(self.x, self.y, self.z)

    def compute_mercator_bounds(self):
        west, south, east, north = self.bbox_4326
        minx, miny = mercator.forward(west, south)
        maxx, maxy = mercator.forward(east, north)
        return minx, miny, maxx, maxy

    def __repr__(self):
        return f"TileBounds(z={self.z}, x={self.x}, y={self.y})"
