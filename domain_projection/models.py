from __future__ import annotations

import math
from dataclasses import dataclass
from typing import NamedTuple

from shapely.geometry import box

from .errors import InvalidDomainError

MAX_LATITUDE = 85.0511287798066


# -------------------------------------------------------------------
# Points
# -------------------------------------------------------------------

class DomainPoint(NamedTuple):
    x: float
    y: float


class MercatorPoint(NamedTuple):
    x: float
    y: float


class LonLat(NamedTuple):
    lon: float
    lat: float


class PixelPoint(NamedTuple):
    """Viewport position, origin at the top-left corner, y growing downward."""
    x: float
    y: float


# -------------------------------------------------------------------
# Extents
# -------------------------------------------------------------------

def _require_finite(**values):
    for name, value in values.items():
        try:
            ok = math.isfinite(value)
        except TypeError:
            ok = False
        if not ok:
            raise InvalidDomainError(f"{name} must be a finite number, got {value!r}")


@dataclass(frozen=True)
class DomainExtent:
    min_x: float
    max_x: float
    min_y: float
    max_y: float

    def __post_init__(self):
        _require_finite(min_x=self.min_x, max_x=self.max_x, min_y=self.min_y, max_y=self.max_y)
        if self.max_x - self.min_x <= 0:
            raise InvalidDomainError(
                f"Cannot have unbounded domains: x-range [{self.min_x}, {self.max_x}] has no width"
            )
        if self.max_y - self.min_y <= 0:
            raise InvalidDomainError(
                f"Cannot have 0-height in domain: y-range [{self.min_y}, {self.max_y}]"
            )

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def center(self) -> DomainPoint:
        return DomainPoint((self.min_x + self.max_x) / 2, (self.min_y + self.max_y) / 2)

    def to_bbox(self) -> DomainBBox:
        return DomainBBox(self.min_x, self.min_y, self.max_x, self.max_y)


@dataclass(frozen=True)
class PixelViewport:
    width: float
    height: float

    def __post_init__(self):
        _require_finite(width=self.width, height=self.height)
        if self.width <= 0 or self.height <= 0:
            raise InvalidDomainError(
                f"Viewport must have positive size, got {self.width}x{self.height} pixels"
            )


class GeographicBounds(NamedTuple):
    """Lon/lat rectangle; the default covers the whole Mercator-safe world."""
    west: float = -180.0
    south: float = -MAX_LATITUDE
    east: float = 180.0
    north: float = MAX_LATITUDE

    @classmethod
    def world(cls) -> GeographicBounds:
        return cls()


class DomainBBox(NamedTuple):
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    def to_polygon(self):
        return box(self.min_x, self.min_y, self.max_x, self.max_y)

    def to_dict(self):
        return {"minX": self.min_x, "minY": self.min_y, "maxX": self.max_x, "maxY": self.max_y}

    def union(self, other: DomainBBox) -> DomainBBox:
        return DomainBBox(
            min(self.min_x, other.min_x),
            min(self.min_y, other.min_y),
            max(self.max_x, other.max_x),
            max(self.max_y, other.max_y),
        )


# -------------------------------------------------------------------
# Tiles
# -------------------------------------------------------------------

class TileAddress(NamedTuple):
    x: int
    y: int
    z: int

    @property
    def tile_count(self) -> int:
        return 2 ** self.z

    def is_valid(self) -> bool:
        n = self.tile_count
        return self.z >= 0 and 0 <= self.x < n and 0 <= self.y < n


# -------------------------------------------------------------------
# Affine transform
# -------------------------------------------------------------------

class AffineTransform(NamedTuple):
    """Per-axis scale and translate, no rotation: ``out = in * scale + translate``.

    Works element-wise, so numpy arrays pass straight through.
    """
    scale_x: float
    scale_y: float
    translate_x: float
    translate_y: float

    @classmethod
    def from_corners(cls, src_min, src_max, dst_min, dst_max) -> AffineTransform:
        """Map ``src_min -> dst_min`` and ``src_max -> dst_max`` independently on each axis."""
        scale_x = (dst_max[0] - dst_min[0]) / (src_max[0] - src_min[0])
        scale_y = (dst_max[1] - dst_min[1]) / (src_max[1] - src_min[1])
        translate_x = dst_min[0] - scale_x * src_min[0]
        translate_y = dst_min[1] - scale_y * src_min[1]
        return cls(scale_x, scale_y, translate_x, translate_y)

    def forward(self, x, y):
        return x * self.scale_x + self.translate_x, y * self.scale_y + self.translate_y

    def inverse(self, x, y):
        return (x - self.translate_x) / self.scale_x, (y - self.translate_y) / self.scale_y
