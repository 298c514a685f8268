"""
Spherical (Web) Mercator primitive backed by pyproj.

forward() clamps longitude to [-180, 180] and latitude to the Mercator-safe
band, then clips the projected meters to the world square. Points past the
antimeridian or the poles therefore land on the world edge instead of being
wrapped to the far side or sent to infinity. inverse() clips its meters to the
same square, so it never returns a longitude outside [-180, 180].

Both accept scalars or anything numpy can broadcast against each other.
"""
from __future__ import annotations

import numpy as np
from pyproj import Transformer

from .models import MAX_LATITUDE, LonLat, MercatorPoint

EARTH_RADIUS = 6378137.0
MAX_EXTENT = 20037508.342789244  # pi * EARTH_RADIUS
MAX_LONGITUDE = 180.0


def _as_coord_pair(a, b):
    if np.ndim(a) == 0 and np.ndim(b) == 0:
        return float(a), float(b)
    a, b = np.broadcast_arrays(np.asarray(a, dtype=np.float64), np.asarray(b, dtype=np.float64))
    # broadcast views are read-only and may share memory
    return np.ascontiguousarray(a), np.ascontiguousarray(b)


def _clip(value, limit):
    if np.ndim(value) == 0:
        return float(min(max(value, -limit), limit))
    return np.clip(value, -limit, limit)


class SphericalMercator:
    def __init__(self):
        # PROJ folds |lon| > 180 back into range, so inputs are clipped before they get here
        self.tf_4326_to_3857 = Transformer.from_crs(4326, 3857, always_xy=True)
        self.tf_3857_to_4326 = Transformer.from_crs(3857, 4326, always_xy=True)

    @property
    def max_extent(self) -> float:
        return MAX_EXTENT

    def forward(self, lon, lat) -> MercatorPoint:
        lon, lat = _as_coord_pair(lon, lat)
        lon = _clip(lon, MAX_LONGITUDE)
        lat = _clip(lat, MAX_LATITUDE)
        x, y = self.tf_4326_to_3857.transform(lon, lat)
        return MercatorPoint(_clip(x, MAX_EXTENT), _clip(y, MAX_EXTENT))

    def inverse(self, x, y) -> LonLat:
        x, y = _as_coord_pair(x, y)
        lon, lat = self.tf_3857_to_4326.transform(_clip(x, MAX_EXTENT), _clip(y, MAX_EXTENT))
        return LonLat(lon, lat)


default_mercator = SphericalMercator()


def forward(lon, lat) -> MercatorPoint:
    return default_mercator.forward(lon, lat)


def inverse(x, y) -> LonLat:
    return default_mercator.inverse(x, y)
