from __future__ import annotations

import logging
import math
from typing import Optional, Sequence, Tuple

from . import tiles
from .errors import InvalidDomainError, InvalidViewError
from .mercator import default_mercator
from .models import (
    AffineTransform,
    DomainBBox,
    DomainExtent,
    DomainPoint,
    GeographicBounds,
    LonLat,
    MercatorPoint,
    PixelPoint,
    PixelViewport,
)

logger = logging.getLogger(__name__)


class Projection:
    """
    Maps a rectangular domain coordinate system onto a portion of the Web
    Mercator world.

    The domain rectangle ``[min_x, max_x] x [min_y, max_y]`` is stretched onto
    the Mercator rectangle spanned by ``bounds`` (the whole Mercator-safe world
    by default). Each axis is scaled on its own, so the domain and the world
    need not share an aspect ratio. Instances are immutable and every method
    is a pure function of the constructor arguments.
    """

    def __init__(
        self,
        width_in_pixels: float,
        height_in_pixels: float,
        min_x_in_domain: float,
        max_x_in_domain: float,
        min_y_in_domain: float,
        max_y_in_domain: float,
        bounds: Optional[Sequence[float]] = None,
    ):
        viewport = PixelViewport(width_in_pixels, height_in_pixels)
        extent = DomainExtent(min_x_in_domain, max_x_in_domain, min_y_in_domain, max_y_in_domain)
        bounds = GeographicBounds() if bounds is None else GeographicBounds(*bounds)

        pseudo_mercator = default_mercator
        merc_min = pseudo_mercator.forward(bounds.west, bounds.south)
        merc_max = pseudo_mercator.forward(bounds.east, bounds.north)
        if not all(math.isfinite(v) for v in (*merc_min, *merc_max)):
            raise InvalidDomainError(f"Geographic bounds {tuple(bounds)} do not project to finite meters")
        if merc_max.x - merc_min.x == 0 or merc_max.y - merc_min.y == 0:
            raise InvalidDomainError(f"Geographic bounds {tuple(bounds)} collapse to a line or a point")

        transform = AffineTransform.from_corners(
            (extent.min_x, extent.min_y),
            (extent.max_x, extent.max_y),
            merc_min,
            merc_max,
        )

        set_ = super().__setattr__
        set_("_viewport", viewport)
        set_("_extent", extent)
        set_("_bounds", bounds)
        set_("_pseudo_mercator", pseudo_mercator)
        set_("_mercator_min", merc_min)
        set_("_mercator_max", merc_max)
        set_("_transform", transform)

        logger.debug(
            "Projection domain=%s viewport=%sx%s bounds=%s -> %s",
            extent, viewport.width, viewport.height, tuple(bounds), transform,
        )

    @classmethod
    def from_extent(cls, extent: DomainExtent, viewport: PixelViewport, bounds=None) -> Projection:
        return cls(
            viewport.width, viewport.height,
            extent.min_x, extent.max_x, extent.min_y, extent.max_y,
            bounds=bounds,
        )

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __repr__(self):
        e = self._extent
        return (
            f"Projection({self._viewport.width}x{self._viewport.height}px, "
            f"x=[{e.min_x}, {e.max_x}], y=[{e.min_y}, {e.max_y}], bounds={tuple(self._bounds)})"
        )

    # -------------------------------------------------------------------
    # Read-only configuration
    # -------------------------------------------------------------------

    @property
    def extent(self) -> DomainExtent:
        return self._extent

    @property
    def viewport(self) -> PixelViewport:
        return self._viewport

    @property
    def bounds(self) -> GeographicBounds:
        return self._bounds

    @property
    def width_in_pixels(self) -> float:
        return self._viewport.width

    @property
    def height_in_pixels(self) -> float:
        return self._viewport.height

    @property
    def mercator_bounds(self) -> Tuple[float, float, float, float]:
        return (*self._mercator_min, *self._mercator_max)

    # -------------------------------------------------------------------
    # Domain <-> Web Mercator
    # -------------------------------------------------------------------

    def get_transformation_params(self) -> AffineTransform:
        # inputs never change after __init__, so the transform derived there stays valid
        return self._transform

    def project_domain_xy_to_web_mercator_xy(self, domain_x, domain_y) -> MercatorPoint:
        return MercatorPoint(*self._transform.forward(domain_x, domain_y))

    def reverse_project_web_mercator_xy_to_domain_xy(self, meters_x, meters_y) -> DomainPoint:
        return DomainPoint(*self._transform.inverse(meters_x, meters_y))

    # -------------------------------------------------------------------
    # Domain <-> lon/lat
    # -------------------------------------------------------------------

    def convert_domain_xy_to_lon_lat(self, domain_x, domain_y) -> LonLat:
        x, y = self.project_domain_xy_to_web_mercator_xy(domain_x, domain_y)
        return self._pseudo_mercator.inverse(x, y)

    def convert_lon_lat_to_domain_xy(self, lon, lat) -> DomainPoint:
        x_meters, y_meters = self._pseudo_mercator.forward(lon, lat)
        return self.reverse_project_web_mercator_xy_to_domain_xy(x_meters, y_meters)

    # -------------------------------------------------------------------
    # Tiles
    # -------------------------------------------------------------------

    def convert_tile_xyz_to_domain_bbox(self, x: int, y: int, z: int) -> DomainBBox:
        """Domain-space range covered by tile ``z/x/y``; use it as the query range for the tile."""
        west, south, east, north = tiles.tile_lon_lat_bounds(x, y, z)

        w_meters, s_meters = self._pseudo_mercator.forward(west, south)
        e_meters, n_meters = self._pseudo_mercator.forward(east, north)

        min_xy = self.reverse_project_web_mercator_xy_to_domain_xy(w_meters, s_meters)
        max_xy = self.reverse_project_web_mercator_xy_to_domain_xy(e_meters, n_meters)

        logger.debug("Tile %s/%s/%s -> domain %s %s", z, x, y, min_xy, max_xy)
        return DomainBBox(min_xy.x, min_xy.y, max_xy.x, max_xy.y)

    def convert_domain_bbox_to_tile_range(self, bbox: Sequence[float], z: int) -> Tuple[int, int, int, int]:
        """Inclusive ``(x0, y0, x1, y1)`` tile range at zoom ``z`` overlapping a domain rectangle."""
        min_x, min_y, max_x, max_y = bbox
        ax, ay = self.project_domain_xy_to_web_mercator_xy(min_x, min_y)
        bx, by = self.project_domain_xy_to_web_mercator_xy(max_x, max_y)
        return tiles.meters_to_tile_range(z, min(ax, bx), min(ay, by), max(ax, bx), max(ay, by))

    # -------------------------------------------------------------------
    # Pixel <-> Domain, relative to whatever part of the world is on screen
    # -------------------------------------------------------------------

    def get_viewport_transformation_params(
        self, w_lon_of_map, s_lat_of_map, e_lon_of_map, n_lat_of_map
    ) -> AffineTransform:
        """Meters -> pixels for a view showing the given lon/lat rectangle."""
        w_meters, s_meters = self._pseudo_mercator.forward(w_lon_of_map, s_lat_of_map)
        e_meters, n_meters = self._pseudo_mercator.forward(e_lon_of_map, n_lat_of_map)

        if e_meters - w_meters == 0 or n_meters - s_meters == 0:
            raise InvalidViewError(
                f"View ({w_lon_of_map}, {s_lat_of_map}, {e_lon_of_map}, {n_lat_of_map}) has zero extent"
            )

        width = self._viewport.width
        height = self._viewport.height
        scale_x = width / (e_meters - w_meters)
        # pixel rows grow downward while northing grows upward
        scale_y = -height / (n_meters - s_meters)

        translate_x = -scale_x * w_meters
        translate_y = height - scale_y * s_meters
        return AffineTransform(scale_x, scale_y, translate_x, translate_y)

    def convert_pixel_xy_to_domain_xy(
        self, pixel_x, pixel_y, w_lon_of_map, s_lat_of_map, e_lon_of_map, n_lat_of_map
    ) -> DomainPoint:
        """
        Domain coordinate under a viewport pixel (top-left = (0, 0)).

        The ``*_of_map`` bounds describe what is currently visible and are
        independent of the bounds this projection was built with.
        """
        view = self.get_viewport_transformation_params(w_lon_of_map, s_lat_of_map, e_lon_of_map, n_lat_of_map)
        x_meters, y_meters = view.inverse(pixel_x, pixel_y)
        return self.reverse_project_web_mercator_xy_to_domain_xy(x_meters, y_meters)

    def convert_domain_xy_to_pixel_xy(
        self, domain_x, domain_y, w_lon_of_map, s_lat_of_map, e_lon_of_map, n_lat_of_map
    ) -> PixelPoint:
        view = self.get_viewport_transformation_params(w_lon_of_map, s_lat_of_map, e_lon_of_map, n_lat_of_map)
        x_meters, y_meters = self.project_domain_xy_to_web_mercator_xy(domain_x, domain_y)
        return PixelPoint(*view.forward(x_meters, y_meters))
