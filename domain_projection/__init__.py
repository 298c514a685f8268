from .errors import ConfigError, InvalidDomainError, InvalidViewError, ProjectionError
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
    TileAddress,
)
from .mercator import MAX_EXTENT, SphericalMercator
from .tiles import TileBounds, tile2lat, tile2long
from .projection import Projection
from .config import DEFAULT_CONFIG, ProjectionConfig

__version__ = "0.1.0"

__all__ = [
    "Projection",
    "ProjectionConfig",
    "DEFAULT_CONFIG",
    "SphericalMercator",
    "MAX_EXTENT",
    "TileBounds",
    "tile2long",
    "tile2lat",
    "AffineTransform",
    "DomainBBox",
    "DomainExtent",
    "DomainPoint",
    "GeographicBounds",
    "LonLat",
    "MercatorPoint",
    "PixelPoint",
    "PixelViewport",
    "TileAddress",
    "ProjectionError",
    "InvalidDomainError",
    "InvalidViewError",
    "ConfigError",
]
