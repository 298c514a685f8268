from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Mapping

from .errors import ConfigError
from .models import GeographicBounds
from .projection import Projection

logger = logging.getLogger(__name__)

# snake_case field -> accepted spellings
_FIELD_ALIASES = {
    "width_in_pixels": ("width_in_pixels", "widthInPixels"),
    "height_in_pixels": ("height_in_pixels", "heightInPixels"),
    "min_x_in_domain": ("min_x_in_domain", "minXInDomain"),
    "max_x_in_domain": ("max_x_in_domain", "maxXInDomain"),
    "min_y_in_domain": ("min_y_in_domain", "minYInDomain"),
    "max_y_in_domain": ("max_y_in_domain", "maxYInDomain"),
}

_BOUNDS_ALIASES = {
    "west": ("west", "wLon"),
    "south": ("south", "sLat"),
    "east": ("east", "eLon"),
    "north": ("north", "nLat"),
}


def _number(raw: Any, key: str) -> float:
    if isinstance(raw, bool):
        raise ConfigError(f"{key} must be a number, got {raw!r}")
    try:
        return float(raw)
    except (TypeError, ValueError):
        raise ConfigError(f"{key} must be a number, got {raw!r}") from None


def _lookup(data: Mapping[str, Any], names):
    for name in names:
        if name in data:
            return name, data[name]
    return None, None


@dataclass(frozen=True)
class ProjectionConfig:
    width_in_pixels: float
    height_in_pixels: float
    min_x_in_domain: float
    max_x_in_domain: float
    min_y_in_domain: float
    max_y_in_domain: float
    bounds: GeographicBounds = field(default_factory=GeographicBounds)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> ProjectionConfig:
        """
        Build a config from a dict.

        Keys may be snake_case or camelCase. Geographic bounds are optional and
        may be given either as a nested ``bounds`` object / 4-list or as flat
        ``wLon``/``sLat``/``eLon``/``nLat`` keys; any bound left out keeps its
        world default.
        """
        if not isinstance(data, Mapping):
            raise ConfigError(f"Projection config must be a mapping, got {type(data).__name__}")

        values = {}
        for fname, aliases in _FIELD_ALIASES.items():
            key, raw = _lookup(data, aliases)
            if key is None:
                raise ConfigError(f"Projection config is missing {fname!r}")
            values[fname] = _number(raw, key)

        raw_bounds = data.get("bounds", data)
        if isinstance(raw_bounds, (list, tuple)):
            if len(raw_bounds) != 4:
                raise ConfigError(f"bounds must have 4 values (west, south, east, north), got {raw_bounds!r}")
            bounds = GeographicBounds(*(_number(v, "bounds") for v in raw_bounds))
        elif isinstance(raw_bounds, Mapping):
            parts = {}
            for fname, aliases in _BOUNDS_ALIASES.items():
                key, raw = _lookup(raw_bounds, aliases)
                if key is not None:
                    parts[fname] = _number(raw, key)
            bounds = GeographicBounds(**parts)
        else:
            raise ConfigError(f"bounds must be a list or an object, got {raw_bounds!r}")

        return cls(bounds=bounds, **values)

    @classmethod
    def from_json_file(cls, path) -> ProjectionConfig:
        path = Path(path)
        logger.info("Loading projection config from %s", path)
        try:
            data = json.loads(path.read_text())
        except OSError as e:
            raise ConfigError(f"Cannot read config {path}: {e}") from e
        except json.JSONDecodeError as e:
            raise ConfigError(f"Config {path} is not valid JSON: {e}") from e
        return cls.from_mapping(data)

    def to_dict(self) -> dict:
        d = asdict(self)
        d["bounds"] = list(self.bounds)
        return d

    def build(self) -> Projection:
        return Projection(
            self.width_in_pixels,
            self.height_in_pixels,
            self.min_x_in_domain,
            self.max_x_in_domain,
            self.min_y_in_domain,
            self.max_y_in_domain,
            bounds=self.bounds,
        )


DEFAULT_CONFIG = ProjectionConfig(
    width_in_pixels=1000,
    height_in_pixels=1000,
    min_x_in_domain=0,
    max_x_in_domain=1000,
    min_y_in_domain=-1,
    max_y_in_domain=1,
)
