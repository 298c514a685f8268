"""
Shared fixtures: the projection used throughout is the classic demo setup,
a 1000x1000 viewport over the domain [0, 1000] x [-1, 1] stretched across the
whole Mercator-safe world.
"""
import pytest

from domain_projection import Projection
from domain_projection.mercator import MAX_EXTENT
from domain_projection.models import MAX_LATITUDE


@pytest.fixture
def projection() -> Projection:
    return Projection(
        width_in_pixels=1000,
        height_in_pixels=1000,
        min_x_in_domain=0,
        max_x_in_domain=1000,
        min_y_in_domain=-1,
        max_y_in_domain=1,
    )


@pytest.fixture
def max_extent() -> float:
    return MAX_EXTENT


@pytest.fixture
def max_latitude() -> float:
    return MAX_LATITUDE
