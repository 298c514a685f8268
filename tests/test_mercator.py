import numpy as np
import pytest

from domain_projection import mercator
from domain_projection.mercator import MAX_EXTENT, SphericalMercator
from domain_projection.models import MAX_LATITUDE, LonLat, MercatorPoint


class TestForward:
    def test_origin(self) -> None:
        x, y = mercator.forward(0, 0)
        assert x == pytest.approx(0.0, abs=1e-6)
        assert y == pytest.approx(0.0, abs=1e-6)

    def test_world_corners_hit_max_extent(self) -> None:
        assert mercator.forward(180, MAX_LATITUDE) == pytest.approx((MAX_EXTENT, MAX_EXTENT), abs=1e-3)
        assert mercator.forward(-180, -MAX_LATITUDE) == pytest.approx((-MAX_EXTENT, -MAX_EXTENT), abs=1e-3)

    @pytest.mark.parametrize("lat", [90, 89.9, 120])
    def test_latitude_beyond_mercator_band_lands_on_world_edge(self, lat) -> None:
        _, north = mercator.forward(0, lat)
        _, south = mercator.forward(0, -lat)
        assert north == pytest.approx(MAX_EXTENT, abs=1e-3)
        assert south == pytest.approx(-MAX_EXTENT, abs=1e-3)

    def test_returns_named_point_of_floats(self) -> None:
        p = mercator.forward(10, 20)
        assert isinstance(p, MercatorPoint)
        assert isinstance(p.x, float)
        assert isinstance(p.y, float)
        assert p.x > 0 and p.y > 0

    @pytest.mark.parametrize("lon,expected", [(181, MAX_EXTENT), (360, MAX_EXTENT), (-181, -MAX_EXTENT)])
    def test_longitude_past_antimeridian_lands_on_world_edge(self, lon, expected) -> None:
        x, y = mercator.forward(lon, 0)
        assert x == pytest.approx(expected, abs=1e-3)
        assert y == pytest.approx(0.0, abs=1e-6)


class TestInverse:
    def test_world_corner(self) -> None:
        lon, lat = mercator.inverse(MAX_EXTENT, MAX_EXTENT)
        assert lon == pytest.approx(180.0, abs=1e-7)
        assert lat == pytest.approx(MAX_LATITUDE, abs=1e-7)

    @pytest.mark.parametrize("lon,lat", [(0, 0), (13.4, 52.5), (-122.4, 37.8), (151.2, -33.9)])
    def test_round_trip(self, lon, lat) -> None:
        result = mercator.inverse(*mercator.forward(lon, lat))
        assert isinstance(result, LonLat)
        assert result.lon == pytest.approx(lon, abs=1e-9)
        assert result.lat == pytest.approx(lat, abs=1e-9)

    def test_meters_past_world_edge_stay_on_antimeridian(self) -> None:
        lon, lat = mercator.inverse(1.5 * MAX_EXTENT, 3 * MAX_EXTENT)
        assert lon == pytest.approx(180.0, abs=1e-7)
        assert lat == pytest.approx(MAX_LATITUDE, abs=1e-7)
        lon, _ = mercator.inverse(-1.5 * MAX_EXTENT, 0)
        assert lon == pytest.approx(-180.0, abs=1e-7)


class TestVectorised:
    def test_arrays_match_scalars(self) -> None:
        lons = np.array([-170.0, -10.0, 0.0, 45.0, 179.0])
        lats = np.array([-80.0, -5.0, 0.0, 30.0, 95.0])
        xs, ys = mercator.forward(lons, lats)
        assert isinstance(xs, np.ndarray)
        for i, (lon, lat) in enumerate(zip(lons, lats)):
            x, y = mercator.forward(lon, lat)
            assert xs[i] == pytest.approx(x)
            assert ys[i] == pytest.approx(y)

    def test_inverse_accepts_lists(self) -> None:
        lons, lats = mercator.inverse([0.0, MAX_EXTENT], [0.0, 0.0])
        np.testing.assert_allclose(lons, [0.0, 180.0], atol=1e-7)
        np.testing.assert_allclose(lats, [0.0, 0.0], atol=1e-7)

    def test_array_lon_with_scalar_lat(self) -> None:
        xs, ys = mercator.forward(np.array([0.0, 90.0, 200.0]), 0.0)
        np.testing.assert_allclose(xs, [0.0, MAX_EXTENT / 2, MAX_EXTENT], atol=1e-3)
        np.testing.assert_allclose(ys, [0.0, 0.0, 0.0], atol=1e-6)

    def test_scalar_lon_with_array_lat(self) -> None:
        xs, ys = mercator.forward(45.0, [-90.0, 0.0, 90.0])
        np.testing.assert_allclose(xs, [MAX_EXTENT / 4] * 3, atol=1e-3)
        np.testing.assert_allclose(ys, [-MAX_EXTENT, 0.0, MAX_EXTENT], atol=1e-3)

    def test_inverse_broadcasts_scalar_against_array(self) -> None:
        lons, lats = mercator.inverse(MAX_EXTENT, np.array([0.0, MAX_EXTENT]))
        assert lons.shape == (2,)
        np.testing.assert_allclose(lons, [180.0, 180.0], atol=1e-7)
        np.testing.assert_allclose(lats, [0.0, MAX_LATITUDE], atol=1e-7)


def test_adapter_instances_are_independent() -> None:
    sm = SphericalMercator()
    assert sm.max_extent == MAX_EXTENT
    assert sm.forward(45, 45) == pytest.approx(mercator.forward(45, 45))
