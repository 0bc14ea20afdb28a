"""Tests for distance, radius checks and coordinate extraction."""
import math

import pytest

from inventory.geo import (
    DEFAULT_SERVICE_AREA,
    ServiceArea,
    extract_coordinates,
    haversine_miles,
    is_within_service_radius,
)


class TestHaversine:
    """Great-circle distance in miles."""

    def test_zero_distance(self):
        assert haversine_miles(30.2241, -92.0198, 30.2241, -92.0198) == 0

    def test_lafayette_to_houston(self):
        distance = haversine_miles(30.2241, -92.0198, 29.7604, -95.3698)
        assert 190 < distance < 215

    def test_symmetric(self):
        a = haversine_miles(30.0, -92.0, 31.0, -93.0)
        b = haversine_miles(31.0, -93.0, 30.0, -92.0)
        assert math.isclose(a, b)


class TestServiceRadius:
    """Radius membership against the service area."""

    def test_center_is_inside(self):
        assert is_within_service_radius(DEFAULT_SERVICE_AREA.lat, DEFAULT_SERVICE_AREA.lon)

    def test_far_point_is_outside(self):
        assert not is_within_service_radius(29.7604, -95.3698)

    def test_boundary_counts_as_inside(self):
        area = DEFAULT_SERVICE_AREA
        lat, lon = 30.5, -92.0198
        exact = haversine_miles(area.lat, area.lon, lat, lon)
        assert is_within_service_radius(lat, lon, area, radius_miles=exact)

    def test_radius_override(self):
        assert not is_within_service_radius(30.30, -92.10, radius_miles=1.0)

    def test_custom_area(self):
        houston = ServiceArea(lat=29.7604, lon=-95.3698, radius_miles=25.0, city="Houston", state="TX")
        assert is_within_service_radius(29.76, -95.37, houston)
        assert houston.seo_suffix == "-houston-tx"

    def test_default_area_slugs(self):
        assert DEFAULT_SERVICE_AREA.city_slug == "lafayette-la"
        assert DEFAULT_SERVICE_AREA.seo_suffix == "-lafayette-la"
        assert DEFAULT_SERVICE_AREA.display_location == "Lafayette, LA"


class TestExtractCoordinates:
    """Coordinate shapes accepted from upstream documents."""

    def test_top_level_fields(self):
        assert extract_coordinates({"latitude": 30.1, "longitude": -92.1}) == (30.1, -92.1)

    def test_numeric_strings(self):
        assert extract_coordinates({"latitude": "30.1", "longitude": "-92.1"}) == (30.1, -92.1)

    def test_geojson_point_is_lon_lat(self):
        raw = {"location": {"point": {"type": "Point", "coordinates": [-92.1, 30.1]}}}
        assert extract_coordinates(raw) == (30.1, -92.1)

    def test_top_level_point(self):
        assert extract_coordinates({"point": {"coordinates": [-92.1, 30.1]}}) == (30.1, -92.1)

    def test_nested_location_fields(self):
        raw = {"location": {"latitude": 30.1, "longitude": -92.1}}
        assert extract_coordinates(raw) == (30.1, -92.1)

    def test_top_level_wins_over_nested(self):
        raw = {
            "latitude": 1.0,
            "longitude": 2.0,
            "location": {"latitude": 30.1, "longitude": -92.1},
        }
        assert extract_coordinates(raw) == (1.0, 2.0)

    def test_falls_through_unparseable_shape(self):
        raw = {
            "latitude": "abc",
            "longitude": -92.1,
            "location": {"latitude": 30.1, "longitude": -92.1},
        }
        assert extract_coordinates(raw) == (30.1, -92.1)

    @pytest.mark.parametrize(
        "raw",
        [
            {},
            None,
            "not a mapping",
            {"latitude": None, "longitude": None},
            {"latitude": "", "longitude": ""},
            {"latitude": True, "longitude": -92.1},
            {"latitude": float("nan"), "longitude": -92.1},
            {"location": {"point": {"coordinates": [-92.1]}}},
            {"location": "Lafayette"},
        ],
    )
    def test_missing_or_invalid(self, raw):
        assert extract_coordinates(raw) is None
