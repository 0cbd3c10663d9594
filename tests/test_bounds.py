"""
Tests for bounding box and centroid helpers.
"""

import pytest

from crime_hotspots.algorithms.bounds import Bounds, Center, calculate_bounds, get_center
from crime_hotspots.config.hotspot_config import GridConfig


class TestCalculateBounds:

    def test_empty_returns_default_region(self):
        assert calculate_bounds([]) == Bounds(min_lat=28.4, max_lat=28.9, min_lng=76.8, max_lng=77.4)

    def test_empty_with_custom_default(self):
        mumbai = GridConfig.create_mumbai_config()
        bounds = calculate_bounds([], mumbai)
        assert (bounds.min_lat, bounds.max_lat) == (18.9, 19.3)

    def test_single_record_is_degenerate_box(self, record_factory):
        bounds = calculate_bounds([record_factory(latitude=28.6, longitude=77.2)])
        assert bounds == Bounds(min_lat=28.6, max_lat=28.6, min_lng=77.2, max_lng=77.2)

    def test_spans_all_records(self, sample_records):
        bounds = calculate_bounds(sample_records)
        assert bounds.min_lat == 28.5355
        assert bounds.max_lat == 28.6100
        assert bounds.min_lng == 77.3100
        assert bounds.max_lng == 77.3920

    def test_folium_bounds(self, sample_records):
        bounds = calculate_bounds(sample_records)
        assert bounds.as_folium_bounds() == [[28.5355, 77.3100], [28.6100, 77.3920]]


class TestGetCenter:

    def test_empty_has_no_center(self):
        assert get_center([]) is None

    def test_single_record(self, record_factory):
        assert get_center([record_factory(latitude=28.6, longitude=77.2)]) == Center(lat=28.6, lng=77.2)

    def test_mean_of_coordinates(self, record_factory):
        records = [
            record_factory("A", latitude=28.0, longitude=77.0),
            record_factory("B", latitude=29.0, longitude=78.0),
        ]
        center = get_center(records)
        assert center.as_tuple() == (pytest.approx(28.5), pytest.approx(77.5))
