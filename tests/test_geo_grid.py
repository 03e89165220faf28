# tests/test_geo_grid.py
"""
Tests for the fixed-size lat/lon grid index.

Covers:
- cell_key() / neighbor_keys(): cell arithmetic (floor division)
- GridIndex.build(): bucketing
- GridIndex.candidates(): 3x3 block lookup
- find_nearest(): cell-boundary correctness + full-scan fallback
"""
from __future__ import annotations

import pytest

from geolabel.core.geo.grid import GRID_CELL_SIZE, GridIndex, cell_key, neighbor_keys
from geolabel.core.geo.matcher import find_nearest
from geolabel.core.geo.records import RegionalCityPoint


def _pt(name: str, lat: float, lon: float) -> RegionalCityPoint:
    return RegionalCityPoint(name=name, latitude=lat, longitude=lon)


# ============================================================================
# Cell arithmetic
# ============================================================================

class TestCellKey:
    def test_cell_size_is_one_degree(self):
        assert GRID_CELL_SIZE == 1.0

    def test_positive_coordinates(self):
        assert cell_key(55.75, 37.62) == (55, 37)

    def test_negative_coordinates_floor_down(self):
        assert cell_key(-0.5, -179.9) == (-1, -180)

    def test_exact_boundary_belongs_to_upper_cell(self):
        assert cell_key(11.0, 20.0) == (11, 20)

    def test_neighbor_keys_is_3x3_block(self):
        keys = neighbor_keys(55.75, 37.62)
        assert len(keys) == 9
        assert set(keys) == {(55 + a, 37 + b) for a in (-1, 0, 1) for b in (-1, 0, 1)}

    def test_antimeridian_is_not_wrapped(self):
        """Known limitation: +179.9 and -179.9 are not neighbours."""
        keys = neighbor_keys(0.0, 179.9)
        assert cell_key(0.0, -179.9) not in keys


# ============================================================================
# Build / candidates
# ============================================================================

class TestGridIndex:
    def test_build_buckets_points(self):
        points = [_pt("a", 10.1, 20.1), _pt("b", 10.9, 20.9), _pt("c", 12.5, 20.5)]
        index = GridIndex.build(points)

        assert len(index) == 3
        assert index.bucket_counts() == {(10, 20): 2, (12, 20): 1}
        assert {p.name for p in index.cell((10, 20))} == {"a", "b"}

    def test_empty_cell_returns_empty_tuple(self):
        index = GridIndex.build([_pt("a", 10.1, 20.1)])
        assert index.cell((0, 0)) == ()

    def test_candidates_include_adjacent_cells(self):
        points = [
            _pt("same", 10.5, 20.5),
            _pt("north", 11.5, 20.5),
            _pt("south_west", 9.5, 19.5),
            _pt("far", 12.5, 20.5),
        ]
        index = GridIndex.build(points)

        names = {p.name for p in index.candidates(10.5, 20.5)}
        assert names == {"same", "north", "south_west"}

    def test_candidates_empty_far_from_points(self):
        index = GridIndex.build([_pt("a", 10.5, 20.5)])
        assert index.candidates(-40.0, -120.0) == []

    def test_empty_index(self):
        index = GridIndex.build([])
        assert len(index) == 0
        assert index.points == ()
        assert index.bucket_counts() == {}

    def test_build_from_generator(self):
        index = GridIndex.build(_pt(str(i), 10.0 + i * 0.1, 20.0) for i in range(5))
        assert len(index) == 5


# ============================================================================
# Nearest point
# ============================================================================

class TestFindNearest:
    def test_neighbor_across_cell_boundary_wins(self):
        """A closer point in the adjacent cell beats a same-cell point."""
        same_cell = _pt("same_cell", 10.05, 20.5)      # cell (10, 20), ~100 km away
        across_edge = _pt("across_edge", 11.02, 20.5)  # cell (11, 20), ~8 km away
        index = GridIndex.build([same_cell, across_edge])

        point, dist = find_nearest(index, 10.95, 20.5)

        assert point is across_edge
        assert dist < 10

    def test_full_scan_when_neighborhood_empty(self):
        points = [_pt("honolulu", 21.30694, -157.85834), _pt("paris", 48.85, 2.35)]
        index = GridIndex.build(points)
        assert index.candidates(0.0, -160.0) == []

        point, dist = find_nearest(index, 0.0, -160.0)

        assert point.name == "honolulu"
        assert dist > 2000

    def test_empty_index_returns_none(self):
        assert find_nearest(GridIndex.build([]), 10.0, 10.0) is None

    def test_exact_point_has_zero_distance(self):
        index = GridIndex.build([_pt("moscow", 55.75, 37.62)])
        point, dist = find_nearest(index, 55.75, 37.62)
        assert point.name == "moscow"
        assert dist == pytest.approx(0.0)
