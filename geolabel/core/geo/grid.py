# geolabel/core/geo/grid.py
"""
Fixed-size lat/lon grid for approximate nearest-neighbour lookup.

Points are bucketed by ``(floor(lat / cell), floor(lon / cell))``.  A query
looks at its own cell and the eight around it, because the true nearest
point of a query near a cell edge may sit in the neighbouring cell.

Known limitation: longitudes are not wrapped, so points at +179.9° and
-179.9° land in distant cells even though they are geographically close.
"""
from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Generic, Protocol, TypeVar

__all__ = [
    "GRID_CELL_SIZE",
    "CellKey",
    "GridIndex",
    "cell_key",
    "neighbor_keys",
]

GRID_CELL_SIZE = 1.0  # degrees

CellKey = tuple[int, int]


class HasCoordinates(Protocol):
    @property
    def latitude(self) -> float: ...

    @property
    def longitude(self) -> float: ...


P = TypeVar("P", bound=HasCoordinates)


def cell_key(lat: float, lon: float, cell_size: float = GRID_CELL_SIZE) -> CellKey:
    return math.floor(lat / cell_size), math.floor(lon / cell_size)


def neighbor_keys(lat: float, lon: float, cell_size: float = GRID_CELL_SIZE) -> list[CellKey]:
    """The 3x3 block of cell keys centred on the query point's cell."""
    lat_cell, lon_cell = cell_key(lat, lon, cell_size)
    return [
        (lat_cell + d_lat, lon_cell + d_lon)
        for d_lat in (-1, 0, 1)
        for d_lon in (-1, 0, 1)
    ]


class GridIndex(Generic[P]):
    """Read-only grid of points, built once by :meth:`build`."""

    def __init__(
        self,
        points: tuple[P, ...],
        cells: Mapping[CellKey, tuple[P, ...]],
        cell_size: float = GRID_CELL_SIZE,
    ):
        self._points = points
        self._cells = MappingProxyType(dict(cells))
        self._cell_size = cell_size

    @classmethod
    def build(cls, points: Iterable[P], cell_size: float = GRID_CELL_SIZE) -> "GridIndex[P]":
        """Bucket every point in a single pass."""
        buckets: dict[CellKey, list[P]] = {}
        stored: list[P] = []
        for point in points:
            stored.append(point)
            key = cell_key(point.latitude, point.longitude, cell_size)
            buckets.setdefault(key, []).append(point)
        return cls(
            tuple(stored),
            {key: tuple(bucket) for key, bucket in buckets.items()},
            cell_size,
        )

    @property
    def points(self) -> tuple[P, ...]:
        return self._points

    @property
    def cell_size(self) -> float:
        return self._cell_size

    def __len__(self) -> int:
        return len(self._points)

    def cell(self, key: CellKey) -> tuple[P, ...]:
        return self._cells.get(key, ())

    def candidates(self, lat: float, lon: float) -> list[P]:
        """Points in the 3x3 block of cells around ``(lat, lon)``."""
        found: list[P] = []
        for key in neighbor_keys(lat, lon, self._cell_size):
            found.extend(self._cells.get(key, ()))
        return found

    def bucket_counts(self) -> dict[CellKey, int]:
        return {key: len(bucket) for key, bucket in self._cells.items()}
