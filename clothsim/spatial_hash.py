"""Spatial hashing of particles into a fixed-size table of grid cells."""

from __future__ import annotations

import math
from itertools import accumulate
from typing import Iterable, Sequence

from clothsim.particle import Particle, Vec2

_FLT_EPSILON = 1.1920929e-07
_U32 = 0xFFFFFFFF
_PRIME_X = 73856093
_PRIME_Y = 19349663


def get_i32_coord(coord: Vec2, spacing: float) -> Vec2:
    """Return the grid cell containing ``coord`` for cells of size ``spacing``."""
    return Vec2(float(math.floor(coord.x / spacing)), float(math.floor(coord.y / spacing)))


def hash_coord(floored_coord: Vec2, table_size: int) -> int:
    """Hash a grid cell into ``range(table_size)`` using 32-bit unsigned arithmetic."""
    x = int(floored_coord.x) & _U32
    y = int(floored_coord.y) & _U32
    value = ((x * _PRIME_X) & _U32) ^ ((y * _PRIME_Y) & _U32)
    return value % table_size


def inclusive_sum_scan(values: Iterable[int]) -> list[int]:
    """Return the running totals of ``values``."""
    return list(accumulate(values))


class SpatialHash:
    """Buckets particle indices by grid cell for neighbour lookups."""

    def __init__(self, table_size: int, cell_len: int) -> None:
        if table_size <= 0:
            raise ValueError("table_size must be positive")
        if cell_len < 0:
            raise ValueError("cell_len must be non-negative")
        self.table_size = table_size
        # _bounds[h] is the start of cell h and _bounds[h + 1] its end.
        self._bounds = [0] * (table_size + 1)
        self._entries = [0] * cell_len

    def hash_particles(self, particles: Sequence[Particle], spacing: float) -> None:
        """Rebuild the table from the current particle positions."""
        if spacing <= _FLT_EPSILON:
            raise ValueError("spacing for spatial hash must be > FLT_EPSILON")
        if len(particles) != len(self._entries):
            raise ValueError("particles and cell entries must have the same size")

        hashes = [self.hash_coord(get_i32_coord(p.position, spacing)) for p in particles]

        counts = [0] * (self.table_size + 1)
        for h in hashes:
            counts[h] += 1
        self._bounds = inclusive_sum_scan(counts)

        for index, h in enumerate(hashes):
            self._bounds[h] -= 1
            self._entries[self._bounds[h]] = index

    def hash_coord(self, coord: Vec2) -> int:
        """Hash a grid cell into this table."""
        return hash_coord(coord, self.table_size)

    def _check(self, hash_value: int) -> None:
        if not 0 <= hash_value < self.table_size:
            raise IndexError(f"hash value {hash_value} out of bounds")

    def cell_entries(self, hash_value: int) -> list[int]:
        """Return the particle indices stored in the cell ``hash_value``."""
        self._check(hash_value)
        return self._entries[self._bounds[hash_value]:self._bounds[hash_value + 1]]

    def cell_entry_count(self, hash_value: int) -> int:
        """Return how many particle indices the cell ``hash_value`` holds."""
        self._check(hash_value)
        return self._bounds[hash_value + 1] - self._bounds[hash_value]