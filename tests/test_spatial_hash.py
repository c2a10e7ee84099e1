import math

import pytest

from clothsim.particle import Particle, Vec2
from clothsim.spatial_hash import (
    SpatialHash,
    get_i32_coord,
    hash_coord,
    inclusive_sum_scan,
)


def _grid(count, spacing):
    return [
        Particle(Vec2(x * spacing - 200.0, y * spacing - 250.0), 1.0)
        for y in range(count)
        for x in range(count)
    ]


def test_get_i32_coord_pinned_example():
    assert get_i32_coord(Vec2(25.0, -5.0), 10.0) == Vec2(2.0, -1.0)


@pytest.mark.parametrize(
    "point", [Vec2(0.0, 0.0), Vec2(-0.1, 19.99), Vec2(-200.0, -250.0), Vec2(123.4, -56.7)]
)
def test_get_i32_coord_cell_contains_point(point):
    spacing = 20.0
    cell = get_i32_coord(point, spacing)
    assert cell.x == math.floor(cell.x) and cell.y == math.floor(cell.y)
    assert cell.x * spacing <= point.x < (cell.x + 1) * spacing
    assert cell.y * spacing <= point.y < (cell.y + 1) * spacing


def test_hash_coord_uses_source_primes():
    table = 100_000_000
    assert hash_coord(Vec2(0.0, 0.0), table) == 0
    assert hash_coord(Vec2(1.0, 0.0), table) == 73856093
    assert hash_coord(Vec2(0.0, 1.0), table) == 19349663


def test_hash_coord_wraps_negative_coordinates():
    table = 2**32
    assert hash_coord(Vec2(-1.0, 0.0), table) == 2**32 - 73856093


@pytest.mark.parametrize("coord", [Vec2(-3.0, 7.0), Vec2(1000.0, -1000.0), Vec2(5.0, 5.0)])
def test_hash_coord_within_table(coord):
    assert 0 <= hash_coord(coord, 2000) < 2000


def test_inclusive_sum_scan_pinned():
    assert inclusive_sum_scan([1, 2, 3]) == [1, 3, 6]


def test_inclusive_sum_scan_empty():
    assert inclusive_sum_scan([]) == []


def test_inclusive_sum_scan_differences_recover_input():
    values = [4, 0, 7, 1, 1, 9]
    scanned = inclusive_sum_scan(values)
    assert scanned[-1] == sum(values)
    assert [b - a for a, b in zip([0] + scanned, scanned)] == values


def test_method_hash_coord_matches_function():
    table = SpatialHash(2000, 0)
    assert table.hash_coord(Vec2(-4.0, 9.0)) == hash_coord(Vec2(-4.0, 9.0), 2000)


def test_hash_particles_indexes_every_particle_once():
    particles = _grid(20, 20.0)
    table = SpatialHash(5 * len(particles), len(particles))
    table.hash_particles(particles, 20.0)
    found = [i for h in range(table.table_size) for i in table.cell_entries(h)]
    assert sorted(found) == list(range(len(particles)))
    assert sum(table.cell_entry_count(h) for h in range(table.table_size)) == len(particles)


def test_particles_found_in_their_own_cell():
    particles = _grid(6, 13.0)
    table = SpatialHash(97, len(particles))
    table.hash_particles(particles, 20.0)
    for index, p in enumerate(particles):
        h = table.hash_coord(get_i32_coord(p.position, 20.0))
        assert index in table.cell_entries(h)


def test_entry_count_matches_entries():
    particles = _grid(5, 7.0)
    table = SpatialHash(31, len(particles))
    table.hash_particles(particles, 20.0)
    for h in range(table.table_size):
        assert table.cell_entry_count(h) == len(table.cell_entries(h))


def test_shared_cell_lists_later_particles_first():
    particles = [Particle(Vec2(1.0, 1.0), 1.0), Particle(Vec2(2.0, 3.0), 1.0)]
    table = SpatialHash(10, 2)
    table.hash_particles(particles, 20.0)
    h = table.hash_coord(Vec2(0.0, 0.0))
    assert table.cell_entries(h) == [1, 0]


def test_rehash_after_moving_particle():
    particles = [Particle(Vec2(1.0, 1.0), 1.0), Particle(Vec2(2.0, 3.0), 1.0)]
    table = SpatialHash(1000, 2)
    table.hash_particles(particles, 20.0)
    particles[1].position = Vec2(500.0, 500.0)
    table.hash_particles(particles, 20.0)
    assert table.cell_entries(table.hash_coord(Vec2(0.0, 0.0))) == [0]
    moved = table.hash_coord(get_i32_coord(particles[1].position, 20.0))
    assert 1 in table.cell_entries(moved)


def test_empty_cell_has_no_entries():
    particles = [Particle(Vec2(1.0, 1.0), 1.0)]
    table = SpatialHash(10, 1)
    table.hash_particles(particles, 20.0)
    occupied = table.hash_coord(Vec2(0.0, 0.0))
    others = [h for h in range(10) if h != occupied]
    assert all(table.cell_entries(h) == [] for h in others)
    assert all(table.cell_entry_count(h) == 0 for h in others)


@pytest.mark.parametrize("spacing", [0.0, -1.0, 1e-9])
def test_hash_particles_rejects_tiny_spacing(spacing):
    table = SpatialHash(10, 1)
    with pytest.raises(ValueError):
        table.hash_particles([Particle(Vec2(), 1.0)], spacing)


def test_hash_particles_rejects_size_mismatch():
    table = SpatialHash(10, 3)
    with pytest.raises(ValueError):
        table.hash_particles([Particle(Vec2(), 1.0)], 20.0)


@pytest.mark.parametrize("hash_value", [-1, 10, 11])
def test_out_of_range_hash_rejected(hash_value):
    table = SpatialHash(10, 0)
    with pytest.raises(IndexError):
        table.cell_entries(hash_value)
    with pytest.raises(IndexError):
        table.cell_entry_count(hash_value)


def test_invalid_table_size_rejected():
    with pytest.raises(ValueError):
        SpatialHash(0, 1)