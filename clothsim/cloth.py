"""Position-based cloth simulation with distance and self-collision constraints."""

from __future__ import annotations

import math
import random
from typing import Sequence

from clothsim.particle import Edge, Particle, Vec2
from clothsim.spatial_hash import SpatialHash, get_i32_coord

_EPSILON = 0.0001
_NEIGHBOUR_OFFSETS = (
    (-1, -1), (0, -1), (1, -1),
    (-1, 0), (0, 0), (1, 0),
    (-1, 1), (0, 1), (1, 1),
)


def build_grid(count: int, spacing: float, offset: Vec2) -> tuple[list[Particle], list[Edge]]:
    """Build a ``count`` x ``count`` grid of particles joined by structural edges.

    The particle in the middle of the top row is pinned.
    """
    if count < 1:
        raise ValueError("count must be at least 1")

    particles = [
        Particle(Vec2(float(x), float(y)) * spacing + offset, 1.0)
        for y in range(count)
        for x in range(count)
    ]
    particles[count // 2].inv_mass = 0.0

    edges: list[Edge] = []
    for y in range(count - 1):
        for x in range(count - 1):
            start = x + count * y
            edges.append(Edge(start, start + 1, spacing))
            edges.append(Edge(start, x + count * (y + 1), spacing))

    last_row = count * (count - 1)
    edges.extend(Edge(last_row + x, last_row + x + 1, spacing) for x in range(count - 1))

    edges.extend(
        Edge(y * count + count - 1, (y + 1) * count + count - 1, spacing)
        for y in range(count - 1)
    )
    return particles, edges


def random_gravity(magnitude: float, gravity: Vec2, rng: random.Random) -> Vec2:
    """Return ``gravity`` with its x component set from a random direction."""
    angle = math.radians(rng.uniform(0.0, 360.0))
    return Vec2(magnitude * math.cos(angle), gravity.y)


class Cloth:
    """A set of particles held together by edges and kept from overlapping."""

    def __init__(
        self,
        particles: Sequence[Particle],
        edges: Sequence[Edge],
        particle_radius: float,
        substep_count: int,
        stiffness: float,
    ) -> None:
        if substep_count < 1:
            raise ValueError("substep_count must be at least 1")
        if not particles:
            raise ValueError("a cloth needs at least one particle")
        self.particles = list(particles)
        self.edges = list(edges)
        self.particle_radius = particle_radius
        self.particle_diameter = particle_radius * 2.0
        self.substep_count = substep_count
        self.stiffness = stiffness
        self.spatial_hash = SpatialHash(5 * len(self.particles), len(self.particles))

    def step(self, delta_time: float, gravity: Vec2) -> None:
        """Advance the simulation by ``delta_time`` seconds in equal substeps."""
        sub_dt = delta_time / self.substep_count
        if sub_dt <= _EPSILON:
            return

        self.spatial_hash.hash_particles(self.particles, self.particle_diameter)
        for _ in range(self.substep_count):
            for particle in self.particles:
                particle.apply_gravity(gravity, sub_dt)
                particle.apply_velocity(sub_dt)
            self.solve_distance_constraints()
            self.solve_collisions(self.find_collision_pairs())
            for particle in self.particles:
                particle.set_velocity(sub_dt)

    def solve_distance_constraints(self) -> None:
        """Pull every edge's endpoints towards the edge's rest distance."""
        for edge in self.edges:
            p0 = self.particles[edge.p0]
            p1 = self.particles[edge.p1]
            w_sum = p0.inv_mass + p1.inv_mass
            if w_sum <= _EPSILON:
                continue
            diff = p0.position - p1.position
            dist = diff.length()
            if dist < _EPSILON:
                continue
            n = diff / dist
            corr = dist - edge.distance
            p0.position = p0.position - n * (corr * p0.inv_mass / w_sum * self.stiffness)
            p1.position = p1.position + n * (corr * p1.inv_mass / w_sum * self.stiffness)

    def find_collision_pairs(self) -> list[tuple[int, int]]:
        """Return index pairs ``(p, q)`` with ``p < q`` whose particles overlap."""
        min_dist_sq = self.particle_diameter * self.particle_diameter
        pairs: list[tuple[int, int]] = []
        for p_idx, particle in enumerate(self.particles):
            cell = get_i32_coord(particle.position, self.particle_diameter)
            for dx, dy in _NEIGHBOUR_OFFSETS:
                neighbour = Vec2(cell.x + dx, cell.y + dy)
                bucket = self.spatial_hash.hash_coord(neighbour)
                for q_idx in self.spatial_hash.cell_entries(bucket):
                    if p_idx >= q_idx:
                        continue
                    other = self.particles[q_idx]
                    if (particle.position - other.position).length_squared() < min_dist_sq:
                        pairs.append((p_idx, q_idx))
        return pairs

    def solve_collisions(self, pairs: Sequence[tuple[int, int]]) -> None:
        """Push each overlapping pair apart to exactly one diameter."""
        for i, j in pairs:
            p0 = self.particles[i]
            p1 = self.particles[j]
            w_sum = p0.inv_mass + p1.inv_mass
            if w_sum <= _EPSILON:
                continue
            diff = p0.position - p1.position
            dist = diff.length()
            if dist > self.particle_diameter or dist == 0.0:
                continue
            n = diff / dist
            corr = dist - self.particle_diameter
            p0.position = p0.position - n * (corr * p0.inv_mass / w_sum)
            p1.position = p1.position + n * (corr * p1.inv_mass / w_sum)