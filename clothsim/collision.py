"""Per-vertex storage for self-collision candidates."""

from __future__ import annotations


class SelfCollisionCache:
    """Fixed-size buffers holding up to ``max_collisions`` candidates per vertex."""

    def __init__(self, max_collisions: int, num_vertices: int) -> None:
        if max_collisions < 0 or num_vertices < 0:
            raise ValueError("max_collisions and num_vertices must be non-negative")
        self.max_collision_per_vertex = max_collisions
        self.indices = [0] * (num_vertices * max_collisions)
        self.count_scan = [0] * (num_vertices + 1)