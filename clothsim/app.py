"""Interactive window showing a hanging cloth."""

from __future__ import annotations

import argparse
import logging
import math
import random
from dataclasses import dataclass, field

import pygame

from clothsim.cloth import Cloth, build_grid, random_gravity
from clothsim.particle import Vec2

logger = logging.getLogger(__name__)

SCREEN_WIDTH = 1280
SCREEN_HEIGHT = 720
MIN_ZOOM = 0.25
MAX_ZOOM = 3.0
ZOOM_STEP = 0.05

GRAVITY_MAGNITUDE = 981.0
GRID_COUNT = 20
PARTICLE_DIST = 20.0
PARTICLE_RADIUS = 10.0
SUBSTEP_COUNT = 6
STIFFNESS = 0.1
GRID_OFFSET = Vec2(-200.0, -250.0)

_BACKGROUND = (200, 200, 200)
_LINE_COLOUR = (0, 0, 0)
_PARTICLE_COLOUR = (230, 41, 55)


@dataclass
class Camera2D:
    """A 2D camera: world ``target`` appears at screen ``offset``."""

    target: Vec2 = field(default_factory=Vec2)
    offset: Vec2 = field(default_factory=lambda: Vec2(SCREEN_WIDTH / 2.0, SCREEN_HEIGHT / 2.0))
    rotation: float = 0.0
    zoom: float = 1.0

    def zoom_by(self, wheel: float) -> None:
        """Change zoom by a mouse-wheel amount, clamped to the allowed range."""
        self.zoom = min(MAX_ZOOM, max(MIN_ZOOM, self.zoom + wheel * ZOOM_STEP))

    def reset_zoom(self) -> None:
        self.zoom = 1.0

    def world_to_screen(self, point: Vec2) -> Vec2:
        """Map a world-space point to screen space."""
        rel = (point - self.target) * self.zoom
        angle = math.radians(self.rotation)
        c, s = math.cos(angle), math.sin(angle)
        return Vec2(rel.x * c - rel.y * s, rel.x * s + rel.y * c) + self.offset


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="clothsim", description="Hanging cloth simulation.")
    parser.add_argument("--frames", type=int, default=None, help="stop after this many frames")
    parser.add_argument("--seed", type=int, default=None, help="seed for gravity changes")
    return parser.parse_args(argv)


def _draw(surface: pygame.Surface, camera: Camera2D, cloth: Cloth) -> None:
    surface.fill(_BACKGROUND)
    screen_points = [camera.world_to_screen(p.position) for p in cloth.particles]
    for edge in cloth.edges:
        pygame.draw.line(
            surface, _LINE_COLOUR, tuple(screen_points[edge.p0]), tuple(screen_points[edge.p1])
        )
    radius = max(1, round(cloth.particle_radius * camera.zoom))
    for point in screen_points:
        pygame.draw.circle(surface, _PARTICLE_COLOUR, tuple(point), radius)


def main(argv: list[str] | None = None) -> int:
    """Open the window and run the simulation until it is closed."""
    args = _parse_args(argv)
    logging.basicConfig(level=logging.INFO)
    rng = random.Random(args.seed)

    pygame.init()
    try:
        surface = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
        pygame.display.set_caption("clothsim")
        clock = pygame.time.Clock()

        camera = Camera2D()
        gravity = Vec2(0.0, GRAVITY_MAGNITUDE)
        particles, edges = build_grid(GRID_COUNT, PARTICLE_DIST, GRID_OFFSET)
        cloth = Cloth(particles, edges, PARTICLE_RADIUS, SUBSTEP_COUNT, STIFFNESS)

        frame = 0
        running = True
        while running and (args.frames is None or frame < args.frames):
            delta_time = clock.tick(60) / 1000.0
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.MOUSEWHEEL:
                    camera.zoom_by(event.y)
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_r:
                        camera.reset_zoom()
                    elif event.key == pygame.K_SPACE:
                        gravity = random_gravity(GRAVITY_MAGNITUDE, gravity, rng)
                        logger.info("GRAVITY CHANGED: X=%.2f, Y=%.2f", gravity.x, gravity.y)

            cloth.step(delta_time, gravity)
            _draw(surface, camera, cloth)
            pygame.display.flip()
            frame += 1
    finally:
        pygame.quit()
    return 0