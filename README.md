# clothsim

A small interactive 2D cloth simulation. A 20 × 20 grid of particles is joined
by distance constraints along its rows and columns, pinned at the middle of the
top row, and pulled down by gravity. The solver uses position-based dynamics
with six substeps per frame. A spatial hash finds overlapping particles so
they are pushed apart.

## Installing

```
pip install .
```

This installs `pygame`, which draws the window.

## Running

```
clothsim
```

Options:

- `--frames N`: close the window after N frames.
- `--seed N`: seed the random generator used for gravity changes.

Controls in the window:

- **Mouse wheel**: zoom in and out. Zoom stays between 0.25 and 3.0.
- **R**: reset the zoom to 1.0.
- **Space**: pick a random angle and set the sideways part of gravity to
  981 × cos(angle); the downward part is left as it is. The new gravity is
  logged.
- **Escape** or closing the window: quit.

## Using the library

The simulation runs without a window:

```python
from clothsim.cloth import Cloth, build_grid
from clothsim.particle import Vec2

# build_grid pins the particle in the middle of the top row.
particles, edges = build_grid(20, 20.0, Vec2(-200.0, -250.0))

cloth = Cloth(particles, edges, particle_radius=10.0, substep_count=6, stiffness=0.1)
for _ in range(60):
    cloth.step(1 / 60, Vec2(0.0, 981.0))

print(cloth.particles[0].position)
```

A particle with `inv_mass` of zero does not move under gravity. A call to
`Cloth.step` with a time per substep of 0.0001 seconds or less does nothing.

Modules:

- `clothsim.particle`: `Vec2`, `Particle` and `Edge`.
- `clothsim.spatial_hash`: `SpatialHash` with its helpers `get_i32_coord`,
  `hash_coord` and `inclusive_sum_scan`.
- `clothsim.collision`: `SelfCollisionCache`, a set of zeroed per-vertex
  buffers; the solver in `clothsim.cloth` does not use it.
- `clothsim.cloth`: `Cloth`, `build_grid` and `random_gravity`.
- `clothsim.app`: `Camera2D` and the `main` entry point for the window.

## Tests

```
pip install .[test]
pytest
```