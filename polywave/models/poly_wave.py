# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0
#
# Closed-outline wave ring model

import math

import numpy as np

from ..geometry import Point
from ..pointer import MOUSE_RADIUS, MOUSE_STRENGTH
from ..sim.model import DAMPING, ELASTICITY, MASS, Model, validate_constants
from ..sim.particle import SpringParticle
from ..solvers.poly_wave import SolverPolyWave


RESOLUTION = 50.0  # Target spacing between subdivided particles

COLORS = [
    "#d16060",
    "#edb07b",
    "#7bc4a2",
    "#343a5b",
    "#9b7bad",
    "#a05065",
]

# Largest |coordinate| representable in the float32 particle arrays
COORD_LIMIT = float(np.finfo(np.float32).max)

# Upper bound on particles per ring
MAX_PARTICLES = 1_000_000

# Per-ring parameter ranges used by create_waves
WAVE_ELASTICITY_RANGE = (0.1, 0.2)
WAVE_DAMPING_RANGE = (0.88, 0.9)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def normalize_outline(outline):
    """
    Convert outline entries to a vertex array and spring flags.

    Entries may be ``(x, y)``, ``(x, y, is_spring)`` or ``(Point, is_spring)``.

    Returns:
        (vertices, springs): float64 array of shape [m, 2] and a list of m bools

    Raises:
        ValueError: fewer than 2 entries, or a coordinate that is not finite in float32
    """
    vertices = []
    springs = []
    for entry in outline:
        if isinstance(entry[0], Point):
            point, is_spring = entry[0], (entry[1] if len(entry) > 1 else False)
            x, y = point.x, point.y
        else:
            x, y = entry[0], entry[1]
            is_spring = entry[2] if len(entry) > 2 else False
        vertices.append((float(x), float(y)))
        springs.append(bool(is_spring))

    if len(vertices) < 2:
        raise ValueError(f"Outline needs at least 2 vertices (got {len(vertices)})")

    vertices = np.array(vertices, dtype=np.float64)
    if not np.all(np.isfinite(vertices)):
        raise ValueError("Outline vertices must have finite coordinates")
    # Particle arrays are float32
    if np.any(np.abs(vertices) > COORD_LIMIT):
        raise ValueError(f"Outline coordinates must stay within +-{COORD_LIMIT:.3g}")

    return vertices, springs


class PolyWaveModel(Model):
    """
    Ring of spring-anchored particles built from a closed polygon outline.

    Each consecutive vertex pair (v_i, v_i+1) contributes:
        - spring segment (v_i flagged): round(|v_i+1 - v_i| / resolution)
          evenly spaced particles at k = 1..count along the segment; the last
          one sits on v_i+1 and is fixed, the others are free
        - plain segment: one fixed particle on v_i+1

    The outline is treated as closed, so the caller repeats the first vertex
    as the last entry. A spring chain therefore starts right after the fixed
    particle emitted by the previous segment and ends on its own fixed
    endpoint, and every free particle is pulled by its ring predecessor and
    successor (with wraparound).

    Args:
        outline: Sequence of (x, y, is_spring) entries, first vertex repeated last
        color: Fill color used by renderers
        resolution: Target particle spacing along spring segments. Default 50.
        elasticity: Anchor spring coefficient in (0, 1]. Default 0.05.
        damping: Velocity retention per frame in [0, 1]. Default 0.4.
        mass: Particle mass (> 0). Default 10.
        neighbor_stiffness: Scale of the neighbor pull. Default 1.0 (unscaled).
        device: Warp device ('cpu' or 'cuda')
        verbose: Print a summary line after construction

    Example:
        >>> outline = [(0, 100, True), (200, 100), (200, 200), (0, 200), (0, 100)]
        >>> ring = PolyWaveModel(outline, resolution=50.0)
        >>> ring.step(pointer)
        >>> positions = ring.boundary()
    """

    def __init__(self, outline, color: str = COLORS[0], resolution: float = RESOLUTION,
                 elasticity: float = ELASTICITY, damping: float = DAMPING, mass: float = MASS,
                 neighbor_stiffness: float = 1.0, device='cpu', verbose: bool = False):

        super().__init__(device=device)

        validate_constants(mass, elasticity, damping, neighbor_stiffness)
        if not (math.isfinite(resolution) and resolution > 0.0):
            raise ValueError(f"resolution must be a positive finite number (got {resolution})")

        self.vertices, self.spring_segments = normalize_outline(outline)
        self.color = color
        self.resolution = float(resolution)
        self.elasticity = float(elasticity)
        self.damping = float(damping)
        self.mass = float(mass)
        self.neighbor_stiffness = float(neighbor_stiffness)
        self._attractors_set = False

        positions, fixed = self.build()
        self._setup_particles(positions, fixed, self.mass, self.elasticity, self.damping)
        self.set_attractors()

        self.current_state = self.state()
        self.solver = SolverPolyWave(self)

        if verbose:
            n_free = self.particle_count - int(np.sum(fixed))
            print(f"✓ Created wave ring: {self.particle_count} particles "
                  f"({n_free} free, {self.particle_count - n_free} fixed)")

    def build(self):
        """
        Subdivide the outline into particle positions and fixed flags.

        Returns:
            (positions, fixed): float64 array [n, 2] and bool array [n]

        Raises:
            ValueError: the resolution is too fine for a segment, or the ring
                would exceed MAX_PARTICLES
        """
        counts = []
        for i in range(len(self.vertices) - 1):
            if not self.spring_segments[i]:
                counts.append(1)
                continue
            d = self.vertices[i + 1] - self.vertices[i]
            segments = float(np.hypot(d[0], d[1])) / self.resolution
            if not math.isfinite(segments):
                raise ValueError(f"Segment {i} cannot be subdivided at resolution {self.resolution}")
            # At least one particle so the segment end vertex survives zero-length edges
            counts.append(max(1, round_half_up(min(segments, MAX_PARTICLES + 1.0))))

        if sum(counts) > MAX_PARTICLES:
            raise ValueError(f"Outline at resolution {self.resolution} needs more than "
                             f"{MAX_PARTICLES} particles")

        positions = []
        fixed = []

        for i in range(len(self.vertices) - 1):
            p1 = self.vertices[i]
            p2 = self.vertices[i + 1]

            if self.spring_segments[i]:
                count = counts[i]
                step = (p2 - p1) / count
                for k in range(1, count + 1):
                    positions.append(p1 + step * k)
                    fixed.append(k == count)
            else:
                positions.append(p2.copy())
                fixed.append(True)

        return np.array(positions, dtype=np.float64).reshape(-1, 2), np.array(fixed, dtype=bool)

    def set_attractors(self):
        """
        Wire every free particle to its ring predecessor and successor.

        Raises:
            RuntimeError: attractors were already wired for this ring
        """
        if self._attractors_set:
            raise RuntimeError("Attractors are already wired for this ring")

        n = self.particle_count
        fixed = self.fixed_mask()
        table = np.full((n, 2), -1, dtype=np.int32)

        for i in range(n):
            if fixed[i]:
                continue
            prev_idx = (i - 1) % n
            next_idx = (i + 1) % n
            if prev_idx != i:
                table[i, 0] = prev_idx
            if next_idx != i:
                table[i, 1] = next_idx

        self.attractor_indices.assign(table.reshape(-1))
        self._attractors_set = True

    @property
    def free_count(self) -> int:
        return int(np.count_nonzero(~self.fixed_mask()))

    @property
    def particles(self) -> list:
        return [SpringParticle(self, self.current_state, i) for i in range(self.particle_count)]

    def particle(self, index: int) -> SpringParticle:
        return SpringParticle(self, self.current_state, index)

    def step(self, pointer, radius: float = MOUSE_RADIUS, strength: float = MOUSE_STRENGTH):
        """Advance every particle by one frame (forces for all, then integration for all)."""
        self.solver.step(self.current_state, pointer, radius, strength)

    def boundary(self) -> np.ndarray:
        """Snapshot of current particle positions in ring order, shape [n, 2]."""
        return self.current_state.positions()

    def reset(self):
        """Return every particle to its anchor with zero velocity and force."""
        self.current_state.rest_at(self.particle_q)


def create_waves(amount: int, bounds, seed=None, resolution: float = RESOLUTION,
                 colors=None, padding: float = 0.0, device='cpu', verbose: bool = False):
    """
    Build a stack of half-screen waves.

    Every wave covers the lower half of ``bounds`` with a spring top edge and
    draws its elasticity and damping uniformly from WAVE_ELASTICITY_RANGE and
    WAVE_DAMPING_RANGE. Colors cycle through ``colors``.

    Args:
        amount: Number of waves
        bounds: Bounds of the canvas
        seed: Seed for the numpy random generator
        resolution: Particle spacing along the spring edge
        colors: Palette (default: COLORS)
        padding: Grow ``bounds`` by this much on every side first, so the fixed
            corners and chain ends sit outside a canvas of size ``bounds``
        device: Warp device
        verbose: Print one line per wave

    Returns:
        list of PolyWaveModel
    """
    colors = colors or COLORS
    rng = np.random.default_rng(seed)

    if padding:
        bounds = bounds.offset_outer(padding)
    x0, y0, w, h = bounds.params
    mid_y = y0 + h / 2.0
    outline = [
        (x0, mid_y, True),
        (x0 + w, mid_y, False),
        (x0 + w, y0 + h, False),
        (x0, y0 + h, False),
    ]
    outline = outline + [outline[0]]

    waves = []
    for i in range(amount):
        waves.append(PolyWaveModel(
            outline,
            color=colors[i % len(colors)],
            resolution=resolution,
            elasticity=float(rng.uniform(*WAVE_ELASTICITY_RANGE)),
            damping=float(rng.uniform(*WAVE_DAMPING_RANGE)),
            device=device,
            verbose=verbose,
        ))

    return waves
