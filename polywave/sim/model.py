# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0
#
# 2D Model class for spring-anchored wave rings

import math

import numpy as np
import warp as wp

from .state import State


# Default per-particle constants
MASS = 10.0
ELASTICITY = 0.05
DAMPING = 0.4

# Neighbor coupling coefficient that the reference animation defines but never
# multiplies into the neighbor term; models default to an unscaled coupling of 1.0.
ADJACENT_SPRING_CONSTANT = 0.12


def validate_constants(mass: float, elasticity: float, damping: float, neighbor_stiffness: float = 1.0):
    """
    Reject particle constants that would make the integration diverge or never decay.

    The update ``v = damping * v - (k / mass) * x; x += v`` stays bounded only
    while ``k / mass < 2 * (1 + damping)``. A free particle feels its anchor
    spring plus two neighbor pulls, and the stiffest ring mode doubles the
    neighbor term, so ``k`` is bounded by ``elasticity + 4 * neighbor_stiffness``.

    Raises:
        ValueError: mass <= 0, elasticity outside (0, 1], damping outside [0, 1],
            negative neighbor_stiffness, or a combination outside the stable range
    """
    if not (math.isfinite(mass) and mass > 0.0):
        raise ValueError(f"mass must be a positive finite number (got {mass})")
    if not (0.0 < elasticity <= 1.0):
        raise ValueError(f"elasticity must lie in (0, 1] (got {elasticity})")
    if not (0.0 <= damping <= 1.0):
        raise ValueError(f"damping must lie in [0, 1] (got {damping})")
    if not (math.isfinite(neighbor_stiffness) and neighbor_stiffness >= 0.0):
        raise ValueError(f"neighbor_stiffness must be finite and >= 0 (got {neighbor_stiffness})")

    stiffness = elasticity + 4.0 * neighbor_stiffness
    if stiffness / mass >= 2.0 * (1.0 + damping):
        raise ValueError(
            f"Unstable constants: (elasticity + 4 * neighbor_stiffness) / mass = {stiffness / mass:.3f} "
            f"must stay below 2 * (1 + damping) = {2.0 * (1.0 + damping):.3f}; increase mass")


class Model:
    """
    Represents the static definition of a set of spring-anchored particles.

    Particles are stored structure-of-arrays style in Warp arrays and are
    referred to by index. Neighbor coupling is expressed as an index table,
    so particles never hold references to each other.

    Key Features:
        - Rest (anchor) positions, set once and never mutated
        - Per-particle mass, elasticity, damping and fixed flag
        - Attractor table with two slots (predecessor, successor) per particle
    """

    def __init__(self, device='cpu'):
        """
        Initialize an empty Model.

        Args:
            device (str): Warp device on which arrays are allocated ('cpu' or 'cuda')
        """
        wp.init()
        self.device = wp.get_device(device)

        # Particle properties
        self.particle_q = None              # Anchor (rest) positions, shape [particle_count], vec2
        self.particle_mass = None           # Particle mass, shape [particle_count], float
        self.particle_elasticity = None     # Anchor spring coefficient, shape [particle_count], float
        self.particle_damping = None        # Velocity retention per step, shape [particle_count], float
        self.particle_fixed = None          # 1 = pinned, 0 = free, shape [particle_count], int
        self.particle_count = 0

        # Neighbor topology
        self.attractor_indices = None       # [prev0, next0, prev1, next1, ...], -1 = empty slot, int
        self.neighbor_stiffness = 1.0       # Scale applied to the summed neighbor offsets

    def state(self) -> State:
        """
        Create a new State at rest: positions at the anchors, zero velocity and force.

        Returns:
            State: The state object
        """
        s = State()
        s.particle_q = wp.clone(self.particle_q)
        s.particle_qd = wp.zeros(self.particle_count, dtype=wp.vec2, device=self.device)
        s.particle_f = wp.zeros(self.particle_count, dtype=wp.vec2, device=self.device)
        return s

    def _setup_particles(self, positions, fixed, mass, elasticity, damping):
        """Allocate particle arrays from host-side positions and fixed flags."""
        pos_np = np.asarray(positions, dtype=np.float32).reshape(-1, 2)
        fixed_np = np.asarray(fixed, dtype=np.int32).reshape(-1)
        n_particles = len(pos_np)

        self.particle_count = n_particles
        self.particle_q = wp.array(pos_np, dtype=wp.vec2, device=self.device)
        self.particle_mass = wp.full(n_particles, mass, dtype=float, device=self.device)
        self.particle_elasticity = wp.full(n_particles, elasticity, dtype=float, device=self.device)
        self.particle_damping = wp.full(n_particles, damping, dtype=float, device=self.device)
        self.particle_fixed = wp.array(fixed_np, dtype=int, device=self.device)
        self.attractor_indices = wp.full(n_particles * 2, -1, dtype=int, device=self.device)

    def fixed_mask(self) -> np.ndarray:
        """Host copy of the fixed flags as a boolean array."""
        return self.particle_fixed.numpy().astype(bool)

    def attractor_table(self) -> np.ndarray:
        """Host copy of the attractor table, shape [particle_count, 2]."""
        return self.attractor_indices.numpy().reshape(-1, 2).copy()
