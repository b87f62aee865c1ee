# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0
#
# Handle onto a single particle of a wave model

import math

import warp as wp

from ..geometry import Point
from ..solvers.poly_wave.kernels_wave import (
    apply_force_2d,
    apply_neighbor_force_2d,
    apply_pointer_force_2d,
    apply_restoring_force_2d,
    integrate_particles,
    pointer_inputs,
)


class SpringParticle:
    """
    View of particle ``index`` inside a model's arrays.

    The handle owns no data: reads copy values out of the model/state arrays
    and every operation launches the ring kernels over this single index
    (dim=1, offset=index), so a particle updated through its handle follows
    exactly the same arithmetic as a full ring step.

    Fixed particles ignore every force and never move.
    """

    def __init__(self, model, state, index: int):
        if not 0 <= index < model.particle_count:
            raise IndexError(f"particle index {index} out of range [0, {model.particle_count})")
        self.model = model
        self.state = state
        self.index = index

    def __repr__(self):
        kind = "fixed" if self.is_fixed else "free"
        return f"SpringParticle({self.index}, {kind}, x={self.x:.3f}, y={self.y:.3f})"

    def __eq__(self, other):
        if not isinstance(other, SpringParticle):
            return NotImplemented
        return self.model is other.model and self.index == other.index

    def __hash__(self):
        return hash((id(self.model), self.index))

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    def _row(self, array):
        return array.numpy()[self.index]

    @property
    def x(self) -> float:
        return float(self._row(self.state.particle_q)[0])

    @property
    def y(self) -> float:
        return float(self._row(self.state.particle_q)[1])

    @property
    def position(self) -> Point:
        q = self._row(self.state.particle_q)
        return Point(q[0], q[1])

    @property
    def anchor(self) -> Point:
        q0 = self._row(self.model.particle_q)
        return Point(q0[0], q0[1])

    @property
    def velocity(self) -> tuple:
        v = self._row(self.state.particle_qd)
        return (float(v[0]), float(v[1]))

    @property
    def force(self) -> tuple:
        f = self._row(self.state.particle_f)
        return (float(f[0]), float(f[1]))

    @property
    def mass(self) -> float:
        return float(self._row(self.model.particle_mass))

    @property
    def elasticity(self) -> float:
        return float(self._row(self.model.particle_elasticity))

    @property
    def damping(self) -> float:
        return float(self._row(self.model.particle_damping))

    @property
    def is_fixed(self) -> bool:
        return bool(self._row(self.model.particle_fixed))

    @property
    def attractors(self) -> list:
        """Handles of the neighbors this particle is pulled towards."""
        slots = self.model.attractor_indices.numpy()[self.index * 2:self.index * 2 + 2]
        return [SpringParticle(self.model, self.state, int(j)) for j in slots if j >= 0]

    def distance(self, point) -> float:
        return self.position.distance(point)

    def delta(self, point) -> tuple:
        return self.position.delta(point)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def move_to(self, x: float, y: float) -> "SpringParticle":
        """Place a free particle at ``(x, y)``; fixed particles stay put."""
        if self.is_fixed:
            return self
        q = self.state.particle_q.numpy().copy()
        q[self.index] = (x, y)
        self.state.particle_q.assign(q)
        return self

    def _launch(self, kernel, inputs, outputs):
        wp.launch(kernel=kernel, dim=1, inputs=inputs, outputs=outputs, device=self.model.device)

    def apply_force(self, fx: float, fy: float):
        self._launch(
            apply_force_2d,
            inputs=[self.model.particle_fixed, wp.vec2(fx, fy), self.index],
            outputs=[self.state.particle_f],
        )

    def apply_pointer_force(self, pointer, radius: float, strength: float):
        pointer_pos, pointer_delta = pointer_inputs(pointer)
        self._launch(
            apply_pointer_force_2d,
            inputs=[
                self.state.particle_q,
                self.model.particle_fixed,
                pointer_pos,
                pointer_delta,
                float(radius),
                float(strength),
                self.index,
            ],
            outputs=[self.state.particle_f],
        )

    def apply_restoring_force(self):
        self._launch(
            apply_restoring_force_2d,
            inputs=[
                self.state.particle_q,
                self.model.particle_q,
                self.model.particle_elasticity,
                self.model.particle_fixed,
                self.index,
            ],
            outputs=[self.state.particle_f],
        )

    def apply_neighbor_force(self):
        self._launch(
            apply_neighbor_force_2d,
            inputs=[
                self.state.particle_q,
                self.model.particle_fixed,
                self.model.attractor_indices,
                float(self.model.neighbor_stiffness),
                self.index,
            ],
            outputs=[self.state.particle_f],
        )

    def integrate(self):
        integrate_particles(self.model, self.state, offset=self.index, count=1)

    def step(self, pointer, radius: float, strength: float):
        """Pointer, anchor and neighbor forces followed by one integration."""
        if self.is_fixed:
            return
        self.apply_pointer_force(pointer, radius, strength)
        self.apply_restoring_force()
        self.apply_neighbor_force()
        self.integrate()

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)
