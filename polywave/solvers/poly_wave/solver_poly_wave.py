# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0
#
# Two-phase solver for spring-anchored wave rings

from ..solver import SolverBase
from .kernels_wave import eval_wave_forces, integrate_particles


class SolverPolyWave(SolverBase):
    """
    Per-frame update for a PolyWaveModel.
    
    One frame is two kernel launches over the whole ring:
        1. compute_forces: pointer drag + anchor spring + neighbor pull,
           reading only pre-frame positions
        2. integrate: v = damping * v + f / m, x += v, f = 0
    
    The frame is a unit step: there is no dt, one call is one animation frame.
    
    Example:
        >>> model = PolyWaveModel(outline)
        >>> solver = SolverPolyWave(model)
        >>> state = model.state()
        >>> for tick in range(100):
        >>>     pointer.update(tick)
        >>>     solver.step(state, pointer, radius=200.0, strength=1.0)
    """
    
    def compute_forces(self, state, pointer, radius: float, strength: float):
        """Phase 1: accumulate forces for every free particle."""
        eval_wave_forces(self.model, state, pointer, radius, strength)
    
    def integrate(self, state):
        """Phase 2: integrate every free particle and clear its force."""
        integrate_particles(self.model, state)
    
    def step(self, state, pointer, radius: float, strength: float):
        if self.model.particle_count == 0:
            return state
        
        self.compute_forces(state, pointer, radius, strength)
        self.integrate(state)
        
        return state
