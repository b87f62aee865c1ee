# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0
#
# Force and integration kernels for spring-anchored wave rings
#
# Per particle i (free particles only):
#   f_pointer  = d_pointer * strength * (1 - |p - x_i| / R)     if |p - x_i| < R
#   f_anchor   = (x0_i - x_i) * elasticity_i
#   f_neighbor = k_n * sum_j (x_j - x_i)                         j in attractors(i)
#
# Integration (damping applied to the stored velocity before the new kick):
#   v_i <- damping_i * v_i + f_i / m_i
#   x_i <- x_i + v_i
#   f_i <- 0
#
# Every kernel takes an `offset` so the same code updates a whole ring
# (dim=particle_count, offset=0) or a single particle (dim=1, offset=index).

import warp as wp


# ============================================================================
# Force terms
# ============================================================================

@wp.func
def pointer_force_2d(
    xi: wp.vec2,
    pointer_pos: wp.vec2,
    pointer_delta: wp.vec2,
    radius: float,
    strength: float,
):
    """Linear-falloff drag along the pointer displacement; zero at or beyond ``radius``."""
    d = wp.length(pointer_pos - xi)
    power = float(0.0)
    if d < radius:
        power = (1.0 - d / radius) * strength
    return pointer_delta * power


@wp.func
def restoring_force_2d(xi: wp.vec2, anchor: wp.vec2, elasticity: float):
    return (anchor - xi) * elasticity


@wp.func
def neighbor_force_2d(
    i: int,
    x: wp.array(dtype=wp.vec2),
    attractors: wp.array(dtype=int),
    coupling: float,
):
    """Sum of offsets towards the (up to two) attractors of particle i."""
    xi = x[i]
    total = wp.vec2(0.0, 0.0)

    j0 = attractors[i * 2 + 0]
    if j0 >= 0:
        total = total + (x[j0] - xi)

    j1 = attractors[i * 2 + 1]
    if j1 >= 0:
        total = total + (x[j1] - xi)

    return total * coupling


# ============================================================================
# Ring kernels (phase 1: forces, phase 2: integration)
# ============================================================================

@wp.kernel
def eval_wave_forces_2d(
    x: wp.array(dtype=wp.vec2),
    anchor: wp.array(dtype=wp.vec2),
    elasticity: wp.array(dtype=float),
    fixed: wp.array(dtype=int),
    attractors: wp.array(dtype=int),
    coupling: float,
    pointer_pos: wp.vec2,
    pointer_delta: wp.vec2,
    radius: float,
    strength: float,
    offset: int,
    f: wp.array(dtype=wp.vec2),
):
    """
    Accumulate pointer, anchor and neighbor forces.

    Positions are only read here; nothing moves until integrate_particles_2d
    runs, so every neighbor read sees the pre-tick position set.
    """
    i = wp.tid() + offset

    if fixed[i] != 0:
        return

    xi = x[i]
    fi = pointer_force_2d(xi, pointer_pos, pointer_delta, radius, strength)
    fi = fi + restoring_force_2d(xi, anchor[i], elasticity[i])
    fi = fi + neighbor_force_2d(i, x, attractors, coupling)

    f[i] = f[i] + fi


@wp.kernel
def integrate_particles_2d(
    x: wp.array(dtype=wp.vec2),
    v: wp.array(dtype=wp.vec2),
    f: wp.array(dtype=wp.vec2),
    mass: wp.array(dtype=float),
    damping: wp.array(dtype=float),
    fixed: wp.array(dtype=int),
    offset: int,
):
    """
    Damped semi-implicit Euler step; a particle with exactly zero force is left untouched.
    """
    i = wp.tid() + offset

    if fixed[i] != 0:
        return

    fi = f[i]
    if fi[0] == 0.0 and fi[1] == 0.0:
        return

    acc = fi / mass[i]
    vel = v[i] * damping[i] + acc

    v[i] = vel
    x[i] = x[i] + vel
    f[i] = wp.vec2(0.0, 0.0)


# ============================================================================
# Single-term kernels (particle handles)
# ============================================================================

@wp.kernel
def apply_force_2d(
    fixed: wp.array(dtype=int),
    force: wp.vec2,
    offset: int,
    f: wp.array(dtype=wp.vec2),
):
    i = wp.tid() + offset
    if fixed[i] != 0:
        return
    f[i] = f[i] + force


@wp.kernel
def apply_pointer_force_2d(
    x: wp.array(dtype=wp.vec2),
    fixed: wp.array(dtype=int),
    pointer_pos: wp.vec2,
    pointer_delta: wp.vec2,
    radius: float,
    strength: float,
    offset: int,
    f: wp.array(dtype=wp.vec2),
):
    i = wp.tid() + offset
    if fixed[i] != 0:
        return
    f[i] = f[i] + pointer_force_2d(x[i], pointer_pos, pointer_delta, radius, strength)


@wp.kernel
def apply_restoring_force_2d(
    x: wp.array(dtype=wp.vec2),
    anchor: wp.array(dtype=wp.vec2),
    elasticity: wp.array(dtype=float),
    fixed: wp.array(dtype=int),
    offset: int,
    f: wp.array(dtype=wp.vec2),
):
    i = wp.tid() + offset
    if fixed[i] != 0:
        return
    f[i] = f[i] + restoring_force_2d(x[i], anchor[i], elasticity[i])


@wp.kernel
def apply_neighbor_force_2d(
    x: wp.array(dtype=wp.vec2),
    fixed: wp.array(dtype=int),
    attractors: wp.array(dtype=int),
    coupling: float,
    offset: int,
    f: wp.array(dtype=wp.vec2),
):
    i = wp.tid() + offset
    if fixed[i] != 0:
        return
    f[i] = f[i] + neighbor_force_2d(i, x, attractors, coupling)


# ============================================================================
# High-level wrapper functions
# ============================================================================

def pointer_inputs(pointer):
    """Pointer position and one-step displacement as wp.vec2 kernel arguments."""
    dx, dy = pointer.delta()
    return (
        wp.vec2(pointer.position.x, pointer.position.y),
        wp.vec2(dx, dy),
    )


def eval_wave_forces(model, state, pointer, radius: float, strength: float, offset: int = 0, count=None):
    """
    Accumulate all force terms into state.particle_f (wrapper function).

    Args:
        model: The wave model (anchors, constants, topology)
        state: The live State
        pointer: Pointer providing position and delta()
        radius: Pointer influence radius
        strength: Pointer force multiplier
        offset: First particle index to update
        count: Number of particles to update (default: all from offset)
    """
    if count is None:
        count = model.particle_count - offset
    if count <= 0:
        return

    pointer_pos, pointer_delta = pointer_inputs(pointer)

    wp.launch(
        kernel=eval_wave_forces_2d,
        dim=count,
        inputs=[
            state.particle_q,
            model.particle_q,
            model.particle_elasticity,
            model.particle_fixed,
            model.attractor_indices,
            float(model.neighbor_stiffness),
            pointer_pos,
            pointer_delta,
            float(radius),
            float(strength),
            offset,
        ],
        outputs=[state.particle_f],
        device=model.device,
    )


def integrate_particles(model, state, offset: int = 0, count=None):
    """Integrate accumulated forces and clear them (wrapper function)."""
    if count is None:
        count = model.particle_count - offset
    if count <= 0:
        return

    wp.launch(
        kernel=integrate_particles_2d,
        dim=count,
        inputs=[
            state.particle_q,
            state.particle_qd,
            state.particle_f,
            model.particle_mass,
            model.particle_damping,
            model.particle_fixed,
            offset,
        ],
        device=model.device,
    )
