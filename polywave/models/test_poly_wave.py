# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0
#
# Tests for wave ring construction and topology

import math

import numpy as np
import pytest

from polywave.geometry import Bounds, Point
from polywave.models import PolyWaveModel, create_waves, COLORS
from polywave.models.poly_wave import (
    WAVE_DAMPING_RANGE,
    COORD_LIMIT,
    WAVE_ELASTICITY_RANGE,
    normalize_outline,
    round_half_up,
)
from polywave.pointer import Pointer


OUTLINE = [(0, 100, True), (200, 100), (200, 200), (0, 200), (0, 100)]


def test_spring_segment_subdivision():
    """200px spring edge at resolution 50 gives a chain of four particles."""
    ring = PolyWaveModel(OUTLINE, resolution=50.0)
    positions = ring.boundary()
    fixed = ring.fixed_mask()

    assert ring.particle_count == 4 + 3
    assert np.array_equal(positions[:4], [[50, 100], [100, 100], [150, 100], [200, 100]])
    assert fixed.tolist() == [False, False, False, True, True, True, True]

    # The chain starts after the closing vertex, which is fixed
    assert np.array_equal(positions[-1], [0, 100])
    assert np.array_equal(positions[4:6], [[200, 200], [0, 200]])
    assert ring.free_count == 3


def test_build_is_deterministic():
    first = PolyWaveModel(OUTLINE, resolution=30.0)
    second = PolyWaveModel(OUTLINE, resolution=30.0)
    assert np.array_equal(first.boundary(), second.boundary())
    assert np.array_equal(first.fixed_mask(), second.fixed_mask())


def test_point_count_rounds_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(2.49) == 2
    ring = PolyWaveModel([(0, 0, True), (125, 0), (0, 0)], resolution=50.0)
    # 125 / 50 = 2.5 -> 3 chain particles, plus the closing vertex
    assert ring.particle_count == 4
    assert np.allclose(ring.boundary()[:3, 0], [125 / 3, 250 / 3, 125])


def test_every_vertex_of_all_spring_outline_is_fixed():
    triangle = [(0, 0, True), (100, 0, True), (50, 80, True), (0, 0, True)]
    ring = PolyWaveModel(triangle, resolution=20.0)
    positions = ring.boundary()
    fixed = ring.fixed_mask()

    fixed_positions = {tuple(float(v) for v in np.round(p, 3)) for p in positions[fixed]}
    assert fixed_positions == {(100.0, 0.0), (50.0, 80.0), (0.0, 0.0)}
    assert ring.free_count == ring.particle_count - 3


def test_attractors_are_ring_neighbors():
    ring = PolyWaveModel(OUTLINE, resolution=25.0)
    n = ring.particle_count
    table = ring.attractor_table()
    fixed = ring.fixed_mask()

    for i in range(n):
        if fixed[i]:
            assert table[i].tolist() == [-1, -1]
            continue
        assert table[i].tolist() == [(i - 1) % n, (i + 1) % n]
        assert i not in table[i]
        assert len(ring.particle(i).attractors) == 2


def test_attractors_are_symmetric():
    """If B is A's successor then A is B's predecessor (for free pairs)."""
    ring = PolyWaveModel(OUTLINE, resolution=25.0)
    table = ring.attractor_table()
    fixed = ring.fixed_mask()

    for i in np.flatnonzero(~fixed):
        succ, pred = table[i, 1], table[i, 0]
        if not fixed[succ]:
            assert table[succ, 0] == i
        if not fixed[pred]:
            assert table[pred, 1] == i


def test_first_particle_wraps_to_last():
    ring = PolyWaveModel(OUTLINE, resolution=50.0)
    first = ring.particle(0)
    prev_particle, next_particle = first.attractors
    assert prev_particle.index == ring.particle_count - 1
    assert next_particle.index == 1


def test_set_attractors_only_once():
    ring = PolyWaveModel(OUTLINE)
    with pytest.raises(RuntimeError):
        ring.set_attractors()


@pytest.mark.parametrize("outline", [
    [],
    [(0, 0, True)],
    [(0, 0, True), (math.nan, 10), (0, 0)],
    [(0, 0, True), (math.inf, 10), (0, 0)],
    # Finite in Python but overflows the float32 particle arrays
    [(0, 0, False), (1e39, 0), (0, 0)],
    # Finite vertices whose spring edge needs more particles than a ring may hold
    [(-3e38, 0, True), (3e38, 0), (-3e38, 0)],
])
def test_rejects_bad_outline(outline):
    with pytest.raises(ValueError):
        PolyWaveModel(outline)


@pytest.mark.parametrize("kwargs", [
    {"mass": 0.0},
    {"mass": -1.0},
    {"elasticity": 0.0},
    {"elasticity": 1.5},
    {"damping": -0.1},
    {"damping": 1.1},
    {"resolution": 0.0},
    {"resolution": 1e-300},
    {"resolution": 5e-324},
    {"neighbor_stiffness": -1.0},
    {"mass": 1.0},
    {"neighbor_stiffness": 5.0},
])
def test_rejects_bad_parameters(kwargs):
    with pytest.raises(ValueError):
        PolyWaveModel(OUTLINE, **kwargs)


def test_light_ring_within_stable_range_settles():
    """(0.05 + 4) / 2 stays below 2 * (1 + 0.4), so a kick must die out."""
    ring = PolyWaveModel(OUTLINE, resolution=50.0, mass=2.0)
    anchors = ring.particle_q.numpy()

    ring.particle(1).apply_force(5.0, 0.0)
    for _ in range(500):
        ring.step(Pointer(5000.0, 5000.0))

    assert np.all(np.isfinite(ring.boundary()))
    assert np.abs(ring.boundary() - anchors).max() < 1e-2


def test_unstable_light_ring_is_rejected():
    """With mass 1 the stiffest ring mode would grow every frame."""
    with pytest.raises(ValueError, match="Unstable"):
        PolyWaveModel(OUTLINE, resolution=50.0, mass=1.0)

    # Weaker coupling brings the same mass back into range
    ring = PolyWaveModel(OUTLINE, resolution=50.0, mass=1.0, neighbor_stiffness=0.5)
    assert ring.mass == 1.0


def test_float32_coordinate_limit():
    with pytest.raises(ValueError):
        normalize_outline([(0, 0), (0, 1e39), (0, 0)])
    vertices, _ = normalize_outline([(0, 0), (0, COORD_LIMIT), (0, 0)])
    assert vertices[1, 1] == COORD_LIMIT


def test_accepts_point_entries():
    outline = [(Point(0, 100), True), (Point(200, 100), False), (Point(0, 100), False)]
    vertices, springs = normalize_outline(outline)
    assert vertices.tolist() == [[0, 100], [200, 100], [0, 100]]
    assert springs == [True, False, False]

    ring = PolyWaveModel(outline, resolution=50.0)
    assert ring.particle_count == 5


def test_degenerate_ring_steps_without_error():
    """Zero-length spring segments collapse to fixed particles and still step."""
    ring = PolyWaveModel([(10, 10, True), (10, 10, True), (10, 10)])
    assert ring.free_count == 0

    pointer = Pointer(0.0, 0.0)
    pointer.record_motion(10.0, 10.0)
    ring.step(pointer)

    assert np.array_equal(ring.boundary(), ring.particle_q.numpy())


def test_boundary_is_a_snapshot():
    ring = PolyWaveModel(OUTLINE)
    snapshot = ring.boundary()
    snapshot[:] = -1.0
    assert np.array_equal(ring.boundary(), ring.particle_q.numpy())


def test_reset_returns_to_rest():
    ring = PolyWaveModel(OUTLINE, resolution=50.0)
    ring.particle(1).move_to(100.0, 140.0)
    ring.step(Pointer(5000.0, 5000.0))
    assert not np.array_equal(ring.boundary(), ring.particle_q.numpy())

    ring.reset()

    assert np.array_equal(ring.boundary(), ring.particle_q.numpy())
    assert ring.particle(1).velocity == (0.0, 0.0)


def test_create_waves():
    waves = create_waves(8, Bounds(0, 0, 400, 300), seed=7, resolution=50.0)

    assert len(waves) == 8
    assert [w.color for w in waves] == COLORS + COLORS[:2]
    for wave in waves:
        assert WAVE_ELASTICITY_RANGE[0] <= wave.elasticity <= WAVE_ELASTICITY_RANGE[1]
        assert WAVE_DAMPING_RANGE[0] <= wave.damping <= WAVE_DAMPING_RANGE[1]
        # 400px spring top edge: 8 chain particles, then three fixed corners
        assert wave.particle_count == 8 + 3
        assert np.allclose(wave.boundary()[7], [400, 150])
        assert wave.free_count == 7


def test_create_waves_is_seeded():
    first = create_waves(3, Bounds(0, 0, 400, 300), seed=11)
    second = create_waves(3, Bounds(0, 0, 400, 300), seed=11)
    assert [w.elasticity for w in first] == [w.elasticity for w in second]
    assert [w.damping for w in first] == [w.damping for w in second]


def test_create_waves_with_padding():
    """Padded waves extend past the canvas on every side."""
    wave = create_waves(1, Bounds(0, 0, 400, 300), seed=3, resolution=50.0, padding=50.0)[0]
    positions = wave.boundary()
    fixed = wave.fixed_mask()

    # 500px spring edge at y = 150 from x = -50: ten chain particles
    assert wave.particle_count == 10 + 3
    assert np.allclose(positions[:10, 1], 150.0)
    assert np.allclose(positions[9], [450, 150])
    assert np.allclose(positions[fixed][1:], [[450, 350], [-50, 350], [-50, 150]])
