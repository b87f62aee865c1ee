# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0
#
# Per-frame orchestration of pointer and wave rings

from .pointer import MOUSE_RADIUS, MOUSE_STRENGTH


def advance(pointer, rings, tick: int, mouse_radius: float = MOUSE_RADIUS,
            mouse_strength: float = MOUSE_STRENGTH):
    """
    Advance the whole simulation by one frame.

    Runs the pointer's scripted modifier (if one is installed) for ``tick``,
    then steps every ring against the resulting pointer position and delta.
    Rings and pointer are mutated in place.

    Args:
        pointer: Pointer driving the waves
        rings: Iterable of PolyWaveModel
        tick: Frame counter, monotonically increasing
        mouse_radius: Pointer influence radius
        mouse_strength: Pointer force multiplier
    """
    pointer.update(tick)
    for ring in rings:
        ring.step(pointer, mouse_radius, mouse_strength)


class Scene:
    """
    Frame loop state: a pointer, its rings and the tick counter.

    ``update()`` is meant to be called once per rendered frame, after drawing,
    mirroring a draw-then-update animation loop.
    """

    def __init__(self, rings, pointer, mouse_radius: float = MOUSE_RADIUS,
                 mouse_strength: float = MOUSE_STRENGTH):
        self.rings = list(rings)
        self.pointer = pointer
        self.mouse_radius = mouse_radius
        self.mouse_strength = mouse_strength
        self.tick = 0

    def update(self):
        advance(self.pointer, self.rings, self.tick, self.mouse_radius, self.mouse_strength)
        self.tick += 1

    def boundaries(self) -> list:
        """Position snapshot of every ring, in ring order."""
        return [ring.boundary() for ring in self.rings]

    def reset(self):
        for ring in self.rings:
            ring.reset()
        self.tick = 0
