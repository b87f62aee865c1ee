# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0
#
# Pointer state consumed by the wave solver

import math

from .geometry import Point


# Pointer influence defaults (screen pixels, force multiplier)
MOUSE_RADIUS = 200.0
MOUSE_STRENGTH = 1.0


class Pointer:
    """
    Tracks the current and previous pointer position.

    Position is driven by exactly one source per tick:
        - real input, delivered through ``record_motion``
        - a scripted modifier ``fn(pointer, tick)`` installed with
          ``set_modifier`` and invoked from ``update``

    Real input always wins: the first ``record_motion`` call drops the
    modifier. Both sources move the pointer through ``move`` so that
    ``delta()`` is always exactly one step of displacement.

    Example:
        >>> pointer = Pointer()
        >>> pointer.set_modifier(SweepPath(400.0, 300.0, 150.0))
        >>> pointer.update(tick=0)
        >>> pointer.record_motion(10.0, 20.0)  # scripted sweep is dropped
    """

    def __init__(self, x: float = 0.0, y: float = 0.0):
        self.position = Point(x, y)
        self.last_position = Point(x, y)
        self.modifier = None

    @property
    def driven_by(self) -> str:
        """``"script"`` while a modifier is installed, ``"input"`` otherwise."""
        return "script" if self.modifier is not None else "input"

    def delta(self) -> tuple:
        """One-step displacement ``position - last_position``."""
        return self.position.delta(self.last_position)

    def velocity(self) -> tuple:
        return self.delta()

    def move(self, x: float, y: float):
        """Shift ``position`` to ``last_position`` and move to ``(x, y)``."""
        self.last_position.move_to(self.position.x, self.position.y)
        self.position.move_to(x, y)

    def record_motion(self, x: float, y: float):
        """Apply a real input sample; clears any scripted modifier."""
        self.modifier = None
        self.move(x, y)

    def set_modifier(self, modifier):
        self.modifier = modifier

    def clear_modifier(self):
        self.modifier = None

    def update(self, tick: int):
        if self.modifier is not None:
            self.modifier(self, tick)


class SweepPath:
    """
    Scripted pointer source oscillating vertically through a fixed column.

    At frame ``tick`` the pointer sits at
    ``(center_x, center_y + cos(-tick / period) * amplitude)``.
    """

    def __init__(self, center_x: float, center_y: float, amplitude: float, period: float = 20.0):
        if period == 0:
            raise ValueError("SweepPath period must be non-zero")
        self.center_x = center_x
        self.center_y = center_y
        self.amplitude = amplitude
        self.period = period

    def point_at(self, tick: int) -> Point:
        return Point(self.center_x, self.center_y + math.cos(-tick / self.period) * self.amplitude)

    def __call__(self, pointer: Pointer, tick: int):
        target = self.point_at(tick)
        pointer.move(target.x, target.y)
