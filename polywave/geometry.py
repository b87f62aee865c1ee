# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0
#
# 2D point and rectangle helpers shared by the pointer, models and renderer

import math


class Point:
    """
    Mutable 2D position with geometric helpers.

    All operations are plain float arithmetic; NaN and infinity propagate
    instead of being rejected. Mutating methods return ``self`` so calls can
    be chained.

    Example:
        >>> p = Point(0.0, 0.0).move_to(3.0, 4.0)
        >>> p.distance(Point(0.0, 0.0))
        5.0
    """

    def __init__(self, x: float = 0.0, y: float = 0.0):
        self.x = float(x)
        self.y = float(y)

    def __repr__(self):
        return f"Point({self.x!r}, {self.y!r})"

    @property
    def position(self):
        """Coordinates as an ``(x, y)`` tuple."""
        return (self.x, self.y)

    def clone(self) -> "Point":
        return Point(self.x, self.y)

    def delta(self, point) -> tuple:
        """Component-wise difference ``self - point``."""
        return (self.x - point.x, self.y - point.y)

    def distance(self, point) -> float:
        dx = point.x - self.x
        dy = point.y - self.y
        return math.sqrt(dx * dx + dy * dy)

    def move_to(self, x: float, y: float) -> "Point":
        self.x = float(x)
        self.y = float(y)
        return self

    def move_at_angle(self, angle: float, distance: float) -> "Point":
        """Displace by ``distance`` along ``angle`` (radians)."""
        self.x += math.cos(angle) * distance
        self.y += math.sin(angle) * distance
        return self

    def apply_velocity(self, vx: float, vy: float) -> "Point":
        self.x += vx
        self.y += vy
        return self

    def angle_radians(self, point) -> float:
        return math.atan2(point.y - self.y, point.x - self.x)

    def angle_deg(self, point) -> float:
        return math.degrees(self.angle_radians(point))

    def rotate(self, origin, radians: float) -> "Point":
        """
        Rotate about ``origin`` by ``radians``.

        Positive angles turn counter-clockwise on a y-down screen
        (clockwise in y-up world coordinates).
        """
        cos = math.cos(radians)
        sin = math.sin(radians)
        dx = self.x - origin.x
        dy = self.y - origin.y
        self.x = cos * dx + sin * dy + origin.x
        self.y = cos * dy - sin * dx + origin.y
        return self


class Bounds:
    """Axis-aligned rectangle ``(x, y, w, h)`` with its center point."""

    def __init__(self, x: float, y: float, w: float, h: float):
        self.x = x
        self.y = y
        self.w = w
        self.h = h
        self.center = Point(x + w / 2.0, y + h / 2.0)
        self.position = Point(x, y)

    @property
    def params(self):
        return (self.x, self.y, self.w, self.h)

    def offset_outer(self, offset: float) -> "Bounds":
        """Rectangle grown by ``offset`` on every side, same center."""
        return Bounds(self.x - offset, self.y - offset, self.w + offset * 2, self.h + offset * 2)

    def offset_inner(self, offset: float) -> "Bounds":
        """Rectangle shrunk by ``offset`` on every side, same center."""
        return Bounds(self.x + offset, self.y + offset, self.w - offset * 2, self.h - offset * 2)
