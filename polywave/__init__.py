# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0
#
# Spring-mass wave polygons driven by a moving pointer

from .geometry import Point, Bounds
from .pointer import Pointer, SweepPath, MOUSE_RADIUS, MOUSE_STRENGTH
from .sim import Model, State, SpringParticle
from .models import PolyWaveModel, create_waves
from .solvers import SolverBase, SolverPolyWave
from .simulation import advance, Scene

__all__ = [
    "Point",
    "Bounds",
    "Pointer",
    "SweepPath",
    "MOUSE_RADIUS",
    "MOUSE_STRENGTH",
    "Model",
    "State",
    "SpringParticle",
    "PolyWaveModel",
    "create_waves",
    "SolverBase",
    "SolverPolyWave",
    "advance",
    "Scene",
]
