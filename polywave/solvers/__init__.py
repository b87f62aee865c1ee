# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0
#
# Solvers module for 2D wave simulations

from .poly_wave import SolverPolyWave
from .solver import SolverBase

__all__ = [
    "SolverBase",
    "SolverPolyWave",
]
