# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0

from .solver_poly_wave import SolverPolyWave

__all__ = [
    "SolverPolyWave",
]
