# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0

from .state import State
from .model import Model, MASS, ELASTICITY, DAMPING, ADJACENT_SPRING_CONSTANT
from .particle import SpringParticle

__all__ = [
    "Model",
    "State",
    "SpringParticle",
    "MASS",
    "ELASTICITY",
    "DAMPING",
    "ADJACENT_SPRING_CONSTANT",
]
