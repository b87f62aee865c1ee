# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0

from .poly_wave import PolyWaveModel, create_waves, COLORS, RESOLUTION

__all__ = [
    "PolyWaveModel",
    "create_waves",
    "COLORS",
    "RESOLUTION",
]
