# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0
#
# Live per-frame arrays of a wave ring

import warp as wp


class State:
    """
    Positions, velocities and pending forces of one ring, indexed like its Model.

    Forces only accumulate between integrations; integrating a particle
    clears its entry in ``particle_f``.
    """

    def __init__(self):
        self.particle_q = None    # Live positions, vec2
        self.particle_qd = None   # Velocity carried to the next frame, vec2
        self.particle_f = None    # Forces pending integration, vec2

    def positions(self):
        """Host copy of the live positions, shape [particle_count, 2]."""
        return self.particle_q.numpy().copy()

    def rest_at(self, anchors):
        """Put every particle back on ``anchors`` with zero velocity and force."""
        wp.copy(self.particle_q, anchors)
        self.particle_qd.zero_()
        self.particle_f.zero_()
