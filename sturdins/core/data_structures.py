# Copyright 2024 inuex35
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Core data structures shared by the estimators"""

from dataclasses import dataclass
from enum import Enum

import numpy as np


class NavStatus(Enum):
    """Outcome of a least-squares solve or a filter correction.

    Attributes
    ----------
    OK : int
        Solution/correction applied
    INSUFFICIENT_OBSERVATIONS : int
        Fewer usable satellites than the solve requires
    DIVERGENCE : int
        Singular or ill-conditioned information/innovation matrix, or
        non-convergent iteration
    """
    OK = 0
    INSUFFICIENT_OBSERVATIONS = 1
    DIVERGENCE = 2


@dataclass
class ObservationEpoch:
    """Satellite observations for a single epoch.

    Satellite ECEF states come from an external orbit model; the satellite
    clock correction is expected to be folded into ``psr`` already. Row ``i``
    of every array refers to the same satellite.

    Attributes
    ----------
    sv_pos : np.ndarray
        Satellite ECEF positions (m), shape (N, 3)
    sv_vel : np.ndarray
        Satellite ECEF velocities (m/s), shape (N, 3)
    psr : np.ndarray
        Pseudorange measurements (m), shape (N,)
    psrdot : np.ndarray
        Pseudorange-rate measurements (m/s), shape (N,)
    psr_var : np.ndarray
        Pseudorange variances (m^2), shape (N,)
    psrdot_var : np.ndarray
        Pseudorange-rate variances ((m/s)^2), shape (N,)
    time : float
        Epoch time (s), informational only
    """
    sv_pos: np.ndarray
    sv_vel: np.ndarray
    psr: np.ndarray
    psrdot: np.ndarray
    psr_var: np.ndarray
    psrdot_var: np.ndarray
    time: float = 0.0

    def __post_init__(self):
        self.sv_pos = np.atleast_2d(np.asarray(self.sv_pos, dtype=np.float64))
        self.sv_vel = np.atleast_2d(np.asarray(self.sv_vel, dtype=np.float64))
        self.psr = np.atleast_1d(np.asarray(self.psr, dtype=np.float64))
        self.psrdot = np.atleast_1d(np.asarray(self.psrdot, dtype=np.float64))
        self.psr_var = np.atleast_1d(np.asarray(self.psr_var, dtype=np.float64))
        self.psrdot_var = np.atleast_1d(np.asarray(self.psrdot_var, dtype=np.float64))

        n = self.psr.size
        if self.sv_pos.shape != (n, 3) or self.sv_vel.shape != (n, 3):
            raise ValueError(
                f"Satellite states must have shape ({n}, 3), got "
                f"{self.sv_pos.shape} and {self.sv_vel.shape}")
        for name in ("psrdot", "psr_var", "psrdot_var"):
            if getattr(self, name).size != n:
                raise ValueError(f"{name} must have {n} elements, got {getattr(self, name).size}")

    @property
    def num_sv(self) -> int:
        """Number of satellites in the epoch"""
        return self.psr.size
