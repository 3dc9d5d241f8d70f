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

"""
Estimator Configuration
=======================

Default tuning values for the least-squares solver and the navigation filter,
plus the ``FilterConfig`` container the filter is constructed from.
"""

from dataclasses import dataclass, fields
from typing import Optional

# ============================================================================
# LEAST SQUARES
# ============================================================================
LS_MAX_ITER = 20          # Gauss-Newton iteration cap
LS_TOL = 1e-4             # Convergence threshold on the update norm
LS_MIN_SATS = 4           # Satellites needed for a pos/vel/clock solve
LS_MAX_COND = 1e12        # Information matrix condition number limit

# ============================================================================
# INITIAL STATE STANDARD DEVIATIONS
# ============================================================================
STD_POS = 10.0            # Position (m)
STD_VEL = 1.0             # Velocity (m/s)
STD_ATT = 0.05            # Attitude (rad)
STD_ACC_BIAS = 0.05       # Accelerometer bias (m/s^2)
STD_GYRO_BIAS = 1e-3      # Gyroscope bias (rad/s)
STD_CLK_BIAS = 30.0       # Clock bias (m)
STD_CLK_DRIFT = 1.0       # Clock drift (m/s)

# ============================================================================
# SENSOR ERROR MODEL
# ============================================================================
TAU_ACC_BIAS = 3600.0     # Accelerometer bias correlation time (s)
TAU_GYRO_BIAS = 3600.0    # Gyroscope bias correlation time (s)

# ============================================================================
# MEASUREMENT UPDATE
# ============================================================================
MIN_GNSS_SATS = 1         # Satellites needed for a filter correction
MAX_INNOV_COND = 1e12     # Condition number limit of the innovation correlation matrix

DISCRETIZATION_METHODS = ("first_order", "van_loan")


@dataclass
class FilterConfig:
    """Navigation filter tuning.

    Attributes
    ----------
    std_pos, std_vel, std_att : float
        Initial 1-sigma of the position (m), velocity (m/s) and tilt (rad) errors
    std_acc_bias, std_gyro_bias : float
        Initial 1-sigma of the accelerometer (m/s^2) and gyroscope (rad/s)
        biases, replaced by the bias instabilities once an IMU spec is set
    std_clk_bias, std_clk_drift : float
        Initial 1-sigma of the clock bias (m) and drift (m/s)
    tau_acc_bias, tau_gyro_bias : float
        Gauss-Markov correlation times of the biases (s)
    min_gnss_satellites : int
        Fewest satellites a correction is attempted with
    innovation_threshold : float, optional
        Normalized innovation gate; ``None`` disables gating
    discretization : str
        ``'first_order'`` or ``'van_loan'``
    """
    std_pos: float = STD_POS
    std_vel: float = STD_VEL
    std_att: float = STD_ATT
    std_acc_bias: float = STD_ACC_BIAS
    std_gyro_bias: float = STD_GYRO_BIAS
    std_clk_bias: float = STD_CLK_BIAS
    std_clk_drift: float = STD_CLK_DRIFT
    tau_acc_bias: float = TAU_ACC_BIAS
    tau_gyro_bias: float = TAU_GYRO_BIAS
    min_gnss_satellites: int = MIN_GNSS_SATS
    innovation_threshold: Optional[float] = None
    discretization: str = "first_order"

    def __post_init__(self):
        if self.discretization not in DISCRETIZATION_METHODS:
            raise ValueError(
                f"Unknown discretization '{self.discretization}', "
                f"expected one of {DISCRETIZATION_METHODS}")
        if self.tau_acc_bias <= 0 or self.tau_gyro_bias <= 0:
            raise ValueError("Bias correlation times must be positive")
        if self.min_gnss_satellites < 1:
            raise ValueError("min_gnss_satellites must be at least 1")

    @classmethod
    def from_dict(cls, config: dict) -> "FilterConfig":
        """Build a configuration from a dictionary

        Example config:
        {
            'std_pos': 5.0,
            'min_gnss_satellites': 4,
            'innovation_threshold': 5.0,
            'discretization': 'van_loan'
        }
        """
        known = {f.name for f in fields(cls)}
        unknown = set(config) - known
        if unknown:
            raise ValueError(f"Unknown filter configuration keys: {sorted(unknown)}")
        return cls(**config)
