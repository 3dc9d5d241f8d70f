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

"""IMU error model specification"""

from dataclasses import dataclass

from ..core.constants import D2R, G_GRAVITY

# Unit conversions for datasheet values
DPH = D2R / 3600.0          # deg/hr -> rad/s
DPSH = D2R / 60.0           # deg/sqrt(hr) -> rad/sqrt(s)
MPSSH = 1.0 / 60.0          # m/s/sqrt(hr) -> m/s/sqrt(s)
MG = G_GRAVITY * 1e-3       # milli-g -> m/s^2


@dataclass(frozen=True)
class ImuSpec:
    """
    Stochastic error model of an IMU.

    Biases are modeled as first-order Gauss-Markov processes whose steady
    state standard deviation is the bias instability; the white noise terms
    are the velocity and angle random walks.

    Attributes:
        accel_bias_instability (float): Accelerometer bias instability (m/s^2)
        accel_noise (float): Velocity random walk (m/s/sqrt(s))
        gyro_bias_instability (float): Gyroscope bias instability (rad/s)
        gyro_noise (float): Angle random walk (rad/sqrt(s))
    """
    accel_bias_instability: float
    accel_noise: float
    gyro_bias_instability: float
    gyro_noise: float

    def __post_init__(self):
        for name in ("accel_bias_instability", "accel_noise",
                     "gyro_bias_instability", "gyro_noise"):
            if getattr(self, name) < 0.0:
                raise ValueError(f"{name} must be non-negative")

    @classmethod
    def from_grade(cls, grade: str) -> 'ImuSpec':
        """
        Typical error model for an IMU grade.

        Parameters:
        -----------
        grade : str
            'navigation', 'tactical', 'industrial' or 'consumer'
        """
        try:
            return IMU_GRADES[grade.lower()]
        except KeyError:
            raise ValueError(f"Unknown IMU grade '{grade}', "
                             f"expected one of {sorted(IMU_GRADES)}") from None

    def bias_psd(self, tau_acc: float, tau_gyro: float):
        """Driving noise PSDs (2*B^2/tau) of the accelerometer and gyroscope bias processes"""
        return (2.0 * self.accel_bias_instability**2 / tau_acc,
                2.0 * self.gyro_bias_instability**2 / tau_gyro)


IMU_GRADES = {
    'navigation': ImuSpec(accel_bias_instability=0.025 * MG,
                          accel_noise=0.0003 * MPSSH,
                          gyro_bias_instability=0.01 * DPH,
                          gyro_noise=0.002 * DPSH),
    'tactical': ImuSpec(accel_bias_instability=1.0 * MG,
                        accel_noise=0.03 * MPSSH,
                        gyro_bias_instability=1.0 * DPH,
                        gyro_noise=0.1 * DPSH),
    'industrial': ImuSpec(accel_bias_instability=2.0 * MG,
                          accel_noise=0.1 * MPSSH,
                          gyro_bias_instability=10.0 * DPH,
                          gyro_noise=0.3 * DPSH),
    'consumer': ImuSpec(accel_bias_instability=10.0 * MG,
                        accel_noise=0.3 * MPSSH,
                        gyro_bias_instability=100.0 * DPH,
                        gyro_noise=1.0 * DPSH),
}
