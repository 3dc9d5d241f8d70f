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

"""State representation for the GNSS/INS navigation filter"""

from dataclasses import dataclass, field

import numpy as np

from ..attitude import dcm2euler, dcm2quat, euler2quat, quat2dcm, quat_normalize

# Error state layout
NUM_STATES = 17
IDX_POS = slice(0, 3)     # NED position error (m)
IDX_VEL = slice(3, 6)     # NED velocity error (m/s)
IDX_ATT = slice(6, 9)     # Local-level tilt error (rad)
IDX_BA = slice(9, 12)     # Accelerometer bias (m/s^2)
IDX_BG = slice(12, 15)    # Gyroscope bias (rad/s)
IDX_CB = 15               # Clock bias (m)
IDX_CD = 16               # Clock drift (m/s)


class NavigationState:
    """Kinematic navigation state in the local-level (NED) frame.

    The attitude quaternion is the integrated primitive; ``C_b_l`` is its
    cached rotation matrix. Both are only written through the attitude
    setters so they never disagree.

    Attributes
    ----------
    lat, lon : float
        Geodetic latitude and longitude (rad)
    alt : float
        Height above the ellipsoid (m, positive up)
    vel : np.ndarray
        NED velocity (m/s)
    """

    def __init__(self, lat: float = 0.0, lon: float = 0.0, alt: float = 0.0,
                 vel=None, q_b_l=None):
        self.lat = float(lat)
        self.lon = float(lon)
        self.alt = float(alt)
        self.vel = np.zeros(3) if vel is None else np.array(vel, dtype=np.float64)
        self._q_b_l = np.array([1.0, 0.0, 0.0, 0.0])
        self._C_b_l = np.eye(3)
        if q_b_l is not None:
            self.set_quaternion(q_b_l)

    @property
    def q_b_l(self) -> np.ndarray:
        """body->NED quaternion [w, x, y, z]"""
        return self._q_b_l

    @property
    def C_b_l(self) -> np.ndarray:
        """body->NED rotation matrix"""
        return self._C_b_l

    @property
    def lla(self) -> np.ndarray:
        """Geodetic position [lat, lon, alt] (rad, rad, m)"""
        return np.array([self.lat, self.lon, self.alt])

    @property
    def rpy(self) -> np.ndarray:
        """Euler angles [roll, pitch, yaw] (rad)"""
        return dcm2euler(self._C_b_l)

    def set_position(self, lat: float, lon: float, alt: float):
        """Set geodetic position (rad, rad, m)"""
        self.lat = float(lat)
        self.lon = float(lon)
        self.alt = float(alt)

    def set_velocity(self, vn: float, ve: float, vd: float):
        """Set NED velocity (m/s)"""
        self.vel = np.array([vn, ve, vd], dtype=np.float64)

    def set_quaternion(self, q: np.ndarray):
        """Set attitude from a quaternion, normalizing it and refreshing the DCM"""
        self._q_b_l = quat_normalize(np.asarray(q, dtype=np.float64))
        self._C_b_l = quat2dcm(self._q_b_l)

    def set_dcm(self, C: np.ndarray):
        """Set attitude from a body->NED rotation matrix"""
        self.set_quaternion(dcm2quat(np.asarray(C, dtype=np.float64)))

    def set_euler(self, roll: float, pitch: float, yaw: float):
        """Set attitude from roll, pitch and yaw (rad)"""
        self.set_quaternion(euler2quat(np.array([roll, pitch, yaw], dtype=np.float64)))

    def copy(self) -> 'NavigationState':
        """Create deep copy of state"""
        return NavigationState(self.lat, self.lon, self.alt, self.vel.copy(), self._q_b_l.copy())

    def __repr__(self):
        return (f"NavigationState(lat={self.lat:.9f}, lon={self.lon:.9f}, alt={self.alt:.3f}, "
                f"vel={self.vel}, q_b_l={self._q_b_l})")


@dataclass
class StateError:
    """Error state, true minus estimate, in the filter's 17-channel layout"""

    d_position: np.ndarray = field(default_factory=lambda: np.zeros(3))   # NED (m)
    d_velocity: np.ndarray = field(default_factory=lambda: np.zeros(3))   # NED (m/s)
    d_theta: np.ndarray = field(default_factory=lambda: np.zeros(3))      # tilt (rad)
    d_acc_bias: np.ndarray = field(default_factory=lambda: np.zeros(3))
    d_gyro_bias: np.ndarray = field(default_factory=lambda: np.zeros(3))
    d_clock_bias: float = 0.0
    d_clock_drift: float = 0.0

    def to_vector(self) -> np.ndarray:
        """Convert to error vector"""
        return np.concatenate([
            self.d_position,
            self.d_velocity,
            self.d_theta,
            self.d_acc_bias,
            self.d_gyro_bias,
            [self.d_clock_bias],
            [self.d_clock_drift]
        ])

    @classmethod
    def from_vector(cls, dx: np.ndarray) -> 'StateError':
        """Split a 17-element error vector into its channels"""
        if dx.shape != (NUM_STATES,):
            raise ValueError(f"Error vector must have shape ({NUM_STATES},), got {dx.shape}")
        return cls(
            d_position=dx[IDX_POS].copy(),
            d_velocity=dx[IDX_VEL].copy(),
            d_theta=dx[IDX_ATT].copy(),
            d_acc_bias=dx[IDX_BA].copy(),
            d_gyro_bias=dx[IDX_BG].copy(),
            d_clock_bias=float(dx[IDX_CB]),
            d_clock_drift=float(dx[IDX_CD])
        )
