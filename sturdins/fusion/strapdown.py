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

"""Strapdown inertial mechanization on an ellipsoidal Earth (local-level NED frame)"""

import numpy as np

from ..attitude import quat_multiply, quat_normalize, rotvec2quat
from ..coordinate.geodetic import EarthModel
from .state import NavigationState


def mechanize(state: NavigationState, w_ib_b: np.ndarray, f_ib_b: np.ndarray,
              dt: float, earth: EarthModel):
    """
    Advance a navigation state by one IMU interval.

    Gravity, Earth rate and transport rate are evaluated from the state at the
    start of the interval (first order in the frame rates). The specific force
    is rotated with the attitude from before this step's attitude update, and
    position is advanced with the average of the old and new velocity.

    Parameters:
    -----------
    state : NavigationState
        State advanced in place
    w_ib_b : np.ndarray
        Body angular rate w.r.t. inertial space, body frame (rad/s)
    f_ib_b : np.ndarray
        Specific force, body frame (m/s^2)
    dt : float
        Integration interval (s), must be positive
    earth : EarthModel
        Earth model the frame rates and gravity come from
    """
    w_ib_b = np.asarray(w_ib_b, dtype=np.float64)
    f_ib_b = np.asarray(f_ib_b, dtype=np.float64)

    lat, h = state.lat, state.alt
    vel = state.vel
    Rn, Re = earth.radii_of_curvature(lat)

    g_n = earth.gravity_vector(lat, h)
    w_ie_n = earth.earth_rate_vector(lat)
    w_en_n = earth.transport_rate_vector(lat, h, vel[0], vel[1])

    # Attitude
    C_old = state.C_b_l
    psi = (w_ib_b - C_old.T @ (w_ie_n + w_en_n)) * dt
    q = quat_normalize(quat_multiply(state.q_b_l, rotvec2quat(psi)))

    # Velocity
    w_c = w_ie_n + 2.0 * w_en_n
    dv = (C_old @ f_ib_b + g_n - np.cross(w_c, vel)) * dt

    # Position
    v_avg = vel + 0.5 * dv
    state.lat = lat + v_avg[0] / (Rn + h) * dt
    state.lon = state.lon + v_avg[1] / ((Re + h) * np.cos(lat)) * dt
    state.alt = h - v_avg[2] * dt

    state.set_quaternion(q)
    state.vel = vel + dv


class Strapdown:
    """
    Strapdown inertial navigator

    Owns one ``NavigationState`` and the ``EarthModel`` it is integrated on.

    Parameters:
    -----------
    earth : EarthModel, optional
        Earth model (WGS84 by default)
    state : NavigationState, optional
        Initial state (origin, at rest, level and north-facing by default)
    """

    def __init__(self, earth: EarthModel = None, state: NavigationState = None):
        self.earth = earth if earth is not None else EarthModel()
        self._state = state if state is not None else NavigationState()

    @property
    def state(self) -> NavigationState:
        """Owned navigation state"""
        return self._state

    @property
    def lla(self) -> np.ndarray:
        return self._state.lla

    @property
    def vel(self) -> np.ndarray:
        return self._state.vel.copy()

    @property
    def q_b_l(self) -> np.ndarray:
        return self._state.q_b_l.copy()

    @property
    def C_b_l(self) -> np.ndarray:
        return self._state.C_b_l.copy()

    @property
    def rpy(self) -> np.ndarray:
        return self._state.rpy

    def set_position(self, lat: float, lon: float, alt: float):
        """Set geodetic position (rad, rad, m)"""
        self._state.set_position(lat, lon, alt)

    def set_velocity(self, vn: float, ve: float, vd: float):
        """Set NED velocity (m/s)"""
        self._state.set_velocity(vn, ve, vd)

    def set_attitude(self, roll: float, pitch: float, yaw: float):
        """Set attitude from euler angles (rad)"""
        self._state.set_euler(roll, pitch, yaw)

    def set_attitude_dcm(self, C_b_l: np.ndarray):
        """Set attitude from a body->NED rotation matrix"""
        self._state.set_dcm(C_b_l)

    def mechanize(self, w_ib_b: np.ndarray, f_ib_b: np.ndarray, dt: float):
        """Advance the owned state by one IMU interval, see ``mechanize``"""
        mechanize(self._state, w_ib_b, f_ib_b, dt, self.earth)
