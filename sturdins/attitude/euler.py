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
Attitude conversion from euler angles.

Euler angles are 'roll-pitch-yaw' applied in the 'ZYX' sequence; the resulting
DCM rotates body frame vectors into the local-level NED frame (C_b_l).

References:
    Principles of GNSS, Inertial, and Multisensor Integrated Navigation Systems
    - (2013) Paul D. Groves
"""

import numpy as np
from numba import njit


@njit(cache=True, fastmath=True)
def euler2dcm(e):
    """
    Convert euler angles (roll-pitch-yaw) to the body->NED DCM.

    C_b_l = Rz(yaw) @ Ry(pitch) @ Rx(roll)

    Parameters
    ----------
    e : array_like, shape (3,)
        RPY euler angles [roll, pitch, yaw] in radians

    Returns
    -------
    C : ndarray, shape (3, 3)
        body->NED direction cosine matrix
    """
    sr, sp, sy = np.sin(e[0]), np.sin(e[1]), np.sin(e[2])
    cr, cp, cy = np.cos(e[0]), np.cos(e[1]), np.cos(e[2])
    C = np.array([[cp*cy, sr*sp*cy - cr*sy, cr*sp*cy + sr*sy],
                  [cp*sy, sr*sp*sy + cr*cy, cr*sp*sy - sr*cy],
                  [  -sp,            sr*cp,            cr*cp]],
                 dtype=np.double)
    return C


@njit(cache=True, fastmath=True)
def euler2quat(e):
    """
    Convert euler angles (roll-pitch-yaw) to the body->NED quaternion.

    Parameters
    ----------
    e : array_like, shape (3,)
        RPY euler angles [roll, pitch, yaw] in radians

    Returns
    -------
    q : ndarray, shape (4,)
        Quaternion [w, x, y, z]
    """
    sr, sp, sy = np.sin(0.5*e[0]), np.sin(0.5*e[1]), np.sin(0.5*e[2])
    cr, cp, cy = np.cos(0.5*e[0]), np.cos(0.5*e[1]), np.cos(0.5*e[2])
    q = np.array([cr*cp*cy + sr*sp*sy,
                  sr*cp*cy - cr*sp*sy,
                  cr*sp*cy + sr*cp*sy,
                  cr*cp*sy - sr*sp*cy],
                 dtype=np.double)
    return q
