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
Attitude conversion from direction cosine matrices.

References:
    Principles of GNSS, Inertial, and Multisensor Integrated Navigation Systems
    - (2013) Paul D. Groves
"""

import numpy as np
from numba import njit


@njit(cache=True, fastmath=True)
def dcm2euler(C):
    """
    Convert a body->NED DCM to euler angles (roll-pitch-yaw).

    Parameters
    ----------
    C : array_like, shape (3, 3)
        body->NED direction cosine matrix

    Returns
    -------
    e : ndarray, shape (3,)
        RPY euler angles [roll, pitch, yaw] in radians
    """
    e = np.array([np.arctan2(C[2, 1], C[2, 2]),
                  -np.arcsin(min(max(C[2, 0], -1.0), 1.0)),
                  np.arctan2(C[1, 0], C[0, 0])],
                 dtype=np.double)
    return e


@njit(cache=True, fastmath=True)
def dcm2quat(C):
    """
    Convert a body->NED DCM to the corresponding quaternion.

    Uses Shepperd's method: the largest of the four quaternion magnitudes is
    extracted from the diagonal first so the division is well conditioned.

    Parameters
    ----------
    C : array_like, shape (3, 3)
        body->NED direction cosine matrix

    Returns
    -------
    q : ndarray, shape (4,)
        Quaternion [w, x, y, z] with non-negative scalar part
    """
    tr = C[0, 0] + C[1, 1] + C[2, 2]
    q = np.zeros(4, dtype=np.double)
    if tr > 0.0:
        s = 2.0 * np.sqrt(1.0 + tr)
        q[0] = 0.25 * s
        q[1] = (C[2, 1] - C[1, 2]) / s
        q[2] = (C[0, 2] - C[2, 0]) / s
        q[3] = (C[1, 0] - C[0, 1]) / s
    elif C[0, 0] > C[1, 1] and C[0, 0] > C[2, 2]:
        s = 2.0 * np.sqrt(1.0 + C[0, 0] - C[1, 1] - C[2, 2])
        q[0] = (C[2, 1] - C[1, 2]) / s
        q[1] = 0.25 * s
        q[2] = (C[0, 1] + C[1, 0]) / s
        q[3] = (C[0, 2] + C[2, 0]) / s
    elif C[1, 1] > C[2, 2]:
        s = 2.0 * np.sqrt(1.0 + C[1, 1] - C[0, 0] - C[2, 2])
        q[0] = (C[0, 2] - C[2, 0]) / s
        q[1] = (C[0, 1] + C[1, 0]) / s
        q[2] = 0.25 * s
        q[3] = (C[1, 2] + C[2, 1]) / s
    else:
        s = 2.0 * np.sqrt(1.0 + C[2, 2] - C[0, 0] - C[1, 1])
        q[0] = (C[1, 0] - C[0, 1]) / s
        q[1] = (C[0, 2] + C[2, 0]) / s
        q[2] = (C[1, 2] + C[2, 1]) / s
        q[3] = 0.25 * s
    if q[0] < 0.0:
        q = -q
    return q / np.linalg.norm(q)
