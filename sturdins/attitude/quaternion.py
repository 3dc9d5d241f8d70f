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
Quaternion algebra and conversions.

Quaternions are Hamilton, scalar first [w, x, y, z], and describe the
body->NED rotation so that quat2dcm(q) == C_b_l.

References:
    Principles of GNSS, Inertial, and Multisensor Integrated Navigation Systems
    - (2013) Paul D. Groves
"""

import numpy as np
from numba import njit

# Half angle below which the rotation vector quaternion uses its first order form
SMALL_ANGLE = 1e-5


@njit(cache=True, fastmath=True)
def quat2euler(q):
    """
    Convert quaternion to corresponding euler angles (roll-pitch-yaw).

    Parameters
    ----------
    q : array_like, shape (4,)
        Quaternion [w, x, y, z]

    Returns
    -------
    e : ndarray, shape (3,)
        RPY euler angles [roll, pitch, yaw] in radians
    """
    w, x, y, z = q[0], q[1], q[2], q[3]
    sp = min(max(2.0*(w*y - x*z), -1.0), 1.0)
    e = np.array([np.arctan2(2.0*(w*x + y*z), w*w - x*x - y*y + z*z),
                  np.arcsin(sp),
                  np.arctan2(2.0*(w*z + x*y), w*w + x*x - y*y - z*z)],
                 dtype=np.double)
    return e


@njit(cache=True, fastmath=True)
def quat2dcm(q):
    """
    Convert quaternion to the corresponding body->NED DCM.

    Parameters
    ----------
    q : array_like, shape (4,)
        Quaternion [w, x, y, z]

    Returns
    -------
    C : ndarray, shape (3, 3)
        body->NED direction cosine matrix
    """
    w, x, y, z = q[0], q[1], q[2], q[3]
    C = np.array([[w*w + x*x - y*y - z*z,         2*(x*y - w*z),         2*(w*y + x*z)],
                  [        2*(w*z + x*y), w*w - x*x + y*y - z*z,         2*(y*z - w*x)],
                  [        2*(x*z - w*y),         2*(y*z + w*x), w*w - x*x - y*y + z*z]],
                 dtype=np.double)
    return C


@njit(cache=True, fastmath=True)
def quat_multiply(p, q):
    """Hamilton product p (x) q"""
    return np.array([p[0]*q[0] - p[1]*q[1] - p[2]*q[2] - p[3]*q[3],
                     p[0]*q[1] + p[1]*q[0] + p[2]*q[3] - p[3]*q[2],
                     p[0]*q[2] - p[1]*q[3] + p[2]*q[0] + p[3]*q[1],
                     p[0]*q[3] + p[1]*q[2] - p[2]*q[1] + p[3]*q[0]],
                    dtype=np.double)


@njit(cache=True, fastmath=True)
def quat_normalize(q):
    """Scale quaternion to unit norm"""
    return q / np.sqrt(q[0]*q[0] + q[1]*q[1] + q[2]*q[2] + q[3]*q[3])


@njit(cache=True, fastmath=True)
def rotvec2quat(v):
    """
    Convert a rotation vector to the quaternion of the same rotation.

    For a half angle gamma = |v|/2 the vector part is v*sin(gamma)/(2*gamma)
    and the scalar part cos(gamma). Below SMALL_ANGLE the vector part is
    taken as v/2.

    Parameters
    ----------
    v : array_like, shape (3,)
        Rotation vector (rad)

    Returns
    -------
    q : ndarray, shape (4,)
        Quaternion [w, x, y, z]
    """
    gamma = 0.5 * np.sqrt(v[0]*v[0] + v[1]*v[1] + v[2]*v[2])
    if gamma < SMALL_ANGLE:
        k = 0.5
    else:
        k = np.sin(gamma) / (2.0 * gamma)
    q = np.array([np.cos(gamma), k*v[0], k*v[1], k*v[2]], dtype=np.double)
    return q
