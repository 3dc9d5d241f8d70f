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
Skew symmetric (cross product) matrix utilities.

References:
    Principles of GNSS, Inertial, and Multisensor Integrated Navigation Systems
    - (2013) Paul D. Groves
"""

import numpy as np
from numba import njit


@njit(cache=True, fastmath=True)
def skew(v):
    """
    Convert vector into its skew symmetric form, so that skew(a) @ b == a x b.

    [  0  -v3   v2 ]
    [ v3    0  -v1 ]
    [-v2   v1    0 ]

    Parameters
    ----------
    v : array_like, shape (3,)
        Input vector

    Returns
    -------
    M : ndarray, shape (3, 3)
        Skew symmetric form of input vector
    """
    M = np.array([[  0.0, -v[2],  v[1]],
                  [ v[2],   0.0, -v[0]],
                  [-v[1],  v[0],   0.0]],
                 dtype=np.double)
    return M


@njit(cache=True, fastmath=True)
def deskew(M):
    """Recover the vector from its skew symmetric form"""
    return np.array([M[2, 1], M[0, 2], M[1, 0]], dtype=np.double)
