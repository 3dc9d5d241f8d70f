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

"""Coordinate transformation utilities between geodetic, ECEF and NED frames"""

import numpy as np

from ..core.constants import WGS84, Ellipsoid


def lla2ecef(lla: np.ndarray, ellipsoid: Ellipsoid = WGS84) -> np.ndarray:
    """Convert geodetic coordinates to ECEF coordinates

    Parameters
    ----------
    lla : np.ndarray
        Geodetic coordinates [lat, lon, height] (rad, rad, m)
    ellipsoid : Ellipsoid, optional
        Reference ellipsoid (WGS84)

    Returns
    -------
    np.ndarray
        ECEF coordinates [x, y, z] in meters
    """
    lat, lon, h = lla[0], lla[1], lla[2]
    e2 = ellipsoid.e2

    sin_lat = np.sin(lat)
    cos_lat = np.cos(lat)

    N = ellipsoid.a / np.sqrt(1.0 - e2 * sin_lat**2)

    x = (N + h) * cos_lat * np.cos(lon)
    y = (N + h) * cos_lat * np.sin(lon)
    z = (N * (1.0 - e2) + h) * sin_lat

    return np.array([x, y, z])


def ecef2lla(xyz: np.ndarray, ellipsoid: Ellipsoid = WGS84) -> np.ndarray:
    """Convert ECEF coordinates to geodetic coordinates

    Iterates on latitude and height until the height changes by less than a
    micrometre; a handful of iterations is enough anywhere near the surface.

    Parameters
    ----------
    xyz : np.ndarray
        ECEF coordinates [x, y, z] in meters
    ellipsoid : Ellipsoid, optional
        Reference ellipsoid (WGS84)

    Returns
    -------
    np.ndarray
        Geodetic coordinates [lat, lon, height] (rad, rad, m)
    """
    x, y, z = xyz[0], xyz[1], xyz[2]
    e2 = ellipsoid.e2

    lon = np.arctan2(y, x)
    p = np.sqrt(x**2 + y**2)
    lat = np.arctan2(z, p * (1.0 - e2))
    h = 0.0

    for _ in range(10):
        N = ellipsoid.a / np.sqrt(1.0 - e2 * np.sin(lat)**2)
        if abs(np.cos(lat)) > 1e-8:
            h_new = p / np.cos(lat) - N
        else:
            h_new = abs(z) - N * (1.0 - e2)
        lat = np.arctan2(z, p * (1.0 - e2 * N / (N + h_new)))
        if abs(h_new - h) < 1e-6:
            h = h_new
            break
        h = h_new

    return np.array([lat, lon, h])


def ecef2ned_dcm(lla: np.ndarray) -> np.ndarray:
    """
    Earth-Centered-Earth-Fixed to North-East-Down direction cosine matrix

    Parameters:
    -----------
    lla : np.ndarray
        Geodetic coordinates [lat, lon, height] (rad, rad, m)

    Returns:
    --------
    C_e_n : np.ndarray
        ECEF->NED direction cosine matrix (3x3)
    """
    sin_lat = np.sin(lla[0])
    cos_lat = np.cos(lla[0])
    sin_lon = np.sin(lla[1])
    cos_lon = np.cos(lla[1])

    C_e_n = np.array([
        [-sin_lat * cos_lon, -sin_lat * sin_lon, cos_lat],
        [-sin_lon, cos_lon, 0.0],
        [-cos_lat * cos_lon, -cos_lat * sin_lon, -sin_lat]
    ], dtype=np.float64)

    return C_e_n


def ned2ecef_dcm(lla: np.ndarray) -> np.ndarray:
    """North-East-Down to Earth-Centered-Earth-Fixed direction cosine matrix"""
    return ecef2ned_dcm(lla).T


def ned2ecefv(vel_ned: np.ndarray, lla: np.ndarray) -> np.ndarray:
    """Rotate a NED velocity at ``lla`` into ECEF"""
    return ned2ecef_dcm(lla) @ vel_ned


def ecef2nedv(vel_ecef: np.ndarray, lla: np.ndarray) -> np.ndarray:
    """Rotate an ECEF velocity into NED at ``lla``"""
    return ecef2ned_dcm(lla) @ vel_ecef
