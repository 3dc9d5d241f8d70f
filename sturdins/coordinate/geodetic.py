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

"""Ellipsoidal Earth model: radii of curvature, gravity and frame rotation rates"""

from typing import Tuple

import numpy as np

from ..core.constants import WGS84, Ellipsoid

# Empirical north gravity coefficient (m/s^2 per m of height)
GRAV_NORTH_COEFF = 8.08e-9


class EarthModel:
    """Earth model evaluated in the local-level NED frame.

    All ellipsoid constants come from the ``Ellipsoid`` passed at construction,
    so alternate ellipsoids (or a non-rotating Earth for testing) can be
    injected. Behaviour at the poles (lat = +-90 deg) is undefined: the
    transverse terms divide by cos(lat).

    Parameters
    ----------
    ellipsoid : Ellipsoid, optional
        Reference ellipsoid and rotation rate (WGS84)
    """

    def __init__(self, ellipsoid: Ellipsoid = WGS84):
        self.ellipsoid = ellipsoid

    def radii_of_curvature(self, lat: float) -> Tuple[float, float]:
        """
        Compute radii of curvature at given latitude

        Parameters:
        -----------
        lat : float
            Latitude (rad)

        Returns:
        --------
        Rn : float
            Meridian radius of curvature (m)
        Re : float
            Transverse (prime vertical) radius of curvature (m)
        """
        e2 = self.ellipsoid.e2
        den = 1.0 - e2 * np.sin(lat)**2
        Rn = self.ellipsoid.a * (1.0 - e2) / den**1.5
        Re = self.ellipsoid.a / np.sqrt(den)
        return Rn, Re

    def geocentric_radius(self, lat: float) -> float:
        """Distance from the Earth's centre to the ellipsoid surface at ``lat`` (m)"""
        _, Re = self.radii_of_curvature(lat)
        e2 = self.ellipsoid.e2
        return Re * np.sqrt(np.cos(lat)**2 + (1.0 - e2)**2 * np.sin(lat)**2)

    def normal_gravity(self, lat: float) -> float:
        """Somigliana normal gravity on the ellipsoid surface (m/s^2)"""
        sin2_lat = np.sin(lat)**2
        return self.ellipsoid.ge * (1.0 + self.ellipsoid.k * sin2_lat) / \
            np.sqrt(1.0 - self.ellipsoid.e2 * sin2_lat)

    def gravity_vector(self, lat: float, h: float) -> np.ndarray:
        """
        Compute the local gravity vector in NED

        Parameters:
        -----------
        lat : float
            Latitude (rad)
        h : float
            Height above ellipsoid (m)

        Returns:
        --------
        g_n : np.ndarray
            Gravity [north, east, down] (m/s^2)
        """
        ell = self.ellipsoid
        sin2_lat = np.sin(lat)**2
        g0 = self.normal_gravity(lat)
        m = ell.omega**2 * ell.a**2 * ell.b / ell.mu

        g_down = g0 * (1.0 - 2.0 * h / ell.a * (1.0 + ell.f * (1.0 - 2.0 * sin2_lat) + m)
                       + 3.0 * (h / ell.a)**2)
        g_north = -GRAV_NORTH_COEFF * h * np.sin(2.0 * lat)

        return np.array([g_north, 0.0, g_down])

    def earth_rate_vector(self, lat: float) -> np.ndarray:
        """Earth rotation rate resolved in NED (rad/s)"""
        w = self.ellipsoid.omega
        return np.array([w * np.cos(lat), 0.0, -w * np.sin(lat)])

    def transport_rate_vector(self, lat: float, h: float, vn: float, ve: float) -> np.ndarray:
        """Rotation rate of the NED frame over the ellipsoid from travel (rad/s)"""
        Rn, Re = self.radii_of_curvature(lat)
        return np.array([ve / (Re + h),
                         -vn / (Rn + h),
                         -ve * np.tan(lat) / (Re + h)])
