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

"""Physical constants and ellipsoid parameters"""

from dataclasses import dataclass

import numpy as np

# Physical Constants
CLIGHT = 299792458.0  # speed of light (m/s)

# Earth Parameters (WGS84)
RE_WGS84 = 6378137.0           # earth semimajor axis (m)
FE_WGS84 = 1.0 / 298.257223563 # earth flattening
RP_WGS84 = 6356752.31425       # polar radius (semi-minor axis) (m)
E2_WGS84 = FE_WGS84 * (2.0 - FE_WGS84)  # eccentricity squared
OMGE = 7.2921151467E-5         # earth angular velocity (rad/s)
GME = 3.986004418E14           # earth gravitational constant (m^3/s^2)

# Somigliana normal gravity coefficients
GRAV_EQUATOR = 9.7803253359    # normal gravity at the equator (m/s^2)
GRAV_SOMIGLIANA_K = 0.001931853  # Somigliana constant

# Unit conversions
R2D = 180.0 / np.pi            # radians to degrees
D2R = np.pi / 180.0            # degrees to radians

# Gravity constant
G_GRAVITY = 9.80665            # standard gravity (m/s^2)


@dataclass(frozen=True)
class Ellipsoid:
    """Reference ellipsoid and Earth rotation parameters.

    Attributes
    ----------
    a : float
        Semi-major (equatorial) radius (m)
    f : float
        Flattening
    omega : float
        Earth rotation rate (rad/s)
    mu : float
        Gravitational constant (m^3/s^2)
    ge : float
        Normal gravity at the equator (m/s^2)
    k : float
        Somigliana constant
    """
    a: float = RE_WGS84
    f: float = FE_WGS84
    omega: float = OMGE
    mu: float = GME
    ge: float = GRAV_EQUATOR
    k: float = GRAV_SOMIGLIANA_K

    @property
    def e2(self) -> float:
        """Eccentricity squared"""
        return self.f * (2.0 - self.f)

    @property
    def b(self) -> float:
        """Semi-minor (polar) radius (m)"""
        return self.a * (1.0 - self.f)


WGS84 = Ellipsoid()
