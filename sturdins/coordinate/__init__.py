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

"""Coordinate transformations and the ellipsoidal Earth model

- Geodetic <-> ECEF position conversions
- ECEF <-> NED rotations for positions and velocities
- ``EarthModel``: radii of curvature, gravity, Earth and transport rates
"""

from .geodetic import EarthModel
from .transforms import ecef2lla, ecef2ned_dcm, ecef2nedv, lla2ecef, ned2ecef_dcm, ned2ecefv
