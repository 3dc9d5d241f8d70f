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
Attitude module for rotations between the body and local-level frames.

This module provides functions for converting between different attitude representations:
- Euler angles (roll-pitch-yaw)
- Direction Cosine Matrices (DCM)
- Quaternions (Hamilton, scalar first)
- Skew symmetric matrices

All rotations assume right-hand coordinate frames with euler angles in the order
'roll-pitch-yaw' and DCMs with the order of 'ZYX', rotating body vectors into NED.

References:
    Principles of GNSS, Inertial, and Multisensor Integrated Navigation Systems
    - (2013) Paul D. Groves
"""

from .dcm import dcm2euler, dcm2quat
from .euler import euler2dcm, euler2quat
from .quaternion import quat2dcm, quat2euler, quat_multiply, quat_normalize, rotvec2quat
from .skew import deskew, skew

__all__ = [
    'skew', 'deskew',
    'dcm2euler', 'dcm2quat',
    'euler2dcm', 'euler2quat',
    'quat2euler', 'quat2dcm', 'quat_multiply', 'quat_normalize', 'rotvec2quat'
]
