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
sturdins - Tightly-coupled GNSS/INS navigation

Strapdown inertial mechanization on an ellipsoidal Earth, an error-state
Kalman filter fusing pseudorange and pseudorange-rate observations, and a
Gauss-Newton least squares solver for cold start.
"""

__version__ = "1.0.0"
__author__ = "sturdins Development Team"
__title__ = "sturdins"
__description__ = "Tightly-coupled GNSS/INS navigation filter"

from .attitude import *
from .coordinate import *
from .core import *
from .fusion import NavigationFilter, NavigationState, Strapdown, mechanize
from .gnss import gauss_newton, geometry_dop, range_and_rate, solve_epoch
from .io import ResultWriter, read_results, results_to_dataframe
from .sensors import ClockSpec, ImuSpec
