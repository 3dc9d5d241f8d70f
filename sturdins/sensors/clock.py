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

"""Receiver oscillator error model"""

from dataclasses import dataclass

import numpy as np

from ..core.constants import CLIGHT


@dataclass(frozen=True)
class ClockSpec:
    """
    Power-law (Allan variance) coefficients of a receiver oscillator.

    The two-state bias/drift model uses only the white frequency (h0) and
    random walk frequency (h2) terms; flicker (h1) has no finite-order
    equivalent and is carried for completeness.

    Attributes:
        h0 (float): White frequency noise coefficient
        h1 (float): Flicker frequency noise coefficient
        h2 (float): Random walk frequency noise coefficient
    """
    h0: float
    h1: float
    h2: float

    @property
    def bias_psd(self) -> float:
        """Clock bias driving noise PSD (m^2/s)"""
        return CLIGHT**2 * self.h0 / 2.0

    @property
    def drift_psd(self) -> float:
        """Clock drift driving noise PSD (m^2/s^3)"""
        return CLIGHT**2 * 2.0 * np.pi**2 * self.h2

    @classmethod
    def from_oscillator(cls, oscillator: str) -> 'ClockSpec':
        """
        Typical coefficients for an oscillator type.

        Parameters:
        -----------
        oscillator : str
            'tcxo', 'ocxo', 'rubidium' or 'cesium'
        """
        try:
            return OSCILLATORS[oscillator.lower()]
        except KeyError:
            raise ValueError(f"Unknown oscillator '{oscillator}', "
                             f"expected one of {sorted(OSCILLATORS)}") from None


# Brown & Hwang, Introduction to Random Signals and Applied Kalman Filtering
OSCILLATORS = {
    'tcxo': ClockSpec(h0=2e-19, h1=7e-21, h2=2e-20),
    'ocxo': ClockSpec(h0=8e-20, h1=2e-21, h2=4e-23),
    'rubidium': ClockSpec(h0=2e-20, h1=7e-24, h2=4e-29),
    'cesium': ClockSpec(h0=2e-20, h1=7e-23, h2=4e-29),
}
