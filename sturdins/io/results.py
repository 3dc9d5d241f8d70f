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

"""Binary navigation result records

Each record is twelve little-endian float64 values, 96 bytes, in the order
t, lat, lon, h, vn, ve, vd, roll, pitch, yaw, cb, cd. Angles are stored in
degrees, everything else in SI units.
"""

import logging
from pathlib import Path
from typing import Union

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)

RESULT_FIELDS = ("t", "lat", "lon", "h", "vn", "ve", "vd",
                 "roll", "pitch", "yaw", "cb", "cd")
RESULT_DTYPE = np.dtype([(name, "<f8") for name in RESULT_FIELDS])


def make_record(t: float, lla: np.ndarray, vel: np.ndarray, rpy: np.ndarray,
                cb: float, cd: float) -> np.ndarray:
    """
    Pack one navigation solution into a result record

    Parameters:
    -----------
    t : float
        Time (s)
    lla : np.ndarray
        Geodetic position [lat, lon, h] (rad, rad, m)
    vel : np.ndarray
        NED velocity (m/s)
    rpy : np.ndarray
        Roll, pitch, yaw (rad)
    cb, cd : float
        Clock bias (m) and drift (m/s)

    Returns:
    --------
    np.ndarray
        Zero-dimensional structured array of ``RESULT_DTYPE``
    """
    lat, lon = np.degrees(lla[:2])
    roll, pitch, yaw = np.degrees(rpy)
    return np.array((t, lat, lon, lla[2], vel[0], vel[1], vel[2],
                     roll, pitch, yaw, cb, cd), dtype=RESULT_DTYPE)


class ResultWriter:
    """
    Append result records to a binary file

    Usage:
        with ResultWriter("nav.bin") as writer:
            writer.write(filt.to_result(t))
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._fh = None
        self.count = 0

    def __enter__(self) -> 'ResultWriter':
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def open(self):
        self.close()
        self._fh = self.path.open("wb")
        self.count = 0

    def close(self):
        if self._fh is not None:
            self._fh.close()
            self._fh = None
            logger.debug(f"Wrote {self.count} result records to {self.path}")

    def write(self, record: np.ndarray):
        """Write one record (or an array of records)"""
        if self._fh is None:
            raise ValueError(f"Result file {self.path} is not open")
        data = np.asarray(record, dtype=RESULT_DTYPE)
        self._fh.write(data.tobytes())
        self.count += data.size


def read_results(path: Union[str, Path]) -> np.ndarray:
    """Read every record of a result file into a structured array"""
    result_path = Path(path)
    if not result_path.exists():
        raise FileNotFoundError(result_path)

    size = result_path.stat().st_size
    if size % RESULT_DTYPE.itemsize:
        raise ValueError(f"{result_path} is {size} bytes, not a whole number of "
                         f"{RESULT_DTYPE.itemsize}-byte records")
    return np.fromfile(result_path, dtype=RESULT_DTYPE)


def results_to_dataframe(records: np.ndarray) -> pd.DataFrame:
    """Convert result records to a DataFrame with one column per field"""
    records = np.atleast_1d(records)
    return pd.DataFrame({name: records[name] for name in RESULT_FIELDS})


__all__ = [
    "RESULT_DTYPE",
    "RESULT_FIELDS",
    "ResultWriter",
    "make_record",
    "read_results",
    "results_to_dataframe",
]
