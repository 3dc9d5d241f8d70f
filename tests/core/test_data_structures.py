#!/usr/bin/env python3
"""Test suite for the observation epoch and status codes"""

import unittest

import numpy as np

from sturdins.core.data_structures import NavStatus, ObservationEpoch


class TestNavStatus(unittest.TestCase):

    def test_values(self):
        self.assertEqual(NavStatus.OK.value, 0)
        self.assertEqual(NavStatus.INSUFFICIENT_OBSERVATIONS.value, 1)
        self.assertEqual(NavStatus.DIVERGENCE.value, 2)


class TestObservationEpoch(unittest.TestCase):

    def setUp(self):
        self.sv_pos = np.random.RandomState(0).randn(5, 3) * 2e7
        self.sv_vel = np.zeros((5, 3))
        self.psr = np.full(5, 2.2e7)
        self.var = np.ones(5)

    def test_valid_epoch(self):
        epoch = ObservationEpoch(self.sv_pos, self.sv_vel, self.psr, np.zeros(5),
                                 self.var, self.var, time=12.0)
        self.assertEqual(epoch.num_sv, 5)
        self.assertEqual(epoch.time, 12.0)
        self.assertEqual(epoch.psr.dtype, np.float64)

    def test_lists_and_single_satellite(self):
        epoch = ObservationEpoch([1.0, 2.0, 3.0], [0.0, 0.0, 0.0], 2.2e7, 0.0, 1.0, 0.1)
        self.assertEqual(epoch.num_sv, 1)
        self.assertEqual(epoch.sv_pos.shape, (1, 3))

    def test_mismatched_satellite_states(self):
        with self.assertRaises(ValueError):
            ObservationEpoch(self.sv_pos[:4], self.sv_vel, self.psr, np.zeros(5), self.var, self.var)

    def test_mismatched_measurements(self):
        with self.assertRaises(ValueError):
            ObservationEpoch(self.sv_pos, self.sv_vel, self.psr, np.zeros(4), self.var, self.var)
        with self.assertRaises(ValueError):
            ObservationEpoch(self.sv_pos, self.sv_vel, self.psr, np.zeros(5), self.var[:3], self.var)


if __name__ == '__main__':
    unittest.main()
