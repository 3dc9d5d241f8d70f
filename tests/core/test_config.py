#!/usr/bin/env python3
"""Test suite for the filter configuration"""

import unittest

from sturdins.core.config import LS_MAX_ITER, LS_TOL, STD_POS, FilterConfig


class TestFilterConfig(unittest.TestCase):

    def test_defaults(self):
        cfg = FilterConfig()
        self.assertEqual(cfg.std_pos, STD_POS)
        self.assertEqual(cfg.min_gnss_satellites, 1)
        self.assertIsNone(cfg.innovation_threshold)
        self.assertEqual(cfg.discretization, 'first_order')
        self.assertEqual(LS_MAX_ITER, 20)
        self.assertEqual(LS_TOL, 1e-4)

    def test_from_dict(self):
        cfg = FilterConfig.from_dict({
            'std_pos': 5.0,
            'min_gnss_satellites': 4,
            'innovation_threshold': 5.0,
            'discretization': 'van_loan',
        })
        self.assertEqual(cfg.std_pos, 5.0)
        self.assertEqual(cfg.min_gnss_satellites, 4)
        self.assertEqual(cfg.innovation_threshold, 5.0)
        self.assertEqual(cfg.discretization, 'van_loan')

    def test_unknown_key(self):
        with self.assertRaises(ValueError):
            FilterConfig.from_dict({'std_position': 5.0})

    def test_invalid_values(self):
        with self.assertRaises(ValueError):
            FilterConfig(discretization='euler')
        with self.assertRaises(ValueError):
            FilterConfig(tau_gyro_bias=0.0)
        with self.assertRaises(ValueError):
            FilterConfig(min_gnss_satellites=0)


if __name__ == '__main__':
    unittest.main()
