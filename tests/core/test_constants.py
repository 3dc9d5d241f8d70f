#!/usr/bin/env python3
"""Test suite for physical constants and the ellipsoid container"""

import dataclasses
import unittest

import numpy as np

from sturdins.core.constants import (
    CLIGHT, D2R, E2_WGS84, FE_WGS84, OMGE, R2D, RE_WGS84, RP_WGS84, WGS84, Ellipsoid
)


class TestPhysicalConstants(unittest.TestCase):
    """Test physical constants values"""

    def test_speed_of_light(self):
        self.assertEqual(CLIGHT, 299792458.0)

    def test_wgs84(self):
        self.assertEqual(RE_WGS84, 6378137.0)
        self.assertAlmostEqual(1.0 / FE_WGS84, 298.257223563, places=9)
        self.assertAlmostEqual(OMGE, 7.2921151467e-5, places=15)
        self.assertAlmostEqual(RE_WGS84 * (1.0 - FE_WGS84), RP_WGS84, delta=1e-4)

    def test_unit_conversions(self):
        self.assertAlmostEqual(180.0 * D2R, np.pi)
        self.assertAlmostEqual(np.pi * R2D, 180.0)


class TestEllipsoid(unittest.TestCase):

    def test_defaults_are_wgs84(self):
        self.assertEqual(WGS84, Ellipsoid())
        self.assertEqual(WGS84.a, RE_WGS84)
        self.assertAlmostEqual(WGS84.e2, E2_WGS84, places=15)
        self.assertAlmostEqual(WGS84.b, RP_WGS84, delta=1e-4)

    def test_frozen(self):
        with self.assertRaises(dataclasses.FrozenInstanceError):
            WGS84.a = 0.0

    def test_sphere(self):
        sphere = Ellipsoid(a=6371000.0, f=0.0)
        self.assertEqual(sphere.e2, 0.0)
        self.assertEqual(sphere.b, 6371000.0)


if __name__ == '__main__':
    unittest.main()
