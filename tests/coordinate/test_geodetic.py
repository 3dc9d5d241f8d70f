import unittest
from dataclasses import replace

import numpy as np

from sturdins.coordinate.geodetic import EarthModel
from sturdins.core.constants import E2_WGS84, OMGE, RE_WGS84, RP_WGS84, WGS84


class TestEarthModel(unittest.TestCase):

    def setUp(self):
        self.earth = EarthModel()

    def test_radii_at_equator(self):
        Rn, Re = self.earth.radii_of_curvature(0.0)
        self.assertAlmostEqual(Re, RE_WGS84, places=6)
        self.assertAlmostEqual(Rn, RE_WGS84 * (1.0 - E2_WGS84), places=6)

    def test_radii_at_pole_are_equal(self):
        Rn, Re = self.earth.radii_of_curvature(np.pi / 2)
        self.assertAlmostEqual(Rn, Re, places=4)
        self.assertAlmostEqual(Re, RE_WGS84**2 / RP_WGS84, delta=1e-3)

    def test_meridian_radius_smaller_than_transverse(self):
        for lat in np.radians([10.0, 32.0, 60.0]):
            Rn, Re = self.earth.radii_of_curvature(lat)
            self.assertLess(Rn, Re)

    def test_geocentric_radius(self):
        self.assertAlmostEqual(self.earth.geocentric_radius(0.0), RE_WGS84, places=6)
        self.assertAlmostEqual(self.earth.geocentric_radius(np.pi / 2), RP_WGS84, delta=1e-3)

    def test_normal_gravity(self):
        self.assertAlmostEqual(self.earth.normal_gravity(0.0), 9.7803253359, places=9)
        self.assertAlmostEqual(self.earth.normal_gravity(np.pi / 2), 9.8321849378, places=6)

    def test_gravity_vector_at_surface(self):
        lat = np.radians(32.0)
        g = self.earth.gravity_vector(lat, 0.0)
        self.assertEqual(g[0], 0.0)
        self.assertEqual(g[1], 0.0)
        self.assertAlmostEqual(g[2], self.earth.normal_gravity(lat), places=12)

    def test_gravity_vector_with_height(self):
        lat = np.radians(45.0)
        g0 = self.earth.normal_gravity(lat)
        g = self.earth.gravity_vector(lat, 1000.0)
        # Free-air gradient of about 3.086e-6 s^-2
        self.assertAlmostEqual(g0 - g[2], 3.086e-3, delta=1e-5)
        self.assertAlmostEqual(g[0], -8.08e-9 * 1000.0, places=12)
        self.assertEqual(g[1], 0.0)

    def test_earth_rate_vector(self):
        np.testing.assert_allclose(self.earth.earth_rate_vector(0.0), [OMGE, 0.0, 0.0], atol=1e-20)
        np.testing.assert_allclose(self.earth.earth_rate_vector(np.pi / 2), [0.0, 0.0, -OMGE], atol=1e-18)
        lat = np.radians(32.0)
        w = self.earth.earth_rate_vector(lat)
        self.assertAlmostEqual(np.linalg.norm(w), OMGE, places=18)
        # Points up (negative down) in the northern hemisphere
        self.assertLess(w[2], 0.0)

    def test_transport_rate_vector(self):
        lat, h = np.radians(32.0), 200.0
        Rn, Re = self.earth.radii_of_curvature(lat)
        w = self.earth.transport_rate_vector(lat, h, 100.0, 0.0)
        np.testing.assert_allclose(w, [0.0, -100.0 / (Rn + h), 0.0], atol=1e-20)
        w = self.earth.transport_rate_vector(lat, h, 0.0, 50.0)
        np.testing.assert_allclose(w, [50.0 / (Re + h), 0.0, -50.0 * np.tan(lat) / (Re + h)], atol=1e-20)
        np.testing.assert_array_equal(np.abs(self.earth.transport_rate_vector(lat, h, 0.0, 0.0)), 0.0)

    def test_injected_ellipsoid(self):
        still = EarthModel(replace(WGS84, omega=0.0))
        np.testing.assert_array_equal(np.abs(still.earth_rate_vector(np.radians(40.0))), 0.0)
        self.assertEqual(still.normal_gravity(0.3), self.earth.normal_gravity(0.3))


if __name__ == '__main__':
    unittest.main()
