import unittest

import numpy as np

from sturdins.coordinate.transforms import (ecef2lla, ecef2ned_dcm, ecef2nedv, lla2ecef, ned2ecef_dcm,
                                            ned2ecefv)
from sturdins.core.constants import FE_WGS84, RE_WGS84, Ellipsoid


class TestCoordinateTransforms(unittest.TestCase):

    def setUp(self):
        self.points = [
            np.array([np.radians(32.0), np.radians(-85.5), 200.0]),       # Auburn, AL
            np.array([np.radians(35.6762), np.radians(139.6503), 40.0]),  # Tokyo
            np.array([0.0, 0.0, 0.0]),
            np.array([np.radians(-35.0), np.radians(150.0), 100.0]),
            np.array([np.radians(60.0), np.radians(10.0), 20000.0]),
        ]

    def test_lla2ecef_known_values(self):
        np.testing.assert_allclose(lla2ecef(np.array([0.0, 0.0, 0.0])), [RE_WGS84, 0.0, 0.0], atol=1e-6)
        np.testing.assert_allclose(lla2ecef(np.array([0.0, np.pi / 2, 100.0])),
                                   [0.0, RE_WGS84 + 100.0, 0.0], atol=1e-6)

        b = RE_WGS84 * (1.0 - FE_WGS84)
        np.testing.assert_allclose(lla2ecef(np.array([np.pi / 2, 0.0, 0.0])), [0.0, 0.0, b], atol=1e-6)

    def test_round_trip(self):
        for lla in self.points:
            recovered = ecef2lla(lla2ecef(lla))
            np.testing.assert_allclose(recovered[:2], lla[:2], atol=1e-11,
                                       err_msg=f"Round-trip failed for lat/lon {lla}")
            np.testing.assert_allclose(recovered[2], lla[2], atol=1e-6,
                                       err_msg=f"Round-trip failed for height {lla}")

    def test_round_trip_at_pole(self):
        lla = np.array([np.pi / 2, 0.0, 150.0])
        recovered = ecef2lla(lla2ecef(lla))
        self.assertAlmostEqual(recovered[0], np.pi / 2, places=9)
        self.assertAlmostEqual(recovered[2], 150.0, places=5)

    def test_alternate_ellipsoid(self):
        sphere = Ellipsoid(a=6371000.0, f=0.0)
        lla = np.array([np.radians(45.0), np.radians(45.0), 0.0])
        xyz = lla2ecef(lla, sphere)
        self.assertAlmostEqual(np.linalg.norm(xyz), 6371000.0, places=6)
        np.testing.assert_allclose(ecef2lla(xyz, sphere), lla, atol=1e-9)

    def test_ecef2ned_dcm_axes(self):
        C_e_n = ecef2ned_dcm(np.array([0.0, 0.0, 0.0]))
        # At lat=0, lon=0 north is +Z, east is +Y and down is -X
        np.testing.assert_allclose(C_e_n @ np.array([0.0, 0.0, 1.0]), [1.0, 0.0, 0.0], atol=1e-15)
        np.testing.assert_allclose(C_e_n @ np.array([0.0, 1.0, 0.0]), [0.0, 1.0, 0.0], atol=1e-15)
        np.testing.assert_allclose(C_e_n @ np.array([1.0, 0.0, 0.0]), [0.0, 0.0, -1.0], atol=1e-15)

    def test_dcm_orthonormal_and_inverse(self):
        for lla in self.points:
            C_e_n = ecef2ned_dcm(lla)
            np.testing.assert_allclose(C_e_n @ C_e_n.T, np.eye(3), atol=1e-15)
            np.testing.assert_allclose(ned2ecef_dcm(lla) @ C_e_n, np.eye(3), atol=1e-15)

    def test_down_points_toward_lower_height(self):
        lla = self.points[0]
        down_ecef = ned2ecef_dcm(lla) @ np.array([0.0, 0.0, 10.0])
        moved = ecef2lla(lla2ecef(lla) + down_ecef)
        self.assertAlmostEqual(moved[2], lla[2] - 10.0, places=6)

    def test_velocity_rotation(self):
        lla = self.points[1]
        v_ned = np.array([10.0, -3.0, 0.5])
        v_ecef = ned2ecefv(v_ned, lla)
        self.assertAlmostEqual(np.linalg.norm(v_ecef), np.linalg.norm(v_ned), places=12)
        np.testing.assert_allclose(ecef2nedv(v_ecef, lla), v_ned, atol=1e-12)


if __name__ == '__main__':
    unittest.main()
