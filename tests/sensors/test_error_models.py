import unittest

import numpy as np

from sturdins.core.constants import CLIGHT
from sturdins.sensors.clock import OSCILLATORS, ClockSpec
from sturdins.sensors.imu import DPH, IMU_GRADES, MG, ImuSpec


class TestImuSpec(unittest.TestCase):

    def test_grades(self):
        self.assertEqual(set(IMU_GRADES), {'navigation', 'tactical', 'industrial', 'consumer'})
        tactical = ImuSpec.from_grade('tactical')
        self.assertAlmostEqual(tactical.accel_bias_instability, 9.80665e-3)
        self.assertAlmostEqual(tactical.gyro_bias_instability, np.radians(1.0) / 3600.0)

    def test_grades_ordered_by_quality(self):
        order = ['navigation', 'tactical', 'industrial', 'consumer']
        gyro = [IMU_GRADES[g].gyro_bias_instability for g in order]
        accel = [IMU_GRADES[g].accel_noise for g in order]
        self.assertEqual(gyro, sorted(gyro))
        self.assertEqual(accel, sorted(accel))

    def test_case_insensitive(self):
        self.assertEqual(ImuSpec.from_grade('Consumer'), IMU_GRADES['consumer'])

    def test_unknown_grade(self):
        with self.assertRaises(ValueError):
            ImuSpec.from_grade('automotive')

    def test_negative_parameter(self):
        with self.assertRaises(ValueError):
            ImuSpec(1.0 * MG, -0.01, 1.0 * DPH, 0.001)

    def test_bias_psd(self):
        spec = ImuSpec(0.01, 0.001, 1e-5, 1e-4)
        s_ba, s_bg = spec.bias_psd(100.0, 200.0)
        self.assertAlmostEqual(s_ba, 2.0 * 0.01**2 / 100.0)
        self.assertAlmostEqual(s_bg, 2.0 * 1e-10 / 200.0)


class TestClockSpec(unittest.TestCase):

    def test_psd(self):
        spec = ClockSpec(h0=2e-19, h1=7e-21, h2=2e-20)
        self.assertAlmostEqual(spec.bias_psd, CLIGHT**2 * 1e-19, places=6)
        self.assertAlmostEqual(spec.drift_psd, CLIGHT**2 * 2.0 * np.pi**2 * 2e-20, places=6)

    def test_oscillators(self):
        self.assertEqual(ClockSpec.from_oscillator('TCXO'), OSCILLATORS['tcxo'])
        # Better oscillators wander less
        self.assertLess(OSCILLATORS['ocxo'].drift_psd, OSCILLATORS['tcxo'].drift_psd)
        self.assertLess(OSCILLATORS['rubidium'].drift_psd, OSCILLATORS['ocxo'].drift_psd)

    def test_unknown_oscillator(self):
        with self.assertRaises(ValueError):
            ClockSpec.from_oscillator('quartz')


if __name__ == '__main__':
    unittest.main()
