import os
import shutil
import struct
import tempfile
import unittest

import numpy as np

from sturdins.io.results import (
    RESULT_DTYPE, RESULT_FIELDS, ResultWriter, make_record, read_results, results_to_dataframe
)


class TestResultRecords(unittest.TestCase):

    def setUp(self):
        self.test_dir = tempfile.mkdtemp()
        self.path = os.path.join(self.test_dir, 'nav.bin')

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def record(self, t):
        return make_record(t, [np.radians(32.5), np.radians(-85.25), 210.0],
                           [1.0, -2.0, 0.5], np.radians([1.0, -2.0, 45.0]), 100.0, -0.5)

    def test_layout(self):
        self.assertEqual(RESULT_DTYPE.itemsize, 96)
        self.assertEqual(RESULT_DTYPE.names, RESULT_FIELDS)
        self.assertEqual(len(RESULT_FIELDS), 12)

    def test_make_record_degrees(self):
        rec = self.record(1.0)
        self.assertAlmostEqual(float(rec['lat']), 32.5, places=10)
        self.assertAlmostEqual(float(rec['lon']), -85.25, places=10)
        self.assertAlmostEqual(float(rec['yaw']), 45.0, places=10)
        self.assertEqual(float(rec['h']), 210.0)

    def test_write_and_read(self):
        with ResultWriter(self.path) as writer:
            for k in range(5):
                writer.write(self.record(0.1 * k))
            self.assertEqual(writer.count, 5)

        self.assertEqual(os.path.getsize(self.path), 5 * 96)
        records = read_results(self.path)
        self.assertEqual(len(records), 5)
        np.testing.assert_allclose(records['t'], 0.1 * np.arange(5))
        np.testing.assert_allclose(records['cb'], 100.0)

    def test_little_endian_field_order(self):
        with ResultWriter(self.path) as writer:
            writer.write(self.record(3.0))
        with open(self.path, 'rb') as f:
            values = struct.unpack('<12d', f.read())
        self.assertEqual(values[0], 3.0)
        self.assertEqual(values[3], 210.0)
        self.assertEqual(values[5], -2.0)
        self.assertEqual(values[11], -0.5)

    def test_reopen_closes_previous_file(self):
        writer = ResultWriter(self.path)
        writer.open()
        first = writer._fh
        writer.write(self.record(0.0))
        writer.open()
        self.assertTrue(first.closed)
        self.assertEqual(writer.count, 0)
        writer.write(self.record(1.0))
        writer.close()

        records = read_results(self.path)
        self.assertEqual(len(records), 1)
        self.assertEqual(records['t'][0], 1.0)

    def test_write_closed(self):
        writer = ResultWriter(self.path)
        with self.assertRaises(ValueError):
            writer.write(self.record(0.0))

    def test_truncated_file(self):
        with ResultWriter(self.path) as writer:
            writer.write(self.record(0.0))
        with open(self.path, 'ab') as f:
            f.write(b'\x00' * 10)
        with self.assertRaises(ValueError):
            read_results(self.path)

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            read_results(os.path.join(self.test_dir, 'missing.bin'))

    def test_dataframe(self):
        records = np.stack([self.record(0.0), self.record(1.0)])
        df = results_to_dataframe(records)
        self.assertEqual(list(df.columns), list(RESULT_FIELDS))
        self.assertEqual(len(df), 2)
        self.assertEqual(df['t'].iloc[1], 1.0)

        single = results_to_dataframe(self.record(2.0))
        self.assertEqual(len(single), 1)


if __name__ == '__main__':
    unittest.main()
