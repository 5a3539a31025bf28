import os
import sys
import unittest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))
from formatting import pretty_bytes


class TestPrettyBytes(unittest.TestCase):
    def test_small_values(self):
        self.assertEqual(pretty_bytes(0), "0 B")
        self.assertEqual(pretty_bytes(1), "1 B")
        self.assertEqual(pretty_bytes(999), "999 B")

    def test_decimal_units(self):
        self.assertEqual(pretty_bytes(1000), "1 kB")
        self.assertEqual(pretty_bytes(1500), "1.5 kB")
        self.assertEqual(pretty_bytes(1337000), "1.34 MB")
        self.assertEqual(pretty_bytes(10 ** 9), "1 GB")

    def test_negative(self):
        self.assertEqual(pretty_bytes(-1500), "-1.5 kB")


if __name__ == "__main__":
    unittest.main()
