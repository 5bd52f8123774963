import unittest

from pulsetrain.bits import word_for_buffer
from pulsetrain.registry import default_registry


class TestCase(unittest.TestCase):

    def assertWithin(self, val, lower, upper, msg=None):
        self.assertGreaterEqual(val, lower, msg)
        self.assertLessEqual(val, upper, msg)

    def assertLevel(self, buffer, angle, signal, expected, cylinder=None):
        word = word_for_buffer(buffer)
        if signal == "cam":
            actual = word.get_cam(buffer[angle])
        elif signal == "crank":
            actual = word.get_crk(buffer[angle])
        elif signal == "tdc":
            actual = word.get_tdc(buffer[angle], cylinder)
        else:
            raise ValueError(f"Unknown signal {signal}")
        self.assertEqual(
            actual, expected, f"{signal} level at angle {angle}: {actual.name}"
        )

    def setUp(self):
        self.registry = default_registry()
