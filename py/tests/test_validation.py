#!/usr/bin/env python3
import unittest

from pulsetrain.decoder import decode
from pulsetrain.events import CamEdge, CrankEdge, TdcMark
from pulsetrain.generator import pulse_train
from pulsetrain.model import CrankWheel, Level
from pulsetrain.testcase import TestCase
from pulsetrain.validation import (
    expected_cam_level,
    expected_crank_level,
    validate_pulse_train,
)


class ExpectedLevelTests(TestCase):

    def test_cam_counts_preceding_edges(self):
        cam = self.registry["v6-60-2"].cam
        self.assertEqual(expected_cam_level(cam, 0), Level.HIGH)
        self.assertEqual(expected_cam_level(cam, 289), Level.HIGH)
        self.assertEqual(expected_cam_level(cam, 290), Level.LOW)
        self.assertEqual(expected_cam_level(cam, 390), Level.HIGH)
        self.assertEqual(expected_cam_level(cam, 7199), Level.HIGH)

    def test_crank(self):
        wheel = CrankWheel(60, 2, True)
        self.assertEqual(expected_crank_level(wheel, 0), Level.LOW)
        self.assertEqual(expected_crank_level(wheel, 30), Level.LOW)
        self.assertEqual(expected_crank_level(wheel, 31), Level.HIGH)
        self.assertEqual(expected_crank_level(wheel, 3449), Level.LOW)
        self.assertEqual(expected_crank_level(wheel, 3481), Level.HIGH)
        self.assertEqual(expected_crank_level(wheel, 3600), Level.HIGH)
        self.assertEqual(expected_crank_level(wheel, 3601), Level.LOW)


class ValidatePulseTrainTests(TestCase):

    def test_registry_configs_validate(self):
        for name, config in self.registry.items():
            for width in (8, 16, 32):
                is_valid, msg = validate_pulse_train(pulse_train(config, width), config)
                self.assertTrue(is_valid, f"{name}/{width}: {msg}")

    def test_detects_cam_error(self):
        config = self.registry["v6-60-2"]
        pt = pulse_train(config)
        pt[100] ^= 0x01
        is_valid, msg = validate_pulse_train(pt, config)
        self.assertFalse(is_valid)
        self.assertEqual(msg, "Cam level LOW at angle 100")

    def test_detects_crank_error(self):
        config = self.registry["v6-60-2"]
        pt = pulse_train(config)
        pt[3500] ^= 0x02
        is_valid, msg = validate_pulse_train(pt, config)
        self.assertFalse(is_valid)
        self.assertEqual(msg, "Crank level LOW at angle 3500")

    def test_detects_tdc_errors(self):
        config = self.registry["v6-60-2"]
        pt = pulse_train(config)
        pt[659] |= 0x04
        is_valid, msg = validate_pulse_train(pt, config)
        self.assertFalse(is_valid)
        self.assertEqual(msg, "Unexpected TDC 0 at angle 659")

        pt = pulse_train(config)
        pt[1858] &= ~0x08 & 0xFF
        is_valid, msg = validate_pulse_train(pt, config)
        self.assertFalse(is_valid)
        self.assertEqual(msg, "Missing TDC 1 at angle 1858")

    def test_other_config(self):
        pt = pulse_train(self.registry["i4-60-2"])
        is_valid, msg = validate_pulse_train(pt, self.registry["v6-60-2"])
        self.assertFalse(is_valid)


class DecoderTests(TestCase):

    def setUp(self):
        super().setUp()
        self.config = self.registry["v6-60-2"]
        self.log = decode(pulse_train(self.config))

    def test_cam_edges(self):
        cam = self.log.filter_cam()
        self.assertEqual(cam[0], CamEdge(angle=0, level=Level.HIGH))
        self.assertEqual(
            [e.angle for e in cam[1:]],
            [e + 1 for e in self.config.cam.used_edges],
        )
        self.assertEqual(cam.level_at(295), Level.LOW)
        self.assertEqual(cam.level_at(7199), Level.HIGH)

    def test_crank_edges(self):
        crank = self.log.filter_crank()
        self.assertEqual(crank[0], CrankEdge(angle=0, level=Level.LOW))
        self.assertEqual(crank[1], CrankEdge(angle=31, level=Level.HIGH))
        gap = crank.filter_between(3452, 3600)
        self.assertEqual(len(gap), 0)
        self.assertEqual(crank.filter_between(3601, 3601)[0].level, Level.LOW)

    def test_tdc_marks(self):
        self.assertEqual(
            self.log.filter_tdc(),
            [TdcMark(angle=a, cylinder=c)
             for c, a in enumerate([658, 1858, 3058, 4258, 5458, 6658])],
        )
        self.assertEqual(self.log.filter_tdc(3), [TdcMark(angle=4258, cylinder=3)])

    def test_ordered(self):
        angles = [e.angle for e in self.log]
        self.assertEqual(angles, sorted(angles))


if __name__ == "__main__":
    unittest.main()
