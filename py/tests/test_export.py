#!/usr/bin/env python3
import os
import struct
import tempfile
import unittest
import zlib

import cbor2
import numpy as np
from cobs import cobs

from pulsetrain.decoder import decode
from pulsetrain.errors import InvalidBufferLength
from pulsetrain.export import decode_frame, encode_frame, to_c_header
from pulsetrain.generator import pulse_train
from pulsetrain.testcase import TestCase
from pulsetrain.vcd import dump_vcd


class CHeaderTests(TestCase):

    def test_u8_header(self):
        pt = pulse_train(self.registry["v6-60-2"])
        header = to_c_header(pt, name="v6_60_2")
        lines = header.splitlines()
        self.assertEqual(lines[0], "#ifndef V6_60_2_H")
        self.assertIn("static const uint8_t v6_60_2[7200] = {", lines)
        self.assertTrue(lines[6].startswith("0x01, 0x01,"))
        self.assertTrue(header.endswith("#endif\n"))
        values = [v for line in lines if line.startswith("0x") for v in line.split()]
        self.assertEqual(len(values), 7200)

    def test_u32_header(self):
        pt = pulse_train(self.registry["i4-60-2"], 32)
        header = to_c_header(pt)
        self.assertIn("static const uint32_t pulse_train[7200] = {", header)
        self.assertTrue(header.splitlines()[6].startswith("0x00000002,"))


class FrameTests(TestCase):

    def test_frame(self):
        pt = pulse_train(self.registry["v6-60-2"], 16)
        frame = encode_frame("v6-60-2", pt)
        self.assertEqual(frame[0], 0)
        self.assertEqual(frame[-1], 0)
        self.assertNotIn(0, frame[1:-1])

        message = decode_frame(frame)
        self.assertEqual(message["name"], "v6-60-2")
        self.assertEqual(message["width"], 16)
        self.assertEqual(message["data"].dtype, np.uint16)
        self.assertTrue(np.array_equal(message["data"], pt))

    def test_little_endian_payload(self):
        pt = pulse_train(self.registry["v6-60-2"], 32)
        payload = cobs.decode(encode_frame("v6", pt).strip(b"\0"))
        message = cbor2.loads(payload[2:-4])
        self.assertEqual(message["data"][:4], struct.pack("<I", int(pt[0])))

    def _frame(self, pdu, crc=None):
        if crc is None:
            crc = zlib.crc32(pdu)
        payload = struct.pack("<H", len(pdu)) + pdu + struct.pack("<I", crc)
        return b"\0" + cobs.encode(payload) + b"\0"

    def test_bad_crc(self):
        pdu = cbor2.dumps({"type": "pulse-train", "name": "x", "width": 8,
                           "data": bytes(7200)})
        with self.assertRaises(ValueError):
            decode_frame(self._frame(pdu, crc=zlib.crc32(pdu) ^ 1))

    def test_short_data(self):
        pdu = cbor2.dumps({"type": "pulse-train", "name": "x", "width": 8,
                           "data": bytes(100)})
        with self.assertRaises(InvalidBufferLength):
            decode_frame(self._frame(pdu))

    def test_wrong_type(self):
        pdu = cbor2.dumps({"type": "request"})
        with self.assertRaises(ValueError):
            decode_frame(self._frame(pdu))


class VcdTests(TestCase):

    def test_dump(self):
        log = decode(pulse_train(self.registry["v6-60-2"]))
        fd, path = tempfile.mkstemp(suffix=".vcd")
        os.close(fd)
        try:
            dump_vcd(log, path, rpm=1000, cycles=2)
            with open(path) as f:
                text = f.read()
        finally:
            os.remove(path)

        self.assertIn("$timescale", text)
        for name in ("cam", "crank", "tdc0", "tdc5"):
            self.assertIn(name, text)
        # 1000 rpm is 60000 samples/s, two cycles end after 240 ms
        timestamps = [int(line[1:]) for line in text.splitlines()
                      if line.startswith("#")]
        self.assertEqual(timestamps, sorted(timestamps))
        self.assertWithin(timestamps[-1], 120000000, 240000000)


if __name__ == "__main__":
    unittest.main()
