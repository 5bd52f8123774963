import struct
import zlib

import cbor2 as cbor
import numpy as np
from cobs import cobs

from pulsetrain.bits import word_for_buffer, word_for_width
from pulsetrain.errors import InvalidBufferLength
from pulsetrain.util import CYCLE_ANGLE


def to_c_header(buffer, word=None, name="pulse_train"):
    if word is None:
        word = word_for_buffer(buffer)
    width = word.width()
    digits = width // 4
    guard = name.upper() + "_H"

    lines = [
        f"#ifndef {guard}",
        f"#define {guard}",
        "",
        "#include <stdint.h>",
        "",
        f"static const uint{width}_t {name}[{len(buffer)}] = {{",
    ]

    per_line = 64 // digits
    for start in range(0, len(buffer), per_line):
        chunk = buffer[start:start + per_line]
        lines.append(" ".join(f"0x{int(v):0{digits}x}," for v in chunk))

    lines += ["};", "", "#endif", ""]
    return "\n".join(lines)


def _check_length(data):
    if len(data) != CYCLE_ANGLE:
        raise InvalidBufferLength(
            f"Pulse train holds {len(data)} elements, expected {CYCLE_ANGLE}"
        )


def encode_frame(name, buffer, word=None):
    """CBOR message carrying the pulse train, framed for a serial link:
    zero delimited COBS of <u16 length> pdu <u32 crc32>"""
    if word is None:
        word = word_for_buffer(buffer)
    _check_length(buffer)

    data = np.asarray(buffer).astype(np.dtype(word.DTYPE).newbyteorder("<")).tobytes()
    pdu = cbor.dumps(
        {
            "type": "pulse-train",
            "name": name,
            "width": word.width(),
            "data": data,
        }
    )
    if len(pdu) > 0xFFFF:
        raise ValueError(f"Message too long for frame: {len(pdu)} bytes")

    crc = zlib.crc32(pdu)
    lenbytes = struct.pack("<H", len(pdu))
    crcbytes = struct.pack("<I", crc)
    payload = lenbytes + pdu + crcbytes
    return b"\0" + cobs.encode(payload) + b"\0"


def decode_frame(frame):
    """Inverse of encode_frame. Returns the message with `data` turned back
    into a numpy array of the message's word width."""
    decoded = cobs.decode(frame.strip(b"\0"))
    lengthbytes = decoded[0:2]
    crcbytes = decoded[-4:]
    pdu = decoded[2:-4]
    crc = struct.unpack("<I", crcbytes)[0]
    length = struct.unpack("<H", lengthbytes)[0]
    if len(pdu) != length:
        raise ValueError(f"Length mismatch: {len(pdu)} pdu but header is {length}")
    if zlib.crc32(pdu) != crc:
        raise ValueError("CRC failure")

    message = cbor.loads(pdu)
    if message.get("type") != "pulse-train":
        raise ValueError(f"Unexpected message type: {message.get('type')}")

    word = word_for_width(message["width"])
    data = np.frombuffer(message["data"], dtype=np.dtype(word.DTYPE).newbyteorder("<"))
    _check_length(data)
    message["data"] = data.astype(word.DTYPE)
    return message
