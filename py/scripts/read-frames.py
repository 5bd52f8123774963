#!/usr/bin/env python
import sys
import json

from pulsetrain.decoder import decode
from pulsetrain.export import decode_frame

frame = b""
while True:
    b = sys.stdin.buffer.read(1)
    if b == b"":
        break
    if b == b"\0":
        if len(frame) == 0:
            continue
        message = decode_frame(frame)
        log = decode(message["data"])
        print(json.dumps({
            "name": message["name"],
            "width": message["width"],
            "cam_edges": [e.angle for e in log.filter_cam()],
            "tdcs": [e.angle for e in log.filter_tdc()],
        }))
        frame = b""
    else:
        frame += b
