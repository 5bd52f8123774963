from pulsetrain.bits import MAX_CYLINDERS, word_for_buffer
from pulsetrain.events import *


def decode(buffer, word=None) -> Log:
    """Turn a pulse train back into signal edges and TDC marks, in angle
    order. The first cam and crank entries are at angle 0 and carry the
    starting levels."""
    if word is None:
        word = word_for_buffer(buffer)

    result = Log()
    cam = None
    crank = None

    for angle, value in enumerate(buffer):
        cam_lvl = word.get_cam(value)
        if cam_lvl != cam:
            result.append(CamEdge(angle=angle, level=cam_lvl))
            cam = cam_lvl

        crk_lvl = word.get_crk(value)
        if crk_lvl != crank:
            result.append(CrankEdge(angle=angle, level=crk_lvl))
            crank = crk_lvl

        for cyl in range(MAX_CYLINDERS):
            if word.get_tdc(value, cyl) == Level.HIGH:
                result.append(TdcMark(angle=angle, cylinder=cyl))

    return result
