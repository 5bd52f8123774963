from pulsetrain.bits import MAX_CYLINDERS, word_for_buffer
from pulsetrain.errors import InvalidBufferLength
from pulsetrain.model import Level
from pulsetrain.tdc import tdc_positions
from pulsetrain.util import CYCLE_ANGLE, REV_ANGLE

# Validation
#
# The generator walks the cycle once, carrying cam and crank state from one
# angle to the next. The expected levels here are computed directly from the
# angle instead, so a generated buffer can be checked against an independent
# derivation.
#
# A transition at angle a is applied after sample a is written, so it shows
# from sample a + 1 on.


def expected_cam_level(cam, angle):
    edges_before = sum(1 for e in cam.used_edges if e < angle)
    if edges_before % 2:
        return ~cam.first_level
    return cam.first_level


def expected_crank_level(wheel, angle):
    first = wheel.first_level()
    rev_angle = angle % REV_ANGLE

    if rev_angle == 0:
        # The second revolution starts on the tail of the first one's gap
        return first if angle == 0 else wheel.gap_level()

    last_transition = rev_angle - 1
    if last_transition >= wheel.gap_start:
        return wheel.gap_level()

    toggles = last_transition // wheel.half_tooth
    return ~first if toggles % 2 else first


def validate_pulse_train(buffer, config, word=None) -> (bool, str):
    """Check every element of `buffer` against `config`. Returns (True, None)
    or (False, reason) for the first mismatch found."""
    if word is None:
        word = word_for_buffer(buffer)
    if len(buffer) != CYCLE_ANGLE:
        raise InvalidBufferLength(
            f"Pulse train buffer holds {len(buffer)} elements, expected {CYCLE_ANGLE}"
        )

    tdcs = {
        angle: cyl
        for cyl, angle in enumerate(tdc_positions(config.ref_to_tdc0, config.cylinders))
    }

    for angle, value in enumerate(buffer):
        cam = word.get_cam(value)
        if cam != expected_cam_level(config.cam, angle):
            return False, f"Cam level {cam.name} at angle {angle}"

        crank = word.get_crk(value)
        if crank != expected_crank_level(config.crank, angle):
            return False, f"Crank level {crank.name} at angle {angle}"

        for cyl in range(MAX_CYLINDERS):
            high = word.get_tdc(value, cyl) == Level.HIGH
            if high and tdcs.get(angle) != cyl:
                return False, f"Unexpected TDC {cyl} at angle {angle}"
            if not high and tdcs.get(angle) == cyl:
                return False, f"Missing TDC {cyl} at angle {angle}"

    return True, None
