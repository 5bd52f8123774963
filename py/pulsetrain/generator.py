import logging

from pulsetrain.bits import new_buffer, word_for_buffer, word_for_width
from pulsetrain.errors import InvalidBufferLength
from pulsetrain.model import Level
from pulsetrain.tdc import tdc_positions
from pulsetrain.util import CYCLE_ANGLE
from pulsetrain.wheel import CamSignal, CrankSignal

log = logging.getLogger(__name__)


def generate(config, buffer, word=None):
    """Fill `buffer` with the pulse train of `config`.

    `buffer` holds CYCLE_ANGLE elements, one per 0.1 degree of the 720 degree
    cycle. Every element gets its cam and crank bits written and its TDC bits
    cleared, then each cylinder's TDC bit is raised on its single sample.
    `word` selects the bit layout and defaults to the one matching the
    buffer's dtype; it is required for buffers without one, such as lists.
    """
    if word is None:
        word = word_for_buffer(buffer)
    if len(buffer) != CYCLE_ANGLE:
        raise InvalidBufferLength(
            f"Pulse train buffer holds {len(buffer)} elements, expected {CYCLE_ANGLE}"
        )

    cam = CamSignal(config.cam)
    crank = CrankSignal(config.crank)
    tdc_clear = ~word.tdc_bits()

    for angle in range(CYCLE_ANGLE):
        value = int(buffer[angle]) & tdc_clear

        value = word.set_cam(value, cam.level)
        cam.advance(angle)

        value = word.set_crk(value, crank.level)
        crank.advance(angle)

        buffer[angle] = value

    positions = tdc_positions(config.ref_to_tdc0, config.cylinders)
    for cyl, angle in enumerate(positions):
        buffer[angle] = word.set_tdc(buffer[angle], cyl, Level.HIGH)

    log.debug(
        "generated %d-bit pulse train: crank %s, %d cam edges, TDCs at %s",
        word.width(),
        config.crank,
        len(config.cam.used_edges),
        positions,
    )
    return buffer


def pulse_train(config, width=8):
    word = word_for_width(width)
    return generate(config, new_buffer(word), word)
