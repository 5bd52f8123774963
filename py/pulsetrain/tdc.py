from pulsetrain.errors import InvalidCylinderCount, TdcOutOfRange
from pulsetrain.model import CylinderCount
from pulsetrain.util import CYCLE_ANGLE


def _count(cylinders):
    try:
        return CylinderCount(cylinders).val()
    except ValueError:
        raise InvalidCylinderCount(f"{cylinders} cylinders not supported")


def tdc_interval(cylinders, length=CYCLE_ANGLE):
    n = _count(cylinders)
    if length % n != 0:
        raise InvalidCylinderCount(f"{n} cylinders do not evenly divide {length}")
    return length // n


def tdc_positions(ref_to_tdc0, cylinders, length=CYCLE_ANGLE):
    """Angle of each cylinder's TDC, index k being cylinder k. Cylinders are
    spaced evenly from `ref_to_tdc0` and wrap around the end of the cycle."""
    interval = tdc_interval(cylinders, length)
    positions = [
        (ref_to_tdc0 + cyl * interval) % length for cyl in range(_count(cylinders))
    ]
    for cyl, pos in enumerate(positions):
        if not 0 <= pos < length:
            raise TdcOutOfRange(f"TDC {cyl} at {pos} outside of [0, {length - 1}]")
    if len(set(positions)) != len(positions):
        raise TdcOutOfRange(f"TDC positions overlap: {positions}")
    return positions
