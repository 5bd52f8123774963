from dataclasses import dataclass, field
from enum import IntEnum
from numbers import Integral
from types import MappingProxyType
from typing import Optional, Tuple

from pulsetrain.errors import *
from pulsetrain.util import CYCLE_ANGLE, REV_ANGLE

MAX_CAM_EDGES = 20


class Level(IntEnum):
    LOW = 0
    HIGH = 1

    def __invert__(self):
        return Level.LOW if self == Level.HIGH else Level.HIGH


class CylinderCount(IntEnum):
    CYL4 = 4
    CYL6 = 6

    def val(self):
        return int(self)


@dataclass(frozen=True)
class CrankWheel:
    """Toothed crankshaft wheel with a missing-tooth gap once per revolution.

    A normal wheel starts High at angle 0 and holds the gap Low; an inverted
    wheel starts Low and holds the gap High.
    """
    tooth_count: int
    missing_tooth_count: int
    gap_is_inverted: bool = False

    SUPPORTED_TEETH = (30, 60, 120)
    SUPPORTED_MISSING = (1, 2)

    def __post_init__(self):
        if self.tooth_count not in self.SUPPORTED_TEETH:
            raise UnsupportedCrankWheel(
                f"{self.tooth_count} teeth not supported, expected one of "
                + f"{self.SUPPORTED_TEETH}"
            )
        if self.missing_tooth_count not in self.SUPPORTED_MISSING:
            raise UnsupportedCrankWheel(
                f"{self.missing_tooth_count} missing teeth not supported, "
                + f"expected one of {self.SUPPORTED_MISSING}"
            )

    @property
    def tooth_angle(self):
        return REV_ANGLE // self.tooth_count

    @property
    def half_tooth(self):
        return self.tooth_angle // 2

    @property
    def gap_span(self):
        return self.missing_tooth_count * self.tooth_angle

    @property
    def gap_start(self):
        """Angle within a revolution where the gap window begins"""
        return REV_ANGLE - self.gap_span

    def first_level(self):
        return Level.LOW if self.gap_is_inverted else Level.HIGH

    def gap_level(self):
        return ~self.first_level()

    @classmethod
    def preset(cls, name):
        try:
            return CRANK_WHEELS[name]
        except KeyError:
            raise UnsupportedCrankWheel(f"Unknown crank wheel preset: {name}")

    def __str__(self):
        name = f"{self.tooth_count}-{self.missing_tooth_count}"
        return name + "-inv" if self.gap_is_inverted else name


CRANK_WHEELS = MappingProxyType({
    str(wheel): wheel
    for wheel in (
        CrankWheel(teeth, missing, inverted)
        for inverted in (False, True)
        for teeth in CrankWheel.SUPPORTED_TEETH
        for missing in CrankWheel.SUPPORTED_MISSING
    )
})


def _check_integral(value, what):
    if not isinstance(value, Integral) or isinstance(value, bool):
        raise NonIntegralAngle(f"{what} must be an integer angle, got {value!r}")
    return int(value)


def _is_unused(angle):
    return angle is None or angle < 0


@dataclass(frozen=True)
class CamSpec:
    """Camshaft signal: starting level and up to MAX_CAM_EDGES edge angles
    measured from the crank gap. Unused slots are None (negative values are
    accepted as unused too); the first unused slot ends the list."""
    first_level: Level
    edges: Tuple[Optional[int], ...] = field(default=())

    def __post_init__(self):
        edges = [
            None if e is None else _check_integral(e, "Cam edge") for e in self.edges
        ]
        edges = [None if _is_unused(e) else e for e in edges]
        used = self._leading_used(edges)

        if len(used) > MAX_CAM_EDGES:
            raise UnsupportedCamEdgeCount(
                f"{len(used)} cam edges given, at most {MAX_CAM_EDGES} supported"
            )
        for angle in used:
            if angle >= CYCLE_ANGLE:
                raise CamEdgeOutOfRange(
                    f"Cam edge at {angle} outside of [0, {CYCLE_ANGLE - 1}]"
                )
        for prev, cur in zip(used, used[1:]):
            if cur <= prev:
                raise NonMonotonicCamEdges(
                    f"Cam edge {cur} does not follow {prev} in ascending order"
                )

        # Everything after the first unused slot is ignored
        padded = used + [None] * (MAX_CAM_EDGES - len(used))
        object.__setattr__(self, "first_level", Level(self.first_level))
        object.__setattr__(self, "edges", tuple(padded))

    @staticmethod
    def _leading_used(edges):
        used = []
        for e in edges:
            if e is None:
                break
            used.append(e)
        return used

    @property
    def used_edges(self):
        return self._leading_used(self.edges)


@dataclass(frozen=True)
class EngineConfig:
    cam: CamSpec
    crank: CrankWheel
    ref_to_tdc0: int
    cylinders: CylinderCount

    def __post_init__(self):
        if isinstance(self.crank, str):
            object.__setattr__(self, "crank", CrankWheel.preset(self.crank))
        if not isinstance(self.cam, CamSpec):
            raise TypeError(f"cam: expected CamSpec, got {type(self.cam).__name__}")
        if not isinstance(self.crank, CrankWheel):
            raise TypeError(
                f"crank: expected CrankWheel or preset name, got {type(self.crank).__name__}"
            )
        ref_to_tdc0 = _check_integral(self.ref_to_tdc0, "TDC reference")

        try:
            cylinders = CylinderCount(self.cylinders)
        except ValueError:
            raise InvalidCylinderCount(
                f"{self.cylinders} cylinders not supported, expected one of "
                + f"{[c.val() for c in CylinderCount]}"
            )
        if CYCLE_ANGLE % cylinders.val() != 0:
            raise InvalidCylinderCount(
                f"{cylinders.val()} cylinders do not evenly divide the cycle"
            )
        object.__setattr__(self, "cylinders", cylinders)
        object.__setattr__(self, "ref_to_tdc0", ref_to_tdc0 % CYCLE_ANGLE)
