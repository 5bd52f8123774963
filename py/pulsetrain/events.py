from dataclasses import dataclass
from typing import List

from pulsetrain.model import Level

Angle = int


@dataclass
class Event:
    angle: Angle

@dataclass
class CamEdge(Event):
    level: Level

@dataclass
class CrankEdge(Event):
    level: Level

@dataclass
class TdcMark(Event):
    cylinder: int

class Log(List[Event]):
    def filter_cam(self):
        return Log(filter(lambda i: isinstance(i, CamEdge), self))

    def filter_crank(self):
        return Log(filter(lambda i: isinstance(i, CrankEdge), self))

    def filter_tdc(self, cylinder=None):
        return Log(
            filter(
                lambda i: isinstance(i, TdcMark)
                and (cylinder is None or i.cylinder == cylinder),
                self,
            )
        )

    def filter_between(self, start: Angle, end: Angle):
        return Log(
            filter(lambda i: i.angle >= start and i.angle <= end, self)
        )

    def level_at(self, angle: Angle) -> Level:
        """Level of the single signal this log was filtered down to"""
        edges = [e for e in self if e.angle <= angle]
        if not edges:
            raise ValueError(f"No edge at or before angle {angle}")
        return edges[-1].level
