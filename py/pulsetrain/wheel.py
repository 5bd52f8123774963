from pulsetrain.model import MAX_CAM_EDGES
from pulsetrain.util import REV_ANGLE


class CrankSignal:
    def __init__(self, wheel):
        self.wheel = wheel
        self.first_level = wheel.first_level()
        self.level = self.first_level
        self.half_tooth = wheel.half_tooth
        self.gap_start = wheel.gap_start

    def advance(self, angle):
        """Apply the transition at `angle`, after its sample was written"""
        if angle == 0 or angle % self.half_tooth != 0:
            return

        # Inside the gap the level is held rather than toggled, whatever the
        # number of half teeth crossed
        if angle % REV_ANGLE >= self.gap_start:
            self.level = ~self.first_level
        else:
            self.level = ~self.level


class CamSignal:
    def __init__(self, cam):
        self.edges = cam.edges
        self.level = cam.first_level
        self.index = 0

    def advance(self, angle):
        if self.index >= MAX_CAM_EDGES:
            return
        if self.edges[self.index] == angle:
            self.level = ~self.level
            self.index += 1
