from vcd import VCDWriter

from pulsetrain.bits import MAX_CYLINDERS
from pulsetrain.events import *
from pulsetrain.util import CYCLE_ANGLE, sample_rate_hz


def dump_vcd(log, file, rpm=1000, cycles=1):
    """Write a decoded pulse train as a waveform, repeated for `cycles` engine
    cycles at constant `rpm`."""
    ns_per_sample = 1e9 / sample_rate_hz(rpm)

    def timestamp(cycle, angle):
        return int(round((cycle * CYCLE_ANGLE + angle) * ns_per_sample))

    with open(file, "w") as openfile:
        with VCDWriter(openfile, timescale="1 ns") as writer:
            cam = writer.register_var("engine", "cam", "wire", size=1)
            crank = writer.register_var("engine", "crank", "wire", size=1)
            tdcs = [
                writer.register_var("engine", f"tdc{cyl}", "event")
                for cyl in range(MAX_CYLINDERS)
            ]

            for cycle in range(cycles):
                for event in log:
                    match event:
                        case CamEdge(angle, level):
                            writer.change(cam, timestamp(cycle, angle), int(level))

                        case CrankEdge(angle, level):
                            writer.change(crank, timestamp(cycle, angle), int(level))

                        case TdcMark(angle, cylinder):
                            writer.change(tdcs[cylinder], timestamp(cycle, angle), True)
