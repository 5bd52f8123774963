class PulseTrainError(ValueError):
    pass


class InvalidCylinderCount(PulseTrainError):
    pass


class TdcOutOfRange(PulseTrainError):
    pass


class UnsupportedCamEdgeCount(PulseTrainError):
    pass


class NonMonotonicCamEdges(PulseTrainError):
    pass


class CamEdgeOutOfRange(PulseTrainError):
    pass


class UnsupportedCrankWheel(PulseTrainError):
    pass


class UnsupportedWordWidth(PulseTrainError):
    pass


class InvalidBufferLength(PulseTrainError):
    pass


class NonIntegralAngle(PulseTrainError):
    pass
