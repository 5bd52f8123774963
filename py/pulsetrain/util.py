TICKRATE = 4000000.0

# Angle units are tenths of a degree
CYCLE_ANGLE = 7200
REV_ANGLE = 3600


def _check_rpm(rpm):
    if rpm <= 0:
        raise ValueError(f"Engine speed must be positive, got {rpm} rpm")


def ticks_for_rpm_angle(rpm, angle, tickrate=TICKRATE):
    _check_rpm(rpm)
    ticks_per_unit = (tickrate / 60.0) / rpm
    return int(angle * ticks_per_unit)


def angle_for_ticks_rpm(ticks, rpm, tickrate=TICKRATE):
    _check_rpm(rpm)
    ticks_per_unit = (tickrate / 60.0) / rpm
    return ticks / ticks_per_unit


def sample_rate_hz(rpm):
    """Rate at which pulse train elements must be output to match `rpm`.
    One revolution is REV_ANGLE samples."""
    _check_rpm(rpm)
    return rpm * REV_ANGLE / 60.0


def sample_period_ticks(rpm, tickrate=TICKRATE):
    return ticks_for_rpm_angle(rpm, 1, tickrate)


def clamp_angle(angle):
    return angle % CYCLE_ANGLE
