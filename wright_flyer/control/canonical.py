"""
Canonical control schedule for the first flight of December 17, 1903.

Orville's 12 second flight is reproduced as a pure function of elapsed
time. With u = t / 12 the phases are:

- Takeoff roll (u < 0.10): high power, slight nose-up canard
- Transition (0.10 - 0.30): ease the power back, trim the canard nose down
- Cruise (to u = 0.65 / 0.78): hold the cruise setting
- Descent (remainder): reduce power and push the nose down to land

Segments are joined with smoothstep so the inputs have no jumps.
"""

import numpy as np

from ..core.constants import FIRST_FLIGHT
from ..core.state import ControlInputs


# Throttle schedule
TAKEOFF_THROTTLE = 0.91
CRUISE_THROTTLE = 0.835
LANDING_THROTTLE = 0.58

# Elevator schedule (normalized, positive is nose up)
TAKEOFF_ELEVATOR = 0.02
CRUISE_ELEVATOR = -0.019
LANDING_ELEVATOR = -0.065


def smoothstep(x: float) -> float:
    """Hermite smoothstep x²(3 - 2x) with x clamped to [0, 1]."""
    x = float(np.clip(x, 0.0, 1.0))
    return x * x * (3.0 - 2.0 * x)


def lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation with t clamped to [0, 1]."""
    t = float(np.clip(t, 0.0, 1.0))
    return a + (b - a) * t


def canonical_throttle(u: float) -> float:
    if u < 0.10:
        return TAKEOFF_THROTTLE
    if u < 0.25:
        return lerp(TAKEOFF_THROTTLE, CRUISE_THROTTLE, smoothstep((u - 0.10) / 0.15))
    if u < 0.78:
        return CRUISE_THROTTLE
    return lerp(CRUISE_THROTTLE, LANDING_THROTTLE, smoothstep((u - 0.78) / 0.22))


def canonical_elevator(u: float) -> float:
    if u < 0.15:
        return TAKEOFF_ELEVATOR
    if u < 0.30:
        return lerp(TAKEOFF_ELEVATOR, CRUISE_ELEVATOR, smoothstep((u - 0.15) / 0.15))
    if u < 0.65:
        return CRUISE_ELEVATOR
    return lerp(CRUISE_ELEVATOR, LANDING_ELEVATOR, smoothstep((u - 0.65) / 0.35))


def controls_at_time(t: float, duration: float = FIRST_FLIGHT.duration) -> ControlInputs:
    """
    Control inputs of the canonical flight at elapsed time t.

    Parameters
    ----------
    t : float
        Seconds since the start of the flight
    duration : float
        Length of the schedule (s), 12 s for the first flight

    Returns
    -------
    ControlInputs
        Clamped inputs; rudder and wing warp are always neutral
    """
    u = t / duration
    return ControlInputs.clamped(
        throttle=canonical_throttle(u),
        elevator=canonical_elevator(u),
        rudder=0.0,
        wing_warp=0.0,
    )
