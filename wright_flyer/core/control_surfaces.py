"""
Control surface moments.

The Wright Flyer controlled pitch with a forward canard ("elevator"), yaw
with a twin rear rudder, and roll by warping the wing tips. Each channel
produces a moment proportional to dynamic pressure, surface area,
effectiveness and physical deflection.
"""

import numpy as np
from typing import Dict

from .aerodynamics import dynamic_pressure
from .constants import AirframeSpecs, WRIGHT_FLYER_SPECS, AIR_DENSITY_SEA_LEVEL
from .state import ControlInputs, Moments


# No control authority below this airspeed (m/s)
MIN_CONTROL_AIRSPEED = 0.5

# CG to rudder hinge (m)
RUDDER_MOMENT_ARM = 3.0


class ControlSurfaces:
    """
    Moment model for elevator, rudder and wing warping.

    Control inputs are normalized to [-1, 1] and scaled by the airframe's
    maximum deflection before use.
    """

    def __init__(self, specs: AirframeSpecs = WRIGHT_FLYER_SPECS):
        self.specs = specs

    def pitch_moment(self, elevator: float, velocity: float,
                     air_density: float = AIR_DENSITY_SEA_LEVEL) -> float:
        """Canard pitching moment (N·m), arm is the CG-to-canard distance."""
        if velocity < MIN_CONTROL_AIRSPEED:
            return 0.0
        s = self.specs
        deflection = elevator * s.max_elevator_deflection
        return (dynamic_pressure(velocity, air_density) * s.elevator_area
                * s.elevator_effectiveness * deflection * s.cg_position)

    def yaw_moment(self, rudder: float, velocity: float,
                   air_density: float = AIR_DENSITY_SEA_LEVEL) -> float:
        if velocity < MIN_CONTROL_AIRSPEED:
            return 0.0
        s = self.specs
        deflection = rudder * s.max_rudder_deflection
        return (dynamic_pressure(velocity, air_density) * s.rudder_area
                * s.rudder_effectiveness * deflection * RUDDER_MOMENT_ARM)

    def roll_moment(self, wing_warp: float, velocity: float,
                    air_density: float = AIR_DENSITY_SEA_LEVEL) -> float:
        """Wing warping rolling moment (N·m) with a wingspan/3 moment arm."""
        if velocity < MIN_CONTROL_AIRSPEED:
            return 0.0
        s = self.specs
        warp = wing_warp * s.max_wing_warp
        return (dynamic_pressure(velocity, air_density) * s.wing_area
                * s.wing_warp_effectiveness * warp * (s.wingspan / 3.0))

    def moments(self, elevator: float, rudder: float, wing_warp: float,
                velocity: float, air_density: float = AIR_DENSITY_SEA_LEVEL) -> Moments:
        """All three control moments at once."""
        return Moments(
            pitch=self.pitch_moment(elevator, velocity, air_density),
            yaw=self.yaw_moment(rudder, velocity, air_density),
            roll=self.roll_moment(wing_warp, velocity, air_density),
        )

    def deflections_deg(self, controls: ControlInputs) -> Dict[str, float]:
        """Physical surface deflections in degrees."""
        s = self.specs
        return {
            'elevator_deflection': float(np.degrees(controls.elevator * s.max_elevator_deflection)),
            'rudder_deflection': float(np.degrees(controls.rudder * s.max_rudder_deflection)),
            'wing_warp_deflection': float(np.degrees(controls.wing_warp * s.max_wing_warp)),
        }
