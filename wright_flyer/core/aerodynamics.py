"""
Aerodynamic model for the Wright Flyer wing cell.

Provides:
- Lift curve with a simple post-stall decay
- Parabolic drag polar
- Lift and drag forces from dynamic pressure
- Air density at altitude (delegated to the standard atmosphere)
"""

import numpy as np

from .constants import AirframeSpecs, WRIGHT_FLYER_SPECS, AIR_DENSITY_SEA_LEVEL
from ..environment.atmosphere import StandardAtmosphere


# Below this airspeed forces are treated as zero
MIN_FORCE_AIRSPEED = 0.1

# Post-stall exponential decay rate of CL (per rad beyond stall)
STALL_DECAY_RATE = 3.0


def dynamic_pressure(velocity: float, air_density: float = AIR_DENSITY_SEA_LEVEL) -> float:
    """q = 0.5 * rho * V² (Pa)."""
    return 0.5 * air_density * velocity * velocity


class AerodynamicsEngine:
    """
    Coefficient model for the biplane wing.

    The lift curve is linear up to the stall angle and capped at CLmax.
    Beyond stall CL decays exponentially toward zero, preserving sign.

    Parameters
    ----------
    specs : AirframeSpecs
        Airframe parameters (wing area, lift curve, drag polar)
    """

    def __init__(self, specs: AirframeSpecs = WRIGHT_FLYER_SPECS):
        self.specs = specs

    def lift_coefficient(self, angle_of_attack: float) -> float:
        """
        Lift coefficient at the given angle of attack.

        Parameters
        ----------
        angle_of_attack : float
            Angle of attack (rad)

        Returns
        -------
        float
            CL (dimensionless)
        """
        s = self.specs
        if abs(angle_of_attack) < s.stall_angle:
            cl = s.lift_coefficient0 + s.lift_coefficient_slope * angle_of_attack
            return min(cl, s.max_lift_coefficient)

        excess = abs(angle_of_attack) - s.stall_angle
        return float(np.sign(angle_of_attack)) * s.max_lift_coefficient * np.exp(-STALL_DECAY_RATE * excess)

    def drag_coefficient(self, lift_coefficient: float) -> float:
        """CD = CD0 + CL² / (pi * AR * e)."""
        return self.specs.drag_coefficient0 + lift_coefficient**2 * self.specs.induced_drag_factor

    def lift(self, velocity: float, angle_of_attack: float,
             air_density: float = AIR_DENSITY_SEA_LEVEL) -> float:
        """Lift force L = q * S * CL (N), zero below 0.1 m/s."""
        if velocity < MIN_FORCE_AIRSPEED:
            return 0.0
        cl = self.lift_coefficient(angle_of_attack)
        return dynamic_pressure(velocity, air_density) * self.specs.wing_area * cl

    def drag(self, velocity: float, lift_coefficient: float,
             air_density: float = AIR_DENSITY_SEA_LEVEL) -> float:
        """Drag force D = q * S * CD (N), zero below 0.1 m/s."""
        if velocity < MIN_FORCE_AIRSPEED:
            return 0.0
        cd = self.drag_coefficient(lift_coefficient)
        return dynamic_pressure(velocity, air_density) * self.specs.wing_area * cd

    @staticmethod
    def air_density(altitude: float) -> float:
        """Air density at altitude from the barometric formula (kg/m³)."""
        return StandardAtmosphere.density_at(altitude)

    @staticmethod
    def angle_of_attack(velocity_x: float, velocity_y: float, pitch: float) -> float:
        """
        Angle of attack from pitch and flight path angle.

        Returns pitch unchanged when the horizontal component is too small
        to define a flight path.
        """
        if abs(velocity_x) < MIN_FORCE_AIRSPEED:
            return pitch
        return pitch - np.arctan2(velocity_y, velocity_x)

    def __repr__(self):
        return (f"AerodynamicsEngine(S={self.specs.wing_area} m², "
                f"CLmax={self.specs.max_lift_coefficient}, "
                f"stall={np.degrees(self.specs.stall_angle):.1f}°)")
