"""
Trim and Performance Calculation

Steady level-flight conditions for the Wright Flyer:
- Lift coefficient required to support the weight at an airspeed
- Angle of attack that produces it (root of the pre-stall lift curve)
- Throttle at which thrust balances drag
- Stall speed and the lift/drag polar
"""

import numpy as np
from scipy.optimize import brentq
from typing import Tuple

from ..core.aerodynamics import AerodynamicsEngine, dynamic_pressure
from ..core.constants import AirframeSpecs, WRIGHT_FLYER_SPECS, AIR_DENSITY_SEA_LEVEL, GRAVITY
from ..core.propulsion import EngineModel


def required_lift_coefficient(airspeed: float,
                              specs: AirframeSpecs = WRIGHT_FLYER_SPECS,
                              air_density: float = AIR_DENSITY_SEA_LEVEL,
                              gravity: float = GRAVITY) -> float:
    """
    CL needed for lift to equal weight.

    Parameters
    ----------
    airspeed : float
        True airspeed (m/s)

    Returns
    -------
    float
        CL = W / (q * S)
    """
    if airspeed <= 0:
        raise ValueError(f"Airspeed must be positive, got {airspeed}")
    weight = specs.total_mass * gravity
    return weight / (dynamic_pressure(airspeed, air_density) * specs.wing_area)


def stall_speed(specs: AirframeSpecs = WRIGHT_FLYER_SPECS,
                air_density: float = AIR_DENSITY_SEA_LEVEL,
                gravity: float = GRAVITY) -> float:
    """Lowest airspeed at which CLmax still supports the weight (m/s)."""
    weight = specs.total_mass * gravity
    return float(np.sqrt(2.0 * weight / (air_density * specs.wing_area * specs.max_lift_coefficient)))


def trim_angle_of_attack(airspeed: float,
                         specs: AirframeSpecs = WRIGHT_FLYER_SPECS,
                         air_density: float = AIR_DENSITY_SEA_LEVEL,
                         gravity: float = GRAVITY) -> float:
    """
    Angle of attack for level flight at an airspeed.

    Solved with Brent's method on the linear part of the lift curve.

    Returns
    -------
    float
        Trim angle of attack (rad)

    Raises
    ------
    ValueError
        If the airspeed is below the stall speed
    """
    aero = AerodynamicsEngine(specs)
    cl_required = required_lift_coefficient(airspeed, specs, air_density, gravity)
    if cl_required > specs.max_lift_coefficient:
        raise ValueError(
            f"No trim at {airspeed:.2f} m/s: CL {cl_required:.3f} exceeds "
            f"CLmax {specs.max_lift_coefficient:.2f} (stall speed "
            f"{stall_speed(specs, air_density, gravity):.2f} m/s)"
        )

    # Bracket the unstalled part of the curve up to where it reaches CLmax
    alpha_low = -specs.stall_angle * 0.999
    alpha_cap = (specs.max_lift_coefficient - specs.lift_coefficient0) / specs.lift_coefficient_slope
    alpha_high = min(specs.stall_angle * 0.999, alpha_cap)

    return float(brentq(lambda a: aero.lift_coefficient(a) - cl_required, alpha_low, alpha_high))


def trim_throttle(airspeed: float,
                  specs: AirframeSpecs = WRIGHT_FLYER_SPECS,
                  air_density: float = AIR_DENSITY_SEA_LEVEL,
                  gravity: float = GRAVITY) -> float:
    """
    Throttle at which steady-state thrust equals drag in level flight.

    The engine is assumed to have settled at its target RPM.

    Raises
    ------
    ValueError
        If full throttle cannot overcome the drag
    """
    aero = AerodynamicsEngine(specs)
    engine = EngineModel(specs)

    alpha = trim_angle_of_attack(airspeed, specs, air_density, gravity)
    drag = aero.drag(airspeed, aero.lift_coefficient(alpha), air_density)

    def excess_thrust(throttle):
        return engine.thrust(throttle, engine.target_rpm(throttle), airspeed) - drag

    if excess_thrust(1.0) < 0:
        raise ValueError(f"Drag {drag:.0f} N at {airspeed:.2f} m/s exceeds full-throttle thrust")

    return float(brentq(excess_thrust, 0.01, 1.0))


def lift_drag_polar(alphas: np.ndarray,
                    specs: AirframeSpecs = WRIGHT_FLYER_SPECS) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Lift and drag coefficients over a sweep of angles of attack.

    Parameters
    ----------
    alphas : np.ndarray
        Angles of attack (rad)

    Returns
    -------
    cl, cd, lift_to_drag : np.ndarray
    """
    aero = AerodynamicsEngine(specs)
    alphas = np.asarray(alphas, dtype=float)
    cl = np.array([aero.lift_coefficient(a) for a in alphas])
    cd = np.array([aero.drag_coefficient(c) for c in cl])
    return cl, cd, cl / cd
