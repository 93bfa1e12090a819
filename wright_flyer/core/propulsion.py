"""
Propulsion model for the Wright Flyer.

Provides:
- Engine power curve vs. RPM
- Propeller efficiency vs. advance ratio
- Thrust with a static-thrust blend at low speed
- First-order RPM spool-up/spool-down response

The 1903 engine made about 12 hp and drove two counter-rotating pusher
propellers through chains. The propellers reached roughly 66% efficiency
in the static case and up to 84% near their design advance ratio.
"""

import numpy as np

from .constants import AirframeSpecs, WRIGHT_FLYER_SPECS


# Below this RPM the engine is considered stopped
MIN_RUNNING_RPM = 10.0

# Throttle below this produces no thrust
MIN_THROTTLE = 0.01

# Propeller efficiency curve
STOPPED_EFFICIENCY = 0.3
MIN_EFFICIENCY = 0.40
PEAK_EFFICIENCY = 0.84
OPTIMAL_ADVANCE_RATIO = 0.8
ADVANCE_RATIO_WIDTH = 0.5

# Static thrust at rated power (N), about 135 lbf
STATIC_THRUST = 600.0

# Speed below which thrust blends from static to T = eta * P / V
STATIC_BLEND_SPEED = 3.0

# RPM time constants (s)
SPOOL_UP_TIME = 0.8
SPOOL_DOWN_TIME = 0.5


class EngineModel:
    """
    Engine and propeller model.

    Parameters
    ----------
    specs : AirframeSpecs
        Rated power, RPM limits and propeller diameter
    """

    def __init__(self, specs: AirframeSpecs = WRIGHT_FLYER_SPECS):
        self.specs = specs

    def advance_ratio(self, velocity: float, rpm: float) -> float:
        """J = V / (n * D), zero when the engine is stopped."""
        if rpm < MIN_RUNNING_RPM:
            return 0.0
        return velocity / ((rpm / 60.0) * self.specs.propeller_diameter)

    def propeller_efficiency(self, velocity: float, rpm: float) -> float:
        """
        Propeller efficiency from a Gaussian curve in advance ratio.

        Parameters
        ----------
        velocity : float
            Airspeed (m/s)
        rpm : float
            Engine speed (rev/min)

        Returns
        -------
        float
            Efficiency in [0.40, 0.84] (0.3 when stopped)
        """
        if rpm < MIN_RUNNING_RPM:
            return STOPPED_EFFICIENCY

        deviation = (self.advance_ratio(velocity, rpm) - OPTIMAL_ADVANCE_RATIO) / ADVANCE_RATIO_WIDTH
        return MIN_EFFICIENCY + (PEAK_EFFICIENCY - MIN_EFFICIENCY) * np.exp(-deviation**2)

    def power(self, throttle: float, rpm: float) -> float:
        """Shaft power P = throttle * P_rated * x(2 - x), x = rpm / max_rpm (W)."""
        x = rpm / self.specs.max_rpm
        return throttle * self.specs.engine_power * x * (2.0 - x)

    def thrust(self, throttle: float, rpm: float, velocity: float) -> float:
        """
        Propeller thrust (N).

        Above 3 m/s, T = eta * P / V. Below that the static thrust (scaled
        by power) is blended linearly into eta * P / 3 to avoid the 1/V
        singularity; the two branches meet at 3 m/s.
        """
        if throttle < MIN_THROTTLE or rpm < MIN_RUNNING_RPM:
            return 0.0

        power = self.power(throttle, rpm)
        efficiency = self.propeller_efficiency(velocity, rpm)

        if velocity < STATIC_BLEND_SPEED:
            static_thrust = STATIC_THRUST * (power / self.specs.engine_power)
            dynamic_thrust = efficiency * power / STATIC_BLEND_SPEED
            blend = velocity / STATIC_BLEND_SPEED
            return static_thrust * (1.0 - blend) + dynamic_thrust * blend

        return efficiency * power / velocity

    def torque(self, throttle: float, rpm: float) -> float:
        """Shaft torque Q = P / omega (N·m)."""
        if rpm < MIN_RUNNING_RPM:
            return 0.0
        omega = rpm * 2.0 * np.pi / 60.0
        return self.power(throttle, rpm) / omega

    def target_rpm(self, throttle: float) -> float:
        s = self.specs
        return s.idle_rpm + throttle * (s.max_rpm - s.idle_rpm)

    def rpm_response(self, throttle: float, current_rpm: float, dt: float) -> float:
        """
        Advance engine RPM by one timestep.

        First-order lag toward idle + throttle * (max - idle); the engine
        spools down faster than it spools up.
        """
        target = self.target_rpm(throttle)
        tau = SPOOL_UP_TIME if current_rpm < target else SPOOL_DOWN_TIME
        alpha = 1.0 - np.exp(-dt / tau)
        return float(current_rpm + (target - current_rpm) * alpha)

    def __repr__(self):
        return (f"EngineModel(P={self.specs.engine_power:.0f} W, "
                f"rpm={self.specs.idle_rpm:.0f}-{self.specs.max_rpm:.0f})")
