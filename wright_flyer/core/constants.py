"""
Physical constants and airframe parameters for the 1903 Wright Flyer.

All values are SI (m, kg, s, N, W, rad). The airframe numbers follow the
Smithsonian / NASA reconstructions; the aerodynamic and control values are
calibrated so the canonical flight reproduces the historical first flight
of December 17, 1903 (12 s, 120 ft, about 10 ft altitude).
"""

import numpy as np
from dataclasses import dataclass

from ..environment.atmosphere import (  # noqa: F401
    AIR_DENSITY_SEA_LEVEL, SEA_LEVEL_TEMPERATURE, SEA_LEVEL_PRESSURE,
    TEMPERATURE_LAPSE_RATE, GAS_CONSTANT, BAROMETRIC_EXPONENT,
)


# Gravitational acceleration (m/s²)
GRAVITY = 9.81


@dataclass(frozen=True)
class AirframeSpecs:
    """
    Immutable airframe parameters.

    Attributes
    ----------
    wingspan, wing_area, chord_length, aspect_ratio : float
        Wing geometry (m, m², m, -)
    total_mass : float
        Gross mass including pilot (kg)
    engine_power : float
        Rated engine power (W), 12 hp
    propeller_diameter : float
        Propeller diameter (m)
    max_rpm, idle_rpm : float
        Engine RPM limits
    lift_coefficient0, lift_coefficient_slope, max_lift_coefficient : float
        Linear lift curve CL = CL0 + slope * alpha, capped at CLmax
    stall_angle : float
        Stall angle of attack (rad)
    drag_coefficient0, oswald_efficiency : float
        Parasite drag and span efficiency for the drag polar
    elevator_*, rudder_*, wing_warp_effectiveness, max_* : float
        Control surface areas (m²), effectiveness (per rad) and deflection
        limits (rad)
    ixx, iyy, izz : float
        Roll, pitch and yaw moments of inertia (kg·m²)
    cg_position : float
        Distance from CG to the front canard (m)
    """

    # Dimensions
    wingspan: float = 12.3
    wing_area: float = 47.4
    chord_length: float = 1.98
    aspect_ratio: float = 3.2

    # Mass: 605 lb empty + 145 lb Orville
    empty_weight: float = 274.0
    pilot_weight: float = 66.0
    total_mass: float = 340.0

    # Engine and propeller
    engine_power: float = 8950.0
    propeller_diameter: float = 2.6
    propeller_efficiency: float = 0.66
    max_rpm: float = 450.0
    idle_rpm: float = 100.0

    # Aerodynamic coefficients
    lift_coefficient0: float = 0.1
    lift_coefficient_slope: float = 5.5
    max_lift_coefficient: float = 1.2
    stall_angle: float = 0.26

    drag_coefficient0: float = 0.040
    oswald_efficiency: float = 0.85

    # Control surface effectiveness (moment coefficient per radian)
    elevator_effectiveness: float = 1.5
    rudder_effectiveness: float = 0.6
    wing_warp_effectiveness: float = 0.5

    # Control surface areas (m²)
    elevator_area: float = 4.6
    rudder_area: float = 1.9

    # Moments of inertia (kg·m²), estimated
    ixx: float = 1200.0
    iyy: float = 1800.0
    izz: float = 2400.0

    cg_position: float = 1.8

    # Deflection limits (rad)
    max_elevator_deflection: float = 0.35
    max_rudder_deflection: float = 0.52
    max_wing_warp: float = 0.17

    @property
    def weight(self) -> float:
        """Gross weight at standard gravity (N)."""
        return self.total_mass * GRAVITY

    @property
    def induced_drag_factor(self) -> float:
        """1 / (pi * AR * e)."""
        return 1.0 / (np.pi * self.aspect_ratio * self.oswald_efficiency)


@dataclass(frozen=True)
class EnvironmentSettings:
    """
    Conditions at Kill Devil Hills on the morning of the first flight.

    The launch rail is a run of 2x4 lumber laid flat on the sand
    (3.5 in = 0.089 m); the sand surface is the ground level.
    """

    headwind_speed: float = 12.0  # m/s (27 mph)
    ground_level: float = 0.0
    launch_rail_height: float = 0.089
    gravity: float = GRAVITY

    @property
    def headwind_vector(self) -> np.ndarray:
        """Air-mass velocity subtracted from ground velocity (blows toward +Z)."""
        return np.array([0.0, 0.0, self.headwind_speed])


@dataclass(frozen=True)
class DynamicsTuning:
    """
    Calibration constants of the flight dynamics integrator.

    Stability and damping terms are weak enough for the elevator to
    override during climb and descent.
    """

    min_aero_airspeed: float = 0.5       # m/s, below this no lift/drag/AoA
    ground_contact_margin: float = 0.1   # m above launch rail
    rolling_friction: float = 0.02       # launch rail friction coefficient
    min_rolling_speed: float = 0.1       # m/s
    touchdown_friction: float = 0.85     # horizontal velocity factor on impact
    pitch_damping: float = 150.0         # N·m per rad/s
    trim_angle_of_attack: float = 0.075  # rad, level flight at 15 m/s
    pitch_stability: float = 30.0        # N·m per rad of AoA deviation
    stability_reference_speed: float = 15.0  # m/s
    linear_damping: float = 0.9995
    angular_damping: float = 0.998
    max_angular_velocity: float = 1.0    # rad/s per axis


@dataclass(frozen=True)
class SimulationSettings:
    """Driver-level settings: timestep, canonical flight and fuel."""

    time_step: float = 1.0 / 60.0
    max_delta_time: float = 0.1          # wall-clock cap per tick
    initial_pitch: float = 0.075         # rad, trim AoA
    launch_speed: float = 4.0            # m/s along -Z off the rail
    initial_rpm: float = 380.0           # engine warmed up
    canonical_duration: float = 12.0
    max_flight_time: float = 60.0        # seconds of fuel at full throttle
    chart_interval: float = 0.1
    max_data_points: int = 500


@dataclass(frozen=True)
class HistoricalFlight:
    """Reference numbers for a recorded flight."""

    duration: float
    distance: float
    max_altitude: float
    ground_speed: float


# Orville's first flight, 10:35 am, December 17, 1903
FIRST_FLIGHT = HistoricalFlight(duration=12.0, distance=36.5,
                                max_altitude=3.0, ground_speed=3.0)

WRIGHT_FLYER_SPECS = AirframeSpecs()
KILL_DEVIL_HILLS = EnvironmentSettings()
DEFAULT_TUNING = DynamicsTuning()
DEFAULT_SIMULATION = SimulationSettings()
