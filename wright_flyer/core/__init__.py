"""
Core flight dynamics components.

This module provides the physics engine for the 1903 Wright Flyer:
airframe constants, aerodynamic, propulsion and control surface models,
and the fixed-step integrator.
"""

from .constants import (
    AirframeSpecs,
    EnvironmentSettings,
    DynamicsTuning,
    SimulationSettings,
    HistoricalFlight,
    FIRST_FLIGHT,
    WRIGHT_FLYER_SPECS,
    KILL_DEVIL_HILLS,
    DEFAULT_TUNING,
    DEFAULT_SIMULATION,
)
from .quaternion import Quaternion
from .state import (
    AircraftState,
    ControlInputs,
    AircraftData,
    Forces,
    Moments,
    initial_aircraft_state,
)
from .aerodynamics import AerodynamicsEngine
from .propulsion import EngineModel
from .control_surfaces import ControlSurfaces
from .dynamics import FlightDynamics

__all__ = [
    'AirframeSpecs',
    'EnvironmentSettings',
    'DynamicsTuning',
    'SimulationSettings',
    'HistoricalFlight',
    'FIRST_FLIGHT',
    'WRIGHT_FLYER_SPECS',
    'KILL_DEVIL_HILLS',
    'DEFAULT_TUNING',
    'DEFAULT_SIMULATION',
    'Quaternion',
    'AircraftState',
    'ControlInputs',
    'AircraftData',
    'Forces',
    'Moments',
    'initial_aircraft_state',
    'AerodynamicsEngine',
    'EngineModel',
    'ControlSurfaces',
    'FlightDynamics',
]
