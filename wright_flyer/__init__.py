"""
Flight dynamics simulation of the 1903 Wright Flyer.
"""

from .core import (
    AircraftState,
    ControlInputs,
    AircraftData,
    FlightDynamics,
    FIRST_FLIGHT,
    initial_aircraft_state,
)
from .control import controls_at_time
from .simulation import SimulationDriver, FlightOutcome

__version__ = "0.1.0"

__all__ = [
    'AircraftState',
    'ControlInputs',
    'AircraftData',
    'FlightDynamics',
    'FIRST_FLIGHT',
    'initial_aircraft_state',
    'controls_at_time',
    'SimulationDriver',
    'FlightOutcome',
]
