"""
Flight outcome policy.

Classifies each simulation tick as nominal, crashed or landed. The
physics core never decides this; the driver applies the policy to the
state the integrator produced.
"""

from dataclasses import dataclass
from enum import Enum

from ..core.constants import (
    EnvironmentSettings, SimulationSettings,
    KILL_DEVIL_HILLS, DEFAULT_SIMULATION,
)
from ..core.state import AircraftState, AircraftData


class FlightOutcome(Enum):
    NOMINAL = "nominal"
    CRASHED = "crashed"
    LANDED = "landed"


@dataclass(frozen=True)
class OutcomeThresholds:
    """
    Crash and landing thresholds.

    Hard impact: the aircraft came down from above impact_from_altitude
    and is now below impact_altitude sinking faster than impact_sink_rate.
    Stall crash: near the ground with lift below stall_lift_fraction of
    weight while sinking faster than stall_sink_rate.
    """

    impact_altitude: float = 0.8
    impact_sink_rate: float = -3.0
    impact_from_altitude: float = 1.0
    stall_min_airspeed: float = 2.0
    stall_lift_fraction: float = 0.3
    stall_max_altitude: float = 1.0
    stall_sink_rate: float = -2.0
    # Canonical landing
    airborne_height: float = 1.0       # above the launch rail
    touchdown_height: float = 0.1      # above ground level
    min_landing_time: float = 3.0


DEFAULT_THRESHOLDS = OutcomeThresholds()


def is_hard_impact(previous: AircraftState, current: AircraftState,
                   thresholds: OutcomeThresholds = DEFAULT_THRESHOLDS) -> bool:
    return (current.position[1] <= thresholds.impact_altitude
            and current.velocity[1] < thresholds.impact_sink_rate
            and previous.position[1] > thresholds.impact_from_altitude)


def is_stall_crash(current: AircraftState, data: AircraftData,
                   thresholds: OutcomeThresholds = DEFAULT_THRESHOLDS) -> bool:
    return (data.airspeed > thresholds.stall_min_airspeed
            and data.forces.lift < thresholds.stall_lift_fraction * data.forces.weight
            and current.position[1] < thresholds.stall_max_altitude
            and current.velocity[1] < thresholds.stall_sink_rate)


def classify_tick(previous: AircraftState, current: AircraftState, data: AircraftData,
                  thresholds: OutcomeThresholds = DEFAULT_THRESHOLDS) -> FlightOutcome:
    """
    Outcome of a single integration step.

    Parameters
    ----------
    previous : AircraftState
        State before the step
    current : AircraftState
        State after the step
    data : AircraftData
        Display data at the new state

    Returns
    -------
    FlightOutcome
        CRASHED on a hard impact or a stall near the ground, else NOMINAL
    """
    if is_stall_crash(current, data, thresholds) or is_hard_impact(previous, current, thresholds):
        return FlightOutcome.CRASHED
    return FlightOutcome.NOMINAL


def canonical_landed(time: float, state: AircraftState, max_altitude: float,
                     settings: SimulationSettings = DEFAULT_SIMULATION,
                     environment: EnvironmentSettings = KILL_DEVIL_HILLS,
                     thresholds: OutcomeThresholds = DEFAULT_THRESHOLDS) -> bool:
    """
    Whether the canonical flight is over.

    It ends when the schedule runs out, or when the aircraft is back on
    the sand after having climbed clear of the launch rail.
    """
    if time >= settings.canonical_duration:
        return True

    was_airborne = max_altitude > environment.launch_rail_height + thresholds.airborne_height
    on_ground = state.position[1] <= environment.ground_level + thresholds.touchdown_height
    return (was_airborne and on_ground and state.velocity[1] <= 0
            and time > thresholds.min_landing_time)
