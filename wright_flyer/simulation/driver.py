"""
Simulation driver.

Owns the current aircraft state and runs the per-tick loop:

1. Cap the wall-clock delta and apply the time scale
2. End the canonical flight once it has landed or timed out
3. Ask the active control source for inputs, cut the throttle without fuel
4. Integrate one step and update distance and altitude statistics
5. Compute display data and apply the crash policy
6. Commit the new state, record chart data and notify observers
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

import numpy as np

from ..core.constants import SimulationSettings, DEFAULT_SIMULATION
from ..core.dynamics import FlightDynamics
from ..core.state import AircraftState, AircraftData, ControlInputs, initial_aircraft_state
from ..control.sources import ControlSource, ManualControlSource, CanonicalControlSource
from .outcome import FlightOutcome, OutcomeThresholds, DEFAULT_THRESHOLDS, classify_tick, canonical_landed
from .recorder import FlightRecorder, FlightSummary

logger = logging.getLogger(__name__)


FULL_FUEL = 100.0  # percent


@dataclass(frozen=True)
class SimulationFrame:
    """What observers receive after each committed tick."""

    time: float
    state: AircraftState
    data: AircraftData
    controls: ControlInputs
    outcome: FlightOutcome = FlightOutcome.NOMINAL


Observer = Callable[[SimulationFrame], None]


class SimulationDriver:
    """
    Headless replacement for the interactive animation loop.

    Parameters
    ----------
    dynamics : FlightDynamics
        Physics engine
    settings : SimulationSettings
        Timestep, fuel and chart settings
    initial_state : AircraftState, optional
        State to return to on reset; defaults to the aircraft at rest on
        the launch rail
    thresholds : OutcomeThresholds
        Crash and landing policy
    """

    def __init__(self, dynamics: Optional[FlightDynamics] = None,
                 settings: SimulationSettings = DEFAULT_SIMULATION,
                 initial_state: Optional[AircraftState] = None,
                 thresholds: OutcomeThresholds = DEFAULT_THRESHOLDS):
        self.dynamics = dynamics if dynamics is not None else FlightDynamics()
        self.settings = settings
        self.thresholds = thresholds
        self._initial_state = initial_state

        self.manual_controls = ManualControlSource()
        self.recorder = FlightRecorder(settings.chart_interval, settings.max_data_points)
        self._observers: List[Observer] = []

        self.time_scale = 1.0
        self.is_running = False
        self.is_paused = False
        self._reset_flight(self._rest_state(), self.manual_controls)

    # --- state templates -------------------------------------------------

    def _rest_state(self) -> AircraftState:
        if self._initial_state is not None:
            return self._initial_state
        return initial_aircraft_state(self.settings, self.dynamics.environment, from_rest=True)

    def _launch_state(self) -> AircraftState:
        return initial_aircraft_state(self.settings, self.dynamics.environment, from_rest=False)

    def _reset_flight(self, state: AircraftState, source: ControlSource):
        self.state = state
        self.source = source
        self.data = self.dynamics.compute_display_data(state, ControlInputs())
        self.simulation_time = 0.0
        self.fuel_remaining = FULL_FUEL
        self.distance_traveled = 0.0
        self.max_altitude = 0.0
        self.has_crashed = False
        self.has_landed = False
        self.recorder.clear()

    # --- lifecycle --------------------------------------------------------

    @property
    def is_canonical(self) -> bool:
        return isinstance(self.source, CanonicalControlSource)

    @property
    def is_active(self) -> bool:
        """True while ticks advance the simulation."""
        return self.is_running and not self.is_paused and not self.has_crashed and not self.has_landed

    @property
    def outcome(self) -> FlightOutcome:
        if self.has_crashed:
            return FlightOutcome.CRASHED
        if self.has_landed:
            return FlightOutcome.LANDED
        return FlightOutcome.NOMINAL

    def start_manual(self):
        """Start a manual flight with the aircraft at rest on the rail."""
        self._reset_flight(self._rest_state(), self.manual_controls)
        self.is_running = True
        self.is_paused = False
        logger.info("Manual flight started")

    def start_canonical(self):
        """Start the 1903 first flight, already rolling down the rail."""
        source = CanonicalControlSource(self.settings.canonical_duration)
        self._reset_flight(self._launch_state(), source)
        self.is_running = True
        self.is_paused = False
        logger.info("Canonical flight started")

    def pause(self):
        self.is_paused = True

    def resume(self):
        self.is_paused = False

    def stop(self):
        self.is_running = False
        self.is_paused = False
        logger.info("Simulation stopped at t=%.2f s", self.simulation_time)

    def reset(self):
        """
        Back to the aircraft at rest with neutral manual controls.

        The driver is left stopped rather than running, so a reset never
        starts a flight by itself; call start_manual() or start_canonical()
        to fly again.
        """
        self.manual_controls.reset()
        self._reset_flight(self._rest_state(), self.manual_controls)
        self.is_running = False
        self.is_paused = False
        logger.info("Simulation reset")

    def set_time_scale(self, scale: float):
        if not np.isfinite(scale) or scale < 0:
            raise ValueError(f"Time scale must be a non-negative number, got {scale}")
        self.time_scale = float(scale)

    # --- observers --------------------------------------------------------

    def subscribe(self, callback: Observer):
        if callback not in self._observers:
            self._observers.append(callback)

    def unsubscribe(self, callback: Observer):
        if callback in self._observers:
            self._observers.remove(callback)

    def _notify(self, frame: SimulationFrame):
        for callback in list(self._observers):
            callback(frame)

    # --- stepping ---------------------------------------------------------

    def tick(self, wall_dt: float) -> Optional[SimulationFrame]:
        """
        Advance by a wall-clock interval.

        The interval is capped at max_delta_time and then multiplied by
        the time scale. Returns None when the simulation is not active.

        Raises
        ------
        ValueError
            If wall_dt is negative or not finite
        """
        if not np.isfinite(wall_dt) or wall_dt < 0:
            raise ValueError(f"Wall-clock delta must be a non-negative number, got {wall_dt}")
        if not self.is_active:
            return None

        capped = min(wall_dt, self.settings.max_delta_time)
        if capped < wall_dt:
            logger.debug("Delta time %.3f s capped to %.3f s", wall_dt, capped)
        return self.advance(capped * self.time_scale, chart_elapsed=capped)

    def _consume_fuel(self, throttle: float, dt: float):
        if throttle <= 0:
            return
        consumption = throttle * FULL_FUEL / self.settings.max_flight_time * dt
        self.fuel_remaining = max(0.0, self.fuel_remaining - consumption)
        if self.fuel_remaining == 0.0:
            logger.warning("Fuel exhausted at t=%.2f s", self.simulation_time)

    def advance(self, dt: float, chart_elapsed: Optional[float] = None) -> SimulationFrame:
        """
        Advance the simulation by exactly dt simulated seconds.

        Parameters
        ----------
        dt : float
            Simulated timestep (s)
        chart_elapsed : float, optional
            Time credited to the chart sampler; defaults to dt

        Returns
        -------
        SimulationFrame
            The committed frame, or the current one if the flight has
            ended or crashed (a crashing step is not committed). Observers
            are notified once with the terminal frame.
        """
        if self.has_crashed or self.has_landed:
            return self._frame(ControlInputs())

        current = self.state
        time = self.simulation_time

        if self.is_canonical and canonical_landed(time, current, self.max_altitude, self.settings,
                                                  self.dynamics.environment, self.thresholds):
            self._land()
            frame = self._frame(ControlInputs())
            self._notify(frame)
            return frame

        requested = self.source.controls(time, current)
        throttle = requested.throttle if self.fuel_remaining > 0 else 0.0
        controls = ControlInputs(throttle=throttle, elevator=requested.elevator,
                                 rudder=requested.rudder, wing_warp=requested.wing_warp)

        self._consume_fuel(throttle, dt)

        new_state = self.dynamics.integrate(current, controls, dt)

        displacement = new_state.position - current.position
        self.distance_traveled += float(np.hypot(displacement[0], displacement[2]))
        self.max_altitude = max(self.max_altitude, new_state.altitude)

        data = self.dynamics.compute_display_data(new_state, controls)

        outcome = classify_tick(current, new_state, data, self.thresholds)
        if outcome is FlightOutcome.CRASHED:
            self.has_crashed = True
            self.is_running = False
            logger.info("Crashed at t=%.2f s (altitude %.2f m, vertical speed %.2f m/s)",
                        time, new_state.altitude, new_state.velocity[1])
            frame = self._frame(controls)
            self._notify(frame)
            return frame

        self.state = new_state
        self.data = data
        self.simulation_time = time + dt

        self.recorder.record(time, new_state, data,
                             self.dynamics.control_surfaces.deflections_deg(controls),
                             dt if chart_elapsed is None else chart_elapsed,
                             distance=self.distance_traveled)

        frame = self._frame(controls)
        self._notify(frame)
        return frame

    def _land(self):
        self.has_landed = True
        self.is_running = False
        self.is_paused = True
        logger.info("Canonical flight ended at t=%.2f s: %.2f m travelled, %.2f m peak altitude",
                    self.simulation_time, self.distance_traveled, self.max_altitude)

    def _frame(self, controls: ControlInputs) -> SimulationFrame:
        return SimulationFrame(time=self.simulation_time, state=self.state,
                               data=self.data, controls=controls, outcome=self.outcome)

    def run(self, duration: Optional[float] = None, dt: Optional[float] = None) -> FlightSummary:
        """
        Run headless with a fixed timestep.

        Starts a manual flight if nothing is running. Stops after `duration`
        simulated seconds (defaults to one second past the canonical
        duration) or as soon as the flight crashes or lands.

        Parameters
        ----------
        duration : float, optional
            Maximum simulated time (s)
        dt : float, optional
            Fixed timestep (s), defaults to settings.time_step

        Returns
        -------
        FlightSummary
        """
        dt = self.settings.time_step if dt is None else dt
        if duration is None:
            duration = self.settings.canonical_duration + 1.0
        if not self.is_running:
            self.start_manual()

        while self.simulation_time < duration and self.is_running and not self.has_crashed:
            if self.is_paused:
                break
            self.advance(dt)

        return self.summary()

    def summary(self) -> FlightSummary:
        return FlightSummary(
            duration=self.simulation_time,
            distance=self.distance_traveled,
            max_altitude=self.max_altitude,
            outcome=self.outcome,
            final_state=self.state,
        )

    def __repr__(self):
        mode = "canonical" if self.is_canonical else "manual"
        return (f"SimulationDriver({mode}, t={self.simulation_time:.2f} s, "
                f"outcome={self.outcome.value})")
