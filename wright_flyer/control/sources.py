"""
Control sources for the simulation driver.

A control source supplies the pilot inputs for each tick. The driver
holds exactly one source: manual inputs set from outside, or the
canonical first-flight schedule.
"""

from abc import ABC, abstractmethod

from ..core.constants import FIRST_FLIGHT
from ..core.state import AircraftState, ControlInputs
from .canonical import controls_at_time


class ControlSource(ABC):
    """Base class for anything that produces control inputs."""

    @abstractmethod
    def controls(self, time: float, state: AircraftState) -> ControlInputs:
        """
        Control inputs for this tick.

        Parameters
        ----------
        time : float
            Simulation time (s)
        state : AircraftState
            Current aircraft state

        Returns
        -------
        ControlInputs
            Inputs within their legal ranges
        """
        pass

    def reset(self):
        """Return to the initial input positions."""
        pass


class ManualControlSource(ControlSource):
    """
    Pilot inputs set through setters; every value is clamped to range.
    """

    def __init__(self, throttle: float = 0.0, elevator: float = 0.0,
                 rudder: float = 0.0, wing_warp: float = 0.0):
        self._inputs = ControlInputs.clamped(throttle, elevator, rudder, wing_warp)

    @property
    def throttle(self) -> float:
        return self._inputs.throttle

    @property
    def elevator(self) -> float:
        return self._inputs.elevator

    @property
    def rudder(self) -> float:
        return self._inputs.rudder

    @property
    def wing_warp(self) -> float:
        return self._inputs.wing_warp

    def _update(self, **changes):
        values = {
            'throttle': self._inputs.throttle,
            'elevator': self._inputs.elevator,
            'rudder': self._inputs.rudder,
            'wing_warp': self._inputs.wing_warp,
        }
        values.update(changes)
        self._inputs = ControlInputs.clamped(**values)

    def set_throttle(self, value: float):
        self._update(throttle=value)

    def set_elevator(self, value: float):
        self._update(elevator=value)

    def set_rudder(self, value: float):
        self._update(rudder=value)

    def set_wing_warp(self, value: float):
        self._update(wing_warp=value)

    def set_controls(self, **values):
        """Set several channels at once, e.g. set_controls(throttle=0.8, elevator=0.1)."""
        unknown = set(values) - {'throttle', 'elevator', 'rudder', 'wing_warp'}
        if unknown:
            raise ValueError(f"Unknown control channel(s): {sorted(unknown)}")
        self._update(**values)

    def reset(self):
        self._inputs = ControlInputs()

    def controls(self, time: float, state: AircraftState) -> ControlInputs:
        return self._inputs

    def __repr__(self):
        c = self._inputs
        return (f"ManualControlSource(throttle={c.throttle:.2f}, elevator={c.elevator:.2f}, "
                f"rudder={c.rudder:.2f}, wing_warp={c.wing_warp:.2f})")


class CanonicalControlSource(ControlSource):
    """The scripted first-flight schedule; ignores the aircraft state."""

    def __init__(self, duration: float = FIRST_FLIGHT.duration):
        self.duration = duration

    def controls(self, time: float, state: AircraftState) -> ControlInputs:
        return controls_at_time(time, self.duration)

    def __repr__(self):
        return f"CanonicalControlSource(duration={self.duration} s)"
