"""
Flight data recording.

Provides:
- FlightRecorder: decimated chart series capped at a fixed length
- FlightSummary: headline numbers of a flight compared with the 1903 record
"""

import logging
from collections import deque
from dataclasses import dataclass
from typing import Dict, Optional

import numpy as np
import pandas as pd

from ..core.constants import HistoricalFlight, FIRST_FLIGHT, DEFAULT_SIMULATION
from ..core.state import AircraftState, AircraftData
from .outcome import FlightOutcome

logger = logging.getLogger(__name__)


SERIES = (
    'distance',
    'lift',
    'drag',
    'thrust',
    'torque',
    'airspeed',
    'altitude',
    'engine_power',
    'engine_rpm',
    'elevator_deflection',
    'rudder_deflection',
    'wing_warp_deflection',
)


class FlightRecorder:
    """
    Chart data recorder.

    Samples are taken once per `interval` seconds of accumulated time;
    each series keeps only the newest `max_points` samples.

    Parameters
    ----------
    interval : float
        Sampling interval (s)
    max_points : int
        Maximum samples retained per series
    """

    def __init__(self, interval: float = DEFAULT_SIMULATION.chart_interval,
                 max_points: int = DEFAULT_SIMULATION.max_data_points):
        self.interval = interval
        self.max_points = max_points
        self._elapsed = 0.0
        self._time = deque(maxlen=max_points)
        self._series = {name: deque(maxlen=max_points) for name in SERIES}

    def __len__(self):
        return len(self._time)

    def record(self, time: float, state: AircraftState, data: AircraftData,
               deflections: Dict[str, float], elapsed: float,
               distance: float = 0.0) -> bool:
        """
        Offer a sample; it is stored only when the interval has passed.

        Parameters
        ----------
        time : float
            Simulation time stamp of the sample (s)
        state : AircraftState
            State after the tick (engine RPM is read from it)
        data : AircraftData
            Display data for the tick
        deflections : dict
            Control surface deflections in degrees
        elapsed : float
            Time since the previous offer (s)
        distance : float
            Ground track covered so far (m)

        Returns
        -------
        bool
            True if the sample was stored
        """
        self._elapsed += elapsed
        if self._elapsed < self.interval:
            return False
        self._elapsed = 0.0

        sample = {
            'distance': distance,
            'lift': data.forces.lift,
            'drag': data.forces.drag,
            'thrust': data.forces.thrust,
            'torque': data.engine_torque,
            'airspeed': data.airspeed,
            'altitude': data.altitude,
            'engine_power': data.engine_power,
            'engine_rpm': state.engine_rpm,
        }
        sample.update(deflections)

        self._time.append(time)
        for name in SERIES:
            self._series[name].append(float(sample.get(name, 0.0)))
        return True

    def to_arrays(self) -> Dict[str, np.ndarray]:
        """All series as numpy arrays, keyed by name plus 'time'."""
        arrays = {'time': np.array(self._time)}
        arrays.update({name: np.array(values) for name, values in self._series.items()})
        return arrays

    def to_dataframe(self) -> pd.DataFrame:
        """All series as a DataFrame with a 'time' column."""
        return pd.DataFrame(self.to_arrays())

    def clear(self):
        self._elapsed = 0.0
        self._time.clear()
        for values in self._series.values():
            values.clear()
        logger.debug("Flight recorder cleared")


@dataclass(frozen=True)
class FlightSummary:
    """Headline results of a flight."""

    duration: float
    distance: float
    max_altitude: float
    outcome: FlightOutcome
    final_state: Optional[AircraftState] = None
    reference: HistoricalFlight = FIRST_FLIGHT

    @property
    def average_ground_speed(self) -> float:
        if self.duration <= 0:
            return 0.0
        return self.distance / self.duration

    @property
    def duration_error(self) -> float:
        return self.duration - self.reference.duration

    @property
    def distance_error(self) -> float:
        return self.distance - self.reference.distance

    @property
    def altitude_error(self) -> float:
        return self.max_altitude - self.reference.max_altitude

    @property
    def ground_speed_error(self) -> float:
        return self.average_ground_speed - self.reference.ground_speed

    def __str__(self) -> str:
        ref = self.reference
        return (
            f"Flight summary ({self.outcome.value}):\n"
            f"  Duration:      {self.duration:6.2f} s   (1903: {ref.duration:.1f} s)\n"
            f"  Distance:      {self.distance:6.2f} m   (1903: {ref.distance:.1f} m)\n"
            f"  Max altitude:  {self.max_altitude:6.2f} m   (1903: {ref.max_altitude:.1f} m)\n"
            f"  Ground speed:  {self.average_ground_speed:6.2f} m/s (1903: {ref.ground_speed:.1f} m/s)"
        )
