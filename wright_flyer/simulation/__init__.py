"""
Simulation driver, outcome policy and flight recording.
"""

from .driver import SimulationDriver, SimulationFrame
from .outcome import FlightOutcome, OutcomeThresholds, classify_tick, canonical_landed
from .recorder import FlightRecorder, FlightSummary

__all__ = [
    'SimulationDriver',
    'SimulationFrame',
    'FlightOutcome',
    'OutcomeThresholds',
    'classify_tick',
    'canonical_landed',
    'FlightRecorder',
    'FlightSummary',
]
