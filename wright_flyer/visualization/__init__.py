"""
Visualization Module

Provides plotting for recorded flights and wing aerodynamics.
"""

from .plotting import (
    plot_flight_profile,
    plot_flight_telemetry,
    plot_lift_curve,
)

__all__ = [
    'plot_flight_profile',
    'plot_flight_telemetry',
    'plot_lift_curve',
]
