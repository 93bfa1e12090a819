"""
Control inputs for flight simulation.

This module provides the canonical first-flight schedule and the control
sources the simulation driver draws inputs from.
"""

from .canonical import controls_at_time, smoothstep, lerp
from .sources import ControlSource, ManualControlSource, CanonicalControlSource

__all__ = [
    'controls_at_time',
    'smoothstep',
    'lerp',
    'ControlSource',
    'ManualControlSource',
    'CanonicalControlSource',
]
