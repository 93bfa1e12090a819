"""
Analysis tools for flight dynamics.

This module provides level-flight trim and performance calculations.
"""

from .trim import (
    required_lift_coefficient,
    trim_angle_of_attack,
    trim_throttle,
    stall_speed,
    lift_drag_polar,
)

__all__ = [
    'required_lift_coefficient',
    'trim_angle_of_attack',
    'trim_throttle',
    'stall_speed',
    'lift_drag_polar',
]
