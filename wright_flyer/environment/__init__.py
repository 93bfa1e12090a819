"""
Environment models for flight simulation.

This module provides the standard atmosphere used for air density.
"""

from .atmosphere import StandardAtmosphere

__all__ = ['StandardAtmosphere']
