"""
Aircraft state, control inputs and derived flight data.

State includes:
- Position (x, y, z) in the Y-up world frame (m)
- Velocity (vx, vy, vz) in the world frame (m/s)
- Attitude quaternion (body to world)
- Angular rates (roll, pitch, yaw) (rad/s)
- Engine RPM and last applied throttle

States are immutable snapshots. The integrator never mutates a state in
place; it returns a new one each tick.
"""

import numpy as np
from dataclasses import dataclass, fields
from typing import Dict

from archimedes import struct, field
from archimedes.tree import replace as tree_replace

from .constants import (
    EnvironmentSettings, SimulationSettings,
    KILL_DEVIL_HILLS, DEFAULT_SIMULATION,
)
from .quaternion import Quaternion


@struct(frozen=True)
class AircraftState:
    """
    Complete aircraft state snapshot.

    Attributes
    ----------
    position : np.ndarray, shape (3,)
        World position (m); y is altitude above the sand
    velocity : np.ndarray, shape (3,)
        World velocity (m/s); the aircraft nominally flies toward -Z
    orientation : Quaternion
        Unit quaternion, body to world
    angular_velocity : np.ndarray, shape (3,)
        [roll, pitch, yaw] rates (rad/s)
    engine_rpm : float
        Engine speed (rev/min)
    throttle : float
        Last applied throttle [0, 1]
    """

    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    velocity: np.ndarray = field(default_factory=lambda: np.zeros(3))
    orientation: Quaternion = field(default_factory=Quaternion)
    angular_velocity: np.ndarray = field(default_factory=lambda: np.zeros(3))
    engine_rpm: float = 0.0
    throttle: float = 0.0

    @property
    def altitude(self) -> float:
        """Height above the reference ground (m)."""
        return float(self.position[1])

    @property
    def ground_speed(self) -> float:
        """Horizontal speed over the terrain (m/s)."""
        return float(np.hypot(self.velocity[0], self.velocity[2]))

    @property
    def pitch(self) -> float:
        return self.orientation.pitch

    @property
    def yaw(self) -> float:
        return self.orientation.yaw

    def replace(self, **changes) -> 'AircraftState':
        """Return a copy with the given fields replaced."""
        return tree_replace(self, **changes)

    def __repr__(self) -> str:
        return (f"AircraftState(pos={self.position}, vel={self.velocity}, "
                f"omega={self.angular_velocity}, rpm={self.engine_rpm:.1f})")

    def __str__(self) -> str:
        phi, theta, psi = self.orientation.to_euler_angles()
        return (
            f"Wright Flyer State:\n"
            f"  Position:         [{self.position[0]:7.2f}, {self.position[1]:7.2f}, {self.position[2]:7.2f}] m\n"
            f"  Velocity:         [{self.velocity[0]:7.2f}, {self.velocity[1]:7.2f}, {self.velocity[2]:7.2f}] m/s\n"
            f"  Ground speed:     {self.ground_speed:7.2f} m/s\n"
            f"  Euler angles:     [{np.degrees(phi):6.2f}, {np.degrees(theta):6.2f}, {np.degrees(psi):6.2f}] deg\n"
            f"  Angular rates:    [{self.angular_velocity[0]:7.4f}, {self.angular_velocity[1]:7.4f}, "
            f"{self.angular_velocity[2]:7.4f}] rad/s\n"
            f"  Engine:           {self.engine_rpm:7.1f} rpm at throttle {self.throttle:.2f}"
        )


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


@dataclass(frozen=True)
class ControlInputs:
    """
    Pilot control positions for one tick.

    throttle is in [0, 1]; elevator, rudder and wing_warp are normalized
    deflections in [-1, 1] (positive elevator is nose up).
    """

    throttle: float = 0.0
    elevator: float = 0.0
    rudder: float = 0.0
    wing_warp: float = 0.0

    @classmethod
    def clamped(cls, throttle: float = 0.0, elevator: float = 0.0,
                rudder: float = 0.0, wing_warp: float = 0.0) -> 'ControlInputs':
        """Build inputs with every channel clamped to its legal range."""
        return cls(
            throttle=_clamp(throttle, 0.0, 1.0),
            elevator=_clamp(elevator, -1.0, 1.0),
            rudder=_clamp(rudder, -1.0, 1.0),
            wing_warp=_clamp(wing_warp, -1.0, 1.0),
        )


@dataclass(frozen=True)
class Forces:
    """Force magnitudes (N)."""
    lift: float
    drag: float
    thrust: float
    weight: float


@dataclass(frozen=True)
class Moments:
    """Control moments (N·m)."""
    pitch: float
    yaw: float
    roll: float


@dataclass(frozen=True)
class AircraftData:
    """Derived per-tick telemetry; recomputed from state and controls."""

    forces: Forces
    moments: Moments
    airspeed: float
    altitude: float
    angle_of_attack: float
    engine_power: float
    engine_torque: float

    def as_dict(self) -> Dict[str, float]:
        """Flatten into a single-level dictionary."""
        flat = {f.name: getattr(self.forces, f.name) for f in fields(Forces)}
        flat.update({f"{f.name}_moment": getattr(self.moments, f.name) for f in fields(Moments)})
        flat.update({
            'airspeed': self.airspeed,
            'altitude': self.altitude,
            'angle_of_attack': self.angle_of_attack,
            'engine_power': self.engine_power,
            'engine_torque': self.engine_torque,
        })
        return flat


def initial_aircraft_state(settings: SimulationSettings = DEFAULT_SIMULATION,
                           environment: EnvironmentSettings = KILL_DEVIL_HILLS,
                           from_rest: bool = False) -> AircraftState:
    """
    Aircraft sitting on the launch rail, pitched to the trim angle of attack.

    Parameters
    ----------
    settings : SimulationSettings
        Initial pitch, launch speed and engine RPM
    environment : EnvironmentSettings
        Supplies the launch rail height
    from_rest : bool
        True for manual flights (no launch velocity); the canonical flight
        starts with the aircraft already rolling along the rail.
    """
    launch_speed = 0.0 if from_rest else settings.launch_speed
    return AircraftState(
        position=np.array([0.0, environment.launch_rail_height, 0.0]),
        velocity=np.array([0.0, 0.0, -launch_speed]),
        orientation=Quaternion.from_axis_angle(np.array([0.0, 1.0, 0.0]),
                                               settings.initial_pitch),
        angular_velocity=np.zeros(3),
        engine_rpm=settings.initial_rpm,
        throttle=0.0,
    )
