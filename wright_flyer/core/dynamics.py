"""
Flight dynamics integrator for the Wright Flyer.

Advances the aircraft state with fixed-step explicit Euler integration:
- Forces (thrust, weight, lift, drag) in the Y-up world frame
- Ground contact with rolling friction on the launch rail
- Pitch, yaw and roll from control moments with damping
- Quaternion kinematics q_dot = 0.5 * Omega(omega) * q

Lift is applied as a purely vertical force scaled by cos(pitch). The
model only couples the longitudinal axis; yaw and roll respond to the
rudder and wing warping but do not feed back into the forces.
"""

import numpy as np
from dataclasses import dataclass
from typing import Tuple

from .aerodynamics import AerodynamicsEngine
from .constants import (
    AirframeSpecs, EnvironmentSettings, DynamicsTuning,
    WRIGHT_FLYER_SPECS, KILL_DEVIL_HILLS, DEFAULT_TUNING,
)
from .control_surfaces import ControlSurfaces
from .propulsion import EngineModel
from .state import AircraftState, ControlInputs, AircraftData, Forces, Moments


@dataclass(frozen=True)
class _Evaluation:
    """Aerodynamic and propulsive quantities at one state."""

    airspeed: float
    air_density: float
    pitch: float
    yaw: float
    angle_of_attack: float
    lift: float
    drag: float
    thrust: float
    weight: float
    moments: Moments
    engine_rpm: float


class FlightDynamics:
    """
    Point-mass translational dynamics with decoupled attitude dynamics.

    Parameters
    ----------
    specs : AirframeSpecs
        Airframe parameters
    environment : EnvironmentSettings
        Headwind, ground level, launch rail height, gravity
    tuning : DynamicsTuning
        Damping, stability and ground-contact constants
    """

    def __init__(self, specs: AirframeSpecs = WRIGHT_FLYER_SPECS,
                 environment: EnvironmentSettings = KILL_DEVIL_HILLS,
                 tuning: DynamicsTuning = DEFAULT_TUNING):
        self.specs = specs
        self.environment = environment
        self.tuning = tuning

        self.aerodynamics = AerodynamicsEngine(specs)
        self.engine = EngineModel(specs)
        self.control_surfaces = ControlSurfaces(specs)

    @property
    def weight(self) -> float:
        return self.specs.total_mass * self.environment.gravity

    def airspeed(self, velocity: np.ndarray, include_wind: bool = True) -> float:
        """Speed relative to the air mass (or to the ground if include_wind is False)."""
        if include_wind:
            velocity = np.asarray(velocity) - self.environment.headwind_vector
        return float(np.linalg.norm(velocity))

    @staticmethod
    def ground_speed(velocity: np.ndarray) -> float:
        return float(np.hypot(velocity[0], velocity[2]))

    def _evaluate(self, state: AircraftState, controls: ControlInputs,
                  engine_rpm: float) -> _Evaluation:
        """Shared force evaluation used by both integrate and display data."""
        vx, vy, vz = state.velocity
        headwind = self.environment.headwind_speed

        airspeed = self.airspeed(state.velocity)
        air_density = self.aerodynamics.air_density(max(0.0, state.position[1]))

        pitch = state.orientation.pitch
        yaw = state.orientation.yaw

        # Flight path angle is taken against the horizontal airspeed
        angle_of_attack = 0.0
        if airspeed > self.tuning.min_aero_airspeed:
            horizontal_airspeed = np.sqrt(vx**2 + (vz - headwind)**2)
            angle_of_attack = pitch - np.arctan2(vy, horizontal_airspeed)

        lift = self.aerodynamics.lift(airspeed, angle_of_attack, air_density)
        cl = self.aerodynamics.lift_coefficient(angle_of_attack)
        drag = self.aerodynamics.drag(airspeed, cl, air_density)
        thrust = self.engine.thrust(controls.throttle, engine_rpm, airspeed)

        moments = self.control_surfaces.moments(
            controls.elevator, controls.rudder, controls.wing_warp,
            airspeed, air_density,
        )

        return _Evaluation(
            airspeed=float(airspeed),
            air_density=float(air_density),
            pitch=pitch,
            yaw=yaw,
            angle_of_attack=float(angle_of_attack),
            lift=float(lift),
            drag=float(drag),
            thrust=float(thrust),
            weight=self.weight,
            moments=moments,
            engine_rpm=engine_rpm,
        )

    def _to_data(self, state: AircraftState, controls: ControlInputs,
                 ev: _Evaluation) -> AircraftData:
        return AircraftData(
            forces=Forces(lift=ev.lift, drag=ev.drag, thrust=ev.thrust, weight=ev.weight),
            moments=ev.moments,
            airspeed=ev.airspeed,
            altitude=state.altitude,
            angle_of_attack=ev.angle_of_attack,
            engine_power=float(self.engine.power(controls.throttle, ev.engine_rpm)),
            engine_torque=float(self.engine.torque(controls.throttle, ev.engine_rpm)),
        )

    def step(self, state: AircraftState, controls: ControlInputs,
             dt: float) -> Tuple[AircraftState, AircraftData]:
        """
        Advance one timestep.

        Parameters
        ----------
        state : AircraftState
            Current state (not modified)
        controls : ControlInputs
            Pilot inputs, assumed already clamped
        dt : float
            Timestep (s)

        Returns
        -------
        new_state : AircraftState
            State after dt
        data : AircraftData
            Forces and moments the step was computed from, evaluated at
            the incoming state with the updated engine RPM
        """
        env = self.environment
        tune = self.tuning
        specs = self.specs

        rpm = self.engine.rpm_response(controls.throttle, state.engine_rpm, dt)
        ev = self._evaluate(state, controls, rpm)

        vx, vy, vz = state.velocity
        headwind = env.headwind_speed
        cos_pitch, sin_pitch = np.cos(ev.pitch), np.sin(ev.pitch)
        cos_yaw, sin_yaw = np.cos(ev.yaw), np.sin(ev.yaw)

        # Thrust along the nose, nose points toward -Z at zero yaw
        forward = np.array([-sin_yaw * cos_pitch, sin_pitch, -cos_yaw * cos_pitch])
        force = ev.thrust * forward
        force[1] -= ev.weight

        if ev.airspeed > tune.min_aero_airspeed:
            force[1] += ev.lift * cos_pitch
            air_velocity = np.array([vx, vy, vz - headwind])
            force -= (ev.drag / ev.airspeed) * air_velocity

        accel = force / specs.total_mass

        # Launch rail: rolling friction and no sinking while lift < weight
        if state.position[1] <= env.launch_rail_height + tune.ground_contact_margin:
            ground_speed = np.hypot(vx, vz)
            if ground_speed > tune.min_rolling_speed:
                friction = tune.rolling_friction * max(0.0, ev.weight - ev.lift)
                accel[0] -= (friction / specs.total_mass) * (vx / ground_speed)
                accel[2] -= (friction / specs.total_mass) * (vz / ground_speed)
            if ev.lift < ev.weight and vy < 0:
                accel[1] = max(0.0, accel[1])

        omega = state.angular_velocity
        stability = (tune.pitch_stability * (ev.angle_of_attack - tune.trim_angle_of_attack)
                     * (ev.airspeed / tune.stability_reference_speed))
        angular_accel = np.array([
            ev.moments.roll / specs.ixx,
            (ev.moments.pitch - tune.pitch_damping * omega[1] - stability) / specs.iyy,
            ev.moments.yaw / specs.izz,
        ])

        velocity = (state.velocity + accel * dt) * tune.linear_damping

        position = state.position + velocity * dt
        position[1] = max(env.ground_level, position[1])

        # Touchdown on the sand
        if position[1] <= env.ground_level and velocity[1] < 0:
            position[1] = env.ground_level
            velocity[1] = 0.0
            velocity[0] *= tune.touchdown_friction
            velocity[2] *= tune.touchdown_friction

        angular_velocity = np.clip((omega + angular_accel * dt) * tune.angular_damping,
                                   -tune.max_angular_velocity, tune.max_angular_velocity)

        orientation = state.orientation.integrate(angular_velocity, dt)

        new_state = AircraftState(
            position=position,
            velocity=velocity,
            orientation=orientation,
            angular_velocity=angular_velocity,
            engine_rpm=rpm,
            throttle=controls.throttle,
        )
        return new_state, self._to_data(state, controls, ev)

    def integrate(self, state: AircraftState, controls: ControlInputs,
                  dt: float) -> AircraftState:
        """Advance the state by dt and return the new state."""
        new_state, _ = self.step(state, controls, dt)
        return new_state

    def compute_display_data(self, state: AircraftState,
                             controls: ControlInputs) -> AircraftData:
        """Forces, moments and engine output at a state, using its engine RPM."""
        ev = self._evaluate(state, controls, state.engine_rpm)
        return self._to_data(state, controls, ev)

    def __repr__(self):
        return (f"FlightDynamics(mass={self.specs.total_mass} kg, "
                f"headwind={self.environment.headwind_speed} m/s)")
