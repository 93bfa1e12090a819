"""
Simulation Driver Tests

Tests for:
- Control sources
- Outcome policy (crash and canonical landing)
- Flight recorder and summary
- Driver lifecycle, time stepping, fuel and observers
"""

import pytest
import numpy as np
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from wright_flyer.control.sources import ManualControlSource, CanonicalControlSource
from wright_flyer.control.canonical import controls_at_time
from wright_flyer.core.constants import SimulationSettings, FIRST_FLIGHT
from wright_flyer.core.dynamics import FlightDynamics
from wright_flyer.core.state import (
    AircraftState, AircraftData, ControlInputs, Forces, Moments, initial_aircraft_state,
)
from wright_flyer.simulation.driver import SimulationDriver, SimulationFrame
from wright_flyer.simulation.outcome import FlightOutcome, classify_tick, canonical_landed
from wright_flyer.simulation.recorder import FlightRecorder, FlightSummary, SERIES

DT = 1.0 / 60.0


def make_state(y, vy, vz=-3.0):
    return AircraftState(position=np.array([0.0, y, 0.0]), velocity=np.array([0.0, vy, vz]))


def make_data(airspeed=10.0, lift=3000.0, weight=3335.4):
    return AircraftData(
        forces=Forces(lift=lift, drag=100.0, thrust=300.0, weight=weight),
        moments=Moments(pitch=0.0, yaw=0.0, roll=0.0),
        airspeed=airspeed, altitude=0.0, angle_of_attack=0.05,
        engine_power=5000.0, engine_torque=100.0,
    )


class TestControlSources:
    """Manual and canonical sources."""

    def test_manual_clamps(self):
        source = ManualControlSource()
        source.set_throttle(1.5)
        source.set_elevator(-2.0)
        source.set_rudder(0.3)
        source.set_wing_warp(9.0)
        c = source.controls(0.0, AircraftState())
        assert c == ControlInputs(throttle=1.0, elevator=-1.0, rudder=0.3, wing_warp=1.0)

    def test_manual_set_controls(self):
        source = ManualControlSource()
        source.set_controls(throttle=0.8, elevator=0.1)
        assert source.throttle == 0.8
        assert source.elevator == 0.1
        assert source.rudder == 0.0

    def test_manual_unknown_channel(self):
        with pytest.raises(ValueError):
            ManualControlSource().set_controls(flaps=0.5)

    def test_manual_reset(self):
        source = ManualControlSource(throttle=0.9, elevator=0.2)
        source.reset()
        assert source.controls(0.0, AircraftState()) == ControlInputs()

    def test_canonical_source(self):
        source = CanonicalControlSource()
        assert source.controls(4.0, AircraftState()) == controls_at_time(4.0)


class TestOutcomePolicy:
    """Crash classification and canonical landing."""

    def test_nominal(self):
        assert classify_tick(make_state(2.0, -0.5), make_state(1.99, -0.5), make_data()) \
            == FlightOutcome.NOMINAL

    def test_hard_impact(self):
        outcome = classify_tick(make_state(1.1, -4.0), make_state(0.7, -4.0), make_data())
        assert outcome == FlightOutcome.CRASHED

    def test_impact_needs_previous_altitude(self):
        outcome = classify_tick(make_state(0.9, -4.0), make_state(0.7, -4.0), make_data())
        assert outcome == FlightOutcome.NOMINAL

    def test_stall_crash(self):
        outcome = classify_tick(make_state(0.6, -2.5), make_state(0.55, -2.5),
                                make_data(airspeed=5.0, lift=100.0))
        assert outcome == FlightOutcome.CRASHED

    def test_stall_high_up_is_not_a_crash(self):
        outcome = classify_tick(make_state(2.0, -2.5), make_state(1.95, -2.5),
                                make_data(airspeed=5.0, lift=100.0))
        assert outcome == FlightOutcome.NOMINAL

    def test_gentle_touchdown_is_nominal(self):
        outcome = classify_tick(make_state(0.1, -0.5), make_state(0.0, 0.0), make_data(lift=1000.0))
        assert outcome == FlightOutcome.NOMINAL

    def test_canonical_time_limit(self):
        assert canonical_landed(12.0, make_state(2.0, 0.0), 2.5)

    def test_canonical_touchdown(self):
        assert canonical_landed(8.0, make_state(0.05, 0.0), 2.0)

    def test_canonical_needs_airborne(self):
        assert not canonical_landed(8.0, make_state(0.05, 0.0), 1.0)

    def test_canonical_needs_min_time(self):
        assert not canonical_landed(2.5, make_state(0.05, 0.0), 2.0)

    def test_canonical_not_while_climbing(self):
        assert not canonical_landed(8.0, make_state(0.05, 0.5), 2.0)


class TestFlightRecorder:
    """Chart data sampling."""

    def test_interval(self):
        recorder = FlightRecorder(interval=0.1)
        state = initial_aircraft_state()
        assert not recorder.record(0.0, state, make_data(), {}, elapsed=0.06)
        assert recorder.record(0.06, state, make_data(), {}, elapsed=0.06)
        assert len(recorder) == 1

    def test_max_points(self):
        recorder = FlightRecorder(interval=0.0, max_points=5)
        state = initial_aircraft_state()
        for k in range(10):
            recorder.record(float(k), state, make_data(), {}, elapsed=0.1)
        arrays = recorder.to_arrays()
        assert len(recorder) == 5
        assert np.allclose(arrays['time'], [5, 6, 7, 8, 9])
        assert all(len(arrays[name]) == 5 for name in SERIES)

    def test_sample_values(self):
        recorder = FlightRecorder(interval=0.0)
        state = initial_aircraft_state()
        recorder.record(1.0, state, make_data(), {'elevator_deflection': 5.0}, elapsed=0.1, distance=3.0)
        arrays = recorder.to_arrays()
        assert arrays['lift'][0] == 3000.0
        assert arrays['torque'][0] == 100.0
        assert arrays['engine_rpm'][0] == 380.0
        assert arrays['elevator_deflection'][0] == 5.0
        assert arrays['rudder_deflection'][0] == 0.0
        assert arrays['distance'][0] == 3.0

    def test_dataframe(self):
        recorder = FlightRecorder(interval=0.0)
        recorder.record(0.0, initial_aircraft_state(), make_data(), {}, elapsed=0.1)
        df = recorder.to_dataframe()
        assert list(df.columns) == ['time'] + list(SERIES)
        assert len(df) == 1

    def test_clear(self):
        recorder = FlightRecorder(interval=0.0)
        recorder.record(0.0, initial_aircraft_state(), make_data(), {}, elapsed=0.1)
        recorder.clear()
        assert len(recorder) == 0
        assert recorder.to_dataframe().empty


class TestFlightSummary:
    """Comparison with the 1903 record."""

    def test_exact_match(self):
        summary = FlightSummary(duration=12.0, distance=36.5, max_altitude=3.0,
                                outcome=FlightOutcome.LANDED)
        assert summary.duration_error == 0.0
        assert summary.distance_error == 0.0
        assert summary.altitude_error == 0.0
        assert np.isclose(summary.average_ground_speed, 36.5 / 12.0)
        assert summary.reference == FIRST_FLIGHT

    def test_zero_duration(self):
        summary = FlightSummary(0.0, 0.0, 0.0, FlightOutcome.NOMINAL)
        assert summary.average_ground_speed == 0.0

    def test_str(self):
        text = str(FlightSummary(12.0, 31.8, 2.7, FlightOutcome.LANDED))
        assert "landed" in text
        assert "36.5" in text


class TestDriverLifecycle:
    """Start, pause, stop, reset."""

    def test_initial(self):
        driver = SimulationDriver()
        assert not driver.is_running
        assert driver.simulation_time == 0.0
        assert driver.fuel_remaining == 100.0
        assert driver.outcome == FlightOutcome.NOMINAL

    def test_start_manual_at_rest(self):
        driver = SimulationDriver()
        driver.start_manual()
        assert driver.is_running
        assert not driver.is_canonical
        assert np.allclose(driver.state.velocity, 0.0)
        assert np.isclose(driver.state.altitude, 0.089)

    def test_start_canonical(self):
        driver = SimulationDriver()
        driver.start_canonical()
        assert driver.is_canonical
        assert np.allclose(driver.state.velocity, [0.0, 0.0, -4.0])
        assert driver.state.engine_rpm == 380.0

    def test_tick_requires_running(self):
        driver = SimulationDriver()
        assert driver.tick(0.016) is None
        assert driver.simulation_time == 0.0

    def test_pause_resume(self):
        driver = SimulationDriver()
        driver.start_manual()
        driver.pause()
        assert driver.tick(0.016) is None
        driver.resume()
        assert driver.tick(0.016) is not None
        assert np.isclose(driver.simulation_time, 0.016)

    def test_stop(self):
        driver = SimulationDriver()
        driver.start_manual()
        driver.stop()
        assert not driver.is_running
        assert driver.tick(0.016) is None

    def test_reset(self):
        driver = SimulationDriver()
        driver.start_canonical()
        for _ in range(30):
            driver.tick(DT)
        driver.reset()
        assert driver.simulation_time == 0.0
        assert not driver.is_running
        assert not driver.is_canonical
        assert len(driver.recorder) == 0
        assert driver.distance_traveled == 0.0


class TestDriverStepping:
    """Time stepping and validation."""

    def test_tick_caps_delta(self):
        driver = SimulationDriver()
        driver.start_manual()
        driver.tick(1.0)
        assert np.isclose(driver.simulation_time, 0.1)

    def test_time_scale(self):
        driver = SimulationDriver()
        driver.start_manual()
        driver.set_time_scale(2.0)
        driver.tick(0.05)
        assert np.isclose(driver.simulation_time, 0.1)

    def test_time_scale_applied_after_cap(self):
        driver = SimulationDriver()
        driver.start_manual()
        driver.set_time_scale(0.5)
        driver.tick(1.0)
        assert np.isclose(driver.simulation_time, 0.05)

    def test_invalid_time_scale(self):
        with pytest.raises(ValueError):
            SimulationDriver().set_time_scale(-1.0)

    def test_negative_delta_rejected(self):
        driver = SimulationDriver()
        driver.start_manual()
        with pytest.raises(ValueError):
            driver.tick(-0.01)

    def test_non_finite_delta_rejected(self):
        driver = SimulationDriver()
        driver.start_manual()
        with pytest.raises(ValueError):
            driver.tick(float('nan'))
        with pytest.raises(ValueError):
            driver.tick(float('inf'))

    def test_manual_controls_applied(self):
        driver = SimulationDriver()
        driver.start_manual()
        driver.manual_controls.set_throttle(0.8)
        frame = driver.tick(DT)
        assert frame.controls.throttle == 0.8
        assert driver.state.throttle == 0.8


class TestFuel:
    """Fuel consumption."""

    def test_consumption(self):
        driver = SimulationDriver()
        driver.start_manual()
        driver.manual_controls.set_throttle(1.0)
        for _ in range(60):
            driver.advance(DT)
        assert np.isclose(driver.fuel_remaining, 100.0 - 100.0 / 60.0)

    def test_no_consumption_at_zero_throttle(self):
        driver = SimulationDriver()
        driver.start_manual()
        for _ in range(60):
            driver.advance(DT)
        assert driver.fuel_remaining == 100.0

    def test_exhaustion_cuts_throttle(self):
        driver = SimulationDriver(settings=SimulationSettings(max_flight_time=0.5))
        driver.start_manual()
        driver.manual_controls.set_throttle(1.0)
        for _ in range(60):
            driver.advance(DT)
        assert driver.fuel_remaining == 0.0
        assert driver.state.throttle == 0.0


class TestCrashHandling:
    """Crashing steps are not committed."""

    def test_hard_impact_stops_simulation(self):
        falling = AircraftState(position=np.array([0.0, 1.05, 0.0]),
                                velocity=np.array([0.0, -20.0, 0.0]),
                                engine_rpm=380.0)
        driver = SimulationDriver(initial_state=falling)
        driver.start_manual()
        frame = driver.advance(DT)

        assert driver.has_crashed
        assert not driver.is_running
        assert frame.outcome == FlightOutcome.CRASHED
        assert driver.state is falling
        assert driver.simulation_time == 0.0
        assert driver.tick(DT) is None

    def test_crash_is_final(self):
        falling = AircraftState(position=np.array([0.0, 1.05, 0.0]),
                                velocity=np.array([0.0, -20.0, 0.0]),
                                engine_rpm=380.0)
        driver = SimulationDriver(initial_state=falling)
        driver.start_manual()
        driver.manual_controls.set_throttle(1.0)
        driver.advance(DT)
        fuel = driver.fuel_remaining

        frame = driver.advance(DT)
        assert frame.outcome == FlightOutcome.CRASHED
        assert driver.fuel_remaining == fuel
        assert driver.state is falling


class TestObservers:
    """Observer notifications."""

    def test_subscribe(self):
        frames = []
        driver = SimulationDriver()
        driver.subscribe(frames.append)
        driver.start_canonical()
        for _ in range(10):
            driver.tick(DT)
        assert len(frames) == 10
        assert all(isinstance(f, SimulationFrame) for f in frames)
        assert frames[-1].state is driver.state

    def test_observers_see_landing(self):
        outcomes = []
        driver = SimulationDriver()
        driver.subscribe(lambda frame: outcomes.append(frame.outcome))
        driver.start_canonical()
        driver.run(dt=DT)

        assert outcomes[-1] == FlightOutcome.LANDED
        assert outcomes.count(FlightOutcome.LANDED) == 1
        assert set(outcomes[:-1]) == {FlightOutcome.NOMINAL}

        # Further steps after landing change nothing and notify nobody
        frame = driver.advance(DT)
        assert frame.outcome == FlightOutcome.LANDED
        assert len(outcomes) == outcomes.count(FlightOutcome.NOMINAL) + 1

    def test_observers_see_crash(self):
        outcomes = []
        falling = AircraftState(position=np.array([0.0, 1.05, 0.0]),
                                velocity=np.array([0.0, -20.0, 0.0]))
        driver = SimulationDriver(initial_state=falling)
        driver.subscribe(lambda frame: outcomes.append(frame.outcome))
        driver.start_manual()
        driver.advance(DT)
        driver.advance(DT)
        assert outcomes == [FlightOutcome.CRASHED]

    def test_unsubscribe(self):
        frames = []
        driver = SimulationDriver()
        driver.subscribe(frames.append)
        driver.start_manual()
        driver.tick(DT)
        driver.unsubscribe(frames.append)
        driver.tick(DT)
        assert len(frames) == 1


class TestHeadlessRun:
    """run() and recording over a full flight."""

    def test_canonical_run_records_charts(self):
        driver = SimulationDriver()
        driver.start_canonical()
        driver.run(dt=DT)
        df = driver.recorder.to_dataframe()
        assert 90 < len(df) < 125
        assert df['altitude'].max() > 2.0
        assert np.all(np.diff(df['time']) > 0)
        assert np.all(np.diff(df['distance']) >= 0)

    def test_manual_run_on_the_ground(self):
        driver = SimulationDriver()
        summary = driver.run(duration=1.0, dt=DT)
        assert summary.outcome == FlightOutcome.NOMINAL
        assert np.isclose(summary.duration, 1.0, atol=DT)
        assert summary.max_altitude < 0.5

    def test_custom_dynamics(self):
        driver = SimulationDriver(FlightDynamics())
        driver.start_canonical()
        assert driver.run(duration=1.0).duration >= 1.0
