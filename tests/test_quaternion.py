"""
Quaternion Tests

Tests for:
- Component access and immutability
- Pitch and yaw extraction in the Y-up frame
- Kinematic integration and normalization
"""

import pytest
import numpy as np
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from wright_flyer.core.quaternion import Quaternion


class TestQuaternionBasics:
    """Construction and component access."""

    def test_default_is_identity(self):
        q = Quaternion()
        assert np.allclose(q.q, [1, 0, 0, 0])
        assert q.w == 1.0

    def test_components(self):
        q = Quaternion(np.array([0.5, 0.5, 0.5, 0.5]))
        assert (q.w, q.x, q.y, q.z) == (0.5, 0.5, 0.5, 0.5)

    def test_frozen(self):
        q = Quaternion()
        with pytest.raises(AttributeError):
            q.q = np.zeros(4)

    def test_normalized(self):
        q = Quaternion(np.array([2.0, 0.0, 0.0, 0.0])).normalized()
        assert np.allclose(q.q, [1, 0, 0, 0])

    def test_normalized_degenerate_returns_identity(self):
        q = Quaternion(np.zeros(4)).normalized()
        assert np.allclose(q.q, [1, 0, 0, 0])


class TestQuaternionAngles:
    """Pitch and yaw extraction."""

    def test_pitch_about_y_axis(self):
        q = Quaternion.from_axis_angle(np.array([0.0, 1.0, 0.0]), 0.075)
        assert np.isclose(q.pitch, 0.075)
        assert np.isclose(q.yaw, 0.0)

    def test_yaw_about_z_axis(self):
        q = Quaternion.from_axis_angle(np.array([0.0, 0.0, 1.0]), 0.3)
        assert np.isclose(q.yaw, 0.3)
        assert np.isclose(q.pitch, 0.0)

    def test_euler_angles_of_roll(self):
        q = Quaternion.from_axis_angle(np.array([1.0, 0.0, 0.0]), 0.2)
        phi, theta, psi = q.to_euler_angles()
        assert np.allclose([phi, theta, psi], [0.2, 0.0, 0.0])

    def test_pitch_clamped_at_ninety_degrees(self):
        q = Quaternion.from_axis_angle(np.array([0.0, 1.0, 0.0]), np.pi / 2)
        assert np.isclose(q.pitch, np.pi / 2)


class TestQuaternionAlgebra:
    """Kinematics and integration."""

    def test_derivative_at_identity(self):
        q_dot = Quaternion().derivative(np.array([0.2, -0.4, 0.6]))
        assert np.allclose(q_dot, [0.0, 0.1, -0.2, 0.3])

    def test_derivative_orthogonal_to_q(self):
        q = Quaternion.from_axis_angle(np.array([1.0, 2.0, 3.0]), 0.7)
        assert np.isclose(np.dot(q.derivative(np.array([0.5, -0.3, 0.8])), q.q), 0.0)

    def test_integrate_zero_rate(self):
        q = Quaternion.from_axis_angle(np.array([0.0, 1.0, 0.0]), 0.1)
        q_new = q.integrate(np.zeros(3), 1.0 / 60.0)
        assert np.allclose(q_new.q, q.q)

    def test_integrate_returns_new_instance(self):
        q = Quaternion()
        q_new = q.integrate(np.array([0.0, 0.5, 0.0]), 0.1)
        assert q_new is not q
        assert np.allclose(q.q, [1, 0, 0, 0])

    def test_integrate_pitch_rate(self):
        """Constant pitch rate accumulates pitch angle."""
        q = Quaternion()
        dt = 1.0 / 60.0
        for _ in range(60):
            q = q.integrate(np.array([0.0, 0.2, 0.0]), dt)
        assert np.isclose(q.pitch, 0.2, atol=1e-3)

    def test_integrate_stays_unit_norm(self):
        q = Quaternion()
        omega = np.array([0.5, -0.3, 0.8])
        for _ in range(1000):
            q = q.integrate(omega, 1.0 / 60.0)
            assert abs(q.norm() - 1.0) < 1e-9
