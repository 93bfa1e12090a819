"""
Quaternion mathematics for attitude representation.

Quaternions provide a singularity-free representation of 3D rotations,
avoiding gimbal lock issues of Euler angles.

Convention: q = [q0, q1, q2, q3] = [w, x, y, z] = [scalar, vector]
            The quaternion rotates body axes into the world frame.
            World frame is Y-up; x = roll axis, y = pitch axis, z = yaw axis.
"""

import numpy as np
from typing import Tuple

from archimedes import struct, field
from archimedes.spatial import quaternion_kinematics, quaternion_to_euler


IDENTITY = np.array([1.0, 0.0, 0.0, 0.0])


@struct(frozen=True)
class Quaternion:
    """
    Immutable unit quaternion.

    Operations return new instances instead of normalizing in place.
    """

    q: np.ndarray = field(default_factory=lambda: IDENTITY.copy())

    @property
    def w(self) -> float:
        return self.q[0]

    @property
    def x(self) -> float:
        return self.q[1]

    @property
    def y(self) -> float:
        return self.q[2]

    @property
    def z(self) -> float:
        return self.q[3]

    def norm(self) -> float:
        return float(np.linalg.norm(self.q))

    def normalized(self) -> 'Quaternion':
        """Return the quaternion scaled to unit length (identity if degenerate)."""
        norm = np.linalg.norm(self.q)
        if norm < 1e-10:
            return Quaternion(IDENTITY.copy())
        return Quaternion(self.q / norm)

    def to_euler_angles(self) -> Tuple[float, float, float]:
        """
        Convert quaternion to Euler angles (roll, pitch, yaw).

        Convention: roll-pitch-yaw (xyz) sequence, pitch = asin(2(wy - zx))

        Returns:
        --------
        phi : float
            Roll angle (radians)
        theta : float
            Pitch angle (radians)
        psi : float
            Yaw angle (radians)
        """
        phi, theta, psi = quaternion_to_euler(np.asarray(self.q, dtype=float))
        return float(phi), float(theta), float(psi)

    @property
    def pitch(self) -> float:
        """Pitch angle (rad), rotation about the y axis."""
        return self.to_euler_angles()[1]

    @property
    def yaw(self) -> float:
        """Yaw angle (rad), rotation about the z axis."""
        return self.to_euler_angles()[2]

    def derivative(self, omega: np.ndarray) -> np.ndarray:
        """
        Quaternion time derivative q_dot = 0.5 * q ⊗ [0, omega].

        Parameters:
        -----------
        omega : np.ndarray, shape (3,)
            Angular velocity [roll, pitch, yaw] rate (rad/s)
        """
        return quaternion_kinematics(np.asarray(self.q, dtype=float),
                                     np.asarray(omega, dtype=float))

    def integrate(self, omega: np.ndarray, dt: float) -> 'Quaternion':
        """
        Integrate quaternion forward in time given angular velocity.

        First-order step q(t+dt) = q(t) + q_dot * dt, then renormalized.

        Parameters:
        -----------
        omega : np.ndarray, shape (3,)
            Angular velocity (rad/s)
        dt : float
            Time step (seconds)

        Returns:
        --------
        q_new : Quaternion
            Updated unit quaternion
        """
        return Quaternion(self.q + self.derivative(omega) * dt).normalized()

    @staticmethod
    def from_axis_angle(axis: np.ndarray, angle: float) -> 'Quaternion':
        """Rotation of `angle` radians about `axis`."""
        axis = np.asarray(axis, dtype=float)
        axis = axis / np.linalg.norm(axis)
        half = angle / 2.0
        return Quaternion(np.hstack([np.cos(half), np.sin(half) * axis]))

    def __repr__(self) -> str:
        return f"Quaternion({self.q})"

    def __str__(self) -> str:
        phi, theta, psi = self.to_euler_angles()
        return (f"Quaternion: q={self.q}\n"
                f"  Roll:  {np.degrees(phi):7.2f}°\n"
                f"  Pitch: {np.degrees(theta):7.2f}°\n"
                f"  Yaw:   {np.degrees(psi):7.2f}°")
