"""
Quintic boundary-value fit for a single joint.

The quintic polynomial is: q(t) = a0 + a1*t + a2*t² + a3*t³ + a4*t⁴ + a5*t⁵
"""

from dataclasses import dataclass
from typing import Dict, Union

import numpy as np

from armtraj.config import MIN_DURATION_S
from armtraj.utils.errors import DurationTooSmallError
from armtraj.utils.linalg import solve6

TimeArg = Union[float, np.ndarray]


@dataclass(frozen=True)
class BoundaryCondition:
    """Position, velocity and acceleration of one joint at one trajectory endpoint."""

    position: float
    velocity: float = 0.0
    acceleration: float = 0.0


def quintic_constraint_matrix(T: float) -> np.ndarray:
    """
    Build the 6x6 constraint matrix for boundary values at t=0 and t=T.

    Rows 0-2 are q, dq, ddq at t=0; rows 3-5 are the same derivatives at t=T.
    """
    T2 = T * T
    T3 = T2 * T
    T4 = T3 * T
    T5 = T4 * T
    return np.array(
        [
            [1.0, 0.0, 0.0, 0.0, 0.0, 0.0],
            [0.0, 1.0, 0.0, 0.0, 0.0, 0.0],
            [0.0, 0.0, 2.0, 0.0, 0.0, 0.0],
            [1.0, T, T2, T3, T4, T5],
            [0.0, 1.0, 2.0 * T, 3.0 * T2, 4.0 * T3, 5.0 * T4],
            [0.0, 0.0, 2.0, 6.0 * T, 12.0 * T2, 20.0 * T3],
        ],
        dtype=float,
    )


def quintic_coefficients(start: BoundaryCondition, end: BoundaryCondition, T: float) -> np.ndarray:
    """
    Solve for the coefficients [a0..a5] matching both boundary conditions.

    Args:
        start: boundary values at t=0
        end: boundary values at t=T
        T: duration in seconds

    Returns:
        numpy array of 6 coefficients, lowest order first

    Raises:
        DurationTooSmallError: T <= MIN_DURATION_S
    """
    if not T > MIN_DURATION_S:
        raise DurationTooSmallError(f"duration T={T} must be greater than {MIN_DURATION_S}")

    rhs = np.array(
        [
            start.position,
            start.velocity,
            start.acceleration,
            end.position,
            end.velocity,
            end.acceleration,
        ],
        dtype=float,
    )
    coeffs = solve6(quintic_constraint_matrix(T), rhs)
    coeffs.flags.writeable = False
    return coeffs


def _horner(coeffs: np.ndarray, t: np.ndarray) -> np.ndarray:
    result = np.full_like(t, coeffs[-1], dtype=float)
    for c in coeffs[-2::-1]:
        result = result * t + c
    return result


class QuinticPolynomial:
    """
    Single-joint quintic trajectory between two boundary conditions.

    Provides C² continuous trajectories (continuous position, velocity,
    acceleration). Derivatives up to the fifth order are available since the
    jerk and its time derivatives feed the minimum-jerk costates.

    Outside [0, T] the polynomial holds its boundary values and all higher
    derivatives read zero.
    """

    def __init__(self, start: BoundaryCondition, end: BoundaryCondition, T: float):
        self.start = start
        self.end = end
        self.T = float(T)
        self.coeffs = quintic_coefficients(start, end, self.T)
        self._prepare_derivative_coeffs()

    def _prepare_derivative_coeffs(self):
        """Pre-compute coefficients for velocity, acceleration, jerk and its derivatives."""
        a = self.coeffs
        self.vel_coeffs = np.array([a[1], 2 * a[2], 3 * a[3], 4 * a[4], 5 * a[5]])
        self.acc_coeffs = np.array([2 * a[2], 6 * a[3], 12 * a[4], 20 * a[5]])
        self.jerk_coeffs = np.array([6 * a[3], 24 * a[4], 60 * a[5]])
        self.jerk_rate_coeffs = np.array([24 * a[4], 120 * a[5]])
        self.jerk_accel_coeffs = np.array([120 * a[5]])

    def _evaluate(self, coeffs: np.ndarray, t: TimeArg, before: float, after: float) -> TimeArg:
        t_arr = np.asarray(t, dtype=float)
        value = _horner(coeffs, np.clip(t_arr, 0.0, self.T))
        value = np.where(t_arr < 0.0, before, np.where(t_arr > self.T, after, value))
        if value.ndim == 0:
            return float(value)
        return value

    def position(self, t: TimeArg) -> TimeArg:
        return self._evaluate(self.coeffs, t, self.start.position, self.end.position)

    def velocity(self, t: TimeArg) -> TimeArg:
        return self._evaluate(self.vel_coeffs, t, self.start.velocity, self.end.velocity)

    def acceleration(self, t: TimeArg) -> TimeArg:
        return self._evaluate(self.acc_coeffs, t, self.start.acceleration, self.end.acceleration)

    def jerk(self, t: TimeArg) -> TimeArg:
        return self._evaluate(self.jerk_coeffs, t, 0.0, 0.0)

    def jerk_rate(self, t: TimeArg) -> TimeArg:
        """du/dt, the fourth derivative of position."""
        return self._evaluate(self.jerk_rate_coeffs, t, 0.0, 0.0)

    def jerk_accel(self, t: TimeArg) -> TimeArg:
        """d²u/dt², constant across the segment for a quintic."""
        return self._evaluate(self.jerk_accel_coeffs, t, 0.0, 0.0)

    def evaluate(self, t: TimeArg, derivative: int = 0) -> TimeArg:
        """
        Unified evaluation function for any derivative order.

        Args:
            t: Time point(s) to evaluate
            derivative: 0=position, 1=velocity, 2=acceleration, 3=jerk, 4=jerk rate, 5=jerk accel
        """
        evaluators = (
            self.position,
            self.velocity,
            self.acceleration,
            self.jerk,
            self.jerk_rate,
            self.jerk_accel,
        )
        if 0 <= derivative < len(evaluators):
            return evaluators[derivative](t)
        raise ValueError(f"Derivative order {derivative} not supported (max is {len(evaluators) - 1})")

    def validate_continuity(self, tolerance: float = 1e-9) -> Dict[str, bool]:
        """
        Validate that boundary conditions are satisfied.
        """
        checks = {
            "q0": (self.position(0.0), self.start.position),
            "qf": (self.position(self.T), self.end.position),
            "v0": (self.velocity(0.0), self.start.velocity),
            "vf": (self.velocity(self.T), self.end.velocity),
            "a0": (self.acceleration(0.0), self.start.acceleration),
            "af": (self.acceleration(self.T), self.end.acceleration),
        }
        return {name: abs(actual - expected) < tolerance for name, (actual, expected) in checks.items()}
