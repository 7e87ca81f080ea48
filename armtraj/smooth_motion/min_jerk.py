"""
Minimum-jerk joint trajectories with optimal-control diagnostics.

Each joint is modelled as a triple integrator with state (q, dq, ddq) and
control u = dddq (jerk). Minimising J = ∫ ½‖u‖² dt with position fixed and
velocity/acceleration pinned to zero at both ends yields a quintic per joint.

Costates follow from the Hamiltonian H = ½u² + λ1·dq + λ2·ddq + λ3·u:
    ∂H/∂u = 0      ⇒  u* = -λ3, so λ3 = -u
    dλ3/dt = -λ2   ⇒  λ2 = du/dt
    dλ2/dt = -λ1   ⇒  λ1 = -d²u/dt²
"""

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Dict, List, Optional

import numpy as np

from armtraj.config import MIN_DT_S
from armtraj.smooth_motion.quintic import BoundaryCondition, QuinticPolynomial
from armtraj.utils.errors import DimensionMismatchError

logger = logging.getLogger(__name__)


_VECTOR_FIELDS = ("position", "velocity", "acceleration", "jerk", "lambda1", "lambda2", "lambda3")


@dataclass(frozen=True, eq=False)
class TrajectorySample:
    """
    One instant of a planned trajectory.

    All vector fields have one entry per joint and are read-only.
    `cost` is the running rectangle-rule sum of ½‖u‖²·dt up to `t`.

    Samples compare by value; they are not hashable.
    """

    t: float
    position: np.ndarray
    velocity: np.ndarray
    acceleration: np.ndarray
    jerk: np.ndarray
    lambda1: np.ndarray
    lambda2: np.ndarray
    lambda3: np.ndarray
    cost: float

    __hash__ = None

    def __eq__(self, other):
        if not isinstance(other, TrajectorySample):
            return NotImplemented
        if self.t != other.t or self.cost != other.cost:
            return False
        return all(np.array_equal(getattr(self, name), getattr(other, name)) for name in _VECTOR_FIELDS)


def as_joint_vector(values: Sequence[float], name: str, dof: Optional[int] = None) -> np.ndarray:
    """Convert to a float vector, checking its length against dof when given."""
    arr = np.asarray(values, dtype=float)
    if arr.ndim != 1 or arr.size == 0:
        raise DimensionMismatchError(
            f"{name} must be a non-empty 1-D joint vector, got shape {arr.shape}",
            expected=dof,
            actual=int(arr.size),
        )
    if dof is not None and arr.size != dof:
        raise DimensionMismatchError(
            f"{name} has {arr.size} values, expected {dof}", expected=dof, actual=int(arr.size)
        )
    return arr


def sample_count(T: float, dt: float) -> int:
    """Number of intervals N on [0, T]; the trajectory holds N + 1 samples."""
    ratio = T / max(dt, MIN_DT_S)
    # Half away from zero, T and dt are positive here
    return max(2, int(math.floor(ratio + 0.5)))


def sample_times(T: float, dt: float) -> np.ndarray:
    """Sample grid t_k = min(k*dt, T) for k = 0..N with the last sample pinned to T."""
    n = sample_count(T, dt)
    times = np.minimum(np.arange(n + 1, dtype=float) * dt, T)
    times[-1] = T
    return times


def _check_timing(T: float, dt: float) -> None:
    if not math.isfinite(T):
        raise ValueError(f"duration T must be finite, got {T}")
    if not (math.isfinite(dt) and dt > 0):
        raise ValueError(f"sample interval dt must be a positive finite number, got {dt}")


def fit_joint_polynomials(q_start: np.ndarray, q_target: np.ndarray, T: float) -> List[QuinticPolynomial]:
    """Fit one rest-to-rest quintic per joint; joints are independent."""
    return [
        QuinticPolynomial(BoundaryCondition(float(q0)), BoundaryCondition(float(q1)), T)
        for q0, q1 in zip(q_start, q_target)
    ]


def _readonly(arr: np.ndarray) -> np.ndarray:
    arr.flags.writeable = False
    return arr


def plan_min_jerk(
    q_start: Sequence[float],
    q_target: Sequence[float],
    T: float,
    dt: float,
    dof: Optional[int] = None,
) -> List[TrajectorySample]:
    """
    Plan a rest-to-rest minimum-jerk trajectory from q_start to q_target.

    Args:
        q_start: start joint configuration (rad)
        q_target: target joint configuration (rad)
        T: duration in seconds (> 0)
        dt: sample interval in seconds (> 0)
        dof: expected number of joints; defaults to len(q_start)

    Returns:
        N + 1 samples with N = max(2, round(T / dt)); sample 0 is at t=0 and
        the last sample is at t=T exactly. The cost increment always uses the
        nominal dt, not the actual gap to the previous sample, so J differs
        from the exact integral when the final step is pinned to T.

    Raises:
        DimensionMismatchError: vector lengths disagree with each other or with dof
        DurationTooSmallError: T at or below the stability threshold
        ValueError: non-finite T or non-positive dt
    """
    q0 = as_joint_vector(q_start, "q_start", dof)
    q1 = as_joint_vector(q_target, "q_target", q0.size)
    _check_timing(T, dt)

    polys = fit_joint_polynomials(q0, q1, T)
    times = sample_times(T, dt)

    position = np.column_stack([p.position(times) for p in polys])
    velocity = np.column_stack([p.velocity(times) for p in polys])
    acceleration = np.column_stack([p.acceleration(times) for p in polys])
    jerk = np.column_stack([p.jerk(times) for p in polys])

    lambda3 = -jerk
    lambda2 = np.column_stack([p.jerk_rate(times) for p in polys])
    lambda1 = -np.column_stack([p.jerk_accel(times) for p in polys])

    # Rectangle rule, J(t_0) = 0
    increments = 0.5 * np.sum(jerk * jerk, axis=1) * dt
    increments[0] = 0.0
    cost = np.cumsum(increments)

    for arr in (position, velocity, acceleration, jerk, lambda1, lambda2, lambda3):
        _readonly(arr)

    samples = [
        TrajectorySample(
            t=float(times[k]),
            position=position[k],
            velocity=velocity[k],
            acceleration=acceleration[k],
            jerk=jerk[k],
            lambda1=lambda1[k],
            lambda2=lambda2[k],
            lambda3=lambda3[k],
            cost=float(cost[k]),
        )
        for k in range(times.size)
    ]
    logger.debug(
        f"Planned min-jerk trajectory: dof={q0.size} T={T} dt={dt} samples={len(samples)} cost={cost[-1]:.6g}"
    )
    return samples


def plan_min_jerk_positions(
    q_start: Sequence[float],
    q_target: Sequence[float],
    T: float,
    dt: float,
) -> np.ndarray:
    """
    Position-only min-jerk plan.

    Returns: array of shape (N + 1, 1 + DOF), rows are [t, q1, ..., qDOF]
    """
    q0 = as_joint_vector(q_start, "q_start")
    q1 = as_joint_vector(q_target, "q_target", q0.size)
    _check_timing(T, dt)

    polys = fit_joint_polynomials(q0, q1, T)
    times = sample_times(T, dt)
    return np.column_stack([times] + [p.position(times) for p in polys])


def trajectory_arrays(samples: Sequence[TrajectorySample]) -> Dict[str, np.ndarray]:
    """Stack samples into per-field arrays: (N+1,) for time/cost, (N+1, DOF) otherwise."""
    if not samples:
        raise ValueError("cannot stack an empty trajectory")
    return {
        "time": np.array([s.t for s in samples]),
        "position": np.vstack([s.position for s in samples]),
        "velocity": np.vstack([s.velocity for s in samples]),
        "acceleration": np.vstack([s.acceleration for s in samples]),
        "jerk": np.vstack([s.jerk for s in samples]),
        "lambda1": np.vstack([s.lambda1 for s in samples]),
        "lambda2": np.vstack([s.lambda2 for s in samples]),
        "lambda3": np.vstack([s.lambda3 for s in samples]),
        "cost": np.array([s.cost for s in samples]),
    }


def total_cost(samples: Sequence[TrajectorySample]) -> float:
    """Accumulated cost at the end of the trajectory (0.0 when empty)."""
    return samples[-1].cost if samples else 0.0
