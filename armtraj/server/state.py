from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence
import threading
import logging

import numpy as np

from armtraj.config import DOF, JOINT_MAX_RAD, JOINT_MAX_SPEED_RAD_S, JOINT_MIN_RAD
from armtraj.utils.errors import DimensionMismatchError

logger = logging.getLogger(__name__)


def _frozen_vector(values: Sequence[float] | np.ndarray) -> np.ndarray:
    arr = np.array(values, dtype=float)
    arr.flags.writeable = False
    return arr


@dataclass(frozen=True, eq=False)
class JointLimits:
    """
    Per-joint position and speed limits.

    q_min/q_max bound the joint position (rad); dq_max bounds |velocity| (rad/s).
    """
    q_min: np.ndarray
    q_max: np.ndarray
    dq_max: np.ndarray

    def __post_init__(self):
        q_min = _frozen_vector(self.q_min)
        q_max = _frozen_vector(self.q_max)
        dq_max = _frozen_vector(self.dq_max)
        if not (q_min.shape == q_max.shape == dq_max.shape) or q_min.ndim != 1:
            raise DimensionMismatchError(
                f"limit vectors must share one 1-D shape, got {q_min.shape}, {q_max.shape}, {dq_max.shape}"
            )
        if np.any(q_min > q_max):
            raise ValueError("q_min must not exceed q_max")
        if np.any(dq_max < 0):
            raise ValueError("dq_max must be non-negative")
        object.__setattr__(self, "q_min", q_min)
        object.__setattr__(self, "q_max", q_max)
        object.__setattr__(self, "dq_max", dq_max)

    @property
    def dof(self) -> int:
        return int(self.q_min.size)

    @classmethod
    def uniform(cls, dof: int, q_min: float, q_max: float, dq_max: float) -> JointLimits:
        """Same limits on every joint."""
        return cls(np.full(dof, q_min), np.full(dof, q_max), np.full(dof, dq_max))

    @classmethod
    def from_config(cls, dof: int = DOF) -> JointLimits:
        """Limits from armtraj.config; a DOF that differs from the configured one gets the first joint's values."""
        if dof == len(JOINT_MIN_RAD):
            return cls(JOINT_MIN_RAD, JOINT_MAX_RAD, JOINT_MAX_SPEED_RAD_S)
        return cls.uniform(dof, JOINT_MIN_RAD[0], JOINT_MAX_RAD[0], JOINT_MAX_SPEED_RAD_S[0])

    def clamp_position(self, q: np.ndarray) -> np.ndarray:
        return np.clip(q, self.q_min, self.q_max)

    def clamp_velocity(self, dq: np.ndarray) -> np.ndarray:
        return np.clip(dq, -self.dq_max, self.dq_max)


@dataclass(frozen=True, eq=False)
class ArmState:
    """Read-only snapshot of joint positions (rad) and velocities (rad/s)."""
    q: np.ndarray
    dq: np.ndarray


@dataclass(eq=False)
class ArmStateModel:
    """
    Last known kinematic state of one arm.

    Every mutation saturates position and velocity to the configured limits;
    only structural (length) mismatches raise. The `lock` is scoped to this
    instance and guards read-plan-write sequences in the planning session.

    A trivial double integrator (ddq = tau) is available for live simulation
    through set_torque() and integrate_step().
    """
    dof: int = DOF
    limits: Optional[JointLimits] = None
    lock: threading.RLock = field(default_factory=threading.RLock, init=False, repr=False, compare=False)
    _q: np.ndarray = field(init=False, repr=False)
    _dq: np.ndarray = field(init=False, repr=False)
    _tau: np.ndarray = field(init=False, repr=False)

    def __post_init__(self):
        if self.dof < 1:
            raise ValueError(f"dof must be >= 1, got {self.dof}")
        if self.limits is None:
            self.limits = JointLimits.from_config(self.dof)
        elif self.limits.dof != self.dof:
            raise DimensionMismatchError(
                f"limits cover {self.limits.dof} joints, expected {self.dof}",
                expected=self.dof,
                actual=self.limits.dof,
            )
        self._q = np.zeros(self.dof)
        self._dq = np.zeros(self.dof)
        self._tau = np.zeros(self.dof)
        # Zero may sit outside a custom limit window
        self._clamp_state()

    # -----------------------------
    # Accessors
    # -----------------------------
    @property
    def state(self) -> ArmState:
        """Snapshot copy; mutating it never affects the model."""
        with self.lock:
            return ArmState(q=_frozen_vector(self._q), dq=_frozen_vector(self._dq))

    @property
    def torque(self) -> np.ndarray:
        with self.lock:
            return _frozen_vector(self._tau)

    def _checked(self, values: Sequence[float] | np.ndarray, name: str) -> np.ndarray:
        arr = np.array(values, dtype=float)
        if arr.shape != (self.dof,):
            raise DimensionMismatchError(
                f"{name} has shape {arr.shape}, expected ({self.dof},)",
                expected=self.dof,
                actual=int(arr.size),
            )
        return arr

    def _clamp_state(self) -> None:
        q = self.limits.clamp_position(self._q)
        dq = self.limits.clamp_velocity(self._dq)
        if logger.isEnabledFor(logging.DEBUG) and (
            not np.array_equal(q, self._q) or not np.array_equal(dq, self._dq)
        ):
            logger.debug(f"State saturated to limits: q={q.tolist()} dq={dq.tolist()}")
        self._q = q
        self._dq = dq

    # -----------------------------
    # Mutators
    # -----------------------------
    def set_state(self, q: Sequence[float], dq: Sequence[float]) -> None:
        """Store q and dq after clamping them to the joint limits."""
        q_arr = self._checked(q, "q")
        dq_arr = self._checked(dq, "dq")
        with self.lock:
            self._q = q_arr
            self._dq = dq_arr
            self._clamp_state()

    def set_torque(self, tau: Sequence[float]) -> None:
        tau_arr = self._checked(tau, "tau")
        with self.lock:
            self._tau = tau_arr

    def commit_target(self, q_target: Sequence[float]) -> None:
        """Record a commanded target as the new pose, at rest."""
        self.set_state(q_target, np.zeros(self.dof))

    def integrate_step(self, dt: float) -> None:
        """
        Semi-implicit Euler step of ddq = tau.

        Velocity is updated and clamped first, then position is advanced
        with the new velocity and clamped.
        """
        with self.lock:
            dq = self.limits.clamp_velocity(self._dq + dt * self._tau)
            q = self.limits.clamp_position(self._q + dt * dq)
            self._dq = dq
            self._q = q

    def reset(self) -> None:
        """Zero position, velocity and torque (then clamp to limits)."""
        with self.lock:
            self._q = np.zeros(self.dof)
            self._dq = np.zeros(self.dof)
            self._tau = np.zeros(self.dof)
            self._clamp_state()
            logger.info("Arm state reset")
