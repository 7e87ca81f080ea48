"""
Planning session: chains minimum-jerk plans through one arm state.

Each plan starts from the pose the previous plan commanded. The
read-state / plan / commit-target sequence runs under the state model's
lock so concurrent requests against one session never start from a stale
or half-written pose.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence
import logging

import numpy as np

from armtraj.config import DEFAULT_DT_S, DEFAULT_DURATION_S, DOF, RESPONSE_DOF
from armtraj.server.state import ArmState, ArmStateModel, JointLimits
from armtraj.smooth_motion.min_jerk import TrajectorySample, plan_min_jerk, total_cost
from armtraj.smooth_motion.motion_constraints import MotionConstraints
from armtraj.utils.errors import DimensionMismatchError, TrajectoryPlanningError

logger = logging.getLogger(__name__)


def pad_joint_values(values: Sequence[float], size: int = RESPONSE_DOF) -> List[float]:
    """Pad with zeros (or truncate) to exactly `size` joint values."""
    out = [float(v) for v in list(values)[:size]]
    out.extend([0.0] * (size - len(out)))
    return out


@dataclass(frozen=True, eq=False)
class PlanResult:
    """Outcome of one session plan."""
    dt: float
    duration: float
    q_start: np.ndarray
    q_target: np.ndarray
    samples: List[TrajectorySample] = field(repr=False)
    within_limits: bool = True
    unit: str = "rad"

    @property
    def cost(self) -> float:
        return total_cost(self.samples)

    def to_dict(self, full: bool = False) -> Dict[str, Any]:
        """
        Plain-dict rendering: {dt, unit, trajectory: [{t, q}, ...]}.

        Each q is padded to RESPONSE_DOF values. With full=True every point
        also carries dq, ddq, u, the three costates and the running cost.
        """
        trajectory = []
        for s in self.samples:
            item: Dict[str, Any] = {"t": s.t, "q": pad_joint_values(s.position)}
            if full:
                item.update(
                    dq=s.velocity.tolist(),
                    ddq=s.acceleration.tolist(),
                    u=s.jerk.tolist(),
                    lambda1=s.lambda1.tolist(),
                    lambda2=s.lambda2.tolist(),
                    lambda3=s.lambda3.tolist(),
                    J=s.cost,
                )
            trajectory.append(item)
        out: Dict[str, Any] = {"dt": self.dt, "unit": self.unit, "trajectory": trajectory}
        if full:
            out["T"] = self.duration
            out["J"] = self.cost
            out["within_limits"] = self.within_limits
        return out


class PlanningSession:
    """
    One arm's planning context.

    The state model is injected so callers can share, inspect or reset it;
    when omitted a fresh model at the configured DOF is created.
    """

    def __init__(self, model: Optional[ArmStateModel] = None, dof: int = DOF, limits: Optional[JointLimits] = None):
        self.model = model if model is not None else ArmStateModel(dof=dof, limits=limits)
        self.constraints = MotionConstraints(self.model.limits)
        self.plan_count = 0

    @property
    def dof(self) -> int:
        return self.model.dof

    @property
    def state(self) -> ArmState:
        return self.model.state

    def reset(self) -> None:
        self.model.reset()

    def _target_vector(self, q_target: Sequence[float]) -> np.ndarray:
        values = np.asarray(q_target, dtype=float).ravel()
        if values.size < self.dof:
            raise DimensionMismatchError(
                f"q_target must have {self.dof} values, got {values.size}",
                expected=self.dof,
                actual=int(values.size),
            )
        if values.size > self.dof:
            logger.debug(f"q_target has {values.size} values, using the first {self.dof}")
            values = values[: self.dof]
        if not np.all(np.isfinite(values)):
            raise ValueError(f"q_target must contain finite values, got {values.tolist()}")
        return values

    def plan_to(
        self,
        q_target: Sequence[float],
        T: Optional[float] = None,
        dt: Optional[float] = None,
    ) -> PlanResult:
        """
        Plan from the current pose to q_target and commit q_target as the new pose.

        Args:
            q_target: target joint configuration (rad); extra values are ignored
            T: duration in seconds (default DEFAULT_DURATION_S)
            dt: sample interval in seconds (default DEFAULT_DT_S)

        Returns:
            PlanResult holding the full trajectory

        Raises:
            DimensionMismatchError: fewer target values than DOF
            DurationTooSmallError: T too small
            ValueError: non-finite target or bad timing
        """
        T = DEFAULT_DURATION_S if T is None else float(T)
        dt = DEFAULT_DT_S if dt is None else float(dt)
        target = self._target_vector(q_target)

        with self.model.lock:
            q_start = self.model.state.q
            try:
                samples = plan_min_jerk(q_start, target, T, dt, dof=self.dof)
            except (TrajectoryPlanningError, ValueError) as e:
                logger.error(f"Planning failed: {e}")
                raise
            # Next plan starts from this target, at rest
            self.model.commit_target(target)
            self.plan_count += 1

        validation = self.constraints.validate_trajectory(samples)
        within_limits = bool(validation["position_ok"] and validation["velocity_ok"])
        if not within_limits:
            T_min = self.constraints.minimum_duration(q_start, target)
            logger.warning(
                f"Plan exceeds joint limits (max |dq|={validation['max_velocity']:.3f} rad/s); "
                f"T >= {T_min:.3f}s keeps speeds within limits"
            )

        logger.info(
            f"Plan #{self.plan_count}: T={T} dt={dt} samples={len(samples)} J={total_cost(samples):.6g}"
        )
        return PlanResult(
            dt=dt,
            duration=T,
            q_start=q_start,
            q_target=target,
            samples=samples,
            within_limits=within_limits,
        )
