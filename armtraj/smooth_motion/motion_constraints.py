"""
Motion constraints for planned joint trajectories.

Checks a sampled minimum-jerk trajectory against per-joint position and
speed limits, and estimates the shortest duration that keeps a rest-to-rest
move under the speed limits.
"""

from collections.abc import Sequence
from typing import Optional

import numpy as np

from armtraj.server.state import JointLimits
from armtraj.smooth_motion.min_jerk import TrajectorySample, trajectory_arrays

# Peak speed of a rest-to-rest quintic is 15/8 * |dq| / T, reached at T/2
MIN_JERK_PEAK_VELOCITY_FACTOR: float = 1.875


class MotionConstraints:
    """
    Per-joint limits applied to planned trajectories.
    """

    def __init__(self, limits: Optional[JointLimits] = None, dof: Optional[int] = None):
        """
        Args:
            limits: joint limits; defaults to armtraj.config values
            dof: number of joints when limits are taken from config
        """
        if limits is None:
            limits = JointLimits.from_config() if dof is None else JointLimits.from_config(dof)
        self.limits = limits

    def get_joint_constraints(self, joint_idx: int) -> dict[str, float] | None:
        """Get constraints for specific joint."""
        if not 0 <= joint_idx < self.limits.dof:
            return None

        return {
            "q_min": float(self.limits.q_min[joint_idx]),
            "q_max": float(self.limits.q_max[joint_idx]),
            "v_max": float(self.limits.dq_max[joint_idx]),
        }

    def minimum_duration(self, q_start: Sequence[float], q_target: Sequence[float]) -> float:
        """
        Shortest rest-to-rest min-jerk duration that keeps every joint within dq_max.

        Joints with zero speed budget and non-zero travel yield inf.
        """
        delta = np.abs(np.asarray(q_target, dtype=float) - np.asarray(q_start, dtype=float))
        with np.errstate(divide="ignore", invalid="ignore"):
            per_joint = np.where(
                delta > 0.0,
                MIN_JERK_PEAK_VELOCITY_FACTOR * delta / self.limits.dq_max,
                0.0,
            )
        return float(np.max(per_joint)) if per_joint.size else 0.0

    def validate_trajectory(self, samples: Sequence[TrajectorySample], tolerance: float = 1e-9) -> dict[str, float | bool]:
        """
        Validate that a planned trajectory respects the joint limits.

        Returns:
            Dictionary with validation results
        """
        if not samples:
            return {
                "position_ok": True,
                "velocity_ok": True,
                "max_velocity": 0.0,
                "max_acceleration": 0.0,
                "max_jerk": 0.0,
            }

        arrays = trajectory_arrays(samples)
        position = arrays["position"]
        speed = np.abs(arrays["velocity"])

        validation: dict[str, float | bool] = {
            "position_ok": bool(
                np.all(position >= self.limits.q_min - tolerance) and np.all(position <= self.limits.q_max + tolerance)
            ),
            "velocity_ok": bool(np.all(speed <= self.limits.dq_max + tolerance)),
            "max_velocity": float(np.max(speed)),
            "max_acceleration": float(np.max(np.abs(arrays["acceleration"]))),
            "max_jerk": float(np.max(np.abs(arrays["jerk"]))),
        }

        return validation
