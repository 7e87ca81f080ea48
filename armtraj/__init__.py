"""
armtraj Python Package

Closed-form minimum-jerk joint trajectory planning for fixed-DOF arms,
with optimal-control diagnostics and a per-session arm state.

Key components:
- plan_min_jerk: Rest-to-rest quintic plan sampled on a time grid
- TrajectorySample: One sampled instant with costates and running cost
- ArmStateModel: Last commanded pose, joint limits, trivial dynamics
- PlanningSession: Chains plans through one ArmStateModel under its lock
"""

from ._version import __version__
from .server.session import PlanResult, PlanningSession
from .server.state import ArmState, ArmStateModel, JointLimits
from .smooth_motion.min_jerk import TrajectorySample, plan_min_jerk
from .utils.errors import (
    DimensionError,
    DimensionMismatchError,
    DurationTooSmallError,
    SingularSystemError,
    TrajectoryPlanningError,
)

__all__ = [
    "__version__",
    "plan_min_jerk",
    "TrajectorySample",
    "ArmState",
    "ArmStateModel",
    "JointLimits",
    "PlanningSession",
    "PlanResult",
    "TrajectoryPlanningError",
    "DimensionError",
    "DimensionMismatchError",
    "DurationTooSmallError",
    "SingularSystemError",
]
