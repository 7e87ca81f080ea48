from .min_jerk import TrajectorySample, plan_min_jerk, plan_min_jerk_positions, trajectory_arrays
from .motion_constraints import MotionConstraints
from .quintic import BoundaryCondition, QuinticPolynomial, quintic_coefficients

__all__ = [
    "BoundaryCondition",
    "QuinticPolynomial",
    "quintic_coefficients",
    "TrajectorySample",
    "plan_min_jerk",
    "plan_min_jerk_positions",
    "trajectory_arrays",
    "MotionConstraints",
]
