"""
Custom exception types for the armtraj planning pipeline.
Keep this focused and non-redundant; prefer built-ins where appropriate.
"""


class TrajectoryPlanningError(RuntimeError):
    """Trajectory generation/planning failure."""

    def __init__(self, message: str):
        self.original_message = message
        super().__init__(f"Trajectory Planning Error: {message}")

    def __str__(self):
        return f"Trajectory Planning Error: {self.original_message}"


class DimensionError(TrajectoryPlanningError, ValueError):
    """Matrix or vector has the wrong shape for the linear solve."""

    def __str__(self):
        return f"Dimension Error: {self.original_message}"


class DimensionMismatchError(DimensionError):
    """A joint vector's length disagrees with the configured DOF."""

    def __init__(self, message: str, expected: int | None = None, actual: int | None = None):
        self.expected = expected
        self.actual = actual
        super().__init__(message)

    def __str__(self):
        return f"Dimension Mismatch: {self.original_message}"


class DurationTooSmallError(TrajectoryPlanningError, ValueError):
    """Duration at or below the numeric stability threshold."""

    def __str__(self):
        return f"Duration Too Small: {self.original_message}"


class SingularSystemError(TrajectoryPlanningError, ArithmeticError):
    """Linear system has no usable pivot."""

    def __str__(self):
        return f"Singular System: {self.original_message}"
