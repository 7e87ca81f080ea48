"""
Central configuration for armtraj tunables and shared constants.
"""

import logging
import os

TRACE: int = 5
logging.addLevelName(TRACE, "TRACE")
# Add Logger.trace if missing
if not hasattr(logging.Logger, "trace"):

    def _trace(self, msg, *args, **kwargs):
        if self.isEnabledFor(TRACE):
            self._log(TRACE, msg, args, **kwargs)

    logging.Logger.trace = _trace  # type: ignore[attr-defined]
    logging.TRACE = TRACE  # type: ignore[attr-defined]

TRACE_ENABLED = str(os.getenv("ARMTRAJ_TRACE", "0")).lower() in ("1", "true", "yes", "on")

logger = logging.getLogger(__name__)


def _env_int(name: str, default: int, minimum: int = 1) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning(f"Ignoring {name}={raw!r}: not an integer, using {default}")
        return default
    if value < minimum:
        logger.warning(f"Ignoring {name}={value}: must be >= {minimum}, using {default}")
        return default
    return value


def _env_float(name: str, default: float, positive: bool = True) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning(f"Ignoring {name}={raw!r}: not a number, using {default}")
        return default
    if positive and not value > 0:
        logger.warning(f"Ignoring {name}={value}: must be > 0, using {default}")
        return default
    return value


# Degrees of freedom of the planned arm (UR5e-style 6 axis by default)
DOF: int = _env_int("ARMTRAJ_DOF", 6)

# Plan responses always carry this many joint values (padded with zeros)
RESPONSE_DOF: int = 6

# Planning defaults when a request omits them (seconds)
DEFAULT_DURATION_S: float = _env_float("ARMTRAJ_DEFAULT_DURATION_S", 1.0)
DEFAULT_DT_S: float = _env_float("ARMTRAJ_DEFAULT_DT_S", 0.02)

# Numerical guards
MIN_DURATION_S: float = 1e-9  # quintic fit refuses T at or below this
MIN_DT_S: float = 1e-9  # floor on dt when computing the sample count
PIVOT_EPS: float = 1e-12  # smallest usable pivot in the 6x6 solve

# CLI default; stdout carries the JSON document so routine chatter stays off
LOG_LEVEL_DEFAULT: str = "WARNING"


# Joint limits (rad, rad/s); each env var accepts a single value or a CSV of DOF values
def _parse_joint_vector(name: str, default: float) -> list[float]:
    fallback = [default] * DOF
    raw = os.getenv(name)
    if not raw:
        return fallback
    try:
        vals = [float(p.strip()) for p in raw.split(",")]
    except ValueError:
        logger.warning(f"Ignoring {name}={raw!r}: expected comma separated floats")
        return fallback
    if len(vals) == 1:
        return vals * DOF
    if len(vals) != DOF:
        logger.warning(f"Ignoring {name}: expected 1 or {DOF} values, got {len(vals)}")
        return fallback
    return vals


JOINT_MIN_RAD: list[float] = _parse_joint_vector("ARMTRAJ_JOINT_MIN_RAD", -3.14159)
JOINT_MAX_RAD: list[float] = _parse_joint_vector("ARMTRAJ_JOINT_MAX_RAD", 3.14159)
JOINT_MAX_SPEED_RAD_S: list[float] = _parse_joint_vector("ARMTRAJ_JOINT_MAX_SPEED", 4.0)


def _env_bool_optional(name: str) -> bool | None:
    raw = os.getenv(name)
    if raw is None:
        return None
    s = raw.strip().lower()
    if s in ("1", "true", "yes", "on"):
        return True
    if s in ("0", "false", "no", "off"):
        return False
    return None


# Force the CLI to emit full per-sample diagnostics (costates, cost) when set
FULL_OUTPUT: bool | None = _env_bool_optional("ARMTRAJ_FULL_OUTPUT")
