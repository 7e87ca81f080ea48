"""
Pytest configuration and shared fixtures for armtraj tests.

Provides fixtures for arm state models and planning sessions, environment
configuration helpers, and the custom markers used across the test suite.
"""

import os
import sys
import logging

import pytest

# Add the parent directory to Python path so we can import the package without installing it
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from armtraj.server.session import PlanningSession
from armtraj.server.state import ArmStateModel, JointLimits

logger = logging.getLogger(__name__)


# ============================================================================
# MODEL / SESSION FIXTURES
# ============================================================================

@pytest.fixture
def limits() -> JointLimits:
    """UR5e-style limits: +-pi rad, 4 rad/s on all six joints."""
    return JointLimits.uniform(6, -3.14159, 3.14159, 4.0)


@pytest.fixture
def model(limits: JointLimits) -> ArmStateModel:
    """Fresh 6-DOF arm state at the zero pose."""
    return ArmStateModel(dof=6, limits=limits)


@pytest.fixture
def session(model: ArmStateModel) -> PlanningSession:
    """Planning session bound to the `model` fixture."""
    return PlanningSession(model=model)


# ============================================================================
# COMMON TEST UTILITIES
# ============================================================================

@pytest.fixture
def temp_env():
    """
    Provide temporary environment variable context manager.

    Useful for tests that need to modify environment variables temporarily.
    """
    class TempEnv:
        def __init__(self):
            self.original = {}

        def set(self, key: str, value: str):
            """Set an environment variable temporarily."""
            if key not in self.original:
                self.original[key] = os.environ.get(key)
            os.environ[key] = value

        def restore(self):
            """Restore all modified environment variables."""
            for key, original_value in self.original.items():
                if original_value is None:
                    os.environ.pop(key, None)
                else:
                    os.environ[key] = original_value
            self.original.clear()

    temp = TempEnv()
    try:
        yield temp
    finally:
        temp.restore()


# ============================================================================
# PYTEST CONFIGURATION HOOKS
# ============================================================================

def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests that test individual components in isolation"
    )
    config.addinivalue_line(
        "markers", "slow: Slow-running tests (large sample grids or threaded stress tests)"
    )


def pytest_sessionstart(session):
    """Called after the Session object has been created."""
    logger.info("Starting armtraj test session")


def pytest_sessionfinish(session, exitstatus):
    """Called after whole test run finished."""
    logger.info(f"armtraj test session finished with exit status: {exitstatus}")
