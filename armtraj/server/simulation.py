"""
Simulation module for live-simulation mode.

Steps an ArmStateModel's double-integrator dynamics (ddq = tau) either at
wall-clock rate or through a precomputed torque profile. Independent of the
closed-form planner, which never touches the dynamics.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import List, Optional, Sequence
import logging

import numpy as np

from armtraj.server.state import ArmState, ArmStateModel
from armtraj.smooth_motion.min_jerk import TrajectorySample

logger = logging.getLogger(__name__)


@dataclass
class SimulationState:
    """Timing bookkeeping for live simulation."""
    enabled: bool = False
    update_rate: float = 0.01
    last_update: float = 0.0
    step_count: int = 0

    def __post_init__(self):
        """Initialize with current time."""
        self.last_update = time.time()


def simulate_step(model: ArmStateModel, tau: Optional[Sequence[float]], dt: float) -> ArmState:
    """
    Apply tau (when given) and advance the model by dt.

    Returns:
        State snapshot after the step
    """
    if tau is not None:
        model.set_torque(tau)
    if dt > 0:
        model.integrate_step(dt)
    return model.state


def simulate_motion(sim: SimulationState, model: ArmStateModel) -> ArmState:
    """
    Advance the model by the wall-clock time elapsed since the last update,
    holding the currently applied torque.

    Calls arriving sooner than update_rate after the last step leave the
    model untouched; the elapsed time carries over to the next step.
    """
    now = time.time()
    if not sim.enabled:
        sim.last_update = now
        return model.state
    dt = now - sim.last_update
    if dt < sim.update_rate:
        return model.state
    sim.last_update = now
    sim.step_count += 1
    return simulate_step(model, None, dt)


def feedforward_torques(samples: Sequence[TrajectorySample]) -> np.ndarray:
    """
    Open-loop torque profile reproducing a planned trajectory on ddq = tau.

    Returns: array of shape (len(samples), DOF), the planned accelerations.
    """
    return np.vstack([s.acceleration for s in samples])


def replay_trajectory(model: ArmStateModel, samples: Sequence[TrajectorySample]) -> List[ArmState]:
    """
    Drive the model open-loop through a planned trajectory.

    The torque at sample k is held over [t_k, t_{k+1}]. The model is first
    placed at the trajectory's start pose, at rest.

    Returns:
        State snapshots after each step, starting with the initial state
    """
    if not samples:
        return []
    torques = feedforward_torques(samples)
    model.set_state(samples[0].position, samples[0].velocity)
    states = [model.state]
    for k in range(len(samples) - 1):
        dt = samples[k + 1].t - samples[k].t
        states.append(simulate_step(model, torques[k], dt))
    model.set_torque(np.zeros(model.dof))
    logger.debug(f"Replayed {len(samples)} samples, final q={states[-1].q.tolist()}")
    return states


def create_simulation_state(update_rate: float = 0.01) -> SimulationState:
    """
    Create and initialize an enabled simulation state.
    """
    return SimulationState(enabled=True, update_rate=update_rate)
