import numpy as np
import pytest

from armtraj.server.state import ArmStateModel, JointLimits
from armtraj.utils.errors import DimensionMismatchError


def test_initial_state_is_zero(model):
    st = model.state
    assert np.array_equal(st.q, np.zeros(6))
    assert np.array_equal(st.dq, np.zeros(6))


def test_velocity_over_limit_is_clamped_to_exact_max(model):
    model.set_state([0.0] * 6, [10.0, -10.0, 1.0, 0.0, 4.0, -4.5])
    dq = model.state.dq
    assert dq[0] == 4.0
    assert dq[1] == -4.0
    assert dq[2] == 1.0
    assert dq[4] == 4.0
    assert dq[5] == -4.0


def test_position_over_limit_is_clamped(model):
    model.set_state([5.0, -5.0, 1.0, 0.0, 0.0, 3.14159], [0.0] * 6)
    q = model.state.q
    assert q[0] == 3.14159
    assert q[1] == -3.14159
    assert q[2] == 1.0
    assert q[5] == 3.14159


@pytest.mark.parametrize(
    "q,dq",
    [
        ([0.0] * 5, [0.0] * 6),
        ([0.0] * 6, [0.0] * 7),
        ([[0.0] * 6], [0.0] * 6),
    ],
)
def test_set_state_length_mismatch_raises(model, q, dq):
    with pytest.raises(DimensionMismatchError):
        model.set_state(q, dq)


def test_failed_set_state_leaves_state_untouched(model):
    model.set_state([0.1] * 6, [0.2] * 6)
    with pytest.raises(DimensionMismatchError):
        model.set_state([0.5] * 6, [0.0] * 3)
    assert np.allclose(model.state.q, 0.1)
    assert np.allclose(model.state.dq, 0.2)


def test_snapshot_is_independent_of_model(model):
    snap = model.state
    model.set_state([1.0] * 6, [0.0] * 6)
    assert np.array_equal(snap.q, np.zeros(6))
    with pytest.raises(ValueError):
        snap.q[0] = 3.0


def test_caller_array_is_copied(model):
    q = np.full(6, 0.5)
    model.set_state(q, np.zeros(6))
    q[0] = 2.0
    assert model.state.q[0] == 0.5


def test_set_torque_length_checked(model):
    model.set_torque([1.0] * 6)
    assert np.array_equal(model.torque, np.ones(6))
    with pytest.raises(DimensionMismatchError):
        model.set_torque([1.0] * 4)


def test_integrate_step_is_semi_implicit_euler(model):
    model.set_torque([1.0, -2.0, 0.0, 0.0, 0.0, 0.0])
    model.integrate_step(0.1)
    st = model.state
    # dq updated first, position uses the new velocity
    assert st.dq[0] == pytest.approx(0.1)
    assert st.dq[1] == pytest.approx(-0.2)
    assert st.q[0] == pytest.approx(0.01)
    assert st.q[1] == pytest.approx(-0.02)


def test_integrate_step_saturates_velocity_and_position(model):
    model.set_state([3.1] + [0.0] * 5, [0.0] * 6)
    model.set_torque([1000.0] + [0.0] * 5)
    model.integrate_step(0.1)
    st = model.state
    assert st.dq[0] == 4.0
    assert st.q[0] == 3.14159

    for _ in range(20):
        model.integrate_step(0.1)
    assert model.state.q[0] == 3.14159
    assert model.state.dq[0] == 4.0


def test_commit_target_sets_pose_at_rest(model):
    model.set_state([0.0] * 6, [1.0] * 6)
    model.commit_target([0.1, 0.2, 0.3, 0.4, 0.5, 0.6])
    st = model.state
    assert np.allclose(st.q, [0.1, 0.2, 0.3, 0.4, 0.5, 0.6])
    assert np.array_equal(st.dq, np.zeros(6))


def test_reset_zeros_everything(model):
    model.set_state([1.0] * 6, [1.0] * 6)
    model.set_torque([2.0] * 6)
    model.reset()
    assert np.array_equal(model.state.q, np.zeros(6))
    assert np.array_equal(model.state.dq, np.zeros(6))
    assert np.array_equal(model.torque, np.zeros(6))


def test_custom_limits_clamp_initial_pose():
    limits = JointLimits.uniform(3, 0.5, 1.0, 2.0)
    model = ArmStateModel(dof=3, limits=limits)
    assert np.array_equal(model.state.q, [0.5, 0.5, 0.5])


def test_limits_dof_must_match_model():
    with pytest.raises(DimensionMismatchError):
        ArmStateModel(dof=6, limits=JointLimits.uniform(3, -1.0, 1.0, 1.0))


def test_invalid_dof_raises():
    with pytest.raises(ValueError):
        ArmStateModel(dof=0)


def test_limits_are_immutable(limits):
    with pytest.raises(ValueError):
        limits.q_max[0] = 10.0
    with pytest.raises(AttributeError):
        limits.q_max = np.zeros(6)


def test_limit_validation():
    with pytest.raises(ValueError):
        JointLimits([1.0], [0.0], [1.0])
    with pytest.raises(ValueError):
        JointLimits([0.0], [1.0], [-1.0])
    with pytest.raises(DimensionMismatchError):
        JointLimits([0.0, 0.0], [1.0], [1.0])


def test_default_limits_from_config():
    model = ArmStateModel()
    assert model.dof == 6
    assert np.allclose(model.limits.q_min, -3.14159)
    assert np.allclose(model.limits.q_max, 3.14159)
    assert np.allclose(model.limits.dq_max, 4.0)
