import numpy as np
import pytest

from armtraj.utils.errors import DimensionError, SingularSystemError
from armtraj.utils.linalg import solve6


def test_solve6_identity_returns_rhs():
    b = [1.0, -2.0, 3.0, -4.0, 5.0, -6.0]
    x = solve6(np.eye(6), b)
    assert np.allclose(x, b)


@pytest.mark.parametrize("seed", [0, 1, 7, 42])
def test_solve6_random_system_round_trip(seed):
    rng = np.random.default_rng(seed)
    # Diagonally dominant => nonsingular
    A = rng.uniform(-1.0, 1.0, size=(6, 6)) + 6.0 * np.eye(6)
    b = rng.uniform(-10.0, 10.0, size=6)

    x = solve6(A, b)
    assert x.shape == (6,)
    assert np.allclose(A @ x, b, atol=1e-9)


def test_solve6_needs_pivoting():
    # Zero on the leading diagonal; plain elimination without row swaps would divide by zero
    A = np.zeros((6, 6))
    for i in range(6):
        A[i, (i + 1) % 6] = float(i + 1)
    b = np.arange(1.0, 7.0)

    x = solve6(A, b)
    assert np.allclose(A @ x, b)


def test_solve6_does_not_modify_inputs():
    A = np.eye(6) * 2.0
    b = np.ones(6)
    A_before = A.copy()
    b_before = b.copy()

    solve6(A, b)
    assert np.array_equal(A, A_before)
    assert np.array_equal(b, b_before)


def test_solve6_accepts_nested_lists():
    A = [[2.0 if r == c else 0.0 for c in range(6)] for r in range(6)]
    x = solve6(A, [2.0] * 6)
    assert np.allclose(x, np.ones(6))


def test_solve6_singular_system_raises():
    A = np.eye(6)
    A[5] = A[4]  # duplicate row
    with pytest.raises(SingularSystemError):
        solve6(A, np.ones(6))


def test_solve6_all_zero_matrix_raises():
    with pytest.raises(SingularSystemError):
        solve6(np.zeros((6, 6)), np.zeros(6))


def test_solve6_tiny_pivot_counts_as_singular():
    A = np.eye(6)
    A[3, 3] = 1e-14
    with pytest.raises(SingularSystemError):
        solve6(A, np.ones(6))


@pytest.mark.parametrize(
    "A,b",
    [
        (np.eye(5), np.ones(6)),
        (np.eye(6), np.ones(5)),
        (np.ones((6, 5)), np.ones(6)),
        (np.eye(6), np.ones((6, 1))),
    ],
)
def test_solve6_bad_dimensions_raise(A, b):
    with pytest.raises(DimensionError):
        solve6(A, b)
