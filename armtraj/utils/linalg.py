"""
Small dense linear algebra helpers used by the polynomial fits.
"""

from collections.abc import Sequence

import numpy as np

from armtraj.config import PIVOT_EPS
from armtraj.utils.errors import DimensionError, SingularSystemError

# Order of the quintic boundary-value system (6 coefficients, 6 constraints)
SYSTEM_ORDER: int = 6


def solve6(A: Sequence[Sequence[float]] | np.ndarray, b: Sequence[float] | np.ndarray) -> np.ndarray:
    """
    Solve the 6x6 system A x = b.

    Gaussian elimination with partial pivoting on an augmented copy [A | b]:
    each pivot row is normalised to a unit diagonal and the rows below are
    eliminated, then the upper-triangular system is back-substituted.

    Args:
        A: 6x6 matrix
        b: right-hand side of length 6

    Returns:
        Solution vector of shape (6,)

    Raises:
        DimensionError: A is not 6x6 or b does not have 6 entries
        SingularSystemError: best pivot in a column is below PIVOT_EPS
    """
    n = SYSTEM_ORDER
    A_arr = np.asarray(A, dtype=float)
    b_arr = np.asarray(b, dtype=float)
    if A_arr.shape != (n, n):
        raise DimensionError(f"solve6 expects a {n}x{n} matrix, got shape {A_arr.shape}")
    if b_arr.shape != (n,):
        raise DimensionError(f"solve6 expects a right-hand side of length {n}, got shape {b_arr.shape}")

    # np.column_stack copies, the caller's arrays are left untouched
    M = np.column_stack((A_arr, b_arr))

    # Forward elimination
    for col in range(n):
        piv = col + int(np.argmax(np.abs(M[col:, col])))
        best = abs(M[piv, col])
        if not best >= PIVOT_EPS:
            raise SingularSystemError(f"no usable pivot in column {col} (|pivot|={best:.3e})")
        if piv != col:
            M[[col, piv]] = M[[piv, col]]

        M[col, col:] /= M[col, col]
        for r in range(col + 1, n):
            f = M[r, col]
            if f != 0.0:
                M[r, col:] -= f * M[col, col:]

    # Back substitution (unit diagonal)
    x = np.zeros(n, dtype=float)
    for r in range(n - 1, -1, -1):
        x[r] = M[r, n] - np.dot(M[r, r + 1 : n], x[r + 1 :])
    return x
