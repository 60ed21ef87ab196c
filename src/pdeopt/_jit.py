"""Numba JIT-compiled kernel for the Thomas algorithm.

The kernel does no argument checking and never raises: a zero pivot is
reported through the returned row index so the caller can raise a
descriptive error in Python.
"""

import numpy as np
from numba import njit


@njit(cache=True)
def thomas_solve_jit(a: np.ndarray, b: np.ndarray, c: np.ndarray,
                     d: np.ndarray):
    """Forward elimination and back substitution for a tridiagonal system.

    Parameters
    ----------
    a : ndarray
        Sub-diagonal, length n (``a[0]`` unused).
    b : ndarray
        Main diagonal, length n.
    c : ndarray
        Super-diagonal, length n (``c[n-1]`` unused).
    d : ndarray
        Right-hand side, length n.

    Returns
    -------
    (x, singular_row) : (ndarray, int)
        Solution vector and ``-1`` on success; otherwise ``x`` is
        undefined and ``singular_row`` is the row whose pivot was zero.
    """
    n = d.shape[0]
    c_prime = np.empty(n)
    d_prime = np.empty(n)
    x = np.zeros(n)

    pivot = b[0]
    if pivot == 0.0:
        return x, 0
    c_prime[0] = c[0] / pivot
    d_prime[0] = d[0] / pivot

    for i in range(1, n):
        pivot = b[i] - a[i] * c_prime[i - 1]
        if pivot == 0.0:
            return x, i
        c_prime[i] = c[i] / pivot
        d_prime[i] = (d[i] - a[i] * d_prime[i - 1]) / pivot

    x[n - 1] = d_prime[n - 1]
    for i in range(n - 2, -1, -1):
        x[i] = d_prime[i] - c_prime[i] * x[i + 1]

    return x, -1
