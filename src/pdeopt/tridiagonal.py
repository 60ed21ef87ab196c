"""Direct O(n) solver for tridiagonal linear systems (Thomas algorithm).

Solves ``A x = d`` where ``A`` has sub-diagonal ``a``, main diagonal ``b``
and super-diagonal ``c``. All four arrays have the same length ``n``;
``a[0]`` and ``c[n-1]`` fall outside the matrix and are ignored.

No pivoting is performed. The systems produced by the Black-Scholes
discretisation are diagonally dominant for reasonable grids, which keeps
elimination stable; an exactly zero pivot is reported as singular.

References
----------
- Thomas (1949), "Elliptic Problems in Linear Differential Equations
  over a Network", Watson Sci. Comput. Lab Report, Columbia University.
- Press et al. (2007), "Numerical Recipes", 3rd ed., Section 2.4.
"""

from __future__ import annotations

import numpy as np

from pdeopt._errors import InvalidArgument, SingularSystemError
from pdeopt._jit import thomas_solve_jit


def _as_band(name: str, values) -> np.ndarray:
    band = np.ascontiguousarray(values, dtype=np.float64)
    if band.ndim != 1:
        raise InvalidArgument(
            f"Array {name} must be one-dimensional, got shape {band.shape}"
        )
    bad = np.flatnonzero(~np.isfinite(band))
    if bad.size:
        raise InvalidArgument(
            f"Non-finite value in array {name} at index {int(bad[0])}"
        )
    return band


def solve_tridiagonal(a, b, c, d) -> np.ndarray:
    """Solve a tridiagonal system with the Thomas algorithm.

    Parameters
    ----------
    a : array_like
        Sub-diagonal of length n; ``a[0]`` is unused.
    b : array_like
        Main diagonal of length n.
    c : array_like
        Super-diagonal of length n; ``c[n-1]`` is unused.
    d : array_like
        Right-hand side of length n.

    Returns
    -------
    ndarray of shape (n,)
        Solution vector ``x``. The inputs are never modified.

    Raises
    ------
    InvalidArgument
        If the lengths differ, the system is empty, or any entry is
        non-finite.
    SingularSystemError
        If a pivot ``b[i] - a[i] * c'[i-1]`` is exactly zero.

    Examples
    --------
    >>> solve_tridiagonal([0, 1, 1], [2, 2, 2], [1, 1, 0], [5, 6, 4])
    array([1.75, 1.5 , 1.25])
    """
    lengths = (len(a), len(b), len(c), len(d))
    if len(set(lengths)) != 1:
        raise InvalidArgument(
            f"Array length mismatch: a={lengths[0]}, b={lengths[1]}, "
            f"c={lengths[2]}, d={lengths[3]}"
        )
    if lengths[0] == 0:
        raise InvalidArgument("Cannot solve empty system")

    bands = [_as_band(name, values) for name, values in zip("abcd", (a, b, c, d))]

    x, singular_row = thomas_solve_jit(*bands)
    if singular_row >= 0:
        if singular_row == 0:
            raise SingularSystemError("Singular system: b[0] = 0")
        raise SingularSystemError(f"Singular system at row {singular_row}")
    return x
