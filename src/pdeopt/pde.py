"""Finite-difference solver for the one-dimensional Black-Scholes PDE.

Written in time-to-expiry ``tau = T - t`` the equation reads

    ∂V/∂tau = ½σ²S² ∂²V/∂S² + rS ∂V/∂S - rV  =:  L V

and is marched forward in ``tau`` from the terminal payoff (``tau = 0``)
to the valuation date (``tau = T``). Central differences on a uniform
grid give, at interior node ``i``,

    (L V)_i = α_i V_{i-1} + β_i V_i + γ_i V_{i+1}

    α_i = ½σ²S_i²/ds² - ½rS_i/ds
    β_i = -σ²S_i²/ds² - r
    γ_i = ½σ²S_i²/ds² + ½rS_i/ds

Each step of the theta-method solves one tridiagonal system, with the
Dirichlet values of :mod:`pdeopt.boundary` eliminated into the
right-hand side.

References
----------
- Wilmott, Howison & Dewynne (1995), "The Mathematics of Financial
  Derivatives", Cambridge University Press, Chapters 8-9.
- Duffy (2006), "Finite Difference Methods in Financial Engineering",
  Wiley, Chapter 9.
"""

from __future__ import annotations

import time

import numpy as np

from pdeopt import boundary
from pdeopt._errors import InvalidArgument
from pdeopt._validation import _require_member
from pdeopt.grid import Grid
from pdeopt.params import ModelParameters
from pdeopt.payoff import OptionKind, terminal_values
from pdeopt.time_stepper import Scheme
from pdeopt.tridiagonal import solve_tridiagonal


def _operator_coefficients(params: ModelParameters, grid: Grid):
    """Return ``(alpha, beta, gamma)`` at the interior nodes ``1..n_s-1``."""
    ds = grid.ds
    s = grid.nodes()[1:-1]
    sigma_sq = params.sigma * params.sigma
    r = params.r

    diffusion = 0.5 * sigma_sq * s * s / (ds * ds)
    convection = 0.5 * r * s / ds
    alpha = diffusion - convection
    beta = -sigma_sq * s * s / (ds * ds) - r
    gamma = diffusion + convection
    return alpha, beta, gamma


def solve_european(params: ModelParameters, grid: Grid, kind: OptionKind,
                   scheme: Scheme, verbose: bool = False) -> np.ndarray:
    """Solve the European Black-Scholes PDE on *grid*.

    Parameters
    ----------
    params : ModelParameters
        Rate, volatility, strike and maturity.
    grid : Grid
        Spatial domain and number of time steps.
    kind : OptionKind
        Selects the terminal payoff and boundary values.
    scheme : Scheme
        Time-stepping scheme (θ = 1 or θ = 0.5).
    verbose : bool, optional
        If True, print solve progress. Default is False.

    Returns
    -------
    ndarray of shape (n_s + 1,)
        Option values at the valuation date (time-to-expiry ``T``) on the
        grid nodes. A fresh array is returned on every call.
    """
    _require_member(kind, OptionKind)
    _require_member(scheme, Scheme)

    n_s = grid.n_s
    n_t = grid.n_t
    dt = grid.dt(params.t)
    theta = scheme.theta
    r, k, s_max = params.r, params.k, grid.s_max

    if verbose:
        print(f"Solving {kind.value} PDE (n_s={n_s}, n_t={n_t}, {scheme.label})...")
    start = time.time()

    solution = terminal_values(kind, k, grid.nodes())

    if n_t == 0:
        return solution

    if n_s > 1:
        alpha, beta, gamma = _operator_coefficients(params, grid)
        sub = -theta * dt * alpha
        diag = 1.0 - theta * dt * beta
        sup = -theta * dt * gamma
        explicit = (1.0 - theta) * dt

    for step in range(1, n_t + 1):
        tau = step * dt
        left_bc = boundary.left_value(kind, r, k, tau)
        right_bc = boundary.right_value(kind, r, k, s_max, tau)

        if n_s <= 1:
            solution[0] = left_bc
            if n_s == 1:
                solution[1] = right_bc
            continue

        rhs = solution[1:-1] + explicit * (
            alpha * solution[:-2] + beta * solution[1:-1] + gamma * solution[2:]
        )
        rhs[0] -= sub[0] * left_bc
        rhs[-1] -= sup[-1] * right_bc

        solution[1:-1] = solve_tridiagonal(sub, diag, sup, rhs)
        solution[0] = left_bc
        solution[-1] = right_bc

    if verbose:
        print(f"  Solved in {time.time() - start:.3f}s")

    return solution


def interpolate_at(grid: Grid, values, s: float) -> float:
    """Linearly interpolate grid *values* at asset price *s*.

    Outside ``[s_min, s_max]`` the nearest boundary value is returned.

    Raises
    ------
    InvalidArgument
        If ``len(values) != n_s + 1`` or *s* is non-finite.
    """
    n_s = grid.n_s
    if len(values) != n_s + 1:
        raise InvalidArgument(
            f"Values array length {len(values)} doesn't match grid size {n_s + 1}"
        )

    i = grid.find_bracketing_index(s)

    if s <= grid.s_min:
        return float(values[0])
    if s >= grid.s_at(n_s):
        return float(values[n_s])

    s_i = grid.s_at(i)
    s_next = grid.s_at(i + 1)
    weight = (s - s_i) / (s_next - s_i)
    return float(values[i] * (1.0 - weight) + values[i + 1] * weight)
