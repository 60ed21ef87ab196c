"""PDEOpt: European option pricing by finite differences.

Solves the Black-Scholes PDE with an implicit theta-method (Backward Euler
or Crank-Nicolson) on a uniform grid, using an O(n) Thomas solve per time
step, and cross-validates every price against the closed-form solution.
:func:`price_option` adds Delta, Gamma, Theta and Vega by bump-and-reprice.

Example
-------
>>> from pdeopt import OptionKind, PricingInput, price_option
>>> result = price_option(PricingInput(
...     spot=100.0, strike=100.0, maturity=1.0, rate=0.05,
...     volatility=0.2, option_type=OptionKind.CALL,
... ))
>>> round(result.analytic_price, 2)
10.45
"""

from pdeopt._errors import InvalidArgument, SingularSystemError
from pdeopt._version import __version__
from pdeopt.boundary import left_value, right_value
from pdeopt.grid import Grid, make_grid, recommend_grid_bounds
from pdeopt.params import ModelParameters
from pdeopt.payoff import (
    OptionKind,
    analytic_price,
    standard_normal_cdf,
    terminal,
    terminal_values,
)
from pdeopt.pde import interpolate_at, solve_european
from pdeopt.pricing import (
    PricingInput,
    PricingResult,
    batch_price,
    default_grid_bounds,
    price_euro,
    price_option,
)
from pdeopt.time_stepper import Scheme, theta
from pdeopt.tridiagonal import solve_tridiagonal

__all__ = [
    "Grid",
    "InvalidArgument",
    "ModelParameters",
    "OptionKind",
    "PricingInput",
    "PricingResult",
    "Scheme",
    "SingularSystemError",
    "analytic_price",
    "batch_price",
    "default_grid_bounds",
    "interpolate_at",
    "left_value",
    "make_grid",
    "price_euro",
    "price_option",
    "recommend_grid_bounds",
    "right_value",
    "solve_european",
    "solve_tridiagonal",
    "standard_normal_cdf",
    "terminal",
    "terminal_values",
    "theta",
    "__version__",
]
