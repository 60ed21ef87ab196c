"""Terminal payoffs and the closed-form Black-Scholes reference price.

The analytic price serves two purposes: it is the error benchmark reported
next to every PDE price, and it is the oracle the test-suite checks the
numerical engine against.

References
----------
- Black & Scholes (1973), "The Pricing of Options and Corporate
  Liabilities", Journal of Political Economy 81(3):637-654.
- Abramowitz & Stegun (1964), "Handbook of Mathematical Functions",
  formula 26.2.17.
"""

from __future__ import annotations

import enum
import math

import numpy as np

from pdeopt._errors import InvalidArgument
from pdeopt._validation import (
    _require_finite,
    _require_member,
    _require_non_negative,
    _require_positive,
)

# Rational approximation of the standard normal CDF, |error| < 7.5e-8.
_AS_P = 0.2316419
_AS_COEFFS = (0.319381530, -0.356563782, 1.781477937, -1.821255978, 1.330274429)
_INV_SQRT_2PI = 1.0 / math.sqrt(2.0 * math.pi)


class OptionKind(enum.Enum):
    """European option type."""

    CALL = "call"
    PUT = "put"


def terminal(kind: OptionKind, k: float, s: float) -> float:
    """Payoff at expiry: ``max(s - k, 0)`` for a call, ``max(k - s, 0)`` for a put.

    Parameters
    ----------
    kind : OptionKind
        Call or put.
    k : float
        Strike, must be positive.
    s : float
        Asset price at expiry, must be non-negative.

    Returns
    -------
    float
    """
    _require_member(kind, OptionKind)
    _require_finite(k=k, s=s)
    _require_positive("Strike price", k)
    _require_non_negative("Asset price", s)

    if kind is OptionKind.CALL:
        return max(s - k, 0.0)
    return max(k - s, 0.0)


def terminal_values(kind: OptionKind, k: float, s_values) -> np.ndarray:
    """Vectorised :func:`terminal` over an array of asset prices."""
    _require_member(kind, OptionKind)
    _require_finite(k=k)
    _require_positive("Strike price", k)

    s = np.asarray(s_values, dtype=np.float64)
    if not np.all(np.isfinite(s)):
        raise InvalidArgument("Strike and asset price must be finite")
    if np.any(s < 0.0):
        raise InvalidArgument(
            f"Asset price must be non-negative, got {float(s.min()):g}"
        )

    if kind is OptionKind.CALL:
        return np.maximum(s - k, 0.0)
    return np.maximum(k - s, 0.0)


def standard_normal_cdf(x: float) -> float:
    """Standard normal CDF Φ(x).

    Evaluates the Abramowitz-Stegun polynomial for the non-negative
    argument and reflects with ``Φ(-x) = 1 - Φ(x)``, so both tails are
    computed from the same well-conditioned branch.
    """
    _require_finite(x=x)
    if x < 0.0:
        return 1.0 - standard_normal_cdf(-x)

    t = 1.0 / (1.0 + _AS_P * x)
    poly = 0.0
    for coeff in reversed(_AS_COEFFS):
        poly = t * (coeff + poly)
    density = math.exp(-0.5 * x * x) * _INV_SQRT_2PI
    return 1.0 - density * poly


def analytic_price(kind: OptionKind, r: float, sigma: float, t: float,
                   s0: float, k: float) -> float:
    """Closed-form Black-Scholes price of a European option.

    Parameters
    ----------
    kind : OptionKind
        Call or put.
    r : float
        Continuously-compounded risk-free rate, ``>= 0``.
    sigma : float
        Volatility, ``> 0``.
    t : float
        Time to maturity in years, ``>= 0``. At ``t = 0`` the terminal
        payoff is returned undiscounted.
    s0 : float
        Spot price, ``> 0``.
    k : float
        Strike, ``> 0``.

    Returns
    -------
    float
        Option price.
    """
    _require_member(kind, OptionKind)
    _require_finite(r=r, sigma=sigma, t=t, s0=s0, k=k)
    _require_non_negative("Risk-free rate", r)
    _require_positive("Volatility", sigma)
    _require_non_negative("Time to maturity", t)
    _require_positive("Current asset price", s0)
    _require_positive("Strike price", k)

    if t == 0.0:
        return terminal(kind, k, s0)

    sqrt_t = math.sqrt(t)
    d1 = (math.log(s0 / k) + (r + 0.5 * sigma * sigma) * t) / (sigma * sqrt_t)
    d2 = d1 - sigma * sqrt_t
    discount = math.exp(-r * t)

    if kind is OptionKind.CALL:
        return s0 * standard_normal_cdf(d1) - k * discount * standard_normal_cdf(d2)
    return k * discount * standard_normal_cdf(-d2) - s0 * standard_normal_cdf(-d1)
