"""Dirichlet boundary values for the European Black-Scholes problem.

The values are the exact limits of the Black-Scholes solution at the edges
of the asset domain, as functions of time-to-expiry ``tau = T - t``:

=====  ======================  ======================
kind   S -> 0 (left)           S -> S_max (right)
=====  ======================  ======================
call   0                       S_max - K e^(-r tau)
put    K e^(-r tau)            0
=====  ======================  ======================

At ``tau = 0`` both sides coincide with the terminal payoff.
"""

from __future__ import annotations

import math

from pdeopt._validation import (
    _require_finite,
    _require_member,
    _require_non_negative,
    _require_positive,
)
from pdeopt.payoff import OptionKind


def left_value(kind: OptionKind, r: float, k: float, tau: float) -> float:
    """Boundary value at the lower edge of the asset domain."""
    _require_member(kind, OptionKind)
    _require_finite(r=r, k=k, tau=tau)
    _require_non_negative("Risk-free rate", r)
    _require_positive("Strike price", k)
    _require_non_negative("Time to expiry", tau)

    if kind is OptionKind.CALL:
        return 0.0
    return k * math.exp(-r * tau)


def right_value(kind: OptionKind, r: float, k: float, s_max: float,
                tau: float) -> float:
    """Boundary value at the upper edge ``s_max`` of the asset domain."""
    _require_member(kind, OptionKind)
    _require_finite(r=r, k=k, s_max=s_max, tau=tau)
    _require_non_negative("Risk-free rate", r)
    _require_positive("Strike price", k)
    _require_positive("Maximum asset price", s_max)
    _require_non_negative("Time to expiry", tau)

    if kind is OptionKind.CALL:
        return s_max - k * math.exp(-r * tau)
    return 0.0
