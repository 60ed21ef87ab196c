"""Time-stepping schemes for the theta-method.

The generalised theta-method advances the semi-discrete Black-Scholes
system one step backward from expiry:

    (I - θ Δt L) Vⁿ = (I + (1 - θ) Δt L) Vⁿ⁺¹

where ``L`` is the spatial operator. ``θ = 1`` is Backward Euler (first
order, strongly damped); ``θ = 1/2`` is Crank-Nicolson (second order, may
ring near the payoff kink on coarse grids). Both are unconditionally
stable.
"""

from __future__ import annotations

import enum

from pdeopt._errors import InvalidArgument
from pdeopt._validation import _require_member


class Scheme(enum.Enum):
    """Implicit time-stepping scheme."""

    BACKWARD_EULER = "BE"
    CRANK_NICOLSON = "CN"

    @property
    def theta(self) -> float:
        """Implicitness parameter θ of this scheme."""
        return theta(self)

    @property
    def label(self) -> str:
        return "Backward Euler" if self is Scheme.BACKWARD_EULER else "Crank-Nicolson"

    @classmethod
    def from_name(cls, name: str) -> "Scheme":
        """Look up a scheme by its short name (``"BE"`` or ``"CN"``).

        Matching is case-insensitive.
        """
        if not isinstance(name, str):
            raise InvalidArgument(
                f"Scheme name must be a string, got {type(name).__name__}"
            )
        try:
            return cls(name.strip().upper())
        except ValueError:
            raise InvalidArgument(
                f"Unknown time-stepping scheme {name!r}; expected 'BE' or 'CN'"
            ) from None


_THETA = {
    Scheme.BACKWARD_EULER: 1.0,
    Scheme.CRANK_NICOLSON: 0.5,
}


def theta(scheme: Scheme) -> float:
    """Return θ for *scheme*: 1.0 for Backward Euler, 0.5 for Crank-Nicolson."""
    _require_member(scheme, Scheme)
    return _THETA[scheme]
