"""Black-Scholes model parameters."""

from __future__ import annotations

import dataclasses

from pdeopt._validation import _require_finite, _require_non_negative, _require_positive


@dataclasses.dataclass(frozen=True)
class ModelParameters:
    """Validated ``(r, sigma, k, t)`` for one European option.

    Parameters
    ----------
    r : float
        Risk-free rate, ``>= 0``.
    sigma : float
        Volatility, ``> 0``.
    k : float
        Strike price, ``> 0``.
    t : float
        Time to maturity in years, ``>= 0``.

    Raises
    ------
    InvalidArgument
        On any non-finite or out-of-range value. Construction fails
        immediately so invalid inputs never reach the solver.
    """

    r: float
    sigma: float
    k: float
    t: float

    def __post_init__(self):
        _require_finite(r=self.r, sigma=self.sigma, k=self.k, t=self.t)
        _require_non_negative("Risk-free rate", self.r)
        _require_positive("Volatility", self.sigma)
        _require_positive("Strike price", self.k)
        _require_non_negative("Time to maturity", self.t)
        for field in ("r", "sigma", "k", "t"):
            object.__setattr__(self, field, float(getattr(self, field)))

    def replace(self, **changes) -> "ModelParameters":
        """Return a validated copy with *changes* applied."""
        return dataclasses.replace(self, **changes)
