"""Uniform space/time discretisation for the one-dimensional PDE.

The asset domain ``[s_min, s_max]`` is split into ``n_s`` equal intervals
(``n_s + 1`` nodes) and time-to-expiry ``[0, T]`` into ``n_t`` equal steps.
A :class:`Grid` does not store the maturity: the same grid can be reused
for options with different ``T`` (e.g. the maturity bump of theta).
"""

from __future__ import annotations

import dataclasses
import math
import numbers

import numpy as np

from pdeopt._errors import InvalidArgument
from pdeopt._validation import _require_finite, _require_non_negative, _require_positive


@dataclasses.dataclass(frozen=True)
class Grid:
    """Immutable uniform grid descriptor.

    Parameters
    ----------
    s_max : float
        Upper bound of the asset domain.
    n_s : int
        Number of spatial intervals, ``>= 2``.
    n_t : int
        Number of time steps, ``>= 1``.
    s_min : float, optional
        Lower bound of the asset domain. Default is 0.

    Raises
    ------
    InvalidArgument
        If a bound is non-finite, ``s_max <= s_min``, ``n_s < 2`` or
        ``n_t < 1``.

    Examples
    --------
    >>> grid = Grid(s_max=10.0, n_s=10, n_t=5)
    >>> grid.ds
    1.0
    >>> grid.find_bracketing_index(3.5)
    3
    """

    s_max: float
    n_s: int
    n_t: int
    s_min: float = 0.0

    def __post_init__(self):
        if not (math.isfinite(self.s_min) and math.isfinite(self.s_max)):
            raise InvalidArgument("Grid bounds must be finite")
        if self.s_max <= self.s_min:
            raise InvalidArgument(
                f"s_max ({self.s_max:g}) must be greater than s_min ({self.s_min:g})"
            )
        for name in ("n_s", "n_t"):
            count = getattr(self, name)
            if isinstance(count, bool) or not isinstance(count, numbers.Integral):
                raise InvalidArgument(f"{name} must be an integer, got {count!r}")
        if self.n_s < 2:
            raise InvalidArgument(
                f"Number of spatial intervals must be >= 2, got {self.n_s}"
            )
        if self.n_t < 1:
            raise InvalidArgument(
                f"Number of time intervals must be >= 1, got {self.n_t}"
            )
        object.__setattr__(self, "s_min", float(self.s_min))
        object.__setattr__(self, "s_max", float(self.s_max))
        object.__setattr__(self, "n_s", int(self.n_s))
        object.__setattr__(self, "n_t", int(self.n_t))

    # ------------------------------------------------------------------
    # Index arithmetic
    # ------------------------------------------------------------------

    @property
    def ds(self) -> float:
        """Spatial step ``(s_max - s_min) / n_s``."""
        return (self.s_max - self.s_min) / self.n_s

    def dt(self, maturity: float) -> float:
        """Time step ``maturity / n_t``.

        Raises
        ------
        InvalidArgument
            If *maturity* is negative or non-finite.
        """
        if not math.isfinite(maturity):
            raise InvalidArgument("Maturity must be finite")
        _require_non_negative("Maturity", maturity)
        return maturity / self.n_t

    def s_at(self, i: int) -> float:
        """Asset price at node *i*, ``0 <= i <= n_s``."""
        if i < 0 or i > self.n_s:
            raise InvalidArgument(
                f"Spatial index {i} out of bounds [0, {self.n_s}]"
            )
        return self.s_min + i * self.ds

    def nodes(self) -> np.ndarray:
        """All ``n_s + 1`` asset prices, ascending.

        Element ``i`` equals :meth:`s_at` ``(i)`` exactly.
        """
        return self.s_min + np.arange(self.n_s + 1) * self.ds

    def find_bracketing_index(self, s: float) -> int:
        """Largest node index ``i`` with ``s_at(i) <= s``.

        The result is clamped to ``[0, n_s - 1]`` so that ``(i, i + 1)`` is
        always a valid interval, which lets callers extrapolate past either
        edge. Only a non-finite *s* is an error.
        """
        if not math.isfinite(s):
            raise InvalidArgument("Asset price must be finite")
        frac_index = (s - self.s_min) / self.ds
        i = max(0, min(self.n_s - 1, math.floor(frac_index)))
        # the division can round across a node; settle on the exact node order
        while i > 0 and self.s_at(i) > s:
            i -= 1
        while i < self.n_s - 1 and self.s_at(i + 1) <= s:
            i += 1
        return i

    # ------------------------------------------------------------------
    # Construction from market data
    # ------------------------------------------------------------------

    @classmethod
    def adaptive(cls, prices, current_price: float, params, n_s: int,
                 n_t: int) -> "Grid":
        """Build a grid whose bounds cover both history and model spread.

        Parameters
        ----------
        prices : array_like
            Historical closing prices of the underlying.
        current_price : float
            Spot used as the pricing anchor.
        params : ModelParameters
            Supplies ``sigma`` and ``t`` for the model-implied band.
        n_s, n_t : int
            Grid resolution.

        See Also
        --------
        recommend_grid_bounds
        """
        s_min, s_max = recommend_grid_bounds(
            prices, current_price, params.sigma, params.t
        )
        return cls(s_max=s_max, n_s=n_s, n_t=n_t, s_min=s_min)

    # ------------------------------------------------------------------
    # Printing
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        lines = [
            f"Grid ({self.n_s + 1} nodes x {self.n_t} steps)",
            f"  Domain:  [{self.s_min:g}, {self.s_max:g}]",
            f"  ds:      {self.ds:g}",
        ]
        return "\n".join(lines)


def make_grid(s_max: float, n_s: int, n_t: int, s_min: float = 0.0) -> Grid:
    """Validate and return a :class:`Grid` (functional spelling of the constructor)."""
    return Grid(s_max=s_max, n_s=n_s, n_t=n_t, s_min=s_min)


def recommend_grid_bounds(prices, current_price: float, volatility: float,
                          maturity: float) -> tuple:
    """Suggest ``(s_min, s_max)`` from price history and a volatility band.

    The model-implied band is ``[S / f, S * f]`` with
    ``f = exp(3 * sigma * sqrt(T))``; the historical band is
    ``[0.8 * min(prices), 1.2 * max(prices)]``. The union of both is
    taken, then widened so the grid always reaches down to at least
    ``0.3 * S`` and up to at least ``2.5 * S``.

    Parameters
    ----------
    prices : array_like
        Historical prices, non-empty, finite and positive.
    current_price : float
        Current spot ``S``, ``> 0``.
    volatility : float
        Annualised volatility, ``> 0``.
    maturity : float
        Time to maturity in years, ``>= 0``.

    Returns
    -------
    (float, float)
        Recommended ``(s_min, s_max)``.
    """
    history = np.asarray(prices, dtype=np.float64).ravel()
    if history.size == 0:
        raise InvalidArgument("Price history must not be empty")
    if not np.all(np.isfinite(history)):
        raise InvalidArgument("Price history must contain only finite values")
    if np.any(history <= 0.0):
        raise InvalidArgument(
            f"Price history must be positive, got {float(history.min()):g}"
        )
    _require_finite(current_price=current_price, volatility=volatility,
                    maturity=maturity)
    _require_positive("Current asset price", current_price)
    _require_positive("Volatility", volatility)
    _require_non_negative("Time to maturity", maturity)

    range_factor = math.exp(3.0 * volatility * math.sqrt(maturity))
    theoretical_min = current_price / range_factor
    theoretical_max = current_price * range_factor
    historical_min = float(history.min()) * 0.8
    historical_max = float(history.max()) * 1.2

    s_min = max(0.0, min(theoretical_min, historical_min))
    s_max = max(theoretical_max, historical_max)

    return min(s_min, current_price * 0.3), max(s_max, current_price * 2.5)
