"""Shared test fixtures for pdeopt tests."""

import math

import pytest

from pdeopt import Grid, ModelParameters, OptionKind, Scheme, solve_european


# ---------------------------------------------------------------------------
# Independent Black-Scholes oracles (scipy, not the package's own CDF)
# ---------------------------------------------------------------------------

def _d1_d2(S, K, T, r, sigma):
    d1 = (math.log(S / K) + (r + 0.5 * sigma**2) * T) / (sigma * math.sqrt(T))
    return d1, d1 - sigma * math.sqrt(T)


def _bs_call_price(S, K, T, r, sigma):
    """Analytical Black-Scholes call price."""
    from scipy.stats import norm

    d1, d2 = _d1_d2(S, K, T, r, sigma)
    return S * norm.cdf(d1) - K * math.exp(-r * T) * norm.cdf(d2)


def _bs_put_price(S, K, T, r, sigma):
    from scipy.stats import norm

    d1, d2 = _d1_d2(S, K, T, r, sigma)
    return K * math.exp(-r * T) * norm.cdf(-d2) - S * norm.cdf(-d1)


def _bs_call_delta(S, K, T, r, sigma):
    from scipy.stats import norm

    d1, _ = _d1_d2(S, K, T, r, sigma)
    return norm.cdf(d1)


def _bs_gamma(S, K, T, r, sigma):
    from scipy.stats import norm

    d1, _ = _d1_d2(S, K, T, r, sigma)
    return norm.pdf(d1) / (S * sigma * math.sqrt(T))


def _bs_vega(S, K, T, r, sigma):
    from scipy.stats import norm

    d1, _ = _d1_d2(S, K, T, r, sigma)
    return S * norm.pdf(d1) * math.sqrt(T)


def _bs_call_theta(S, K, T, r, sigma):
    """Calendar theta dV/dt (negative of dV/dT)."""
    from scipy.stats import norm

    d1, d2 = _d1_d2(S, K, T, r, sigma)
    return (-S * norm.pdf(d1) * sigma / (2.0 * math.sqrt(T))
            - r * K * math.exp(-r * T) * norm.cdf(d2))


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def atm_params():
    """r=5%, sigma=20%, K=100, T=1; analytic call price ≈ 10.45058."""
    return ModelParameters(r=0.05, sigma=0.2, k=100.0, t=1.0)


@pytest.fixture
def reference_grid():
    """[30, 300] with 100 intervals and 50 steps."""
    return Grid(s_max=300.0, n_s=100, n_t=50, s_min=30.0)


@pytest.fixture
def fine_grid():
    """[0, 300] with 300 intervals and 200 steps (exact put boundary at S=0)."""
    return Grid(s_max=300.0, n_s=300, n_t=200, s_min=0.0)


@pytest.fixture(scope="module")
def cn_call_solution():
    """Crank-Nicolson call values on [0, 300], n_s=300, n_t=200."""
    grid = Grid(s_max=300.0, n_s=300, n_t=200)
    params = ModelParameters(r=0.05, sigma=0.2, k=100.0, t=1.0)
    return grid, solve_european(params, grid, OptionKind.CALL, Scheme.CRANK_NICOLSON)
