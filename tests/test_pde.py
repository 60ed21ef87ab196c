"""Tests for the PDE engine: time-stepper mapping, solve_european and interpolation."""

import math

import numpy as np
import pytest

from pdeopt import (
    Grid,
    InvalidArgument,
    ModelParameters,
    OptionKind,
    Scheme,
    interpolate_at,
    left_value,
    right_value,
    solve_european,
    terminal,
    theta,
)
from conftest import _bs_call_price, _bs_put_price


# ---------------------------------------------------------------------------
# Time stepper
# ---------------------------------------------------------------------------

class TestScheme:
    def test_theta_values(self):
        assert theta(Scheme.BACKWARD_EULER) == 1.0
        assert theta(Scheme.CRANK_NICOLSON) == 0.5

    def test_theta_property(self):
        assert Scheme.CRANK_NICOLSON.theta == 0.5

    @pytest.mark.parametrize("name,expected", [
        ("BE", Scheme.BACKWARD_EULER),
        ("cn", Scheme.CRANK_NICOLSON),
        (" Cn ", Scheme.CRANK_NICOLSON),
    ])
    def test_from_name(self, name, expected):
        assert Scheme.from_name(name) is expected

    def test_from_name_unknown(self):
        with pytest.raises(InvalidArgument, match="Unknown time-stepping scheme"):
            Scheme.from_name("explicit")

    @pytest.mark.parametrize("name", [None, 42])
    def test_from_name_non_string(self, name):
        with pytest.raises(InvalidArgument, match="must be a string"):
            Scheme.from_name(name)

    def test_string_rejected(self):
        with pytest.raises(TypeError, match="Scheme"):
            theta("CN")


# ---------------------------------------------------------------------------
# solve_european
# ---------------------------------------------------------------------------

class TestSolveEuropean:
    def test_shape_and_dtype(self, atm_params, reference_grid):
        values = solve_european(atm_params, reference_grid, OptionKind.CALL,
                                Scheme.CRANK_NICOLSON)
        assert values.shape == (reference_grid.n_s + 1,)
        assert values.dtype == np.float64

    @pytest.mark.parametrize("kind", [OptionKind.CALL, OptionKind.PUT])
    def test_boundaries_hold_final_level_values(self, atm_params, fine_grid, kind):
        values = solve_european(atm_params, fine_grid, kind, Scheme.CRANK_NICOLSON)
        assert values[0] == pytest.approx(left_value(kind, 0.05, 100.0, 1.0))
        assert values[-1] == pytest.approx(right_value(kind, 0.05, 100.0, 300.0, 1.0))

    @pytest.mark.parametrize("kind", [OptionKind.CALL, OptionKind.PUT])
    def test_zero_maturity_returns_payoff(self, fine_grid, kind):
        params = ModelParameters(r=0.05, sigma=0.2, k=100.0, t=0.0)
        values = solve_european(params, fine_grid, kind, Scheme.CRANK_NICOLSON)
        expected = [terminal(kind, 100.0, s) for s in fine_grid.nodes()]
        np.testing.assert_allclose(values, expected, atol=1e-12)

    @pytest.mark.parametrize("S", [80.0, 100.0, 120.0])
    def test_call_matches_analytic(self, cn_call_solution, S):
        grid, values = cn_call_solution
        exact = _bs_call_price(S=S, K=100.0, T=1.0, r=0.05, sigma=0.2)
        assert abs(interpolate_at(grid, values, S) - exact) < 0.02

    @pytest.mark.parametrize("scheme", [Scheme.BACKWARD_EULER, Scheme.CRANK_NICOLSON])
    @pytest.mark.parametrize("S", [80.0, 100.0, 120.0])
    def test_put_matches_analytic(self, atm_params, fine_grid, scheme, S):
        values = solve_european(atm_params, fine_grid, OptionKind.PUT, scheme)
        exact = _bs_put_price(S=S, K=100.0, T=1.0, r=0.05, sigma=0.2)
        assert abs(interpolate_at(fine_grid, values, S) - exact) < 0.05

    def test_call_values_non_negative_and_monotone(self, cn_call_solution):
        _, values = cn_call_solution
        assert np.all(values >= -1e-8)
        assert np.all(np.diff(values) >= -1e-8)

    def test_idempotent(self, atm_params, reference_grid):
        first = solve_european(atm_params, reference_grid, OptionKind.PUT,
                               Scheme.BACKWARD_EULER)
        second = solve_european(atm_params, reference_grid, OptionKind.PUT,
                                Scheme.BACKWARD_EULER)
        assert first is not second
        np.testing.assert_array_equal(first, second)

    def test_returned_array_is_not_shared(self, atm_params, reference_grid):
        first = solve_european(atm_params, reference_grid, OptionKind.CALL,
                               Scheme.CRANK_NICOLSON)
        snapshot = first.copy()
        first[:] = -1.0
        second = solve_european(atm_params, reference_grid, OptionKind.CALL,
                                Scheme.CRANK_NICOLSON)
        np.testing.assert_array_equal(second, snapshot)

    def test_verbose_prints_progress(self, atm_params, reference_grid, capsys):
        solve_european(atm_params, reference_grid, OptionKind.CALL,
                       Scheme.CRANK_NICOLSON, verbose=True)
        out = capsys.readouterr().out
        assert "n_s=100, n_t=50, Crank-Nicolson" in out
        assert "Solved in" in out

    def test_quiet_by_default(self, atm_params, reference_grid, capsys):
        solve_european(atm_params, reference_grid, OptionKind.CALL,
                       Scheme.CRANK_NICOLSON)
        assert capsys.readouterr().out == ""

    def test_rejects_string_discriminators(self, atm_params, reference_grid):
        with pytest.raises(TypeError):
            solve_european(atm_params, reference_grid, "call", Scheme.CRANK_NICOLSON)
        with pytest.raises(TypeError):
            solve_european(atm_params, reference_grid, OptionKind.CALL, "CN")


# ---------------------------------------------------------------------------
# Interpolation
# ---------------------------------------------------------------------------

class TestInterpolate:
    @pytest.fixture
    def grid(self):
        return Grid(s_max=10.0, n_s=10, n_t=5)

    @pytest.fixture
    def linear(self, grid):
        return 2.0 * grid.nodes() + 1.0

    @pytest.mark.parametrize("s", [0.5, 2.3, 5.7, 8.1, 9.99])
    def test_exact_for_linear(self, grid, linear, s):
        assert abs(interpolate_at(grid, linear, s) - (2.0 * s + 1.0)) < 1e-12

    def test_exact_at_nodes(self, grid):
        quad = grid.nodes() ** 2
        assert abs(interpolate_at(grid, quad, 5.0) - 25.0) < 1e-12

    def test_between_nodes_is_chord(self, grid):
        quad = grid.nodes() ** 2
        assert interpolate_at(grid, quad, 5.5) == pytest.approx(30.5)

    def test_clamps_outside_domain(self, grid, linear):
        assert interpolate_at(grid, linear, -1.0) == linear[0]
        assert interpolate_at(grid, linear, 15.0) == linear[-1]
        assert interpolate_at(grid, linear, 10.0) == linear[-1]

    def test_accepts_list(self, grid):
        values = [float(i) for i in range(11)]
        assert interpolate_at(grid, values, 3.25) == pytest.approx(3.25)

    def test_length_mismatch(self, grid):
        with pytest.raises(InvalidArgument, match="doesn't match grid size 11"):
            interpolate_at(grid, np.zeros(10), 5.0)

    @pytest.mark.parametrize("s", [math.nan, math.inf])
    def test_non_finite(self, grid, linear, s):
        with pytest.raises(InvalidArgument, match="finite"):
            interpolate_at(grid, linear, s)
