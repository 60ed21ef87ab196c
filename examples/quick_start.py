"""Quick start example: price an at-the-money call by PDE and compare to closed form."""

from pdeopt import Grid, ModelParameters, OptionKind, Scheme, price_euro

params = ModelParameters(r=0.05, sigma=0.2, k=100.0, t=1.0)
spot = 100.0

print(f"{'n_s':>5} {'BE price':>12} {'BE error':>10} {'CN price':>12} {'CN error':>10}")
for n_s in [50, 100, 200, 400]:
    grid = Grid(s_max=300.0, n_s=n_s, n_t=100, s_min=30.0)
    be_price, be_error = price_euro(params, grid, spot, Scheme.BACKWARD_EULER, OptionKind.CALL)
    cn_price, cn_error = price_euro(params, grid, spot, Scheme.CRANK_NICOLSON, OptionKind.CALL)
    print(f"{n_s:>5} {be_price:>12.6f} {be_error:>10.2e} {cn_price:>12.6f} {cn_error:>10.2e}")
