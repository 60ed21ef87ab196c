"""Price + all Greeks for a small book of European options via bump-and-reprice."""

from pdeopt import OptionKind, PricingInput, batch_price

book = [
    PricingInput(spot=100.0, strike=100.0, maturity=1.0, rate=0.05,
                 volatility=0.2, option_type=OptionKind.CALL),
    PricingInput(spot=100.0, strike=110.0, maturity=0.5, rate=0.05,
                 volatility=0.25, option_type=OptionKind.CALL),
    PricingInput(spot=100.0, strike=90.0, maturity=0.25, rate=0.03,
                 volatility=0.3, option_type=OptionKind.PUT),
]

results = batch_price(book, verbose=True)

print()
print(f"{'type':<5} {'K':>6} {'T':>5} {'price':>10} {'error':>9} "
      f"{'delta':>8} {'gamma':>8} {'theta':>8} {'vega':>8}")
for inp, res in zip(book, results):
    print(f"{inp.option_type.value:<5} {inp.strike:>6g} {inp.maturity:>5g} "
          f"{res.price:>10.5f} {res.error:>9.2e} {res.delta:>8.4f} "
          f"{res.gamma:>8.5f} {res.theta:>8.4f} {res.vega:>8.4f}")
