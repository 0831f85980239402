# crrpricer, Cox-Ross-Rubinstein pricing of European calls
# Public API

from .core import OptionParameters, DEFAULT_STEPS
from .binomial import (
    price, payoff, lattice_factors, terminal_asset_prices, risk_neutral_probability,
    LatticeFactors,
)
from .errors import (
    PricingError, InvalidParameter, InvalidStepCount, ArbitrageInconsistency,
)
from .validation import convergence_analysis

__all__ = [
    "OptionParameters", "DEFAULT_STEPS",
    "price", "payoff", "lattice_factors", "terminal_asset_prices",
    "risk_neutral_probability", "LatticeFactors",
    "PricingError", "InvalidParameter", "InvalidStepCount", "ArbitrageInconsistency",
    "convergence_analysis",
]

__version__ = "0.1.0"
