from __future__ import annotations

import math
from dataclasses import dataclass

from .errors import InvalidParameter

DEFAULT_STEPS = 1000

MONTHS_PER_YEAR = 12.0
PERCENT = 100.0


@dataclass(frozen=True)
class OptionParameters:
    """Market inputs for one European call.

    Parameters
    ----------
    asset : float
        Current price of the underlying.
    strike : float
        Exercise price.
    expiry : float
        Time to maturity in years.
    rate : float
        Annualised risk-free rate as a decimal (0.05, not 5).
    volatility : float
        Annualised standard deviation of asset returns, as a decimal.
    """
    asset: float
    strike: float
    expiry: float     # years
    rate: float       # decimal, continuous
    volatility: float

    def __post_init__(self):
        for name in ("asset", "strike", "expiry", "rate", "volatility"):
            value = getattr(self, name)
            if not math.isfinite(value):
                raise InvalidParameter(name, value, "finite")
        if self.asset <= 0:
            raise InvalidParameter("asset", self.asset, "positive")
        if self.strike <= 0:
            raise InvalidParameter("strike", self.strike, "positive")
        if self.expiry <= 0:
            raise InvalidParameter("expiry", self.expiry, "positive")
        if self.volatility < 0:
            raise InvalidParameter("volatility", self.volatility, "non-negative")

    @classmethod
    def from_quote(
        cls,
        asset: float,
        strike: float,
        expiry_months: float,
        rate_percent: float,
        volatility: float,
    ) -> OptionParameters:
        """Build parameters from desk units: expiry in months, rate in percent."""
        return cls(
            asset=asset,
            strike=strike,
            expiry=expiry_months / MONTHS_PER_YEAR,
            rate=rate_percent / PERCENT,
            volatility=volatility,
        )
