"""Exceptions raised by the pricing engine.

Everything derives from ``PricingError``, itself a ``ValueError``, so
callers that already guard pricing calls with ``except ValueError`` keep
working.
"""

from __future__ import annotations


class PricingError(ValueError):
    """Base class for all pricing failures."""


class InvalidParameter(PricingError):
    """An option field is outside its admissible range."""

    def __init__(self, name: str, value: float, requirement: str):
        self.name = name
        self.value = value
        super().__init__(f"{name} must be {requirement}, got {value!r}")


class InvalidStepCount(PricingError):
    """The lattice step count is not a positive integer."""

    def __init__(self, steps):
        self.steps = steps
        super().__init__(f"steps must be a positive integer, got {steps!r}")


class ArbitrageInconsistency(PricingError):
    """Risk-neutral probability fell outside [0, 1]."""

    def __init__(self, p: float):
        self.p = p
        super().__init__(
            f"Risk-neutral prob p={p!r} out of [0,1]; "
            "rate, volatility and step size are inconsistent."
        )
