"""Cox-Ross-Rubinstein binomial lattice for European calls.

The up factor comes from matching the local drift and variance of the
lattice to geometric Brownian motion, which gives ``u * v = 1`` and a
recombining tree.  Both passes reuse a single ``steps + 1`` buffer instead
of the full triangular lattice.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from math import exp, expm1, isfinite, sqrt

import numpy as np

from .core import DEFAULT_STEPS, OptionParameters
from .errors import ArbitrageInconsistency, InvalidStepCount, PricingError

logger = logging.getLogger(__name__)

# Slack for p landing a few ulps outside [0, 1] through rounding.
P_TOLERANCE = 1e-6


@dataclass(frozen=True)
class LatticeFactors:
    step: float       # years per lattice step
    discount: float   # one-step discount factor
    u: float
    v: float
    p: float          # risk-neutral up probability


def payoff(price: float, strike: float) -> float:
    """Call payoff at expiry, ``max(price - strike, 0)``."""
    return max(price - strike, 0.0)


def _check_steps(steps) -> None:
    if isinstance(steps, bool) or not isinstance(steps, (int, np.integer)):
        raise InvalidStepCount(steps)
    if steps <= 0:
        raise InvalidStepCount(steps)


def _check_probability(p: float) -> float:
    if not isfinite(p) or not (-P_TOLERANCE <= p <= 1.0 + P_TOLERANCE):
        raise ArbitrageInconsistency(p)
    return p


def risk_neutral_probability(growth: float, u: float, v: float) -> float:
    """Up probability making the one-step expected growth equal ``growth``.

    Raises ``ArbitrageInconsistency`` when the result is not a probability.
    When ``u == v`` both children are the same node and 1 is returned.
    """
    if u == v:
        return 1.0
    return _check_probability((growth - v) / (u - v))


def lattice_factors(opt: OptionParameters, steps: int = DEFAULT_STEPS) -> LatticeFactors:
    """Step length, discount, up/down factors and risk-neutral probability.

    Works with excesses over 1 (``ufactor - 1``, ``u - 1``, ``growth - 1``)
    through ``expm1``; ``ufactor * ufactor - 1`` cancels catastrophically
    when volatility is zero and ``rate * step`` is small.
    """
    _check_steps(steps)
    step = opt.expiry / steps
    try:
        discount = exp(-opt.rate * step)
        growth_m1 = expm1(opt.rate * step)
        # ufactor - 1
        a = 0.5 * (expm1(-opt.rate * step)
                   + expm1((opt.rate + opt.volatility * opt.volatility) * step))
    except OverflowError as e:
        raise PricingError(f"lattice factors overflow for {opt}") from e

    # u - 1, from u = ufactor + sqrt(ufactor**2 - 1)
    d = a + sqrt(max(a * (a + 2.0), 0.0))
    u = 1.0 + d
    if not isfinite(u):
        raise PricingError(f"lattice factors overflow for {opt}")
    v = 1.0 / u
    if v == 0.0:
        raise PricingError(f"lattice factors overflow for {opt}")

    if d == 0.0:
        # Collapsed lattice: both children are the same node.
        p = 1.0
    else:
        # (growth - v) / (u - v) with v = 1 / (1 + d)
        p = _check_probability(((1.0 + d) * growth_m1 + d) / (d * (2.0 + d)))
    return LatticeFactors(step=step, discount=discount, u=u, v=v, p=p)


def terminal_asset_prices(asset: float, u: float, v: float, steps: int) -> np.ndarray:
    """Asset prices at expiry; entry ``j`` has ``j`` up-moves.

    Level by level, each node ``j`` takes ``u`` times the prior level's node
    ``j - 1`` and the bottom node moves down.  The right-hand side is
    evaluated before assignment, so every read sees the previous level.
    """
    _check_steps(steps)
    row = np.empty(steps + 1)
    row[0] = asset
    for idx in range(1, steps + 1):
        row[1:idx + 1] = u * row[:idx]
        row[0] = v * row[0]
    return row


def price(opt: OptionParameters, steps: int = DEFAULT_STEPS) -> float:
    """Present value of a European call on a CRR lattice with ``steps`` steps."""
    f = lattice_factors(opt, steps)
    logger.debug("u: %.12g  v: %.12g  p: %.12g  discount: %.12g", f.u, f.v, f.p, f.discount)

    S_T = terminal_asset_prices(opt.asset, f.u, f.v, steps)
    logger.debug("terminal asset prices: %d nodes, [%.6f .. %.6f]", S_T.size, S_T[0], S_T[-1])

    V = np.maximum(S_T - opt.strike, 0.0)
    logger.debug("strike: %.6f  in-the-money nodes: %d", opt.strike, int(np.count_nonzero(V)))

    # Backward induction, active range shrinks by one node per level
    p = f.p
    for level in range(steps, 0, -1):
        V[:level] = f.discount * (p * V[1:level + 1] + (1.0 - p) * V[:level])

    value = float(V[0])
    if not isfinite(value):
        raise PricingError(f"non-finite price {value!r} for {opt} with {steps} steps")
    return value
