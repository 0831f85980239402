"""Convergence diagnostics for the binomial engine.

The CRR price oscillates around its continuous-time limit with an error
that shrinks roughly like ``1 / steps``.  ``convergence_analysis`` measures
that behaviour over a sweep of step counts.
"""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from .binomial import price
from .core import OptionParameters

__all__ = ["convergence_analysis"]

logger = logging.getLogger(__name__)


def convergence_analysis(
    opt: OptionParameters,
    steps_values: list | np.ndarray,
    *,
    reference: Optional[float] = None,
) -> dict:
    """Price ``opt`` at each step count and estimate the convergence order.

    Parameters
    ----------
    opt : OptionParameters
    steps_values : array-like of int
        Step counts to test.
    reference : float, optional
        True price for error computation.  Default: the price at the
        largest step count in ``steps_values``.

    Returns
    -------
    dict
        ``"steps"``, ``"prices"``, ``"errors"``, ``"order"`` (estimated).
    """
    steps_values = list(steps_values)
    if not steps_values:
        raise ValueError("steps_values must not be empty.")

    prices = []
    for n in steps_values:
        px = price(opt, n)
        logger.debug("steps=%d price=%.10f", n, px)
        prices.append(px)

    if reference is None:
        reference = prices[int(np.argmax(steps_values))]

    errors = [abs(px - reference) for px in prices]

    # error ~ C / n^order  => log(e) = -order * log(n) + const
    order = float("nan")
    valid = [(n, e) for n, e in zip(steps_values, errors) if e > 0]
    if len(valid) >= 2:
        log_n = np.log([n for n, _ in valid])
        log_e = np.log([e for _, e in valid])
        coeffs = np.polyfit(log_n, log_e, 1)
        order = -float(coeffs[0])

    return {
        "steps": steps_values,
        "prices": prices,
        "errors": errors,
        "order": order,
    }
