#!/usr/bin/env python3
"""Print how the CRR price settles as the lattice is refined.

Usage
-----
    python scripts/convergence_report.py --asset 100 --strike 100 --expiry 1 --rate 0.05 --volatility 0.2
    python scripts/convergence_report.py ... --steps 50 100 200 400 800 --reference 10.4506

Units here are the library's: expiry in years, rate as a decimal.

Output
------
    steps       price        |error|
       50   10.4107...   ...
    ...
    estimated order: ...
"""

from __future__ import annotations
import argparse
import sys
from pathlib import Path

# Allow running from repo root: python scripts/convergence_report.py
sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from crrpricer.core import OptionParameters
from crrpricer.errors import PricingError
from crrpricer.logging_config import setup_logging
from crrpricer.validation import convergence_analysis


def main():
    parser = argparse.ArgumentParser(description="CRR convergence report")
    parser.add_argument("--asset", type=float, required=True)
    parser.add_argument("--strike", type=float, required=True)
    parser.add_argument("--expiry", type=float, required=True, help="years")
    parser.add_argument("--rate", type=float, required=True, help="decimal")
    parser.add_argument("--volatility", type=float, required=True)
    parser.add_argument("--steps", type=int, nargs="+",
                        default=[50, 100, 200, 400, 800, 1600])
    parser.add_argument("--reference", type=float, default=None,
                        help="true price (default: finest lattice)")
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args()

    setup_logging(args.log_level)

    try:
        opt = OptionParameters(args.asset, args.strike, args.expiry, args.rate, args.volatility)
        result = convergence_analysis(opt, args.steps, reference=args.reference)
    except PricingError as e:
        print(f"error: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"{'steps':>8} {'price':>14} {'|error|':>14}")
    for n, px, err in zip(result["steps"], result["prices"], result["errors"]):
        print(f"{n:>8d} {px:>14.8f} {err:>14.2e}")
    print(f"estimated order: {result['order']:.3f}")


if __name__ == "__main__":
    main()
