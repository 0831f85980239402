from __future__ import annotations

import argparse
import logging
import sys

import yaml

from .binomial import price
from .config import DEFAULT_CONFIG, build_config
from .core import OptionParameters
from .errors import PricingError
from .logging_config import setup_logging

logger = logging.getLogger(__name__)

# (argparse dest, interactive prompt), in prompt order
PROMPTS = [
    ("asset", "Enter the asset price: "),
    ("strike", "Enter the strike price: "),
    ("expiry_months", "Enter the expiry in months: "),
    ("rate_percent", "Enter the interest rate as a percent: "),
    ("volatility", "Enter the volatility: "),
]


class InputError(Exception):
    """A prompted value could not be read as a number."""


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="crrpricer",
        description="Price a European call on a Cox-Ross-Rubinstein binomial lattice. "
                    "Values not given as flags are prompted for and may be typed "
                    "one per line or several on a line.",
    )
    p.add_argument("--asset", type=float, help="current asset price")
    p.add_argument("--strike", type=float, help="strike price")
    p.add_argument("--expiry-months", dest="expiry_months", type=float, help="months")
    p.add_argument("--rate-percent", dest="rate_percent", type=float,
                   help="risk-free rate as a percent (5 means 5%%)")
    p.add_argument("--volatility", type=float, help="annualised, decimal (0.2)")
    p.add_argument("--steps", type=int, default=None,
                   help=f"lattice steps (default {DEFAULT_CONFIG['pricing']['steps']})")
    p.add_argument("--config", type=str, default=None, help="Path to a YAML config file.")
    p.add_argument("--log-level", type=str, default=None,
                   help="Logging level (e.g., INFO, DEBUG).")
    p.add_argument("--log-file", type=str, default=None, help="Optional log file path.")
    return p


class TokenReader:
    """Whitespace-separated numbers from stdin, any number per line."""

    def __init__(self, stream=None):
        self._stream = stream
        self._tokens: list[str] = []

    def next_float(self, prompt: str) -> float:
        sys.stdout.write(prompt)
        sys.stdout.flush()
        while not self._tokens:
            line = (self._stream or sys.stdin).readline()
            if not line:
                raise InputError(f"no input for {prompt.strip()!r}")
            self._tokens = line.split()
        raw = self._tokens.pop(0)
        try:
            return float(raw)
        except ValueError as e:
            raise InputError(f"not a number: {raw!r}") from e


def collect_inputs(args: argparse.Namespace, reader: TokenReader | None = None) -> tuple[dict, bool]:
    """Fill in values missing from ``args`` by prompting; report whether any prompt ran."""
    reader = reader or TokenReader()
    values = {}
    prompted = False
    for dest, prompt in PROMPTS:
        val = getattr(args, dest)
        if val is None:
            val = reader.next_float(prompt)
            prompted = True
        values[dest] = val
    return values, prompted


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = build_config(
            DEFAULT_CONFIG,
            args.config,
            {
                "pricing": {"steps": args.steps},
                "logging": {"level": args.log_level, "file": args.log_file},
            },
        )
        log_cfg = config["logging"]
        setup_logging(log_cfg["level"], fmt=log_cfg["format"], log_file=log_cfg["file"])
    except (OSError, ValueError, yaml.YAMLError) as e:
        print(f"crrpricer: configuration error: {e}", file=sys.stderr)
        return 2

    try:
        values, prompted = collect_inputs(args)
    except InputError as e:
        print(f"crrpricer: {e}", file=sys.stderr)
        return 2
    if prompted:
        print("\n")

    steps = config["pricing"]["steps"]
    try:
        opt = OptionParameters.from_quote(**values)
        logger.info("pricing %s with %s steps", opt, steps)
        value = price(opt, steps)
    except PricingError as e:
        print(f"crrpricer: {e}", file=sys.stderr)
        return 1

    print(f"The value of your option is: {value:.2f}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
