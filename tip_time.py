from __future__ import annotations

# ruff: noqa: E402  # allow docstring before imports

"""Public API and CLI entrypoint for the Tip Time calculator.

Re-exports the main API from `tiptime` so that

    import tip_time

gives the calculator, parsers and formatters in one place. Also provides the
`python tip_time.py` entry.
"""

import importlib.metadata as importlib_metadata
import sys

from tiptime import (
    CENT,
    DEFAULT_TIER,
    HUNDRED,
    PERCENT_STEP,
    TIP_PERCENTAGES,
    BillResult,
    CalculatorState,
    RoundingMode,
    ServiceTier,
    compute,
    fmt_money,
    fmt_percent,
    parse_cost,
    parse_rounding,
    parse_tier,
    percentage,
    render_result,
    resolve_rounding_mode,
    to_cents,
)
from tiptime.cli import run_cli

try:
    _distribution_version = importlib_metadata.version("tip-time")
except importlib_metadata.PackageNotFoundError:
    __version__ = "0+unknown"
else:
    __version__ = _distribution_version or "0+unknown"

__all__ = [
    "__version__",
    "BillResult",
    "ServiceTier",
    "RoundingMode",
    "TIP_PERCENTAGES",
    "DEFAULT_TIER",
    "compute",
    "percentage",
    "resolve_rounding_mode",
    "CalculatorState",
    "parse_cost",
    "parse_tier",
    "parse_rounding",
    "CENT",
    "HUNDRED",
    "PERCENT_STEP",
    "to_cents",
    "fmt_money",
    "fmt_percent",
    "render_result",
    "run_cli",
]

if __name__ == "__main__":
    sys.exit(run_cli())
