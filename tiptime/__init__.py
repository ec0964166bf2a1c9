from .formats import (
    CENT,
    HUNDRED,
    PERCENT_STEP,
    fmt_money,
    fmt_percent,
    render_result,
    to_cents,
)
from .parsing import parse_cost, parse_rounding, parse_tier
from .profiles import Profile, ProfileError
from .state import CalculatorState
from .tip_core import (
    DEFAULT_TIER,
    TIP_PERCENTAGES,
    BillResult,
    RoundingMode,
    ServiceTier,
    compute,
    percentage,
    resolve_rounding_mode,
)

__all__ = [
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
    "Profile",
    "ProfileError",
]
