from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal, ROUND_CEILING
from enum import Enum
from typing import Dict, Optional, Union

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


class ServiceTier(Enum):
    POOR = "poor"
    AVERAGE = "average"
    GOOD = "good"
    EXCELLENT = "excellent"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class RoundingMode(Enum):
    NONE = "none"
    ROUND_TIP = "tip"
    ROUND_TOTAL = "total"


TIP_PERCENTAGES: Dict[ServiceTier, Decimal] = {
    ServiceTier.POOR: Decimal("0.10"),
    ServiceTier.AVERAGE: Decimal("0.15"),
    ServiceTier.GOOD: Decimal("0.18"),
    ServiceTier.EXCELLENT: Decimal("0.20"),
}

DEFAULT_TIER = ServiceTier.AVERAGE

Amount = Union[Decimal, int, float, str]


@dataclass(frozen=True)
class BillResult:
    tip: Decimal
    total: Decimal


def percentage(tier: Optional[ServiceTier]) -> Decimal:
    """Tip fraction for ``tier`` (``None`` selects the default tier)."""
    return TIP_PERCENTAGES[tier or DEFAULT_TIER]


def resolve_rounding_mode(round_tip: bool, round_total: bool) -> RoundingMode:
    """Map the two rounding toggles to a single mode.

    Both toggles set is not reachable through ``CalculatorState``; if a caller
    passes it anyway, rounding the tip takes precedence.
    """
    if round_tip:
        return RoundingMode.ROUND_TIP
    if round_total:
        return RoundingMode.ROUND_TOTAL
    return RoundingMode.NONE


def _to_decimal(value: Amount) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _ceiling(value: Decimal) -> Decimal:
    return value.to_integral_value(rounding=ROUND_CEILING)


def compute(
    cost: Optional[Amount],
    tier: Optional[ServiceTier] = DEFAULT_TIER,
    mode: Optional[RoundingMode] = RoundingMode.NONE,
) -> BillResult:
    """Compute the tip and total bill for ``cost``.

    A missing or zero cost gives a zero result with no rounding. Rounding the
    tip recomputes the total from the rounded tip; rounding the total leaves
    the tip as calculated.
    """
    if cost is None:
        return BillResult(tip=ZERO, total=ZERO)
    amount = _to_decimal(cost)
    if amount == ZERO:
        return BillResult(tip=ZERO, total=ZERO)
    if amount < ZERO:
        raise ValueError("Cost of service cannot be negative")

    tip = percentage(tier) * amount
    total = amount + tip

    if mode is RoundingMode.ROUND_TIP:
        tip = _ceiling(tip)
        total = amount + tip
    elif mode is RoundingMode.ROUND_TOTAL:
        total = _ceiling(total)

    logger.debug(
        "cost=%s tier=%s mode=%s -> tip=%s total=%s",
        amount,
        (tier or DEFAULT_TIER).value,
        (mode or RoundingMode.NONE).value,
        tip,
        total,
    )
    return BillResult(tip=tip, total=total)
