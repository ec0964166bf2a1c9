from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .tip_core import DEFAULT_TIER, Amount, BillResult, RoundingMode, ServiceTier, compute


@dataclass
class CalculatorState:
    """Selections that persist between calculations on the calculator screen.

    The two rounding switches are views over a single ``RoundingMode``, so
    turning one on always turns the other off.
    """

    tier: ServiceTier = DEFAULT_TIER
    rounding: RoundingMode = RoundingMode.NONE

    @property
    def round_tip(self) -> bool:
        return self.rounding is RoundingMode.ROUND_TIP

    @property
    def round_total(self) -> bool:
        return self.rounding is RoundingMode.ROUND_TOTAL

    def set_round_tip(self, enabled: bool) -> None:
        if enabled:
            self.rounding = RoundingMode.ROUND_TIP
        elif self.round_tip:
            self.rounding = RoundingMode.NONE

    def set_round_total(self, enabled: bool) -> None:
        if enabled:
            self.rounding = RoundingMode.ROUND_TOTAL
        elif self.round_total:
            self.rounding = RoundingMode.NONE

    def toggle_round_tip(self) -> None:
        self.set_round_tip(not self.round_tip)

    def toggle_round_total(self) -> None:
        self.set_round_total(not self.round_total)

    def select_tier(self, tier: Optional[ServiceTier]) -> None:
        self.tier = tier or DEFAULT_TIER

    def calculate(self, cost: Optional[Amount]) -> BillResult:
        return compute(cost, self.tier, self.rounding)
