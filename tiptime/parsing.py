from __future__ import annotations

import logging
import re
from decimal import Decimal, InvalidOperation
from typing import Dict, Optional

from babel import Locale, UnknownLocaleError

from .tip_core import DEFAULT_TIER, TIP_PERCENTAGES, RoundingMode, ServiceTier

logger = logging.getLogger(__name__)

CURRENCY_SYMBOLS = "$€£"
CURRENCIES = ["USD", "EUR", "GBP", "CAD"]

# Plain digits or comma-grouped thousands, with an optional fractional part.
_COST_RE = re.compile(r"^(?:\d{1,3}(?:,\d{3})+|\d*)(?:\.\d*)?$")

TIER_MENU: Dict[str, ServiceTier] = {
    "1": ServiceTier.POOR,
    "2": ServiceTier.AVERAGE,
    "3": ServiceTier.GOOD,
    "4": ServiceTier.EXCELLENT,
}

ROUNDING_ALIASES: Dict[str, RoundingMode] = {
    "none": RoundingMode.NONE,
    "off": RoundingMode.NONE,
    "no": RoundingMode.NONE,
    "n": RoundingMode.NONE,
    "tip": RoundingMode.ROUND_TIP,
    "t": RoundingMode.ROUND_TIP,
    "round-tip": RoundingMode.ROUND_TIP,
    "total": RoundingMode.ROUND_TOTAL,
    "bill": RoundingMode.ROUND_TOTAL,
    "b": RoundingMode.ROUND_TOTAL,
    "round-total": RoundingMode.ROUND_TOTAL,
}


def parse_cost(text: Optional[str]) -> Optional[Decimal]:
    """Parse a cost of service, returning ``None`` for anything unusable.

    Accepts an optional leading currency symbol and comma-grouped thousands
    (``$1,234.56``); signs, exponents and stray characters are rejected.
    """
    if text is None:
        return None
    s = text.strip()
    if s[:1] and s[:1] in CURRENCY_SYMBOLS:
        s = s[1:].lstrip()
    if not any(ch.isdigit() for ch in s) or not _COST_RE.match(s):
        if s:
            logger.debug("Ignoring unusable cost %r", text)
        return None
    try:
        return Decimal(s.replace(",", ""))
    except InvalidOperation:
        logger.debug("Ignoring non-numeric cost %r", text)
        return None


def parse_currency(text: Optional[str]) -> str:
    code = (text or "").strip().upper()
    if code not in CURRENCIES:
        raise ValueError(f"Unsupported currency {text!r}; choose one of {', '.join(CURRENCIES)}")
    return code


def parse_locale(text: Optional[str]) -> str:
    """Validate a locale identifier, accepting ``en_US`` and ``en-US``."""
    s = (text or "").strip().replace("-", "_")
    try:
        return str(Locale.parse(s))
    except (ValueError, TypeError, UnknownLocaleError) as exc:
        raise ValueError(f"Unknown locale {text!r}") from exc


def _tier_from_percent(raw: str) -> Optional[ServiceTier]:
    try:
        value = Decimal(raw.rstrip("%").strip())
    except InvalidOperation:
        return None
    if not value.is_finite():
        return None
    if value >= Decimal("1"):
        value = value / Decimal("100")
    for tier, fraction in TIP_PERCENTAGES.items():
        if fraction == value:
            return tier
    return None


def parse_tier(text: Optional[str]) -> ServiceTier:
    s = (text or "").strip().lower()
    if not s:
        return DEFAULT_TIER
    if s in TIER_MENU:
        return TIER_MENU[s]
    for tier in ServiceTier:
        if s == tier.value:
            return tier
    tier = _tier_from_percent(s)
    if tier is not None:
        return tier
    raise ValueError("Choose a service tier: poor, average, good or excellent")


def parse_rounding(text: Optional[str]) -> RoundingMode:
    s = (text or "").strip().lower().replace("_", "-")
    if not s:
        return RoundingMode.NONE
    try:
        return ROUNDING_ALIASES[s]
    except KeyError:
        raise ValueError("Choose a rounding option: none, tip or total") from None
