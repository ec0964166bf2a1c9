from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional

import pyperclip
from babel.numbers import format_currency

from .tip_core import BillResult, RoundingMode, ServiceTier, percentage


# --- Money helpers & constants ---
CENT = Decimal("0.01")
HUNDRED = Decimal("100")
PERCENT_STEP = Decimal("0.01")  # display percent with up to 2 decimals

ROUNDING_LABELS = {
    RoundingMode.NONE: "none",
    RoundingMode.ROUND_TIP: "tip rounded up",
    RoundingMode.ROUND_TOTAL: "total rounded up",
}

CSV_COLUMNS = [
    "currency",
    "cost",
    "service",
    "tip_percent",
    "rounding",
    "tip",
    "total",
]


def to_cents(value: Decimal) -> Decimal:
    """Round a Decimal to two fractional digits using ROUND_HALF_UP."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


# --- Formatting ---
def currency_symbol(code: str) -> str:
    code = (code or "USD").upper()
    return {"USD": "$", "EUR": "€", "GBP": "£", "CAD": "C$"}.get(code, "$")


def fmt_money(
    value: Decimal,
    *,
    currency: str = "USD",
    locale: Optional[str] = None,
) -> str:
    """Format money for display.

    - With a ``locale``, use Babel's locale-aware currency formatting
      (e.g., ``en_US`` gives ``$10.00``, ``de_DE`` gives ``10,00 €``).
    - Otherwise, place the currency symbol first and use two decimals with
      comma grouping.
    """
    amount = to_cents(value)
    if locale:
        return format_currency(amount, currency, locale=locale)
    return f"{currency_symbol(currency)}{amount:,.2f}"


def fmt_percent(fraction: Decimal) -> str:
    """Format a fraction (0.15) as a percentage (15), trimming zeros."""
    q = (fraction * HUNDRED).quantize(PERCENT_STEP, rounding=ROUND_HALF_UP)
    return f"{q:.2f}".rstrip("0").rstrip(".")


def render_result(
    *,
    cost: Optional[Decimal],
    tier: ServiceTier,
    mode: RoundingMode,
    result: BillResult,
    currency: str = "USD",
    locale: Optional[str] = None,
) -> str:
    lines: List[str] = []
    lines.append("\n--- Results ---")
    if cost is None:
        lines.append("Cost of service: (none entered)")
    else:
        lines.append(f"Cost of service: {fmt_money(cost, currency=currency, locale=locale)}")
    lines.append(f"Service: {tier.label} ({fmt_percent(percentage(tier))}%)")
    lines.append(f"Rounding: {ROUNDING_LABELS[mode]}")
    lines.append(f"Tip Amount: {fmt_money(result.tip, currency=currency, locale=locale)}")
    lines.append(f"Total Amount: {fmt_money(result.total, currency=currency, locale=locale)}")
    return "\n".join(lines) + "\n"


# --- Data export helpers ---
def results_to_dict(
    *,
    cost: Optional[Decimal],
    tier: ServiceTier,
    mode: RoundingMode,
    result: BillResult,
    currency: str,
) -> dict:
    return {
        "currency": currency,
        "cost": f"{to_cents(cost):.2f}" if cost is not None else "",
        "service": tier.value,
        "tip_percent": fmt_percent(percentage(tier)),
        "rounding": mode.value,
        "tip": f"{to_cents(result.tip):.2f}",
        "total": f"{to_cents(result.total):.2f}",
    }


def dict_to_csv_line(d: dict) -> str:
    return ",".join(str(d.get(k, "")) for k in CSV_COLUMNS)


def copy_to_clipboard(text: str) -> bool:
    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException:
        return False
    return True
