"""Amount formatting and fiat conversion helpers.

Centralized so the catalog, totals and rate display use identical rounding
semantics. All rounding is half-up on the exact value: msat quotients are
divided as Decimals, fiat floats are expanded to their exact binary value
first (``Decimal(float)``), so ``1.125`` rounds to ``1.13`` rather than
banker's ``1.12``.

Significant-figure output follows the classic ``toPrecision`` layout: fixed
notation while the decimal exponent lies in ``[-7, digits)``, otherwise
``d.dde+X``.
"""

from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Tuple

from denom_picker.models.constants import (
    MSAT_PER_BTC,
    SCALE_STEPS,
    SIGNIFICANT_FIGURES,
)


def round2(value: float) -> Decimal:
    return Decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def _round_significant(value: Decimal, digits: int) -> Tuple[Decimal, int]:
    exp = value.adjusted()
    rounded = value.quantize(Decimal(1).scaleb(exp - digits + 1), rounding=ROUND_HALF_UP)
    if rounded.adjusted() != exp:
        # carry into a new leading digit (999.6 -> 1.00e+3)
        exp = rounded.adjusted()
        rounded = rounded.quantize(Decimal(1).scaleb(exp - digits + 1), rounding=ROUND_HALF_UP)
    return rounded, exp


def to_precision(value: Decimal, digits: int = SIGNIFICANT_FIGURES) -> str:
    if digits < 1:
        raise ValueError("digits must be >= 1")
    if value == 0:
        return "0" if digits == 1 else "0." + "0" * (digits - 1)
    rounded, exp = _round_significant(value, digits)
    if exp < -6 or exp >= digits:
        mantissa = rounded.scaleb(-exp).quantize(Decimal(1).scaleb(1 - digits))
        sign = "+" if exp >= 0 else "-"
        return f"{mantissa:f}e{sign}{abs(exp)}"
    return f"{rounded:f}"


def pick_scale(amount: int) -> Tuple[int, str]:
    """Largest scale step whose multiplier does not exceed ``amount``."""
    for multiplier, symbol in reversed(SCALE_STEPS):
        if amount >= multiplier:
            return multiplier, symbol
    return SCALE_STEPS[0]


def format_amount(amount: int) -> str:
    if amount < 0:
        raise ValueError("amount must be non-negative")
    multiplier, symbol = pick_scale(amount)
    quotient = Decimal(amount) / Decimal(multiplier)
    return f"{to_precision(quotient)} {symbol}"


def format_fiat(amount: float, symbol: str = "$") -> str:
    return f"{symbol}{round2(amount):f}"


def to_fiat(amount_msat: int, rate: Optional[float]) -> Optional[float]:
    """Convert msat to fiat at ``rate`` fiat units per BTC; None without a rate."""
    if rate is None or rate <= 0:
        return None
    btc = amount_msat / MSAT_PER_BTC
    return btc * rate


__all__ = [
    "round2",
    "to_precision",
    "pick_scale",
    "format_amount",
    "format_fiat",
    "to_fiat",
]
