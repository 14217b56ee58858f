"""Denomination catalog.

Denominations are powers of two in msat. The default exponent range [10, 29]
starts at 1024 msat (smallest note) and stops at 2^29 msat ~ 537 ksat, the
power of two closest to a 500 ksat ceiling.
"""

from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Tuple

from denom_picker.models.constants import DEFAULT_MAX_EXPONENT, DEFAULT_MIN_EXPONENT
from denom_picker.models.denomination import Denomination
from denom_picker.services.money import format_amount


def generate_denominations(
    min_exponent: int = DEFAULT_MIN_EXPONENT, max_exponent: int = DEFAULT_MAX_EXPONENT
) -> List[Denomination]:
    if min_exponent < 0 or max_exponent < min_exponent:
        raise ValueError(f"invalid exponent range [{min_exponent}, {max_exponent}]")
    denominations: List[Denomination] = []
    for power in range(min_exponent, max_exponent + 1):
        amount = 2**power
        denominations.append(
            Denomination(value=amount, display=format_amount(amount), power=power)
        )
    return denominations


class DenominationCatalog:
    """Read-only, ascending set of selectable denominations."""

    def __init__(self, denominations: List[Denomination]):
        self._items: Tuple[Denomination, ...] = tuple(
            sorted(denominations, key=lambda d: d.value)
        )
        self._by_value: Dict[int, Denomination] = {d.value: d for d in self._items}
        if len(self._by_value) != len(self._items):
            raise ValueError("duplicate denomination values")

    @classmethod
    def generate(
        cls, min_exponent: int = DEFAULT_MIN_EXPONENT, max_exponent: int = DEFAULT_MAX_EXPONENT
    ) -> "DenominationCatalog":
        return cls(generate_denominations(min_exponent, max_exponent))

    def __iter__(self) -> Iterator[Denomination]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def values(self) -> List[int]:
        return [d.value for d in self._items]

    def contains(self, value: int) -> bool:
        return value in self._by_value

    def get(self, value: int) -> Optional[Denomination]:
        return self._by_value.get(value)
