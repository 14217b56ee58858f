"""Selection manager: the bounded set of chosen denominations.

Members are distinct catalog values (set semantics), at most ``max_selections``
of them. The total is never stored; it is recomputed from the members.
There is intentionally no bulk clear: a selection empties by removing members
one at a time.
"""

from __future__ import annotations

import logging
from typing import Optional, Set, Tuple

from denom_picker.core.errors import SelectionLimitReached, UnknownDenomination
from denom_picker.models.constants import DEFAULT_MAX_SELECTIONS
from denom_picker.services.catalog import DenominationCatalog

logger = logging.getLogger("denom_picker.selection")


class SelectionManager:
    def __init__(
        self, catalog: DenominationCatalog, max_selections: int = DEFAULT_MAX_SELECTIONS
    ):
        if max_selections < 1:
            raise ValueError("max_selections must be at least 1")
        self._catalog = catalog
        self._max = max_selections
        self._selected: Set[int] = set()

    @property
    def max_selections(self) -> int:
        return self._max

    @property
    def count(self) -> int:
        return len(self._selected)

    @property
    def is_full(self) -> bool:
        return len(self._selected) >= self._max

    def contains(self, value: int) -> bool:
        return value in self._selected

    def _require_known(self, value: int) -> None:
        if not self._catalog.contains(value):
            raise UnknownDenomination(value)

    def add(self, value: int) -> None:
        self._require_known(value)
        if value in self._selected:
            return
        if self.is_full:
            logger.debug("selection limit %d reached, rejecting %d", self._max, value)
            raise SelectionLimitReached(self._max)
        self._selected.add(value)

    def remove(self, value: int) -> None:
        self._require_known(value)
        self._selected.discard(value)

    def toggle(self, value: int) -> bool:
        """Flip membership of ``value``; returns True when it is now selected.

        Raises SelectionLimitReached (state unchanged) when adding to a full
        selection, UnknownDenomination for values outside the catalog.
        """
        self._require_known(value)
        if value in self._selected:
            self._selected.remove(value)
            return False
        self.add(value)
        return True

    def total(self) -> int:
        return sum(self._selected)

    def sorted_values(self) -> Tuple[int, ...]:
        return tuple(sorted(self._selected))

    def export_text(self) -> Optional[str]:
        """Comma-joined ascending msat values, or None when nothing is selected."""
        if not self._selected:
            return None
        return ",".join(str(v) for v in self.sorted_values())
