from __future__ import annotations

"""Price feed abstraction.

A feed only knows how to obtain one BTC/USD rate. Holding the current rate,
manual overrides and failure policy belong to RateProvider.
"""
from abc import ABC, abstractmethod


class PriceFeed(ABC):
    pair: str = "BTC/USD"

    @abstractmethod
    async def fetch_rate(self) -> float:
        """Return USD per 1 BTC; raise PriceFeedError on any failure."""
        raise NotImplementedError
