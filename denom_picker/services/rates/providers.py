from __future__ import annotations

"""Concrete price feeds and factory.

'fedi-http' reads the Fedi price feed; 'static' returns a configured constant
so the picker runs offline.
"""
import math
from typing import Any, Dict, Optional, Type

import httpx

from denom_picker.core.config import Settings
from denom_picker.core.errors import PriceFeedError
from denom_picker.services.http_client import HttpError, get_json
from .base import PriceFeed


class StaticPriceFeed(PriceFeed):
    def __init__(self, rate: float):
        self._rate = rate

    async def fetch_rate(self) -> float:  # type: ignore[override]
        return self._rate


def extract_rate(data: Any, pair: str = "BTC/USD") -> float:
    """Pull ``prices[pair].rate`` out of a feed document.

    Any deviation from that shape, or a non-positive / non-finite rate, is a
    feed failure.
    """
    try:
        rate = data["prices"][pair]["rate"]
    except (KeyError, TypeError) as e:
        raise PriceFeedError(f"price feed response missing prices.{pair}.rate") from e
    if isinstance(rate, bool) or not isinstance(rate, (int, float)):
        raise PriceFeedError(f"price feed rate for {pair} is not numeric: {rate!r}")
    try:
        rate = float(rate)
    except (OverflowError, ValueError) as e:
        raise PriceFeedError(f"price feed rate for {pair} is out of range") from e
    if not math.isfinite(rate) or rate <= 0:
        raise PriceFeedError(f"price feed rate for {pair} is not positive: {rate!r}")
    return rate


class FediPriceFeed(PriceFeed):
    def __init__(
        self,
        url: str,
        *,
        timeout: float = 5.0,
        retries: int = 0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url
        self._timeout = timeout
        self._retries = retries
        self._transport = transport

    async def fetch_rate(self) -> float:  # type: ignore[override]
        try:
            data = await get_json(
                self.url,
                timeout=self._timeout,
                retries=self._retries,
                transport=self._transport,
            )
        except HttpError as e:
            raise PriceFeedError(str(e)) from e
        return extract_rate(data, self.pair)


_FEED_REGISTRY: Dict[str, Type[PriceFeed]] = {
    "fedi-http": FediPriceFeed,
    "static": StaticPriceFeed,
}


def make_price_feed(
    kind: str,
    settings: Settings,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> PriceFeed:
    cls = _FEED_REGISTRY.get(kind)
    if not cls:
        raise ValueError(f"Unknown price feed kind '{kind}'")
    if cls is StaticPriceFeed:
        return StaticPriceFeed(settings.static_btc_usd_rate)
    return FediPriceFeed(
        str(settings.price_feed_url),
        timeout=settings.http_timeout_seconds,
        retries=settings.http_retries,
        transport=transport,
    )
