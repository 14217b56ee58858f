from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from denom_picker.services.money import round2
from .base import PriceFeed

"""Current BTC/USD rate holder.

Responsibilities:
    - Start with no rate; the picker must render without one.
    - fetch_remote(): best-effort fetch through the configured PriceFeed. Failures
      are logged at WARNING and leave the previous quote untouched.
    - set_manual(text): user-typed rate. Unparsable, non-finite or non-positive
      input is ignored and reported as False.

The quote is replaced wholesale; whichever successful write lands last wins,
regardless of source. Overlapping refreshes are not cancelled: the one that
resolves last wins.
"""

logger = logging.getLogger("denom_picker.rates")

SOURCE_REMOTE = "remote"
SOURCE_MANUAL = "manual"


@dataclass(frozen=True)
class RateQuote:
    rate: float
    source: str
    updated_at: datetime


def parse_rate_text(text: str) -> Optional[float]:
    try:
        value = float(text.strip())
    except (ValueError, AttributeError):
        return None
    if not math.isfinite(value) or value <= 0:
        return None
    return value


class RateProvider:
    def __init__(self, feed: PriceFeed):
        self._feed = feed
        self._quote: Optional[RateQuote] = None

    @property
    def quote(self) -> Optional[RateQuote]:
        return self._quote

    @property
    def rate(self) -> Optional[float]:
        return self._quote.rate if self._quote else None

    def _set(self, rate: float, source: str) -> None:
        self._quote = RateQuote(rate=rate, source=source, updated_at=datetime.now(timezone.utc))

    async def fetch_remote(self) -> Optional[float]:
        try:
            rate = await self._feed.fetch_rate()
        except Exception as e:  # any feed failure leaves the prior quote in place
            logger.warning("failed to fetch BTC price: %s", e)
            return None
        self._set(rate, SOURCE_REMOTE)
        logger.info("BTC/USD rate: %s", rate)
        return rate

    def set_manual(self, text: str) -> bool:
        rate = parse_rate_text(text)
        if rate is None:
            logger.debug("ignoring manual rate input %r", text)
            return False
        self._set(rate, SOURCE_MANUAL)
        return True

    def rate_input_text(self) -> str:
        """Rate as shown in the manual input field (2 decimals), '' without a rate."""
        if self._quote is None:
            return ""
        return f"{round2(self._quote.rate):f}"
