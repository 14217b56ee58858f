from .base import PriceFeed
from .providers import FediPriceFeed, StaticPriceFeed, extract_rate, make_price_feed
from .rate_provider import RateProvider, RateQuote, parse_rate_text

__all__ = [
    "PriceFeed",
    "FediPriceFeed",
    "StaticPriceFeed",
    "extract_rate",
    "make_price_feed",
    "RateProvider",
    "RateQuote",
    "parse_rate_text",
]
