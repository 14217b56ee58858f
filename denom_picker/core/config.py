from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import AnyHttpUrl
from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Application settings loaded from environment with defaults.

    Environment variable mapping follows pydantic's rules (e.g., DEBUG, MAX_SELECTIONS,
    PRICE_FEED_KIND, PRICE_FEED_URL, STATIC_DIR).
    """

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Basic app metadata
    app_name: str = "Ecash Denomination Picker"
    debug: bool = True
    version: str = "0.1.0"

    # Denomination catalog: powers of two in msat, inclusive exponent range.
    # 2^29 msat ~ 537 ksat, closest power of two to a 500 ksat ceiling.
    min_exponent: int = 10
    max_exponent: int = 29
    max_selections: int = 4

    # Price feed
    # Allowed: 'fedi-http' (live BTC/USD feed), 'static' (fixed rate, offline use)
    price_feed_kind: str = "fedi-http"
    price_feed_url: AnyHttpUrl = "https://price-feed.dev.fedibtc.com/latest"
    static_btc_usd_rate: float = 60000.0
    http_timeout_seconds: float = 5.0
    http_retries: int = 0
    fiat_symbol: str = "$"

    # Example note images
    static_dir: Path = PACKAGE_DIR / "static"
    qr_image_subdir: str = "example_notes"
    qr_image_prefix: str = "ecash_"
    qr_image_ext: str = "png"
    qr_index_width: int = 4
    qr_images_dir: Optional[Path] = None  # derived if not provided
    preload_fail_fast: bool = True

    # UI
    toast_duration_seconds: float = 3.0

    def init_post_load(self) -> None:
        """Finalize derived fields and validate ranges."""
        if self.qr_images_dir is None:
            self.qr_images_dir = self.static_dir / self.qr_image_subdir
        allowed = {"fedi-http", "static"}
        if self.price_feed_kind not in allowed:
            raise ValueError(
                f"Unsupported price_feed_kind '{self.price_feed_kind}'. Allowed: {allowed}"
            )
        if self.min_exponent < 0 or self.max_exponent < self.min_exponent:
            raise ValueError(
                f"Invalid denomination exponent range [{self.min_exponent}, {self.max_exponent}]"
            )
        if self.max_selections < 1:
            raise ValueError("max_selections must be at least 1")
        if self.static_btc_usd_rate <= 0:
            raise ValueError("static_btc_usd_rate must be positive")

    @property
    def qr_url_prefix(self) -> str:
        return f"/static/{self.qr_image_subdir}"


@lru_cache
def get_settings() -> Settings:
    settings = Settings()
    settings.init_post_load()
    return settings
