from __future__ import annotations

import base64
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from denom_picker.core.config import Settings
from denom_picker.core.errors import PriceFeedError
from denom_picker.main import create_app
from denom_picker.services.rates import PriceFeed, StaticPriceFeed

# 1x1 transparent PNG
PNG_BYTES = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mNkYAAAAAYAAjCB0C8AAAAASUVORK5CYII="
)


class FailingPriceFeed(PriceFeed):
    def __init__(self) -> None:
        self.calls = 0

    async def fetch_rate(self) -> float:  # type: ignore[override]
        self.calls += 1
        raise PriceFeedError("feed unreachable")


def write_notes(directory: Path, keys=range(5)) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    for k in keys:
        (directory / f"ecash_{k:04d}.png").write_bytes(PNG_BYTES)
    return directory


@pytest.fixture
def static_dir(tmp_path: Path) -> Path:
    root = tmp_path / "static"
    write_notes(root / "example_notes")
    return root


@pytest.fixture
def settings(static_dir: Path) -> Settings:
    s = Settings(static_dir=static_dir, price_feed_kind="static", debug=False)
    s.init_post_load()
    return s


@pytest.fixture
def client(settings: Settings):
    app = create_app(settings_override=settings, price_feed=StaticPriceFeed(50000.0))
    with TestClient(app) as c:
        yield c


@pytest.fixture
def offline_client(settings: Settings):
    app = create_app(settings_override=settings, price_feed=FailingPriceFeed())
    with TestClient(app) as c:
        yield c
