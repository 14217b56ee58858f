import json
import os
import sys

from fastapi.testclient import TestClient

"""Smoke script for the live price feed and the startup sequence.

Boots the app against the real feed (PRICE_FEED_KIND=fedi-http), then:
 1. Shows /health (rate presence, preloaded images).
 2. Toggles two denominations and prints the render payload.
 3. Sets a manual rate, then refreshes from the feed (remote should win).
Network failures only show up as rate_available=false; nothing raises.
"""


def run():
    from denom_picker.core.config import Settings
    from denom_picker.main import create_app

    settings = Settings(price_feed_kind="fedi-http", http_retries=1)
    app = create_app(settings_override=settings)
    output = {}
    with TestClient(app) as client:
        output["health"] = client.get("/health").json()
        client.post(f"/api/selection/{2**10}/toggle")
        output["after_toggle"] = client.post(f"/api/selection/{2**20}/toggle").json()
        output["manual"] = client.post("/api/rate/manual", json={"text": "45000"}).json()["rate"]
        output["refresh"] = client.post("/api/rate/refresh").json()["rate"]
    print(json.dumps(output, indent=2))


if __name__ == "__main__":
    sys.path.append(os.getcwd())
    run()
