from __future__ import annotations

from fastapi.testclient import TestClient

from denom_picker.core.config import Settings
from denom_picker.main import create_app
from denom_picker.services.rates import StaticPriceFeed


def test_startup_fetches_rate_and_preloads_images(client):
    health = client.get("/health").json()
    assert health["status"] == "ok"
    assert health["started"] is True
    assert health["rate_available"] is True
    assert health["cached_images"] == [0, 1, 2, 3, 4]


def test_denominations_listing(client):
    resp = client.get("/api/denominations")
    assert resp.status_code == 200
    items = resp.json()
    assert len(items) == 20
    assert items[0] == {"value": 1024, "display": "1.02 sat", "power": 10, "selected": False}
    assert items[-1]["value"] == 2**29


def test_initial_state(client):
    state = client.get("/api/state").json()
    assert state["total"]["total_display"] == "0.00 msat"
    assert state["total"]["fiat_display"] is None
    assert state["selection"]["placeholder"] == "No denominations selected"
    assert state["selection"]["can_copy"] is False
    assert state["preview"]["src"] == "/static/example_notes/ecash_0000.png"
    assert state["rate"]["rate"] == 50000.0
    assert state["rate"]["input_text"] == "50000.00"


def test_toggle_and_limit_scenario(client):
    for p in (10, 11, 12, 13):
        body = client.post(f"/api/selection/{2**p}/toggle").json()
        assert body["applied"] is True
    assert body["total"]["count"] == 4
    total_before = body["total"]["total_msat"]

    rejected = client.post(f"/api/selection/{2**14}/toggle").json()
    assert rejected["applied"] is False
    assert rejected["selected"] is False
    assert rejected["total"]["count"] == 4
    assert rejected["total"]["total_msat"] == total_before
    assert rejected["toasts"] == [
        {
            "message": "You can only select up to 4 denominations.",
            "level": "warning",
            "duration_seconds": 3.0,
        }
    ]
    assert rejected["selection"]["export_text"] == "1024,2048,4096,8192"
    assert rejected["preview"]["info"] == "4 denominations selected"


def test_toggle_twice_restores_state(client):
    client.post("/api/selection/1024/toggle")
    body = client.post("/api/selection/1024/toggle").json()
    assert body["selected"] is False
    assert body["total"]["total_msat"] == 0


def test_toggle_unknown_value_is_404(client):
    resp = client.post("/api/selection/1000/toggle")
    assert resp.status_code == 404
    assert resp.json()["error"] == "unknown_denomination"


def test_toggle_non_integer_is_422(client):
    resp = client.post("/api/selection/abc/toggle")
    assert resp.status_code == 422
    assert resp.json()["error"] == "validation_error"


def test_manual_rate(client):
    client.post(f"/api/selection/{2**20}/toggle")
    ok = client.post("/api/rate/manual", json={"text": "45000"}).json()
    assert ok["accepted"] is True
    assert ok["rate"]["rate"] == 45000.0
    assert ok["rate"]["source"] == "manual"
    assert ok["total"]["fiat_display"] == "$0.47"

    bad = client.post("/api/rate/manual", json={"text": "abc"}).json()
    assert bad["accepted"] is False
    assert bad["rate"]["rate"] == 45000.0


def test_long_manual_rate_text_is_ignored_not_rejected(client):
    client.post("/api/rate/manual", json={"text": "45000"})
    for text in ("9" * 400, "x" * 200):
        resp = client.post("/api/rate/manual", json={"text": text})
        assert resp.status_code == 200
        assert resp.json()["accepted"] is False
        assert resp.json()["rate"]["rate"] == 45000.0


def test_refresh_rate_overwrites_manual(client):
    client.post("/api/rate/manual", json={"text": "45000"})
    body = client.post("/api/rate/refresh").json()
    assert body["refreshed"] is True
    assert body["rate"]["rate"] == 50000.0
    assert body["rate"]["source"] == "remote"


def test_copy_export(client):
    empty = client.post("/api/export/copy", json={"primary_ok": True}).json()
    assert empty["copied"] is False
    assert empty["clipboard_text"] is None

    client.post(f"/api/selection/{2**15}/toggle")
    client.post(f"/api/selection/{2**10}/toggle")
    body = client.post("/api/export/copy", json={"primary_ok": True}).json()
    assert body["copied"] is True
    assert body["clipboard_text"] == "1024,32768"
    assert body["toasts"][0]["message"] == "Values copied to clipboard!"
    assert body["toasts"][0]["level"] == "success"


def test_copy_export_legacy_fallback_still_reports_success(client):
    client.post("/api/selection/1024/toggle")
    body = client.post(
        "/api/export/copy", json={"primary_ok": False, "legacy_ok": True}
    ).json()
    assert body["copied"] is True
    assert body["clipboard_text"] == "1024"
    assert body["toasts"] == [
        {"message": "Values copied to clipboard!", "level": "success", "duration_seconds": 3.0}
    ]


def test_copy_export_both_paths_failed_shows_error(client):
    client.post("/api/selection/1024/toggle")
    body = client.post(
        "/api/export/copy", json={"primary_ok": False, "legacy_ok": False}
    ).json()
    assert body["copied"] is False
    assert body["clipboard_text"] is None
    assert body["toasts"][0]["level"] == "error"
    assert body["toasts"][0]["message"] == "Could not copy values to clipboard."


def test_copy_export_requires_outcome(client):
    resp = client.post("/api/export/copy")
    assert resp.status_code == 422


def test_offline_startup_renders_without_rate(offline_client):
    assert offline_client.get("/health").json()["rate_available"] is False
    body = offline_client.post("/api/selection/1024/toggle").json()
    assert body["total"]["fiat_display"] is None
    refreshed = offline_client.post("/api/rate/refresh").json()
    assert refreshed["refreshed"] is False


def test_missing_images_fall_back_to_static_paths(tmp_path):
    settings = Settings(static_dir=tmp_path / "empty", price_feed_kind="static", debug=False)
    app = create_app(settings_override=settings, price_feed=StaticPriceFeed(1.0))
    with TestClient(app) as c:
        assert c.get("/health").json()["cached_images"] == []
        state = c.get("/api/state").json()
        assert state["preview"]["src"] == "/static/example_notes/ecash_0000.png"


def test_ui_page_renders(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert "denominationsGrid" in resp.text
    assert "537 ksat" in resp.text
    assert "No denominations selected" in resp.text


def test_static_note_image_served(client):
    resp = client.get("/static/example_notes/ecash_0003.png")
    assert resp.status_code == 200
    assert resp.content.startswith(b"\x89PNG")


def test_unknown_route_json_404(client):
    resp = client.get("/nope")
    assert resp.status_code == 404
    assert resp.json()["error"] == "not_found"


def test_request_id_header(client):
    assert client.get("/health").headers.get("X-Request-ID")
