"""Analysis and provider endpoint tests."""

import pytest

from core.insight import OFFLINE_INSIGHT_TEXT


def test_analyze_out_of_range(client, provider):
    resp = client.post(
        "/v1/analyze",
        json={"target": "3.1415", "bound_alpha": "47000", "bound_omega": "53000"},
    )
    assert resp.status_code == 200
    data = resp.json()
    result = data["result"]
    assert result["bound_low"] == 47000
    assert result["bound_high"] == 53000
    assert result["is_contained"] is False
    assert result["range"] == 6000
    assert result["is_integer_valued"] is False
    assert result["progress_percent"] == pytest.approx(-783.28)
    assert result["insight_text"] == provider.text
    assert data["display"]["containment_label"] == "EXTERNALIZED"
    assert data["display"]["display_progress"] == 0.0
    assert data["display"]["progress_text"] == "-783.28"
    assert data["display"]["number_kind"] == "Rational"
    assert data["provider"] == "scripted"
    assert data["model"] == "scripted-1"
    assert provider.calls == 1


def test_analyze_midpoint_numbers(client):
    resp = client.post(
        "/v1/analyze",
        json={"target": 50, "bound_alpha": 100, "bound_omega": 0},
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["result"]["bound_low"] == 0
    assert data["result"]["progress_percent"] == 50.0
    assert data["result"]["is_integer_valued"] is True
    assert data["display"]["progress_text"] == "50.00"
    assert data["display"]["containment_label"] == "INTERNALIZED"
    assert data["display"]["number_kind"] == "Integer"


def test_analyze_degenerate_range(client):
    resp = client.post(
        "/v1/analyze",
        json={"target": "10", "bound_alpha": "10", "bound_omega": "10"},
    )
    result = resp.json()["result"]
    assert result["progress_percent"] == 0
    assert result["range"] == 0
    assert result["is_contained"] is True


def test_analyze_invalid_input(client, provider):
    resp = client.post(
        "/v1/analyze",
        json={"target": "pi", "bound_alpha": "0", "bound_omega": ""},
    )
    assert resp.status_code == 422
    detail = resp.json()["detail"]
    assert detail["code"] == "INVALID_INPUT"
    assert detail["message"] == "Please ensure all inputs are valid numbers."
    assert detail["fields"] == ["target", "bound_omega"]
    assert provider.calls == 0


def test_analyze_missing_field(client):
    resp = client.post("/v1/analyze", json={"target": "1", "bound_alpha": "0"})
    assert resp.status_code == 422


def test_analyze_insight_failure_still_200(client, provider):
    provider.fail = True
    resp = client.post(
        "/v1/analyze",
        json={"target": "5", "bound_alpha": "0", "bound_omega": "10"},
    )
    assert resp.status_code == 200
    result = resp.json()["result"]
    assert result["insight_text"] == OFFLINE_INSIGHT_TEXT
    assert result["progress_percent"] == 50.0
    assert result["is_contained"] is True


def test_analyze_empty_insight(client, provider):
    provider.text = ""
    resp = client.post(
        "/v1/analyze",
        json={"target": "5", "bound_alpha": "0", "bound_omega": "10"},
    )
    assert resp.json()["result"]["insight_text"] == "No insight available."


def test_analyze_numeric_only(client, provider):
    resp = client.post(
        "/v1/analyze",
        json={"target": "5", "bound_alpha": "0", "bound_omega": "10", "include_insight": False},
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["result"]["insight_text"] == ""
    assert data["provider"] is None
    assert provider.calls == 0


def test_providers_listing(client):
    resp = client.get("/v1/providers")
    assert resp.status_code == 200
    data = resp.json()
    assert data["active_provider"] == "scripted"
    assert data["active_model"] == "scripted-1"
    assert {p["id"] for p in data["providers"]} == {"google", "anthropic", "openai"}
    for p in data["providers"]:
        assert p["available"] is (p["reason"] is None)
    assert any(m["model_id"] == "gemini-2.0-flash" for m in data["models"])


def test_analyze_tie_rounds_up(client):
    resp = client.post(
        "/v1/analyze",
        json={"target": "1", "bound_alpha": "0", "bound_omega": "800", "include_insight": False},
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["result"]["progress_percent"] == 0.13
    assert data["display"]["progress_text"] == "0.13"


def test_analyze_huge_bounds_rejected(client, provider):
    resp = client.post(
        "/v1/analyze",
        json={"target": "5", "bound_alpha": "-1e308", "bound_omega": "1e308"},
    )
    assert resp.status_code == 422
    detail = resp.json()["detail"]
    assert detail["code"] == "INVALID_INPUT"
    assert detail["fields"] == ["bound_alpha", "bound_omega"]
    assert provider.calls == 0


def test_analyze_unrepresentable_position_rejected(client):
    resp = client.post(
        "/v1/analyze",
        json={"target": 1e307, "bound_alpha": 0, "bound_omega": 1},
    )
    assert resp.status_code == 422
    assert resp.json()["detail"]["fields"] == ["target"]
