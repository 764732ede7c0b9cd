# tests/test_api.py
import pytest
from fastapi.testclient import TestClient

from feasibility.campaigns.state import MemoryStore
from feasibility.campaigns.workspace import Workspace
from feasibility.main import app
from feasibility.routers.campaigns import get_workspace


@pytest.fixture
def ws():
    return Workspace(MemoryStore())


@pytest.fixture
def client(ws):
    app.dependency_overrides[get_workspace] = lambda: ws
    yield TestClient(app)
    app.dependency_overrides.clear()


def _fill_reference(client, card_id):
    for field, value in [("incentive_per_passenger", "50"), ("passenger_growth_percent", "20")]:
        client.patch(f"/api/campaigns/{card_id}/parameters", json={"field": field, "value": value})
    for field, value in [("base_audience", "10.000"), ("audience_share_percent", "10"),
                         ("weekly_conversion_rate_percent", "5")]:
        r = client.patch(f"/api/campaigns/{card_id}/rows/1", json={"field": field, "value": value})
    return r


def test_list_and_add(client):
    cards = client.get("/api/campaigns").json()
    assert len(cards) == 1 and cards[0]["kind"] == "oneshot"

    r = client.post("/api/campaigns", json={"kind": "milestone"})
    assert r.status_code == 201
    view = r.json()
    assert view["kind"] == "milestone"
    assert view["rows"][0]["reward_tier_count"] == 3
    assert [c["kind"] for c in client.get("/api/campaigns").json()] == ["oneshot", "milestone"]


def test_edits_return_recomputed_view(client, ws):
    card_id = ws.cards[0].id
    view = _fill_reference(client, card_id).json()
    assert view["rows"][0]["budget"] == pytest.approx(3000)
    assert view["totals"]["cost_per_inc_passenger"] == pytest.approx(300)

    shown = client.get(f"/api/campaigns/{card_id}/view", params={"formatted": True}).json()
    assert shown["totals"]["budget"] == "3.000"


def test_snapshot_endpoint(client, ws):
    card_id = ws.cards[0].id
    client.put(f"/api/campaigns/{card_id}/title", json={"text": "Bahar"})
    snap = client.get(f"/api/campaigns/{card_id}").json()
    assert snap["title"] == "Bahar"
    assert set(snap) == {"id", "kind", "title", "parameters", "rows"}


def test_rows(client, ws):
    card_id = ws.cards[0].id
    view = client.delete(f"/api/campaigns/{card_id}/rows/last").json()
    assert len(view["rows"]) == 1
    view = client.post(f"/api/campaigns/{card_id}/rows").json()
    assert [r["id"] for r in view["rows"]] == [1, 2]


def test_milestone_tier_fields(client):
    card_id = client.post("/api/campaigns", json={"kind": "milestone"}).json()["card_id"]
    view = client.patch(f"/api/campaigns/{card_id}/parameters",
                        json={"field": "reward_tier_count", "value": "9"}).json()
    assert view["rows"][0]["conversion_rates"] == ["", "", "", "", ""]
    r = client.patch(f"/api/campaigns/{card_id}/rows/1",
                     json={"field": "conversion_rate", "value": "12", "tier": 5})
    assert r.json()["rows"][0]["conversion_rates"][4] == "12"


def test_errors(client, ws):
    card_id = ws.cards[0].id
    assert client.get("/api/campaigns/nope/view").status_code == 404
    assert client.patch("/api/campaigns/nope/parameters", json={"field": "x", "value": "1"}).status_code == 404
    r = client.patch(f"/api/campaigns/{card_id}/parameters", json={"field": "reward_amount", "value": "1"})
    assert r.status_code == 422
    r = client.patch(f"/api/campaigns/{card_id}/rows/42", json={"field": "base_audience", "value": "1"})
    assert r.status_code == 422


def test_delete_card(client, ws):
    card_id = ws.cards[0].id
    assert client.delete(f"/api/campaigns/{card_id}").status_code == 204
    assert client.get(f"/api/campaigns/{card_id}").status_code == 404
    assert client.get("/api/campaigns").json() == []


def test_import_legacy(client):
    blob = {"title": "Eski", "params": {"incPassengerFC": "50", "passGrowth": "20"},
            "rows": [{"id": 1, "baseAudience": "10.000", "crPerWeek": "5", "share": "10", "avgTrips": "2"}]}
    r = client.post("/api/campaigns/import", json={"kind": "oneshot", "snapshot": blob})
    assert r.status_code == 201
    assert r.json()["totals"]["cost_per_inc_trip"] == pytest.approx(150)


def test_stateless_calc(client):
    body = {"parameters": {"reward_tier_count": "2", "reward_amounts": ["20", "30"],
                           "passenger_growth_percent": "10"},
            "rows": [{"id": 1, "base_audience": "5.000", "audience_share_percent": "50",
                      "conversion_rates": ["10", "5"], "avg_trips_per_two_weeks": "4"}]}
    view = client.post("/api/calc/milestone", json=body).json()
    assert view["totals"]["spend"] == pytest.approx(5625)
    shown = client.post("/api/calc/milestone", params={"formatted": True}, json=body).json()
    assert shown["rows"][0]["cr_combined"] == "15,0000"
    assert client.post("/api/calc/oneshot", json={"rows": "nope"}).status_code == 422


def test_exports(client, ws):
    card_id = ws.cards[0].id
    _fill_reference(client, card_id)
    r = client.get(f"/api/campaigns/{card_id}/export/csv")
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/csv")
    assert "TOTAL" in r.text
    r = client.get(f"/api/campaigns/{card_id}/export/pptx")
    assert r.status_code == 200
    assert r.content[:2] == b"PK"
    assert client.get("/api/campaigns/nope/export/csv").status_code == 404


def test_meta(client):
    body = client.get("/meta").json()
    assert body["version"]
    assert client.get("/health").json() == {"ok": True}
