from __future__ import annotations

from fastapi.testclient import TestClient

from riderbuilder.app import app
from riderbuilder.recommendations.data_store import get_product

client = TestClient(app)


def test_health():
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_metadata():
    body = client.get("/metadata").json()
    assert body["pattern_library_version"] == "2.0"
    assert "vegan" in body["preferences"]
    assert "notter" in body["allergens"]
    assert "kaffe" in body["product_categories"]


# ── Parsing ──────────────────────────────────────────────────────────────


class TestParseEndpoints:
    def test_parse(self):
        resp = client.post("/parse", json={"text": "Vi är 5 personer, lyx premium"})
        assert resp.status_code == 200
        body = resp.json()
        assert body["people_count"] == 5
        assert body["budget_tier"] == 3

    def test_parse_rejects_empty_text(self):
        assert client.post("/parse", json={"text": ""}).status_code == 422

    def test_parse_rejects_blank_text(self):
        assert client.post("/parse", json={"text": "   "}).status_code == 422

    def test_parse_with_confidence(self):
        resp = client.post("/parse/confidence", json={"text": "Vi är 4 personer, vegan"})
        assert resp.status_code == 200
        body = resp.json()
        assert body["rider"]["preferences"] == ["vegan"]
        assert 0.0 < body["confidence"]["overall"] <= 1.0

    def test_toggle(self):
        resp = client.post("/rider/toggle", json={
            "rider": {"preferences": ["vegan", "eko"]},
            "field": "preferences",
            "tag": "vegan",
        })
        assert resp.status_code == 200
        assert resp.json()["preferences"] == ["eko"]

    def test_toggle_rejects_scalar_field(self):
        resp = client.post("/rider/toggle", json={
            "rider": {},
            "field": "people_count",
            "tag": "3",
        })
        assert resp.status_code == 422


# ── Recommendations ──────────────────────────────────────────────────────


class TestRecommendationEndpoint:
    def test_respects_limit_and_ordering(self):
        rider = client.post("/parse", json={"text": "kaffe och energi, gärna fokus"}).json()
        resp = client.post("/recommendations", json={"rider": rider, "limit": 3})
        assert resp.status_code == 200
        body = resp.json()
        assert 0 < len(body["recommendations"]) <= 3
        assert body["total_candidates"] >= len(body["recommendations"])
        scores = [item["score"] for item in body["recommendations"]]
        assert scores == sorted(scores, reverse=True)
        assert all(s > 0 for s in scores)

    def test_excludes_allergen_conflicts(self):
        resp = client.post("/recommendations", json={
            "rider": {"allergens_avoid": ["mjolk"]},
            "limit": 50,
        })
        for item in resp.json()["recommendations"]:
            assert "mjolk" not in item["product"]["allergens"]

    def test_rejects_bad_limit(self):
        resp = client.post("/recommendations", json={"rider": {}, "limit": 0})
        assert resp.status_code == 422

    def test_rejects_bad_people_count(self):
        resp = client.post("/recommendations", json={"rider": {"people_count": 100}})
        assert resp.status_code == 422


# ── Celebrities ──────────────────────────────────────────────────────────


class TestCelebrityEndpoints:
    def test_list(self):
        body = client.get("/celebrities").json()
        assert len(body) == 3
        assert "parsed_rider" not in body[0]

    def test_detail_with_suggested_products(self):
        resp = client.get("/celebrities/skogsduon")
        assert resp.status_code == 200
        ids = [p["id"] for p in resp.json()["suggested_products"]]
        assert ids == ["p015", "p016", "p023", "p025"]

    def test_unknown_celebrity(self):
        assert client.get("/celebrities/nobody").status_code == 404

    def test_match_empty_rider_gets_baseline(self):
        body = client.post("/celebrities/match", json={"rider": {}}).json()
        assert [m["score"]["total"] for m in body["matches"]] == [30, 30, 30]
        assert body["best_match"]["celebrity_id"] == "nattsangerskan"

    def test_match_prefers_similar_rider(self):
        rider = {"preferences": ["vegan", "eko"], "vibe_tags": ["lugn"]}
        body = client.post("/celebrities/match", json={"rider": rider}).json()
        assert body["best_match"]["celebrity_id"] == "skogsduon"


# ── Cart ─────────────────────────────────────────────────────────────────


class TestCartEndpoints:
    def test_empty_balance(self):
        body = client.post("/cart/balance", json={"items": []}).json()
        assert body == {"snacks": 0, "drinks": 0, "protein": 0, "veg": 0}

    def test_balance_with_quantities(self):
        resp = client.post("/cart/balance", json={
            "items": [{"product_id": "p008", "quantity": 3}, {"product_id": "p004"}],
        })
        assert resp.status_code == 200
        assert resp.json() == {"snacks": 75, "drinks": 25, "protein": 0, "veg": 0}

    def test_unknown_product(self):
        resp = client.post("/cart/balance", json={"items": [{"product_id": "zzz"}]})
        assert resp.status_code == 404

    def test_card(self):
        resp = client.post("/card", json={
            "rider": {"vibe_tags": ["glam"]},
            "items": [
                {"product_id": "p009"},
                {"product_id": "p027"},
                {"product_id": "p026", "quantity": 2},
            ],
        })
        assert resp.status_code == 200
        body = resp.json()
        assert body["allergens"] == ["jordnotter", "mjolk", "notter"]
        assert body["people_count"] == 1
        assert body["budget_tier"] == 2
        assert [p["id"] for p in body["products"]] == ["p009", "p027", "p026"]
        assert body["best_match"]["celebrity_id"] == "nattsangerskan"
        assert get_product("p026").allergens == ["notter"]
