from fastapi.testclient import TestClient

from backend.app import app
from backend.restaurants.data_store import reset_store

client = TestClient(app)

SF_ORIGIN = {"lat": "37.78", "lng": "-122.42"}


def test_health():
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


# ── Best match ───────────────────────────────────────────────────────────


def test_best_match_without_filters_returns_everything():
    reset_store()
    resp = client.get("/best_match")
    assert resp.status_code == 200
    body = resp.json()
    assert body["count"] == 12
    assert body["message"] == "Matches found."
    assert body["criteria"]["radius_km"] == 25.0
    assert body["criteria"]["tags"] == []
    scores = [item["score"] for item in body["results"]]
    assert scores == sorted(scores, reverse=True)


def test_best_match_within_radius():
    reset_store()
    resp = client.get("/best_match", params={**SF_ORIGIN, "radius_km": "10"})
    body = resp.json()
    assert body["count"] == 2
    assert [item["name"] for item in body["results"]] == ["Bella Italia", "Thai Garden"]
    for item in body["results"]:
        assert item["distance_km"] <= 10
        assert "Within" in item["explanation"]


def test_best_match_filters_by_cuisine():
    reset_store()
    resp = client.get("/best_match", params={"cuisine": "Thai"})
    body = resp.json()
    assert body["count"] == 1
    assert body["results"][0]["name"] == "Thai Garden"
    assert body["results"][0]["distance_km"] is None


def test_best_match_filters_by_price():
    reset_store()
    resp = client.get("/best_match", params={"price_range": "$$$$"})
    body = resp.json()
    assert [item["name"] for item in body["results"]] == ["Le Bistro"]


def test_best_match_tags_need_one_match():
    reset_store()
    resp = client.get("/best_match", params={"tags": "vegan,patio"})
    body = resp.json()
    assert body["count"] == 6
    assert body["criteria"]["tags"] == ["vegan", "patio"]
    assert body["results"][0]["name"] == "Green Leaf Cafe"
    assert body["results"][0]["score"] == 0.755


def test_best_match_accepts_repeated_tag_params():
    reset_store()
    resp = client.get("/best_match", params=[("tags", "vegan"), ("tags", "patio")])
    assert resp.json()["count"] == 6


def test_best_match_filters_by_city():
    reset_store()
    resp = client.get("/best_match", params={"city": "austin"})
    body = resp.json()
    assert {item["name"] for item in body["results"]} == {"Taco Loco", "Burger Palace"}
    assert body["criteria"]["city"] == "austin"


def test_best_match_no_results():
    reset_store()
    resp = client.get("/best_match", params={"cuisine": "Nonexistent"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["count"] == 0
    assert body["results"] == []
    assert body["message"] == "No matches found for the provided criteria."


def test_best_match_non_numeric_radius_uses_default():
    resp = client.get("/best_match", params={"radius_km": "far"})
    assert resp.status_code == 200
    assert resp.json()["criteria"]["radius_km"] == 25.0


def test_best_match_rejects_negative_radius():
    resp = client.get("/best_match", params={**SF_ORIGIN, "radius_km": "-5"})
    assert resp.status_code == 422


def test_best_match_rejects_out_of_range_origin():
    resp = client.get("/best_match", params={"lat": "100", "lng": "0"})
    assert resp.status_code == 422


# ── Directory ────────────────────────────────────────────────────────────


def test_list_restaurants():
    reset_store()
    resp = client.get("/restaurants")
    assert resp.status_code == 200
    body = resp.json()
    assert len(body) == 12
    assert body[0]["name"] == "Bella Italia"


def test_list_restaurants_with_filters():
    reset_store()
    resp = client.get("/restaurants", params={"city": "Austin", "sort": "rating_desc"})
    assert [r["name"] for r in resp.json()] == ["Taco Loco", "Burger Palace"]


def test_list_restaurants_min_rating():
    reset_store()
    resp = client.get("/restaurants", params={"min_rating": "4.6"})
    body = resp.json()
    assert len(body) == 4
    assert all(r["rating"] >= 4.6 for r in body)


def test_list_restaurants_ignores_bad_min_rating():
    reset_store()
    resp = client.get("/restaurants", params={"min_rating": "high"})
    assert len(resp.json()) == 12


def test_summary():
    reset_store()
    resp = client.get("/restaurants/summary")
    assert resp.status_code == 200
    body = resp.json()
    assert body["count_by_cuisine"][0] == {"cuisine": "American", "count": 2}
    assert body["avg_rating_by_city"][0]["city"] == "Boston"


def test_create_restaurant():
    reset_store()
    resp = client.post("/restaurants", json={
        "name": "Noodle Bar",
        "city": "Seattle",
        "state": "WA",
        "cuisine": "Thai",
        "price_range": "$",
        "latitude": "47.61",
        "longitude": "-122.33",
        "rating": 4.2,
        "tags": "vegan, takeout",
    })
    assert resp.status_code == 201
    body = resp.json()
    assert body["id"] == 13
    assert body["latitude"] == 47.61
    assert body["tags"] == ["vegan", "takeout"]

    found = client.get("/best_match", params={"cuisine": "Thai", "tags": "vegan"}).json()
    assert [item["name"] for item in found["results"]] == ["Noodle Bar"]
    reset_store()


def test_create_restaurant_missing_fields():
    resp = client.post("/restaurants", json={"name": "Incomplete"})
    assert resp.status_code == 422


def test_create_restaurant_rejects_bad_rating():
    resp = client.post("/restaurants", json={
        "name": "Too Good",
        "city": "Reno",
        "state": "NV",
        "cuisine": "Thai",
        "price_range": "$",
        "rating": 7,
    })
    assert resp.status_code == 422


def test_update_restaurant():
    reset_store()
    resp = client.put("/restaurants/1", json={
        "name": "Bella Italia",
        "city": "San Francisco",
        "state": "CA",
        "cuisine": "Italian",
        "price_range": "$$",
        "rating": 4.6,
        "tags": ["patio"],
    })
    assert resp.status_code == 200
    body = resp.json()
    assert body["price_range"] == "$$"
    assert body["tags"] == ["patio"]
    assert body["latitude"] is None
    reset_store()


def test_update_unknown_restaurant():
    resp = client.put("/restaurants/999", json={
        "name": "Ghost",
        "city": "Nowhere",
        "state": "NA",
        "cuisine": "Thai",
        "price_range": "$",
    })
    assert resp.status_code == 404
