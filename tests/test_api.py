import pytest

PREFERENCES = {
    "cleanliness_level": 5,
    "noise_level": 1,
    "sleep_schedule": "early_bird",
    "diet_preferences": "no_restrictions",
    "smoking_preferences": "no",
    "pets_preferences": "no",
    "guest_preferences": "rarely",
    "age_range_min": 28,
    "age_range_max": 40,
    "interests": ["yoga", "hiking"],
}


def _as(user_id):
    return {"X-User-Id": str(user_id)}


@pytest.fixture
def registered(api_client):
    ids = []
    for username in ("alice", "bo", "chidi"):
        response = api_client.post("/api/users", json={"username": username, "full_name": username.title()})
        assert response.status_code == 201
        ids.append(response.json()["id"])
    return ids


def test_health(api_client):
    response = api_client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "database": "connected"}


def test_preferences_round_trip(api_client, registered):
    assert api_client.get("/api/roommates/preferences", headers=_as(1)).status_code == 404

    response = api_client.post("/api/roommates/preferences", json=PREFERENCES, headers=_as(1))
    assert response.status_code == 200
    assert response.json()["fingerprint"] == "5-1-early_bird-no-no"

    payload = api_client.get("/api/roommates/preferences", headers=_as(1)).json()
    assert payload["interests"] == ["hiking", "yoga"]
    assert payload["user_id"] == 1

    assert api_client.delete("/api/roommates/preferences", headers=_as(1)).status_code == 204
    assert api_client.get("/api/roommates/preferences", headers=_as(1)).status_code == 404


def test_inverted_age_range_is_a_bad_request(api_client, registered):
    body = dict(PREFERENCES, age_range_min=45, age_range_max=30)
    response = api_client.post("/api/roommates/preferences", json=body, headers=_as(1))
    assert response.status_code == 400
    assert response.json()["error"] == "InvalidPreferences"


def test_out_of_range_level_is_rejected_by_schema(api_client, registered):
    body = dict(PREFERENCES, cleanliness_level=9)
    response = api_client.post("/api/roommates/preferences", json=body, headers=_as(1))
    assert response.status_code == 422


def test_missing_user_header_is_rejected(api_client, registered):
    assert api_client.get("/api/roommates/preferences").status_code == 422


def test_roommates_requires_preferences(api_client, registered):
    response = api_client.get("/api/roommates", headers=_as(1))
    assert response.status_code == 400
    assert response.json()["error"] == "PreconditionMissing"


def test_roommates_are_ranked(api_client, registered):
    api_client.post("/api/roommates/preferences", json=PREFERENCES, headers=_as(1))
    candidate = dict(
        PREFERENCES,
        cleanliness_level=4,
        noise_level=2,
        guest_preferences="sometimes",
        age_range_min=25,
        age_range_max=35,
        interests=["hiking", "reading"],
    )
    api_client.post("/api/roommates/preferences", json=candidate, headers=_as(2))
    api_client.post("/api/roommates/preferences", json=PREFERENCES, headers=_as(3))

    response = api_client.get("/api/roommates", headers=_as(1))
    assert response.status_code == 200
    assert [(c["user"]["username"], c["compatibility"]) for c in response.json()] == [
        ("chidi", 100),
        ("bo", 79),
    ]

    strict = api_client.get("/api/roommates", params={"min_score": 80}, headers=_as(1)).json()
    assert [c["user"]["username"] for c in strict] == ["chidi"]


def test_match_lifecycle(api_client, registered):
    response = api_client.post("/api/roommates/match/2", json={"compatibility_score": 80}, headers=_as(1))
    assert response.status_code == 200
    match = response.json()
    assert match["status"] == "pending"
    assert match["compatibility_score"] == 80

    duplicate = api_client.post("/api/roommates/match/1", json={"compatibility_score": 90}, headers=_as(2))
    assert duplicate.status_code == 409
    assert duplicate.json()["error"] == "DuplicateMatch"

    listed = api_client.get("/api/roommates/matches", headers=_as(2)).json()
    assert [(m["id"], m["other_user"]["username"]) for m in listed] == [(match["id"], "alice")]

    url = f"/api/roommates/matches/{match['id']}/status"
    assert api_client.put(url, json={"status": "accepted"}, headers=_as(3)).status_code == 403
    assert api_client.put(url, json={"status": "maybe"}, headers=_as(2)).status_code == 400

    accepted = api_client.put(url, json={"status": "accepted"}, headers=_as(2))
    assert accepted.status_code == 200
    assert accepted.json()["status"] == "accepted"

    reverted = api_client.put(url, json={"status": "rejected"}, headers=_as(1))
    assert reverted.status_code == 409
    assert reverted.json()["error"] == "InvalidTransition"


def test_match_with_unknown_user(api_client, registered):
    response = api_client.post("/api/roommates/match/77", json={"compatibility_score": 80}, headers=_as(1))
    assert response.status_code == 404


def test_status_update_for_unknown_match(api_client, registered):
    response = api_client.put("/api/roommates/matches/5/status", json={"status": "accepted"}, headers=_as(1))
    assert response.status_code == 404


def test_match_from_unknown_acting_user(api_client, registered):
    response = api_client.post("/api/roommates/match/2", json={"compatibility_score": 80}, headers=_as(99))
    assert response.status_code == 404
    assert response.json()["error"] == "NotFound"

    listed = api_client.get("/api/roommates/matches", headers=_as(2))
    assert listed.status_code == 200
    assert listed.json() == []
