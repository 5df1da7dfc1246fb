"""
Tests for the HTTP endpoints.
"""
from moodjournal.api.dependencies import get_image_chain
from moodjournal.main import app
from moodjournal.tests.helpers import failing_provider, make_chain


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}
    assert client.get("/").status_code == 200


def test_roster_is_ordered_by_display_name(client):
    response = client.get("/api/users")
    assert response.status_code == 200
    assert [user["username"] for user in response.json()] == ["ana", "luis"]
    assert response.json()[0]["emoji"] == "🌻"


def test_get_user(client):
    assert client.get("/api/users/ana").json()["display_name"] == "Ana"
    assert client.get("/api/users/nobody").status_code == 404


def test_submit_mood_without_note(client):
    response = client.post("/api/moods", json={"mood_type": "happy"}, headers={"X-Username": "ana"})

    assert response.status_code == 201
    data = response.json()
    assert data["mood_type"] == "happy"
    assert data["note"] is None
    assert data["image_url"] is None
    assert data["profile"] == "full"


def test_submit_mood_with_note_returns_image(client):
    response = client.post(
        "/api/moods",
        json={"mood_type": "sad", "note": "trabajo muy cansado"},
        headers={"X-Username": "ana"},
    )

    assert response.status_code == 201
    data = response.json()
    assert data["image_url"] == "https://img.example/cat.png"
    assert data["image_model"] == "stub-model"
    assert "trabajo muy cansado" in data["image_prompt"]
    assert data["mood_message"]


def test_submit_invalid_mood(client):
    response = client.post("/api/moods", json={"mood_type": "angry"}, headers={"X-Username": "ana"})
    assert response.status_code == 422
    assert "Invalid mood type" in response.json()["detail"]


def test_submit_unknown_user(client):
    response = client.post("/api/moods", json={"mood_type": "happy"}, headers={"X-Username": "nobody"})
    assert response.status_code == 404


def test_submit_requires_username(client):
    response = client.post("/api/moods", json={"mood_type": "happy"})
    assert response.status_code == 401


def test_history_after_submissions(client):
    headers = {"X-Username": "ana"}
    for mood_type in ("happy", "neutral", "sad"):
        client.post("/api/moods", json={"mood_type": mood_type}, headers=headers)

    response = client.get("/api/moods/history", headers=headers)

    assert response.status_code == 200
    assert [entry["mood_type"] for entry in response.json()] == ["sad", "neutral", "happy"]
    assert client.get("/api/moods/history", headers={"X-Username": "luis"}).json() == []


def test_history_validation(client):
    headers = {"X-Username": "ana"}
    assert client.get("/api/moods/history", params={"limit": 0}, headers=headers).status_code == 400
    assert client.get("/api/moods/history").status_code == 401
    assert client.get("/api/moods/history", headers={"X-Username": "nobody"}).status_code == 404


def test_chart(client):
    headers = {"X-Username": "ana"}
    client.post("/api/moods", json={"mood_type": "happy"}, headers=headers)
    client.post("/api/moods", json={"mood_type": "happy", "note": "comida rica"}, headers=headers)

    response = client.get("/api/moods/chart", headers=headers)

    assert response.status_code == 200
    data = response.json()
    assert len(data["points"]) == 1
    assert data["points"][0]["happy"] == 2
    assert data["points"][0]["total"] == 2
    assert len(data["entries"]) == 2


def test_chart_rejects_inverted_range(client):
    response = client.get(
        "/api/moods/chart",
        params={"date_from": "2026-10-10", "date_to": "2026-10-01"},
        headers={"X-Username": "ana"},
    )
    assert response.status_code == 400


def test_generate_image(client):
    response = client.post("/generate-image", json={"note": "salí a correr", "moodType": "happy"})

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["imageUrl"] == "https://img.example/cat.png"
    assert data["model"] == "stub-model"
    assert "salí a correr" in data["prompt"]


def test_generate_image_placeholder_when_providers_fail(client):
    app.dependency_overrides[get_image_chain] = lambda: make_chain(failing_provider("a"))

    response = client.post("/generate-image", json={"note": "lluvia", "moodType": "sad"})

    assert response.status_code == 200
    assert response.json()["success"] is True
    assert response.json()["model"] == "placeholder"
    assert response.json()["imageUrl"].startswith("https://picsum.photos/seed/")


def test_generate_image_rejects_malformed_input(client):
    assert client.post("/generate-image", json={"moodType": "happy"}).status_code == 400
    assert client.post("/generate-image", json={"note": "hola"}).status_code == 400
    assert client.post("/generate-image", json={"note": "hola", "moodType": "angry"}).status_code == 400

    response = client.post("/generate-image", content=b"not json", headers={"content-type": "application/json"})
    assert response.status_code == 400
    assert "error" in response.json()
