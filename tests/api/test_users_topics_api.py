from __future__ import annotations


def test_health(client) -> None:
    response = client.get("/")

    assert response.status_code == 200
    assert response.json()["status"] == "operational"


def test_register_and_read_user(client) -> None:
    assert client.get("/api/v1/users/me").status_code == 404

    created = client.post("/api/v1/users", json={"name": "Maria José", "email": "mj@example.com"})
    assert created.status_code == 201
    user = created.json()
    assert user["sessionId"].startswith("session-")

    assert client.get("/api/v1/users/me").json() == user


def test_register_validation_error(client) -> None:
    response = client.post("/api/v1/users", json={"name": "R2D2", "email": "r2@example.com"})

    assert response.status_code == 422
    assert response.json() == {
        "status": "error",
        "message": "O nome deve conter apenas letras e espaços.",
        "detail": "name",
    }


def test_topics(client) -> None:
    topics = client.get("/api/v1/topics").json()

    assert [t["id"] for t in topics] == ["html", "css", "javascript", "react", "nodejs"]
    assert topics[0]["difficulty_label"] == "Iniciante"

    assert client.get("/api/v1/topics/react").json()["name"] == "React"
    assert client.get("/api/v1/topics/cobol").status_code == 404


def test_lessons_sorted_by_level(client) -> None:
    levels = [lesson["level"] for lesson in client.get("/api/v1/lessons").json()]

    assert levels == sorted(levels)


def test_theme_preference(client) -> None:
    assert client.get("/api/v1/preferences/theme").json() == {"theme": "light"}
    assert client.post("/api/v1/preferences/theme/toggle").json() == {"theme": "dark"}
    assert client.put("/api/v1/preferences/theme", json={"theme": "light"}).json() == {"theme": "light"}
    assert client.put("/api/v1/preferences/theme", json={"theme": "sepia"}).status_code == 422
