from __future__ import annotations

from google.api_core import exceptions as google_exceptions


def test_questions_without_key_return_canned_html(client, fake_gemini) -> None:
    response = client.post(
        "/api/v1/quiz/questions",
        json={"topic": "HTML", "difficulty": "medium", "count": 3, "category": "basics"},
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["topic"] == "HTML"
    assert [q["correctAnswer"] for q in payload["questions"]] == [0, 1, 2]
    assert {q["category"] for q in payload["questions"]} == {"basics"}
    assert payload["questions"][0]["question"] == "O que significa a sigla HTML?"
    assert fake_gemini.calls == []


def test_questions_default_request_fields(client) -> None:
    response = client.post("/api/v1/quiz/questions", json={"topic": "Kotlin"})

    assert response.status_code == 200
    questions = response.json()["questions"]
    assert len(questions) == 3
    assert {q["category"] for q in questions} == {"basics"}


def test_questions_use_gemini_when_key_stored(client, fake_gemini) -> None:
    client.put("/api/v1/settings/api-key", json={"apiKey": "secret"})

    response = client.post(
        "/api/v1/quiz/questions",
        json={"topic": "HTML", "count": 2, "category": "theory"},
    )

    assert response.status_code == 200
    questions = response.json()["questions"]
    assert [q["question"] for q in questions] == [
        "Which tag creates a hyperlink?",
        "Which attribute sets an image source?",
    ]
    assert {q["category"] for q in questions} == {"theory"}
    assert fake_gemini.calls[0][0] == "secret"


def test_questions_fall_back_on_server_error(client, run_gemini) -> None:
    run_gemini(google_exceptions.InternalServerError("boom"))
    client.put("/api/v1/settings/api-key", json={"apiKey": "secret"})

    response = client.post("/api/v1/quiz/questions", json={"topic": "css"})

    assert response.status_code == 200
    assert [q["correctAnswer"] for q in response.json()["questions"]] == [2, 1, 2]


def test_questions_reject_unknown_category(client) -> None:
    response = client.post(
        "/api/v1/quiz/questions",
        json={"topic": "HTML", "category": "trivia"},
    )

    assert response.status_code == 422
    assert response.json()["status"] == "error"


def test_score_endpoint(client) -> None:
    questions = client.post("/api/v1/quiz/questions", json={"topic": "javascript"}).json()["questions"]

    response = client.post(
        "/api/v1/quiz/score",
        json={"questions": questions, "selectedAnswers": {"1": 1, "2": 0, "3": 1}},
    )

    assert response.status_code == 200
    assert response.json() == {"correct": 2, "total": 3, "percentage": 67}
