import pytest
from fastapi.testclient import TestClient

from english_station.config import Settings
from english_station.main import create_app


@pytest.fixture
def app():
    return create_app(Settings(database_url="sqlite://", jwt_secret="test-secret", log_level="WARNING"))


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db(app, client):
    # client first: tables are created when the app starts
    session = app.state.SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def user(client):
    r = client.post("/api/users", json={
        "email": "learner@example.com",
        "username": "learner",
        "password": "correct-horse",
    })
    assert r.status_code == 201, r.text
    return r.json()


@pytest.fixture
def lesson(client):
    r = client.post("/api/lessons", json={
        "title": "Present Simple",
        "description": "Habits and routines",
        "content": "I work. She works.",
        "level": "A1",
    })
    assert r.status_code == 201, r.text
    return r.json()


def _question(n: int) -> dict:
    return {
        "content": f"Question {n}",
        "type": "multiple-choice",
        "answers": [
            {"content": "right", "isCorrect": True},
            {"content": "wrong a", "isCorrect": False},
            {"content": "wrong b", "isCorrect": False},
        ],
    }


@pytest.fixture
def make_question():
    return _question


@pytest.fixture
def quiz(client, lesson):
    """Three questions, each answered [correct, wrong, wrong]."""
    r = client.post("/api/quiz", json={
        "title": "Present Simple check",
        "lessonId": lesson["id"],
        "timeLimit": 300,
        "questions": [_question(n) for n in range(1, 4)],
    })
    assert r.status_code == 201, r.text
    return r.json()
