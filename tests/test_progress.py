from english_station.progress.models import Progress


def _upsert(client, user, lesson, **fields):
    return client.post("/api/progress", json={"userId": user["id"], "lessonId": lesson["id"], **fields})


def test_upsert_creates_then_updates(client, db, user, lesson):
    r1 = _upsert(client, user, lesson, completed=False, progress=40)
    assert r1.status_code == 201
    r2 = _upsert(client, user, lesson, completed=True, progress=100)
    assert r2.status_code == 200

    assert r1.json()["id"] == r2.json()["id"]
    assert db.query(Progress).count() == 1

    row = db.query(Progress).one()
    assert row.completed is True
    assert row.progress == 100


def test_completed_without_progress_is_accepted(client, user, lesson):
    r = _upsert(client, user, lesson, completed=True, progress=0)
    assert r.status_code == 201
    assert r.json()["completed"] is True
    assert r.json()["progress"] == 0


def test_progress_must_be_a_percentage(client, user, lesson):
    r = _upsert(client, user, lesson, progress=101)
    assert r.status_code == 400
    assert "error" in r.json()


def test_upsert_for_missing_lesson(client, db, user):
    r = client.post("/api/progress", json={"userId": user["id"], "lessonId": 999, "progress": 10})
    assert r.status_code == 404
    assert r.json() == {"error": "Lesson not found"}
    assert db.query(Progress).count() == 0


def test_upsert_for_missing_user(client, lesson):
    r = client.post("/api/progress", json={"userId": "ghost", "lessonId": lesson["id"]})
    assert r.status_code == 404
    assert r.json() == {"error": "User not found"}


def test_listings(client, user, lesson):
    _upsert(client, user, lesson, progress=50)

    everything = client.get("/api/progress").json()
    assert len(everything) == 1
    assert everything[0]["user"] == {"id": user["id"], "username": "learner"}
    assert everything[0]["lesson"]["title"] == "Present Simple"

    mine = client.get(f"/api/progress/user/{user['id']}").json()
    assert [p["lesson"]["id"] for p in mine] == [lesson["id"]]

    per_lesson = client.get(f"/api/progress/lesson/{lesson['id']}").json()
    assert per_lesson[0]["user"]["username"] == "learner"


def test_delete_progress(client, db, user, lesson):
    pid = _upsert(client, user, lesson, progress=10).json()["id"]

    assert client.delete(f"/api/progress/{pid}").status_code == 204
    assert db.query(Progress).count() == 0
    assert client.delete(f"/api/progress/{pid}").status_code == 404
