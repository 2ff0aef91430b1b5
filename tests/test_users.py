from english_station.users.models import User


def _login(client, email="learner@example.com", password="correct-horse"):
    return client.post("/api/users/login", json={"email": email, "password": password})


def test_register_hides_credentials(user):
    assert user["email"] == "learner@example.com"
    assert user["username"] == "learner"
    assert user["isAdmin"] is False
    assert user["level"] == "A1"
    assert "password" not in user
    assert "refreshToken" not in user


def test_password_is_stored_hashed(db, user):
    row = db.get(User, user["id"])
    assert row.password != "correct-horse"
    assert row.password.startswith("$2")


def test_register_duplicate_email_conflicts(client, db, user):
    r = client.post("/api/users", json={
        "email": "learner@example.com",
        "username": "someone-else",
        "password": "another-pass",
    })
    assert r.status_code == 409
    assert r.json() == {"error": "User already exists"}
    assert db.query(User).count() == 1


def test_register_duplicate_username_conflicts(client, user):
    r = client.post("/api/users", json={
        "email": "other@example.com",
        "username": "learner",
        "password": "another-pass",
    })
    assert r.status_code == 409


def test_register_validates_body(client):
    r = client.post("/api/users", json={"email": "not-an-email", "username": "ab", "password": "short"})
    assert r.status_code == 400
    assert "error" in r.json()


def test_login(client, db, user):
    r = _login(client)
    assert r.status_code == 200
    body = r.json()
    assert body["id"] == user["id"]
    assert body["token"]
    assert body["refreshToken"]
    assert db.get(User, user["id"]).refresh_token == body["refreshToken"]


def test_login_wrong_password(client, user):
    r = _login(client, password="wrong-horse")
    assert r.status_code == 401
    assert r.json() == {"error": "Invalid credentials"}


def test_login_unknown_email(client):
    assert _login(client, email="nobody@example.com").status_code == 401


def test_access_token_verifies(client, user):
    token = _login(client).json()["token"]
    r = client.post("/api/users/verify", json={"token": token})
    assert r.status_code == 200
    assert r.json() == {"sub": user["id"], "email": "learner@example.com"}


def test_garbage_token_is_rejected(client):
    r = client.post("/api/users/verify", json={"token": "not-a-jwt"})
    assert r.status_code == 401


def test_refresh_token_rotates(client, user):
    old = _login(client).json()["refreshToken"]

    r = client.post("/api/users/refresh-token", json={"refreshToken": old})
    assert r.status_code == 200
    new = r.json()["refreshToken"]
    assert new != old
    assert r.json()["token"]

    again = client.post("/api/users/refresh-token", json={"refreshToken": old})
    assert again.status_code == 401
    assert again.json() == {"error": "Invalid refresh token"}


def test_refresh_token_required(client):
    r = client.post("/api/users/refresh-token", json={})
    assert r.status_code == 401
    assert r.json() == {"error": "Refresh token required"}


def test_update_user(client, user):
    r = client.put(f"/api/users/{user['id']}", json={"username": "renamed", "level": "B2"})
    assert r.status_code == 200
    assert r.json()["username"] == "renamed"
    assert r.json()["level"] == "B2"


def test_update_password_rehashes(client, user):
    client.put(f"/api/users/{user['id']}", json={"password": "brand-new-pass"})
    assert _login(client, password="brand-new-pass").status_code == 200
    assert _login(client).status_code == 401


def test_update_needs_fields(client, user):
    r = client.put(f"/api/users/{user['id']}", json={})
    assert r.status_code == 400
    assert r.json() == {"error": "No fields to update"}


def test_update_to_taken_email_conflicts(client, user):
    client.post("/api/users", json={"email": "b@example.com", "username": "bee", "password": "password-b"})
    r = client.put(f"/api/users/{user['id']}", json={"email": "b@example.com"})
    assert r.status_code == 409


def test_user_detail_includes_progress_and_results(client, user, lesson, quiz):
    client.post("/api/progress", json={"userId": user["id"], "lessonId": lesson["id"], "progress": 20})
    q = quiz["questions"][0]
    client.post(f"/api/quiz/{quiz['id']}/submit", json={
        "userId": user["id"],
        "answers": [{"questionId": q["id"], "answerId": q["answers"][0]["id"]}],
    })

    r = client.get(f"/api/users/{user['id']}")
    assert r.status_code == 200
    body = r.json()
    assert body["progress"][0]["lesson"]["id"] == lesson["id"]
    assert body["quizResults"][0]["quiz"]["id"] == quiz["id"]
    assert body["quizResults"][0]["score"] == 33


def test_list_and_delete_users(client, db, user):
    assert [u["id"] for u in client.get("/api/users").json()] == [user["id"]]

    assert client.delete(f"/api/users/{user['id']}").status_code == 204
    assert db.query(User).count() == 0
    assert client.get(f"/api/users/{user['id']}").status_code == 404
    assert client.delete(f"/api/users/{user['id']}").status_code == 404
