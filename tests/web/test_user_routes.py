"""Tests for signup, login and password reset routes."""


def _signup(client, email="a@test.com", password="pw-123456"):
    return client.post("/api/users/signup", json={"email": email, "password": password})


def test_signup(client, tokens):
    res = _signup(client)
    assert res.status_code == 201
    data = res.json()
    assert data["user"]["email"] == "a@test.com"
    assert "password" not in data["user"]
    assert "createdAt" in data["user"]
    assert tokens.verify(data["token"]) == data["user"]["id"]


def test_signup_missing_fields(client):
    res = client.post("/api/users/signup", json={"email": "a@test.com"})
    assert res.status_code == 400
    assert res.json()["detail"] == "Email and password required"


def test_signup_duplicate_email(client):
    _signup(client)
    res = _signup(client, password="other")
    assert res.status_code == 409
    assert res.json()["detail"] == "Email already in use"


def test_login(client):
    _signup(client)
    res = client.post("/api/users/login", json={"email": "a@test.com", "password": "pw-123456"})
    assert res.status_code == 200
    assert res.json()["token"]


def test_login_wrong_password(client):
    _signup(client)
    res = client.post("/api/users/login", json={"email": "a@test.com", "password": "nope"})
    assert res.status_code == 401
    assert res.json()["detail"] == "Invalid credentials"


def test_login_unknown_email(client):
    res = client.post("/api/users/login", json={"email": "ghost@test.com", "password": "x"})
    assert res.status_code == 401


def test_token_from_signup_authorizes_moods(client):
    token = _signup(client).json()["token"]
    res = client.post(
        "/api/moods", headers={"Authorization": f"Bearer {token}"}, json={"feeling": "Happy"}
    )
    assert res.status_code == 201


class TestPasswordReset:
    def test_full_flow(self, client):
        _signup(client)
        res = client.post("/api/users/forgot-password", json={"email": "a@test.com"})
        assert res.status_code == 200
        data = res.json()
        assert data["ok"] is True
        reset_token = data["resetToken"]
        assert data["expiresAt"].endswith("Z")

        res = client.post(
            "/api/users/reset-password", json={"token": reset_token, "password": "new-pass"}
        )
        assert res.status_code == 200
        assert res.json() == {"ok": True}

        old = client.post("/api/users/login", json={"email": "a@test.com", "password": "pw-123456"})
        new = client.post("/api/users/login", json={"email": "a@test.com", "password": "new-pass"})
        assert old.status_code == 401
        assert new.status_code == 200

    def test_token_single_use(self, client):
        _signup(client)
        reset_token = client.post(
            "/api/users/forgot-password", json={"email": "a@test.com"}
        ).json()["resetToken"]
        body = {"token": reset_token, "password": "first"}
        assert client.post("/api/users/reset-password", json=body).status_code == 200
        res = client.post("/api/users/reset-password", json=body)
        assert res.status_code == 400
        assert res.json()["detail"] == "Invalid or expired token"

    def test_unknown_email_gives_same_answer(self, client):
        res = client.post("/api/users/forgot-password", json={"email": "ghost@test.com"})
        assert res.status_code == 200
        assert res.json() == {"ok": True}

    def test_forgot_requires_email(self, client):
        res = client.post("/api/users/forgot-password", json={})
        assert res.status_code == 400

    def test_reset_requires_fields(self, client):
        res = client.post("/api/users/reset-password", json={"token": "abc"})
        assert res.status_code == 400
        assert res.json()["detail"] == "Token and new password required"

    def test_token_hidden_when_not_exposed(self, client, web_config):
        web_config.auth.expose_reset_token = False
        _signup(client)
        res = client.post("/api/users/forgot-password", json={"email": "a@test.com"})
        assert res.json() == {"ok": True}
