def _register(client, username="alice", email="a@x.com", password="pw123"):
    return client.post("/api/register", json={"username": username, "email": email, "password": password})


def test_register_conflict_login_flow(client):
    # Register
    res = _register(client)
    assert res.status_code == 201
    body = res.json()
    assert body["ok"] is True
    assert body["result"]["token"]
    assert body["result"]["user"]["username"] == "alice"

    # Same username, other email
    res = _register(client, email="other@x.com", password="pw456")
    assert res.status_code == 400
    body = res.json()
    assert body["ok"] is False
    assert body["error"]["type"] == "CONFLICT"
    assert body["error"]["message"] == "User already exists"

    # Wrong password
    res = client.post("/api/login", json={"username": "alice", "password": "wrong"})
    assert res.status_code == 401
    assert res.json()["error"]["type"] == "AUTH_ERROR"
    assert res.json()["error"]["message"] == "Invalid password"
    assert res.json()["result"] is None

    # Right password
    res = client.post("/api/login", json={"username": "alice", "password": "pw123"})
    assert res.status_code == 200
    access = res.json()["result"]["token"]
    assert access

    # Me
    res = client.get("/api/me", headers={"Authorization": f"Bearer {access}"})
    assert res.status_code == 200
    me = res.json()
    assert me["result"]["user"]["email"] == "a@x.com"


def test_register_conflict_on_email_only(client):
    assert _register(client).status_code == 201
    res = _register(client, username="bob")
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "USER_EXISTS"


def test_register_requires_all_fields(client):
    res = client.post("/api/register", json={"username": "alice", "email": "a@x.com"})
    assert res.status_code == 400
    body = res.json()
    assert body["error"]["type"] == "VALIDATION"
    assert body["error"]["message"] == "All fields required"


def test_malformed_body_is_a_validation_error(client):
    res = client.post("/api/register", json=["not", "an", "object"])
    assert res.status_code == 400
    assert res.json()["error"]["type"] == "VALIDATION"


def test_login_unknown_user(client):
    res = client.post("/api/login", json={"username": "nobody", "password": "pw"})
    assert res.status_code == 401
    assert res.json()["error"]["message"] == "User not found"
    assert res.headers["www-authenticate"] == "Bearer"


def test_password_hash_never_returned(client):
    reg = _register(client).json()["result"]["user"]
    login = client.post("/api/login", json={"username": "alice", "password": "pw123"}).json()["result"]["user"]
    for user in (reg, login):
        assert "password_hash" not in user
        assert "password" not in user
        assert user["videos"] == 0 and user["followers"] == 0 and user["following"] == 0


def test_me_requires_bearer_token(client):
    res = client.get("/api/me")
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "MISSING_TOKEN"

    res = client.get("/api/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "INVALID_TOKEN"
    assert res.json()["error"]["message"] == "Invalid token"


def test_register_rejects_unencodable_password(client):
    # JSON escapes allow a lone surrogate, which has no UTF-8 form
    res = client.post(
        "/api/register",
        content=b'{"username": "s", "email": "s@x.com", "password": "\\ud800"}',
        headers={"Content-Type": "application/json"},
    )
    assert res.status_code == 400
    body = res.json()
    assert body["error"]["type"] == "VALIDATION"
    assert body["error"]["code"] == "INVALID_ENCODING"

    res = client.post("/api/login", json={"username": "s", "password": "pw"})
    assert res.json()["error"]["code"] == "USER_NOT_FOUND"
