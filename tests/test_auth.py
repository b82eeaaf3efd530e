import pytest
from jose import jwt

from delivery.core.security import create_access_token, decode_access_token


def register(client, email="sam@example.com", password="secret1", role="user"):
    return client.post("/api/auth/register", json={"email": email, "password": password, "role": role})


def test_register_then_login_returns_verifiable_token(client, settings):
    r = register(client, role="admin")
    assert r.status_code == 201
    assert r.json() == {"message": "User registered successfully"}

    r = client.post("/api/auth/login", json={"email": "sam@example.com", "password": "secret1"})
    assert r.status_code == 200
    body = r.json()
    assert body["message"] == "Welcome admin"

    payload = decode_access_token(body["token"], settings)
    assert payload["role"] == "admin"
    assert payload["id"]
    assert payload["exp"] - payload["iat"] == 60 * 60


def test_password_is_not_stored_in_plain_text(client, stored):
    register(client)

    user = stored("users", {"email": "sam@example.com"})
    assert user["password"] != "secret1"
    assert user["password"].startswith("$2")


def test_duplicate_email_is_rejected(client):
    assert register(client).status_code == 201
    r = register(client, password="other12", role="driver")
    assert r.status_code == 400
    assert r.json()["message"] == "User already exists"


def test_duplicate_email_wins_over_format_errors(client):
    register(client)
    r = register(client, password="abc", role="owner")
    assert (r.status_code, r.json()["message"]) == (400, "User already exists")


@pytest.mark.parametrize(
    "email,password,role,message",
    [
        ("not-an-email", "secret1", "user", "Invalid email format"),
        ("a@b", "secret1", "user", "Invalid email format"),
        ("sam@example.com", "abc", "user", "Password must be between 4 and 10 characters long"),
        ("sam@example.com", "abcdefghijk", "user", "Password must be between 4 and 10 characters long"),
        ("sam@example.com", "secret1", "owner", "Invalid role. It must be one of admin, user, or driver"),
    ],
)
def test_register_validation(client, email, password, role, message):
    r = register(client, email=email, password=password, role=role)
    assert r.status_code == 400
    assert r.json()["message"] == message


def test_login_failures_share_one_message(client):
    register(client)

    wrong_password = client.post("/api/auth/login", json={"email": "sam@example.com", "password": "nope1"})
    unknown_user = client.post("/api/auth/login", json={"email": "who@example.com", "password": "secret1"})

    assert wrong_password.status_code == 400
    assert unknown_user.status_code == 400
    assert wrong_password.json() == unknown_user.json() == {"message": "Invalid credentials"}


def test_missing_token_is_unauthorized(client):
    r = client.get("/api/drivers")
    assert r.status_code == 401
    assert r.json()["message"] == "Not Authorized"


def test_token_signed_with_other_secret_is_rejected(client):
    token = jwt.encode({"id": "x", "role": "admin"}, "other-secret", algorithm="HS256")
    r = client.get("/api/drivers", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 401
    assert r.json()["message"] == "Token expired or invalid"


def test_expired_token_is_rejected(client, settings):
    expired = settings.model_copy(update={"jwt_expire_min": -5})
    token = create_access_token({"id": "x"}, role="admin", settings=expired)
    r = client.get("/api/drivers", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 401
