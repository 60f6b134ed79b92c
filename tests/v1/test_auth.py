"""Tests for login and registration endpoints."""

from fastapi import status

from duet.core.security import decode_access_token


def test_register_returns_token(client) -> None:
    response = client.post(
        "/auth/register",
        json={
            "username": "NewUser",
            "password": "secret123",
            "firstName": "New",
            "lastName": "User",
            "gmailAddress": "new@example.com",
        },
    )
    assert response.status_code == status.HTTP_201_CREATED
    new_user = response.json()["newUser"]
    assert new_user["username"] == "newuser"
    assert new_user["firstName"] == "New"
    assert new_user["isAdmin"] is False
    assert "password" not in new_user
    assert decode_access_token(new_user["token"])["sub"] == "newuser"


def test_register_duplicate(client, alice) -> None:
    response = client.post(
        "/auth/register",
        json={"username": "alice", "password": "secret123", "firstName": "A", "lastName": "B"},
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"error": {"message": "Duplicated username: alice", "status": 400}}


def test_register_validation_error_uses_envelope(client) -> None:
    response = client.post("/auth/register", json={"username": "x"})
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    error = response.json()["error"]
    assert error["status"] == 400
    assert isinstance(error["message"], list) and error["message"]


def test_login(client, alice) -> None:
    response = client.post("/auth/login", json={"username": "alice", "password": "password123"})
    assert response.status_code == status.HTTP_200_OK
    user = response.json()["user"]
    assert user["username"] == "alice"
    assert decode_access_token(user["token"])["is_admin"] is False


def test_login_wrong_password(client, alice) -> None:
    response = client.post("/auth/login", json={"username": "alice", "password": "nope"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["error"]["message"] == "Invalid username/password"
