"""Tests for email and mail contact endpoints."""

from fastapi import status


def _email_payload(**overrides) -> dict:
    payload = {
        "subjectLine": "Hello",
        "text": "Long time no see",
        "appUser": "alice",
        "mailUser": "Pal@Example.com",
        "sentByAppUser": True,
    }
    payload.update(overrides)
    return payload


def test_send_and_get_email(client, alice_auth, bob_auth, admin_auth) -> None:
    response = client.post("/emails/", json=_email_payload(), headers=alice_auth)
    assert response.status_code == status.HTTP_200_OK
    email = response.json()["email"]
    assert email["subjectLine"] == "Hello"
    assert (email["sender"], email["receiver"]) == ("alice", "pal@example.com")

    assert client.get(f"/emails/{email['id']}", headers=alice_auth).status_code == 200
    assert client.get(f"/emails/{email['id']}", headers=bob_auth).status_code == 401
    assert len(client.get("/emails/", headers=admin_auth).json()["emails"]) == 1


def test_cannot_send_email_as_someone_else(client, bob_auth, alice) -> None:
    response = client.post("/emails/", json=_email_payload(), headers=bob_auth)
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_invalid_mail_address(client, alice_auth) -> None:
    response = client.post("/emails/", json=_email_payload(mailUser="nope"), headers=alice_auth)
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_delete_email_admin_only(client, alice_auth, admin_auth) -> None:
    email = client.post("/emails/", json=_email_payload(), headers=alice_auth).json()["email"]

    assert client.delete(f"/emails/{email['id']}", headers=alice_auth).status_code == 401
    response = client.delete(f"/emails/{email['id']}", headers=admin_auth)
    assert response.json() == {"deleted": f"Email with id {email['id']}"}


def test_mail_user_endpoints(client, alice_auth, admin_auth) -> None:
    created = client.post("/mail-users/", json={"gmailAddress": "pal@example.com"}, headers=alice_auth)
    assert created.status_code == status.HTTP_201_CREATED
    contact = created.json()["user"]
    assert contact["gmailAddress"] == "pal@example.com"

    duplicate = client.post("/mail-users/", json={"gmailAddress": "pal@example.com"}, headers=alice_auth)
    assert duplicate.json() == {"error": {"message": "Duplicated mail: pal@example.com", "status": 400}}

    assert client.get("/mail-users/", headers=alice_auth).status_code == 401
    assert client.get(f"/mail-users/{contact['id']}", headers=admin_auth).json() == {"user": contact}

    deleted = client.delete(f"/mail-users/{contact['id']}", headers=admin_auth)
    assert deleted.json() == {"deleted": "Mail user with email: pal@example.com"}
    assert client.get(f"/mail-users/{contact['id']}", headers=admin_auth).status_code == 404
