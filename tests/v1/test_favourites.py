"""Tests for favourite list endpoints."""

from fastapi import status


def test_favourite_lifecycle(client, alice, bob, alice_auth) -> None:
    payload = {"sender": alice.id, "receiver": bob.id}

    early = client.post("/favourite/", json=payload, headers=alice_auth)
    assert early.status_code == status.HTTP_404_NOT_FOUND

    client.post("/messages/send/bob", json={"text": "hi"}, headers=alice_auth)
    created = client.post("/favourite/", json=payload, headers=alice_auth)
    assert created.status_code == status.HTTP_201_CREATED
    assert created.json()["favourite"]["receiver"] == bob.id

    duplicate = client.post("/favourite/", json=payload, headers=alice_auth)
    assert duplicate.status_code == status.HTTP_400_BAD_REQUEST

    listing = client.get(f"/favourite/{alice.id}", headers=alice_auth)
    assert [f["receiver"] for f in listing.json()["favourite"]] == [bob.id]

    deleted = client.request("DELETE", "/favourite/", json=payload, headers=alice_auth)
    assert deleted.status_code == status.HTTP_200_OK
    assert deleted.json()["deleted"] == (
        f"User with id {bob.id} from favourite list of user with id {alice.id}"
    )
    assert client.get(f"/favourite/{alice.id}", headers=alice_auth).json() == {"favourite": []}


def test_cannot_add_favourite_for_another_user(client, alice, bob, bob_auth) -> None:
    response = client.post(
        "/favourite/",
        json={"sender": alice.id, "receiver": bob.id},
        headers=bob_auth,
    )
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_favourites_of_unknown_user(client, alice_auth) -> None:
    assert client.get("/favourite/9999", headers=alice_auth).status_code == 404
