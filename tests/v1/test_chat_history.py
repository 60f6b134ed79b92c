"""Tests for the conversation history endpoint."""

from fastapi import status


def test_conversations_for_user(client, alice, alice_auth, bob_auth, bob, carol) -> None:
    client.post("/messages/send/bob", json={"text": "hi"}, headers=alice_auth)
    client.post("/messages/send/alice", json={"text": "hey"}, headers=bob_auth)
    client.post("/messages/send/carol", json={"text": "yo"}, headers=alice_auth)

    response = client.get("/chat-history/alice", headers=alice_auth)
    assert response.status_code == status.HTTP_200_OK
    conversations = response.json()["conversations"]
    assert len(conversations) == 2
    assert conversations[0]["userTwo"] == carol.id
    assert (conversations[1]["userOne"], conversations[1]["userTwo"]) == (alice.id, bob.id)


def test_conversations_of_someone_else(client, alice_auth, bob) -> None:
    assert client.get("/chat-history/bob", headers=alice_auth).status_code == 401


def test_admin_sees_empty_history(client, admin_auth, bob) -> None:
    response = client.get("/chat-history/bob", headers=admin_auth)
    assert response.json() == {"conversations": []}
