"""Tests for the in-process delivery relay."""

import json
from datetime import UTC, datetime

import pytest

from duet.core.exceptions import UnauthorizedError
from duet.schemas.message import MessageOut, ReadReceipt
from duet.services.relay import (
    READ_MESSAGES_UPDATE,
    RECEIVE_MESSAGE,
    DeliveryRelay,
    RelaySession,
)


class FakeSocket:
    def __init__(self, *, broken: bool = False) -> None:
        self.frames: list[dict] = []
        self.broken = broken

    async def send_text(self, text: str) -> None:
        if self.broken:
            raise RuntimeError("socket is closed")
        self.frames.append(json.loads(text))


@pytest.fixture
def relay() -> DeliveryRelay:
    return DeliveryRelay()


def test_join_is_idempotent(relay) -> None:
    socket = FakeSocket()

    assert relay.join("alice", socket) is True
    assert relay.join("alice", socket) is False
    assert relay.members("alice") == frozenset({socket})


def test_leave_drops_empty_channel(relay) -> None:
    socket = FakeSocket()
    relay.join("alice", socket)

    relay.leave("alice", socket)
    relay.leave("alice", socket)

    assert relay.members("alice") == frozenset()


@pytest.mark.asyncio
async def test_push_reaches_every_member(relay) -> None:
    phone, laptop, other = FakeSocket(), FakeSocket(), FakeSocket()
    relay.join("alice", phone)
    relay.join("alice", laptop)
    relay.join("bob", other)

    delivered = await relay.push("alice", "ping", {"n": 1})

    assert delivered == 2
    assert phone.frames == laptop.frames == [{"event": "ping", "data": {"n": 1}}]
    assert other.frames == []


@pytest.mark.asyncio
async def test_push_to_empty_channel_is_noop(relay) -> None:
    assert await relay.push("nobody", "ping", None) == 0


@pytest.mark.asyncio
async def test_failed_socket_is_dropped(relay, caplog) -> None:
    healthy, broken = FakeSocket(), FakeSocket(broken=True)
    relay.join("alice", healthy)
    relay.join("alice", broken)

    with caplog.at_level("WARNING", logger="duet.services.relay"):
        delivered = await relay.push("alice", "ping", None)

    assert delivered == 1
    assert relay.members("alice") == frozenset({healthy})
    assert "Dropping socket" in caplog.text


@pytest.mark.asyncio
async def test_announce_message_echoes_to_sender(relay) -> None:
    alice, bob = FakeSocket(), FakeSocket()
    relay.join("alice", alice)
    relay.join("bob", bob)
    message = MessageOut(
        id=7,
        text="hi",
        time=datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC),
        sender="alice",
        receiver="bob",
    )

    await relay.announce_message(message)

    assert alice.frames == bob.frames
    frame = bob.frames[0]
    assert frame["event"] == RECEIVE_MESSAGE
    assert frame["data"]["id"] == 7
    assert frame["data"]["sender"] == "alice"


@pytest.mark.asyncio
async def test_read_receipt_uses_camel_case_keys(relay) -> None:
    alice = FakeSocket()
    relay.join("alice", alice)

    await relay.announce_read_receipt(
        ReadReceipt(sender="alice", receiver="bob", new_seen_messages=[1, 2])
    )

    assert alice.frames == [
        {
            "event": READ_MESSAGES_UPDATE,
            "data": {"sender": "alice", "receiver": "bob", "newSeenMessages": [1, 2]},
        }
    ]


def test_session_only_joins_own_channel(relay) -> None:
    socket = FakeSocket()
    session = RelaySession(relay, socket, "alice")

    with pytest.raises(UnauthorizedError):
        session.join("bob")
    assert not session.joined

    assert session.join("Alice") is True
    assert session.join("alice") is False
    assert relay.members("alice") == frozenset({socket})

    session.close()
    assert relay.members("alice") == frozenset()
