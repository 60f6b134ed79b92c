"""Delivery relay: in-process fan-out of real-time events to WebSocket channels.

Each registered handle owns a channel; every socket that joined it receives
the frames pushed to that handle. Membership lives in this process only and
is rebuilt as clients reconnect.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from fastapi.encoders import jsonable_encoder
from starlette.websockets import WebSocket, WebSocketDisconnect

from duet.core.exceptions import UnauthorizedError
from duet.schemas.message import MessageOut, ReadReceipt

logger = logging.getLogger(__name__)

RECEIVE_MESSAGE = "receive message"
READ_MESSAGES_UPDATE = "read messages update"
JOINED_ROOM = "joined room"
ERROR = "error"


def encode_frame(event: str, data: Any) -> str:
    """Serialize an outbound frame, using the camelCase aliases of schemas."""
    return json.dumps({"event": event, "data": jsonable_encoder(data)})


class DeliveryRelay:
    """Registry of channels keyed by user handle."""

    def __init__(self) -> None:
        self._channels: dict[str, set[WebSocket]] = {}

    def join(self, handle: str, websocket: WebSocket) -> bool:
        """Add `websocket` to the channel of `handle`.

        Returns:
            False if the socket was already a member.
        """
        members = self._channels.setdefault(handle, set())
        if websocket in members:
            return False
        members.add(websocket)
        logger.info("Socket joined channel %s (%d members)", handle, len(members))
        return True

    def leave(self, handle: str, websocket: WebSocket) -> None:
        members = self._channels.get(handle)
        if members is None or websocket not in members:
            return
        members.discard(websocket)
        if not members:
            del self._channels[handle]
        logger.info("Socket left channel %s", handle)

    def members(self, handle: str) -> frozenset[WebSocket]:
        return frozenset(self._channels.get(handle, ()))

    async def push(self, handle: str, event: str, data: Any) -> int:
        """Send one frame to every member of `handle`'s channel.

        Sockets that fail to receive are removed from the channel.

        Returns:
            The number of sockets the frame was delivered to.
        """
        members = self.members(handle)
        if not members:
            return 0

        frame = encode_frame(event, data)
        delivered = 0
        for websocket in members:
            try:
                await websocket.send_text(frame)
            except (WebSocketDisconnect, RuntimeError, OSError) as err:
                logger.warning("Dropping socket from channel %s after failed send: %s", handle, err)
                self.leave(handle, websocket)
            else:
                delivered += 1
        return delivered

    async def notify_pair(self, sender: str, receiver: str, event: str, data: Any) -> None:
        """Push the same frame to both parties; the sender sees its own echo."""
        await self.push(sender, event, data)
        if receiver != sender:
            await self.push(receiver, event, data)

    async def announce_message(self, message: MessageOut) -> None:
        await self.notify_pair(message.sender, message.receiver, RECEIVE_MESSAGE, message)

    async def announce_read_receipt(self, receipt: ReadReceipt) -> None:
        await self.notify_pair(receipt.sender, receipt.receiver, READ_MESSAGES_UPDATE, receipt)


class RelaySession:
    """State of one authenticated WebSocket connection.

    A session starts unjoined and may only join the channel of the user it
    authenticated as. Joining that channel again is a no-op.
    """

    def __init__(self, relay: DeliveryRelay, websocket: WebSocket, username: str) -> None:
        self.relay = relay
        self.websocket = websocket
        self.username = username
        self.handle: str | None = None

    @property
    def joined(self) -> bool:
        return self.handle is not None

    def join(self, handle: str) -> bool:
        """Bind the session to `handle`'s channel.

        Returns:
            True if the session was newly joined.

        Raises:
            UnauthorizedError: If `handle` is not the session's own handle.
        """
        handle = handle.strip().lower()
        if handle != self.username:
            raise UnauthorizedError(f"Cannot join the channel of {handle}")
        if self.handle == handle:
            return False
        self.handle = handle
        return self.relay.join(handle, self.websocket)

    def close(self) -> None:
        if self.handle is not None:
            self.relay.leave(self.handle, self.websocket)
            self.handle = None

    async def send(self, event: str, data: Any) -> None:
        """Send a frame to this session's socket only."""
        await self.websocket.send_text(encode_frame(event, data))
