import logging
from typing import Any, Protocol

logger = logging.getLogger(__name__)


class Connection(Protocol):
    async def accept(self) -> None: ...

    async def send_json(self, data: Any, mode: str = "text") -> None: ...


def auction_room(auction_id: str) -> str:
    return f"auction_{auction_id}"


class RoomManager:
    """
    Tracks which live connections are in which named room.

    A connection may be in any number of rooms. Membership is the only state kept;
    nothing is persisted for connections that are not currently in a room.
    """

    def __init__(self) -> None:
        self.rooms: dict[str, set[Connection]] = {}

    async def connect(self, connection: Connection) -> None:
        await connection.accept()
        logger.info("Connection accepted")

    def join(self, room: str, connection: Connection) -> None:
        self.rooms.setdefault(room, set()).add(connection)
        logger.info("Connection joined room %s (%d members)", room, len(self.rooms[room]))

    def leave(self, room: str, connection: Connection) -> None:
        members = self.rooms.get(room)
        if members is None:
            return
        members.discard(connection)
        if not members:
            del self.rooms[room]
        logger.info("Connection left room %s", room)

    def disconnect(self, connection: Connection) -> None:
        """Remove a connection from every room it joined."""
        for room in [room for room, members in self.rooms.items() if connection in members]:
            self.leave(room, connection)

    def members(self, room: str) -> set[Connection]:
        return set(self.rooms.get(room, set()))

    async def broadcast(self, room: str, message: dict[str, Any]) -> int:
        """
        Send ``message`` to every connection in ``room``.

        Connections that fail to receive are dropped from all rooms. Returns the
        number of connections the message was delivered to.
        """
        members = self.members(room)
        if not members:
            logger.debug("No connections in room %s, skipping broadcast", room)
            return 0

        sent = 0
        dead: list[Connection] = []
        for connection in members:
            try:
                await connection.send_json(message)
                sent += 1
            except Exception as exc:  # noqa: BLE001
                logger.warning("Failed to send to connection in room %s: %s", room, exc)
                dead.append(connection)

        for connection in dead:
            self.disconnect(connection)

        return sent

    def reset(self) -> None:
        self.rooms.clear()


room_manager = RoomManager()
