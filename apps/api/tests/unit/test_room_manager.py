import asyncio

from marketplace.realtime.manager import RoomManager, auction_room


class FakeConnection:
    def __init__(self) -> None:
        self.accepted = False
        self.sent: list[dict] = []

    async def accept(self) -> None:
        self.accepted = True

    async def send_json(self, data, mode: str = "text") -> None:
        self.sent.append(data)


class BrokenConnection(FakeConnection):
    async def send_json(self, data, mode: str = "text") -> None:
        raise RuntimeError("socket closed")


def test_auction_room_name():
    assert auction_room("42") == "auction_42"


def test_connect_accepts_connection():
    manager = RoomManager()
    connection = FakeConnection()

    asyncio.run(manager.connect(connection))

    assert connection.accepted is True
    assert manager.rooms == {}


def test_broadcast_reaches_only_room_members():
    manager = RoomManager()
    member, outsider = FakeConnection(), FakeConnection()
    manager.join("auction_42", member)
    manager.join("auction_7", outsider)

    delivered = asyncio.run(manager.broadcast("auction_42", {"event": "new_bid"}))

    assert delivered == 1
    assert member.sent == [{"event": "new_bid"}]
    assert outsider.sent == []


def test_broadcast_to_empty_room_sends_nothing():
    assert asyncio.run(RoomManager().broadcast("auction_1", {"event": "new_bid"})) == 0


def test_leave_and_disconnect_remove_membership():
    manager = RoomManager()
    connection = FakeConnection()
    manager.join("auction_1", connection)
    manager.join("auction_2", connection)

    manager.leave("auction_1", connection)
    assert "auction_1" not in manager.rooms
    assert manager.members("auction_2") == {connection}

    manager.disconnect(connection)
    assert manager.rooms == {}


def test_leave_unknown_room_is_a_no_op():
    manager = RoomManager()

    manager.leave("auction_9", FakeConnection())

    assert manager.rooms == {}


def test_broadcast_drops_connections_that_fail():
    manager = RoomManager()
    healthy, broken = FakeConnection(), BrokenConnection()
    manager.join("auction_5", healthy)
    manager.join("auction_5", broken)
    manager.join("auction_6", broken)

    delivered = asyncio.run(manager.broadcast("auction_5", {"event": "new_bid"}))

    assert delivered == 1
    assert manager.members("auction_5") == {healthy}
    assert "auction_6" not in manager.rooms
