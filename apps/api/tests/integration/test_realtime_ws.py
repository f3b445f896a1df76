import pytest
from starlette.websockets import WebSocketDisconnect

from marketplace.realtime.manager import room_manager


def test_bid_reaches_joined_clients_only(client):
    with client.websocket_connect("/ws") as bidder, client.websocket_connect("/ws") as watcher:
        bidder.send_json({"event": "join_auction", "data": {"auctionId": "42"}})
        assert bidder.receive_json() == {
            "event": "join_auction",
            "data": {"message": "Joined auction 42"},
        }

        bidder.send_json(
            {"event": "place_bid", "data": {"auctionId": "42", "amount": 500, "userId": "u-1"}}
        )
        new_bid = bidder.receive_json()
        assert new_bid["event"] == "new_bid"
        assert new_bid["data"]["amount"] == 500
        assert new_bid["data"]["userId"] == "u-1"
        assert new_bid["data"]["timestamp"]
        assert bidder.receive_json()["data"] == {"message": "Bid placed successfully"}

        # The watcher never joined, so its next frame is the reply to its own message.
        watcher.send_json({"event": "leave_auction", "data": {"auctionId": "42"}})
        assert watcher.receive_json() == {
            "event": "leave_auction",
            "data": {"message": "Left auction 42"},
        }


def test_leaving_stops_delivery(client):
    with client.websocket_connect("/ws") as first, client.websocket_connect("/ws") as second:
        for socket in (first, second):
            socket.send_json({"event": "join_auction", "data": {"auctionId": 7}})
            assert socket.receive_json()["data"] == {"message": "Joined auction 7"}

        second.send_json({"event": "leave_auction", "data": {"auctionId": 7}})
        assert second.receive_json()["data"] == {"message": "Left auction 7"}

        first.send_json(
            {"event": "place_bid", "data": {"auctionId": 7, "amount": 125.5, "userId": 9}}
        )
        assert first.receive_json()["data"]["userId"] == "9"
        assert first.receive_json()["data"]["message"] == "Bid placed successfully"
        assert len(room_manager.members("auction_7")) == 1

        second.send_json({"event": "join_auction", "data": {"auctionId": 8}})
        assert second.receive_json()["data"] == {"message": "Joined auction 8"}


def test_malformed_frames_get_error_and_connection_stays_open(client):
    with client.websocket_connect("/ws") as socket:
        socket.send_text("not json")
        assert socket.receive_json()["event"] == "error"

        socket.send_json({"event": "place_bid", "data": {"auctionId": "1", "amount": -5}})
        error = socket.receive_json()
        assert error["event"] == "error"
        assert error["data"]["message"]

        socket.send_json({"event": "join_auction", "data": {"auctionId": "1"}})
        assert socket.receive_json()["data"] == {"message": "Joined auction 1"}


def test_disconnect_leaves_all_rooms(client):
    with client.websocket_connect("/ws") as socket:
        socket.send_json({"event": "join_auction", "data": {"auctionId": "3"}})
        socket.receive_json()
        assert len(room_manager.members("auction_3")) == 1

    assert room_manager.members("auction_3") == set()


def test_foreign_origin_is_refused(client):
    with pytest.raises(WebSocketDisconnect) as exc_info:
        with client.websocket_connect("/ws", headers={"origin": "https://elsewhere.test"}):
            pass

    assert exc_info.value.code == 1008


def test_configured_origin_is_accepted(client):
    with client.websocket_connect("/ws", headers={"origin": "http://localhost:3000"}) as socket:
        socket.send_json({"event": "join_auction", "data": {"auctionId": "5"}})
        assert socket.receive_json()["data"] == {"message": "Joined auction 5"}
