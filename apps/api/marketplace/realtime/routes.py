from collections.abc import Awaitable, Callable

from fastapi import APIRouter, WebSocket, WebSocketDisconnect, status
from pydantic import ValidationError as PayloadError

from marketplace.config import websocket_origin_allowed
from marketplace.models.mixins import now_utc
from marketplace.observability import log_event
from marketplace.realtime.manager import auction_room, room_manager
from marketplace.schemas.realtime import AuctionRef, ClientFrame, NewBid, PlaceBid, ServerFrame

router = APIRouter(tags=["realtime"])

Handler = Callable[[WebSocket, dict], Awaitable[str]]


async def _join_auction(websocket: WebSocket, data: dict) -> str:
    ref = AuctionRef.model_validate(data)
    room_manager.join(auction_room(ref.auction_id), websocket)
    return f"Joined auction {ref.auction_id}"


async def _leave_auction(websocket: WebSocket, data: dict) -> str:
    ref = AuctionRef.model_validate(data)
    room_manager.leave(auction_room(ref.auction_id), websocket)
    return f"Left auction {ref.auction_id}"


async def _place_bid(websocket: WebSocket, data: dict) -> str:
    bid = PlaceBid.model_validate(data)
    event = NewBid(amount=bid.amount, user_id=bid.user_id, timestamp=now_utc())
    delivered = await room_manager.broadcast(
        auction_room(bid.auction_id),
        _frame("new_bid", event.model_dump(mode="json", by_alias=True)),
    )
    log_event(
        "bid_broadcast",
        entity="auction",
        entity_id=bid.auction_id,
        detail={"user_id": bid.user_id, "delivered": delivered},
    )
    return "Bid placed successfully"


HANDLERS: dict[str, Handler] = {
    "join_auction": _join_auction,
    "leave_auction": _leave_auction,
    "place_bid": _place_bid,
}


def _frame(event: str, data: dict) -> dict:
    return ServerFrame(event=event, data=data).model_dump(mode="json")


def _error_message(err: PayloadError) -> str:
    first = err.errors()[0]
    location = ".".join(str(part) for part in first["loc"])
    return f"{location}: {first['msg']}" if location else first["msg"]


@router.websocket("/ws")
async def auction_socket(websocket: WebSocket) -> None:
    """
    Auction relay.

    Client frames are ``{"event": "join_auction" | "leave_auction" | "place_bid",
    "data": {...}}``. Each frame is acknowledged with ``{"event": <same>, "data":
    {"message": ...}}``; ``place_bid`` first emits ``new_bid`` to everyone in the
    auction room, the sender included when it has joined.
    """
    origin = websocket.headers.get("origin")
    if not websocket_origin_allowed(origin):
        log_event("websocket_origin_rejected", entity="websocket", detail={"origin": origin})
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    await room_manager.connect(websocket)
    try:
        while True:
            raw = await websocket.receive_text()
            try:
                frame = ClientFrame.model_validate_json(raw)
                message = await HANDLERS[frame.event](websocket, frame.data)
            except PayloadError as err:
                await websocket.send_json(_frame("error", {"message": _error_message(err)}))
                continue
            await websocket.send_json(_frame(frame.event, {"message": message}))
    except WebSocketDisconnect:
        pass
    finally:
        room_manager.disconnect(websocket)
