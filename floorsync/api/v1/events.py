"""实时推送（WebSocket）

连接建立后服务端先发送 connected 帧，此后推送 wo_updated / downtime_alert /
downtime_resolved。客户端可发送 {"action": "join_room" | "leave_room", "room": ...}
限定接收范围。所有下行消息都经由观察者队列，由单独的发送协程写出。
"""

import asyncio
import json

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect

from ...config.settings import settings
from ...core.broadcaster import EventBroadcaster, QueueSubscriber, frame
from ...core.exceptions import ValidationError
from ...logging_config import get_logger
from ..deps import get_broadcaster

router = APIRouter()
logger = get_logger("api.events")


async def _pump(websocket: WebSocket, subscriber: QueueSubscriber):
    """把观察者队列中的消息写入连接"""
    while True:
        message = await subscriber.get()
        try:
            await websocket.send_json(message)
        except (WebSocketDisconnect, RuntimeError):
            logger.debug("observer %s closed while sending", subscriber.id)
            return


def handle_client_frame(broadcaster: EventBroadcaster, subscriber: QueueSubscriber, text: str) -> None:
    """处理客户端上行消息：加入/离开房间"""
    try:
        payload = json.loads(text)
    except ValueError:
        subscriber.deliver(frame("error", {"detail": "Invalid JSON"}))
        return
    if not isinstance(payload, dict):
        subscriber.deliver(frame("error", {"detail": "Expected a JSON object"}))
        return

    action = payload.get("action")
    room = payload.get("room")
    try:
        if action == "join_room":
            broadcaster.join(subscriber, room)
            event = "room_joined"
        elif action == "leave_room":
            broadcaster.leave(subscriber, room)
            event = "room_left"
        else:
            subscriber.deliver(frame("error", {"detail": f"Unknown action {action!r}"}))
            return
    except ValidationError as exc:
        subscriber.deliver(frame("error", {"detail": exc.message}))
        return
    subscriber.deliver(frame(event, {
        "room": room.strip(),
        "rooms": sorted(broadcaster.rooms_of(subscriber)),
    }))


@router.websocket("/ws")
async def events_socket(websocket: WebSocket, broadcaster: EventBroadcaster = Depends(get_broadcaster)):
    await websocket.accept()
    subscriber = QueueSubscriber(asyncio.get_running_loop(), maxsize=settings.EVENT_QUEUE_SIZE)
    # connected 帧先入队，保证是第一条下行消息
    subscriber.deliver(frame("connected", {"subscriber_id": subscriber.id}))
    broadcaster.subscribe(subscriber)
    pump = asyncio.create_task(_pump(websocket, subscriber))
    try:
        while True:
            text = await websocket.receive_text()
            handle_client_frame(broadcaster, subscriber, text)
    except WebSocketDisconnect:
        logger.info("observer %s disconnected", subscriber.id)
    finally:
        broadcaster.unsubscribe(subscriber)
        pump.cancel()
        await asyncio.gather(pump, return_exceptions=True)
