"""事件广播

把已提交到数据库的实体变更推送给所有在线观察者（看板、操作员终端、计划员）。

- 观察者只需提供 id 与 deliver(message)；deliver 必须非阻塞
- 房间（room）在发布时过滤：未加入任何房间的观察者接收全部事件，
  加入房间后只接收路由到这些房间的事件
- 同一实体按版本号去重，晚到的旧版本直接丢弃，观察者不会看到状态回退
  （只记住最近 max_tracked_entities 个实体的版本，被淘汰的实体不再去重）
- 投递失败的观察者会被移除，发布方永远不会因此失败
- 不做排队重放，断线重连的观察者需重新拉取全量数据
"""

import asyncio
import itertools
import threading
from collections import OrderedDict, defaultdict
from typing import Iterable, Optional, Tuple
from uuid import uuid4

from ..logging_config import get_logger
from .exceptions import ValidationError

logger = get_logger("core.broadcaster")

WO_UPDATED = "wo_updated"
DOWNTIME_ALERT = "downtime_alert"
DOWNTIME_RESOLVED = "downtime_resolved"


def frame(event: str, data, seq: Optional[int] = None) -> dict:
    """推送给观察者的消息帧"""
    return {"event": event, "data": data, "seq": seq}


class QueueSubscriber:
    """基于 asyncio.Queue 的观察者

    deliver 可以在任意线程调用，消息通过 call_soon_threadsafe 放入所属事件循环的队列，
    由连接端的发送协程取出写入网络。
    """

    def __init__(self, loop: asyncio.AbstractEventLoop, maxsize: int = 0):
        self.id = uuid4().hex
        self.loop = loop
        self.queue = asyncio.Queue(maxsize=maxsize)
        self.dropped = 0

    def deliver(self, message: dict) -> None:
        self.loop.call_soon_threadsafe(self._put, message)

    def _put(self, message: dict) -> None:
        try:
            self.queue.put_nowait(message)
        except asyncio.QueueFull:
            self.dropped += 1
            logger.warning("observer %s queue full, dropped %s", self.id, message.get("event"))

    async def get(self) -> dict:
        return await self.queue.get()


class EventBroadcaster:
    """按房间分发事件的广播器，进程启动时创建一次并显式传递给各处理函数"""

    def __init__(self, max_tracked_entities: int = 10000):
        if max_tracked_entities < 1:
            raise ValidationError("max_tracked_entities must be positive")
        self._lock = threading.Lock()
        self._subscribers = {}
        self._rooms = defaultdict(set)
        self._memberships = defaultdict(set)
        # 最近发布的实体版本，超过上限时淘汰最久未更新的实体
        self._last_versions = OrderedDict()
        self._max_tracked = max_tracked_entities
        self._seq = itertools.count(1)

    # ------------------------------------------------------------------
    # 订阅管理
    # ------------------------------------------------------------------
    def subscribe(self, subscriber) -> None:
        with self._lock:
            self._subscribers[subscriber.id] = subscriber
        logger.info("observer %s connected", subscriber.id)

    def unsubscribe(self, subscriber) -> None:
        with self._lock:
            self._drop(subscriber.id)
        logger.info("observer %s left", subscriber.id)

    def _drop(self, subscriber_id: str) -> None:
        self._subscribers.pop(subscriber_id, None)
        for room in self._memberships.pop(subscriber_id, set()):
            members = self._rooms.get(room)
            if members is not None:
                members.discard(subscriber_id)
                if not members:
                    del self._rooms[room]

    def join(self, subscriber, room: str) -> None:
        room = _room_name(room)
        with self._lock:
            if subscriber.id not in self._subscribers:
                raise ValidationError(f"Observer {subscriber.id} is not connected")
            self._rooms[room].add(subscriber.id)
            self._memberships[subscriber.id].add(room)
        logger.info("observer %s joined %s", subscriber.id, room)

    def leave(self, subscriber, room: str) -> None:
        room = _room_name(room)
        with self._lock:
            self._memberships[subscriber.id].discard(room)
            if not self._memberships[subscriber.id]:
                del self._memberships[subscriber.id]
            members = self._rooms.get(room)
            if members is not None:
                members.discard(subscriber.id)
                if not members:
                    del self._rooms[room]

    def rooms_of(self, subscriber) -> frozenset:
        with self._lock:
            return frozenset(self._memberships.get(subscriber.id, ()))

    def members(self, room: str) -> frozenset:
        with self._lock:
            return frozenset(self._rooms.get(room, ()))

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscribers)

    @property
    def tracked_entity_count(self) -> int:
        with self._lock:
            return len(self._last_versions)

    # ------------------------------------------------------------------
    # 发布
    # ------------------------------------------------------------------
    def _targets(self, rooms: Optional[Iterable[str]]):
        if rooms is None:
            return list(self._subscribers.values())
        wanted = set()
        for room in rooms:
            wanted |= self._rooms.get(room, set())
        return [
            sub for sub_id, sub in self._subscribers.items()
            if sub_id in wanted or not self._memberships.get(sub_id)
        ]

    def publish(self, event: str, data, rooms: Optional[Iterable[str]] = None,
                entity: Optional[Tuple[str, int, int]] = None) -> int:
        """发布事件，返回成功投递的观察者数量

        rooms 为空表示全局广播；entity 为 (实体类型, id, version)，
        版本号不大于已发布版本的事件会被丢弃。
        """
        failed = []
        delivered = 0
        with self._lock:
            if entity is not None:
                key, version = entity[:2], entity[2]
                last = self._last_versions.get(key)
                if last is not None and version <= last:
                    logger.debug("drop stale %s for %s v%s (last v%s)", event, key, version, last)
                    return 0
                self._last_versions[key] = version
                self._last_versions.move_to_end(key)
                while len(self._last_versions) > self._max_tracked:
                    self._last_versions.popitem(last=False)

            message = frame(event, data, next(self._seq))
            # 在锁内入队，保证同一实体的事件顺序与 seq 一致
            for subscriber in self._targets(rooms):
                try:
                    subscriber.deliver(message)
                    delivered += 1
                except Exception:
                    logger.exception("delivery of %s to observer %s failed", event, subscriber.id)
                    failed.append(subscriber.id)
            for subscriber_id in failed:
                self._drop(subscriber_id)

        logger.debug("published %s #%s to %d observer(s)", event, message["seq"], delivered)
        return delivered


def _room_name(room) -> str:
    if not isinstance(room, str) or not room.strip():
        raise ValidationError("Room name must be a non-empty string")
    return room.strip()
