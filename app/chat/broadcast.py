"""
Per-conversation publish/subscribe.

Each conversation has one topic, ``conversation/{id}``. Fan-out uses the
Channels layer group ``conversation_{id}`` (channels-redis in deployment,
so every ASGI process receives it); the layer already drops messages for
listeners that are gone and never replays, which is exactly the
"currently subscribed, best effort" contract.

``SubscriberRegistry`` keeps the subscribers this process currently
holds. Consumers register on connect and deregister on disconnect; the
registry is shared by every consumer in the process and guarded by a
lock.

Usage:
    channel = get_broadcast_channel()

    # from a consumer
    await channel.subscribe(topic_for(42), self.channel_name)
    await channel.unsubscribe(topic_for(42), self.channel_name)

    # from sync code (services, Celery tasks)
    channel.publish_sync(topic_for(42), wire_message)
"""

from __future__ import annotations

import logging
import threading
from collections import defaultdict
from typing import Any

from asgiref.sync import async_to_sync
from channels.layers import DEFAULT_CHANNEL_LAYER, get_channel_layer

from chat.constants import BROADCAST_CONFIG

logger = logging.getLogger(__name__)


def topic_for(conversation_id) -> str:
    return BROADCAST_CONFIG.TOPIC_TEMPLATE.format(conversation_id=conversation_id)


def group_for(topic: str) -> str:
    """Channel layer group name for a topic ('/' is not allowed in groups)."""
    return BROADCAST_CONFIG.GROUP_PREFIX + topic.rsplit("/", 1)[-1]


class SubscriberRegistry:
    """Thread-safe map of topic -> channel names subscribed in this process."""

    def __init__(self):
        self._lock = threading.Lock()
        self._subscribers: dict[str, set[str]] = defaultdict(set)

    def add(self, topic: str, channel_name: str) -> None:
        with self._lock:
            self._subscribers[topic].add(channel_name)

    def discard(self, topic: str, channel_name: str) -> None:
        with self._lock:
            subscribers = self._subscribers.get(topic)
            if subscribers is None:
                return
            subscribers.discard(channel_name)
            if not subscribers:
                del self._subscribers[topic]

    def subscribers(self, topic: str) -> frozenset[str]:
        with self._lock:
            return frozenset(self._subscribers.get(topic, ()))

    def count(self, topic: str) -> int:
        with self._lock:
            return len(self._subscribers.get(topic, ()))

    def topics(self) -> list[str]:
        with self._lock:
            return list(self._subscribers)


class BroadcastChannel:
    """
    Topic-based fan-out over a Channels layer.

    The layer is looked up on every call so settings changes (tests swap
    in the in-memory layer) take effect.
    """

    def __init__(
        self,
        registry: SubscriberRegistry | None = None,
        layer_alias: str = DEFAULT_CHANNEL_LAYER,
    ):
        self.registry = registry or SubscriberRegistry()
        self.layer_alias = layer_alias

    @property
    def layer(self):
        return get_channel_layer(self.layer_alias)

    async def subscribe(self, topic: str, channel_name: str) -> None:
        await self.layer.group_add(group_for(topic), channel_name)
        self.registry.add(topic, channel_name)
        logger.debug(
            f"Subscribed {channel_name} to {topic} "
            f"({self.registry.count(topic)} local)"
        )

    async def unsubscribe(self, topic: str, channel_name: str) -> None:
        self.registry.discard(topic, channel_name)
        await self.layer.group_discard(group_for(topic), channel_name)
        logger.debug(f"Unsubscribed {channel_name} from {topic}")

    async def publish(self, topic: str, payload: dict[str, Any]) -> None:
        """Deliver ``payload`` to everyone subscribed to ``topic`` right now."""
        await self.layer.group_send(
            group_for(topic),
            {"type": BROADCAST_CONFIG.MESSAGE_EVENT, "message": payload},
        )

    def publish_sync(self, topic: str, payload: dict[str, Any]) -> None:
        async_to_sync(self.publish)(topic, payload)


_default_channel: BroadcastChannel | None = None
_default_channel_lock = threading.Lock()


def get_broadcast_channel() -> BroadcastChannel:
    """Process-wide BroadcastChannel shared by consumers and services."""
    global _default_channel
    if _default_channel is None:
        with _default_channel_lock:
            if _default_channel is None:
                _default_channel = BroadcastChannel()
    return _default_channel
