"""Connection management helpers for widget websockets."""

from __future__ import annotations

from collections import defaultdict
from typing import Any, DefaultDict, Set

import logging

from fastapi import WebSocket

logger = logging.getLogger(__name__)


class WidgetConnectionManager:
    """Manage active websocket connections grouped by subscriber."""

    def __init__(self) -> None:
        self._connections: DefaultDict[str, Set[WebSocket]] = defaultdict(set)

    async def connect(self, subscriber_id: str, websocket: WebSocket) -> None:
        """Accept the websocket connection and register it for ``subscriber_id``."""

        await websocket.accept()
        self._connections[subscriber_id].add(websocket)

    def disconnect(self, subscriber_id: str, websocket: WebSocket) -> None:
        """Remove ``websocket`` from the pool for ``subscriber_id``."""

        connections = self._connections.get(subscriber_id)
        if connections is None:
            return
        connections.discard(websocket)
        if not connections:
            self._connections.pop(subscriber_id, None)

    def is_connected(self, subscriber_id: str) -> bool:
        return bool(self._connections.get(subscriber_id))

    async def send_to_subscriber(self, subscriber_id: str, message: dict[str, Any]) -> None:
        """Send ``message`` to every active connection for ``subscriber_id``."""

        connections = list(self._connections.get(subscriber_id, set()))
        for connection in connections:
            try:
                await connection.send_json(message)
            except Exception as exc:  # pragma: no cover - closed sockets
                logger.warning(
                    "Dropping websocket for subscriber %s after send failure: %s",
                    subscriber_id,
                    exc,
                )
                self.disconnect(subscriber_id, connection)


widget_connection_manager = WidgetConnectionManager()


__all__ = ["WidgetConnectionManager", "widget_connection_manager"]
