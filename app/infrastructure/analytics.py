"""Usage analytics sink for widget events."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

logger = logging.getLogger(__name__)


class AnalyticsService:
    """Record product usage events.

    Events are written to the ``app.infrastructure.analytics`` logger, a log
    shipper can forward them to the analytics backend.
    """

    def __init__(self, event_logger: logging.Logger | None = None) -> None:
        self._logger = event_logger or logger

    def track(self, name: str, organization_id: str, properties: Mapping[str, Any] | None = None) -> None:
        self._logger.info(
            "analytics event %s for organization %s",
            name,
            organization_id,
            extra={"analytics_event": name, "analytics_properties": dict(properties or {})},
        )


analytics_service = AnalyticsService()


def get_analytics_service() -> AnalyticsService:
    """Return the shared :class:`AnalyticsService` instance."""

    return analytics_service


__all__ = ["AnalyticsService", "analytics_service", "get_analytics_service"]
