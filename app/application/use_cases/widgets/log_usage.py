"""Use case for forwarding widget usage events to analytics."""

from app.infrastructure.analytics import AnalyticsService

from .commands import LogUsageCommand


def log_usage(analytics: AnalyticsService, command: LogUsageCommand) -> bool:
    """Track the event for the session organization; always succeeds."""

    analytics.track(
        command.name,
        command.organization_id,
        {"environmentId": command.environment_id, **(command.payload or {})},
    )
    return True
