"""Domain entity representing a feed."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Feed:
    """Named grouping of in-app messages a subscriber can filter by."""

    id: str | None
    organization_id: str
    environment_id: str
    name: str
    identifier: str


__all__ = ["Feed"]
