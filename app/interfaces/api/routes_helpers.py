"""Helper utilities shared across API route handlers."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from fastapi import HTTPException, Request, status


def to_array(param: str | Sequence[str] | None) -> list[str] | None:
    """Normalize a string, comma separated string or list into identifiers.

    Empty values mean "no filter" and yield ``None``. Lists are passed through
    unchanged, strings are split on commas without trimming.
    """

    if not param:
        return None
    if isinstance(param, str):
        return param.split(",")
    return list(param)


def query_values(request: Request, name: str) -> str | list[str] | None:
    """Return a query parameter the way the widget client sends it.

    A parameter given once is a plain (possibly comma separated) string,
    repeated parameters form a list.
    """

    values = request.query_params.getlist(name)
    if not values:
        return None
    if len(values) == 1:
        return values[0]
    return values


def require_message_ids(message_id: str | Sequence[str] | None) -> list[str]:
    """Return the normalized ids or fail with a 400 when none were sent."""

    message_ids = to_array(message_id)
    if not message_ids:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="messageId is required",
        )
    return message_ids


@dataclass(frozen=True)
class CountFlags:
    """Status filters passed to the feed count use case."""

    seen: bool | None
    read: bool | None


def resolve_count_flags(*, seen: bool | None, read: bool | None) -> CountFlags:
    """Default to counting by ``seen=True`` when no flag was supplied.

    Only ``seen`` is defaulted; ``read`` is never set implicitly.
    """

    if seen is None and read is None:
        return CountFlags(seen=True, read=None)
    return CountFlags(seen=seen, read=read)


__all__ = [
    "CountFlags",
    "query_values",
    "require_message_ids",
    "resolve_count_flags",
    "to_array",
]
