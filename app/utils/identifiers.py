"""Identifier generation for persisted records."""

from uuid import uuid4


def new_id() -> str:
    """Return a new 32 character hexadecimal identifier."""

    return uuid4().hex
