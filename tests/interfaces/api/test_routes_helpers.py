"""Tests for the request normalization helpers used by the widget routes."""

import pytest
from fastapi import HTTPException
from starlette.requests import Request

from app.interfaces.api.routes_helpers import (
    query_values,
    require_message_ids,
    resolve_count_flags,
    to_array,
)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, None),
        ("", None),
        ([], None),
        ("a", ["a"]),
        ("a,b,c", ["a", "b", "c"]),
        ("a, b", ["a", " b"]),
        ("a,a", ["a", "a"]),
        (["a", "b"], ["a", "b"]),
        (["a,b", "c"], ["a,b", "c"]),
    ],
)
def test_to_array(value, expected):
    """Strings are split on commas, lists pass through, empties mean no filter."""

    assert to_array(value) == expected


def _request(query_string: bytes) -> Request:
    return Request({"type": "http", "query_string": query_string, "headers": []})


def test_query_values_single_occurrence_is_a_string():
    assert query_values(_request(b"feedIdentifier=news,alerts"), "feedIdentifier") == "news,alerts"


def test_query_values_repeated_occurrences_form_a_list():
    request = _request(b"feedIdentifier=news&feedIdentifier=alerts")

    assert query_values(request, "feedIdentifier") == ["news", "alerts"]


def test_query_values_absent_parameter():
    assert query_values(_request(b"page=1"), "feedIdentifier") is None


@pytest.mark.parametrize(
    ("seen", "read", "expected_seen", "expected_read"),
    [
        (None, None, True, None),
        (False, None, False, None),
        (None, False, None, False),
        (None, True, None, True),
        (True, True, True, True),
    ],
)
def test_resolve_count_flags(seen, read, expected_seen, expected_read):
    """Only an entirely unspecified query defaults, and only ``seen``."""

    flags = resolve_count_flags(seen=seen, read=read)

    assert flags.seen is expected_seen
    assert flags.read is expected_read


@pytest.mark.parametrize("value", [None, "", []])
def test_require_message_ids_rejects_missing_ids(value):
    with pytest.raises(HTTPException) as excinfo:
        require_message_ids(value)

    assert excinfo.value.status_code == 400
    assert excinfo.value.detail == "messageId is required"


def test_require_message_ids_wraps_single_id():
    assert require_message_ids("abc") == ["abc"]
