"""Integration tests for the subscriber widget endpoints."""

from __future__ import annotations

import pytest

pytest.importorskip("fastapi")
from fastapi import HTTPException
from fastapi.testclient import TestClient
from starlette.websockets import WebSocketDisconnect

from app.interfaces.api.routes import widgets as widgets_routes
from main import create_app


@pytest.fixture()
def client(db_session):
    app = create_app()
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def auth_headers(tenant) -> dict[str, str]:
    return {"Authorization": f"Bearer {tenant.token_for()}"}


def test_session_initialize_returns_token_usable_by_the_widget(client, tenant):
    response = client.post(
        "/widgets/session/initialize",
        json={
            "subscriberId": "subscriber-1",
            "applicationIdentifier": tenant.environment.identifier,
            "firstName": "Ada",
        },
    )

    assert response.status_code == 200
    body = response.json()
    assert body["profile"]["_id"] == tenant.subscriber.id
    assert body["profile"]["firstName"] == "Ada"

    organization = client.get(
        "/widgets/organization", headers={"Authorization": f"Bearer {body['token']}"}
    )
    assert organization.status_code == 200
    assert organization.json() == {
        "_id": tenant.organization.id,
        "name": "Acme",
        "branding": {
            "logo": "logo.png",
            "color": "#ff0000",
            "fontColor": None,
            "contentBackground": None,
            "fontFamily": None,
            "direction": None,
        },
    }


def test_session_initialize_unknown_application(client, tenant):
    response = client.post(
        "/widgets/session/initialize",
        json={"subscriberId": "subscriber-1", "applicationIdentifier": "nope"},
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Please provide a valid app identifier"


@pytest.mark.parametrize(
    ("method", "path"),
    [
        ("get", "/widgets/notifications/feed"),
        ("get", "/widgets/notifications/count"),
        ("post", "/widgets/messages/markAs"),
        ("get", "/widgets/preferences"),
    ],
)
def test_endpoints_require_subscriber_token(client, tenant, method, path):
    response = client.request(method.upper(), path, headers={"Authorization": "Bearer invalid"})

    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"


def test_feed_accepts_comma_separated_and_repeated_identifiers(
    client, tenant, auth_headers, make_message
):
    make_message("news", feed="news")
    make_message("alert", feed="alerts")

    comma = client.get(
        "/widgets/notifications/feed",
        params={"feedIdentifier": "news,alerts"},
        headers=auth_headers,
    )
    repeated = client.get(
        "/widgets/notifications/feed?feedIdentifier=news&feedIdentifier=alerts",
        headers=auth_headers,
    )
    single = client.get(
        "/widgets/notifications/feed",
        params={"feedIdentifier": "news"},
        headers=auth_headers,
    )

    assert comma.json()["totalCount"] == 2
    assert repeated.json()["totalCount"] == 2
    body = single.json()
    assert body["totalCount"] == 1
    assert body["pageSize"] == 2
    assert body["page"] == 0
    [message] = body["data"]
    assert message["content"] == "news"
    assert message["_feedId"] == tenant.feeds["news"].id
    assert message["seen"] is False


def test_count_defaults_to_seen_when_no_flag_is_given(client, tenant, auth_headers, monkeypatch):
    captured = []

    def fake_get_feed_count(db, command):
        captured.append(command)
        return 7

    monkeypatch.setattr(widgets_routes, "get_feed_count", fake_get_feed_count)

    response = client.get("/widgets/notifications/count", headers=auth_headers)

    assert response.json() == {"count": 7}
    [command] = captured
    assert command.seen is True
    assert command.read is None
    assert command.subscriber_id == tenant.subscriber.subscriber_id
    assert command.organization_id == tenant.organization.id
    assert command.environment_id == tenant.environment.id


def test_unseen_and_unread_counts(client, tenant, auth_headers, make_message):
    make_message()
    make_message(seen=True)
    make_message(seen=True, read=True)

    unseen = client.get(
        "/widgets/notifications/unseen", params={"seen": "false"}, headers=auth_headers
    )
    unread = client.get(
        "/widgets/notifications/unread", params={"read": "false"}, headers=auth_headers
    )
    read_count = client.get(
        "/widgets/notifications/count", params={"read": "true"}, headers=auth_headers
    )

    assert unseen.json() == {"count": 1}
    assert unread.json() == {"count": 2}
    assert read_count.json() == {"count": 1}


def test_mark_as_requires_message_id(client, tenant, auth_headers):
    response = client.post(
        "/widgets/messages/markAs", json={"mark": {"seen": True}}, headers=auth_headers
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "messageId is required"


def test_mark_as_accepts_one_or_many_ids(client, tenant, auth_headers, make_message):
    first = make_message("one")
    second = make_message("two")

    single = client.post(
        "/widgets/messages/markAs",
        json={"messageId": first.id, "mark": {"seen": True}},
        headers=auth_headers,
    )
    many = client.post(
        "/widgets/messages/markAs",
        json={"messageId": [first.id, second.id], "mark": {"seen": True, "read": True}},
        headers=auth_headers,
    )

    assert single.status_code == 200
    assert [(m["_id"], m["seen"], m["read"]) for m in single.json()] == [(first.id, True, False)]
    assert [(m["_id"], m["seen"], m["read"]) for m in many.json()] == [
        (first.id, True, True),
        (second.id, True, True),
    ]
    assert many.json()[0]["lastReadDate"] is not None


def test_legacy_read_returns_array_with_the_updated_message(
    client, tenant, auth_headers, make_message
):
    message = make_message()

    response = client.post(f"/widgets/messages/{message.id}/read", headers=auth_headers)

    assert response.status_code == 200
    [updated] = response.json()
    assert updated["_id"] == message.id
    assert updated["read"] is True


def test_legacy_seen_returns_single_record(client, tenant, auth_headers, make_message):
    message = make_message()

    response = client.post(f"/widgets/messages/{message.id}/seen", headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["_id"] == message.id
    assert response.json()["seen"] is True


def test_legacy_seen_for_foreign_message_is_not_found(
    client, tenant, auth_headers, make_message, other_subscriber
):
    foreign = make_message(subscriber=other_subscriber)

    response = client.post(f"/widgets/messages/{foreign.id}/seen", headers=auth_headers)

    assert response.status_code == 404
    assert response.json()["detail"] == "Message not found"


def test_legacy_seen_with_empty_id_is_a_bad_request(db_session, tenant):
    with pytest.raises(HTTPException) as excinfo:
        widgets_routes.mark_message_as_seen(
            message_id="", subscriber_session=tenant.session, db=db_session
        )

    assert excinfo.value.status_code == 400
    assert excinfo.value.detail == "messageId is required"


def test_remove_message_with_empty_id_is_a_bad_request(db_session, tenant):
    with pytest.raises(HTTPException) as excinfo:
        widgets_routes.remove_message_route(
            message_id="", subscriber_session=tenant.session, db=db_session
        )

    assert excinfo.value.status_code == 400


@pytest.mark.parametrize("path", ["/widgets/messages/seen", "/widgets/messages/read"])
def test_mark_all_returns_count_for_both_variants(
    client, tenant, auth_headers, make_message, path
):
    make_message(feed="news")
    make_message(feed="alerts")
    make_message(feed="alerts")

    scoped = client.post(path, json={"feedId": "alerts"}, headers=auth_headers)
    remaining = client.post(path, headers=auth_headers)

    assert scoped.status_code == 200
    assert scoped.json() == 2
    assert remaining.json() == 1


def test_remove_message(client, tenant, auth_headers, make_message):
    message = make_message()

    removed = client.delete(f"/widgets/messages/{message.id}", headers=auth_headers)
    again = client.delete(f"/widgets/messages/{message.id}", headers=auth_headers)

    assert removed.status_code == 200
    assert removed.json()["_id"] == message.id
    assert again.status_code == 404
    feed = client.get("/widgets/notifications/feed", headers=auth_headers)
    assert feed.json()["totalCount"] == 0


def test_message_action_passes_payload_through(client, tenant, auth_headers, make_message):
    message = make_message(cta={"action": {"status": "pending"}})

    response = client.post(
        f"/widgets/messages/{message.id}/actions/primary",
        json={"payload": {"anything": ["goes", 1, None]}, "status": "done"},
        headers=auth_headers,
    )

    assert response.status_code == 200
    action = response.json()["cta"]["action"]
    assert action["status"] == "done"
    assert action["result"] == {"payload": {"anything": ["goes", 1, None]}, "type": "primary"}


def test_message_action_rejects_unknown_button_type(client, tenant, auth_headers, make_message):
    message = make_message()

    response = client.post(
        f"/widgets/messages/{message.id}/actions/tertiary",
        json={"status": "done"},
        headers=auth_headers,
    )

    assert response.status_code == 422


def test_preferences_list_and_update(client, tenant, auth_headers):
    template_id = tenant.templates["welcome"].id

    listed = client.get("/widgets/preferences", headers=auth_headers)
    updated = client.patch(
        f"/widgets/preferences/{template_id}",
        json={"channel": {"type": "in_app", "enabled": False}},
        headers=auth_headers,
    )
    critical = client.patch(
        f"/widgets/preferences/{tenant.templates['security'].id}",
        json={"enabled": False},
        headers=auth_headers,
    )
    missing = client.patch(
        "/widgets/preferences/unknown", json={"enabled": False}, headers=auth_headers
    )

    assert listed.json() == [
        {
            "template": {"_id": template_id, "name": "Welcome", "critical": False},
            "preference": {"enabled": True, "channels": {"in_app": True, "email": False}},
        }
    ]
    assert updated.json()["preference"]["channels"] == {"in_app": False, "email": False}
    assert critical.status_code == 400
    assert missing.status_code == 404


def test_usage_log_tracks_event(client, tenant, auth_headers, caplog):
    with caplog.at_level("INFO", logger="app.infrastructure.analytics"):
        response = client.post(
            "/widgets/usage/log",
            json={"name": "Notification Click", "payload": {"feed": "news"}},
            headers=auth_headers,
        )

    assert response.json() == {"success": True}
    [record] = [r for r in caplog.records if r.name == "app.infrastructure.analytics"]
    assert record.analytics_event == "Notification Click"
    assert record.analytics_properties == {
        "environmentId": tenant.environment.id,
        "feed": "news",
    }


def test_websocket_sends_counts_and_answers_ping(client, tenant, make_message):
    make_message()
    make_message(seen=True)

    with client.websocket_connect(f"/widgets/ws?token={tenant.token_for()}") as websocket:
        init = websocket.receive_json()
        websocket.send_json({"type": "ping"})
        pong = websocket.receive_json()

    assert init == {"type": "init", "data": {"unseenCount": 1, "unreadCount": 2}}
    assert pong == {"type": "pong"}


def test_websocket_rejects_invalid_token(client, tenant):
    with pytest.raises(WebSocketDisconnect):
        with client.websocket_connect("/widgets/ws?token=invalid") as websocket:
            websocket.receive_json()


def test_marking_a_message_pushes_counts_to_open_websocket(
    client, tenant, auth_headers, make_message
):
    message = make_message()

    with client.websocket_connect(f"/widgets/ws?token={tenant.token_for()}") as websocket:
        assert websocket.receive_json()["type"] == "init"

        response = client.post(f"/widgets/messages/{message.id}/seen", headers=auth_headers)
        unseen = websocket.receive_json()
        unread = websocket.receive_json()

    assert response.status_code == 200
    assert unseen == {"type": "unseen_count_changed", "data": {"unseenCount": 0}}
    assert unread == {"type": "unread_count_changed", "data": {"unreadCount": 1}}
