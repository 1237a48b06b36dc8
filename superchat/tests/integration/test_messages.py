import uuid

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


async def test_direct_message_reaches_inbox(
    client: AsyncClient, auth_header, auth_header2, test_user, test_user2
):
    response = await client.post(
        "/api/messages",
        headers=auth_header,
        json={"to_id": str(test_user2.id), "content": "hola"},
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["recipientCount"] == 1
    assert data["message"]["from_id"] == str(test_user.id)
    message_id = data["message"]["id"]

    response = await client.get("/api/messages/inbox", headers=auth_header2)
    inbox = response.json()["data"]
    assert inbox["totalCount"] == 1
    assert inbox["items"][0]["message"]["content"] == "hola"
    assert inbox["items"][0]["is_read"] is False

    response = await client.get("/api/messages/unread-count", headers=auth_header2)
    assert response.json()["data"]["unreadCount"] == 1

    response = await client.patch(f"/api/messages/{message_id}/read", headers=auth_header2)
    assert response.status_code == 200
    response = await client.get("/api/messages/unread-count", headers=auth_header2)
    assert response.json()["data"]["unreadCount"] == 0


async def test_sender_inbox_stays_empty(client: AsyncClient, auth_header, test_user2):
    await client.post(
        "/api/messages", headers=auth_header, json={"to_id": str(test_user2.id), "content": "x"}
    )

    response = await client.get("/api/messages/inbox", headers=auth_header)

    assert response.json()["data"]["totalCount"] == 0


async def test_message_needs_exactly_one_target(
    client: AsyncClient, auth_header, test_user2, test_group
):
    both = {"to_id": str(test_user2.id), "group_id": str(test_group.id), "content": "x"}
    response = await client.post("/api/messages", headers=auth_header, json=both)
    assert response.status_code == 400

    response = await client.post("/api/messages", headers=auth_header, json={"content": "x"})
    assert response.status_code == 400


async def test_message_to_unknown_user(client: AsyncClient, auth_header):
    response = await client.post(
        "/api/messages", headers=auth_header, json={"to_id": str(uuid.uuid4()), "content": "x"}
    )

    assert response.status_code == 404


async def test_block_stops_messages_both_ways(
    client: AsyncClient, auth_header, auth_header2, test_user, test_user2
):
    await client.post(f"/api/users/{test_user2.id}/block", headers=auth_header)

    response = await client.post(
        "/api/messages", headers=auth_header, json={"to_id": str(test_user2.id), "content": "x"}
    )
    assert response.status_code == 403

    response = await client.post(
        "/api/messages", headers=auth_header2, json={"to_id": str(test_user.id), "content": "x"}
    )
    assert response.status_code == 403


async def test_group_message_fans_out(
    client: AsyncClient, auth_header, auth_header2, auth_header3, test_group, test_user3
):
    await client.post(
        f"/api/groups/{test_group.id}/members",
        headers=auth_header,
        json={"user_id": str(test_user3.id)},
    )

    response = await client.post(
        "/api/messages",
        headers=auth_header,
        json={"group_id": str(test_group.id), "content": "Trail at 7"},
    )

    assert response.status_code == 200
    assert response.json()["data"]["recipientCount"] == 2
    for header in (auth_header2, auth_header3):
        response = await client.get("/api/messages/unread-count", headers=header)
        assert response.json()["data"]["unreadCount"] == 1


async def test_admins_only_group_rejects_plain_member(
    client: AsyncClient, auth_header, auth_header2, test_group
):
    await client.put(
        f"/api/groups/{test_group.id}", headers=auth_header, json={"only_admins_can_post": True}
    )

    response = await client.post(
        "/api/messages",
        headers=auth_header2,
        json={"group_id": str(test_group.id), "content": "can I?"},
    )
    assert response.status_code == 403

    response = await client.post(
        "/api/messages",
        headers=auth_header,
        json={"group_id": str(test_group.id), "content": "announcement"},
    )
    assert response.status_code == 200


async def test_non_member_cannot_post_to_group(client: AsyncClient, auth_header3, test_group):
    response = await client.post(
        "/api/messages",
        headers=auth_header3,
        json={"group_id": str(test_group.id), "content": "hi"},
    )

    assert response.status_code == 403


async def test_disabled_group_rejects_messages(
    client: AsyncClient, auth_header, admin_header, test_group
):
    response = await client.patch(
        f"/api/admin/groups/{test_group.id}/disable",
        headers=admin_header,
        json={"disabled": True},
    )
    assert response.json()["data"]["group"]["disabled"] is True

    response = await client.post(
        "/api/messages",
        headers=auth_header,
        json={"group_id": str(test_group.id), "content": "anyone?"},
    )
    assert response.status_code == 403


async def test_attachments_follow_settings(
    client: AsyncClient, auth_header, admin_header, test_user2
):
    payload = {"to_id": str(test_user2.id), "type": 2, "metadata": {"url": "https://cdn/a.png"}}

    response = await client.post("/api/messages", headers=auth_header, json=payload)
    assert response.status_code == 200
    assert response.json()["data"]["message"]["metadata"] == {"url": "https://cdn/a.png"}

    await client.put(
        "/api/admin/settings", headers=admin_header, json={"allow_send_attachment": False}
    )
    response = await client.post("/api/messages", headers=auth_header, json=payload)
    assert response.status_code == 403


async def test_mark_unknown_message_read(client: AsyncClient, auth_header):
    response = await client.patch(f"/api/messages/{uuid.uuid4()}/read", headers=auth_header)

    assert response.status_code == 404


async def test_admin_token_cannot_send_messages(client: AsyncClient, admin_header, test_user2):
    response = await client.post(
        "/api/messages", headers=admin_header, json={"to_id": str(test_user2.id), "content": "x"}
    )

    assert response.status_code == 403
