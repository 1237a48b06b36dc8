import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


async def test_settings_defaults(client: AsyncClient, admin_header):
    response = await client.get("/api/admin/settings", headers=admin_header)

    assert response.status_code == 200
    settings = response.json()["data"]["settings"]
    assert settings["allow_user_signup"] is True
    assert settings["maintenance_mode"] is False
    assert settings["otp_expiry_minutes"] == 5


async def test_update_settings_is_partial(client: AsyncClient, admin_header, auth_header):
    response = await client.put(
        "/api/admin/settings",
        headers=admin_header,
        json={"allow_calls": False, "otp_expiry_minutes": 10},
    )
    assert response.status_code == 200

    # users read the same settings
    response = await client.get("/api/settings", headers=auth_header)
    settings = response.json()["data"]["settings"]
    assert settings["allow_calls"] is False
    assert settings["otp_expiry_minutes"] == 10
    assert settings["allow_creating_groups"] is True


async def test_update_settings_validation(client: AsyncClient, admin_header):
    response = await client.put(
        "/api/admin/settings", headers=admin_header, json={"otp_expiry_minutes": 0}
    )
    assert response.status_code == 400

    response = await client.put(
        "/api/admin/settings", headers=admin_header, json={"dark_mode": True}
    )
    assert response.status_code == 400


async def test_admin_routes_reject_users(client: AsyncClient, auth_header):
    for method, url in [
        ("GET", "/api/admin/settings"),
        ("GET", "/api/admin/reports/users"),
        ("GET", "/api/sms/logs"),
    ]:
        response = await client.request(method, url, headers=auth_header)
        assert response.status_code == 403, url


async def test_signup_disabled_by_settings(client: AsyncClient, admin_header, test_user):
    await client.put(
        "/api/admin/settings", headers=admin_header, json={"allow_user_signup": False}
    )

    response = await client.post("/api/auth/signup", json={"phone_number": "+15550001111"})
    assert response.status_code == 403

    # existing users can still log in
    response = await client.post("/api/auth/login", json={"phone_number": test_user.phone_number})
    assert response.status_code == 200


async def test_send_sms_is_logged(client: AsyncClient, admin_header):
    response = await client.post(
        "/api/sms/send",
        headers=admin_header,
        json={"phone_number": "+15550002222", "message": "Your parcel is here"},
    )

    assert response.status_code == 200
    assert response.json()["message"] == "SMS sent successfully"
    sms = response.json()["data"]["sms"]
    assert sms["status"] == "sent"
    assert sms["request_id"]

    response = await client.get("/api/sms/logs?search=parcel", headers=admin_header)
    data = response.json()["data"]
    assert data["totalCount"] == 1
    assert data["items"][0]["phone_number"] == "+15550002222"


async def test_otp_messages_appear_in_sms_logs(client: AsyncClient, admin_header):
    await client.post("/api/auth/signup", json={"phone_number": "+15550003333"})

    response = await client.get("/api/sms/logs?search=5550003333", headers=admin_header)

    assert response.json()["data"]["totalCount"] == 1


async def test_sms_rejects_bad_phone(client: AsyncClient, admin_header):
    response = await client.post(
        "/api/sms/send", headers=admin_header, json={"phone_number": "12", "message": "hi"}
    )

    assert response.status_code == 400


async def test_settings_reject_explicit_null(client: AsyncClient, admin_header):
    response = await client.put(
        "/api/admin/settings", headers=admin_header, json={"maintenance_mode": None}
    )

    assert response.status_code == 400
    assert response.json()["error"] is True

    response = await client.get("/api/admin/settings", headers=admin_header)
    assert response.json()["data"]["settings"]["maintenance_mode"] is False


async def test_sms_log_search_treats_wildcards_literally(client: AsyncClient, admin_header):
    for text in ("50% off this week", "plain reminder"):
        await client.post(
            "/api/sms/send",
            headers=admin_header,
            json={"phone_number": "+15550004444", "message": text},
        )

    response = await client.get("/api/sms/logs?search=%25", headers=admin_header)
    assert response.json()["data"]["totalCount"] == 1

    response = await client.get("/api/sms/logs?search=_", headers=admin_header)
    assert response.json()["data"]["totalCount"] == 0
