"""API key resolution and caller identity."""
from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest

from followgraph.models import ApiKey, ApiScope


@pytest.mark.anyio
async def test_unknown_key_is_unauthorized(client):
    resp = await client.get("/users", headers={"Authorization": "Bearer nope"})

    assert resp.status_code == 401
    assert resp.json()["error"]["code"] == "UNAUTHORIZED"


@pytest.mark.anyio
async def test_x_api_key_header_is_accepted(client, make_user, make_api_key):
    alice = make_user("alice")
    token = f"raw-{uuid4().hex}"
    make_api_key(token, user=alice)

    resp = await client.get(f"/following/{alice.id}", headers={"X-API-Key": token})

    assert resp.status_code == 200


@pytest.mark.anyio
async def test_revoked_and_expired_keys_are_rejected(client, make_user, make_api_key):
    alice = make_user("alice")
    revoked, expired = f"revoked-{uuid4().hex}", f"expired-{uuid4().hex}"
    make_api_key(revoked, user=alice, is_active=False)
    make_api_key(expired, user=alice, expires_at=datetime.now(UTC) - timedelta(minutes=1))

    for token in (revoked, expired):
        resp = await client.get("/users", headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 401


@pytest.mark.anyio
async def test_key_without_user_cannot_act(client, admin_headers):
    resp = await client.post("/follow", json={"target_id": 1, "action": "follow"}, headers=admin_headers)

    assert resp.status_code == 403
    assert resp.json()["error"]["code"] == "API_KEY_NOT_BOUND"


@pytest.mark.anyio
async def test_issued_key_acts_as_its_user(client, admin_headers, make_user, db_session):
    alice, bob = make_user("alice"), make_user("bob")

    created = await client.post(
        "/apikeys",
        json={"name": f"alice-{uuid4().hex[:6]}", "user_id": alice.id},
        headers=admin_headers,
    )
    assert created.status_code == 201
    raw = created.json()["key"]

    resp = await client.post(
        "/follow",
        json={"target_id": bob.id, "action": "follow"},
        headers={"Authorization": f"Bearer {raw}"},
    )
    assert resp.status_code == 200
    assert resp.json()["status"] == "accepted"

    key = db_session.get(ApiKey, created.json()["id"])
    assert key.last_used_at is not None


@pytest.mark.anyio
async def test_user_scoped_key_requires_user(client, admin_headers):
    resp = await client.post("/apikeys", json={"name": f"orphan-{uuid4().hex[:6]}"}, headers=admin_headers)

    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "APIKEY_USER_REQUIRED"


@pytest.mark.anyio
async def test_admin_can_revoke_key(client, admin_headers, make_user, make_api_key):
    alice = make_user("alice")
    token = f"revokable-{uuid4().hex}"
    api_key = make_api_key(token, user=alice)

    resp = await client.delete(f"/apikeys/{api_key.id}", headers=admin_headers)
    assert resp.status_code == 204

    after = await client.get("/users", headers={"Authorization": f"Bearer {token}"})
    assert after.status_code == 401


@pytest.mark.anyio
async def test_user_cannot_manage_apikeys(client, make_user, headers_for):
    resp = await client.get("/apikeys/1", headers=headers_for(make_user("alice")))

    assert resp.status_code == 403
    assert resp.json()["error"]["code"] == "INSUFFICIENT_SCOPE"


def test_admin_scope_constant():
    assert {scope.value for scope in ApiScope} == {"user", "admin"}
