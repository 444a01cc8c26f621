"""End-to-end tests of the REST surface."""

from datetime import datetime, timedelta, timezone

import pytest
from httpx import AsyncClient

from cinecollection.services.auth_service import AuthService


async def register(client: AsyncClient, email="dana@example.com", password="pw-123456", name="Dana"):
    return await client.post("/auth/register", json={"email": email, "password": password, "name": name})


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


# Authentication

@pytest.mark.asyncio
async def test_register_login_and_me(client: AsyncClient):
    response = await register(client)

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "User created successfully"
    assert body["user"]["email"] == "dana@example.com"
    assert "password" not in body["user"] and "password_hash" not in body["user"]

    response = await client.post("/auth/login", json={"email": "dana@example.com", "password": "pw-123456"})
    assert response.status_code == 200
    login = response.json()
    assert login["message"] == "Login successful"

    response = await client.get("/auth/me", headers=bearer(login["token"]))
    assert response.status_code == 200
    assert response.json()["user"] == login["user"]


@pytest.mark.asyncio
async def test_register_missing_fields(client: AsyncClient):
    response = await client.post("/auth/register", json={"email": "x@example.com"})

    assert response.status_code == 400
    assert response.json() == {"error": "Email, password, and name are required"}


@pytest.mark.asyncio
async def test_register_existing_user(client: AsyncClient):
    await register(client)
    response = await register(client)

    assert response.status_code == 400
    assert response.json() == {"error": "User already exists"}


@pytest.mark.asyncio
async def test_login_failures_look_the_same(client: AsyncClient):
    await register(client)

    wrong_password = await client.post("/auth/login", json={"email": "dana@example.com", "password": "nope"})
    unknown_email = await client.post("/auth/login", json={"email": "ghost@example.com", "password": "nope"})

    assert wrong_password.status_code == unknown_email.status_code == 400
    assert wrong_password.json() == unknown_email.json() == {"error": "Invalid credentials"}


# Access guard

@pytest.mark.asyncio
@pytest.mark.parametrize(
    "headers",
    [
        {},
        {"Authorization": "token-without-scheme"},
        {"Authorization": "Basic dXNlcjpwYXNz"},
        {"Authorization": "Bearer "},
        {"Authorization": "Bearer not.a.jwt"},
    ],
)
async def test_entries_require_valid_bearer_token(client: AsyncClient, headers):
    response = await client.get("/entries", headers=headers)

    assert response.status_code == 401
    assert "error" in response.json()
    assert response.headers["WWW-Authenticate"] == "Bearer"


@pytest.mark.asyncio
async def test_expired_token_rejected(client: AsyncClient, alice, auth_service):
    identity, _ = alice
    user = await auth_service.get_user(identity.user_id)
    expired = AuthService.issue_token(user, issued_at=datetime.now(timezone.utc) - timedelta(hours=25))

    response = await client.get("/entries", headers=bearer(expired))

    assert response.status_code == 401


# Entries

@pytest.mark.asyncio
async def test_entry_crud_round_trip(client: AsyncClient, auth_headers, sample_entry_data):
    response = await client.post("/entries", json=sample_entry_data, headers=auth_headers)
    assert response.status_code == 201
    created = response.json()
    assert created["title"] == "Inception"
    assert created["yearTime"] == "2010"
    assert created["posterUrl"] == sample_entry_data["posterUrl"]
    entry_id = created["id"]

    response = await client.get(f"/entries/{entry_id}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["id"] == entry_id

    update = dict(sample_entry_data, title="Tenet", yearTime="2020")
    response = await client.put(f"/entries/{entry_id}", json=update, headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["title"] == "Tenet"
    assert response.json()["yearTime"] == "2020"

    response = await client.delete(f"/entries/{entry_id}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json() == {"message": "Entry deleted successfully"}

    response = await client.delete(f"/entries/{entry_id}", headers=auth_headers)
    assert response.status_code == 404
    assert response.json() == {"error": "Entry not found"}


@pytest.mark.asyncio
async def test_create_missing_required_field(client: AsyncClient, auth_headers):
    response = await client.post("/entries", json={"title": "", "type": "Movie", "director": "X"}, headers=auth_headers)

    assert response.status_code == 400
    assert response.json() == {"error": "Title, type, and director are required"}


@pytest.mark.asyncio
async def test_other_users_entry_is_404(client: AsyncClient, alice, bob, sample_entry_data):
    _, alice_token = alice
    _, bob_token = bob
    created = (await client.post("/entries", json=sample_entry_data, headers=bearer(alice_token))).json()

    for method in ("get", "delete"):
        response = await getattr(client, method)(f"/entries/{created['id']}", headers=bearer(bob_token))
        assert response.status_code == 404
    response = await client.put(f"/entries/{created['id']}", json=sample_entry_data, headers=bearer(bob_token))
    assert response.status_code == 404

    listing = (await client.get("/entries", headers=bearer(bob_token))).json()
    assert listing["entries"] == []


@pytest.mark.asyncio
async def test_listing_pagination_and_search(client: AsyncClient, auth_headers):
    for i in range(15):
        kind = "TV Show" if i % 5 == 0 else "Movie"
        await client.post(
            "/entries",
            json={"title": f"Title {i}", "type": kind, "director": "Director"},
            headers=auth_headers,
        )

    first = (await client.get("/entries", params={"page": 1, "limit": 12}, headers=auth_headers)).json()
    assert len(first["entries"]) == 12
    assert first["currentPage"] == 1
    assert first["totalPages"] == 2
    assert first["totalEntries"] == 15
    assert first["hasMore"] is True
    assert first["entries"][0]["title"] == "Title 14"

    second = (await client.get("/entries", params={"page": 2, "limit": 12}, headers=auth_headers)).json()
    assert [e["title"] for e in second["entries"]] == ["Title 2", "Title 1", "Title 0"]
    assert second["hasMore"] is False

    shows = (await client.get("/entries", params={"search": "tv show"}, headers=auth_headers)).json()
    assert shows["totalEntries"] == 3
    assert {e["title"] for e in shows["entries"]} == {"Title 0", "Title 5", "Title 10"}


@pytest.mark.asyncio
async def test_listing_defaults_to_forty_per_page(client: AsyncClient, auth_headers):
    response = await client.get("/entries", headers=auth_headers)

    assert response.status_code == 200
    assert response.json() == {
        "entries": [],
        "currentPage": 1,
        "totalPages": 0,
        "totalEntries": 0,
        "hasMore": False,
    }


@pytest.mark.asyncio
@pytest.mark.parametrize("params", [{"page": 0}, {"limit": 0}, {"page": "abc"}])
async def test_listing_rejects_bad_paging(client: AsyncClient, auth_headers, params):
    response = await client.get("/entries", params=params, headers=auth_headers)

    assert response.status_code == 400
    assert "error" in response.json()


@pytest.mark.asyncio
async def test_unknown_route_uses_error_shape(client: AsyncClient, auth_headers):
    response = await client.get("/nowhere", headers=auth_headers)

    assert response.status_code == 404
    assert "error" in response.json()


@pytest.mark.asyncio
async def test_password_whitespace_is_significant(client: AsyncClient):
    response = await register(client, email="  Pat@Example.com ", password="  secret  ", name=" Pat ")
    assert response.status_code == 201
    assert response.json()["user"]["email"] == "pat@example.com"
    assert response.json()["user"]["name"] == "Pat"

    stripped = await client.post("/auth/login", json={"email": "pat@example.com", "password": "secret"})
    assert stripped.status_code == 400
    assert stripped.json() == {"error": "Invalid credentials"}

    exact = await client.post("/auth/login", json={"email": "pat@example.com", "password": "  secret  "})
    assert exact.status_code == 200


@pytest.mark.asyncio
async def test_huge_page_number_is_empty_page(client: AsyncClient, auth_headers, sample_entry_data):
    await client.post("/entries", json=sample_entry_data, headers=auth_headers)

    response = await client.get("/entries", params={"page": 10**17, "limit": 100}, headers=auth_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["entries"] == []
    assert body["hasMore"] is False
    assert body["totalEntries"] == 1
    assert body["totalPages"] == 1
