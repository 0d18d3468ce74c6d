"""User search tests."""

import pytest


@pytest.mark.asyncio
@pytest.mark.parametrize("params", [{}, {"q": ""}, {"q": "a"}, {"q": "  b  "}])
async def test_search_query_too_short(client, params):
    r = await client.get("/api/search/users", params=params)
    assert r.status_code == 400
    assert r.json() == {"error": "Search query must be at least 2 characters"}


@pytest.mark.asyncio
async def test_search_matches_name_or_email_case_insensitively(client, make_user):
    sarah, _ = await make_user(name="Sarah Johnson", email="sarah@example.com")
    michael, _ = await make_user(name="Michael Chen", email="mchen@corp.test")
    await make_user(name="Emily Rodriguez", email="emily@example.com")

    r = await client.get("/api/search/users", params={"q": "JOHN"})
    assert r.status_code == 200
    assert [u["id"] for u in r.json()["users"]] == [sarah["id"]]

    r = await client.get("/api/search/users", params={"q": "corp.TEST"})
    assert [u["id"] for u in r.json()["users"]] == [michael["id"]]

    r = await client.get("/api/search/users", params={"q": "  example  "})
    assert len(r.json()["users"]) == 2

    r = await client.get("/api/search/users", params={"q": "zz"})
    assert r.json()["users"] == []


@pytest.mark.asyncio
async def test_search_result_shape(client, make_user):
    await make_user(name="Ada Lovelace", email="countess@example.com", bio="Notes on the engine")
    r = await client.get("/api/search/users", params={"q": "ada"})
    (user,) = r.json()["users"]
    assert set(user) == {"id", "name", "email", "bio", "avatar"}


@pytest.mark.asyncio
async def test_search_capped_at_twenty(client, make_user):
    for i in range(23):
        await make_user(name=f"Tester {i}")
    r = await client.get("/api/search/users", params={"q": "tester"})
    assert len(r.json()["users"]) == 20


@pytest.mark.asyncio
async def test_search_wildcards_are_literal(client, make_user):
    await make_user(name="Plain Name")
    pct, _ = await make_user(name="100% Real")

    r = await client.get("/api/search/users", params={"q": "%%"})
    assert r.json()["users"] == []

    r = await client.get("/api/search/users", params={"q": "0%"})
    assert [u["id"] for u in r.json()["users"]] == [pct["id"]]
