"""User API tests — public profiles, per-user feeds, profile edits."""

import pytest


@pytest.mark.asyncio
async def test_get_user_profile_with_post_count(client, make_user):
    user, headers = await make_user(name="Grace Brewster Hopper", bio="COBOL")
    for i in range(3):
        await client.post("/api/posts", json={"content": f"p{i}"}, headers=headers)

    r = await client.get(f"/api/users/{user['id']}")
    assert r.status_code == 200
    profile = r.json()
    assert profile["id"] == user["id"]
    assert profile["name"] == "Grace Brewster Hopper"
    assert profile["avatar"] == "GB"
    assert profile["bio"] == "COBOL"
    assert profile["postsCount"] == 3
    assert "password_hash" not in profile


@pytest.mark.asyncio
async def test_get_unknown_user(client):
    r = await client.get("/api/users/31337")
    assert r.status_code == 404
    assert r.json() == {"error": "User not found"}


@pytest.mark.asyncio
async def test_get_user_bad_id(client):
    r = await client.get("/api/users/not-a-number")
    assert r.status_code == 400


@pytest.mark.asyncio
@pytest.mark.parametrize("user_id", [0, -1, 2**31, 2**63])
async def test_out_of_range_user_id(client, user_id):
    r = await client.get(f"/api/users/{user_id}")
    assert r.status_code == 400
    assert "error" in r.json()

    r = await client.get(f"/api/users/{user_id}/posts")
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_user_posts_only_their_own(client, make_user):
    alice, alice_h = await make_user(name="Alice")
    _, bob_h = await make_user(name="Bob")
    for i in range(4):
        await client.post("/api/posts", json={"content": f"alice {i}"}, headers=alice_h)
    await client.post("/api/posts", json={"content": "bob"}, headers=bob_h)

    r = await client.get(f"/api/users/{alice['id']}/posts", params={"limit": 3})
    assert r.status_code == 200
    data = r.json()
    assert len(data["posts"]) == 3
    assert all(p["user_id"] == alice["id"] for p in data["posts"])
    assert data["pagination"] == {"page": 1, "limit": 3, "total": 4, "totalPages": 2}

    r = await client.get(f"/api/users/{alice['id']}/posts", params={"page": 2, "limit": 3})
    assert [p["content"] for p in r.json()["posts"]] == ["alice 0"]


@pytest.mark.asyncio
async def test_user_posts_for_unknown_user_is_empty(client):
    r = await client.get("/api/users/5555/posts")
    assert r.status_code == 200
    assert r.json()["posts"] == []
    assert r.json()["pagination"]["total"] == 0


# ═══════════════════════════════════════════════════════════
# Profile update
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_update_profile(client, make_user):
    user, headers = await make_user(name="Old Name", bio="old bio")

    r = await client.put(
        "/api/users/profile",
        json={"name": "  maria  salomea sklodowska ", "bio": "Physics"},
        headers=headers,
    )
    assert r.status_code == 200
    updated = r.json()["user"]
    assert updated["id"] == user["id"]
    assert updated["name"] == "maria  salomea sklodowska"
    assert updated["avatar"] == "MS"
    assert updated["bio"] == "Physics"

    me = (await client.get("/api/auth/me", headers=headers)).json()["user"]
    assert me["name"] == "maria  salomea sklodowska"


@pytest.mark.asyncio
async def test_update_profile_clears_bio_when_omitted(client, make_user):
    _, headers = await make_user(bio="something")
    r = await client.put("/api/users/profile", json={"name": "Same"}, headers=headers)
    assert r.status_code == 200
    assert r.json()["user"]["bio"] == ""


@pytest.mark.asyncio
async def test_update_profile_only_touches_caller(client, make_user):
    """There is no id parameter; the body can't redirect the update."""
    other, _ = await make_user(name="Other Person")
    me, headers = await make_user(name="Me Myself")

    r = await client.put(
        "/api/users/profile",
        json={"name": "Hijacked", "id": other["id"]},
        headers=headers,
    )
    assert r.json()["user"]["id"] == me["id"]

    other_profile = (await client.get(f"/api/users/{other['id']}")).json()
    assert other_profile["name"] == "Other Person"


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [{}, {"name": ""}, {"name": "   "}])
async def test_update_profile_requires_name(client, make_user, body):
    _, headers = await make_user()
    r = await client.put("/api/users/profile", json=body, headers=headers)
    assert r.status_code == 400
    assert r.json() == {"error": "Name is required"}


@pytest.mark.asyncio
async def test_update_profile_requires_auth(client):
    r = await client.put("/api/users/profile", json={"name": "x"})
    assert r.status_code == 401

    r = await client.put(
        "/api/users/profile",
        json={"name": "x"},
        headers={"Authorization": "Bearer nope"},
    )
    assert r.status_code == 403


@pytest.mark.asyncio
async def test_user_posts_lenient_paging(client, make_user):
    user, _ = await make_user()
    r = await client.get(
        f"/api/users/{user['id']}/posts", params={"page": "x", "limit": 500}
    )
    assert r.status_code == 200
    assert r.json()["pagination"]["page"] == 1
    assert r.json()["pagination"]["limit"] == 100
