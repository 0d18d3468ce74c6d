#!/usr/bin/env python3
"""
LinkedCommunity Quickstart — the member journey in one script.

Register → login → post → like → unlike → profile → search → delete.
Run with: python examples/quickstart.py

Requires: pip install httpx
Backend must be running: http://localhost:5000  (linkedcommunity serve)
"""

import sys
import uuid

import httpx

BASE = "http://localhost:5000/api"


def main():
    run_id = uuid.uuid4().hex[:6]
    client = httpx.Client(base_url=BASE, timeout=10)

    # ── Health check ──────────────────────────────────────────────
    print("Checking backend health...")
    try:
        resp = client.get("/health")
    except httpx.ConnectError:
        print(f"Backend not reachable at {BASE}")
        sys.exit(1)
    print(f"  {resp.json()['status']} (v{resp.json()['version']})")

    # ── Register ──────────────────────────────────────────────────
    email = f"demo-{run_id}@example.com"
    password = "demo-password"
    print("\n1. Registering...")
    resp = client.post("/auth/register", json={
        "name": "Demo Member",
        "email": email,
        "password": password,
        "bio": "Trying out the API",
    })
    assert resp.status_code == 201, f"Failed: {resp.text}"
    user = resp.json()["user"]
    print(f"   User #{user['id']} {user['name']} [{user['avatar']}]")

    # ── Login ─────────────────────────────────────────────────────
    print("\n2. Logging in...")
    resp = client.post("/auth/login", json={"email": email, "password": password})
    assert resp.status_code == 200, f"Failed: {resp.text}"
    client.headers["Authorization"] = f"Bearer {resp.json()['token']}"

    # ── Post ──────────────────────────────────────────────────────
    print("\n3. Posting...")
    resp = client.post("/posts", json={"content": f"Hello from quickstart {run_id}!"})
    assert resp.status_code == 201, f"Failed: {resp.text}"
    post = resp.json()
    print(f"   Post #{post['id']}: {post['content']}")

    # ── Like / unlike ─────────────────────────────────────────────
    print("\n4. Toggling like twice...")
    for _ in range(2):
        resp = client.post(f"/posts/{post['id']}/like")
        print(f"   {resp.json()['message']}")

    # ── Feed ──────────────────────────────────────────────────────
    resp = client.get(f"/users/{user['id']}/posts")
    page = resp.json()
    print(f"\n5. My posts: {page['pagination']['total']} total")
    for p in page["posts"]:
        print(f"   #{p['id']} likes={p['likes_count']} liked={p['liked']}")

    # ── Profile + search ──────────────────────────────────────────
    resp = client.put("/users/profile", json={"name": "Demo Member Renamed", "bio": "Updated"})
    print(f"\n6. Renamed → avatar {resp.json()['user']['avatar']}")

    resp = client.get("/search/users", params={"q": run_id})
    print(f"   Search '{run_id}': {len(resp.json()['users'])} match(es)")

    # ── Clean up ──────────────────────────────────────────────────
    resp = client.delete(f"/posts/{post['id']}")
    print(f"\n7. {resp.json()['message']}")


if __name__ == "__main__":
    main()
