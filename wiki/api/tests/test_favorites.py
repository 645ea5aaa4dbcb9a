from __future__ import annotations


def test_favorites_roundtrip(make_user, make_article):
    alice = make_user("alice")
    a = make_article(alice, "Alpha", is_public=True)
    make_article(alice, "Beta", is_public=True)

    r = alice.post(f"/api/favorites/{a['id']}")
    assert r.status_code == 200
    # Adding twice is a no-op.
    assert alice.post(f"/api/favorites/{a['id']}").status_code == 200

    assert alice.get("/api/favorites").json() == [a["id"]]
    assert alice.get(f"/api/articles/{a['id']}").json()["is_favorite"] is True

    r = alice.get("/api/articles", params={"favorite": "true"})
    assert [row["title"] for row in r.json()] == ["Alpha"]

    assert alice.delete(f"/api/favorites/{a['id']}").status_code == 200
    assert alice.delete(f"/api/favorites/{a['id']}").status_code == 200
    assert alice.get("/api/favorites").json() == []


def test_favorites_are_per_user(make_user, make_article):
    alice = make_user("alice")
    bob = make_user("bob")
    a = make_article(alice, "Alpha", is_public=True)

    bob.post(f"/api/favorites/{a['id']}")
    assert alice.get("/api/favorites").json() == []
    assert bob.get("/api/favorites").json() == [a["id"]]


def test_cannot_favorite_unreadable_article(client, make_user, make_article):
    alice = make_user("alice")
    bob = make_user("bob")
    private = make_article(alice, "Diary")

    assert bob.post(f"/api/favorites/{private['id']}").status_code == 404
    assert bob.post("/api/favorites/does-not-exist").status_code == 404
    assert client.post(f"/api/favorites/{private['id']}").status_code == 401


def test_favorites_disappear_with_article(make_user, make_article):
    alice = make_user("alice")
    a = make_article(alice, "Alpha")
    alice.post(f"/api/favorites/{a['id']}")
    alice.delete(f"/api/articles/{a['id']}")
    assert alice.get("/api/favorites").json() == []
