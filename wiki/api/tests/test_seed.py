from __future__ import annotations

from wiki.api.seed import DEMO_ARTICLES, ensure_seed


def test_seed_creates_linked_demo_articles(client):
    ensure_seed()
    ensure_seed()  # idempotent

    articles = client.get("/api/articles").json()
    assert sorted(a["title"] for a in articles) == sorted(title for title, _, _ in DEMO_ARTICLES)

    welcome = next(a for a in articles if a["title"] == "Welcome")
    getting_started = next(a for a in articles if a["title"] == "Getting Started")
    rendered = client.get(f"/api/articles/{welcome['id']}/render").json()
    assert rendered["links"] == {"Getting Started": getting_started["id"], "Ideas Inbox": None}
    assert "[[Getting Started]]" in rendered["html"]

    assert len(client.get(f"/api/articles/{welcome['id']}/versions").json()) == 1


def test_seeded_articles_editable_by_any_user(make_user):
    ensure_seed()
    bob = make_user("bob")
    welcome = next(a for a in bob.get("/api/articles").json() if a["title"] == "Welcome")
    r = bob.put(f"/api/articles/{welcome['id']}", json={"content": "Edited by bob"})
    assert r.status_code == 200
