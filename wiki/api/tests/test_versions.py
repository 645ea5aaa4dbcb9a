from __future__ import annotations

from sqlalchemy import func, select

from wiki.api.db import SessionLocal
from wiki.api.models import ArticleVersion


def _versions(c, article_id):
    r = c.get(f"/api/articles/{article_id}/versions")
    assert r.status_code == 200, r.text
    return r.json()


def test_version_recorded_on_create(make_user, make_article):
    alice = make_user("alice")
    article = make_article(alice, "Alpha", content="first")
    versions = _versions(alice, article["id"])
    assert len(versions) == 1
    assert versions[0]["content"] == "first"
    assert versions[0]["article_id"] == article["id"]
    assert versions[0]["edited_by"] == article["author_id"]


def test_version_only_when_content_changes(make_user, make_article):
    alice = make_user("alice")
    article = make_article(alice, "Alpha", content="first")

    alice.put(f"/api/articles/{article['id']}", json={"title": "Alpha 2", "tags": ["x"]})
    alice.put(f"/api/articles/{article['id']}", json={"content": "first"})
    assert len(_versions(alice, article["id"])) == 1

    alice.put(f"/api/articles/{article['id']}", json={"content": "second"})
    versions = _versions(alice, article["id"])
    assert [v["content"] for v in versions] == ["second", "first"]


def test_restore_version(make_user, make_article):
    alice = make_user("alice")
    article = make_article(alice, "Alpha", content="first")
    alice.put(f"/api/articles/{article['id']}", json={"content": "second"})
    oldest = _versions(alice, article["id"])[-1]

    r = alice.post(f"/api/articles/{article['id']}/versions/{oldest['id']}/restore")
    assert r.status_code == 200
    assert r.json()["content"] == "first"
    assert [v["content"] for v in _versions(alice, article["id"])] == ["first", "second", "first"]


def test_restore_requires_author(make_user, make_article):
    alice = make_user("alice")
    bob = make_user("bob")
    article = make_article(alice, "Alpha", content="first", is_public=True)
    version = _versions(alice, article["id"])[0]

    assert bob.post(f"/api/articles/{article['id']}/versions/{version['id']}/restore").status_code == 403


def test_unknown_or_foreign_version_is_404(make_user, make_article):
    alice = make_user("alice")
    a = make_article(alice, "Alpha")
    b = make_article(alice, "Beta")
    b_version = _versions(alice, b["id"])[0]

    assert alice.get(f"/api/articles/{a['id']}/versions/missing/render").status_code == 404
    assert alice.get(f"/api/articles/{a['id']}/versions/{b_version['id']}/render").status_code == 404
    assert alice.post(f"/api/articles/{a['id']}/versions/{b_version['id']}/restore").status_code == 404


def test_render_version_resolves_links(client, make_user, make_article):
    alice = make_user("alice")
    target = make_article(alice, "Target", is_public=True)
    article = make_article(alice, "Alpha", content="Old link to [[Target]]", is_public=True)
    alice.put(f"/api/articles/{article['id']}", json={"content": "No links now"})
    old = _versions(client, article["id"])[-1]

    r = client.get(f"/api/articles/{article['id']}/versions/{old['id']}/render")
    assert r.status_code == 200
    assert r.json()["links"] == {"Target": target["id"]}
    assert 'class="wikilink"' in r.json()["html"]


def test_versions_of_private_article_hidden(client, make_user, make_article):
    alice = make_user("alice")
    article = make_article(alice, "Diary")
    assert client.get(f"/api/articles/{article['id']}/versions").status_code == 404


def test_versions_deleted_with_article(make_user, make_article):
    alice = make_user("alice")
    article = make_article(alice, "Alpha", content="first")
    alice.put(f"/api/articles/{article['id']}", json={"content": "second"})
    assert alice.delete(f"/api/articles/{article['id']}").status_code == 204

    with SessionLocal() as db:
        count = db.scalar(select(func.count()).select_from(ArticleVersion).where(ArticleVersion.article_id == article["id"]))
    assert count == 0
