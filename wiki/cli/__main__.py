from __future__ import annotations

import sys
from typing import Any, Optional

import requests
import typer

from wiki.api.routes import API, Endpoint
from wiki.api.schemas import MAX_RESOLVE_TITLES

from .config import Config, load_config


app = typer.Typer(help="Wiki CLI")


def _url(cfg: Config, endpoint: Endpoint, **path_params: Any) -> str:
    return cfg.api_base.rstrip("/") + endpoint.url(**path_params)


def call(
    cfg: Config,
    s: requests.Session,
    endpoint: Endpoint,
    body: dict[str, Any] | None = None,
    params: dict[str, Any] | None = None,
    **path_params: Any,
):
    payload = None
    if body is not None:
        # Validate locally with the same schema the server uses.
        payload = endpoint.input(**body).model_dump(mode="json") if endpoint.input else body
    r = s.request(endpoint.method, _url(cfg, endpoint, **path_params), json=payload, params=params)
    r.raise_for_status()
    return r


def client():
    cfg = load_config()
    s = requests.Session()
    if cfg.username and cfg.password:
        call(cfg, s, API.auth.login, {"username": cfg.username, "password": cfg.password})
    return cfg, s


@app.command()
def new(
    title: str,
    tag: list[str] = typer.Option(None, help="Tag (repeatable)"),
    public: bool = typer.Option(False, help="Make the article public"),
):
    """Create an article; content is read from stdin."""
    cfg, s = client()
    content = sys.stdin.read()
    body = {"title": title, "content": content, "tags": tag or [], "is_public": public}
    r = call(cfg, s, API.articles.create, body)
    typer.echo(r.json()["id"])


@app.command()
def search(
    q: str = typer.Argument("", help="Substring to match in title or content"),
    tag: Optional[str] = typer.Option(None, help="Tag filter"),
    favorite: bool = typer.Option(False, help="Only favorites"),
):
    cfg, s = client()
    params: dict[str, str] = {}
    if q:
        params["q"] = q
    if tag:
        params["tag"] = tag
    if favorite:
        params["favorite"] = "true"
    r = call(cfg, s, API.articles.list, params=params)
    for item in r.json():
        typer.echo(f"{item['id']}\t{item['title']}\t{','.join(item['tags'])}")


@app.command()
def resolve(titles: list[str]):
    """Resolve wiki-link titles to article ids ("-" when missing)."""
    cfg, s = client()
    for start in range(0, len(titles), MAX_RESOLVE_TITLES):
        batch = titles[start : start + MAX_RESOLVE_TITLES]
        r = call(cfg, s, API.wiki_links.resolve, {"titles": batch})
        mapping = r.json()
        for title in batch:
            typer.echo(f"{title}\t{mapping.get(title) or '-'}")


@app.command()
def history(article_id: str):
    cfg, s = client()
    r = call(cfg, s, API.versions.list, article_id=article_id)
    for v in r.json():
        typer.echo(f"{v['id']}\t{v['created_at']}\t{v.get('edited_by') or '-'}")


@app.command()
def restore(article_id: str, version_id: str):
    cfg, s = client()
    r = call(cfg, s, API.versions.restore, article_id=article_id, version_id=version_id)
    typer.echo(r.json()["updated_at"])


if __name__ == "__main__":
    app()
