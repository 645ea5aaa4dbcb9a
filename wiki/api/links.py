from __future__ import annotations

import re
from typing import Iterable

from sqlalchemy import select
from sqlalchemy.orm import Session

from .app_logging import get_logger
from .models import Article
from .services.access import visible_clause
from .settings import settings
from .titles import normalize_title


WIKILINK_RE = re.compile(r"\[\[([^\]]+)\]\]")

log = get_logger(component="wikilinks")


def extract_wikilinks(md_text: str | None) -> list[str]:
    """Return the distinct ``[[Title]]`` targets in ``md_text``, first spelling wins."""
    if not md_text:
        return []
    seen: set[str] = set()
    titles: list[str] = []
    for match in WIKILINK_RE.finditer(md_text):
        title = match.group(1).strip()
        key = normalize_title(title)
        if not key or key in seen:
            continue
        seen.add(key)
        titles.append(title)
    return titles


def resolve_titles(
    db: Session,
    titles: Iterable[str],
    viewer_id: str | None = None,
) -> dict[str, str | None]:
    """Map each title to the id of the article it names, or ``None``.

    Keys are the titles exactly as given. When several articles share a title
    the oldest one wins. Unless ``WIKILINKS_RESOLVE_PRIVATE`` is set, only
    articles readable by ``viewer_id`` are candidates.
    """
    titles = list(titles)
    if not titles:
        return {}
    keys = {normalize_title(t) for t in titles}
    keys.discard("")
    found: dict[str, str] = {}
    if keys:
        stmt = (
            select(Article.id, Article.title_key)
            .where(Article.title_key.in_(keys))
            .order_by(Article.created_at.asc(), Article.id.asc())
        )
        if not settings.wikilinks_resolve_private:
            stmt = stmt.where(visible_clause(viewer_id))
        for article_id, title_key in db.execute(stmt):
            found.setdefault(title_key, article_id)
    out = {title: found.get(normalize_title(title)) for title in titles}
    log.info("wikilinks.resolved", requested=len(titles), resolved=sum(1 for v in out.values() if v))
    return out
