from __future__ import annotations

import hashlib
from typing import Iterable, Sequence

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ..models import Article, Tag, article_tags_table
from ..utils import clean_label, slugify
from .access import visible_clause


def _default_color(slug: str) -> str:
    digest = hashlib.md5(slug.encode("utf-8")).hexdigest()
    return f"#{digest[:6]}"


def ensure_tags(db: Session, labels: Iterable[str]) -> list[Tag]:
    seen: dict[str, Tag] = {}
    for label in labels:
        if not label:
            continue
        cleaned = clean_label(label)
        if not cleaned:
            continue
        slug = slugify(cleaned)
        if slug in seen:
            continue
        tag = db.scalar(select(Tag).where(Tag.slug == slug))
        if not tag:
            tag = Tag(slug=slug, label=cleaned, color=_default_color(slug))
            db.add(tag)
            db.flush()
        seen[slug] = tag
    return list(seen.values())


def set_article_tags(db: Session, article: Article, labels: Sequence[str]) -> None:
    article.tag_entities = ensure_tags(db, labels)


def get_tag_usage(db: Session, viewer_id: str | None = None, limit: int = 200) -> list[dict[str, object]]:
    usage = func.count(article_tags_table.c.article_id)
    stmt = (
        select(Tag, usage.label("usage"))
        .join(article_tags_table, Tag.id == article_tags_table.c.tag_id)
        .join(Article, Article.id == article_tags_table.c.article_id)
        .where(visible_clause(viewer_id))
        .group_by(Tag.id)
        .order_by(usage.desc(), Tag.label.asc())
        .limit(limit)
    )
    rows = db.execute(stmt).all()
    return [{"tag": tag.label, "slug": tag.slug, "count": int(count or 0)} for tag, count in rows]
