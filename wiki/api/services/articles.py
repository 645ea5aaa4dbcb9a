from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..app_logging import get_logger
from ..models import Article, ArticleVersion, Favorite, Tag, User, article_tags_table
from ..schemas import ArticleCreate, ArticleRead, ArticleSearchParams, ArticleUpdate
from ..utils import slugify
from .access import visible_clause
from .tagging import set_article_tags


log = get_logger(component="articles")


def _record_version(db: Session, article: Article, edited_by: str | None) -> ArticleVersion:
    version = ArticleVersion(article_id=article.id, content=article.content, edited_by=edited_by)
    db.add(version)
    return version


def favorite_ids(db: Session, user_id: str | None) -> set[str]:
    if not user_id:
        return set()
    return set(db.scalars(select(Favorite.article_id).where(Favorite.user_id == user_id)).all())


def serialize_article(article: Article, favorites: set[str] | None = None) -> ArticleRead:
    return ArticleRead(
        id=article.id,
        title=article.title,
        content=article.content,
        tags=article.tags,
        is_public=article.is_public,
        author_id=article.author_id,
        is_favorite=article.id in (favorites or set()),
        created_at=article.created_at,
        updated_at=article.updated_at,
    )


def list_articles(db: Session, params: ArticleSearchParams, viewer_id: str | None) -> list[Article]:
    stmt = select(Article).where(visible_clause(viewer_id))
    if params.q:
        q = params.q.strip()
        if q:
            stmt = stmt.where(
                Article.title.icontains(q, autoescape=True) | Article.content.icontains(q, autoescape=True)
            )
    if params.tag:
        stmt = (
            stmt.join(article_tags_table, article_tags_table.c.article_id == Article.id)
            .join(Tag, Tag.id == article_tags_table.c.tag_id)
            .where(Tag.slug == slugify(params.tag))
        )
    if params.favorite:
        stmt = stmt.join(Favorite, Favorite.article_id == Article.id).where(Favorite.user_id == viewer_id)
    stmt = stmt.order_by(Article.updated_at.desc(), Article.id.asc())
    return list(db.scalars(stmt).unique().all())


def create_article(db: Session, body: ArticleCreate, author: User) -> Article:
    article = Article(
        title=body.title,
        content=body.content,
        is_public=body.is_public,
        author_id=author.id,
    )
    set_article_tags(db, article, body.tags)
    db.add(article)
    db.flush()
    _record_version(db, article, author.id)
    db.commit()
    db.refresh(article)
    log.info("article.created", article_id=article.id, author_id=author.id)
    return article


def update_article(db: Session, article: Article, body: ArticleUpdate, editor: User) -> Article:
    changes: dict[str, Any] = body.model_dump(exclude_unset=True)
    content_changed = False
    if changes.get("title") is not None:
        article.title = changes["title"]
    if changes.get("content") is not None and changes["content"] != article.content:
        article.content = changes["content"]
        content_changed = True
    if changes.get("is_public") is not None:
        article.is_public = changes["is_public"]
    if changes.get("tags") is not None:
        set_article_tags(db, article, changes["tags"])
    if content_changed:
        _record_version(db, article, editor.id)
    db.add(article)
    db.commit()
    db.refresh(article)
    log.info("article.updated", article_id=article.id, editor_id=editor.id, content_changed=content_changed)
    return article


def delete_article(db: Session, article: Article) -> None:
    article_id = article.id
    # Versions and favorites go with the article via relationship cascades.
    db.delete(article)
    db.commit()
    log.info("article.deleted", article_id=article_id)


def list_versions(db: Session, article: Article) -> list[ArticleVersion]:
    stmt = (
        select(ArticleVersion)
        .where(ArticleVersion.article_id == article.id)
        .order_by(ArticleVersion.created_at.desc(), ArticleVersion.id.desc())
    )
    return list(db.scalars(stmt).all())


def get_version(db: Session, article: Article, version_id: str) -> ArticleVersion | None:
    version = db.get(ArticleVersion, version_id)
    if not version or version.article_id != article.id:
        return None
    return version


def restore_version(db: Session, article: Article, version: ArticleVersion, editor: User) -> Article:
    article.content = version.content
    _record_version(db, article, editor.id)
    db.add(article)
    db.commit()
    db.refresh(article)
    log.info("article.version_restored", article_id=article.id, version_id=version.id, editor_id=editor.id)
    return article
