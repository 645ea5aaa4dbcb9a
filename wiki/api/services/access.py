from __future__ import annotations

from fastapi import HTTPException
from sqlalchemy import or_, true
from sqlalchemy.orm import Session

from ..models import Article, User


def visible_clause(viewer_id: str | None):
    """SQL filter selecting the articles ``viewer_id`` may read."""
    if not viewer_id:
        return Article.is_public == true()
    return or_(
        Article.is_public == true(),
        Article.author_id == viewer_id,
        Article.author_id.is_(None),
    )


def can_read(article: Article, viewer: User | None) -> bool:
    if article.is_public:
        return True
    if viewer is None:
        return False
    return article.author_id is None or article.author_id == viewer.id


def can_edit(article: Article, user: User | None) -> bool:
    if user is None:
        return False
    return article.author_id is None or article.author_id == user.id


def get_readable_article_or_404(db: Session, article_id: str, viewer: User | None) -> Article:
    article = db.get(Article, article_id)
    # Private articles are reported as missing rather than forbidden.
    if not article or not can_read(article, viewer):
        raise HTTPException(status_code=404, detail={"code": "NOT_FOUND", "message": "Article not found"})
    return article


def get_editable_article(db: Session, article_id: str, user: User) -> Article:
    article = get_readable_article_or_404(db, article_id, user)
    if not can_edit(article, user):
        raise HTTPException(
            status_code=403,
            detail={"code": "FORBIDDEN", "message": "Only the author can modify this article"},
        )
    return article
