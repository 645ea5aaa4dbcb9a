from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..db import get_db
from ..models import Article, ArticleVersion, User
from ..routes import API, route
from ..schemas import RenderResponse
from ..security import get_current_user, require_user
from ..services.access import get_editable_article, get_readable_article_or_404
from ..services.articles import favorite_ids, get_version, list_versions, restore_version, serialize_article
from ..services.rendering import render_article_content
from .articles import viewer_id


router = APIRouter(tags=["versions"])


def _get_version_or_404(db: Session, article: Article, version_id: str) -> ArticleVersion:
    version = get_version(db, article, version_id)
    if not version:
        raise HTTPException(status_code=404, detail={"code": "NOT_FOUND", "message": "Version not found"})
    return version


@route(router, API.versions.list)
def list_article_versions(
    article_id: str,
    user: User | None = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    article = get_readable_article_or_404(db, article_id, user)
    return list_versions(db, article)


@route(router, API.versions.render)
def render_article_version(
    article_id: str,
    version_id: str,
    user: User | None = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    article = get_readable_article_or_404(db, article_id, user)
    version = _get_version_or_404(db, article, version_id)
    rendered = render_article_content(db, version.content, viewer_id=viewer_id(user))
    return RenderResponse(html=rendered.html, links=rendered.links)


@route(router, API.versions.restore)
def restore_article_version(
    article_id: str,
    version_id: str,
    user: User = Depends(require_user),
    db: Session = Depends(get_db),
):
    article = get_editable_article(db, article_id, user)
    version = _get_version_or_404(db, article, version_id)
    article = restore_version(db, article, version, user)
    return serialize_article(article, favorite_ids(db, user.id))
