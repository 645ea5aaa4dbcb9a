from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..db import get_db
from ..models import User
from ..routes import API, route
from ..schemas import ArticleCreate, ArticleSearchParams, ArticleUpdate, RenderResponse
from ..security import get_current_user, require_user
from ..services.access import get_editable_article, get_readable_article_or_404
from ..services.articles import (
    create_article,
    delete_article,
    favorite_ids,
    list_articles,
    serialize_article,
    update_article,
)
from ..services.rendering import render_article_content


router = APIRouter(tags=["articles"])


def viewer_id(user: User | None) -> str | None:
    return user.id if user else None


@route(router, API.articles.list)
def list_articles_endpoint(
    params: ArticleSearchParams = Depends(),
    user: User | None = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    if params.favorite and user is None:
        raise HTTPException(status_code=401, detail={"code": "UNAUTHORIZED", "message": "Login required"})
    favorites = favorite_ids(db, viewer_id(user))
    return [serialize_article(a, favorites) for a in list_articles(db, params, viewer_id(user))]


@route(router, API.articles.get)
def get_article(article_id: str, user: User | None = Depends(get_current_user), db: Session = Depends(get_db)):
    article = get_readable_article_or_404(db, article_id, user)
    return serialize_article(article, favorite_ids(db, viewer_id(user)))


@route(router, API.articles.create)
def create_article_endpoint(body: ArticleCreate, user: User = Depends(require_user), db: Session = Depends(get_db)):
    article = create_article(db, body, user)
    return serialize_article(article)


@route(router, API.articles.update)
def update_article_endpoint(
    article_id: str,
    body: ArticleUpdate,
    user: User = Depends(require_user),
    db: Session = Depends(get_db),
):
    article = get_editable_article(db, article_id, user)
    article = update_article(db, article, body, user)
    return serialize_article(article, favorite_ids(db, user.id))


@route(router, API.articles.delete)
def delete_article_endpoint(article_id: str, user: User = Depends(require_user), db: Session = Depends(get_db)):
    article = get_editable_article(db, article_id, user)
    delete_article(db, article)
    return None


@route(router, API.articles.render)
def render_article(article_id: str, user: User | None = Depends(get_current_user), db: Session = Depends(get_db)):
    article = get_readable_article_or_404(db, article_id, user)
    rendered = render_article_content(db, article.content, viewer_id=viewer_id(user))
    return RenderResponse(html=rendered.html, links=rendered.links)
