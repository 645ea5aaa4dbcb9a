from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from ..db import get_db
from ..models import Article, Favorite, User
from ..routes import API, route
from ..schemas import MessageResponse
from ..security import require_user
from ..services.access import get_readable_article_or_404, visible_clause


router = APIRouter(tags=["favorites"])


@route(router, API.favorites.list)
def list_favorites(user: User = Depends(require_user), db: Session = Depends(get_db)) -> list[str]:
    stmt = (
        select(Favorite.article_id)
        .join(Article, Article.id == Favorite.article_id)
        .where(Favorite.user_id == user.id, visible_clause(user.id))
        .order_by(Favorite.created_at.desc())
    )
    return list(db.scalars(stmt).all())


@route(router, API.favorites.add)
def add_favorite(article_id: str, user: User = Depends(require_user), db: Session = Depends(get_db)):
    article = get_readable_article_or_404(db, article_id, user)
    existing = db.scalar(
        select(Favorite).where(Favorite.user_id == user.id, Favorite.article_id == article.id)
    )
    if not existing:
        db.add(Favorite(user_id=user.id, article_id=article.id))
        db.commit()
    return MessageResponse(message="Added to favorites")


@route(router, API.favorites.remove)
def remove_favorite(article_id: str, user: User = Depends(require_user), db: Session = Depends(get_db)):
    db.execute(delete(Favorite).where(Favorite.user_id == user.id, Favorite.article_id == article_id))
    db.commit()
    return MessageResponse(message="Removed from favorites")
