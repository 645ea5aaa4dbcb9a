from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..db import get_db
from ..links import resolve_titles
from ..models import User
from ..routes import API, route
from ..schemas import RenderRequest, RenderResponse, ResolveTitlesRequest
from ..security import get_current_user
from ..services.rendering import render_article_content
from .articles import viewer_id


router = APIRouter(tags=["render"])


@route(router, API.wiki_links.resolve)
def resolve_wikilink_titles(
    body: ResolveTitlesRequest,
    user: User | None = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return resolve_titles(db, body.titles, viewer_id=viewer_id(user))


@route(router, API.wiki_links.render)
def render_markdown(body: RenderRequest, user: User | None = Depends(get_current_user), db: Session = Depends(get_db)):
    rendered = render_article_content(db, body.md, viewer_id=viewer_id(user))
    return RenderResponse(html=rendered.html, links=rendered.links)
