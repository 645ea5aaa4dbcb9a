from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..db import get_db
from ..models import User
from ..routes import API, route
from ..security import get_current_user
from ..services.tagging import get_tag_usage
from .articles import viewer_id


router = APIRouter(tags=["tags"])


@route(router, API.tags.list)
def list_tags(
    limit: int = Query(200, ge=1, le=500),
    user: User | None = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> list[dict[str, Any]]:
    return get_tag_usage(db, viewer_id=viewer_id(user), limit=limit)
