from __future__ import annotations

import secrets
import time
import uuid

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from starlette.middleware.sessions import SessionMiddleware

from .app_logging import get_logger, setup_logging
from .db import Base, engine
from .models import *  # noqa
from .routers import articles, auth, favorites, render, tags, versions
from .routes import API, route
from .settings import settings


setup_logging()
log = get_logger(component="app")

app = FastAPI(
    title="Wiki API",
    version="1.0.0",
    docs_url="/api/docs",
    openapi_url="/api/openapi.json",
)

origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials="*" not in origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

session_secret = settings.session_secret
if not session_secret:
    log.warning("session.secret_missing", message="SESSION_SECRET not set; sessions will not survive restarts")
    session_secret = secrets.token_hex(32)
app.add_middleware(
    SessionMiddleware,
    secret_key=session_secret,
    session_cookie="wiki_session",
    max_age=settings.session_max_age,
    same_site="lax",
    https_only=bool(settings.session_https_only),
)


@app.middleware("http")
async def request_context(request: Request, call_next):
    """Bind a request id for every log line emitted while handling the request."""
    request_id = request.headers.get("x-request-id") or uuid.uuid4().hex
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(request_id=request_id)
    started = time.perf_counter()
    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    log.info(
        "request.completed",
        method=request.method,
        path=request.url.path,
        status=response.status_code,
        duration_ms=round((time.perf_counter() - started) * 1000, 1),
    )
    return response


@app.exception_handler(RequestValidationError)
async def validation_error_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    first = errors[0] if errors else {}
    loc = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    return JSONResponse(
        status_code=400,
        content={
            "detail": {
                "code": "VALIDATION_ERROR",
                "message": first.get("msg", "Invalid request"),
                "field": ".".join(loc) or None,
            }
        },
    )


@app.on_event("startup")
def on_startup() -> None:
    if int(settings.db_migrate or 0) == 1:
        from .migrations import run_upgrade_head

        run_upgrade_head()
    else:
        Base.metadata.create_all(engine)
    # Optional seed
    if int(settings.seed_demo or 0) == 1:
        from .seed import ensure_seed

        ensure_seed()


@route(app.router, API.health.check)
def healthz():
    with engine.connect() as conn:
        conn.execute(text("select 1"))
    return {"status": "ok"}


app.include_router(auth.router)
app.include_router(render.router)
app.include_router(articles.router)
app.include_router(versions.router)
app.include_router(favorites.router)
app.include_router(tags.router)
