"""Declarative table of every HTTP endpoint the wiki exposes.

Routers register their handlers through :func:`route`, and the CLI client
builds URLs and validates payloads from the same descriptors, so paths and
schemas are written down exactly once.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Mapping, NamedTuple

from fastapi import APIRouter

from .schemas import (
    ArticleCreate,
    ArticleRead,
    ArticleSearchParams,
    ArticleUpdate,
    ArticleVersionRead,
    ErrorResponse,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    RenderRequest,
    RenderResponse,
    ResolveTitlesRequest,
    TagCount,
    UserRead,
)


@dataclass(frozen=True)
class Endpoint:
    method: str
    path: str
    input: type | None = None
    responses: Mapping[int, Any] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self) -> None:
        object.__setattr__(self, "responses", MappingProxyType(dict(self.responses)))

    @property
    def status_code(self) -> int:
        return min(code for code in self.responses if code < 300)

    @property
    def response_model(self) -> Any:
        return self.responses[self.status_code]

    @property
    def error_responses(self) -> dict[int, Any]:
        return {code: model for code, model in self.responses.items() if code >= 400}

    def url(self, **params: Any) -> str:
        return build_url(self.path, **params)


def build_url(path: str, **params: Any) -> str:
    url = path
    for key, value in params.items():
        url = url.replace("{" + key + "}", str(value))
    return url


class AuthRoutes(NamedTuple):
    register: Endpoint
    login: Endpoint
    logout: Endpoint
    me: Endpoint


class ArticleRoutes(NamedTuple):
    list: Endpoint
    get: Endpoint
    create: Endpoint
    update: Endpoint
    delete: Endpoint
    render: Endpoint


class FavoriteRoutes(NamedTuple):
    list: Endpoint
    add: Endpoint
    remove: Endpoint


class TagRoutes(NamedTuple):
    list: Endpoint


class WikiLinkRoutes(NamedTuple):
    resolve: Endpoint
    render: Endpoint


class VersionRoutes(NamedTuple):
    list: Endpoint
    render: Endpoint
    restore: Endpoint


class HealthRoutes(NamedTuple):
    check: Endpoint


class RouteTable(NamedTuple):
    auth: AuthRoutes
    articles: ArticleRoutes
    favorites: FavoriteRoutes
    tags: TagRoutes
    wiki_links: WikiLinkRoutes
    versions: VersionRoutes
    health: HealthRoutes


API = RouteTable(
    auth=AuthRoutes(
        register=Endpoint("POST", "/api/auth/register", RegisterRequest, {201: UserRead, 400: ErrorResponse}),
        login=Endpoint("POST", "/api/auth/login", LoginRequest, {200: UserRead, 401: ErrorResponse}),
        logout=Endpoint("POST", "/api/auth/logout", None, {200: MessageResponse}),
        me=Endpoint("GET", "/api/auth/me", None, {200: UserRead, 401: ErrorResponse}),
    ),
    articles=ArticleRoutes(
        list=Endpoint("GET", "/api/articles", ArticleSearchParams, {200: list[ArticleRead], 401: ErrorResponse}),
        get=Endpoint("GET", "/api/articles/{article_id}", None, {200: ArticleRead, 404: ErrorResponse}),
        create=Endpoint(
            "POST",
            "/api/articles",
            ArticleCreate,
            {201: ArticleRead, 400: ErrorResponse, 401: ErrorResponse},
        ),
        update=Endpoint(
            "PUT",
            "/api/articles/{article_id}",
            ArticleUpdate,
            {200: ArticleRead, 400: ErrorResponse, 401: ErrorResponse, 403: ErrorResponse, 404: ErrorResponse},
        ),
        delete=Endpoint(
            "DELETE",
            "/api/articles/{article_id}",
            None,
            {204: None, 401: ErrorResponse, 403: ErrorResponse, 404: ErrorResponse},
        ),
        render=Endpoint("GET", "/api/articles/{article_id}/render", None, {200: RenderResponse, 404: ErrorResponse}),
    ),
    favorites=FavoriteRoutes(
        list=Endpoint("GET", "/api/favorites", None, {200: list[str], 401: ErrorResponse}),
        add=Endpoint(
            "POST",
            "/api/favorites/{article_id}",
            None,
            {200: MessageResponse, 401: ErrorResponse, 404: ErrorResponse},
        ),
        remove=Endpoint("DELETE", "/api/favorites/{article_id}", None, {200: MessageResponse, 401: ErrorResponse}),
    ),
    tags=TagRoutes(
        list=Endpoint("GET", "/api/tags", None, {200: list[TagCount]}),
    ),
    wiki_links=WikiLinkRoutes(
        resolve=Endpoint(
            "POST",
            "/api/articles/resolve-titles",
            ResolveTitlesRequest,
            {200: dict[str, str | None], 400: ErrorResponse},
        ),
        render=Endpoint("POST", "/api/render/markdown", RenderRequest, {200: RenderResponse, 400: ErrorResponse}),
    ),
    versions=VersionRoutes(
        list=Endpoint(
            "GET",
            "/api/articles/{article_id}/versions",
            None,
            {200: list[ArticleVersionRead], 404: ErrorResponse},
        ),
        render=Endpoint(
            "GET",
            "/api/articles/{article_id}/versions/{version_id}/render",
            None,
            {200: RenderResponse, 404: ErrorResponse},
        ),
        restore=Endpoint(
            "POST",
            "/api/articles/{article_id}/versions/{version_id}/restore",
            None,
            {200: ArticleRead, 401: ErrorResponse, 403: ErrorResponse, 404: ErrorResponse},
        ),
    ),
    health=HealthRoutes(
        check=Endpoint("GET", "/api/healthz", None, {200: dict[str, str]}),
    ),
)


def route(router: APIRouter, endpoint: Endpoint, **kwargs: Any) -> Callable[[Callable], Callable]:
    """Register the decorated handler on ``router`` as described by ``endpoint``."""

    def decorator(func: Callable) -> Callable:
        router.add_api_route(
            endpoint.path,
            func,
            methods=[endpoint.method],
            status_code=endpoint.status_code,
            response_model=endpoint.response_model,
            responses={code: {"model": model} for code, model in endpoint.error_responses.items()},
            **kwargs,
        )
        return func

    return decorator
