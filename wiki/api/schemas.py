from __future__ import annotations

import datetime as dt
from typing import Annotated

from pydantic import BaseModel, Field, field_validator


TITLE_MAX_LENGTH = 200
CONTENT_MAX_LENGTH = 100_000
MAX_RESOLVE_TITLES = 50


class ErrorResponse(BaseModel):
    code: str
    message: str
    field: str | None = None


class MessageResponse(BaseModel):
    message: str


# Auth


class RegisterRequest(BaseModel):
    username: str = Field(min_length=3, max_length=50)
    email: str = Field(min_length=3, max_length=254, pattern=r"^[^@\s]+@[^@\s]+$")
    password: str = Field(min_length=8, max_length=256)


class LoginRequest(BaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class UserRead(BaseModel):
    id: str
    username: str
    email: str
    created_at: dt.datetime

    class Config:
        from_attributes = True


# Articles


class ArticleCreate(BaseModel):
    title: str = Field(min_length=1, max_length=TITLE_MAX_LENGTH)
    content: str = Field(min_length=1, max_length=CONTENT_MAX_LENGTH)
    tags: list[str] = Field(default_factory=list)
    is_public: bool = False

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, value):
        return value.strip() if isinstance(value, str) else value


class ArticleUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=TITLE_MAX_LENGTH)
    content: str | None = Field(default=None, min_length=1, max_length=CONTENT_MAX_LENGTH)
    tags: list[str] | None = None
    is_public: bool | None = None

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, value):
        return value.strip() if isinstance(value, str) else value


class ArticleRead(BaseModel):
    id: str
    title: str
    content: str
    tags: list[str]
    is_public: bool
    author_id: str | None = None
    is_favorite: bool = False
    created_at: dt.datetime
    updated_at: dt.datetime

    class Config:
        from_attributes = True


class ArticleSearchParams(BaseModel):
    q: str | None = None
    tag: str | None = None
    favorite: bool = False


class ArticleVersionRead(BaseModel):
    id: str
    article_id: str
    content: str
    edited_by: str | None = None
    created_at: dt.datetime

    class Config:
        from_attributes = True


# Wiki links & rendering


class ResolveTitlesRequest(BaseModel):
    titles: list[Annotated[str, Field(min_length=1)]] = Field(max_length=MAX_RESOLVE_TITLES)


class RenderRequest(BaseModel):
    md: str = Field(max_length=CONTENT_MAX_LENGTH)


class RenderResponse(BaseModel):
    html: str
    links: dict[str, str | None] = Field(default_factory=dict)


# Tags


class TagCount(BaseModel):
    tag: str
    slug: str
    count: int
