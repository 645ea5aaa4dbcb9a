from __future__ import annotations

import datetime as dt
import uuid

from sqlalchemy import (
    Column,
    String,
    Text,
    DateTime,
    ForeignKey,
    UniqueConstraint,
    Integer,
    Boolean,
    Table,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from .db import Base
from .schemas import TITLE_MAX_LENGTH
from .titles import normalize_title


def now_utc() -> dt.datetime:
    return dt.datetime.now(tz=dt.timezone.utc)


def new_id() -> str:
    return str(uuid.uuid4())


article_tags_table = Table(
    "article_tags",
    Base.metadata,
    Column("article_id", String, ForeignKey("articles.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", Integer, ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True),
)


class User(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=new_id)
    username: Mapped[str] = mapped_column(String, unique=True, nullable=False)
    email: Mapped[str] = mapped_column(String, unique=True, nullable=False)
    hashed_password: Mapped[str] = mapped_column(String, nullable=False)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=now_utc)
    updated_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), default=now_utc, onupdate=now_utc
    )


class Article(Base):
    __tablename__ = "articles"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=new_id)
    title: Mapped[str] = mapped_column(String(TITLE_MAX_LENGTH), nullable=False)
    # Normalized title used for case-insensitive wiki-link lookups; not unique.
    title_key: Mapped[str] = mapped_column(String(TITLE_MAX_LENGTH), nullable=False, index=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    is_public: Mapped[bool] = mapped_column(Boolean, default=False, server_default="0")
    author_id: Mapped[str | None] = mapped_column(String, ForeignKey("users.id"), nullable=True)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=now_utc)
    updated_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), default=now_utc, onupdate=now_utc
    )

    tag_entities: Mapped[list["Tag"]] = relationship(
        "Tag",
        secondary=article_tags_table,
        back_populates="articles",
        cascade="save-update",
    )
    versions: Mapped[list["ArticleVersion"]] = relationship(
        "ArticleVersion",
        back_populates="article",
        cascade="all, delete-orphan",
        order_by="ArticleVersion.created_at.desc()",
    )
    favorites: Mapped[list["Favorite"]] = relationship(
        "Favorite",
        back_populates="article",
        cascade="all, delete-orphan",
    )

    @validates("title")
    def _sync_title_key(self, _key: str, value: str) -> str:
        self.title_key = normalize_title(value)
        return value

    @property
    def tags(self) -> list[str]:
        return [tag.label for tag in self.tag_entities]


class ArticleVersion(Base):
    __tablename__ = "article_versions"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=new_id)
    article_id: Mapped[str] = mapped_column(
        String, ForeignKey("articles.id", ondelete="CASCADE"), nullable=False, index=True
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    edited_by: Mapped[str | None] = mapped_column(String, ForeignKey("users.id"), nullable=True)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=now_utc)

    article: Mapped[Article] = relationship("Article", back_populates="versions")


class Favorite(Base):
    __tablename__ = "favorites"
    __table_args__ = (UniqueConstraint("user_id", "article_id", name="uq_favorites_user_article"),)

    id: Mapped[str] = mapped_column(String, primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    article_id: Mapped[str] = mapped_column(
        String, ForeignKey("articles.id", ondelete="CASCADE"), nullable=False
    )
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=now_utc)

    article: Mapped[Article] = relationship("Article", back_populates="favorites")


class Tag(Base):
    __tablename__ = "tags"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    slug: Mapped[str] = mapped_column(String, unique=True, nullable=False)
    label: Mapped[str] = mapped_column(String, nullable=False)
    color: Mapped[str | None] = mapped_column(String, nullable=True)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=now_utc)
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    articles: Mapped[list[Article]] = relationship(
        "Article",
        secondary=article_tags_table,
        back_populates="tag_entities",
    )
