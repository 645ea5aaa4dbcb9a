from __future__ import annotations

from sqlalchemy import select

from .app_logging import get_logger
from .db import session_scope
from .models import Article, ArticleVersion
from .services.tagging import set_article_tags


log = get_logger(component="seed")

DEMO_ARTICLES = [
    (
        "Welcome",
        "# Welcome\n\nThis wiki links pages by title. Start with [[Getting Started]], "
        "or create [[Ideas Inbox]] to see a missing link turn into a real one.\n\n"
        "```markdown\nLinks inside code, like [[Getting Started]], stay literal.\n```\n",
        ["demo", "meta"],
    ),
    (
        "Getting Started",
        "# Getting Started\n\n- Write markdown.\n- Link other pages with `[[Title]]`.\n"
        "- Browse the history of any page.\n\nBack to [[Welcome]].\n",
        ["demo"],
    ),
]


def ensure_seed() -> None:
    with session_scope() as db:
        if db.scalars(select(Article).limit(1)).first():
            return
        for title, content, tags in DEMO_ARTICLES:
            article = Article(title=title, content=content, is_public=True, author_id=None)
            set_article_tags(db, article, tags)
            db.add(article)
            db.flush()
            db.add(ArticleVersion(article_id=article.id, content=content, edited_by=None))
        log.info("seed.created", articles=len(DEMO_ARTICLES))


if __name__ == "__main__":
    ensure_seed()
