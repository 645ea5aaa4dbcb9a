from __future__ import annotations

from alembic import command
from sqlalchemy import create_engine, inspect

from wiki.api.migrations import alembic_config, run_upgrade_head


def test_baseline_upgrade_and_downgrade(tmp_path):
    url = f"sqlite:///{tmp_path / 'migrated.sqlite3'}"
    run_upgrade_head(url)

    engine = create_engine(url)
    insp = inspect(engine)
    tables = set(insp.get_table_names())
    assert {"users", "articles", "article_versions", "favorites", "tags", "article_tags", "alembic_version"} <= tables
    assert "ix_articles_title_key" in {ix["name"] for ix in insp.get_indexes("articles")}
    assert "title_key" in {col["name"] for col in insp.get_columns("articles")}

    command.downgrade(alembic_config(url), "base")
    insp = inspect(engine)
    assert set(insp.get_table_names()) <= {"alembic_version"}
    engine.dispose()
