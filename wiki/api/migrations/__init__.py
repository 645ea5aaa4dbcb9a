from __future__ import annotations

from pathlib import Path

from alembic import command
from alembic.config import Config

from ..db import engine


MIGRATIONS_DIR = Path(__file__).resolve().parent


def alembic_config(url: str | None = None) -> Config:
    cfg = Config()
    cfg.set_main_option("script_location", str(MIGRATIONS_DIR))
    cfg.set_main_option("sqlalchemy.url", url or engine.url.render_as_string(hide_password=False))
    return cfg


def run_upgrade_head(url: str | None = None) -> None:
    command.upgrade(alembic_config(url), "head")


__all__ = ["alembic_config", "run_upgrade_head"]
