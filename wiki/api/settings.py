from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    data_dir: str = "data"  # relative to the working directory
    database_url: str | None = None
    log_level: str = "INFO"
    log_format: str = "json"  # json | console
    cors_origins: str = "*"
    # Sessions. Leave SESSION_SECRET unset in dev to get a per-process random secret.
    session_secret: str | None = None
    session_max_age: int = 7 * 24 * 60 * 60
    session_https_only: int = 0
    password_hash_iterations: int = 390_000
    seed_demo: int = 1
    db_migrate: int = 1
    article_url_template: str = "/article/{id}"
    # Feature flags
    wikilinks_resolve_private: int = 0

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
