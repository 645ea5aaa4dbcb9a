from __future__ import annotations

import os
from dataclasses import dataclass, field


@dataclass
class Config:
    api_base: str = field(default_factory=lambda: os.getenv("WIKI_API_BASE", "http://localhost:8000"))
    username: str | None = field(default_factory=lambda: os.getenv("WIKI_USERNAME"))
    password: str | None = field(default_factory=lambda: os.getenv("WIKI_PASSWORD"))


def load_config() -> Config:
    return Config()
