from enum import Enum
from pathlib import Path

from pydantic_settings import BaseSettings


class Env(Enum):
    local = "local"
    dev = "dev"
    prod = "prod"


class Store(Enum):
    memory = "memory"
    sql = "sql"
    sheets = "sheets"


class Config(BaseSettings):
    env: Env = Env.local
    html_dir: Path = Path("assets/html")
    images_dir: Path = Path("assets/img")
    js_dir: Path = Path("assets/js")
    log_level: str = "INFO"

    store: Store = Store.sql
    db_url: str = "sqlite+aiosqlite:///mixology.db"
    sheets_id: str = ""
    sheets_token: str = ""

    openai_api_key: str | None = None
    openai_base_url: str = "https://api.openai.com/v1/"
    openai_model: str = "gpt-4o-mini"
    openai_timeout: float = 30.0

    cache_name: str = "mythic-mixology-v1"
    recent_limit: int = 12


def completion_credential() -> str | None:
    """Read the completion API key fresh, so rotating it needs no restart."""
    return Config().openai_api_key or None
