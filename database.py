"""Database access - settings, connection pool and liveness check"""

import os
from typing import Optional, Tuple
from pydantic import BaseModel
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine, URL, make_url
from dotenv import load_dotenv
from log import log_info, log_exception
from models import Vocabulary
from Dbconfig import (
    DEFAULT_DB_PORT, DEFAULT_POOL_SIZE, HEALTH_QUERY,
    WORD_COLUMNS, DEFINITION_COLUMNS, EXAMPLE_COLUMNS
)


class ConfigurationError(Exception):
    """Exception raised when required database settings are missing"""
    pass


class Settings(BaseModel):
    """Process configuration, read once from the environment"""
    db_host: Optional[str] = None
    db_port: int = DEFAULT_DB_PORT
    db_user: Optional[str] = None
    db_password: str = ""
    db_name: Optional[str] = None
    database_url: Optional[str] = None
    pool_size: int = DEFAULT_POOL_SIZE
    vocabulary: Vocabulary = Vocabulary()
    app_host: str = "0.0.0.0"
    app_port: int = 3000


def _column_list(name: str, default) -> Tuple[str, ...]:
    raw = os.getenv(name)
    if not raw:
        return tuple(default)
    return tuple(part.strip().lower() for part in raw.split(",") if part.strip())


def load_settings() -> Settings:
    """
    Read settings from the environment (and .env, if present)

    DATABASE_URL wins over the individual DB_* fields. Without it,
    DB_HOST and DB_USER are mandatory.
    """
    load_dotenv()

    settings = Settings(
        db_host=os.getenv("DB_HOST") or None,
        db_port=int(os.getenv("DB_PORT", DEFAULT_DB_PORT)),
        db_user=os.getenv("DB_USER") or None,
        db_password=os.getenv("DB_PASS", ""),
        db_name=os.getenv("DB_NAME") or None,
        database_url=os.getenv("DATABASE_URL") or None,
        pool_size=int(os.getenv("DB_POOL_SIZE", DEFAULT_POOL_SIZE)),
        vocabulary=Vocabulary(
            word_columns=_column_list("WORD_COLUMNS", WORD_COLUMNS),
            definition_columns=_column_list("DEFINITION_COLUMNS", DEFINITION_COLUMNS),
            example_columns=_column_list("EXAMPLE_COLUMNS", EXAMPLE_COLUMNS),
        ),
        app_host=os.getenv("APP_HOST", "0.0.0.0"),
        app_port=int(os.getenv("PORT", 3000)),
    )

    if not settings.database_url and (not settings.db_host or not settings.db_user):
        raise ConfigurationError(
            "Missing DB environment configuration. Please set DB_HOST and DB_USER in .env"
        )
    return settings


def build_database_url(settings: Settings):
    """Server-level URL: no database is selected so every schema can be listed"""
    if settings.database_url:
        return make_url(settings.database_url)
    return URL.create(
        "mysql+pymysql",
        username=settings.db_user,
        password=settings.db_password or None,
        host=settings.db_host,
        port=settings.db_port,
    )


def create_db_engine(settings: Settings) -> Engine:
    """Create the engine backing the connection pool"""
    url = build_database_url(settings)
    options = {"echo": False, "pool_pre_ping": True}
    if url.get_backend_name() != "sqlite":
        # Fixed capacity; callers beyond it wait for a free connection
        options.update(pool_size=settings.pool_size, max_overflow=0)

    engine = create_engine(url, **options)
    log_info(f"Connection pool created for {url.render_as_string(hide_password=True)}")
    return engine


@log_exception
def check_database_health(engine: Engine) -> None:
    """Run the liveness query on a pooled connection; raises on failure"""
    with engine.connect() as conn:
        conn.execute(text(HEALTH_QUERY))
