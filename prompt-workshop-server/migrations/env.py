"""Alembic environment for the prompt workshop schema.

The database URL always comes from the application settings
(``DATABASE__URL``), never from ``alembic.ini``. SQLite runs in batch mode so
that column alterations on existing tables work.
"""

from __future__ import annotations

import asyncio
from logging.config import fileConfig
from typing import Any

from alembic import context
from sqlalchemy.engine import Connection

from workshop.core.config import get_settings
from workshop.db import models  # noqa: F401
from workshop.infrastructure.database.base import Base
from workshop.infrastructure.database.session import dispose_engine, get_engine

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def _sync_url(url: str) -> str:
    # offline mode renders SQL without a driver, so the async dialect is dropped
    return url.replace("+aiosqlite", "", 1)


def _migration_options(dialect_name: str) -> dict[str, Any]:
    return {
        "target_metadata": target_metadata,
        "compare_type": True,
        "render_as_batch": dialect_name == "sqlite",
    }


def run_migrations_offline() -> None:
    url = _sync_url(get_settings().database_url)
    context.configure(
        url=url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **_migration_options(url.split(":", 1)[0].split("+", 1)[0]),
    )
    with context.begin_transaction():
        context.run_migrations()


def _apply(connection: Connection) -> None:
    context.configure(connection=connection, **_migration_options(connection.dialect.name))
    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    engine = get_engine()
    try:
        async with engine.connect() as connection:
            await connection.run_sync(_apply)
    finally:
        await dispose_engine()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
