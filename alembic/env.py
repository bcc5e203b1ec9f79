# ==============================================================================
# ALEMBIC ENVIRONMENT - Catalog Schema Migrations
# ==============================================================================
# Autogenerates against SQLBase.metadata (products, categories, link and
# component tables). Online runs use the same async driver as the app.
# ==============================================================================

from __future__ import annotations

import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config

from alembic import context

from catalog_api.core.settings import DatabaseType, settings
from catalog_api.domain_models import SQLBase

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = SQLBase.metadata

# SQLite cannot ALTER most constraints in place
RENDER_AS_BATCH = settings.DATABASE_TYPE == DatabaseType.SQLITE

URLS = {
    DatabaseType.SQLITE: (settings.SQLITE_URL, settings.sqlite_async_url),
    DatabaseType.POSTGRESQL: (settings.postgres_sync_url, settings.postgres_url),
}


def database_url(async_driver: bool) -> str:
    sync_url, async_url = URLS[settings.DATABASE_TYPE]
    return async_url if async_driver else sync_url


def run_migrations_offline() -> None:
    """Emit the migration SQL without connecting."""
    context.configure(
        url=database_url(async_driver=False),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        render_as_batch=RENDER_AS_BATCH,
    )
    with context.begin_transaction():
        context.run_migrations()


def _migrate(connection: Connection) -> None:
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        render_as_batch=RENDER_AS_BATCH,
        compare_type=True,
    )
    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    section = config.get_section(config.config_ini_section) or {}
    section["sqlalchemy.url"] = database_url(async_driver=True)
    engine = async_engine_from_config(section, prefix="sqlalchemy.", poolclass=pool.NullPool)

    async with engine.connect() as connection:
        await connection.run_sync(_migrate)
    await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
