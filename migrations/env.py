"""
Alembic environment for the UniLeave schema.

The connection URL always comes from unileave.database so migrations hit the
same database as the API. SQLite targets are migrated in batch mode.
"""
from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

import unileave.models  # noqa: F401  registers every table on Base.metadata
from unileave.database import DATABASE_URL
from unileave.db.base import Base

config = context.config
config.set_main_option("sqlalchemy.url", DATABASE_URL)

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def _configure(dialect_name: str, **kwargs) -> None:
    context.configure(
        target_metadata=target_metadata,
        render_as_batch=dialect_name == "sqlite",
        compare_type=True,
        **kwargs,
    )


def run_offline() -> None:
    """Emit the migration SQL to stdout without connecting."""
    url = config.get_main_option("sqlalchemy.url")
    _configure(
        url.split(":", 1)[0].split("+", 1)[0],
        url=url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_online() -> None:
    engine = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    with engine.connect() as connection:
        _configure(connection.dialect.name, connection=connection)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_offline()
else:
    run_online()
