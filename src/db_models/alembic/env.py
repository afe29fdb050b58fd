import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy.ext.asyncio import create_async_engine

import db_models  # noqa: F401  registers the models on the metadata
from db_models.base_uuid_model import Base
from db_models.core.config import Settings

settings = Settings()
url = settings.ASYNC_SHOP_DB_URI
# this is the Alembic Config object, which provides
# access to the values within the .ini file in use.
config = context.config

# Interpret the config file for Python logging.
if config.config_file_name is not None:
    fileConfig(config.config_file_name)


target_metadata = Base.metadata


def process_revision_directives(context, revision, directives):
    """Drop table comment operations, they are generated from docstrings."""
    script = directives[0]

    def filter_comment_ops(ops_list):
        filtered = []
        for op in ops_list:
            if hasattr(op, "ops"):
                filtered_nested = filter_comment_ops(op.ops)
                if filtered_nested:
                    op.ops = filtered_nested
                    filtered.append(op)
            elif "TableComment" not in op.__class__.__name__:
                filtered.append(op)
        return filtered

    script.upgrade_ops.ops = filter_comment_ops(script.upgrade_ops.ops)
    script.downgrade_ops.ops = filter_comment_ops(script.downgrade_ops.ops)


def run_migrations_offline():
    """Run migrations in 'offline' mode.
    This configures the context with just a URL
    and not an Engine. Calls to context.execute() here emit the given
    string to the script output.
    """
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        compare_type=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection):
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        process_revision_directives=process_revision_directives,
        compare_type=True,
    )

    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online():
    """Run migrations in 'online' mode through the async engine."""
    connectable = create_async_engine(url, echo=False)

    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)

    await connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
