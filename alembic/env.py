from alembic import context
from sqlmodel import SQLModel
from learnflow.core.config import settings
from learnflow.core.database import engine

# Register every table on SQLModel.metadata for autogenerate
from learnflow.models import SharedCard, SharedParaphrase  # noqa: F401

config = context.config

config.set_main_option("sqlalchemy.url", settings.sqlalchemy_database_url)

target_metadata = SQLModel.metadata


def run_migrations_offline() -> None:
    """Emit SQL without a live connection."""
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run against the application's engine."""
    with engine.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            render_as_batch=connection.dialect.name == "sqlite",
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
