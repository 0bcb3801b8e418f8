from logging.config import fileConfig
from alembic import context
import logging
from dotenv import load_dotenv
import os
import sys
from sqlalchemy import create_engine
from sqlalchemy import pool

default_dotenv_path = '../.env'
dotenv_path = default_dotenv_path
db_url_override = None

# Use Alembic's x-arguments
for x_arg in context.get_x_argument(as_dictionary=False):
    print(f"x_arg = [{x_arg}]")
    if x_arg.lower().strip().startswith('db-url='):
        db_url_override = x_arg.split('=', 1)[1].strip()
    elif x_arg.lower().strip().startswith('dotenv-path='):
        dotenv_path = x_arg.split('=', 1)[1].strip()
    else:
        print(f"ERROR: Unrecognized Alembic -x argument: '{x_arg}' Valid arguments are: db-url, dotenv-path", file=sys.stderr)
        sys.exit(1)

load_dotenv(dotenv_path=dotenv_path)

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# Make the service modules importable when alembic runs from db-migrations/
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..')))
from database import Base  # noqa: E402
import models  # noqa: E402,F401

target_metadata = Base.metadata

log = logging.getLogger('alembic.env')


def resolve_db_url() -> str:
    db_url = db_url_override or os.environ.get("DATABASE_URL") or "sqlite:///./creator_marketplace.db"
    return db_url


def masked(db_url: str) -> str:
    if "@" not in db_url:
        return db_url
    scheme, rest = db_url.split("://", 1)
    return f"{scheme}://***@{rest.split('@', 1)[1]}"


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode, emitting SQL instead of executing it."""
    db_url = resolve_db_url()
    print(f"[alembic] offline db_url = [{masked(db_url)}]")
    context.configure(
        url=db_url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode against a live connection."""
    db_url = resolve_db_url()
    print(f"[alembic] online db_url = [{masked(db_url)}]")
    connectable = create_engine(db_url, poolclass=pool.NullPool)

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            render_as_batch=connection.dialect.name == "sqlite",
        )
        log.info("Starting migrations...")
        try:
            with context.begin_transaction():
                context.run_migrations()
            log.info("Migrations completed successfully")
        except Exception as e:
            log.error(f"Migration failed with error: {e}", exc_info=True)
            raise


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
