import sys
import os
from logging.config import fileConfig
from sqlalchemy import create_engine
from sqlalchemy import pool
from alembic import context
from dotenv import load_dotenv

# Load .env
load_dotenv(".env")

# Add project root to Python path
sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from app.database import Base
from app.config import settings
from app.models import notification_channel  # noqa: F401 - registers the table

config = context.config

# Interpret .ini file for Python logging.
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# Same URL the application uses (sqlite fallback included)
config.set_main_option("sqlalchemy.url", settings.DB_URL)

target_metadata = Base.metadata


def run_migrations_offline():
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        compare_type=True,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online():
    connectable = create_engine(
        config.get_main_option("sqlalchemy.url"),
        poolclass=pool.NullPool,
        future=True
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
