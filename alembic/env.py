import os
from logging.config import fileConfig

from alembic import context
from sqlalchemy import pool, create_engine

from handling_portal.core.config import settings
from handling_portal.db.session import Base

# Import all models so Alembic sees them in metadata
from handling_portal.models.user import User  # noqa: F401
from handling_portal.models.agent_user import AgentUser  # noqa: F401
from handling_portal.models.membership import Membership  # noqa: F401
from handling_portal.models.handling_service import HandlingService  # noqa: F401
from handling_portal.models.payment_method import PaymentMethod  # noqa: F401
from handling_portal.models.location import Country, City, Location  # noqa: F401
from handling_portal.models.handling_booking import HandlingBooking  # noqa: F401
from handling_portal.models.payment import Payment, PaymentBooking  # noqa: F401
from handling_portal.models.transaction import TransactionHistory  # noqa: F401
from handling_portal.models.topup_request import TopUpRequest  # noqa: F401


# Alembic Config object
config = context.config

# Force sqlalchemy.url from real runtime DATABASE_URL
db_url = getattr(settings, "DATABASE_URL", None) or os.getenv("DATABASE_URL")
if not db_url:
    raise RuntimeError("DATABASE_URL is not set (check .env / handling_portal.core.config.settings)")

config.set_main_option("sqlalchemy.url", db_url)

# Logging config
if config.config_file_name is not None:
    fileConfig(config.config_file_name, disable_existing_loggers=False)

# Target metadata for autogenerate
target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode."""
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode."""
    url = config.get_main_option("sqlalchemy.url")

    # alembic.ini carries no url; engine is built from the runtime DATABASE_URL
    connectable = create_engine(url, poolclass=pool.NullPool)

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
