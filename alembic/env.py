import sys
from logging.config import fileConfig
from pathlib import Path

from sqlalchemy import create_engine, pool

from alembic import context

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from passgate.core.config import settings  # noqa: E402
from passgate.db.base import Base  # noqa: E402
from passgate.models import entitlement  # noqa: F401, E402

if context.config.config_file_name is not None:
    fileConfig(context.config.config_file_name)


def _migrate(**configure_kwargs) -> None:
    context.configure(target_metadata=Base.metadata, compare_type=True, **configure_kwargs)
    with context.begin_transaction():
        context.run_migrations()


def main() -> None:
    # the URL always comes from passgate settings, never alembic.ini
    if context.is_offline_mode():
        _migrate(url=settings.database_url, literal_binds=True, dialect_opts={"paramstyle": "named"})
        return

    engine = create_engine(settings.database_url, poolclass=pool.NullPool)
    with engine.connect() as connection:
        _migrate(connection=connection)


main()
