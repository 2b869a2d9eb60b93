from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect


def test_required_tables_present_in_migration():
    text = Path("alembic/versions/20261019_0001_initial.py").read_text(encoding="utf-8")
    for t in ["regions", "locations", "workouts"]:
        assert f'"{t}"' in text


def test_migrations_avoid_postgres_now_function_for_portability():
    migrations_dir = Path("alembic/versions")
    for migration_file in migrations_dir.glob("*.py"):
        text = migration_file.read_text(encoding="utf-8").lower()
        assert "now()" not in text, f"Non-portable now() found in {migration_file.name}"


def test_upgrade_and_downgrade_on_sqlite(tmp_path, monkeypatch):
    from core.config import get_settings

    db_url = f"sqlite+pysqlite:///{tmp_path / 'migrate.db'}"
    monkeypatch.setenv("DATABASE_URL", db_url)
    get_settings.cache_clear()
    try:
        cfg = Config("alembic.ini")
        command.upgrade(cfg, "head")
        tables = set(inspect(create_engine(db_url)).get_table_names())
        assert {"regions", "locations", "workouts"} <= tables

        command.downgrade(cfg, "base")
        tables = set(inspect(create_engine(db_url)).get_table_names())
        assert not {"regions", "locations", "workouts"} & tables
    finally:
        get_settings.cache_clear()
