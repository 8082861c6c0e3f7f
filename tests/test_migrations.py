# mypy: ignore-errors
# tests/test_migrations.py
"""Tests for the Alembic migration chain."""

from alembic import command
from alembic.script import ScriptDirectory
from sqlalchemy import create_engine, inspect

from trip_nick.db.session import Base
from trip_nick.scripts.migrate import alembic_config


def test_single_head() -> None:
    script = ScriptDirectory.from_config(alembic_config())
    assert script.get_heads() == ["5c1e2a9d7f30"]


def test_upgrade_creates_model_tables(tmp_path, monkeypatch) -> None:
    """Migrating an empty SQLite file yields every table the models declare."""
    monkeypatch.delenv("ALEMBIC_URL", raising=False)
    url = f"sqlite:///{tmp_path / 'migrated.db'}"
    cfg = alembic_config()
    cfg.set_main_option("sqlalchemy.url", url)

    command.upgrade(cfg, "head")

    engine = create_engine(url)
    try:
        inspector = inspect(engine)
        tables = set(inspector.get_table_names()) - {"alembic_version"}
        assert tables == set(Base.metadata.tables)
        index_names = {index["name"] for index in inspector.get_indexes("post_images")}
        assert "ix_post_images_unique_thumbnail" in index_names
    finally:
        engine.dispose()
