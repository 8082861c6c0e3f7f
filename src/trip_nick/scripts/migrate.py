# src/trip_nick/scripts/migrate.py
"""Bring the configured database up to date.

``upgrade`` runs the Alembic migrations; ``create-all`` creates the tables
straight from the models, which is enough for a local SQLite file.
"""
from __future__ import annotations

import argparse
import logging
import os

from alembic import command
from alembic.config import Config

from trip_nick.core.logging import configure_logging
from trip_nick.core.settings import settings
from trip_nick.db.session import create_tables

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = os.path.abspath(
    os.path.join(os.path.dirname(__file__), "..", "..", "..", "migrations")
)


def alembic_config() -> Config:
    """Return an Alembic config pointing at the project's migrations folder."""
    cfg = Config(os.path.join(MIGRATIONS_DIR, "alembic.ini"))
    cfg.set_main_option("script_location", MIGRATIONS_DIR)
    cfg.set_main_option("sqlalchemy.url", settings.database_url_sync)
    return cfg


def run_upgrade_head() -> None:
    logger.info("Upgrading %s to head", settings.database_url_sync)
    command.upgrade(alembic_config(), "head")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Prepare the Trip Nick database")
    parser.add_argument(
        "action",
        nargs="?",
        choices=("upgrade", "create-all"),
        default="upgrade",
        help="run Alembic migrations (default) or create tables from the models",
    )
    args = parser.parse_args(argv)
    configure_logging(settings.log_level)

    if args.action == "create-all":
        logger.info("Creating tables from models")
        create_tables()
    else:
        run_upgrade_head()


if __name__ == "__main__":
    main()
