"""Alembic migration runner for startup and CLI use."""

import asyncio
from pathlib import Path

from alembic import command
from alembic.config import Config

# Repository root (holds alembic.ini)
PROJECT_ROOT = Path(__file__).resolve().parents[4]


def get_alembic_config() -> Config:
    """Load alembic.ini, resolving script_location against the repository root."""
    config = Config(str(PROJECT_ROOT / "alembic.ini"))
    config.set_main_option("script_location", str(PROJECT_ROOT / "src" / "alembic"))
    return config


def run_migrations_sync() -> None:
    """Upgrade the database to the latest revision."""
    command.upgrade(get_alembic_config(), "head")


async def run_migrations_async() -> None:
    """Run Alembic migrations from async context.

    Alembic drives a sync engine, so it runs in a worker thread.
    """
    await asyncio.to_thread(run_migrations_sync)
