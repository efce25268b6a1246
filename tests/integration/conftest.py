"""Integration test setup.

Integration tests run the PostgreSQL repositories against DATABASE__URL,
migrated to head once per session. They are skipped when nothing is
listening there.
"""

import socket
from pathlib import Path

import pytest
from alembic import command
from alembic.config import Config
from sqlalchemy.engine import make_url

from undead.config import Settings

ROOT = Path(__file__).resolve().parents[2]


def _database_reachable() -> bool:
    url = make_url(Settings().database_url)
    try:
        with socket.create_connection((url.host or "localhost", url.port or 5432), 1):
            return True
    except OSError:
        return False


def pytest_collection_modifyitems(config, items):
    if _database_reachable():
        return
    skip = pytest.mark.skip(reason="postgres not reachable at DATABASE__URL")
    here = Path(__file__).parent
    for item in items:
        if item.path.is_relative_to(here):
            item.add_marker(skip)


@pytest.fixture(scope="session", autouse=True)
def migrated_database():
    """Bring the schema to head before any integration test runs."""
    config = Config(str(ROOT / "alembic.ini"))
    config.set_main_option("script_location", str(ROOT / "migrations"))
    command.upgrade(config, "head")
