"""Fixtures for CLI command tests."""

import pytest

from worship_log.db.schema import STORAGE_KEY
from worship_log.db.store import DocumentStore


@pytest.fixture
def cli_env(tmp_path):
    """Config, base catalog and database paths for invoking the CLI."""
    db_path = tmp_path / "db" / "test.db"
    catalog_path = tmp_path / "hinario.txt"
    catalog_path.write_text(
        "12 Santo\n1 Alegria\n250 Grande\n(CIAS) 3 Deus Cuida\n",
        encoding="utf-8",
    )

    config_path = tmp_path / "config.toml"
    config_path.write_text(
        f'[database]\npath = "{db_path}"\n\n'
        f'[catalog]\nbase_catalog_path = "{catalog_path}"\n\n'
        f'[service]\nrecency_days = 30\ntitle = "Central"\n\n'
        f'[logging]\nlog_dir = "{tmp_path / "logs"}"\n',
        encoding="utf-8",
    )

    return {"db_path": db_path, "config_path": config_path, "tmp_path": tmp_path}


@pytest.fixture
def seed(cli_env):
    """Write a state document straight to the test database."""

    def _seed(history, custom_songs=None):
        with DocumentStore(cli_env["db_path"]) as store:
            store.initialize_schema()
            store.put(STORAGE_KEY, {"history": history, "customSongs": custom_songs or []})

    return _seed


@pytest.fixture
def read_state(cli_env):
    """Read the saved state document back from the test database."""

    def _read():
        with DocumentStore(cli_env["db_path"]) as store:
            store.initialize_schema()
            return store.get(STORAGE_KEY)

    return _read
