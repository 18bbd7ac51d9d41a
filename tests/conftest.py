"""Shared fixtures for worship-log tests."""

import pytest

from worship_log.db.models import ServiceRecord


@pytest.fixture
def sample_records():
    """Two services: "A" sung twice, "B" once."""
    return [
        ServiceRecord(id="rec_1", date="2024-01-10", description="Manhã", songs=["A", "B"]),
        ServiceRecord(id="rec_2", date="2024-02-05", description="Noite", songs=["A"]),
    ]


@pytest.fixture
def sample_catalog():
    """Catalog with primary and marked songs, already in catalog order."""
    return [
        "1 Alegria",
        "12 Santo, Santo, Santo",
        "15 Castelo Forte",
        "250 Grande é o Senhor",
        "Sem Número",
        "(CIAS) 3 Deus Cuida de Mim",
        "(CIAS) 70 Santo Espírito",
    ]


@pytest.fixture
def config_file(tmp_path):
    """Config file pointing the database and logs into tmp_path."""
    config_path = tmp_path / "config.toml"
    config_path.write_text(
        f'[database]\npath = "{tmp_path / "db" / "test.db"}"\n\n'
        f'[logging]\nlog_dir = "{tmp_path / "logs"}"\n'
    )
    return config_path


@pytest.fixture(autouse=True)
def clear_env_overrides(monkeypatch):
    """Keep WORSHIP_LOG_* variables from leaking into config loading."""
    monkeypatch.delenv("WORSHIP_LOG_DB_PATH", raising=False)
    monkeypatch.delenv("WORSHIP_LOG_RECENCY_DAYS", raising=False)
