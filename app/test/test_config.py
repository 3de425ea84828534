import importlib

import config


def test_production_connection_string_from_postgres_env(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.setenv("POSTGRES_USER", "lister")
    monkeypatch.setenv("POSTGRES_PASSWORD", "pw")
    monkeypatch.setenv("POSTGRES_HOST", "db")
    monkeypatch.setenv("POSTGRES_PORT", "6543")
    monkeypatch.setenv("POSTGRES_DBNM", "launchlist")
    try:
        importlib.reload(config)
        assert config.POSTGRES_USER == "lister"
        assert config.Config["production"].connectionString == "postgresql://lister:pw@db:6543/launchlist"
    finally:
        monkeypatch.undo()
        importlib.reload(config)
