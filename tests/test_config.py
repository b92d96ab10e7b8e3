import pytest

from gratopod.config import LabConfig


def test_from_env_defaults(monkeypatch):
    for name in ("GRATOPOD_OPEN_COST", "GRATOPOD_STARTING_COINS", "GRATOPOD_RARITY_WEIGHTS"):
        monkeypatch.delenv(name, raising=False)
    config = LabConfig.from_env()
    assert config.economy.open_cost == 200
    assert config.economy.starting_coins == 5000
    assert config.economy.history_size == 8
    assert config.storage.backend == "memory"


def test_from_env_overrides(monkeypatch):
    monkeypatch.setenv("GRATOPOD_OPEN_COST", "100")
    monkeypatch.setenv("GRATOPOD_STARTING_COINS", "1000")
    monkeypatch.setenv("GRATOPOD_STORAGE_BACKEND", "json")
    monkeypatch.setenv("GRATOPOD_STORAGE_PATH", "/tmp/lab.json")
    monkeypatch.setenv("GRATOPOD_RARITY_WEIGHTS", '{"legendary": 12}')
    monkeypatch.setenv("GRATOPOD_ADMIN_IDS", "ops, support ,")
    monkeypatch.setenv("GRATOPOD_RNG_SEED", "99")

    config = LabConfig.from_env()
    assert config.economy.open_cost == 100
    assert config.economy.starting_coins == 1000
    assert config.storage.backend == "json"
    assert config.storage.path == "/tmp/lab.json"
    assert config.economy.rarity_weights == {"legendary": 12.0}
    assert config.admin.admin_ids == {"ops", "support"}
    assert config.rng_seed == 99


def test_from_env_rejects_bad_weights(monkeypatch):
    monkeypatch.setenv("GRATOPOD_RARITY_WEIGHTS", "[1, 2]")
    with pytest.raises(ValueError):
        LabConfig.from_env()


def test_sqlalchemy_backend_has_default_dsn():
    config = LabConfig()
    config.storage.backend = "sqlalchemy"
    assert config.storage.resolve_dsn() == "sqlite+aiosqlite:///./gratopod.db"


def test_write_timeout_from_env(monkeypatch):
    monkeypatch.delenv("GRATOPOD_STORAGE_WRITE_TIMEOUT", raising=False)
    assert LabConfig.from_env().storage.write_timeout == 10.0

    monkeypatch.setenv("GRATOPOD_STORAGE_WRITE_TIMEOUT", "2.5")
    assert LabConfig.from_env().storage.write_timeout == 2.5

    monkeypatch.setenv("GRATOPOD_STORAGE_WRITE_TIMEOUT", "0")
    assert LabConfig.from_env().storage.write_timeout is None
