from pathlib import Path

import pytest

from graphload import config
from graphload.dataset import load_entities
from graphload.queries import build_supply_chain_query
from scripts import generate_data

GENERATED_ROWS = 50


def test_get_settings_defaults(monkeypatch):
    for key in ("HOST", "PORT", "CONCURRENCY", "TIMEOUT", "MIN_SUPPLY_CHAIN_SIZE"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(Path(__file__).parent)

    settings = config.get_settings()

    assert settings.host == "localhost"
    assert settings.port == 7687
    assert settings.uri == "bolt://localhost:7687"
    assert settings.concurrency == 18
    assert settings.timeout == 15
    assert settings.min_supply_chain_size == 5000
    assert settings.db_user is None


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("HOST", "memgraph")
    monkeypatch.setenv("PORT", "7688")
    monkeypatch.setenv("CONCURRENCY", "32")
    monkeypatch.setenv("TIMEOUT", "30")
    monkeypatch.setenv("MIN_SUPPLY_CHAIN_SIZE", "100")

    settings = config.get_settings()

    assert settings.uri == "bolt://memgraph:7688"
    assert settings.concurrency == 32
    assert settings.timeout == 30
    assert settings.min_supply_chain_size == 100


def test_settings_reject_zero_concurrency(monkeypatch):
    monkeypatch.setenv("CONCURRENCY", "0")

    with pytest.raises(ValueError):
        config.get_settings()


def test_get_settings_is_cached():
    assert config.get_settings() is config.get_settings()


def test_supply_chain_query_renders_limits():
    query = build_supply_chain_query(result_limit=100, memory_limit_mb=256)

    assert "$id" in query
    assert "LIMIT 100" in query
    assert query.endswith("QUERY MEMORY LIMIT 256MB;")


def test_supply_chain_query_rejects_bad_limits():
    with pytest.raises(ValueError):
        build_supply_chain_query(result_limit=0)


def test_generate_data_writes_loadable_csv(tmp_path: Path):
    csv_path = tmp_path / "data.csv"

    written = generate_data._generate_entities_csv(csv_path, rows=GENERATED_ROWS, seed=123)

    lines = csv_path.read_text(encoding="utf-8").splitlines()
    assert written == GENERATED_ROWS
    assert len(lines) == GENERATED_ROWS
    assert lines[0].startswith("C00000000,")
    # Every generated row parses; threshold -1 keeps them all.
    assert len(load_entities(csv_path, threshold=-1)) == GENERATED_ROWS


def test_generate_data_is_deterministic(tmp_path: Path):
    first, second = tmp_path / "a.csv", tmp_path / "b.csv"

    generate_data._generate_entities_csv(first, rows=GENERATED_ROWS, seed=7)
    generate_data._generate_entities_csv(second, rows=GENERATED_ROWS, seed=7)

    assert first.read_text(encoding="utf-8") == second.read_text(encoding="utf-8")
