from __future__ import annotations

from pathlib import Path
from typing import Any

from typer.testing import CliRunner

from graphload import main
from graphload.errors import ClientStartupError

runner = CliRunner()


def test_info_shows_effective_settings(monkeypatch) -> None:
    monkeypatch.setenv("CONCURRENCY", "7")

    result = runner.invoke(main.app, ["info"])

    assert result.exit_code == 0
    assert "bolt://" in result.output
    assert "7" in result.output


def test_entities_previews_filtered_dataset(dataset_file: Path) -> None:
    result = runner.invoke(main.app, ["entities", "--data", str(dataset_file), "--limit", "2"])

    assert result.exit_code == 0
    assert "3 entities" in result.output
    assert "B" in result.output


def test_entities_exits_non_zero_on_empty_list(dataset_file: Path) -> None:
    result = runner.invoke(
        main.app, ["entities", "--data", str(dataset_file), "--min-size", "999999"]
    )

    assert result.exit_code == 1


def test_run_exits_non_zero_when_dataset_is_missing(tmp_path: Path) -> None:
    result = runner.invoke(main.app, ["run", "--data", str(tmp_path / "missing.csv")])

    assert result.exit_code == 1


def test_run_exits_non_zero_when_client_cannot_be_built(monkeypatch, dataset_file: Path) -> None:
    def fail(settings: Any) -> None:
        raise ClientStartupError("Graph store at bolt://localhost:7687 is unreachable")

    monkeypatch.setattr(main.BoltQueryClient, "from_settings", staticmethod(fail))

    result = runner.invoke(main.app, ["run", "--data", str(dataset_file)])

    assert result.exit_code == 1


def test_run_drives_bounded_load_and_closes_client(
    monkeypatch, dataset_file: Path, succeeding_client
) -> None:
    monkeypatch.setattr(
        main.BoltQueryClient, "from_settings", staticmethod(lambda settings: succeeding_client)
    )
    monkeypatch.setattr(main, "_install_signal_handlers", lambda stop_event: None)

    result = runner.invoke(
        main.app,
        ["run", "--data", str(dataset_file), "--concurrency", "2", "--iterations", "3", "-t", "4"],
    )

    assert result.exit_code == 0
    assert len(succeeding_client.calls) == 6
    assert {call[1] for call in succeeding_client.calls} == {4.0}
    assert succeeding_client.closed
