"""Tests for the init_schema_cli adapter."""

from types import SimpleNamespace
from unittest.mock import MagicMock

from ledgercore.adapters import init_schema_cli


def test_main_creates_schema_and_reports(monkeypatch, capsys):
    """The CLI should create the schema on the ledger engine."""
    engine = SimpleNamespace(url="sqlite:///ledger.db")
    adapter = MagicMock()
    adapter.get_ledger_engine.return_value = engine
    created = []
    fake_logger = MagicMock()

    monkeypatch.setattr(
        init_schema_cli,
        "build_database_adapter",
        lambda: adapter,
    )
    monkeypatch.setattr(
        init_schema_cli,
        "create_ledger_schema",
        created.append,
    )
    monkeypatch.setattr(init_schema_cli, "get_app_logger", lambda: fake_logger)

    init_schema_cli.main()

    assert created == [engine]
    assert "sqlite:///ledger.db" in fake_logger.info.call_args.args[0]
    assert "Ledger schema created" in capsys.readouterr().out
