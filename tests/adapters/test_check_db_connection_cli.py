"""Tests for the check_db_connection adapter."""

from ledgercore.adapters import check_db_connection


class _DummyConnection:
    def __init__(self) -> None:
        self.executed: list[str] = []

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        return False

    def exec_driver_sql(self, statement: str) -> None:
        self.executed.append(statement)


class _DummyEngine:
    def __init__(self, url: str) -> None:
        self.url = url
        self.connection = _DummyConnection()

    def connect(self):
        return self.connection


def test_main_pings_ledger_database(monkeypatch):
    """The CLI should log the ledger URL and execute SELECT 1."""
    ledger_engine = _DummyEngine("postgresql://ledger")

    class _Adapter:
        def get_ledger_engine(self):
            return ledger_engine

    log_messages: list[str] = []

    class _Logger:
        def info(self, msg: str) -> None:
            log_messages.append(msg)

    monkeypatch.setattr(
        check_db_connection,
        "build_database_adapter",
        lambda: _Adapter(),
    )
    monkeypatch.setattr(
        check_db_connection,
        "get_app_logger",
        lambda: _Logger(),
    )

    check_db_connection.main()

    assert "postgresql://ledger" in log_messages[0]
    assert log_messages[-1] == "Ledger connection is working."
    assert ledger_engine.connection.executed == ["SELECT 1"]
