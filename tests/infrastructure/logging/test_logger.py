"""Tests for the logging helpers."""

import logging
from unittest.mock import MagicMock

import pytest

from ledgercore.infrastructure.logging import logger as logger_module


@pytest.fixture
def fixed_log_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(logger_module, "get_project_root", lambda: tmp_path)
    monkeypatch.setattr(
        logger_module.LoggerBuilder,
        "_today_stamp",
        staticmethod(lambda: "20240131"),
    )
    return tmp_path


def _file_handlers(logger: logging.Logger) -> list[logging.FileHandler]:
    return [h for h in logger.handlers if isinstance(h, logging.FileHandler)]


def test_builder_writes_dated_file_under_subdir(fixed_log_dir):
    """LoggerBuilder should place the log file in logs/<subdir>/."""
    built = (
        logger_module.LoggerBuilder()
        .name("ledgercore.test.builder")
        .subdir("reports")
        .prefix("report_run")
        .level(logging.DEBUG)
        .build()
    )

    handlers = _file_handlers(built)
    assert built.level == logging.DEBUG
    assert built.propagate is False
    assert len(handlers) == 1
    expected = fixed_log_dir / "logs" / "reports" / "20240131_report_run.log"
    assert handlers[0].baseFilename == str(expected)
    assert not any(
        type(h) is logging.StreamHandler for h in built.handlers
    )


def test_builder_reuses_configured_logger(fixed_log_dir):
    """Building a logger twice should not stack handlers."""
    builder = (
        logger_module.LoggerBuilder()
        .name("ledgercore.test.reuse")
        .console(True)
    )

    first = builder.build()
    second = builder.build()

    assert first is second
    assert len(first.handlers) == 2


def test_builder_uses_custom_handler_factories(fixed_log_dir):
    fmt = logging.Formatter("%(message)s")
    file_factory = MagicMock(return_value=logging.NullHandler())

    built = (
        logger_module.LoggerBuilder()
        .name("ledgercore.test.factories")
        .formatter(lambda: fmt)
        .file_handler(file_factory)
        .build()
    )

    path, passed_fmt = file_factory.call_args.args
    assert path.name == "20240131_app_logs.log"
    assert passed_fmt is fmt
    assert isinstance(built.handlers[0], logging.NullHandler)


def test_audit_logger_writes_to_audit_directory(fixed_log_dir, monkeypatch):
    """The audit logger should log to its own file without console output."""
    monkeypatch.setattr(logger_module.AuditLogger, "_instance", None)
    audit = logger_module.AuditLogger("ledgercore.test.audit")

    handlers = _file_handlers(audit.logger)
    expected = (
        fixed_log_dir / "logs" / "audit" / "20240131_posting_audit.log"
    )
    assert [h.baseFilename for h in handlers] == [str(expected)]
    assert len(audit.logger.handlers) == 1


def test_logger_delegates_each_level(monkeypatch):
    """Logger methods should forward to the wrapped logging.Logger."""
    fake_logger = MagicMock()
    monkeypatch.setattr(
        logger_module.LoggerBuilder,
        "build",
        lambda self: fake_logger,
    )
    monkeypatch.setattr(logger_module.AppLogger, "_instance", None)

    app_logger = logger_module.AppLogger("ledgercore.test.app")
    for level in ("info", "warning", "error", "debug", "critical"):
        getattr(app_logger, level)(f"{level} message")
        getattr(fake_logger, level).assert_called_once_with(f"{level} message")


def test_getters_return_distinct_singletons(monkeypatch):
    """get_app_logger and get_audit_logger should each return one instance."""
    monkeypatch.setattr(
        logger_module.LoggerBuilder,
        "build",
        lambda self: MagicMock(),
    )
    monkeypatch.setattr(logger_module.AppLogger, "_instance", None)
    monkeypatch.setattr(logger_module.AuditLogger, "_instance", None)

    app_logger = logger_module.get_app_logger()
    audit_logger = logger_module.get_audit_logger()

    assert logger_module.get_app_logger() is app_logger
    assert logger_module.get_audit_logger() is audit_logger
    assert app_logger is not audit_logger
