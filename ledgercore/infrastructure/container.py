"""Composition root for wiring infrastructure adapters."""

from ledgercore.application.ports.database import DatabaseEnginePort
from ledgercore.application.ports.ledger_repository import LedgerRepositoryPort
from ledgercore.domain.services.classification import ClassificationRegistry
from ledgercore.infrastructure.classification_config import (
    load_classification_registry,
)
from ledgercore.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from ledgercore.infrastructure.ledger_repository import (
    SqlAlchemyLedgerRepository,
)
from ledgercore.infrastructure.logging.logger import get_app_logger
from ledgercore.infrastructure.memory_repository import (
    InMemoryLedgerRepository,
)
from ledgercore.infrastructure.settings import LedgerSettings


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_ledger_repository(
    settings: LedgerSettings | None = None,
    db_port: DatabaseEnginePort | None = None,
) -> LedgerRepositoryPort:
    """Return the configured ledger repository."""
    resolved_settings = settings or LedgerSettings.from_env()
    if resolved_settings.backend == "memory":
        get_app_logger().info("Using in-memory ledger repository")
        return InMemoryLedgerRepository()
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyLedgerRepository(
        resolved_db,
        snapshot_isolation_level=resolved_settings.snapshot_isolation_level,
    )


def build_classification_registry(
    settings: LedgerSettings | None = None,
) -> ClassificationRegistry:
    """Return the classification registry named by the settings."""
    resolved_settings = settings or LedgerSettings.from_env()
    return load_classification_registry(
        resolved_settings.classification_file,
        logger=get_app_logger(),
    )


__all__ = [
    "build_database_adapter",
    "build_ledger_repository",
    "build_classification_registry",
]
