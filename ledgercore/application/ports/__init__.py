"""Application ports package."""

from .database import DatabaseEnginePort
from .ledger_repository import (
    LedgerReaderPort,
    LedgerRepositoryPort,
    LedgerUnitOfWorkPort,
)

__all__ = [
    "DatabaseEnginePort",
    "LedgerReaderPort",
    "LedgerRepositoryPort",
    "LedgerUnitOfWorkPort",
]
