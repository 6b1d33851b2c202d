"""Ports for reading and writing ledger data."""

from collections.abc import Iterable
from contextlib import AbstractContextManager
from typing import Protocol

from ledgercore.domain.models import (
    Account,
    BalanceWindow,
    CompanyScope,
    EntryStatus,
    JournalEntryDraft,
    LedgerLine,
)


class LedgerReaderPort(Protocol):
    """Read access bound to one consistent snapshot of the ledger."""

    def list_accounts(self, scope: CompanyScope) -> list[Account]:
        """Return every account of the company, ordered by code."""

    def list_posted_lines(
        self,
        scope: CompanyScope,
        account_ids: Iterable[str],
        window: BalanceWindow,
    ) -> list[LedgerLine]:
        """Return POSTED lines of the accounts dated within the window."""

    def list_entry_lines(
        self,
        scope: CompanyScope,
        entry_ids: Iterable[str],
    ) -> list[LedgerLine]:
        """Return every line of the given entries, cash and non-cash."""


class LedgerUnitOfWorkPort(Protocol):
    """Write access inside one atomic transaction."""

    def list_accounts(self, scope: CompanyScope) -> list[Account]:
        """Return every account of the company, ordered by code."""

    def fetch_entry_status(
        self,
        scope: CompanyScope,
        entry_id: str,
    ) -> EntryStatus | None:
        """Return the stored status of an entry, or None when absent."""

    def save_draft(self, draft: JournalEntryDraft) -> str:
        """Store the draft header and lines and return the entry id."""

    def mark_posted(self, scope: CompanyScope, entry_id: str) -> None:
        """Transition a stored draft to POSTED."""


class LedgerRepositoryPort(Protocol):
    """Storage collaborator for the ledger engine."""

    def snapshot(self) -> AbstractContextManager[LedgerReaderPort]:
        """Open a consistent read snapshot."""

    def transaction(self) -> AbstractContextManager[LedgerUnitOfWorkPort]:
        """Open a transaction committed only if the block succeeds."""


__all__ = [
    "LedgerReaderPort",
    "LedgerUnitOfWorkPort",
    "LedgerRepositoryPort",
]
