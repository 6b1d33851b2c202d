"""In-memory ledger repository.

Used for tests and local runs. Snapshots copy the state under a lock and
transactions stage their writes, applying them under the lock only when the
block finishes without raising.
"""

from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, replace
from datetime import date
import threading
import uuid

from ledgercore.application.ports.ledger_repository import (
    LedgerReaderPort,
    LedgerRepositoryPort,
    LedgerUnitOfWorkPort,
)
from ledgercore.domain.errors import PostingPolicyError
from ledgercore.domain.models import (
    Account,
    BalanceWindow,
    CompanyScope,
    EntryStatus,
    JournalEntryDraft,
    JournalLine,
    LedgerLine,
)


@dataclass(frozen=True)
class StoredEntry:
    """Journal entry header and lines as kept in memory."""

    entry_id: str
    scope: CompanyScope
    entry_date: date
    status: EntryStatus
    lines: tuple[JournalLine, ...]
    memo: str | None = None
    reference: str | None = None

    def ledger_lines(self) -> list[LedgerLine]:
        return [
            LedgerLine(
                entry_id=self.entry_id,
                entry_date=self.entry_date,
                entry_status=self.status,
                line_no=line_no,
                account_id=line.account_id,
                debit=line.debit,
                credit=line.credit,
                memo=line.memo,
            )
            for line_no, line in enumerate(self.lines, start=1)
        ]


def _scope_accounts(
    accounts: dict[str, Account],
    scope: CompanyScope,
) -> list[Account]:
    return sorted(
        (account for account in accounts.values() if account.scope == scope),
        key=lambda account: (account.code, account.id),
    )


def _sort_key(line: LedgerLine) -> tuple:
    return (line.entry_date, line.entry_id, line.line_no)


class InMemoryLedgerReader(LedgerReaderPort):
    """Reader over a frozen copy of the repository state."""

    def __init__(
        self,
        accounts: dict[str, Account],
        entries: dict[str, StoredEntry],
    ) -> None:
        self._accounts = accounts
        self._entries = entries

    def list_accounts(self, scope: CompanyScope) -> list[Account]:
        return _scope_accounts(self._accounts, scope)

    def list_posted_lines(
        self,
        scope: CompanyScope,
        account_ids: Iterable[str],
        window: BalanceWindow,
    ) -> list[LedgerLine]:
        wanted = set(account_ids)
        start = getattr(window, "start", None)
        lines = []
        for entry in self._entries.values():
            if entry.scope != scope or entry.status != EntryStatus.POSTED:
                continue
            if entry.entry_date > window.end:
                continue
            if start is not None and entry.entry_date < start:
                continue
            lines.extend(
                line
                for line in entry.ledger_lines()
                if line.account_id in wanted
            )
        return sorted(lines, key=_sort_key)

    def list_entry_lines(
        self,
        scope: CompanyScope,
        entry_ids: Iterable[str],
    ) -> list[LedgerLine]:
        lines = []
        for entry_id in dict.fromkeys(entry_ids):
            entry = self._entries.get(entry_id)
            if entry is None or entry.scope != scope:
                continue
            lines.extend(entry.ledger_lines())
        return sorted(lines, key=_sort_key)


class InMemoryLedgerUnitOfWork(LedgerUnitOfWorkPort):
    """Collects writes that the repository applies on commit."""

    def __init__(
        self,
        accounts: dict[str, Account],
        entries: dict[str, StoredEntry],
    ) -> None:
        self._accounts = accounts
        self._entries = entries
        self.staged: dict[str, StoredEntry] = {}

    def _lookup(self, entry_id: str) -> StoredEntry | None:
        return self.staged.get(entry_id) or self._entries.get(entry_id)

    def list_accounts(self, scope: CompanyScope) -> list[Account]:
        return _scope_accounts(self._accounts, scope)

    def fetch_entry_status(
        self,
        scope: CompanyScope,
        entry_id: str,
    ) -> EntryStatus | None:
        entry = self._lookup(entry_id)
        if entry is None or entry.scope != scope:
            return None
        return entry.status

    def save_draft(self, draft: JournalEntryDraft) -> str:
        if draft.entry_id is not None:
            existing = self._lookup(draft.entry_id)
            if existing is not None and existing.scope != draft.scope:
                raise PostingPolicyError(
                    f"Journal entry {draft.entry_id} belongs to another "
                    "company"
                )
        entry_id = draft.entry_id or str(uuid.uuid4())
        self.staged[entry_id] = StoredEntry(
            entry_id=entry_id,
            scope=draft.scope,
            entry_date=draft.entry_date,
            status=EntryStatus.DRAFT,
            lines=draft.lines,
            memo=draft.memo,
            reference=draft.reference,
        )
        return entry_id

    def mark_posted(self, scope: CompanyScope, entry_id: str) -> None:
        entry = self._lookup(entry_id)
        if (
            entry is None
            or entry.scope != scope
            or entry.status != EntryStatus.DRAFT
        ):
            raise PostingPolicyError(
                f"Journal entry {entry_id} is not a stored draft"
            )
        self.staged[entry_id] = replace(entry, status=EntryStatus.POSTED)


class InMemoryLedgerRepository(LedgerRepositoryPort):
    """Thread-safe ledger repository kept in process memory."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._accounts: dict[str, Account] = {}
        self._entries: dict[str, StoredEntry] = {}

    @contextmanager
    def snapshot(self) -> Iterator[InMemoryLedgerReader]:
        with self._lock:
            accounts = dict(self._accounts)
            entries = dict(self._entries)
        yield InMemoryLedgerReader(accounts, entries)

    @contextmanager
    def transaction(self) -> Iterator[InMemoryLedgerUnitOfWork]:
        with self._lock:
            unit_of_work = InMemoryLedgerUnitOfWork(
                dict(self._accounts),
                dict(self._entries),
            )
        yield unit_of_work
        with self._lock:
            self._entries.update(unit_of_work.staged)

    def add_account(self, account: Account) -> None:
        """Register an account in the chart of accounts."""
        with self._lock:
            self._accounts[account.id] = account

    def store_entry(self, entry: StoredEntry) -> None:
        """Write an entry directly, bypassing posting validation.

        Intended for seeding fixtures and simulating corrupted storage.
        """
        with self._lock:
            self._entries[entry.entry_id] = entry


__all__ = [
    "StoredEntry",
    "InMemoryLedgerReader",
    "InMemoryLedgerUnitOfWork",
    "InMemoryLedgerRepository",
]
