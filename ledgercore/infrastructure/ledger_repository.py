"""SQLAlchemy-backed repository for ledger accounts and journal entries."""

from collections.abc import Iterable, Iterator
from contextlib import contextmanager
import uuid

from sqlalchemy import bindparam, text
from sqlalchemy.engine import Connection

from ledgercore.application.ports.database import DatabaseEnginePort
from ledgercore.application.ports.ledger_repository import (
    LedgerReaderPort,
    LedgerRepositoryPort,
    LedgerUnitOfWorkPort,
)
from ledgercore.domain.errors import PostingPolicyError
from ledgercore.domain.models import (
    Account,
    AccountType,
    AsOf,
    BalanceWindow,
    CompanyScope,
    EntryStatus,
    JournalEntryDraft,
    LedgerLine,
)
from ledgercore.infrastructure.ledger_schema import create_ledger_schema
from ledgercore.utils.date_utils import coerce_date
from ledgercore.utils.decimal_utils import coerce_decimal

_LINE_COLUMNS = """
    l.entry_id, e.entry_date, e.status, l.line_no,
    l.account_id, l.debit, l.credit, l.memo
"""


def _scope_params(scope: CompanyScope) -> dict[str, str]:
    return {"tenant_id": scope.tenant_id, "company_id": scope.company_id}


def _row_to_account(row, scope: CompanyScope) -> Account:
    return Account(
        id=row.id,
        scope=scope,
        code=row.code,
        name=row.name,
        account_type=AccountType.parse(row.account_type),
        is_active=bool(row.is_active),
    )


def _row_to_line(row) -> LedgerLine:
    return LedgerLine(
        entry_id=row.entry_id,
        entry_date=coerce_date(row.entry_date),
        entry_status=EntryStatus(row.status),
        line_no=int(row.line_no),
        account_id=row.account_id,
        debit=coerce_decimal(row.debit),
        credit=coerce_decimal(row.credit),
        memo=row.memo,
    )


def _fetch_accounts(conn: Connection, scope: CompanyScope) -> list[Account]:
    query = text(
        """
        SELECT id, code, name, account_type, is_active
        FROM ledger_accounts
        WHERE tenant_id = :tenant_id AND company_id = :company_id
        ORDER BY code, id
        """
    )
    rows = conn.execute(query, _scope_params(scope)).all()
    return [_row_to_account(row, scope) for row in rows]


class SqlAlchemyLedgerReader(LedgerReaderPort):
    """Reads ledger data through one open connection and transaction."""

    def __init__(self, conn: Connection) -> None:
        self._conn = conn

    def list_accounts(self, scope: CompanyScope) -> list[Account]:
        return _fetch_accounts(self._conn, scope)

    def list_posted_lines(
        self,
        scope: CompanyScope,
        account_ids: Iterable[str],
        window: BalanceWindow,
    ) -> list[LedgerLine]:
        account_ids = list(dict.fromkeys(account_ids))
        if not account_ids:
            return []
        params = _scope_params(scope)
        params["account_ids"] = account_ids
        params["status"] = EntryStatus.POSTED.value
        params["end_date"] = window.end.isoformat()
        date_filter = "e.entry_date <= :end_date"
        if not isinstance(window, AsOf):
            date_filter = "e.entry_date >= :start_date AND " + date_filter
            params["start_date"] = window.start.isoformat()
        query = text(
            f"""
            SELECT {_LINE_COLUMNS}
            FROM journal_lines l
            JOIN journal_entries e ON e.id = l.entry_id
            WHERE e.tenant_id = :tenant_id
              AND e.company_id = :company_id
              AND e.status = :status
              AND {date_filter}
              AND l.account_id IN :account_ids
            ORDER BY e.entry_date, l.entry_id, l.line_no
            """
        ).bindparams(bindparam("account_ids", expanding=True))
        rows = self._conn.execute(query, params).all()
        return [_row_to_line(row) for row in rows]

    def list_entry_lines(
        self,
        scope: CompanyScope,
        entry_ids: Iterable[str],
    ) -> list[LedgerLine]:
        entry_ids = list(dict.fromkeys(entry_ids))
        if not entry_ids:
            return []
        params = _scope_params(scope)
        params["entry_ids"] = entry_ids
        query = text(
            f"""
            SELECT {_LINE_COLUMNS}
            FROM journal_lines l
            JOIN journal_entries e ON e.id = l.entry_id
            WHERE e.tenant_id = :tenant_id
              AND e.company_id = :company_id
              AND l.entry_id IN :entry_ids
            ORDER BY e.entry_date, l.entry_id, l.line_no
            """
        ).bindparams(bindparam("entry_ids", expanding=True))
        rows = self._conn.execute(query, params).all()
        return [_row_to_line(row) for row in rows]


class SqlAlchemyLedgerUnitOfWork(LedgerUnitOfWorkPort):
    """Writes journal entries inside one database transaction."""

    def __init__(self, conn: Connection) -> None:
        self._conn = conn

    def list_accounts(self, scope: CompanyScope) -> list[Account]:
        return _fetch_accounts(self._conn, scope)

    def fetch_entry_status(
        self,
        scope: CompanyScope,
        entry_id: str,
    ) -> EntryStatus | None:
        query = text(
            """
            SELECT status
            FROM journal_entries
            WHERE id = :entry_id
              AND tenant_id = :tenant_id
              AND company_id = :company_id
            """
        )
        params = _scope_params(scope)
        params["entry_id"] = entry_id
        row = self._conn.execute(query, params).first()
        if row is None:
            return None
        return EntryStatus(row.status)

    def save_draft(self, draft: JournalEntryDraft) -> str:
        """Store the draft, replacing the lines of a resubmitted draft.

        Args:
            draft: Validated entry to store with DRAFT status.

        Returns:
            str: Identifier of the stored entry.

        Raises:
            PostingPolicyError: If the id belongs to another company.
        """
        params = _scope_params(draft.scope)
        params.update(
            {
                "entry_date": draft.entry_date.isoformat(),
                "status": EntryStatus.DRAFT.value,
                "memo": draft.memo,
                "reference": draft.reference,
            }
        )
        entry_id = draft.entry_id
        owner = None
        if entry_id is not None:
            owner = self._conn.execute(
                text(
                    "SELECT tenant_id, company_id FROM journal_entries "
                    "WHERE id = :entry_id"
                ),
                {"entry_id": entry_id},
            ).first()
        if owner is not None and (
            owner.tenant_id != draft.scope.tenant_id
            or owner.company_id != draft.scope.company_id
        ):
            raise PostingPolicyError(
                f"Journal entry {entry_id} belongs to another company"
            )
        if owner is not None:
            params["entry_id"] = entry_id
            self._conn.execute(
                text(
                    """
                    UPDATE journal_entries
                    SET entry_date = :entry_date, status = :status,
                        memo = :memo, reference = :reference
                    WHERE id = :entry_id
                      AND tenant_id = :tenant_id
                      AND company_id = :company_id
                    """
                ),
                params,
            )
            self._conn.execute(
                text("DELETE FROM journal_lines WHERE entry_id = :entry_id"),
                {"entry_id": entry_id},
            )
        else:
            entry_id = entry_id or str(uuid.uuid4())
            params["entry_id"] = entry_id
            self._conn.execute(
                text(
                    """
                    INSERT INTO journal_entries (
                        id, tenant_id, company_id, entry_date, status,
                        memo, reference
                    ) VALUES (
                        :entry_id, :tenant_id, :company_id, :entry_date,
                        :status, :memo, :reference
                    )
                    """
                ),
                params,
            )
        self._conn.execute(
            text(
                """
                INSERT INTO journal_lines (
                    entry_id, line_no, account_id, debit, credit, memo
                ) VALUES (
                    :entry_id, :line_no, :account_id, :debit, :credit, :memo
                )
                """
            ),
            [
                {
                    "entry_id": entry_id,
                    "line_no": line_no,
                    "account_id": line.account_id,
                    "debit": str(line.debit),
                    "credit": str(line.credit),
                    "memo": line.memo,
                }
                for line_no, line in enumerate(draft.lines, start=1)
            ],
        )
        return entry_id

    def mark_posted(self, scope: CompanyScope, entry_id: str) -> None:
        params = _scope_params(scope)
        params.update(
            {
                "entry_id": entry_id,
                "posted": EntryStatus.POSTED.value,
                "draft": EntryStatus.DRAFT.value,
            }
        )
        result = self._conn.execute(
            text(
                """
                UPDATE journal_entries
                SET status = :posted
                WHERE id = :entry_id
                  AND tenant_id = :tenant_id
                  AND company_id = :company_id
                  AND status = :draft
                """
            ),
            params,
        )
        if result.rowcount != 1:
            raise PostingPolicyError(
                f"Journal entry {entry_id} is not a stored draft"
            )


class SqlAlchemyLedgerRepository(LedgerRepositoryPort):
    """Repository backed by SQLAlchemy for the ledger tables."""

    def __init__(
        self,
        db_port: DatabaseEnginePort,
        snapshot_isolation_level: str | None = "REPEATABLE READ",
    ) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the ledger engine.
            snapshot_isolation_level: Isolation level for read snapshots, or
                None to keep the driver default.
        """
        self._db_port = db_port
        self._snapshot_isolation_level = snapshot_isolation_level

    @contextmanager
    def snapshot(self) -> Iterator[SqlAlchemyLedgerReader]:
        engine = self._db_port.get_ledger_engine()
        with engine.connect() as conn:
            if self._snapshot_isolation_level:
                conn = conn.execution_options(
                    isolation_level=self._snapshot_isolation_level
                )
            with conn.begin():
                yield SqlAlchemyLedgerReader(conn)

    @contextmanager
    def transaction(self) -> Iterator[SqlAlchemyLedgerUnitOfWork]:
        engine = self._db_port.get_ledger_engine()
        with engine.begin() as conn:
            yield SqlAlchemyLedgerUnitOfWork(conn)

    def prepare_schema(self) -> None:
        """Create the ledger tables when they are missing."""
        create_ledger_schema(self._db_port.get_ledger_engine())

    def add_account(self, account: Account) -> None:
        """Register an account in the chart of accounts.

        Args:
            account: Account to insert.
        """
        params = _scope_params(account.scope)
        params.update(
            {
                "id": account.id,
                "code": account.code,
                "name": account.name,
                "account_type": account.account_type.value,
                "is_active": account.is_active,
            }
        )
        engine = self._db_port.get_ledger_engine()
        with engine.begin() as conn:
            conn.execute(
                text(
                    """
                    INSERT INTO ledger_accounts (
                        id, tenant_id, company_id, code, name,
                        account_type, is_active
                    ) VALUES (
                        :id, :tenant_id, :company_id, :code, :name,
                        :account_type, :is_active
                    )
                    """
                ),
                params,
            )


__all__ = [
    "SqlAlchemyLedgerReader",
    "SqlAlchemyLedgerUnitOfWork",
    "SqlAlchemyLedgerRepository",
]
