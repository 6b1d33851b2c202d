"""DDL for the ledger tables."""

from sqlalchemy import text
from sqlalchemy.engine import Engine

LEDGER_SCHEMA_STATEMENTS = (
    """
    CREATE TABLE IF NOT EXISTS ledger_accounts (
        id VARCHAR(64) PRIMARY KEY,
        tenant_id VARCHAR(64) NOT NULL,
        company_id VARCHAR(64) NOT NULL,
        code VARCHAR(32) NOT NULL,
        name VARCHAR(255) NOT NULL,
        account_type VARCHAR(16) NOT NULL,
        is_active BOOLEAN NOT NULL DEFAULT TRUE,
        UNIQUE (tenant_id, company_id, code)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS journal_entries (
        id VARCHAR(64) PRIMARY KEY,
        tenant_id VARCHAR(64) NOT NULL,
        company_id VARCHAR(64) NOT NULL,
        entry_date DATE NOT NULL,
        status VARCHAR(16) NOT NULL,
        memo TEXT,
        reference VARCHAR(255)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS journal_lines (
        entry_id VARCHAR(64) NOT NULL REFERENCES journal_entries (id),
        line_no INTEGER NOT NULL,
        account_id VARCHAR(64) NOT NULL REFERENCES ledger_accounts (id),
        debit NUMERIC(20, 6) NOT NULL DEFAULT 0,
        credit NUMERIC(20, 6) NOT NULL DEFAULT 0,
        memo TEXT,
        PRIMARY KEY (entry_id, line_no)
    )
    """,
    """
    CREATE INDEX IF NOT EXISTS ix_journal_entries_scope_date
        ON journal_entries (tenant_id, company_id, entry_date)
    """,
    """
    CREATE INDEX IF NOT EXISTS ix_journal_lines_account
        ON journal_lines (account_id)
    """,
)


def create_ledger_schema(engine: Engine) -> None:
    """Create the ledger tables and indexes when they are missing.

    Args:
        engine: Engine connected to the ledger database.
    """
    with engine.begin() as conn:
        for statement in LEDGER_SCHEMA_STATEMENTS:
            conn.execute(text(statement))


__all__ = ["LEDGER_SCHEMA_STATEMENTS", "create_ledger_schema"]
