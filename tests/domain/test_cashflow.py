"""Tests for the cash-flow bucketizer."""

from datetime import date
from decimal import Decimal

import pytest

from ledger_factories import SCOPE, ledger_lines, stored_entry
from ledgercore.domain.errors import IntegrityFault
from ledgercore.domain.models import (
    CashFlowCategory,
    Period,
    ReportMetadata,
    StatementKind,
    WarningKind,
)
from ledgercore.domain.services.cashflow import (
    CashMovement,
    bucketize_cash_movements,
)
from ledgercore.domain.services.classification import classify_accounts
from ledgercore.domain.services.statements import build_cash_flow

JANUARY = Period(date(2024, 1, 1), date(2024, 1, 31))


def test_movements_are_bucketed_by_counter_account(accounts):
    """Counter-account classification decides the activity."""
    classifications = classify_accounts(accounts)
    lines = ledger_lines(
        stored_entry(
            "sale",
            date(2024, 1, 2),
            ("cash", "1000", "0"),
            ("sales", "0", "1000"),
        ),
        stored_entry(
            "machine",
            date(2024, 1, 3),
            ("equipment", "300", "0"),
            ("cash", "0", "300"),
        ),
        stored_entry(
            "borrow",
            date(2024, 1, 4),
            ("cash", "500", "0"),
            ("loan", "0", "500"),
        ),
        stored_entry(
            "accrual",
            date(2024, 1, 5),
            ("rent", "50", "0"),
            ("payables", "0", "50"),
        ),
    )

    movements = bucketize_cash_movements(
        lines,
        ["cash"],
        classifications,
        JANUARY,
    )

    assert [(m.entry_id, m.category, m.amount) for m in movements] == [
        ("sale", CashFlowCategory.OPERATING, Decimal("1000")),
        ("machine", CashFlowCategory.INVESTING, Decimal("-300")),
        ("borrow", CashFlowCategory.FINANCING, Decimal("500")),
    ]


def test_split_entry_attributes_each_sibling_line(accounts):
    """An entry with several counter-accounts yields one movement each."""
    classifications = classify_accounts(accounts)
    lines = ledger_lines(
        stored_entry(
            "repay",
            date(2024, 1, 10),
            ("loan", "200", "0"),
            ("interest_expense", "15", "0"),
            ("cash", "0", "215"),
        )
    )

    movements = bucketize_cash_movements(
        lines,
        ["cash"],
        classifications,
        JANUARY,
    )

    assert {(m.account_id, m.category, m.amount) for m in movements} == {
        ("loan", CashFlowCategory.FINANCING, Decimal("-200")),
        ("interest_expense", CashFlowCategory.OPERATING, Decimal("-15")),
    }
    assert sum(m.amount for m in movements) == Decimal("-215")


def test_transfers_between_cash_accounts_are_ignored(accounts):
    """Entries with only cash lines do not move total cash."""
    classifications = classify_accounts(accounts)
    lines = ledger_lines(
        stored_entry(
            "transfer",
            date(2024, 1, 10),
            ("cash", "100", "0"),
            ("cash", "0", "100"),
        )
    )

    assert bucketize_cash_movements(lines, ["cash"], classifications, JANUARY) == []


def test_entries_outside_period_are_skipped(accounts):
    classifications = classify_accounts(accounts)
    lines = ledger_lines(
        stored_entry(
            "feb",
            date(2024, 2, 1),
            ("cash", "10", "0"),
            ("sales", "0", "10"),
        )
    )

    assert bucketize_cash_movements(lines, ["cash"], classifications, JANUARY) == []


def test_unknown_counter_account_is_an_integrity_fault(accounts):
    classifications = classify_accounts(accounts)
    lines = ledger_lines(
        stored_entry(
            "odd",
            date(2024, 1, 10),
            ("cash", "10", "0"),
            ("elsewhere", "0", "10"),
        )
    )

    with pytest.raises(IntegrityFault):
        bucketize_cash_movements(lines, ["cash"], classifications, JANUARY)


def test_build_cash_flow_warns_on_reconciliation_mismatch(accounts):
    """A gap between net flow and the cash change is reported."""
    movements = [
        CashMovement(
            entry_id="sale",
            entry_date=date(2024, 1, 2),
            account_id="sales",
            category=CashFlowCategory.OPERATING,
            amount=Decimal("100"),
        )
    ]

    statement = build_cash_flow(
        ReportMetadata(
            kind=StatementKind.CASH_FLOW,
            scope=SCOPE,
            window=JANUARY,
            currency_code="USD",
        ),
        accounts,
        movements,
        beginning_cash=Decimal("0"),
        ending_cash=Decimal("90"),
        cash_account_ids=("cash",),
    )

    assert statement.has_discrepancy
    assert statement.warnings[0].kind == WarningKind.CASH_RECONCILIATION
    assert statement.warnings[0].difference == Decimal("10")
    assert statement.operating.lines[0].name == "Sales"
