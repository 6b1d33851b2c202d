"""Tests for the balance calculator."""

from datetime import date
from decimal import Decimal

from ledger_factories import ledger_lines, stored_entry
from ledgercore.domain.models import AsOf, EntryStatus, Period
from ledgercore.domain.services.balances import (
    amounts_by_account,
    balance_as_of,
    balance_for_period,
    compute_trial_balance_rows,
)


def _entries():
    return (
        stored_entry(
            "e1",
            date(2024, 1, 5),
            ("cash", "1000", "0"),
            ("capital", "0", "1000"),
        ),
        stored_entry(
            "e2",
            date(2024, 1, 20),
            ("rent", "400", "0"),
            ("cash", "0", "400"),
        ),
        stored_entry(
            "e3",
            date(2024, 2, 3),
            ("cash", "250.125", "0"),
            ("sales", "0", "250.125"),
        ),
        stored_entry(
            "draft",
            date(2024, 1, 10),
            ("cash", "999", "0"),
            ("sales", "0", "999"),
            status=EntryStatus.DRAFT,
        ),
    )


def test_balance_as_of_signs_by_normal_side(accounts_by_id):
    """Debit-normal and credit-normal accounts should both read positive."""
    lines = ledger_lines(*_entries())
    accounts = [accounts_by_id[key] for key in ("cash", "capital", "rent")]

    balances = balance_as_of(accounts, lines, date(2024, 1, 31))

    assert amounts_by_account(balances) == {
        "cash": Decimal("600"),
        "capital": Decimal("1000"),
        "rent": Decimal("400"),
    }
    assert balances[0].window == AsOf(date(2024, 1, 31))


def test_balance_for_period_keeps_precision(accounts_by_id):
    """Period activity should include boundary dates and not round."""
    lines = ledger_lines(*_entries())

    balances = balance_for_period(
        [accounts_by_id["cash"], accounts_by_id["sales"]],
        lines,
        date(2024, 2, 3),
        date(2024, 2, 29),
    )

    assert [balance.amount for balance in balances] == [
        Decimal("250.125"),
        Decimal("250.125"),
    ]
    assert balances[0].window == Period(date(2024, 2, 3), date(2024, 2, 29))


def test_idle_and_duplicate_accounts(accounts_by_id):
    """Idle accounts report zero and duplicates appear once."""
    lines = ledger_lines(*_entries())
    requested = [
        accounts_by_id["equipment"],
        accounts_by_id["cash"],
        accounts_by_id["equipment"],
    ]

    balances = balance_as_of(requested, lines, date(2024, 1, 31))

    assert [balance.account_id for balance in balances] == ["equipment", "cash"]
    assert balances[0].amount == Decimal("0")


def test_drafts_never_count(accounts_by_id):
    """DRAFT lines are outside the ledger."""
    lines = ledger_lines(*_entries())

    balances = balance_as_of([accounts_by_id["sales"]], lines, date(2024, 1, 31))

    assert balances[0].amount == Decimal("0")


def test_trial_balance_rows_for_period(accounts_by_id):
    """Opening balance covers activity before the period start."""
    lines = ledger_lines(*_entries())

    rows = compute_trial_balance_rows(
        [accounts_by_id["cash"]],
        lines,
        Period(date(2024, 2, 1), date(2024, 2, 29)),
    )

    assert rows[0].opening_balance == Decimal("600")
    assert rows[0].debit_total == Decimal("250.125")
    assert rows[0].credit_total == Decimal("0")
    assert rows[0].closing_balance == Decimal("850.125")
