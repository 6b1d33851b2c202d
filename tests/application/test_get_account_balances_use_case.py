"""Tests for the GetAccountBalancesUseCase."""

from datetime import date
from decimal import Decimal

from ledger_factories import (
    OTHER_SCOPE,
    SCOPE,
    make_account,
    make_chart,
    stored_entry,
)
from ledgercore.application.use_cases.get_account_balances import (
    GetAccountBalancesUseCase,
)
from ledgercore.domain.errors import UnknownAccountError
from ledgercore.domain.models import AccountType, AsOf, EntryStatus, Period


def _seed(repository):
    repository.store_entry(
        stored_entry(
            "e1",
            date(2024, 1, 5),
            ("cash", "1000", "0"),
            ("capital", "0", "1000"),
        )
    )
    repository.store_entry(
        stored_entry(
            "e2",
            date(2024, 2, 5),
            ("rent", "300", "0"),
            ("cash", "0", "300"),
        )
    )
    repository.store_entry(
        stored_entry(
            "draft",
            date(2024, 1, 6),
            ("cash", "50", "0"),
            ("sales", "0", "50"),
            status=EntryStatus.DRAFT,
        )
    )


def test_execute_returns_requested_accounts_in_order(repository, logger):
    """Balances follow request order with duplicates collapsed."""
    _seed(repository)

    balances = GetAccountBalancesUseCase(repository, logger=logger).execute(
        SCOPE,
        AsOf(date(2024, 2, 29)),
        account_ids=["rent", "cash", "rent", "equipment"],
    )

    assert [(b.account_id, b.amount) for b in balances] == [
        ("rent", Decimal("300")),
        ("cash", Decimal("700")),
        ("equipment", Decimal("0")),
    ]


def test_execute_defaults_to_every_account(repository, logger):
    """Without ids, every account of the company is reported."""
    _seed(repository)

    balances = GetAccountBalancesUseCase(repository, logger=logger).execute(
        SCOPE,
        Period(date(2024, 1, 1), date(2024, 1, 31)),
    )

    amounts = {b.account_id: b.amount for b in balances}
    assert len(balances) == len(make_chart())
    assert amounts["cash"] == Decimal("1000")
    assert amounts["sales"] == Decimal("0")


def test_execute_reports_unknown_accounts(repository, logger):
    balances = GetAccountBalancesUseCase(repository, logger=logger).execute(
        SCOPE,
        AsOf(date(2024, 1, 31)),
        account_ids=["cash", "nope"],
    )

    assert balances == UnknownAccountError(account_ids=("nope",))


def test_execute_never_reads_other_tenants(repository, logger):
    """Accounts of another company are unknown in this scope."""
    repository.add_account(
        make_account(
            "other-cash",
            "1000",
            "Cash",
            AccountType.ASSET,
            scope=OTHER_SCOPE,
        )
    )

    result = GetAccountBalancesUseCase(repository, logger=logger).execute(
        SCOPE,
        AsOf(date(2024, 1, 31)),
        account_ids=["other-cash"],
    )

    assert isinstance(result, UnknownAccountError)
