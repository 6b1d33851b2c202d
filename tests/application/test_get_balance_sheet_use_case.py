"""Tests for the GetBalanceSheetUseCase."""

from datetime import date, datetime, timezone
from decimal import Decimal
from unittest.mock import MagicMock

from ledger_factories import SCOPE, make_account, stored_entry
from ledgercore.application.use_cases.get_balance_sheet import (
    GetBalanceSheetUseCase,
)
from ledgercore.domain.models import (
    AccountType,
    AsOf,
    ClassificationRule,
    Section,
    StatementKind,
    Subsection,
)
from ledgercore.domain.services.classification import (
    ClassificationRegistry,
    ClassificationTable,
)


def _seed(repository):
    repository.store_entry(
        stored_entry(
            "funding",
            date(2024, 1, 1),
            ("cash", "1000", "0"),
            ("capital", "0", "1000"),
        )
    )
    repository.store_entry(
        stored_entry(
            "sale",
            date(2024, 1, 10),
            ("cash", "500", "0"),
            ("sales", "0", "500"),
        )
    )
    repository.store_entry(
        stored_entry(
            "rent",
            date(2024, 2, 10),
            ("rent", "200", "0"),
            ("cash", "0", "200"),
        )
    )


def _by_key(sections):
    return {section.key: section for section in sections}


def test_execute_builds_balanced_sheet(repository, logger, clock):
    """Assets should equal liabilities plus equity including earnings."""
    _seed(repository)

    sheet = GetBalanceSheetUseCase(
        repository,
        logger=logger,
        clock=clock,
    ).execute(SCOPE, date(2024, 2, 29))

    assert sheet.total_assets.amount == Decimal("1300")
    assert sheet.total_liabilities_and_equity.amount == Decimal("1300")
    assert _by_key(sheet.equity)["current_earnings"].total.amount == Decimal(
        "300"
    )
    assert sheet.is_balanced
    assert sheet.metadata.kind == StatementKind.BALANCE_SHEET
    assert sheet.metadata.window == AsOf(date(2024, 2, 29))
    assert sheet.metadata.currency_code == "USD"
    assert sheet.metadata.generated_at == clock()
    logger.warning.assert_not_called()


def test_execute_with_comparison_date(repository, logger, clock):
    """Comparatives should reflect balances at the comparison date."""
    _seed(repository)

    sheet = GetBalanceSheetUseCase(
        repository,
        logger=logger,
        clock=clock,
    ).execute(SCOPE, date(2024, 2, 29), comparison_date=date(2024, 1, 31))

    cash = _by_key(sheet.assets)["current_assets"].lines[0]
    assert cash.amount == Decimal("1300")
    assert cash.comparison_amount == Decimal("1500")
    assert cash.change.absolute == Decimal("-200")
    assert sheet.metadata.comparison_window == AsOf(date(2024, 1, 31))


def test_execute_is_idempotent(repository, logger):
    """Two assemblies over the same ledger compare equal."""
    _seed(repository)
    times = iter(
        [
            datetime(2024, 3, 1, tzinfo=timezone.utc),
            datetime(2024, 3, 2, tzinfo=timezone.utc),
        ]
    )
    use_case = GetBalanceSheetUseCase(
        repository,
        logger=logger,
        clock=lambda: next(times),
    )

    first = use_case.execute(SCOPE, date(2024, 2, 29))
    second = use_case.execute(SCOPE, date(2024, 2, 29))

    assert first == second
    assert first.metadata.generated_at != second.metadata.generated_at


def test_execute_reports_classification_gaps(repository, logger, clock):
    repository.add_account(
        make_account("suspense", "9000", "Suspense", AccountType.ASSET)
    )

    sheet = GetBalanceSheetUseCase(
        repository,
        logger=logger,
        clock=clock,
    ).execute(SCOPE, date(2024, 1, 31))

    assert [gap.account_id for gap in sheet.classification_gaps] == [
        "suspense"
    ]


def test_execute_uses_tenant_classification_table(repository, logger, clock):
    """A tenant table should override the default placement."""
    _seed(repository)
    table = ClassificationTable(
        [
            ClassificationRule(
                "1",
                Section.ASSETS,
                Subsection.OTHER_ASSETS,
            ),
            ClassificationRule("3", Section.EQUITY, Subsection.OTHER_EQUITY),
        ]
    )
    registry = ClassificationRegistry(tenant_tables={SCOPE.tenant_id: table})

    sheet = GetBalanceSheetUseCase(
        repository,
        logger=logger,
        classification_registry=registry,
        clock=clock,
    ).execute(SCOPE, date(2024, 1, 31))

    assets = _by_key(sheet.assets)
    assert assets["current_assets"].lines == ()
    assert assets["other_assets"].total.amount == Decimal("1500")
    assert sheet.is_balanced


def test_execute_reads_through_one_snapshot(accounts, logger, clock):
    """Accounts and lines should come from the same snapshot."""
    reader = MagicMock()
    reader.list_accounts.return_value = accounts
    reader.list_posted_lines.return_value = []
    repository = MagicMock()
    repository.snapshot.return_value.__enter__.return_value = reader

    GetBalanceSheetUseCase(repository, logger=logger, clock=clock).execute(
        SCOPE,
        date(2024, 1, 31),
        comparison_date=date(2023, 12, 31),
    )

    repository.snapshot.assert_called_once_with()
    reader.list_posted_lines.assert_called_once_with(
        SCOPE,
        [account.id for account in accounts],
        AsOf(date(2024, 1, 31)),
    )
