"""Tests for the GetProfitAndLossUseCase."""

from datetime import date, datetime, timezone
from decimal import Decimal

from ledger_factories import SCOPE, stored_entry
from ledgercore.application.use_cases.get_profit_and_loss import (
    GetProfitAndLossUseCase,
)
from ledgercore.domain.models import Period, StatementKind

JANUARY = Period(date(2024, 1, 1), date(2024, 1, 31))
DECEMBER = Period(date(2023, 12, 1), date(2023, 12, 31))


def _seed_january(repository):
    repository.store_entry(
        stored_entry(
            "sale",
            date(2024, 1, 8),
            ("cash", "500", "0"),
            ("sales", "0", "500"),
        )
    )
    repository.store_entry(
        stored_entry(
            "rent",
            date(2024, 1, 15),
            ("rent", "200", "0"),
            ("cash", "0", "200"),
        )
    )


def test_january_scenario(repository, logger, clock):
    """Revenue 500 and rent 200 give net 300 and a 60% operating margin."""
    _seed_january(repository)

    statement = GetProfitAndLossUseCase(
        repository,
        logger=logger,
        clock=clock,
    ).execute(SCOPE, JANUARY)

    assert statement.total_revenue.amount == Decimal("500")
    assert statement.operating_expenses.total.amount == Decimal("200")
    assert statement.net_income.amount == Decimal("300")
    assert statement.margins.operating_margin.value == Decimal("60")
    assert statement.margins.net_margin.value == Decimal("60")
    assert statement.margins.gross_margin.undefined is True
    assert statement.metadata.kind == StatementKind.PROFIT_AND_LOSS


def test_activity_outside_period_is_excluded(repository, logger, clock):
    _seed_january(repository)
    repository.store_entry(
        stored_entry(
            "feb-sale",
            date(2024, 2, 1),
            ("cash", "900", "0"),
            ("sales", "0", "900"),
        )
    )

    statement = GetProfitAndLossUseCase(
        repository,
        logger=logger,
        clock=clock,
    ).execute(SCOPE, JANUARY)

    assert statement.total_revenue.amount == Decimal("500")


def test_comparison_period(repository, logger, clock):
    """Comparatives should compute change against the prior period."""
    _seed_january(repository)
    repository.store_entry(
        stored_entry(
            "dec-sale",
            date(2023, 12, 20),
            ("cash", "400", "0"),
            ("sales", "0", "400"),
        )
    )

    statement = GetProfitAndLossUseCase(
        repository,
        logger=logger,
        clock=clock,
    ).execute(SCOPE, JANUARY, comparison_period=DECEMBER)

    assert statement.total_revenue.comparison_amount == Decimal("400")
    assert statement.total_revenue.change.absolute == Decimal("100")
    assert statement.total_revenue.change.percentage == Decimal("25")
    rent = statement.operating_expenses.lines[0]
    assert rent.comparison_amount == Decimal("0")
    assert rent.change.percentage_undefined is True
    assert statement.net_income.comparison_amount == Decimal("400")
    assert statement.metadata.comparison_window == DECEMBER


def test_execute_is_idempotent(repository, logger):
    """Two assemblies over the same ledger compare equal."""
    _seed_january(repository)
    times = iter(
        [
            datetime(2024, 2, 1, tzinfo=timezone.utc),
            datetime(2024, 2, 2, tzinfo=timezone.utc),
        ]
    )
    use_case = GetProfitAndLossUseCase(
        repository,
        logger=logger,
        clock=lambda: next(times),
    )

    first = use_case.execute(SCOPE, JANUARY, comparison_period=DECEMBER)
    second = use_case.execute(SCOPE, JANUARY, comparison_period=DECEMBER)

    assert first == second
    assert first.metadata.generated_at != second.metadata.generated_at
