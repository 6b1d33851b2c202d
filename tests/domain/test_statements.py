"""Tests for the statement builders."""

from datetime import date
from decimal import Decimal

from ledger_factories import SCOPE, ledger_lines, make_account, stored_entry
from ledgercore.domain.models import (
    AccountType,
    AsOf,
    Period,
    ReportMetadata,
    StatementKind,
    WarningKind,
)
from ledgercore.domain.services.balances import (
    amounts_by_account,
    balance_as_of,
    balance_for_period,
)
from ledgercore.domain.services.classification import classify_accounts
from ledgercore.domain.services.statements import (
    CURRENT_EARNINGS_NAME,
    build_balance_sheet,
    build_profit_and_loss,
)

JAN_31 = date(2024, 1, 31)
JANUARY = Period(date(2024, 1, 1), JAN_31)


def _metadata(kind, window):
    return ReportMetadata(
        kind=kind,
        scope=SCOPE,
        window=window,
        currency_code="USD",
    )


def _sections(sections):
    return {section.key: section for section in sections}


def _ledger():
    return ledger_lines(
        stored_entry(
            "funding",
            date(2024, 1, 1),
            ("cash", "5000", "0"),
            ("capital", "0", "5000"),
        ),
        stored_entry(
            "stock",
            date(2024, 1, 2),
            ("inventory", "800", "0"),
            ("payables", "0", "800"),
        ),
        stored_entry(
            "truck",
            date(2024, 1, 3),
            ("equipment", "2000", "0"),
            ("loan", "0", "2000"),
        ),
        stored_entry(
            "sale",
            date(2024, 1, 10),
            ("receivables", "1500", "0"),
            ("sales", "0", "1500"),
        ),
        stored_entry(
            "cost",
            date(2024, 1, 10),
            ("cogs", "600", "0"),
            ("inventory", "0", "600"),
        ),
        stored_entry(
            "rent",
            date(2024, 1, 15),
            ("rent", "400", "0"),
            ("cash", "0", "400"),
        ),
    )


def test_balance_sheet_identity_holds_with_current_earnings(accounts):
    """Unclosed income should appear in equity so the sheet balances."""
    classifications = classify_accounts(accounts)
    amounts = amounts_by_account(balance_as_of(accounts, _ledger(), JAN_31))

    sheet = build_balance_sheet(
        _metadata(StatementKind.BALANCE_SHEET, AsOf(JAN_31)),
        accounts,
        classifications,
        amounts,
    )

    assets = _sections(sheet.assets)
    equity = _sections(sheet.equity)
    assert assets["current_assets"].total.amount == Decimal("6300")
    assert assets["fixed_assets"].total.amount == Decimal("2000")
    assert sheet.total_assets.amount == Decimal("8300")
    assert sheet.total_liabilities.amount == Decimal("2800")
    assert equity["current_earnings"].lines[0].name == CURRENT_EARNINGS_NAME
    assert equity["current_earnings"].total.amount == Decimal("500")
    assert sheet.total_equity.amount == Decimal("5500")
    assert sheet.total_liabilities_and_equity.amount == Decimal("8300")
    assert sheet.warnings == ()
    assert sheet.is_balanced


def test_balance_sheet_ratios(accounts):
    """Quick ratio should exclude inventory from current assets."""
    classifications = classify_accounts(accounts)
    amounts = amounts_by_account(balance_as_of(accounts, _ledger(), JAN_31))

    ratios = build_balance_sheet(
        _metadata(StatementKind.BALANCE_SHEET, AsOf(JAN_31)),
        accounts,
        classifications,
        amounts,
    ).ratios

    assert ratios.current_ratio.value == Decimal("6300") / Decimal("800")
    assert ratios.quick_ratio.value == Decimal("6100") / Decimal("800")
    assert ratios.debt_to_equity.value == Decimal("2800") / Decimal("5500")
    assert ratios.equity_multiplier.value == Decimal("8300") / Decimal("5500")
    assert not ratios.current_ratio.undefined


def test_balance_sheet_ratios_undefined_without_liabilities(accounts):
    classifications = classify_accounts(accounts)

    sheet = build_balance_sheet(
        _metadata(StatementKind.BALANCE_SHEET, AsOf(JAN_31)),
        accounts,
        classifications,
        {"cash": Decimal("100"), "capital": Decimal("100")},
    )

    assert sheet.ratios.current_ratio.undefined is True
    assert sheet.ratios.current_ratio.value == Decimal("0")


def test_balance_sheet_warns_when_identity_breaks(accounts):
    """Inconsistent inputs should surface a warning, not an exception."""
    classifications = classify_accounts(accounts)

    sheet = build_balance_sheet(
        _metadata(StatementKind.BALANCE_SHEET, AsOf(JAN_31)),
        accounts,
        classifications,
        {"cash": Decimal("100"), "capital": Decimal("90")},
    )

    assert not sheet.is_balanced
    assert sheet.warnings[0].kind == WarningKind.BALANCE_SHEET_IDENTITY
    assert sheet.warnings[0].difference == Decimal("10")


def test_balance_sheet_comparatives(accounts):
    """Every line and total should carry a change when comparing."""
    classifications = classify_accounts(accounts)

    sheet = build_balance_sheet(
        _metadata(StatementKind.BALANCE_SHEET, AsOf(JAN_31)),
        accounts,
        classifications,
        {"cash": Decimal("150"), "capital": Decimal("150")},
        comparison_amounts={"cash": Decimal("100"), "capital": Decimal("100")},
    )

    cash_line = _sections(sheet.assets)["current_assets"].lines[0]
    assert cash_line.change.absolute == Decimal("50")
    assert cash_line.change.percentage == Decimal("50")
    assert sheet.total_assets.change.absolute == Decimal("50")
    receivables = _sections(sheet.assets)["current_assets"].lines[1]
    assert receivables.change.percentage_undefined is True


def test_unclassified_accounts_count_in_totals(accounts):
    """Fallback accounts are reported and still included in totals."""
    odd = make_account("odd", "9100", "Suspense", AccountType.ASSET)
    chart = accounts + [odd]
    classifications = classify_accounts(chart)

    sheet = build_balance_sheet(
        _metadata(StatementKind.BALANCE_SHEET, AsOf(JAN_31)),
        chart,
        classifications,
        {"odd": Decimal("25"), "capital": Decimal("25")},
    )

    unclassified = _sections(sheet.assets)["unclassified"]
    assert [line.account_id for line in unclassified.lines] == ["odd"]
    assert sheet.total_assets.amount == Decimal("25")
    assert sheet.is_balanced


def test_profit_and_loss_subtotals(accounts):
    """Subtotals should follow the standard P&L cascade."""
    classifications = classify_accounts(accounts)
    amounts = amounts_by_account(
        balance_for_period(accounts, _ledger(), JANUARY.start, JANUARY.end)
    )
    amounts["interest_income"] = Decimal("30")
    amounts["interest_expense"] = Decimal("10")

    statement = build_profit_and_loss(
        _metadata(StatementKind.PROFIT_AND_LOSS, JANUARY),
        accounts,
        classifications,
        amounts,
    )

    assert statement.total_revenue.amount == Decimal("1500")
    assert statement.gross_profit.amount == Decimal("900")
    assert statement.operating_income.amount == Decimal("500")
    assert statement.net_income.amount == Decimal("520")
    assert statement.margins.gross_margin.value == Decimal("60")
    assert statement.margins.gross_margin.undefined is False


def test_profit_and_loss_margins_undefined_without_revenue(accounts):
    classifications = classify_accounts(accounts)

    statement = build_profit_and_loss(
        _metadata(StatementKind.PROFIT_AND_LOSS, JANUARY),
        accounts,
        classifications,
        {"rent": Decimal("100")},
    )

    assert statement.net_income.amount == Decimal("-100")
    assert statement.margins.operating_margin.undefined is True
    assert statement.margins.net_margin.undefined is True


def test_unclassified_flow_accounts_affect_net_income(accounts):
    """Fallback expense lines reduce net income."""
    odd = make_account("odd", "9500", "Misc cost", AccountType.EXPENSE)
    chart = accounts + [odd]
    classifications = classify_accounts(chart)

    statement = build_profit_and_loss(
        _metadata(StatementKind.PROFIT_AND_LOSS, JANUARY),
        chart,
        classifications,
        {"sales": Decimal("100"), "odd": Decimal("40")},
    )

    assert statement.unclassified.lines[0].amount == Decimal("-40")
    assert statement.net_income.amount == Decimal("60")
