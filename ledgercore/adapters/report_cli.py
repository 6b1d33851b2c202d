"""CLI adapter to print ledger statements.

The report is selected with environment variables:

- `LEDGER_TENANT_ID`, `LEDGER_COMPANY_ID`: company to report (required).
- `REPORT_KIND`: balance_sheet, profit_and_loss, cash_flow or
  trial_balance (default balance_sheet).
- `REPORT_START_DATE`, `REPORT_END_DATE`: ISO dates of the window.
- `REPORT_COMPARISON_START_DATE`, `REPORT_COMPARISON_END_DATE`: optional
  comparative window.
"""

from datetime import date
import os

from ledgercore.application.use_cases import (
    GetBalanceSheetUseCase,
    GetCashFlowUseCase,
    GetProfitAndLossUseCase,
    GetTrialBalanceUseCase,
)
from ledgercore.domain.errors import LedgerError
from ledgercore.domain.models import (
    AsOf,
    BalanceSheet,
    CashFlowActivity,
    CashFlowStatement,
    CompanyScope,
    Period,
    ProfitAndLoss,
    Ratio,
    StatementSection,
    StatementTotal,
    TrialBalance,
)
from ledgercore.infrastructure.container import (
    build_classification_registry,
    build_ledger_repository,
)
from ledgercore.infrastructure.logging.logger import get_app_logger
from ledgercore.infrastructure.settings import LedgerSettings
from ledgercore.utils.decimal_utils import round_money

REPORT_KINDS = ("balance_sheet", "profit_and_loss", "cash_flow", "trial_balance")


def _parse_date(value: str | None, logger) -> date | None:
    """Parse an ISO date string into a date.

    Args:
        value: Date string in YYYY-MM-DD format.
        logger: Logger used for warnings.

    Returns:
        date | None: Parsed date or None when invalid.
    """
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        logger.warning(
            f"Invalid date '{value}'. Expected format YYYY-MM-DD."
        )
        return None


def _period(start: date | None, end: date | None, logger) -> Period | None:
    if start is None or end is None:
        return None
    try:
        return Period(start, end)
    except ValueError as exc:
        logger.warning(str(exc))
        return None


def _money(value, minor_unit: int) -> str:
    return f"{round_money(value, minor_unit):,}"


def _ratio(ratio: Ratio, minor_unit: int) -> str:
    if ratio.undefined:
        return "n/a"
    return str(round_money(ratio.value, minor_unit))


def _total_line(label: str, total: StatementTotal, minor_unit: int) -> str:
    text = f"{label}: {_money(total.amount, minor_unit)}"
    if total.comparison_amount is not None:
        text += f" (prior {_money(total.comparison_amount, minor_unit)}"
        if total.change is not None and not total.change.percentage_undefined:
            text += f", {_ratio(Ratio(total.change.percentage), 1)}%"
        text += ")"
    return text


def _section_lines(section: StatementSection, minor_unit: int) -> list[str]:
    if not section.lines:
        return []
    lines = [f"  {section.title}"]
    for line in section.lines:
        label = f"{line.code} {line.name}" if line.code else line.name
        lines.append(f"    {label}: {_money(line.amount, minor_unit)}")
    lines.append(
        "  " + _total_line(f"Total {section.title}", section.total, minor_unit)
    )
    return lines


def format_balance_sheet(sheet: BalanceSheet, minor_unit: int = 2) -> list[str]:
    """Render a balance sheet as text lines."""
    lines = [f"Balance sheet as of {sheet.metadata.window.end}"]
    for title, sections, total in (
        ("Assets", sheet.assets, sheet.total_assets),
        ("Liabilities", sheet.liabilities, sheet.total_liabilities),
        ("Equity", sheet.equity, sheet.total_equity),
    ):
        lines.append(title)
        for section in sections:
            lines.extend(_section_lines(section, minor_unit))
        lines.append(_total_line(f"Total {title.lower()}", total, minor_unit))
    lines.append(
        _total_line(
            "Total liabilities and equity",
            sheet.total_liabilities_and_equity,
            minor_unit,
        )
    )
    ratios = sheet.ratios
    lines.append(
        f"Current ratio: {_ratio(ratios.current_ratio, minor_unit)}, "
        f"quick ratio: {_ratio(ratios.quick_ratio, minor_unit)}, "
        f"debt to equity: {_ratio(ratios.debt_to_equity, minor_unit)}, "
        f"equity multiplier: {_ratio(ratios.equity_multiplier, minor_unit)}"
    )
    return lines


def format_profit_and_loss(
    statement: ProfitAndLoss,
    minor_unit: int = 2,
) -> list[str]:
    """Render a profit and loss statement as text lines."""
    window = statement.metadata.window
    lines = [f"Profit and loss {window.start} to {window.end}"]
    lines.extend(_section_lines(statement.revenue, minor_unit))
    lines.extend(_section_lines(statement.cost_of_sales, minor_unit))
    lines.append(_total_line("Gross profit", statement.gross_profit, minor_unit))
    lines.extend(_section_lines(statement.operating_expenses, minor_unit))
    lines.append(
        _total_line("Operating income", statement.operating_income, minor_unit)
    )
    lines.extend(_section_lines(statement.other_income, minor_unit))
    lines.extend(_section_lines(statement.other_expense, minor_unit))
    lines.extend(_section_lines(statement.unclassified, minor_unit))
    lines.append(_total_line("Net income", statement.net_income, minor_unit))
    margins = statement.margins
    lines.append(
        f"Gross margin: {_ratio(margins.gross_margin, 1)}%, "
        f"operating margin: {_ratio(margins.operating_margin, 1)}%, "
        f"net margin: {_ratio(margins.net_margin, 1)}%"
    )
    return lines


def _activity_lines(activity: CashFlowActivity, minor_unit: int) -> list[str]:
    lines = [f"  {activity.category.value.capitalize()} activities"]
    for line in activity.lines:
        lines.append(f"    {line.name}: {_money(line.amount, minor_unit)}")
    lines.append("  " + _total_line("Net", activity.net, minor_unit))
    return lines


def format_cash_flow(
    statement: CashFlowStatement,
    minor_unit: int = 2,
) -> list[str]:
    """Render a cash-flow statement as text lines."""
    window = statement.metadata.window
    lines = [f"Cash flow {window.start} to {window.end}"]
    for activity in (statement.operating, statement.investing, statement.financing):
        lines.extend(_activity_lines(activity, minor_unit))
    lines.append(
        _total_line("Net cash flow", statement.net_cash_flow, minor_unit)
    )
    lines.append(
        f"Cash: {_money(statement.beginning_cash, minor_unit)} -> "
        f"{_money(statement.ending_cash, minor_unit)}"
    )
    return lines


def format_trial_balance(
    trial_balance: TrialBalance,
    minor_unit: int = 2,
) -> list[str]:
    """Render a trial balance as text lines."""
    lines = [f"Trial balance to {trial_balance.metadata.window.end}"]
    for row in trial_balance.rows:
        lines.append(
            f"  {row.code} {row.name}: "
            f"debit {_money(row.debit_total, minor_unit)}, "
            f"credit {_money(row.credit_total, minor_unit)}, "
            f"closing {_money(row.closing_balance, minor_unit)}"
        )
    lines.append(
        f"Totals: debit {_money(trial_balance.total_debits, minor_unit)}, "
        f"credit {_money(trial_balance.total_credits, minor_unit)}"
    )
    return lines


def _run_report(
    kind,
    scope,
    start,
    end,
    comparison_end,
    comparison,
    settings,
    logger,
):
    repository = build_ledger_repository(settings)
    registry = build_classification_registry(settings)
    minor_unit = settings.minor_unit
    if kind == "balance_sheet":
        use_case = GetBalanceSheetUseCase(
            repository,
            logger=logger,
            classification_registry=registry,
            currency_code=settings.currency_code,
            epsilon=settings.epsilon,
        )
        sheet = use_case.execute(scope, end, comparison_end)
        return format_balance_sheet(sheet, minor_unit), sheet
    if kind == "trial_balance":
        use_case = GetTrialBalanceUseCase(
            repository,
            logger=logger,
            currency_code=settings.currency_code,
            epsilon=settings.epsilon,
        )
        window = _period(start, end, logger) or AsOf(end)
        trial_balance = use_case.execute(scope, window)
        return format_trial_balance(trial_balance, minor_unit), None

    period = _period(start, end, logger)
    if period is None:
        logger.warning(
            f"{kind} requires REPORT_START_DATE and REPORT_END_DATE."
        )
        return None, None
    if kind == "profit_and_loss":
        use_case = GetProfitAndLossUseCase(
            repository,
            logger=logger,
            classification_registry=registry,
            currency_code=settings.currency_code,
        )
        statement = use_case.execute(scope, period, comparison)
        return format_profit_and_loss(statement, minor_unit), statement
    use_case = GetCashFlowUseCase(
        repository,
        logger=logger,
        classification_registry=registry,
        cash_account_codes=settings.cash_account_codes,
        currency_code=settings.currency_code,
        epsilon=settings.epsilon,
    )
    statement = use_case.execute(scope, period, comparison)
    return format_cash_flow(statement, minor_unit), statement


def main() -> None:
    """Print the requested statement for the configured company."""
    logger = get_app_logger()
    tenant_id = os.getenv("LEDGER_TENANT_ID")
    company_id = os.getenv("LEDGER_COMPANY_ID")
    if not tenant_id or not company_id:
        logger.warning("LEDGER_TENANT_ID and LEDGER_COMPANY_ID are required.")
        return
    kind = os.getenv("REPORT_KIND", "balance_sheet").strip().lower()
    if kind not in REPORT_KINDS:
        logger.warning(
            f"Unknown REPORT_KIND '{kind}'. "
            f"Expected one of: {', '.join(REPORT_KINDS)}"
        )
        return

    start = _parse_date(os.getenv("REPORT_START_DATE"), logger)
    end = _parse_date(os.getenv("REPORT_END_DATE"), logger) or date.today()
    comparison_end = _parse_date(
        os.getenv("REPORT_COMPARISON_END_DATE"),
        logger,
    )
    comparison = _period(
        _parse_date(os.getenv("REPORT_COMPARISON_START_DATE"), logger),
        comparison_end,
        logger,
    )
    settings = LedgerSettings.from_env()
    scope = CompanyScope(tenant_id=tenant_id, company_id=company_id)

    try:
        lines, statement = _run_report(
            kind,
            scope,
            start,
            end,
            comparison_end,
            comparison,
            settings,
            logger,
        )
    except LedgerError as exc:
        logger.error(f"Report failed: {exc}")
        return
    if lines is None:
        return
    for line in lines:
        print(line)
    for warning in getattr(statement, "warnings", ()):
        print(f"WARNING: {warning.message}")
    for gap in getattr(statement, "classification_gaps", ()):
        print(f"UNCLASSIFIED: {gap.code} {gap.name}")


if __name__ == "__main__":  # pragma: no cover
    main()
