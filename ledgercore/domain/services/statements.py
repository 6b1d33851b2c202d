"""Statement assembly from classified account balances."""

from collections.abc import Iterable, Mapping
from decimal import Decimal

from ledgercore.domain.constants import DEFAULT_EPSILON, ZERO
from ledgercore.domain.models import (
    Account,
    BalanceSheet,
    BalanceSheetRatios,
    CashFlowActivity,
    CashFlowCategory,
    CashFlowStatement,
    Classification,
    ClassificationGap,
    ConsistencyWarning,
    NormalSide,
    ProfitAndLoss,
    ProfitMargins,
    Ratio,
    ReportMetadata,
    Section,
    StatementLine,
    StatementSection,
    StatementTotal,
    Subsection,
    WarningKind,
)
from ledgercore.domain.services.cashflow import CashMovement
from ledgercore.domain.services.variance import (
    combine,
    figure,
    percentage_of,
    safe_ratio,
)

SECTION_TITLES = {
    "current_assets": "Current Assets",
    "fixed_assets": "Fixed Assets",
    "other_assets": "Other Assets",
    "current_liabilities": "Current Liabilities",
    "long_term_liabilities": "Long-Term Liabilities",
    "contributed_capital": "Contributed Capital",
    "retained_earnings": "Retained Earnings",
    "other_equity": "Other Equity",
    "current_earnings": "Current Earnings",
    "revenue": "Revenue",
    "cost_of_sales": "Cost of Sales",
    "operating_expenses": "Operating Expenses",
    "other_income": "Other Income",
    "other_expense": "Other Expense",
    "unclassified": "Other/Unclassified",
    "operating": "Operating Activities",
    "investing": "Investing Activities",
    "financing": "Financing Activities",
}

CURRENT_EARNINGS_NAME = "Current period earnings"


def _sorted_accounts(accounts: Iterable[Account]) -> list[Account]:
    return sorted(accounts, key=lambda account: (account.code, account.id))


def _build_section(
    key: str,
    accounts: Iterable[Account],
    amounts: Mapping[str, Decimal],
    comparison_amounts: Mapping[str, Decimal] | None,
    signs: Mapping[str, int] | None = None,
) -> StatementSection:
    lines = []
    for account in _sorted_accounts(accounts):
        sign = signs.get(account.id, 1) if signs else 1
        amount = sign * amounts.get(account.id, ZERO)
        comparison = None
        if comparison_amounts is not None:
            comparison = sign * comparison_amounts.get(account.id, ZERO)
        total = figure(amount, comparison)
        lines.append(
            StatementLine(
                account_id=account.id,
                code=account.code,
                name=account.name,
                amount=total.amount,
                comparison_amount=total.comparison_amount,
                change=total.change,
            )
        )
    return _section_from_lines(key, lines, comparison_amounts is not None)


def _section_from_lines(
    key: str,
    lines: list[StatementLine],
    with_comparison: bool,
) -> StatementSection:
    amount = sum((line.amount for line in lines), ZERO)
    comparison = None
    if with_comparison:
        comparison = sum(
            (line.comparison_amount or ZERO for line in lines),
            ZERO,
        )
    return StatementSection(
        key=key,
        title=SECTION_TITLES[key],
        lines=tuple(lines),
        total=figure(amount, comparison),
    )


def _select(
    accounts: Iterable[Account],
    classifications: Mapping[str, Classification],
    section: Section,
    subsections: Iterable[Subsection],
) -> list[Account]:
    wanted = set(subsections)
    return [
        account
        for account in accounts
        if classifications[account.id].section == section
        and classifications[account.id].subsection in wanted
    ]


def _sum_total(sections: Iterable[StatementSection]) -> StatementTotal:
    return combine((1, section.total) for section in sections)


def net_earnings(
    accounts: Iterable[Account],
    classifications: Mapping[str, Classification],
    amounts: Mapping[str, Decimal],
) -> Decimal:
    """Return income minus expenses accumulated on flow accounts."""
    total = ZERO
    for account in accounts:
        classification = classifications[account.id]
        if classification.section.is_balance_sheet:
            continue
        amount = amounts.get(account.id, ZERO)
        if classification.normal_side == NormalSide.CREDIT:
            total += amount
        else:
            total -= amount
    return total


def build_balance_sheet(
    metadata: ReportMetadata,
    accounts: Iterable[Account],
    classifications: Mapping[str, Classification],
    amounts: Mapping[str, Decimal],
    comparison_amounts: Mapping[str, Decimal] | None = None,
    classification_gaps: tuple[ClassificationGap, ...] = (),
    epsilon: Decimal = DEFAULT_EPSILON,
) -> BalanceSheet:
    """Assemble a balance sheet from cumulative account balances.

    Flow accounts are not shown individually. Their net, which has not been
    closed into retained earnings, is reported as a current earnings line so
    that the accounting identity holds without period-close entries.

    Args:
        metadata: Report context.
        accounts: Every account of the company.
        classifications: Classification per account id.
        amounts: Signed balances as of the report date.
        comparison_amounts: Signed balances as of the comparison date.
        classification_gaps: Accounts that fell back to unclassified.
        epsilon: Tolerance for the assets = liabilities + equity check.

    Returns:
        BalanceSheet: Grouped balances, totals, ratios and warnings.
    """
    accounts = list(accounts)

    def section(key, section_kind, subsections):
        return _build_section(
            key,
            _select(accounts, classifications, section_kind, subsections),
            amounts,
            comparison_amounts,
        )

    assets = (
        section(
            "current_assets",
            Section.ASSETS,
            (Subsection.CURRENT_ASSETS, Subsection.INVENTORY),
        ),
        section("fixed_assets", Section.ASSETS, (Subsection.FIXED_ASSETS,)),
        section("other_assets", Section.ASSETS, (Subsection.OTHER_ASSETS,)),
        section("unclassified", Section.ASSETS, (Subsection.UNCLASSIFIED,)),
    )
    liabilities = (
        section(
            "current_liabilities",
            Section.LIABILITIES,
            (Subsection.CURRENT_LIABILITIES,),
        ),
        section(
            "long_term_liabilities",
            Section.LIABILITIES,
            (Subsection.LONG_TERM_LIABILITIES,),
        ),
        section(
            "unclassified",
            Section.LIABILITIES,
            (Subsection.UNCLASSIFIED,),
        ),
    )

    earnings = figure(
        net_earnings(accounts, classifications, amounts),
        (
            net_earnings(accounts, classifications, comparison_amounts)
            if comparison_amounts is not None
            else None
        ),
    )
    earnings_section = _section_from_lines(
        "current_earnings",
        [
            StatementLine(
                account_id=None,
                code=None,
                name=CURRENT_EARNINGS_NAME,
                amount=earnings.amount,
                comparison_amount=earnings.comparison_amount,
                change=earnings.change,
            )
        ],
        comparison_amounts is not None,
    )
    equity = (
        section(
            "contributed_capital",
            Section.EQUITY,
            (Subsection.CONTRIBUTED_CAPITAL,),
        ),
        section(
            "retained_earnings",
            Section.EQUITY,
            (Subsection.RETAINED_EARNINGS,),
        ),
        section("other_equity", Section.EQUITY, (Subsection.OTHER_EQUITY,)),
        section("unclassified", Section.EQUITY, (Subsection.UNCLASSIFIED,)),
        earnings_section,
    )

    total_assets = _sum_total(assets)
    total_liabilities = _sum_total(liabilities)
    total_equity = _sum_total(equity)
    total_liabilities_and_equity = combine(
        ((1, total_liabilities), (1, total_equity))
    )

    inventory = sum(
        (
            amounts.get(account.id, ZERO)
            for account in _select(
                accounts,
                classifications,
                Section.ASSETS,
                (Subsection.INVENTORY,),
            )
        ),
        ZERO,
    )
    current_assets = assets[0].total.amount
    current_liabilities = liabilities[0].total.amount
    ratios = BalanceSheetRatios(
        current_ratio=safe_ratio(current_assets, current_liabilities),
        quick_ratio=safe_ratio(current_assets - inventory, current_liabilities),
        debt_to_equity=safe_ratio(total_liabilities.amount, total_equity.amount),
        equity_multiplier=safe_ratio(total_assets.amount, total_equity.amount),
    )

    warnings = []
    difference = total_assets.amount - total_liabilities_and_equity.amount
    if abs(difference) >= epsilon:
        warnings.append(
            ConsistencyWarning(
                kind=WarningKind.BALANCE_SHEET_IDENTITY,
                difference=difference,
                message=(
                    f"Total assets {total_assets.amount} differ from "
                    f"liabilities plus equity "
                    f"{total_liabilities_and_equity.amount} by {difference}"
                ),
            )
        )

    return BalanceSheet(
        metadata=metadata,
        assets=assets,
        liabilities=liabilities,
        equity=equity,
        total_assets=total_assets,
        total_liabilities=total_liabilities,
        total_equity=total_equity,
        total_liabilities_and_equity=total_liabilities_and_equity,
        ratios=ratios,
        classification_gaps=classification_gaps,
        warnings=tuple(warnings),
    )


def build_profit_and_loss(
    metadata: ReportMetadata,
    accounts: Iterable[Account],
    classifications: Mapping[str, Classification],
    amounts: Mapping[str, Decimal],
    comparison_amounts: Mapping[str, Decimal] | None = None,
    classification_gaps: tuple[ClassificationGap, ...] = (),
) -> ProfitAndLoss:
    """Assemble a profit and loss statement from period balances.

    Lines in the unclassified section are signed by their effect on net
    income: income accounts positive, expense accounts negative.

    Args:
        metadata: Report context.
        accounts: Every account of the company.
        classifications: Classification per account id.
        amounts: Signed balances for the period.
        comparison_amounts: Signed balances for the comparison period.
        classification_gaps: Accounts that fell back to unclassified.

    Returns:
        ProfitAndLoss: Sections, subtotals and margins.
    """
    accounts = list(accounts)

    def section(key, section_kind, subsection):
        return _build_section(
            key,
            _select(accounts, classifications, section_kind, (subsection,)),
            amounts,
            comparison_amounts,
        )

    revenue = section("revenue", Section.REVENUE, Subsection.REVENUE)
    cost_of_sales = section(
        "cost_of_sales",
        Section.COST_OF_SALES,
        Subsection.COST_OF_SALES,
    )
    operating_expenses = section(
        "operating_expenses",
        Section.OPERATING_EXPENSES,
        Subsection.OPERATING_EXPENSES,
    )
    other_income = section(
        "other_income",
        Section.OTHER_INCOME,
        Subsection.OTHER_INCOME,
    )
    other_expense = section(
        "other_expense",
        Section.OTHER_EXPENSE,
        Subsection.OTHER_EXPENSE,
    )
    unclassified_accounts = [
        account
        for account in accounts
        if not classifications[account.id].section.is_balance_sheet
        and classifications[account.id].subsection == Subsection.UNCLASSIFIED
    ]
    unclassified = _build_section(
        "unclassified",
        unclassified_accounts,
        amounts,
        comparison_amounts,
        signs={
            account.id: (
                1
                if classifications[account.id].normal_side == NormalSide.CREDIT
                else -1
            )
            for account in unclassified_accounts
        },
    )

    total_revenue = revenue.total
    gross_profit = combine(((1, revenue.total), (-1, cost_of_sales.total)))
    operating_income = combine(
        ((1, gross_profit), (-1, operating_expenses.total))
    )
    net_income = combine(
        (
            (1, operating_income),
            (1, other_income.total),
            (-1, other_expense.total),
            (1, unclassified.total),
        )
    )

    if cost_of_sales.is_empty:
        gross_margin = Ratio(value=ZERO, undefined=True)
    else:
        gross_margin = percentage_of(gross_profit.amount, total_revenue.amount)
    margins = ProfitMargins(
        gross_margin=gross_margin,
        operating_margin=percentage_of(
            operating_income.amount,
            total_revenue.amount,
        ),
        net_margin=percentage_of(net_income.amount, total_revenue.amount),
    )

    return ProfitAndLoss(
        metadata=metadata,
        revenue=revenue,
        cost_of_sales=cost_of_sales,
        operating_expenses=operating_expenses,
        other_income=other_income,
        other_expense=other_expense,
        unclassified=unclassified,
        total_revenue=total_revenue,
        gross_profit=gross_profit,
        operating_income=operating_income,
        net_income=net_income,
        margins=margins,
        classification_gaps=classification_gaps,
    )


def _build_activity(
    category: CashFlowCategory,
    accounts_by_id: Mapping[str, Account],
    movements: Iterable[CashMovement],
    comparison_movements: Iterable[CashMovement] | None,
) -> CashFlowActivity:
    inflows = ZERO
    outflows = ZERO
    per_account: dict[str, Decimal] = {}
    for movement in movements:
        if movement.category != category:
            continue
        per_account[movement.account_id] = (
            per_account.get(movement.account_id, ZERO) + movement.amount
        )
        if movement.amount > 0:
            inflows += movement.amount
        else:
            outflows -= movement.amount

    comparison_per_account: dict[str, Decimal] | None = None
    if comparison_movements is not None:
        comparison_per_account = {}
        for movement in comparison_movements:
            if movement.category != category:
                continue
            comparison_per_account[movement.account_id] = (
                comparison_per_account.get(movement.account_id, ZERO)
                + movement.amount
            )

    account_ids = set(per_account)
    if comparison_per_account is not None:
        account_ids |= set(comparison_per_account)
    section = _build_section(
        category.value,
        [accounts_by_id[account_id] for account_id in account_ids],
        per_account,
        comparison_per_account,
    )

    net_comparison = None
    if comparison_per_account is not None:
        net_comparison = sum(comparison_per_account.values(), ZERO)
    return CashFlowActivity(
        category=category,
        lines=section.lines,
        inflows=inflows,
        outflows=outflows,
        net=figure(inflows - outflows, net_comparison),
    )


def build_cash_flow(
    metadata: ReportMetadata,
    accounts: Iterable[Account],
    movements: Iterable[CashMovement],
    beginning_cash: Decimal,
    ending_cash: Decimal,
    cash_account_ids: tuple[str, ...],
    comparison_movements: Iterable[CashMovement] | None = None,
    classification_gaps: tuple[ClassificationGap, ...] = (),
    tolerance: Decimal = DEFAULT_EPSILON,
) -> CashFlowStatement:
    """Assemble a cash-flow statement from bucketized movements.

    Args:
        metadata: Report context.
        accounts: Every account of the company.
        movements: Cash movements of the period.
        beginning_cash: Cash balance the day before the period starts.
        ending_cash: Cash balance at the end of the period.
        cash_account_ids: Accounts designated as cash.
        comparison_movements: Cash movements of the comparison period.
        classification_gaps: Counter-accounts that fell back to unclassified.
        tolerance: Rounding tolerance of the reconciliation check.

    Returns:
        CashFlowStatement: Activities, net flow and reconciliation warnings.
    """
    accounts_by_id = {account.id: account for account in accounts}
    movements = list(movements)
    if comparison_movements is not None:
        comparison_movements = list(comparison_movements)

    operating, investing, financing = (
        _build_activity(
            category,
            accounts_by_id,
            movements,
            comparison_movements,
        )
        for category in (
            CashFlowCategory.OPERATING,
            CashFlowCategory.INVESTING,
            CashFlowCategory.FINANCING,
        )
    )
    net_cash_flow = combine(
        (1, activity.net) for activity in (operating, investing, financing)
    )

    warnings = []
    cash_change = ending_cash - beginning_cash
    difference = net_cash_flow.amount - cash_change
    if abs(difference) >= tolerance:
        warnings.append(
            ConsistencyWarning(
                kind=WarningKind.CASH_RECONCILIATION,
                difference=difference,
                message=(
                    f"Net cash flow {net_cash_flow.amount} differs from the "
                    f"change in cash {cash_change} by {difference}"
                ),
            )
        )

    return CashFlowStatement(
        metadata=metadata,
        operating=operating,
        investing=investing,
        financing=financing,
        net_cash_flow=net_cash_flow,
        beginning_cash=beginning_cash,
        ending_cash=ending_cash,
        cash_account_ids=cash_account_ids,
        classification_gaps=classification_gaps,
        warnings=tuple(warnings),
    )


__all__ = [
    "SECTION_TITLES",
    "CURRENT_EARNINGS_NAME",
    "net_earnings",
    "build_balance_sheet",
    "build_profit_and_loss",
    "build_cash_flow",
]
