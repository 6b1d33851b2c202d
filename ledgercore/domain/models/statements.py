"""Domain models for assembled financial statements."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum

from ledgercore.domain.models.accounts import CompanyScope
from ledgercore.domain.models.balances import BalanceWindow, TrialBalanceRow
from ledgercore.domain.models.classification import Section


class StatementKind(str, Enum):
    BALANCE_SHEET = "balance_sheet"
    PROFIT_AND_LOSS = "profit_and_loss"
    CASH_FLOW = "cash_flow"
    TRIAL_BALANCE = "trial_balance"


class CashFlowCategory(str, Enum):
    OPERATING = "operating"
    INVESTING = "investing"
    FINANCING = "financing"


class WarningKind(str, Enum):
    BALANCE_SHEET_IDENTITY = "balance_sheet_identity"
    CASH_RECONCILIATION = "cash_reconciliation"


@dataclass(frozen=True)
class Change:
    """Variance of a figure against the comparison window.

    Attributes:
        absolute: Current minus comparison amount.
        percentage: Change as a percentage of the comparison amount.
        percentage_undefined: True when the comparison amount is zero, in
            which case `percentage` is reported as 0.
    """

    absolute: Decimal
    percentage: Decimal
    percentage_undefined: bool = False


@dataclass(frozen=True)
class Ratio:
    """Quotient guarded against a zero denominator."""

    value: Decimal
    undefined: bool = False


@dataclass(frozen=True)
class ClassificationGap:
    """Account whose code matched no classification rule."""

    account_id: str
    code: str
    name: str
    section: Section


@dataclass(frozen=True)
class ConsistencyWarning:
    """Cross-check failure surfaced with a statement instead of raised."""

    kind: WarningKind
    difference: Decimal
    message: str


@dataclass(frozen=True)
class ReportMetadata:
    """Context of an assembled statement.

    `generated_at` is informational and excluded from equality so two
    assemblies over the same ledger compare equal.
    """

    kind: StatementKind
    scope: CompanyScope
    window: BalanceWindow
    currency_code: str
    comparison_window: BalanceWindow | None = None
    generated_at: datetime | None = field(default=None, compare=False)


@dataclass(frozen=True)
class StatementTotal:
    """Named figure with its optional comparative."""

    amount: Decimal
    comparison_amount: Decimal | None = None
    change: Change | None = None


@dataclass(frozen=True)
class StatementLine:
    """Leaf line of a statement, usually one account."""

    account_id: str | None
    code: str | None
    name: str
    amount: Decimal
    comparison_amount: Decimal | None = None
    change: Change | None = None


@dataclass(frozen=True)
class StatementSection:
    """Group of statement lines with a subtotal."""

    key: str
    title: str
    lines: tuple[StatementLine, ...]
    total: StatementTotal

    @property
    def is_empty(self) -> bool:
        """Return True when no line carries a non-zero amount."""
        return all(line.amount == 0 for line in self.lines)


@dataclass(frozen=True)
class BalanceSheetRatios:
    current_ratio: Ratio
    quick_ratio: Ratio
    debt_to_equity: Ratio
    equity_multiplier: Ratio


@dataclass(frozen=True)
class BalanceSheet:
    """Financial position at a point in time."""

    metadata: ReportMetadata
    assets: tuple[StatementSection, ...]
    liabilities: tuple[StatementSection, ...]
    equity: tuple[StatementSection, ...]
    total_assets: StatementTotal
    total_liabilities: StatementTotal
    total_equity: StatementTotal
    total_liabilities_and_equity: StatementTotal
    ratios: BalanceSheetRatios
    classification_gaps: tuple[ClassificationGap, ...] = ()
    warnings: tuple[ConsistencyWarning, ...] = ()

    @property
    def is_balanced(self) -> bool:
        return not any(
            warning.kind == WarningKind.BALANCE_SHEET_IDENTITY
            for warning in self.warnings
        )


@dataclass(frozen=True)
class ProfitMargins:
    gross_margin: Ratio
    operating_margin: Ratio
    net_margin: Ratio


@dataclass(frozen=True)
class ProfitAndLoss:
    """Income statement for a period."""

    metadata: ReportMetadata
    revenue: StatementSection
    cost_of_sales: StatementSection
    operating_expenses: StatementSection
    other_income: StatementSection
    other_expense: StatementSection
    unclassified: StatementSection
    total_revenue: StatementTotal
    gross_profit: StatementTotal
    operating_income: StatementTotal
    net_income: StatementTotal
    margins: ProfitMargins
    classification_gaps: tuple[ClassificationGap, ...] = ()


@dataclass(frozen=True)
class CashFlowActivity:
    """Cash movements of one activity, itemized by counter-account."""

    category: CashFlowCategory
    lines: tuple[StatementLine, ...]
    inflows: Decimal
    outflows: Decimal
    net: StatementTotal


@dataclass(frozen=True)
class CashFlowStatement:
    """Cash movements of a period split by activity."""

    metadata: ReportMetadata
    operating: CashFlowActivity
    investing: CashFlowActivity
    financing: CashFlowActivity
    net_cash_flow: StatementTotal
    beginning_cash: Decimal
    ending_cash: Decimal
    cash_account_ids: tuple[str, ...]
    classification_gaps: tuple[ClassificationGap, ...] = ()
    warnings: tuple[ConsistencyWarning, ...] = ()

    @property
    def cash_change(self) -> Decimal:
        return self.ending_cash - self.beginning_cash

    @property
    def has_discrepancy(self) -> bool:
        return any(
            warning.kind == WarningKind.CASH_RECONCILIATION
            for warning in self.warnings
        )


@dataclass(frozen=True)
class TrialBalance:
    """Per-account debit and credit totals over a window."""

    metadata: ReportMetadata
    rows: tuple[TrialBalanceRow, ...]
    total_debits: Decimal
    total_credits: Decimal

    @property
    def difference(self) -> Decimal:
        return self.total_debits - self.total_credits


Statement = BalanceSheet | ProfitAndLoss | CashFlowStatement


__all__ = [
    "StatementKind",
    "CashFlowCategory",
    "WarningKind",
    "Change",
    "Ratio",
    "ClassificationGap",
    "ConsistencyWarning",
    "ReportMetadata",
    "StatementTotal",
    "StatementLine",
    "StatementSection",
    "BalanceSheetRatios",
    "BalanceSheet",
    "ProfitMargins",
    "ProfitAndLoss",
    "CashFlowActivity",
    "CashFlowStatement",
    "TrialBalance",
    "Statement",
]
