"""Domain models package."""

from .accounts import Account, AccountType, CompanyScope, NormalSide
from .balances import (
    AccountBalance,
    AsOf,
    BalanceWindow,
    Period,
    TrialBalanceRow,
)
from .classification import (
    Classification,
    ClassificationRule,
    Section,
    Subsection,
)
from .journal import (
    EntryStatus,
    JournalEntryDraft,
    JournalLine,
    LedgerLine,
    PostedEntry,
)
from .statements import (
    BalanceSheet,
    BalanceSheetRatios,
    CashFlowActivity,
    CashFlowCategory,
    CashFlowStatement,
    Change,
    ClassificationGap,
    ConsistencyWarning,
    ProfitAndLoss,
    ProfitMargins,
    Ratio,
    ReportMetadata,
    Statement,
    StatementKind,
    StatementLine,
    StatementSection,
    StatementTotal,
    TrialBalance,
    WarningKind,
)

__all__ = [
    "Account",
    "AccountType",
    "CompanyScope",
    "NormalSide",
    "AccountBalance",
    "AsOf",
    "BalanceWindow",
    "Period",
    "TrialBalanceRow",
    "Classification",
    "ClassificationRule",
    "Section",
    "Subsection",
    "EntryStatus",
    "JournalEntryDraft",
    "JournalLine",
    "LedgerLine",
    "PostedEntry",
    "BalanceSheet",
    "BalanceSheetRatios",
    "CashFlowActivity",
    "CashFlowCategory",
    "CashFlowStatement",
    "Change",
    "ClassificationGap",
    "ConsistencyWarning",
    "ProfitAndLoss",
    "ProfitMargins",
    "Ratio",
    "ReportMetadata",
    "Statement",
    "StatementKind",
    "StatementLine",
    "StatementSection",
    "StatementTotal",
    "TrialBalance",
    "WarningKind",
]
