"""Domain services package."""

from .balances import (
    amounts_by_account,
    balance_as_of,
    balance_for_period,
    compute_balances,
    compute_trial_balance_rows,
    signed_amount,
)
from .cashflow import CashMovement, bucketize_cash_movements, cash_flow_category
from .classification import (
    DEFAULT_CLASSIFICATION_TABLE,
    ClassificationRegistry,
    ClassificationTable,
    classify,
    classify_accounts,
    collect_classification_gaps,
)
from .posting import (
    assert_posted_entries_balanced,
    check_entry_accounts,
    check_entry_balance,
    is_balanced,
    validate_draft,
)
from .statements import (
    build_balance_sheet,
    build_cash_flow,
    build_profit_and_loss,
    net_earnings,
)
from .variance import compute_change, percentage_of, safe_ratio

__all__ = [
    "amounts_by_account",
    "balance_as_of",
    "balance_for_period",
    "compute_balances",
    "compute_trial_balance_rows",
    "signed_amount",
    "CashMovement",
    "bucketize_cash_movements",
    "cash_flow_category",
    "DEFAULT_CLASSIFICATION_TABLE",
    "ClassificationRegistry",
    "ClassificationTable",
    "classify",
    "classify_accounts",
    "collect_classification_gaps",
    "assert_posted_entries_balanced",
    "check_entry_accounts",
    "check_entry_balance",
    "is_balanced",
    "validate_draft",
    "build_balance_sheet",
    "build_cash_flow",
    "build_profit_and_loss",
    "net_earnings",
    "compute_change",
    "percentage_of",
    "safe_ratio",
]
