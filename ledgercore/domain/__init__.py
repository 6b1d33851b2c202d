"""Domain package for ledger rules and core models."""

from .constants import (
    DEFAULT_CLASSIFICATION_RULES,
    DEFAULT_CURRENCY_CODE,
    DEFAULT_EPSILON,
    DEFAULT_MINOR_UNIT,
)
from .errors import (
    BalanceError,
    IntegrityFault,
    LedgerError,
    PostingPolicyError,
    PostingRejection,
    UnknownAccountError,
)
from .models import (
    Account,
    AccountBalance,
    AccountType,
    AsOf,
    CompanyScope,
    EntryStatus,
    JournalEntryDraft,
    JournalLine,
    LedgerLine,
    NormalSide,
    Period,
    PostedEntry,
)
from .policies import assert_can_edit_entry, can_edit_entry
from .services import (
    DEFAULT_CLASSIFICATION_TABLE,
    ClassificationTable,
    balance_as_of,
    balance_for_period,
    classify,
)

__all__ = [
    "DEFAULT_CLASSIFICATION_RULES",
    "DEFAULT_CURRENCY_CODE",
    "DEFAULT_EPSILON",
    "DEFAULT_MINOR_UNIT",
    "BalanceError",
    "IntegrityFault",
    "LedgerError",
    "PostingPolicyError",
    "PostingRejection",
    "UnknownAccountError",
    "Account",
    "AccountBalance",
    "AccountType",
    "AsOf",
    "CompanyScope",
    "EntryStatus",
    "JournalEntryDraft",
    "JournalLine",
    "LedgerLine",
    "NormalSide",
    "Period",
    "PostedEntry",
    "assert_can_edit_entry",
    "can_edit_entry",
    "DEFAULT_CLASSIFICATION_TABLE",
    "ClassificationTable",
    "balance_as_of",
    "balance_for_period",
    "classify",
]
