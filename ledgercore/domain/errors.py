"""Ledger error taxonomy.

Caller-fixable posting rejections are plain values returned by the posting
use case. Conditions with no safe local recovery are raised.
"""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class BalanceError:
    """Entry rejected because it does not balance to the minor unit.

    Attributes:
        unbalanced_by: Total debit minus total credit.
        total_debit: Sum of the entry's debit amounts.
        total_credit: Sum of the entry's credit amounts.
        sub_unit_account_ids: Accounts whose line amounts are finer than
            the currency's minor unit.
    """

    unbalanced_by: Decimal
    total_debit: Decimal
    total_credit: Decimal
    sub_unit_account_ids: tuple[str, ...] = ()

    @property
    def message(self) -> str:
        if self.sub_unit_account_ids:
            return (
                "Journal entry amounts are finer than the currency minor "
                f"unit on accounts: {', '.join(self.sub_unit_account_ids)}"
            )
        return (
            f"Journal entry is not balanced: debits={self.total_debit}, "
            f"credits={self.total_credit}, difference={self.unbalanced_by}"
        )


@dataclass(frozen=True)
class UnknownAccountError:
    """Entry or request referencing missing or inactive accounts."""

    account_ids: tuple[str, ...]
    inactive_account_ids: tuple[str, ...] = ()

    @property
    def message(self) -> str:
        parts = []
        if self.account_ids:
            parts.append(f"unknown accounts: {', '.join(self.account_ids)}")
        if self.inactive_account_ids:
            parts.append(
                f"inactive accounts: {', '.join(self.inactive_account_ids)}"
            )
        return "Journal entry rejected, " + "; ".join(parts)


PostingRejection = BalanceError | UnknownAccountError


class LedgerError(Exception):
    """Base class for raised ledger errors."""


class PostingPolicyError(LedgerError):
    """Raised when a workflow rule forbids the requested change."""


class IntegrityFault(LedgerError):
    """Raised when stored ledger data violates the trial-balance invariant.

    Posting guarantees every POSTED entry balances, so observing this means
    storage corruption or a write that bypassed posting.
    """

    def __init__(self, message: str, entry_ids: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.entry_ids = entry_ids


__all__ = [
    "BalanceError",
    "UnknownAccountError",
    "PostingRejection",
    "LedgerError",
    "PostingPolicyError",
    "IntegrityFault",
]
