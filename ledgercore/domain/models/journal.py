"""Domain models for journal entries and their lines."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum

from ledgercore.domain.models.accounts import CompanyScope
from ledgercore.utils.decimal_utils import coerce_decimal


class EntryStatus(str, Enum):
    """Lifecycle of a journal entry. DRAFT -> POSTED is the only move."""

    DRAFT = "DRAFT"
    POSTED = "POSTED"


@dataclass(frozen=True)
class JournalLine:
    """Debit or credit line of a journal entry.

    Attributes:
        account_id: Identifier of the account the line is booked to.
        debit: Non-negative debit amount.
        credit: Non-negative credit amount.
        memo: Optional free text for the line.
    """

    account_id: str
    debit: Decimal = Decimal("0")
    credit: Decimal = Decimal("0")
    memo: str | None = None

    def __post_init__(self) -> None:
        debit = coerce_decimal(self.debit)
        credit = coerce_decimal(self.credit)
        if debit < 0 or credit < 0:
            raise ValueError(
                f"Journal line amounts must be non-negative: "
                f"account={self.account_id}, debit={debit}, credit={credit}"
            )
        object.__setattr__(self, "debit", debit)
        object.__setattr__(self, "credit", credit)


@dataclass(frozen=True)
class JournalEntryDraft:
    """Entry submitted by a producer for posting.

    Attributes:
        scope: Tenant and company of the entry.
        entry_date: Accounting date of the entry.
        lines: Ordered lines of the entry.
        memo: Optional description.
        reference: Optional external reference.
        entry_id: Identifier of a previously stored draft being resubmitted.
    """

    scope: CompanyScope
    entry_date: date
    lines: tuple[JournalLine, ...]
    memo: str | None = None
    reference: str | None = None
    entry_id: str | None = None

    def __post_init__(self) -> None:
        lines = tuple(self.lines)
        if not lines:
            raise ValueError("Journal entry must have at least one line")
        object.__setattr__(self, "lines", lines)

    @property
    def total_debit(self) -> Decimal:
        return sum((line.debit for line in self.lines), Decimal("0"))

    @property
    def total_credit(self) -> Decimal:
        return sum((line.credit for line in self.lines), Decimal("0"))


@dataclass(frozen=True)
class PostedEntry:
    """Journal entry committed to the ledger."""

    entry_id: str
    scope: CompanyScope
    entry_date: date
    lines: tuple[JournalLine, ...]
    memo: str | None = None
    reference: str | None = None
    status: EntryStatus = EntryStatus.POSTED

    @property
    def total(self) -> Decimal:
        """Return the entry amount (sum of debits)."""
        return sum((line.debit for line in self.lines), Decimal("0"))


@dataclass(frozen=True)
class LedgerLine:
    """Stored journal line joined with its parent entry header."""

    entry_id: str
    entry_date: date
    entry_status: EntryStatus
    line_no: int
    account_id: str
    debit: Decimal
    credit: Decimal
    memo: str | None = None


__all__ = [
    "EntryStatus",
    "JournalLine",
    "JournalEntryDraft",
    "PostedEntry",
    "LedgerLine",
]
