"""Cash-flow bucketizer.

Walks raw lines of entries that move cash and attributes each movement to
operating, investing or financing activity by the classification of the
counter-account lines on the same entry.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from ledgercore.domain.errors import IntegrityFault
from ledgercore.domain.models import (
    CashFlowCategory,
    Classification,
    EntryStatus,
    LedgerLine,
    Period,
    Section,
    Subsection,
)


@dataclass(frozen=True)
class CashMovement:
    """Cash effect of one counter-account line.

    Attributes:
        entry_id: Entry the movement belongs to.
        entry_date: Date of the entry.
        account_id: Counter-account that explains the movement.
        category: Activity the movement is reported under.
        amount: Positive for cash received, negative for cash paid.
    """

    entry_id: str
    entry_date: date
    account_id: str
    category: CashFlowCategory
    amount: Decimal


def cash_flow_category(classification: Classification) -> CashFlowCategory:
    """Map a counter-account classification to a cash-flow activity."""
    if classification.subsection == Subsection.FIXED_ASSETS:
        return CashFlowCategory.INVESTING
    if (
        classification.section == Section.EQUITY
        or classification.subsection == Subsection.LONG_TERM_LIABILITIES
    ):
        return CashFlowCategory.FINANCING
    return CashFlowCategory.OPERATING


def bucketize_cash_movements(
    lines: Iterable[LedgerLine],
    cash_account_ids: Iterable[str],
    classifications: Mapping[str, Classification],
    period: Period,
) -> list[CashMovement]:
    """Turn entries that touch cash into categorized cash movements.

    Each non-cash line contributes `credit - debit`: for a balanced entry
    these contributions add up to the debit-minus-credit change of the cash
    lines, so buckets reconcile with the cash balance movement. Entries with
    only cash lines are transfers and produce nothing.

    Args:
        lines: Every line of the candidate entries, cash and non-cash.
        cash_account_ids: Accounts designated as cash.
        classifications: Classification of every company account by id.
        period: Reporting period; entries outside it are skipped.

    Returns:
        list[CashMovement]: Movements ordered by entry date, entry and line.

    Raises:
        IntegrityFault: If a line references an account outside the company.
    """
    cash_ids = set(cash_account_ids)
    entries: dict[str, list[LedgerLine]] = {}
    for line in lines:
        if line.entry_status != EntryStatus.POSTED:
            continue
        if not period.contains(line.entry_date):
            continue
        entries.setdefault(line.entry_id, []).append(line)

    movements: list[CashMovement] = []
    for entry_id, entry_lines in entries.items():
        if not any(line.account_id in cash_ids for line in entry_lines):
            continue
        for line in sorted(entry_lines, key=lambda item: item.line_no):
            if line.account_id in cash_ids:
                continue
            amount = line.credit - line.debit
            if amount == 0:
                continue
            classification = classifications.get(line.account_id)
            if classification is None:
                raise IntegrityFault(
                    f"Entry {entry_id} references account {line.account_id} "
                    "outside the company chart of accounts",
                    entry_ids=(entry_id,),
                )
            movements.append(
                CashMovement(
                    entry_id=entry_id,
                    entry_date=line.entry_date,
                    account_id=line.account_id,
                    category=cash_flow_category(classification),
                    amount=amount,
                )
            )
    return sorted(
        movements,
        key=lambda movement: (movement.entry_date, movement.entry_id),
    )


__all__ = ["CashMovement", "cash_flow_category", "bucketize_cash_movements"]
