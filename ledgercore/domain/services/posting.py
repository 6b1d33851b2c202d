"""Posting validation rules for journal entries."""

from collections.abc import Iterable, Mapping
from decimal import Decimal

from ledgercore.domain.constants import DEFAULT_EPSILON
from ledgercore.domain.errors import (
    BalanceError,
    IntegrityFault,
    PostingRejection,
    UnknownAccountError,
)
from ledgercore.domain.models import (
    Account,
    EntryStatus,
    JournalEntryDraft,
    JournalLine,
    LedgerLine,
)


def is_balanced(
    total_debit: Decimal,
    total_credit: Decimal,
    epsilon: Decimal = DEFAULT_EPSILON,
) -> bool:
    """Return True when debits and credits agree within `epsilon`."""
    return abs(total_debit - total_credit) < epsilon


def _within_minor_unit(amount: Decimal, epsilon: Decimal) -> bool:
    return amount == amount.quantize(epsilon)


def check_entry_balance(
    lines: Iterable[JournalLine],
    epsilon: Decimal = DEFAULT_EPSILON,
) -> BalanceError | None:
    """Check the trial-balance invariant for draft lines.

    Amounts must be whole multiples of the minor unit and the totals must
    agree exactly.

    Args:
        lines: Lines of the entry being posted.
        epsilon: One minor unit of the reporting currency.

    Returns:
        BalanceError | None: Rejection when the lines do not balance.
    """
    total_debit = Decimal("0")
    total_credit = Decimal("0")
    sub_unit: list[str] = []
    for line in lines:
        total_debit += line.debit
        total_credit += line.credit
        if not (
            _within_minor_unit(line.debit, epsilon)
            and _within_minor_unit(line.credit, epsilon)
        ) and line.account_id not in sub_unit:
            sub_unit.append(line.account_id)
    if not sub_unit and total_debit == total_credit:
        return None
    return BalanceError(
        unbalanced_by=total_debit - total_credit,
        total_debit=total_debit,
        total_credit=total_credit,
        sub_unit_account_ids=tuple(sub_unit),
    )


def check_entry_accounts(
    draft: JournalEntryDraft,
    accounts: Mapping[str, Account],
) -> UnknownAccountError | None:
    """Check that every line targets an active account of the entry scope.

    Args:
        draft: Entry being posted.
        accounts: Accounts of the draft scope keyed by id.

    Returns:
        UnknownAccountError | None: Rejection listing offending accounts.
    """
    unknown: list[str] = []
    inactive: list[str] = []
    for line in draft.lines:
        account = accounts.get(line.account_id)
        if account is None or account.scope != draft.scope:
            if line.account_id not in unknown:
                unknown.append(line.account_id)
        elif not account.is_active and line.account_id not in inactive:
            inactive.append(line.account_id)
    if not unknown and not inactive:
        return None
    return UnknownAccountError(
        account_ids=tuple(unknown),
        inactive_account_ids=tuple(inactive),
    )


def validate_draft(
    draft: JournalEntryDraft,
    accounts: Mapping[str, Account],
    epsilon: Decimal = DEFAULT_EPSILON,
) -> PostingRejection | None:
    """Run every posting check; account checks come first."""
    rejection = check_entry_accounts(draft, accounts)
    if rejection is not None:
        return rejection
    return check_entry_balance(draft.lines, epsilon)


def assert_posted_entries_balanced(
    lines: Iterable[LedgerLine],
    epsilon: Decimal = DEFAULT_EPSILON,
) -> None:
    """Verify stored POSTED entries still balance.

    Args:
        lines: Every line of the entries to verify.
        epsilon: Smallest difference treated as an imbalance.

    Raises:
        IntegrityFault: If any POSTED entry is unbalanced.
    """
    totals: dict[str, list[Decimal]] = {}
    for line in lines:
        if line.entry_status != EntryStatus.POSTED:
            continue
        entry_totals = totals.setdefault(
            line.entry_id,
            [Decimal("0"), Decimal("0")],
        )
        entry_totals[0] += line.debit
        entry_totals[1] += line.credit
    broken = tuple(
        entry_id
        for entry_id, (debit, credit) in totals.items()
        if not is_balanced(debit, credit, epsilon)
    )
    if broken:
        raise IntegrityFault(
            f"Posted journal entries are unbalanced: {', '.join(broken)}",
            entry_ids=broken,
        )


__all__ = [
    "is_balanced",
    "check_entry_balance",
    "check_entry_accounts",
    "validate_draft",
    "assert_posted_entries_balanced",
]
