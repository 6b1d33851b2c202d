"""Balance calculator over posted journal lines.

Amounts stay unrounded Decimals; presentation layers round once.
"""

from collections.abc import Callable, Iterable
from datetime import date
from decimal import Decimal

from ledgercore.domain.models import (
    Account,
    AccountBalance,
    AsOf,
    BalanceWindow,
    EntryStatus,
    LedgerLine,
    NormalSide,
    Period,
    TrialBalanceRow,
)


def signed_amount(
    normal_side: NormalSide,
    debit_total: Decimal,
    credit_total: Decimal,
) -> Decimal:
    """Return a balance signed so that the normal side is positive."""
    if normal_side == NormalSide.DEBIT:
        return debit_total - credit_total
    return credit_total - debit_total


def unique_accounts(accounts: Iterable[Account]) -> list[Account]:
    """Drop repeated accounts while keeping the first occurrence order."""
    seen: set[str] = set()
    result = []
    for account in accounts:
        if account.id in seen:
            continue
        seen.add(account.id)
        result.append(account)
    return result


def _sum_lines(
    account_ids: set[str],
    lines: Iterable[LedgerLine],
    include: Callable[[date], bool],
) -> dict[str, tuple[Decimal, Decimal]]:
    totals = {
        account_id: (Decimal("0"), Decimal("0")) for account_id in account_ids
    }
    for line in lines:
        if line.entry_status != EntryStatus.POSTED:
            continue
        if line.account_id not in totals or not include(line.entry_date):
            continue
        debit, credit = totals[line.account_id]
        totals[line.account_id] = (debit + line.debit, credit + line.credit)
    return totals


def _build_balances(
    accounts: list[Account],
    totals: dict[str, tuple[Decimal, Decimal]],
    window: BalanceWindow,
) -> list[AccountBalance]:
    balances = []
    for account in accounts:
        debit, credit = totals[account.id]
        balances.append(
            AccountBalance(
                account_id=account.id,
                code=account.code,
                name=account.name,
                amount=signed_amount(account.normal_side, debit, credit),
                window=window,
            )
        )
    return balances


def balance_as_of(
    accounts: Iterable[Account],
    lines: Iterable[LedgerLine],
    as_of: date,
) -> list[AccountBalance]:
    """Compute cumulative balances up to and including `as_of`.

    Args:
        accounts: Accounts to report; each appears exactly once.
        lines: Stored lines; DRAFT lines and other accounts are ignored.
        as_of: Inclusive cutoff date.

    Returns:
        list[AccountBalance]: One balance per account, zero when idle.
    """
    requested = unique_accounts(accounts)
    totals = _sum_lines(
        {account.id for account in requested},
        lines,
        lambda entry_date: entry_date <= as_of,
    )
    return _build_balances(requested, totals, AsOf(as_of))


def balance_for_period(
    accounts: Iterable[Account],
    lines: Iterable[LedgerLine],
    start: date,
    end: date,
) -> list[AccountBalance]:
    """Compute balances of activity dated within `[start, end]`.

    Args:
        accounts: Accounts to report; each appears exactly once.
        lines: Stored lines; DRAFT lines and other accounts are ignored.
        start: Inclusive first day.
        end: Inclusive last day.

    Returns:
        list[AccountBalance]: One balance per account, zero when idle.
    """
    period = Period(start, end)
    requested = unique_accounts(accounts)
    totals = _sum_lines(
        {account.id for account in requested},
        lines,
        period.contains,
    )
    return _build_balances(requested, totals, period)


def compute_balances(
    accounts: Iterable[Account],
    lines: Iterable[LedgerLine],
    window: BalanceWindow,
) -> list[AccountBalance]:
    """Dispatch to the point-in-time or period calculation."""
    if isinstance(window, AsOf):
        return balance_as_of(accounts, lines, window.date)
    return balance_for_period(accounts, lines, window.start, window.end)


def amounts_by_account(balances: Iterable[AccountBalance]) -> dict[str, Decimal]:
    """Index balance amounts by account id."""
    return {balance.account_id: balance.amount for balance in balances}


def compute_trial_balance_rows(
    accounts: Iterable[Account],
    lines: Iterable[LedgerLine],
    window: BalanceWindow,
) -> list[TrialBalanceRow]:
    """Compute opening balance, activity and closing balance per account.

    For an `AsOf` window the opening balance is zero and the activity covers
    everything up to the date. For a `Period` window the opening balance is
    the activity dated before the period start.

    Args:
        accounts: Accounts to report.
        lines: Stored lines covering at least everything up to window end.
        window: Reporting window.

    Returns:
        list[TrialBalanceRow]: One row per account.
    """
    requested = unique_accounts(accounts)
    account_ids = {account.id for account in requested}
    lines = list(lines)
    if isinstance(window, AsOf):
        opening_totals = {
            account_id: (Decimal("0"), Decimal("0"))
            for account_id in account_ids
        }
        activity_totals = _sum_lines(
            account_ids,
            lines,
            lambda entry_date: entry_date <= window.date,
        )
    else:
        opening_totals = _sum_lines(
            account_ids,
            lines,
            lambda entry_date: entry_date < window.start,
        )
        activity_totals = _sum_lines(account_ids, lines, window.contains)

    rows = []
    for account in requested:
        opening_debit, opening_credit = opening_totals[account.id]
        debit, credit = activity_totals[account.id]
        opening = signed_amount(
            account.normal_side,
            opening_debit,
            opening_credit,
        )
        rows.append(
            TrialBalanceRow(
                account_id=account.id,
                code=account.code,
                name=account.name,
                opening_balance=opening,
                debit_total=debit,
                credit_total=credit,
                closing_balance=opening
                + signed_amount(account.normal_side, debit, credit),
            )
        )
    return rows


__all__ = [
    "signed_amount",
    "unique_accounts",
    "balance_as_of",
    "balance_for_period",
    "compute_balances",
    "amounts_by_account",
    "compute_trial_balance_rows",
]
