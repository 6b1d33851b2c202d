"""Comparative and ratio helpers guarded against zero denominators."""

from collections.abc import Iterable
from decimal import Decimal

from ledgercore.domain.constants import HUNDRED, ZERO
from ledgercore.domain.models import Change, Ratio, StatementTotal


def safe_ratio(numerator: Decimal, denominator: Decimal) -> Ratio:
    """Divide, reporting 0 with the undefined flag on a zero denominator."""
    if denominator == 0:
        return Ratio(value=ZERO, undefined=True)
    return Ratio(value=numerator / denominator)


def percentage_of(part: Decimal, whole: Decimal) -> Ratio:
    """Express `part` as a percentage of `whole`."""
    if whole == 0:
        return Ratio(value=ZERO, undefined=True)
    return Ratio(value=part / whole * HUNDRED)


def compute_change(current: Decimal, comparison: Decimal) -> Change:
    """Compute absolute and percentage change against a comparison amount.

    The percentage is relative to the magnitude of the comparison amount so
    a move from -100 to -50 reads as +50%.

    Args:
        current: Amount for the reporting window.
        comparison: Amount for the comparison window.

    Returns:
        Change: Variance, with the percentage undefined on a zero base.
    """
    absolute = current - comparison
    if comparison == 0:
        return Change(absolute=absolute, percentage=ZERO, percentage_undefined=True)
    return Change(
        absolute=absolute,
        percentage=absolute / abs(comparison) * HUNDRED,
    )


def figure(amount: Decimal, comparison: Decimal | None = None) -> StatementTotal:
    """Wrap an amount and its optional comparative."""
    if comparison is None:
        return StatementTotal(amount=amount)
    return StatementTotal(
        amount=amount,
        comparison_amount=comparison,
        change=compute_change(amount, comparison),
    )


def combine(terms: Iterable[tuple[int, StatementTotal]]) -> StatementTotal:
    """Add or subtract figures, carrying comparatives when all have one.

    Args:
        terms: Pairs of (+1 or -1, figure).

    Returns:
        StatementTotal: Signed sum of the figures.
    """
    amount = ZERO
    comparison: Decimal | None = ZERO
    for sign, total in terms:
        amount += sign * total.amount
        if comparison is not None and total.comparison_amount is not None:
            comparison += sign * total.comparison_amount
        else:
            comparison = None
    return figure(amount, comparison)


__all__ = [
    "safe_ratio",
    "percentage_of",
    "compute_change",
    "figure",
    "combine",
]
