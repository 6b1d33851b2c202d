"""Domain models for balance windows and computed balances."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal


@dataclass(frozen=True)
class AsOf:
    """Point-in-time window: everything dated on or before `date`."""

    date: date

    @property
    def end(self) -> date:
        return self.date


@dataclass(frozen=True)
class Period:
    """Inclusive date range `[start, end]`."""

    start: date
    end: date

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError(
                f"Period start {self.start} is after end {self.end}"
            )

    def contains(self, value: date) -> bool:
        return self.start <= value <= self.end


BalanceWindow = AsOf | Period


@dataclass(frozen=True)
class AccountBalance:
    """Signed balance of one account over a window.

    Attributes:
        account_id: Identifier of the account.
        code: Account code.
        name: Account name.
        amount: Balance signed by the account's normal side.
        window: Window the balance was computed for.
    """

    account_id: str
    code: str
    name: str
    amount: Decimal
    window: BalanceWindow


@dataclass(frozen=True)
class TrialBalanceRow:
    """Activity totals of an account over a window."""

    account_id: str
    code: str
    name: str
    opening_balance: Decimal
    debit_total: Decimal
    credit_total: Decimal
    closing_balance: Decimal


__all__ = [
    "AsOf",
    "Period",
    "BalanceWindow",
    "AccountBalance",
    "TrialBalanceRow",
]
