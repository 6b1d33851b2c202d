"""Domain models for the chart of accounts."""

from dataclasses import dataclass
from enum import Enum


class NormalSide(str, Enum):
    """Side on which an account's balance naturally increases."""

    DEBIT = "DEBIT"
    CREDIT = "CREDIT"


class AccountType(str, Enum):
    """Top-level account families of the chart of accounts."""

    ASSET = "ASSET"
    LIABILITY = "LIABILITY"
    EQUITY = "EQUITY"
    REVENUE = "REVENUE"
    EXPENSE = "EXPENSE"

    @property
    def normal_side(self) -> NormalSide:
        """Return the normal balance side of the account type."""
        if self in (AccountType.ASSET, AccountType.EXPENSE):
            return NormalSide.DEBIT
        return NormalSide.CREDIT

    @classmethod
    def parse(cls, raw: str) -> "AccountType":
        """Parse a stored account type value.

        Args:
            raw: Account type as stored (case insensitive).

        Returns:
            AccountType: Matching enum member.

        Raises:
            ValueError: If the value is not a known account type.
        """
        cleaned = (raw or "").strip().upper()
        try:
            return cls(cleaned)
        except ValueError as exc:
            raise ValueError(f"Unknown account type: {raw!r}") from exc


@dataclass(frozen=True)
class CompanyScope:
    """Tenant and company that every ledger call is scoped to."""

    tenant_id: str
    company_id: str


@dataclass(frozen=True)
class Account:
    """Ledger account belonging to a single tenant and company."""

    id: str
    scope: CompanyScope
    code: str
    name: str
    account_type: AccountType
    is_active: bool = True

    @property
    def normal_side(self) -> NormalSide:
        return self.account_type.normal_side


__all__ = ["NormalSide", "AccountType", "CompanyScope", "Account"]
