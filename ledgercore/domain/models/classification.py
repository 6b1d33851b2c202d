"""Domain models for chart-of-accounts classification."""

from dataclasses import dataclass
from enum import Enum

from ledgercore.domain.models.accounts import AccountType, NormalSide


class Section(str, Enum):
    """Statement section an account is reported under."""

    ASSETS = "assets"
    LIABILITIES = "liabilities"
    EQUITY = "equity"
    REVENUE = "revenue"
    COST_OF_SALES = "cost_of_sales"
    OPERATING_EXPENSES = "operating_expenses"
    OTHER_INCOME = "other_income"
    OTHER_EXPENSE = "other_expense"

    @property
    def account_types(self) -> tuple[AccountType, ...]:
        """Return the account types that may be reported in the section."""
        return SECTION_ACCOUNT_TYPES[self]

    @property
    def is_balance_sheet(self) -> bool:
        return self in (Section.ASSETS, Section.LIABILITIES, Section.EQUITY)


SECTION_ACCOUNT_TYPES: dict[Section, tuple[AccountType, ...]] = {
    Section.ASSETS: (AccountType.ASSET,),
    Section.LIABILITIES: (AccountType.LIABILITY,),
    Section.EQUITY: (AccountType.EQUITY,),
    Section.REVENUE: (AccountType.REVENUE,),
    Section.COST_OF_SALES: (AccountType.EXPENSE,),
    Section.OPERATING_EXPENSES: (AccountType.EXPENSE,),
    Section.OTHER_INCOME: (AccountType.REVENUE,),
    Section.OTHER_EXPENSE: (AccountType.EXPENSE,),
}

FALLBACK_SECTIONS: dict[AccountType, Section] = {
    AccountType.ASSET: Section.ASSETS,
    AccountType.LIABILITY: Section.LIABILITIES,
    AccountType.EQUITY: Section.EQUITY,
    AccountType.REVENUE: Section.REVENUE,
    AccountType.EXPENSE: Section.OPERATING_EXPENSES,
}


class Subsection(str, Enum):
    """Sub-grouping of a statement section."""

    CURRENT_ASSETS = "current_assets"
    INVENTORY = "inventory"
    FIXED_ASSETS = "fixed_assets"
    OTHER_ASSETS = "other_assets"
    CURRENT_LIABILITIES = "current_liabilities"
    LONG_TERM_LIABILITIES = "long_term_liabilities"
    CONTRIBUTED_CAPITAL = "contributed_capital"
    RETAINED_EARNINGS = "retained_earnings"
    OTHER_EQUITY = "other_equity"
    REVENUE = "revenue"
    COST_OF_SALES = "cost_of_sales"
    OPERATING_EXPENSES = "operating_expenses"
    OTHER_INCOME = "other_income"
    OTHER_EXPENSE = "other_expense"
    UNCLASSIFIED = "unclassified"


SECTION_SUBSECTIONS: dict[Section, tuple[Subsection, ...]] = {
    Section.ASSETS: (
        Subsection.CURRENT_ASSETS,
        Subsection.INVENTORY,
        Subsection.FIXED_ASSETS,
        Subsection.OTHER_ASSETS,
        Subsection.UNCLASSIFIED,
    ),
    Section.LIABILITIES: (
        Subsection.CURRENT_LIABILITIES,
        Subsection.LONG_TERM_LIABILITIES,
        Subsection.UNCLASSIFIED,
    ),
    Section.EQUITY: (
        Subsection.CONTRIBUTED_CAPITAL,
        Subsection.RETAINED_EARNINGS,
        Subsection.OTHER_EQUITY,
        Subsection.UNCLASSIFIED,
    ),
    Section.REVENUE: (Subsection.REVENUE, Subsection.UNCLASSIFIED),
    Section.COST_OF_SALES: (Subsection.COST_OF_SALES, Subsection.UNCLASSIFIED),
    Section.OPERATING_EXPENSES: (
        Subsection.OPERATING_EXPENSES,
        Subsection.UNCLASSIFIED,
    ),
    Section.OTHER_INCOME: (Subsection.OTHER_INCOME, Subsection.UNCLASSIFIED),
    Section.OTHER_EXPENSE: (
        Subsection.OTHER_EXPENSE,
        Subsection.UNCLASSIFIED,
    ),
}


@dataclass(frozen=True)
class ClassificationRule:
    """Maps an account code prefix to a statement placement.

    Attributes:
        prefix: Leading characters of the account code.
        section: Statement section for matching accounts.
        subsection: Sub-grouping inside the section.
        is_cash: Whether matching accounts hold cash or equivalents.
    """

    prefix: str
    section: Section
    subsection: Subsection
    is_cash: bool = False


@dataclass(frozen=True)
class Classification:
    """Placement of an account on the financial statements."""

    section: Section
    subsection: Subsection
    normal_side: NormalSide
    is_gap: bool = False
    is_cash: bool = False

    @property
    def is_current_asset(self) -> bool:
        return self.subsection in (
            Subsection.CURRENT_ASSETS,
            Subsection.INVENTORY,
        )


__all__ = [
    "Section",
    "Subsection",
    "SECTION_ACCOUNT_TYPES",
    "SECTION_SUBSECTIONS",
    "FALLBACK_SECTIONS",
    "ClassificationRule",
    "Classification",
]
