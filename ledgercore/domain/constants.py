"""Domain constants for the ledger engine."""

from decimal import Decimal

from ledgercore.domain.models.classification import (
    ClassificationRule,
    Section,
    Subsection,
)

DEFAULT_CURRENCY_CODE = "USD"
DEFAULT_MINOR_UNIT = 2
DEFAULT_EPSILON = Decimal("0.01")

HUNDRED = Decimal("100")
ZERO = Decimal("0")

DEFAULT_CLASSIFICATION_RULES = (
    ClassificationRule("10", Section.ASSETS, Subsection.CURRENT_ASSETS, True),
    ClassificationRule("11", Section.ASSETS, Subsection.CURRENT_ASSETS),
    ClassificationRule("12", Section.ASSETS, Subsection.INVENTORY),
    ClassificationRule("13", Section.ASSETS, Subsection.FIXED_ASSETS),
    ClassificationRule("14", Section.ASSETS, Subsection.FIXED_ASSETS),
    ClassificationRule("15", Section.ASSETS, Subsection.FIXED_ASSETS),
    ClassificationRule("16", Section.ASSETS, Subsection.OTHER_ASSETS),
    ClassificationRule("17", Section.ASSETS, Subsection.OTHER_ASSETS),
    ClassificationRule("18", Section.ASSETS, Subsection.OTHER_ASSETS),
    ClassificationRule("19", Section.ASSETS, Subsection.OTHER_ASSETS),
    ClassificationRule(
        "20", Section.LIABILITIES, Subsection.CURRENT_LIABILITIES
    ),
    ClassificationRule(
        "21", Section.LIABILITIES, Subsection.CURRENT_LIABILITIES
    ),
    ClassificationRule(
        "22", Section.LIABILITIES, Subsection.LONG_TERM_LIABILITIES
    ),
    ClassificationRule(
        "23", Section.LIABILITIES, Subsection.LONG_TERM_LIABILITIES
    ),
    ClassificationRule(
        "24", Section.LIABILITIES, Subsection.LONG_TERM_LIABILITIES
    ),
    ClassificationRule("30", Section.EQUITY, Subsection.CONTRIBUTED_CAPITAL),
    ClassificationRule("31", Section.EQUITY, Subsection.CONTRIBUTED_CAPITAL),
    ClassificationRule("32", Section.EQUITY, Subsection.RETAINED_EARNINGS),
    ClassificationRule("33", Section.EQUITY, Subsection.OTHER_EQUITY),
    ClassificationRule("34", Section.EQUITY, Subsection.OTHER_EQUITY),
    ClassificationRule("35", Section.EQUITY, Subsection.OTHER_EQUITY),
    ClassificationRule("36", Section.EQUITY, Subsection.OTHER_EQUITY),
    ClassificationRule("37", Section.EQUITY, Subsection.OTHER_EQUITY),
    ClassificationRule("38", Section.EQUITY, Subsection.OTHER_EQUITY),
    ClassificationRule("39", Section.EQUITY, Subsection.RETAINED_EARNINGS),
    ClassificationRule("4", Section.REVENUE, Subsection.REVENUE),
    ClassificationRule("5", Section.COST_OF_SALES, Subsection.COST_OF_SALES),
    ClassificationRule(
        "6", Section.OPERATING_EXPENSES, Subsection.OPERATING_EXPENSES
    ),
    ClassificationRule("7", Section.OTHER_INCOME, Subsection.OTHER_INCOME),
    ClassificationRule("8", Section.OTHER_EXPENSE, Subsection.OTHER_EXPENSE),
)


__all__ = [
    "DEFAULT_CURRENCY_CODE",
    "DEFAULT_MINOR_UNIT",
    "DEFAULT_EPSILON",
    "HUNDRED",
    "ZERO",
    "DEFAULT_CLASSIFICATION_RULES",
]
