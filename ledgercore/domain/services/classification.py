"""Chart-of-accounts classifier.

All code-prefix matching lives here. Other components consume the returned
`Classification` and never inspect account codes themselves.
"""

from collections.abc import Iterable, Mapping

from ledgercore.domain.constants import DEFAULT_CLASSIFICATION_RULES
from ledgercore.domain.models import (
    Account,
    Classification,
    ClassificationRule,
    Section,
    Subsection,
)
from ledgercore.domain.models.classification import (
    FALLBACK_SECTIONS,
    SECTION_SUBSECTIONS,
)
from ledgercore.domain.models.statements import ClassificationGap


def _parse_is_cash(row: Mapping[str, object]) -> bool:
    value = row.get("is_cash", False)
    if not isinstance(value, bool):
        raise ValueError(
            f"Classification rule is_cash must be a boolean, got {value!r}"
        )
    return value


class ClassificationTable:
    """Declarative code-prefix table; the longest matching prefix wins."""

    def __init__(self, rules: Iterable[ClassificationRule]) -> None:
        ordered = sorted(rules, key=lambda rule: (-len(rule.prefix), rule.prefix))
        seen: set[str] = set()
        for rule in ordered:
            if not rule.prefix:
                raise ValueError("Classification rule prefix cannot be empty")
            if rule.prefix in seen:
                raise ValueError(
                    f"Duplicate classification prefix: {rule.prefix}"
                )
            if rule.subsection not in SECTION_SUBSECTIONS[rule.section]:
                raise ValueError(
                    f"Subsection {rule.subsection.value} does not belong to "
                    f"section {rule.section.value} (prefix {rule.prefix})"
                )
            seen.add(rule.prefix)
        self._rules = tuple(ordered)

    @property
    def rules(self) -> tuple[ClassificationRule, ...]:
        return self._rules

    def match(self, code: str) -> ClassificationRule | None:
        """Return the rule for an account code, if any.

        Args:
            code: Account code to look up.

        Returns:
            ClassificationRule | None: Longest-prefix rule or None.
        """
        cleaned = (code or "").strip()
        if not cleaned:
            return None
        for rule in self._rules:
            if cleaned.startswith(rule.prefix):
                return rule
        return None

    @classmethod
    def from_mapping(
        cls,
        rows: Iterable[Mapping[str, object]],
    ) -> "ClassificationTable":
        """Build a table from plain mappings, e.g. parsed JSON.

        Each mapping needs `prefix`, `section` and `subsection` keys and may
        carry a boolean `is_cash`.

        Args:
            rows: Rule mappings.

        Returns:
            ClassificationTable: Table built from the rows.

        Raises:
            ValueError: If a row is missing keys, names an unknown value,
                pairs a subsection with another section or carries a
                non-boolean `is_cash`.
        """
        rules = []
        for row in rows:
            try:
                rules.append(
                    ClassificationRule(
                        prefix=str(row["prefix"]).strip(),
                        section=Section(str(row["section"]).lower()),
                        subsection=Subsection(str(row["subsection"]).lower()),
                        is_cash=_parse_is_cash(row),
                    )
                )
            except KeyError as exc:
                raise ValueError(
                    f"Classification rule is missing key {exc}: {dict(row)}"
                ) from exc
        return cls(rules)


DEFAULT_CLASSIFICATION_TABLE = ClassificationTable(DEFAULT_CLASSIFICATION_RULES)


class ClassificationRegistry:
    """Resolves the classification table of a tenant."""

    def __init__(
        self,
        default: ClassificationTable = DEFAULT_CLASSIFICATION_TABLE,
        tenant_tables: Mapping[str, ClassificationTable] | None = None,
    ) -> None:
        self._default = default
        self._tenant_tables = dict(tenant_tables or {})

    @property
    def default(self) -> ClassificationTable:
        return self._default

    def for_tenant(self, tenant_id: str) -> ClassificationTable:
        """Return the tenant's table, falling back to the default one."""
        return self._tenant_tables.get(tenant_id, self._default)


def classify(
    account: Account,
    table: ClassificationTable = DEFAULT_CLASSIFICATION_TABLE,
) -> Classification:
    """Place an account on the financial statements.

    The normal side always follows the account type. When the code matches
    no rule, or the matched rule belongs to another account family, the
    account falls back to its type's section under `unclassified`.

    Args:
        account: Account to classify.
        table: Classification table of the account's tenant.

    Returns:
        Classification: Section, subsection and normal side.
    """
    normal_side = account.account_type.normal_side
    rule = table.match(account.code)
    if rule is not None and account.account_type in rule.section.account_types:
        return Classification(
            section=rule.section,
            subsection=rule.subsection,
            normal_side=normal_side,
            is_cash=rule.is_cash,
        )
    return Classification(
        section=FALLBACK_SECTIONS[account.account_type],
        subsection=Subsection.UNCLASSIFIED,
        normal_side=normal_side,
        is_gap=True,
    )


def classify_accounts(
    accounts: Iterable[Account],
    table: ClassificationTable = DEFAULT_CLASSIFICATION_TABLE,
) -> dict[str, Classification]:
    """Classify accounts keyed by account id."""
    return {account.id: classify(account, table) for account in accounts}


def collect_classification_gaps(
    accounts: Iterable[Account],
    classifications: Mapping[str, Classification],
) -> tuple[ClassificationGap, ...]:
    """Return one gap per account that fell back to `unclassified`."""
    return tuple(
        ClassificationGap(
            account_id=account.id,
            code=account.code,
            name=account.name,
            section=classifications[account.id].section,
        )
        for account in accounts
        if classifications[account.id].is_gap
    )


__all__ = [
    "ClassificationTable",
    "DEFAULT_CLASSIFICATION_TABLE",
    "ClassificationRegistry",
    "classify",
    "classify_accounts",
    "collect_classification_gaps",
]
