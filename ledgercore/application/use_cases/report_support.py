"""Helpers shared by the statement use cases."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone

from ledgercore.application.ports.ledger_repository import LedgerReaderPort
from ledgercore.domain.models import (
    Account,
    BalanceWindow,
    Classification,
    ClassificationGap,
    CompanyScope,
    ReportMetadata,
    StatementKind,
)
from ledgercore.domain.services.classification import (
    ClassificationRegistry,
    classify_accounts,
    collect_classification_gaps,
)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Return the current time in UTC."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class CompanyChart:
    """Accounts of a company with their classifications."""

    accounts: list[Account]
    classifications: dict[str, Classification]
    gaps: tuple[ClassificationGap, ...]

    @property
    def account_ids(self) -> list[str]:
        return [account.id for account in self.accounts]


def load_company_chart(
    reader: LedgerReaderPort,
    scope: CompanyScope,
    registry: ClassificationRegistry,
) -> CompanyChart:
    """Load and classify the chart of accounts of a company.

    Args:
        reader: Snapshot reader.
        scope: Tenant and company to load.
        registry: Classification tables per tenant.

    Returns:
        CompanyChart: Accounts, classifications and classification gaps.
    """
    accounts = reader.list_accounts(scope)
    classifications = classify_accounts(
        accounts,
        registry.for_tenant(scope.tenant_id),
    )
    return CompanyChart(
        accounts=accounts,
        classifications=classifications,
        gaps=collect_classification_gaps(accounts, classifications),
    )


def build_metadata(
    kind: StatementKind,
    scope: CompanyScope,
    window: BalanceWindow,
    currency_code: str,
    clock: Clock,
    comparison_window: BalanceWindow | None = None,
) -> ReportMetadata:
    return ReportMetadata(
        kind=kind,
        scope=scope,
        window=window,
        currency_code=currency_code,
        comparison_window=comparison_window,
        generated_at=clock(),
    )


__all__ = [
    "Clock",
    "utc_now",
    "CompanyChart",
    "load_company_chart",
    "build_metadata",
]
