"""Use case to assemble a balance sheet."""

from datetime import date
from decimal import Decimal

from ledgercore.application.ports.ledger_repository import LedgerRepositoryPort
from ledgercore.application.use_cases.report_support import (
    Clock,
    build_metadata,
    load_company_chart,
    utc_now,
)
from ledgercore.domain.constants import DEFAULT_CURRENCY_CODE, DEFAULT_EPSILON
from ledgercore.domain.models import (
    AsOf,
    BalanceSheet,
    CompanyScope,
    StatementKind,
)
from ledgercore.domain.services.balances import (
    amounts_by_account,
    balance_as_of,
)
from ledgercore.domain.services.classification import ClassificationRegistry
from ledgercore.domain.services.statements import build_balance_sheet
from ledgercore.infrastructure.logging.logger import get_app_logger


class GetBalanceSheetUseCase:
    """Assemble a balance sheet, optionally with a comparison date."""

    def __init__(
        self,
        ledger_repository: LedgerRepositoryPort,
        logger=None,
        classification_registry: ClassificationRegistry | None = None,
        currency_code: str = DEFAULT_CURRENCY_CODE,
        epsilon: Decimal = DEFAULT_EPSILON,
        clock: Clock | None = None,
    ) -> None:
        """Initialize the use case.

        Args:
            ledger_repository: Port providing ledger snapshots.
            logger: Optional logger compatible with logging.Logger-like API.
            classification_registry: Classification tables per tenant.
            currency_code: Currency stamped on the report metadata.
            epsilon: Tolerance of the accounting identity check.
            clock: Source of the generation timestamp.
        """
        self._ledger_repository = ledger_repository
        self._logger = logger or get_app_logger()
        self._registry = classification_registry or ClassificationRegistry()
        self._currency_code = currency_code
        self._epsilon = epsilon
        self._clock = clock or utc_now

    def execute(
        self,
        scope: CompanyScope,
        as_of: date,
        comparison_date: date | None = None,
    ) -> BalanceSheet:
        """Return the balance sheet at `as_of`.

        Args:
            scope: Tenant and company to report.
            as_of: Inclusive reporting date.
            comparison_date: Optional date of the comparative column.

        Returns:
            BalanceSheet: Sections, totals, ratios and warnings.
        """
        window = AsOf(as_of)
        comparison_window = (
            AsOf(comparison_date) if comparison_date is not None else None
        )
        latest = max(as_of, comparison_date or as_of)
        with self._ledger_repository.snapshot() as reader:
            chart = load_company_chart(reader, scope, self._registry)
            lines = reader.list_posted_lines(
                scope,
                chart.account_ids,
                AsOf(latest),
            )

        amounts = amounts_by_account(
            balance_as_of(chart.accounts, lines, as_of)
        )
        comparison_amounts = None
        if comparison_date is not None:
            comparison_amounts = amounts_by_account(
                balance_as_of(chart.accounts, lines, comparison_date)
            )

        metadata = build_metadata(
            StatementKind.BALANCE_SHEET,
            scope,
            window,
            self._currency_code,
            self._clock,
            comparison_window,
        )
        sheet = build_balance_sheet(
            metadata,
            chart.accounts,
            chart.classifications,
            amounts,
            comparison_amounts=comparison_amounts,
            classification_gaps=chart.gaps,
            epsilon=self._epsilon,
        )
        for warning in sheet.warnings:
            self._logger.warning(
                f"Balance sheet {scope.tenant_id}/{scope.company_id} "
                f"as of {as_of}: {warning.message}"
            )
        if chart.gaps:
            self._logger.info(
                f"{len(chart.gaps)} accounts reported as unclassified"
            )
        return sheet


__all__ = ["GetBalanceSheetUseCase"]
