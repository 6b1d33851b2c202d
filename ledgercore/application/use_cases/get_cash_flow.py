"""Use case to assemble a cash-flow statement."""

from collections.abc import Iterable
from datetime import timedelta
from decimal import Decimal

from ledgercore.application.ports.ledger_repository import LedgerRepositoryPort
from ledgercore.application.use_cases.report_support import (
    Clock,
    CompanyChart,
    build_metadata,
    load_company_chart,
    utc_now,
)
from ledgercore.domain.constants import (
    DEFAULT_CURRENCY_CODE,
    DEFAULT_EPSILON,
    ZERO,
)
from ledgercore.domain.models import (
    Account,
    AsOf,
    CashFlowStatement,
    CompanyScope,
    LedgerLine,
    Period,
    StatementKind,
)
from ledgercore.domain.services.balances import balance_as_of
from ledgercore.domain.services.cashflow import bucketize_cash_movements
from ledgercore.domain.services.classification import ClassificationRegistry
from ledgercore.domain.services.posting import assert_posted_entries_balanced
from ledgercore.domain.services.statements import build_cash_flow
from ledgercore.infrastructure.logging.logger import get_app_logger


class GetCashFlowUseCase:
    """Assemble a cash-flow statement for a period."""

    def __init__(
        self,
        ledger_repository: LedgerRepositoryPort,
        logger=None,
        classification_registry: ClassificationRegistry | None = None,
        cash_account_codes: Iterable[str] = (),
        currency_code: str = DEFAULT_CURRENCY_CODE,
        epsilon: Decimal = DEFAULT_EPSILON,
        clock: Clock | None = None,
    ) -> None:
        """Initialize the use case.

        Args:
            ledger_repository: Port providing ledger snapshots.
            logger: Optional logger compatible with logging.Logger-like API.
            classification_registry: Classification tables per tenant.
            cash_account_codes: Codes of the cash accounts. When empty, the
                accounts whose classification rule is flagged as cash are
                used.
            currency_code: Currency stamped on the report metadata.
            epsilon: Tolerance for entry balance and reconciliation checks.
            clock: Source of the generation timestamp.
        """
        self._ledger_repository = ledger_repository
        self._logger = logger or get_app_logger()
        self._registry = classification_registry or ClassificationRegistry()
        self._cash_account_codes = tuple(cash_account_codes)
        self._currency_code = currency_code
        self._epsilon = epsilon
        self._clock = clock or utc_now

    def execute(
        self,
        scope: CompanyScope,
        period: Period,
        comparison_period: Period | None = None,
    ) -> CashFlowStatement:
        """Return the cash-flow statement of `period`.

        Args:
            scope: Tenant and company to report.
            period: Inclusive reporting period.
            comparison_period: Optional period of the comparative column.

        Returns:
            CashFlowStatement: Activities, net flow and reconciliation.

        Raises:
            IntegrityFault: If a POSTED entry moving cash is unbalanced.
        """
        periods = [period]
        if comparison_period is not None:
            periods.append(comparison_period)
        latest = max(item.end for item in periods)

        with self._ledger_repository.snapshot() as reader:
            chart = load_company_chart(reader, scope, self._registry)
            cash_accounts = self._cash_accounts(chart)
            cash_ids = tuple(account.id for account in cash_accounts)
            cash_lines = reader.list_posted_lines(scope, cash_ids, AsOf(latest))
            entry_ids = [
                line.entry_id
                for line in cash_lines
                if any(item.contains(line.entry_date) for item in periods)
            ]
            entry_lines = reader.list_entry_lines(scope, entry_ids)

        if not cash_ids:
            self._logger.warning(
                f"No cash accounts found for {scope.tenant_id}/"
                f"{scope.company_id}; cash flow will be empty"
            )
        assert_posted_entries_balanced(entry_lines, self._epsilon)

        movements = bucketize_cash_movements(
            entry_lines,
            cash_ids,
            chart.classifications,
            period,
        )
        comparison_movements = None
        if comparison_period is not None:
            comparison_movements = bucketize_cash_movements(
                entry_lines,
                cash_ids,
                chart.classifications,
                comparison_period,
            )

        counter_ids = {movement.account_id for movement in movements}
        metadata = build_metadata(
            StatementKind.CASH_FLOW,
            scope,
            period,
            self._currency_code,
            self._clock,
            comparison_period,
        )
        statement = build_cash_flow(
            metadata,
            chart.accounts,
            movements,
            beginning_cash=self._cash_balance(
                cash_accounts,
                cash_lines,
                period,
            ),
            ending_cash=self._total(cash_accounts, cash_lines, period.end),
            cash_account_ids=cash_ids,
            comparison_movements=comparison_movements,
            classification_gaps=tuple(
                gap for gap in chart.gaps if gap.account_id in counter_ids
            ),
            tolerance=self._epsilon,
        )
        for warning in statement.warnings:
            self._logger.warning(
                f"Cash flow {scope.tenant_id}/{scope.company_id} "
                f"{period.start}..{period.end}: {warning.message}"
            )
        self._logger.info(
            f"Cash flow {scope.tenant_id}/{scope.company_id}: "
            f"{len(movements)} movements, net "
            f"{statement.net_cash_flow.amount}"
        )
        return statement

    def _cash_accounts(self, chart: CompanyChart) -> list[Account]:
        if self._cash_account_codes:
            codes = set(self._cash_account_codes)
            return [account for account in chart.accounts if account.code in codes]
        return [
            account
            for account in chart.accounts
            if chart.classifications[account.id].is_cash
        ]

    @staticmethod
    def _total(
        accounts: list[Account],
        lines: list[LedgerLine],
        as_of,
    ) -> Decimal:
        return sum(
            (balance.amount for balance in balance_as_of(accounts, lines, as_of)),
            ZERO,
        )

    def _cash_balance(
        self,
        accounts: list[Account],
        lines: list[LedgerLine],
        period: Period,
    ) -> Decimal:
        """Return cash held at the close of the day before the period."""
        return self._total(accounts, lines, period.start - timedelta(days=1))


__all__ = ["GetCashFlowUseCase"]
