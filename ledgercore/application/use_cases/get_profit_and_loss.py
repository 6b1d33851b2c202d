"""Use case to assemble a profit and loss statement."""

from ledgercore.application.ports.ledger_repository import LedgerRepositoryPort
from ledgercore.application.use_cases.report_support import (
    Clock,
    build_metadata,
    load_company_chart,
    utc_now,
)
from ledgercore.domain.constants import DEFAULT_CURRENCY_CODE
from ledgercore.domain.models import (
    CompanyScope,
    Period,
    ProfitAndLoss,
    StatementKind,
)
from ledgercore.domain.services.balances import (
    amounts_by_account,
    balance_for_period,
)
from ledgercore.domain.services.classification import ClassificationRegistry
from ledgercore.domain.services.statements import build_profit_and_loss
from ledgercore.infrastructure.logging.logger import get_app_logger


class GetProfitAndLossUseCase:
    """Assemble a P&L for a period, optionally against another period."""

    def __init__(
        self,
        ledger_repository: LedgerRepositoryPort,
        logger=None,
        classification_registry: ClassificationRegistry | None = None,
        currency_code: str = DEFAULT_CURRENCY_CODE,
        clock: Clock | None = None,
    ) -> None:
        self._ledger_repository = ledger_repository
        self._logger = logger or get_app_logger()
        self._registry = classification_registry or ClassificationRegistry()
        self._currency_code = currency_code
        self._clock = clock or utc_now

    def execute(
        self,
        scope: CompanyScope,
        period: Period,
        comparison_period: Period | None = None,
    ) -> ProfitAndLoss:
        """Return the profit and loss statement of `period`.

        Args:
            scope: Tenant and company to report.
            period: Inclusive reporting period.
            comparison_period: Optional period of the comparative column.

        Returns:
            ProfitAndLoss: Sections, subtotals and margins.
        """
        with self._ledger_repository.snapshot() as reader:
            chart = load_company_chart(reader, scope, self._registry)
            flow_accounts = [
                account
                for account in chart.accounts
                if not chart.classifications[account.id].section.is_balance_sheet
            ]
            flow_ids = [account.id for account in flow_accounts]
            lines = reader.list_posted_lines(scope, flow_ids, period)
            comparison_lines = []
            if comparison_period is not None:
                comparison_lines = reader.list_posted_lines(
                    scope,
                    flow_ids,
                    comparison_period,
                )

        amounts = amounts_by_account(
            balance_for_period(flow_accounts, lines, period.start, period.end)
        )
        comparison_amounts = None
        if comparison_period is not None:
            comparison_amounts = amounts_by_account(
                balance_for_period(
                    flow_accounts,
                    comparison_lines,
                    comparison_period.start,
                    comparison_period.end,
                )
            )

        metadata = build_metadata(
            StatementKind.PROFIT_AND_LOSS,
            scope,
            period,
            self._currency_code,
            self._clock,
            comparison_period,
        )
        statement = build_profit_and_loss(
            metadata,
            flow_accounts,
            chart.classifications,
            amounts,
            comparison_amounts=comparison_amounts,
            classification_gaps=tuple(
                gap
                for gap in chart.gaps
                if not gap.section.is_balance_sheet
            ),
        )
        self._logger.info(
            f"Profit and loss {scope.tenant_id}/{scope.company_id} "
            f"{period.start}..{period.end}: net income "
            f"{statement.net_income.amount}"
        )
        return statement


__all__ = ["GetProfitAndLossUseCase"]
