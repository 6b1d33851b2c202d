"""Use case to compute a trial balance."""

from decimal import Decimal

from ledgercore.application.ports.ledger_repository import LedgerRepositoryPort
from ledgercore.application.use_cases.report_support import (
    Clock,
    build_metadata,
    utc_now,
)
from ledgercore.domain.constants import (
    DEFAULT_CURRENCY_CODE,
    DEFAULT_EPSILON,
    ZERO,
)
from ledgercore.domain.errors import IntegrityFault
from ledgercore.domain.models import (
    AsOf,
    BalanceWindow,
    CompanyScope,
    StatementKind,
    TrialBalance,
)
from ledgercore.domain.services.balances import compute_trial_balance_rows
from ledgercore.domain.services.posting import is_balanced
from ledgercore.infrastructure.logging.logger import get_app_logger


class GetTrialBalanceUseCase:
    """List debit and credit totals per account and check they agree."""

    def __init__(
        self,
        ledger_repository: LedgerRepositoryPort,
        logger=None,
        currency_code: str = DEFAULT_CURRENCY_CODE,
        epsilon: Decimal = DEFAULT_EPSILON,
        clock: Clock | None = None,
    ) -> None:
        self._ledger_repository = ledger_repository
        self._logger = logger or get_app_logger()
        self._currency_code = currency_code
        self._epsilon = epsilon
        self._clock = clock or utc_now

    def execute(
        self,
        scope: CompanyScope,
        window: BalanceWindow,
    ) -> TrialBalance:
        """Return the trial balance of the window.

        Args:
            scope: Tenant and company to report.
            window: `AsOf` for all activity to date, `Period` for activity
                within the period with opening balances.

        Returns:
            TrialBalance: One row per account with grand totals.

        Raises:
            IntegrityFault: If total debits and credits disagree.
        """
        with self._ledger_repository.snapshot() as reader:
            accounts = reader.list_accounts(scope)
            lines = reader.list_posted_lines(
                scope,
                [account.id for account in accounts],
                AsOf(window.end),
            )

        rows = compute_trial_balance_rows(accounts, lines, window)
        total_debits = sum((row.debit_total for row in rows), ZERO)
        total_credits = sum((row.credit_total for row in rows), ZERO)
        if not is_balanced(total_debits, total_credits, self._epsilon):
            self._logger.error(
                f"Trial balance for {scope.tenant_id}/{scope.company_id} "
                f"is off: debits={total_debits}, credits={total_credits}"
            )
            raise IntegrityFault(
                f"Trial balance does not agree: debits={total_debits}, "
                f"credits={total_credits}"
            )

        metadata = build_metadata(
            StatementKind.TRIAL_BALANCE,
            scope,
            window,
            self._currency_code,
            self._clock,
        )
        return TrialBalance(
            metadata=metadata,
            rows=tuple(rows),
            total_debits=total_debits,
            total_credits=total_credits,
        )


__all__ = ["GetTrialBalanceUseCase"]
