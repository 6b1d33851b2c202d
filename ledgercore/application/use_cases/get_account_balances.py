"""Use case to compute account balances over a window."""

from collections.abc import Iterable

from ledgercore.application.ports.ledger_repository import LedgerRepositoryPort
from ledgercore.domain.errors import UnknownAccountError
from ledgercore.domain.models import AccountBalance, BalanceWindow, CompanyScope
from ledgercore.domain.services.balances import compute_balances
from ledgercore.infrastructure.logging.logger import get_app_logger


class GetAccountBalancesUseCase:
    """Compute signed balances of a company's accounts."""

    def __init__(
        self,
        ledger_repository: LedgerRepositoryPort,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            ledger_repository: Port providing ledger snapshots.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._ledger_repository = ledger_repository
        self._logger = logger or get_app_logger()

    def execute(
        self,
        scope: CompanyScope,
        window: BalanceWindow,
        account_ids: Iterable[str] | None = None,
    ) -> list[AccountBalance] | UnknownAccountError:
        """Return one balance per requested account.

        Args:
            scope: Tenant and company to read.
            window: `AsOf` for cumulative balances, `Period` for activity.
            account_ids: Accounts to report, in the desired order. None
                reports every account of the company ordered by code.

        Returns:
            list[AccountBalance] | UnknownAccountError: Balances, or the ids
            that do not belong to the company.
        """
        with self._ledger_repository.snapshot() as reader:
            accounts = reader.list_accounts(scope)
            by_id = {account.id: account for account in accounts}
            if account_ids is None:
                requested = accounts
            else:
                requested_ids = list(dict.fromkeys(account_ids))
                unknown = tuple(
                    account_id
                    for account_id in requested_ids
                    if account_id not in by_id
                )
                if unknown:
                    self._logger.warning(
                        f"Balance request for unknown accounts: "
                        f"{', '.join(unknown)}"
                    )
                    return UnknownAccountError(account_ids=unknown)
                requested = [by_id[account_id] for account_id in requested_ids]
            lines = reader.list_posted_lines(
                scope,
                [account.id for account in requested],
                window,
            )
        balances = compute_balances(requested, lines, window)
        self._logger.info(
            f"Computed {len(balances)} balances for "
            f"{scope.tenant_id}/{scope.company_id}"
        )
        return balances


__all__ = ["GetAccountBalancesUseCase"]
