"""Use case to post a balanced journal entry."""

from decimal import Decimal

from ledgercore.application.ports.ledger_repository import LedgerRepositoryPort
from ledgercore.domain.constants import DEFAULT_EPSILON
from ledgercore.domain.errors import PostingRejection
from ledgercore.domain.models import JournalEntryDraft, PostedEntry
from ledgercore.domain.policies import assert_can_edit_entry
from ledgercore.domain.services.posting import validate_draft
from ledgercore.infrastructure.logging.logger import (
    get_app_logger,
    get_audit_logger,
)


class PostJournalEntryUseCase:
    """Validate a draft and commit it to the ledger as POSTED."""

    def __init__(
        self,
        ledger_repository: LedgerRepositoryPort,
        logger=None,
        audit_logger=None,
        epsilon: Decimal = DEFAULT_EPSILON,
    ) -> None:
        """Initialize the use case.

        Args:
            ledger_repository: Port providing transactional ledger writes.
            logger: Optional logger compatible with logging.Logger-like API.
            audit_logger: Optional logger receiving one line per posting.
            epsilon: Minor unit of the currency; line amounts must be whole
                multiples of it.
        """
        self._ledger_repository = ledger_repository
        self._logger = logger or get_app_logger()
        self._audit_logger = audit_logger or get_audit_logger()
        self._epsilon = epsilon

    def execute(
        self,
        draft: JournalEntryDraft,
    ) -> PostedEntry | PostingRejection:
        """Post the draft atomically.

        Account checks run before the balance check. On rejection nothing is
        written and the rejection is returned for the caller to fix.

        Args:
            draft: Entry to post.

        Returns:
            PostedEntry | PostingRejection: The committed entry, or a
            `BalanceError` / `UnknownAccountError` describing the problem.

        Raises:
            PostingPolicyError: If `draft.entry_id` names a POSTED entry or
                an entry of another company.
        """
        with self._ledger_repository.transaction() as unit_of_work:
            if draft.entry_id is not None:
                status = unit_of_work.fetch_entry_status(
                    draft.scope,
                    draft.entry_id,
                )
                if status is not None:
                    assert_can_edit_entry(draft.entry_id, status)
            accounts = {
                account.id: account
                for account in unit_of_work.list_accounts(draft.scope)
            }
            rejection = validate_draft(draft, accounts, self._epsilon)
            if rejection is not None:
                self._logger.warning(
                    f"Rejected journal entry for {draft.scope.tenant_id}/"
                    f"{draft.scope.company_id} dated {draft.entry_date}: "
                    f"{rejection.message}"
                )
                return rejection
            entry_id = unit_of_work.save_draft(draft)
            unit_of_work.mark_posted(draft.scope, entry_id)

        posted = PostedEntry(
            entry_id=entry_id,
            scope=draft.scope,
            entry_date=draft.entry_date,
            lines=draft.lines,
            memo=draft.memo,
            reference=draft.reference,
        )
        self._audit_logger.info(
            f"POSTED entry={entry_id} tenant={draft.scope.tenant_id} "
            f"company={draft.scope.company_id} date={draft.entry_date} "
            f"lines={len(draft.lines)} amount={posted.total} "
            f"reference={draft.reference or '-'}"
        )
        return posted


__all__ = ["PostJournalEntryUseCase"]
