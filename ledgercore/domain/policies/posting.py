"""Workflow policies for journal entries.

Policies answer whether an action is allowed; use cases perform it.
"""

from ledgercore.domain.errors import PostingPolicyError
from ledgercore.domain.models import EntryStatus


def can_edit_entry(status: EntryStatus) -> tuple[bool, str]:
    """Check if an entry in the given status can be changed.

    Returns:
        tuple[bool, str]: (True, "") when allowed, else (False, reason).
    """
    if status == EntryStatus.POSTED:
        return False, "Posted entries cannot be edited; post a reversing entry."
    return True, ""


def assert_can_edit_entry(entry_id: str, status: EntryStatus) -> None:
    """Raise PostingPolicyError if the entry cannot be changed."""
    allowed, reason = can_edit_entry(status)
    if not allowed:
        raise PostingPolicyError(f"Entry {entry_id}: {reason}")


__all__ = ["can_edit_entry", "assert_can_edit_entry"]
