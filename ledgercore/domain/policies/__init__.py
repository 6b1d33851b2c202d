"""Domain policies package."""

from .posting import assert_can_edit_entry, can_edit_entry

__all__ = ["can_edit_entry", "assert_can_edit_entry"]
