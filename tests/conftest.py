"""Shared fixtures for ledger tests."""

from unittest.mock import MagicMock

import pytest

from ledger_factories import FIXED_NOW, make_chart
from ledgercore.domain.models import Account
from ledgercore.infrastructure.memory_repository import InMemoryLedgerRepository


@pytest.fixture
def accounts() -> list[Account]:
    return make_chart()


@pytest.fixture
def accounts_by_id(accounts) -> dict[str, Account]:
    return {account.id: account for account in accounts}


@pytest.fixture
def repository(accounts) -> InMemoryLedgerRepository:
    repo = InMemoryLedgerRepository()
    for account in accounts:
        repo.add_account(account)
    return repo


@pytest.fixture
def logger() -> MagicMock:
    return MagicMock()


@pytest.fixture
def clock():
    return lambda: FIXED_NOW
