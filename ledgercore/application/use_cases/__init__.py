"""Application use cases package."""

from .get_account_balances import GetAccountBalancesUseCase
from .get_balance_sheet import GetBalanceSheetUseCase
from .get_cash_flow import GetCashFlowUseCase
from .get_profit_and_loss import GetProfitAndLossUseCase
from .get_trial_balance import GetTrialBalanceUseCase
from .post_journal_entry import PostJournalEntryUseCase

__all__ = [
    "GetAccountBalancesUseCase",
    "GetBalanceSheetUseCase",
    "GetCashFlowUseCase",
    "GetProfitAndLossUseCase",
    "GetTrialBalanceUseCase",
    "PostJournalEntryUseCase",
]
