from ledgerbook.models.base import LBBaseModel
from ledgerbook.models.journal_entries import JournalEntry, OpeningBalanceEntry
from ledgerbook.models.reconciliation import (
    AdjustmentResult,
    BankEntryType,
    BankStatementEntry,
    DemoCase,
    DemoCaseType,
    DiscrepancyType,
    MatchType,
    ReconciliationDiscrepancy,
    ReconciliationMatch,
    ReconciliationReport,
    ReconciliationSession,
    ReconciliationSummary,
    SessionStatus,
)
from ledgerbook.models.reports import (
    AccountAmount,
    AccountLedger,
    BalanceSheet,
    FinancialSummary,
    LedgerLine,
    ProfitAndLoss,
    TrialBalance,
    TrialBalanceRow,
)

__all__ = [
    "AccountAmount",
    "AccountLedger",
    "AdjustmentResult",
    "BalanceSheet",
    "BankEntryType",
    "BankStatementEntry",
    "DemoCase",
    "DemoCaseType",
    "DiscrepancyType",
    "FinancialSummary",
    "JournalEntry",
    "LBBaseModel",
    "LedgerLine",
    "MatchType",
    "OpeningBalanceEntry",
    "ProfitAndLoss",
    "ReconciliationDiscrepancy",
    "ReconciliationMatch",
    "ReconciliationReport",
    "ReconciliationSession",
    "ReconciliationSummary",
    "SessionStatus",
    "TrialBalance",
    "TrialBalanceRow",
]
