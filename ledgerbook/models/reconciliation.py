"""Bank reconciliation models."""
import datetime
from enum import Enum
from typing import List, Optional

from pydantic import Field

from ledgerbook.models.base import LBBaseModel
from ledgerbook.models.journal_entries import JournalEntry


class BankEntryType(str, Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    FEE = "fee"
    INTEREST = "interest"


class MatchType(str, Enum):
    EXACT = "exact"
    MANUAL = "manual"
    SUGGESTED = "suggested"


class DiscrepancyType(str, Enum):
    OUTSTANDING_CHECK = "outstanding_check"
    DEPOSIT_IN_TRANSIT = "deposit_in_transit"
    BANK_ERROR = "bank_error"
    BOOK_ERROR = "book_error"
    BANK_FEE = "bank_fee"
    NSF_CHECK = "nsf_check"
    INTEREST = "interest"


class SessionStatus(str, Enum):
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    APPROVED = "approved"


class DemoCaseType(str, Enum):
    PERFECT = "perfect"
    OUTSTANDING_CHECKS = "outstanding_checks"
    DEPOSITS_IN_TRANSIT = "deposits_in_transit"
    BANK_FEES = "bank_fees"
    NSF_CHECK = "nsf_check"
    BANK_ERROR = "bank_error"
    COMPLEX = "complex"


class BankStatementEntry(LBBaseModel):
    id: str = Field(..., min_length=1)
    date: datetime.date
    description: str = ""
    reference: str = ""
    withdrawal: float = Field(default=0.0, ge=0)
    deposit: float = Field(default=0.0, ge=0)
    # Running balance reported by the bank after this line.
    balance: float = 0.0
    type: BankEntryType
    is_cleared: bool = False

    @property
    def amount(self) -> float:
        return self.deposit if self.deposit > 0 else self.withdrawal


class ReconciliationMatch(LBBaseModel):
    id: str
    bank_entry_id: str
    journal_entry_id: str
    match_date: datetime.datetime
    match_type: MatchType
    confidence: float = Field(..., ge=0, le=100)


class ReconciliationDiscrepancy(LBBaseModel):
    id: str
    type: DiscrepancyType
    amount: float = Field(..., ge=0)
    description: str = ""
    reference: str = ""
    needs_adjustment: bool
    adjustment_journal_entry_id: Optional[str] = None


class ReconciliationSession(LBBaseModel):
    id: str
    date: datetime.date
    month: str = ""
    year: str = ""
    starting_balance: float = 0.0
    ending_balance: float
    bank_statement_entries: List[BankStatementEntry] = Field(default_factory=list)
    matches: List[ReconciliationMatch] = Field(default_factory=list)
    status: SessionStatus = SessionStatus.IN_PROGRESS
    discrepancies: List[ReconciliationDiscrepancy] = Field(default_factory=list)
    notes: str = ""
    created_at: datetime.datetime = Field(
        default_factory=lambda: datetime.datetime.now(datetime.timezone.utc)
    )
    completed_at: Optional[datetime.datetime] = None


class ReconciliationSummary(LBBaseModel):
    book_balance: float
    bank_balance: float
    outstanding_checks: float = 0.0
    deposits_in_transit: float = 0.0
    bank_adjustments: float = 0.0
    # Book-side corrections; the automatic classifier never populates this.
    book_adjustments: float = 0.0
    adjusted_book_balance: float
    adjusted_bank_balance: float
    difference: float = Field(..., ge=0)
    is_balanced: bool


class ReconciliationReport(LBBaseModel):
    """Everything derived from a session snapshot in one pass."""

    book_balance: float
    discrepancies: List[ReconciliationDiscrepancy] = Field(default_factory=list)
    summary: ReconciliationSummary
    matched_count: int = 0
    unmatched_bank_count: int = 0
    unmatched_journal_count: int = 0


class AdjustmentResult(LBBaseModel):
    discrepancy: ReconciliationDiscrepancy
    journal_entries: List[JournalEntry] = Field(default_factory=list)


class DemoCase(LBBaseModel):
    id: DemoCaseType
    name: str
    description: str
    learning_objective: str
    session: ReconciliationSession
