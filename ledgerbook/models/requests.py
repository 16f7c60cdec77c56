"""API request and response models."""
import datetime
from typing import List, Optional

from pydantic import Field

from ledgerbook.models.base import LBBaseModel
from ledgerbook.models.journal_entries import JournalEntry, OpeningBalanceEntry
from ledgerbook.models.reconciliation import (
    DemoCase,
    ReconciliationDiscrepancy,
    ReconciliationMatch,
    ReconciliationSession,
)


class JournalEntriesRequest(LBBaseModel):
    journal_entries: List[JournalEntry] = Field(default_factory=list)


class SessionRequest(LBBaseModel):
    session: ReconciliationSession
    journal_entries: List[JournalEntry] = Field(default_factory=list)


class ManualMatchRequest(SessionRequest):
    bank_entry_id: str = Field(..., min_length=1)
    journal_entry_id: str = Field(..., min_length=1)


class UnmatchRequest(SessionRequest):
    match_id: str = Field(..., min_length=1)


class AdjustmentRequest(LBBaseModel):
    discrepancy: ReconciliationDiscrepancy
    entry_date: Optional[datetime.date] = None


class ReportRequest(LBBaseModel):
    journal_entries: List[JournalEntry] = Field(default_factory=list)
    opening_balances: List[OpeningBalanceEntry] = Field(default_factory=list)


class JournalEntryDraft(LBBaseModel):
    """An entry as typed by a user, before it has an id or a parsed date."""

    date: str = ""
    account: str = ""
    description: str = ""
    debit: float = 0.0
    credit: float = 0.0
    reference: str = ""


class ValidateEntryRequest(LBBaseModel):
    entry: JournalEntryDraft
    existing_entries: List[JournalEntry] = Field(default_factory=list)
    current_id: Optional[str] = None


class AutoMatchResponse(LBBaseModel):
    session: ReconciliationSession
    new_matches: List[ReconciliationMatch] = Field(default_factory=list)


class DemoCaseDetail(LBBaseModel):
    case: DemoCase
    journal_entries: List[JournalEntry] = Field(default_factory=list)


class BookBalanceResponse(LBBaseModel):
    book_balance: float
    formatted: str
