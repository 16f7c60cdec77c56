"""
Adjustment Entry Generation for Ledgerbook

Turns a bank-side reconciliation discrepancy into balanced journal lines:
- Bank fee: debit bank fee expense, credit cash
- Interest: debit cash, credit interest income
- NSF check: debit accounts receivable, credit cash
- Outstanding checks, deposits in transit and bank errors need no entry
- Book errors need a hand-written correcting entry
"""
from __future__ import annotations

import datetime
import logging
import uuid
from typing import List, Optional

from ledgerbook.core.config import ReconciliationSettings, get_settings
from ledgerbook.models.journal_entries import JournalEntry
from ledgerbook.models.reconciliation import (
    AdjustmentResult,
    DiscrepancyType,
    ReconciliationDiscrepancy,
)
from ledgerbook.services.errors import AdjustmentNotSupportedError, UnbalancedAdjustmentError
from ledgerbook.services.financial_calculations import check_journal_balanced

logger = logging.getLogger(__name__)


def new_entry_id() -> str:
    return f"je_{uuid.uuid4().hex[:12]}"


def _pair(
    discrepancy: ReconciliationDiscrepancy,
    entry_date: datetime.date,
    debit_account: str,
    credit_account: str,
) -> List[JournalEntry]:
    common = {
        "date": entry_date,
        "description": discrepancy.description,
        "reference": discrepancy.reference,
    }
    return [
        JournalEntry(id=new_entry_id(), account=debit_account, debit=discrepancy.amount, **common),
        JournalEntry(id=new_entry_id(), account=credit_account, credit=discrepancy.amount, **common),
    ]


def create_adjustment_entries(
    discrepancy: ReconciliationDiscrepancy,
    entry_date: Optional[datetime.date] = None,
    settings: Optional[ReconciliationSettings] = None,
) -> List[JournalEntry]:
    """
    Build the journal lines that bring the books in line with the bank.

    Args:
        discrepancy: Discrepancy produced by identify_discrepancies
        entry_date: Posting date, defaults to today
        settings: Account labels, defaults to get_settings()

    Returns:
        Balanced journal lines, or an empty list for timing items and
        bank errors.
    """
    settings = settings or get_settings()
    entry_date = entry_date or datetime.date.today()
    kind = discrepancy.type

    if kind == DiscrepancyType.BANK_FEE:
        entries = _pair(discrepancy, entry_date, settings.bank_fee_account, settings.cash_account)
    elif kind == DiscrepancyType.INTEREST:
        entries = _pair(discrepancy, entry_date, settings.cash_account, settings.interest_income_account)
    elif kind == DiscrepancyType.NSF_CHECK:
        # Reinstate the customer's receivable for the returned deposit
        entries = _pair(discrepancy, entry_date, settings.nsf_receivable_account, settings.cash_account)
    elif kind in (
        DiscrepancyType.OUTSTANDING_CHECK,
        DiscrepancyType.DEPOSIT_IN_TRANSIT,
        DiscrepancyType.BANK_ERROR,
    ):
        return []
    elif kind == DiscrepancyType.BOOK_ERROR:
        raise AdjustmentNotSupportedError(
            kind.value, "Book errors require a manually written correcting entry"
        )
    else:
        raise AdjustmentNotSupportedError(str(kind), "No posting rule for this discrepancy type")

    if not check_journal_balanced(entries):
        raise UnbalancedAdjustmentError(
            sum(e.debit for e in entries), sum(e.credit for e in entries)
        )

    logger.info(f"Created {len(entries)} adjustment entries for {discrepancy.id} ({kind.value})")
    return entries


def apply_adjustment(
    discrepancy: ReconciliationDiscrepancy,
    entry_date: Optional[datetime.date] = None,
    settings: Optional[ReconciliationSettings] = None,
) -> AdjustmentResult:
    """Create adjustment entries and link the first one back to the discrepancy."""
    entries = create_adjustment_entries(discrepancy, entry_date, settings)
    linked = discrepancy
    if entries:
        linked = discrepancy.model_copy(update={"adjustment_journal_entry_id": entries[0].id})
    return AdjustmentResult(discrepancy=linked, journal_entries=entries)
