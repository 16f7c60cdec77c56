"""Manual match bookkeeping for reconciliation sessions."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Sequence

from ledgerbook.models.reconciliation import BankStatementEntry, MatchType, ReconciliationMatch
from ledgerbook.reconciliation_engine import matched_ids, new_match_id
from ledgerbook.services.errors import DuplicateMatchError, MatchNotFoundError

MANUAL_CONFIDENCE = 100.0


def add_manual_match(
    matches: Sequence[ReconciliationMatch],
    bank_entry_id: str,
    journal_entry_id: str,
) -> List[ReconciliationMatch]:
    """
    Pair a bank line with a journal entry chosen by the user.

    Raises DuplicateMatchError if either id is already matched; the input
    list is never modified.
    """
    matched_bank, matched_journal = matched_ids(matches)
    if bank_entry_id in matched_bank or journal_entry_id in matched_journal:
        raise DuplicateMatchError(bank_entry_id, journal_entry_id)

    match = ReconciliationMatch(
        id=new_match_id(),
        bank_entry_id=bank_entry_id,
        journal_entry_id=journal_entry_id,
        match_date=datetime.now(timezone.utc),
        match_type=MatchType.MANUAL,
        confidence=MANUAL_CONFIDENCE,
    )
    return [*matches, match]


def remove_match(matches: Sequence[ReconciliationMatch], match_id: str) -> List[ReconciliationMatch]:
    remaining = [m for m in matches if m.id != match_id]
    if len(remaining) == len(matches):
        raise MatchNotFoundError(match_id)
    return remaining


def refresh_cleared_flags(
    bank_entries: Sequence[BankStatementEntry],
    matches: Sequence[ReconciliationMatch],
) -> List[BankStatementEntry]:
    """Recompute ``is_cleared`` on every bank line from current matches."""
    matched_bank, _ = matched_ids(matches)
    return [
        entry.model_copy(update={"is_cleared": entry.id in matched_bank})
        for entry in bank_entries
    ]
