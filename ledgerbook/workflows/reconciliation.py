"""Reconciliation session workflow orchestration."""
import datetime
import logging
from typing import List, Optional, Sequence, Tuple

from ledgerbook.core.config import ReconciliationSettings, get_settings
from ledgerbook.models.journal_entries import JournalEntry
from ledgerbook.models.reconciliation import (
    AdjustmentResult,
    ReconciliationMatch,
    ReconciliationReport,
    ReconciliationSession,
    SessionStatus,
)
from ledgerbook.reconciliation_engine import (
    auto_match_transactions,
    calculate_book_balance,
    calculate_reconciliation_summary,
    cash_entries,
    identify_discrepancies,
    matched_ids,
)
from ledgerbook.services.errors import (
    AdjustmentNotSupportedError,
    DiscrepancyNotFoundError,
    EntryNotFoundError,
    SessionStateError,
)
from ledgerbook.services.journal_entries import apply_adjustment
from ledgerbook.services.logging import log_reconciliation_run
from ledgerbook.services.matching import add_manual_match, refresh_cleared_flags, remove_match
from ledgerbook.services.metrics import record_reconciliation_run

logger = logging.getLogger(__name__)


class ReconciliationWorkflow:
    """
    Drives one reconciliation session through matching, review and sign-off.

    Sessions are never mutated: every step takes a session snapshot plus the
    period's journal entries and returns an updated copy with matches,
    cleared flags and discrepancies recomputed.
    """

    def __init__(self, settings: ReconciliationSettings | None = None) -> None:
        self.settings = settings or get_settings()

    def auto_match(
        self,
        session: ReconciliationSession,
        journal_entries: Sequence[JournalEntry],
    ) -> Tuple[ReconciliationSession, List[ReconciliationMatch]]:
        self._require_status(session, SessionStatus.IN_PROGRESS, "Only in-progress sessions can be matched")
        new_matches = auto_match_transactions(
            session.bank_statement_entries, journal_entries, session.matches, self.settings
        )
        updated = self._with_matches(session, journal_entries, [*session.matches, *new_matches])
        log_reconciliation_run(
            updated.id, "auto_match", len(updated.matches), len(updated.discrepancies),
            new_matches=len(new_matches),
        )
        return updated, new_matches

    def manual_match(
        self,
        session: ReconciliationSession,
        journal_entries: Sequence[JournalEntry],
        bank_entry_id: str,
        journal_entry_id: str,
    ) -> ReconciliationSession:
        self._require_status(session, SessionStatus.IN_PROGRESS, "Only in-progress sessions can be matched")
        if not any(e.id == bank_entry_id for e in session.bank_statement_entries):
            raise EntryNotFoundError("bank", bank_entry_id)
        if not any(e.id == journal_entry_id for e in cash_entries(journal_entries, self.settings)):
            raise EntryNotFoundError("journal", journal_entry_id)
        matches = add_manual_match(session.matches, bank_entry_id, journal_entry_id)
        updated = self._with_matches(session, journal_entries, matches)
        log_reconciliation_run(updated.id, "manual_match", len(updated.matches), len(updated.discrepancies))
        return updated

    def unmatch(
        self,
        session: ReconciliationSession,
        journal_entries: Sequence[JournalEntry],
        match_id: str,
    ) -> ReconciliationSession:
        self._require_status(session, SessionStatus.IN_PROGRESS, "Only in-progress sessions can be unmatched")
        matches = remove_match(session.matches, match_id)
        updated = self._with_matches(session, journal_entries, matches)
        log_reconciliation_run(updated.id, "unmatch", len(updated.matches), len(updated.discrepancies))
        return updated

    def evaluate(
        self,
        session: ReconciliationSession,
        journal_entries: Sequence[JournalEntry],
    ) -> ReconciliationReport:
        """Book balance, discrepancies and summary for the current matches."""
        # Journal entries are the period's movements on top of the carried-in balance
        book_balance = session.starting_balance + calculate_book_balance(journal_entries, self.settings)
        discrepancies = identify_discrepancies(
            session.bank_statement_entries, journal_entries, session.matches, self.settings
        )
        summary = calculate_reconciliation_summary(
            book_balance, session.ending_balance, discrepancies, settings=self.settings
        )

        matched_bank, matched_journal = matched_ids(session.matches)
        cash = cash_entries(journal_entries, self.settings)
        report = ReconciliationReport(
            book_balance=book_balance,
            discrepancies=discrepancies,
            summary=summary,
            matched_count=len(session.matches),
            unmatched_bank_count=sum(1 for e in session.bank_statement_entries if e.id not in matched_bank),
            unmatched_journal_count=sum(1 for e in cash if e.id not in matched_journal),
        )

        record_reconciliation_run("evaluate", summary.is_balanced)
        log_reconciliation_run(
            session.id, "evaluate", report.matched_count, len(discrepancies),
            is_balanced=summary.is_balanced, difference=round(summary.difference, 2),
        )
        return report

    def adjust(
        self,
        session: ReconciliationSession,
        discrepancy_id: str,
        entry_date: Optional[datetime.date] = None,
    ) -> Tuple[ReconciliationSession, AdjustmentResult]:
        """Create adjustment entries for one discrepancy on the session."""
        self._require_status(session, SessionStatus.IN_PROGRESS, "Only in-progress sessions can be adjusted")
        for index, discrepancy in enumerate(session.discrepancies):
            if discrepancy.id == discrepancy_id:
                break
        else:
            raise DiscrepancyNotFoundError(discrepancy_id)
        if not discrepancy.needs_adjustment:
            raise AdjustmentNotSupportedError(
                discrepancy.type.value, "Timing differences clear on their own and need no entry"
            )

        result = apply_adjustment(discrepancy, entry_date or session.date, self.settings)
        discrepancies = list(session.discrepancies)
        discrepancies[index] = result.discrepancy
        updated = session.model_copy(update={"discrepancies": discrepancies})
        logger.info(
            f"Adjusted {discrepancy_id} on {session.id} with {len(result.journal_entries)} entries"
        )
        return updated, result

    def complete(
        self,
        session: ReconciliationSession,
        journal_entries: Sequence[JournalEntry],
    ) -> ReconciliationSession:
        self._require_status(session, SessionStatus.IN_PROGRESS, "Only in-progress sessions can be completed")
        report = self.evaluate(session, journal_entries)
        if not report.summary.is_balanced:
            raise SessionStateError(
                session.id,
                session.status.value,
                f"Reconciliation is not balanced (difference {report.summary.difference:.2f})",
            )
        updated = session.model_copy(
            update={
                "status": SessionStatus.COMPLETED,
                "discrepancies": report.discrepancies,
                "completed_at": datetime.datetime.now(datetime.timezone.utc),
            }
        )
        record_reconciliation_run("complete", True)
        log_reconciliation_run(
            updated.id, "complete", report.matched_count, len(report.discrepancies), is_balanced=True
        )
        return updated

    def approve(self, session: ReconciliationSession) -> ReconciliationSession:
        self._require_status(session, SessionStatus.COMPLETED, "Only completed sessions can be approved")
        logger.info(f"Approved reconciliation session {session.id}")
        return session.model_copy(update={"status": SessionStatus.APPROVED})

    def _with_matches(
        self,
        session: ReconciliationSession,
        journal_entries: Sequence[JournalEntry],
        matches: List[ReconciliationMatch],
    ) -> ReconciliationSession:
        bank_entries = refresh_cleared_flags(session.bank_statement_entries, matches)
        discrepancies = identify_discrepancies(bank_entries, journal_entries, matches, self.settings)
        return session.model_copy(
            update={
                "bank_statement_entries": bank_entries,
                "matches": matches,
                "discrepancies": discrepancies,
            }
        )

    @staticmethod
    def _require_status(session: ReconciliationSession, expected: SessionStatus, detail: str) -> None:
        if session.status != expected:
            raise SessionStateError(session.id, session.status.value, detail)
