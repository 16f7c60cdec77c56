"""
Reconciliation Engine for Ledgerbook

Compares a bank statement against the cash account of the general ledger.
Uses the 100-point scoring system from services/scoring.py:
- Amount Match: 0 or 50 points
- Date Proximity: 0, 15 or 30 points
- Reference Match: 0 or 20 points

Thresholds:
- Auto-match: 80+ points
- Exact match: 100 points

Matching is greedy first fit: bank lines are visited in statement order and
each takes the first unmatched journal entry that reaches the threshold.
Every function here is pure; callers get new lists back.
"""
import logging
import uuid
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Sequence, Set, Tuple

from ledgerbook.core.config import ReconciliationSettings, get_settings
from ledgerbook.models.journal_entries import JournalEntry
from ledgerbook.models.reconciliation import (
    BankEntryType,
    BankStatementEntry,
    DiscrepancyType,
    ReconciliationDiscrepancy,
    ReconciliationMatch,
    ReconciliationSummary,
)
from ledgerbook.services.errors import ReconciliationError
from ledgerbook.services.scoring import MatchScorer

logger = logging.getLogger(__name__)

NSF_KEYWORDS = ("nsf", "returned")


def new_match_id() -> str:
    return f"match_{uuid.uuid4().hex[:12]}"


def matched_ids(matches: Iterable[ReconciliationMatch]) -> Tuple[Set[str], Set[str]]:
    """Return (bank entry ids, journal entry ids) already covered by a match."""
    bank_ids: Set[str] = set()
    journal_ids: Set[str] = set()
    for match in matches:
        bank_ids.add(match.bank_entry_id)
        journal_ids.add(match.journal_entry_id)
    return bank_ids, journal_ids


def cash_entries(
    journal_entries: Iterable[JournalEntry],
    settings: Optional[ReconciliationSettings] = None,
) -> List[JournalEntry]:
    """Journal lines posted to the reconciled cash account, in input order."""
    settings = settings or get_settings()
    return [e for e in journal_entries if e.account == settings.cash_account]


def calculate_book_balance(
    journal_entries: Iterable[JournalEntry],
    settings: Optional[ReconciliationSettings] = None,
) -> float:
    """Cash balance per the books: sum of debit - credit over cash lines."""
    return sum(
        (e.debit - e.credit for e in cash_entries(journal_entries, settings)),
        0.0,
    )


def auto_match_transactions(
    bank_entries: Sequence[BankStatementEntry],
    journal_entries: Sequence[JournalEntry],
    existing_matches: Sequence[ReconciliationMatch],
    settings: Optional[ReconciliationSettings] = None,
) -> List[ReconciliationMatch]:
    """
    Propose matches for bank lines and cash entries not yet matched.

    Args:
        bank_entries: Statement lines in statement order
        journal_entries: Full journal; non-cash lines are ignored
        existing_matches: Matches already on the session; their ids are skipped

    Returns:
        Only the NEW matches. Callers append them to the existing list.
    """
    settings = settings or get_settings()
    scorer = MatchScorer(auto_match_threshold=settings.auto_match_threshold, epsilon=settings.epsilon)

    matched_bank, matched_journal = matched_ids(existing_matches)
    candidates = [e for e in cash_entries(journal_entries, settings) if e.id not in matched_journal]

    new_matches: List[ReconciliationMatch] = []
    for bank_entry in bank_entries:
        if bank_entry.id in matched_bank:
            continue

        for journal_entry in candidates:
            if journal_entry.id in matched_journal:
                continue

            breakdown = scorer.score(bank_entry, journal_entry)
            if not scorer.is_auto_match(breakdown):
                continue

            match = ReconciliationMatch(
                id=new_match_id(),
                bank_entry_id=bank_entry.id,
                journal_entry_id=journal_entry.id,
                match_date=datetime.now(timezone.utc),
                match_type=scorer.match_type(breakdown),
                confidence=breakdown.total_score,
            )
            new_matches.append(match)
            matched_bank.add(bank_entry.id)
            matched_journal.add(journal_entry.id)
            logger.debug(
                f"Matched {bank_entry.id} -> {journal_entry.id} "
                f"({breakdown.total_score:.0f} pts: {breakdown.amount_detail}; "
                f"{breakdown.date_detail}; {breakdown.reference_detail})"
            )
            break

    return new_matches


def classify_bank_entry(entry: BankStatementEntry) -> DiscrepancyType:
    """Discrepancy type for a bank line that has no journal counterpart."""
    if entry.type == BankEntryType.FEE:
        return DiscrepancyType.BANK_FEE
    if entry.type == BankEntryType.INTEREST:
        return DiscrepancyType.INTEREST
    description = entry.description.lower()
    if any(keyword in description for keyword in NSF_KEYWORDS):
        return DiscrepancyType.NSF_CHECK
    # Unexplained bank-side movement defaults to a fee the books must absorb
    return DiscrepancyType.BANK_FEE


def identify_discrepancies(
    bank_entries: Sequence[BankStatementEntry],
    journal_entries: Sequence[JournalEntry],
    matches: Sequence[ReconciliationMatch],
    settings: Optional[ReconciliationSettings] = None,
) -> List[ReconciliationDiscrepancy]:
    """
    Classify every unmatched item on either side.

    Book side: credits are outstanding checks, debits are deposits in
    transit; both clear on their own. Bank side: fees, interest and NSF
    returns, which need an adjusting entry in the books.
    """
    matched_bank, matched_journal = matched_ids(matches)
    unmatched_cash = [e for e in cash_entries(journal_entries, settings) if e.id not in matched_journal]

    discrepancies: List[ReconciliationDiscrepancy] = []

    for entry in unmatched_cash:
        if entry.credit > 0:
            discrepancies.append(
                ReconciliationDiscrepancy(
                    id=f"disc-{entry.id}",
                    type=DiscrepancyType.OUTSTANDING_CHECK,
                    amount=entry.credit,
                    description=entry.description,
                    reference=entry.reference,
                    needs_adjustment=False,
                )
            )

    for entry in unmatched_cash:
        if entry.debit > 0:
            discrepancies.append(
                ReconciliationDiscrepancy(
                    id=f"disc-{entry.id}",
                    type=DiscrepancyType.DEPOSIT_IN_TRANSIT,
                    amount=entry.debit,
                    description=entry.description,
                    reference=entry.reference,
                    needs_adjustment=False,
                )
            )
        elif entry.credit == 0:
            logger.debug(f"Skipping zero-amount journal entry {entry.id}")

    for entry in bank_entries:
        if entry.id in matched_bank:
            continue
        discrepancies.append(
            ReconciliationDiscrepancy(
                id=f"disc-{entry.id}",
                type=classify_bank_entry(entry),
                amount=entry.withdrawal if entry.withdrawal > 0 else entry.deposit,
                description=entry.description,
                reference=entry.reference,
                needs_adjustment=True,
            )
        )

    return discrepancies


def calculate_reconciliation_summary(
    book_balance: float,
    bank_statement_balance: float,
    discrepancies: Iterable[ReconciliationDiscrepancy],
    book_adjustments: float = 0.0,
    settings: Optional[ReconciliationSettings] = None,
) -> ReconciliationSummary:
    """
    Fold discrepancies into adjusted book and bank balances.

    adjusted_book = book + deposits_in_transit - outstanding_checks + bank_adjustments
    adjusted_bank = bank + deposits_in_transit - outstanding_checks + book_adjustments

    Bank and book errors are informational and are not folded.
    """
    settings = settings or get_settings()

    outstanding_checks = 0.0
    deposits_in_transit = 0.0
    bank_adjustments = 0.0

    for disc in discrepancies:
        if disc.type == DiscrepancyType.OUTSTANDING_CHECK:
            outstanding_checks += disc.amount
        elif disc.type == DiscrepancyType.DEPOSIT_IN_TRANSIT:
            deposits_in_transit += disc.amount
        elif disc.type in (DiscrepancyType.BANK_FEE, DiscrepancyType.NSF_CHECK):
            bank_adjustments -= disc.amount
        elif disc.type == DiscrepancyType.INTEREST:
            bank_adjustments += disc.amount
        elif disc.type in (DiscrepancyType.BANK_ERROR, DiscrepancyType.BOOK_ERROR):
            continue
        else:
            raise ReconciliationError("summary", f"Unhandled discrepancy type: {disc.type}")

    adjusted_book_balance = book_balance + deposits_in_transit - outstanding_checks + bank_adjustments
    adjusted_bank_balance = bank_statement_balance + deposits_in_transit - outstanding_checks + book_adjustments
    difference = abs(adjusted_book_balance - adjusted_bank_balance)

    return ReconciliationSummary(
        book_balance=book_balance,
        bank_balance=bank_statement_balance,
        outstanding_checks=outstanding_checks,
        deposits_in_transit=deposits_in_transit,
        bank_adjustments=bank_adjustments,
        book_adjustments=book_adjustments,
        adjusted_book_balance=adjusted_book_balance,
        adjusted_bank_balance=adjusted_bank_balance,
        difference=difference,
        is_balanced=difference < settings.epsilon,
    )
