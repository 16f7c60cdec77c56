"""
Match confidence scoring for bank-to-book reconciliation.

Implements the 100-point scoring system:
- Amount Match: 0 or 50 points
- Date Proximity: 0, 15 or 30 points
- Reference Match: 0 or 20 points

Auto-match threshold: 80+ points
Exact match: 100 points
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Optional, Tuple

from ledgerbook.core.config import EPSILON
from ledgerbook.models.journal_entries import JournalEntry
from ledgerbook.models.reconciliation import BankStatementEntry, MatchType


@dataclass
class ScoreBreakdown:
    """Detailed breakdown of match score components."""
    amount_score: float = 0.0
    date_score: float = 0.0
    reference_score: float = 0.0

    amount_detail: str = ""
    date_detail: str = ""
    reference_detail: str = ""

    @property
    def total_score(self) -> float:
        """Total score capped at 100."""
        return min(100.0, self.amount_score + self.date_score + self.reference_score)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_score": self.total_score,
            "amount": {"score": self.amount_score, "detail": self.amount_detail},
            "date": {"score": self.date_score, "detail": self.date_detail},
            "reference": {"score": self.reference_score, "detail": self.reference_detail},
        }


class MatchScorer:
    """
    Scores a bank statement line against a cash journal entry.

    Thresholds:
    - auto_match_threshold (80): accept the pair automatically
    - EXACT_SCORE (100): every factor agreed, recorded as an exact match
    """

    AMOUNT_POINTS = 50.0
    NEAR_DATE_POINTS = 30.0
    WINDOW_DATE_POINTS = 15.0
    REFERENCE_POINTS = 20.0

    NEAR_DATE_DAYS = 1
    WINDOW_DATE_DAYS = 3

    AUTO_MATCH_THRESHOLD = 80.0
    EXACT_SCORE = 100.0

    def __init__(self, auto_match_threshold: Optional[float] = None, epsilon: float = EPSILON):
        self.auto_match_threshold = (
            self.AUTO_MATCH_THRESHOLD if auto_match_threshold is None else auto_match_threshold
        )
        self.epsilon = epsilon

    def score(self, bank_entry: BankStatementEntry, journal_entry: JournalEntry) -> ScoreBreakdown:
        breakdown = ScoreBreakdown()

        # Deposits increase cash (debit), withdrawals decrease cash (credit)
        is_deposit = bank_entry.deposit > 0
        journal_amount = journal_entry.debit if is_deposit else journal_entry.credit
        breakdown.amount_score, breakdown.amount_detail = self._score_amount(
            bank_entry.amount, journal_amount
        )
        breakdown.date_score, breakdown.date_detail = self._score_date(
            bank_entry.date, journal_entry.date
        )
        breakdown.reference_score, breakdown.reference_detail = self._score_reference(
            bank_entry.reference, journal_entry.reference
        )
        return breakdown

    def is_auto_match(self, breakdown: ScoreBreakdown) -> bool:
        return breakdown.total_score >= self.auto_match_threshold

    def match_type(self, breakdown: ScoreBreakdown) -> MatchType:
        if breakdown.total_score == self.EXACT_SCORE:
            return MatchType.EXACT
        return MatchType.SUGGESTED

    def _score_amount(self, bank_amount: float, journal_amount: float) -> Tuple[float, str]:
        diff = abs(bank_amount - journal_amount)
        if diff < self.epsilon:
            return self.AMOUNT_POINTS, "Amounts agree"
        return 0.0, f"Amounts differ by {diff:.2f}"

    def _score_date(self, bank_date: date, journal_date: date) -> Tuple[float, str]:
        days = abs((bank_date - journal_date).days)
        if days <= self.NEAR_DATE_DAYS:
            return self.NEAR_DATE_POINTS, "Same day" if days == 0 else "1 day apart"
        if days <= self.WINDOW_DATE_DAYS:
            return self.WINDOW_DATE_POINTS, f"{days} days apart"
        return 0.0, f"{days} days apart, outside the {self.WINDOW_DATE_DAYS}-day window"

    def _score_reference(self, bank_ref: str, journal_ref: str) -> Tuple[float, str]:
        bank_ref = (bank_ref or "").strip()
        journal_ref = (journal_ref or "").strip()
        if not bank_ref or not journal_ref:
            return 0.0, "Reference missing"
        if journal_ref.lower() in bank_ref.lower():
            return self.REFERENCE_POINTS, f"Bank reference contains '{journal_ref}'"
        return 0.0, "References differ"
