"""
Tests for the Ledgerbook reconciliation engine

These tests verify matching, discrepancy classification and the
reconciliation summary.
"""

import random
from datetime import date

import pytest

from ledgerbook.core.config import ReconciliationSettings
from ledgerbook.models.journal_entries import JournalEntry
from ledgerbook.models.reconciliation import (
    BankEntryType,
    BankStatementEntry,
    DiscrepancyType,
    MatchType,
    ReconciliationDiscrepancy,
)
from ledgerbook.reconciliation_engine import (
    auto_match_transactions,
    calculate_book_balance,
    calculate_reconciliation_summary,
    classify_bank_entry,
    identify_discrepancies,
)
from ledgerbook.services.errors import ReconciliationError
from ledgerbook.services.matching import add_manual_match
from ledgerbook.services.scoring import MatchScorer

SETTINGS = ReconciliationSettings()


def bank_line(entry_id, day, amount, type_=BankEntryType.DEPOSIT, reference="", description=""):
    inflow = type_ in (BankEntryType.DEPOSIT, BankEntryType.INTEREST)
    return BankStatementEntry(
        id=entry_id,
        date=date(2024, 3, day),
        description=description,
        reference=reference,
        deposit=amount if inflow else 0.0,
        withdrawal=0.0 if inflow else amount,
        type=type_,
    )


def cash_line(entry_id, day, debit=0.0, credit=0.0, reference="", description="", account="1011 - Cash"):
    return JournalEntry(
        id=entry_id,
        date=date(2024, 3, day),
        account=account,
        description=description,
        debit=debit,
        credit=credit,
        reference=reference,
    )


def disc(type_, amount, disc_id="d"):
    return ReconciliationDiscrepancy(id=disc_id, type=type_, amount=amount, needs_adjustment=False)


class TestBookBalance:
    """Tests for the cash-account balance fold."""

    def test_empty_journal(self):
        assert calculate_book_balance([], SETTINGS) == 0.0

    def test_only_cash_account_counts(self):
        entries = [
            cash_line("a", 1, debit=1000),
            cash_line("b", 2, credit=250),
            cash_line("c", 2, debit=999, account="1020 - Accounts Receivable"),
        ]
        assert calculate_book_balance(entries, SETTINGS) == 750.0

    def test_fold_is_order_independent(self):
        entries = [cash_line(f"je-{i}", 1 + i % 28, debit=i * 10.0, credit=(i % 3) * 5.0) for i in range(30)]
        expected = calculate_book_balance(entries, SETTINGS)

        shuffled = list(entries)
        random.Random(7).shuffle(shuffled)
        assert calculate_book_balance(shuffled, SETTINGS) == pytest.approx(expected)

    def test_custom_cash_account(self):
        settings = ReconciliationSettings(cash_account="1012 - Petty Cash")
        entries = [
            cash_line("a", 1, debit=100),
            cash_line("b", 1, debit=40, account="1012 - Petty Cash"),
        ]
        assert calculate_book_balance(entries, settings) == 40.0


class TestMatchScorer:
    """Tests for the 100-point match scoring."""

    def setup_method(self):
        self.scorer = MatchScorer()

    def test_exact_match_scores_100(self):
        bank = bank_line("b1", 5, 1500, reference="DEP001")
        journal = cash_line("j1", 5, debit=1500, reference="DEP001")

        breakdown = self.scorer.score(bank, journal)
        assert breakdown.amount_score == 50.0
        assert breakdown.date_score == 30.0
        assert breakdown.reference_score == 20.0
        assert breakdown.total_score == 100.0
        assert self.scorer.match_type(breakdown) == MatchType.EXACT

    def test_withdrawal_compares_against_credit(self):
        bank = bank_line("b1", 5, 500, type_=BankEntryType.WITHDRAWAL)
        debit_side = cash_line("j1", 5, debit=500)
        credit_side = cash_line("j2", 5, credit=500)

        assert self.scorer.score(bank, debit_side).amount_score == 0.0
        assert self.scorer.score(bank, credit_side).amount_score == 50.0

    def test_amount_within_epsilon(self):
        bank = bank_line("b1", 5, 100.004)
        journal = cash_line("j1", 5, debit=100.0)
        assert self.scorer.score(bank, journal).amount_score == 50.0

    def test_amount_one_cent_off_does_not_score(self):
        bank = bank_line("b1", 5, 100.02)
        journal = cash_line("j1", 5, debit=100.0)
        assert self.scorer.score(bank, journal).amount_score == 0.0

    def test_date_bands(self):
        bank = bank_line("b1", 10, 100)
        assert self.scorer.score(bank, cash_line("j", 11, debit=100)).date_score == 30.0
        assert self.scorer.score(bank, cash_line("j", 7, debit=100)).date_score == 15.0
        assert self.scorer.score(bank, cash_line("j", 14, debit=100)).date_score == 0.0

    def test_reference_containment_is_case_insensitive(self):
        bank = bank_line("b1", 5, 100, reference="DEP001-BATCH")
        journal = cash_line("j1", 5, debit=100, reference="dep001")
        assert self.scorer.score(bank, journal).reference_score == 20.0

    def test_empty_reference_never_scores(self):
        bank = bank_line("b1", 5, 100, reference="DEP001")
        journal = cash_line("j1", 5, debit=100, reference="")
        assert self.scorer.score(bank, journal).reference_score == 0.0

    def test_suggested_below_100(self):
        bank = bank_line("b1", 5, 100, reference="DEP001")
        journal = cash_line("j1", 7, debit=100, reference="DEP001")

        breakdown = self.scorer.score(bank, journal)
        assert breakdown.total_score == 85.0
        assert self.scorer.is_auto_match(breakdown)
        assert self.scorer.match_type(breakdown) == MatchType.SUGGESTED

    def test_breakdown_to_dict(self):
        breakdown = self.scorer.score(bank_line("b1", 5, 100), cash_line("j1", 5, debit=100))
        data = breakdown.to_dict()
        assert data["total_score"] == 80.0
        assert data["reference"]["detail"] == "Reference missing"


class TestAutoMatch:
    """Tests for greedy auto-matching."""

    def test_exact_match_scenario(self):
        bank = [bank_line("bank-1", 5, 1500, reference="DEP001")]
        journal = [cash_line("je-1", 5, debit=1500, reference="DEP001")]

        matches = auto_match_transactions(bank, journal, [], SETTINGS)

        assert len(matches) == 1
        assert matches[0].bank_entry_id == "bank-1"
        assert matches[0].journal_entry_id == "je-1"
        assert matches[0].confidence == 100.0
        assert matches[0].match_type == MatchType.EXACT
        assert matches[0].id.startswith("match_")

    def test_below_threshold_is_not_matched(self):
        # Amount + 2-day window = 65 points
        bank = [bank_line("bank-1", 5, 100)]
        journal = [cash_line("je-1", 7, debit=100)]
        assert auto_match_transactions(bank, journal, [], SETTINGS) == []

    def test_first_fit_wins_over_better_candidate(self):
        bank = [bank_line("bank-1", 5, 100, reference="REF1")]
        journal = [
            cash_line("je-a", 6, debit=100),
            cash_line("je-b", 5, debit=100, reference="REF1"),
        ]

        matches = auto_match_transactions(bank, journal, [], SETTINGS)

        assert len(matches) == 1
        assert matches[0].journal_entry_id == "je-a"
        assert matches[0].confidence == 80.0
        assert matches[0].match_type == MatchType.SUGGESTED

    def test_each_journal_entry_used_once(self):
        bank = [bank_line("bank-1", 5, 100), bank_line("bank-2", 5, 100)]
        journal = [cash_line("je-1", 5, debit=100)]

        matches = auto_match_transactions(bank, journal, [], SETTINGS)
        assert [m.bank_entry_id for m in matches] == ["bank-1"]

    def test_each_bank_line_used_once(self):
        bank = [bank_line("bank-1", 5, 100)]
        journal = [cash_line("je-1", 5, debit=100), cash_line("je-2", 5, debit=100)]

        matches = auto_match_transactions(bank, journal, [], SETTINGS)
        assert [m.journal_entry_id for m in matches] == ["je-1"]

    def test_existing_matches_are_skipped(self):
        bank = [bank_line("bank-1", 5, 100), bank_line("bank-2", 6, 200)]
        journal = [cash_line("je-1", 5, debit=100), cash_line("je-2", 6, debit=200)]
        existing = add_manual_match([], "bank-1", "je-1")

        matches = auto_match_transactions(bank, journal, existing, SETTINGS)

        assert [(m.bank_entry_id, m.journal_entry_id) for m in matches] == [("bank-2", "je-2")]

    def test_non_cash_entries_are_ignored(self):
        bank = [bank_line("bank-1", 5, 100, reference="X1")]
        journal = [cash_line("je-1", 5, debit=100, reference="X1", account="4010 - Service Revenue")]
        assert auto_match_transactions(bank, journal, [], SETTINGS) == []

    def test_threshold_from_settings(self):
        strict = ReconciliationSettings(auto_match_threshold=100)
        bank = [bank_line("bank-1", 5, 100)]
        journal = [cash_line("je-1", 5, debit=100)]
        assert auto_match_transactions(bank, journal, [], strict) == []

    def test_at_most_one_match_per_id(self):
        rng = random.Random(3)
        bank = [bank_line(f"b{i}", rng.randint(1, 28), rng.choice([50, 100, 150])) for i in range(25)]
        journal = [cash_line(f"j{i}", rng.randint(1, 28), debit=rng.choice([50, 100, 150])) for i in range(25)]

        matches = auto_match_transactions(bank, journal, [], SETTINGS)
        bank_ids = [m.bank_entry_id for m in matches]
        journal_ids = [m.journal_entry_id for m in matches]
        assert len(bank_ids) == len(set(bank_ids))
        assert len(journal_ids) == len(set(journal_ids))


class TestIdentifyDiscrepancies:
    """Tests for classifying unmatched items."""

    def test_outstanding_check(self):
        journal = [cash_line("je-5", 28, credit=500, reference="CHK2004", description="Check #2004")]

        result = identify_discrepancies([], journal, [], SETTINGS)

        assert len(result) == 1
        assert result[0].id == "disc-je-5"
        assert result[0].type == DiscrepancyType.OUTSTANDING_CHECK
        assert result[0].amount == 500.0
        assert result[0].needs_adjustment is False
        assert result[0].description == "Check #2004"

    def test_deposit_in_transit(self):
        journal = [cash_line("je-9", 31, debit=1800)]
        result = identify_discrepancies([], journal, [], SETTINGS)
        assert result[0].type == DiscrepancyType.DEPOSIT_IN_TRANSIT
        assert result[0].needs_adjustment is False

    def test_bank_fee(self):
        bank = [bank_line("fee-1", 31, 35, type_=BankEntryType.FEE, reference="FEE001")]

        result = identify_discrepancies(bank, [], [], SETTINGS)

        assert result[0].id == "disc-fee-1"
        assert result[0].type == DiscrepancyType.BANK_FEE
        assert result[0].amount == 35.0
        assert result[0].needs_adjustment is True

    def test_interest_uses_deposit_amount(self):
        bank = [bank_line("int-1", 31, 30, type_=BankEntryType.INTEREST)]
        result = identify_discrepancies(bank, [], [], SETTINGS)
        assert result[0].type == DiscrepancyType.INTEREST
        assert result[0].amount == 30.0

    @pytest.mark.parametrize("description", ["NSF item", "Returned check", "RETURNED DEPOSIT"])
    def test_nsf_keywords(self, description):
        entry = bank_line("w", 20, 1200, type_=BankEntryType.WITHDRAWAL, description=description)
        assert classify_bank_entry(entry) == DiscrepancyType.NSF_CHECK

    def test_fee_type_wins_over_nsf_description(self):
        entry = bank_line("w", 20, 1200, type_=BankEntryType.FEE, description="NSF Return")
        assert classify_bank_entry(entry) == DiscrepancyType.BANK_FEE

    def test_unexplained_withdrawal_defaults_to_bank_fee(self):
        entry = bank_line("w", 20, 80, type_=BankEntryType.WITHDRAWAL, description="ATM")
        assert classify_bank_entry(entry) == DiscrepancyType.BANK_FEE

    def test_zero_amount_entry_is_dropped(self):
        journal = [cash_line("je-zero", 5), cash_line("je-1", 5, credit=10)]
        result = identify_discrepancies([], journal, [], SETTINGS)
        assert [d.id for d in result] == ["disc-je-1"]

    def test_every_item_matched_or_discrepant(self):
        bank = [
            bank_line("b1", 5, 100, reference="R1"),
            bank_line("b2", 9, 35, type_=BankEntryType.FEE),
            bank_line("b3", 12, 20, type_=BankEntryType.INTEREST),
        ]
        journal = [
            cash_line("j1", 5, debit=100, reference="R1"),
            cash_line("j2", 20, credit=75),
            cash_line("j3", 21, debit=60),
            cash_line("j4", 21, debit=60, account="4010 - Service Revenue"),
        ]
        matches = auto_match_transactions(bank, journal, [], SETTINGS)
        discrepancies = identify_discrepancies(bank, journal, matches, SETTINGS)

        matched = {m.bank_entry_id for m in matches} | {m.journal_entry_id for m in matches}
        flagged = [d.id.removeprefix("disc-") for d in discrepancies]
        assert len(flagged) == len(set(flagged))
        assert matched.isdisjoint(flagged)
        assert matched | set(flagged) == {"b1", "b2", "b3", "j1", "j2", "j3"}

    def test_book_items_come_before_bank_items(self):
        bank = [bank_line("b1", 9, 35, type_=BankEntryType.FEE)]
        journal = [cash_line("j1", 20, debit=75), cash_line("j2", 21, credit=60)]
        result = identify_discrepancies(bank, journal, [], SETTINGS)
        assert [d.type for d in result] == [
            DiscrepancyType.OUTSTANDING_CHECK,
            DiscrepancyType.DEPOSIT_IN_TRANSIT,
            DiscrepancyType.BANK_FEE,
        ]


class TestReconciliationSummary:
    """Tests for the adjusted-balance summary."""

    def test_balanced_with_no_discrepancies(self):
        summary = calculate_reconciliation_summary(14300, 14300, [], settings=SETTINGS)
        assert summary.is_balanced is True
        assert summary.difference == 0.0
        assert summary.adjusted_book_balance == 14300
        assert summary.adjusted_bank_balance == 14300

    def test_no_discrepancies_keeps_raw_balances(self):
        summary = calculate_reconciliation_summary(1000, 990, [], settings=SETTINGS)
        assert summary.adjusted_book_balance == 1000
        assert summary.adjusted_bank_balance == 990
        assert summary.difference == pytest.approx(10)
        assert summary.is_balanced is False

    def test_sub_cent_difference_is_balanced(self):
        summary = calculate_reconciliation_summary(100.004, 100.0, [], settings=SETTINGS)
        assert summary.is_balanced is True

    def test_fold(self):
        discrepancies = [
            disc(DiscrepancyType.OUTSTANDING_CHECK, 200),
            disc(DiscrepancyType.DEPOSIT_IN_TRANSIT, 50),
            disc(DiscrepancyType.BANK_FEE, 35),
            disc(DiscrepancyType.NSF_CHECK, 100),
            disc(DiscrepancyType.INTEREST, 10),
        ]
        summary = calculate_reconciliation_summary(1000, 875, discrepancies, settings=SETTINGS)

        assert summary.outstanding_checks == 200
        assert summary.deposits_in_transit == 50
        assert summary.bank_adjustments == -125
        assert summary.book_adjustments == 0
        assert summary.adjusted_book_balance == 725
        assert summary.adjusted_bank_balance == 725
        assert summary.is_balanced is True

    def test_errors_are_not_folded(self):
        discrepancies = [disc(DiscrepancyType.BANK_ERROR, 1200), disc(DiscrepancyType.BOOK_ERROR, 90)]
        summary = calculate_reconciliation_summary(500, 500, discrepancies, settings=SETTINGS)
        assert summary.bank_adjustments == 0
        assert summary.adjusted_book_balance == 500
        assert summary.is_balanced is True

    def test_book_adjustments_keyword(self):
        summary = calculate_reconciliation_summary(1000, 1010, [], book_adjustments=-10, settings=SETTINGS)
        assert summary.book_adjustments == -10
        assert summary.adjusted_bank_balance == 1000
        assert summary.is_balanced is True

    def test_unknown_type_raises(self):
        bogus = ReconciliationDiscrepancy.model_construct(
            id="x", type="mystery", amount=1.0, needs_adjustment=False
        )
        with pytest.raises(ReconciliationError):
            calculate_reconciliation_summary(0, 0, [bogus], settings=SETTINGS)
