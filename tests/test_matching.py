"""
Tests for manual match bookkeeping.
"""

from datetime import date

import pytest

from ledgerbook.models.reconciliation import BankEntryType, BankStatementEntry, MatchType
from ledgerbook.services.errors import DuplicateMatchError, ErrorCode, MatchNotFoundError
from ledgerbook.services.matching import add_manual_match, refresh_cleared_flags, remove_match


def bank_line(entry_id, cleared=False):
    return BankStatementEntry(
        id=entry_id,
        date=date(2024, 3, 5),
        deposit=100,
        type=BankEntryType.DEPOSIT,
        is_cleared=cleared,
    )


class TestManualMatch:

    def test_adds_manual_match(self):
        matches = add_manual_match([], "bank-1", "je-1")

        assert len(matches) == 1
        assert matches[0].match_type == MatchType.MANUAL
        assert matches[0].confidence == 100.0
        assert matches[0].bank_entry_id == "bank-1"
        assert matches[0].journal_entry_id == "je-1"

    def test_rejects_matched_bank_entry(self):
        matches = add_manual_match([], "bank-1", "je-1")

        with pytest.raises(DuplicateMatchError) as exc_info:
            add_manual_match(matches, "bank-1", "je-2")

        assert exc_info.value.code == ErrorCode.DUPLICATE_MATCH
        assert exc_info.value.status_code == 409
        assert "already matched" in exc_info.value.message
        assert len(matches) == 1

    def test_rejects_matched_journal_entry(self):
        matches = add_manual_match([], "bank-1", "je-1")
        with pytest.raises(DuplicateMatchError):
            add_manual_match(matches, "bank-2", "je-1")

    def test_input_list_not_mutated(self):
        original = add_manual_match([], "bank-1", "je-1")
        snapshot = list(original)

        updated = add_manual_match(original, "bank-2", "je-2")

        assert original == snapshot
        assert len(updated) == 2


class TestRemoveMatch:

    def test_removes_by_id(self):
        matches = add_manual_match([], "bank-1", "je-1")
        matches = add_manual_match(matches, "bank-2", "je-2")

        remaining = remove_match(matches, matches[0].id)

        assert [m.bank_entry_id for m in remaining] == ["bank-2"]

    def test_unknown_id_raises(self):
        matches = add_manual_match([], "bank-1", "je-1")
        with pytest.raises(MatchNotFoundError) as exc_info:
            remove_match(matches, "match_missing")
        assert exc_info.value.status_code == 404

    def test_unmatched_ids_can_be_rematched(self):
        matches = add_manual_match([], "bank-1", "je-1")
        matches = remove_match(matches, matches[0].id)

        matches = add_manual_match(matches, "bank-1", "je-2")
        assert [(m.bank_entry_id, m.journal_entry_id) for m in matches] == [("bank-1", "je-2")]


class TestClearedFlags:

    def test_flags_follow_matches(self):
        entries = [bank_line("bank-1"), bank_line("bank-2", cleared=True)]
        matches = add_manual_match([], "bank-1", "je-1")

        refreshed = refresh_cleared_flags(entries, matches)

        assert [e.is_cleared for e in refreshed] == [True, False]
        # Originals are untouched
        assert [e.is_cleared for e in entries] == [False, True]

    def test_unmatch_clears_flag(self):
        entries = [bank_line("bank-1")]
        matches = add_manual_match([], "bank-1", "je-1")
        cleared = refresh_cleared_flags(entries, matches)

        unmatched = refresh_cleared_flags(cleared, remove_match(matches, matches[0].id))
        assert unmatched[0].is_cleared is False
