"""
Journal entry validation.

Field-level checks run when a user types an entry, before it reaches the
ledger. Errors block the entry; warnings are shown but allowed.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, Iterable, Optional

from ledgerbook.core.config import EPSILON
from ledgerbook.models.journal_entries import JournalEntry
from ledgerbook.models.requests import JournalEntryDraft
from ledgerbook.services.chart_of_accounts import account_code, get_account_by_code

LARGE_AMOUNT = 1_000_000


@dataclass
class ValidationResult:
    is_valid: bool = True
    error: Optional[str] = None
    warning: Optional[str] = None

    def to_dict(self) -> Dict[str, object]:
        result: Dict[str, object] = {"is_valid": self.is_valid}
        if self.error:
            result["error"] = self.error
        if self.warning:
            result["warning"] = self.warning
        return result


@dataclass
class EntryValidation:
    results: Dict[str, ValidationResult] = field(default_factory=dict)

    @property
    def has_error(self) -> bool:
        return any(not r.is_valid for r in self.results.values())

    @property
    def has_warning(self) -> bool:
        return any(r.warning for r in self.results.values())

    def to_dict(self) -> Dict[str, object]:
        return {
            "results": {name: r.to_dict() for name, r in self.results.items()},
            "has_error": self.has_error,
            "has_warning": self.has_warning,
        }


def validate_account(account: str) -> ValidationResult:
    if not account or not account.strip():
        return ValidationResult(False, error="Account is required")

    account_data = get_account_by_code(account_code(account))
    if account_data is None:
        return ValidationResult(False, error="Account not found in chart of accounts")
    if account_data.is_parent:
        return ValidationResult(False, error="Cannot use parent account. Select a sub-account.")
    return ValidationResult()


def validate_amount(amount: float, field_name: str = "Amount") -> ValidationResult:
    if amount < 0:
        return ValidationResult(False, error=f"{field_name} cannot be negative")
    if amount == 0:
        return ValidationResult(warning=f"{field_name} is zero")
    if amount > LARGE_AMOUNT:
        return ValidationResult(warning=f"{field_name} is unusually large")
    return ValidationResult()


def _two_years_before(day: date) -> date:
    try:
        return day.replace(year=day.year - 2)
    except ValueError:
        # Feb 29 in a leap year
        return day.replace(year=day.year - 2, day=28)


def validate_date(value: str, today: Optional[date] = None) -> ValidationResult:
    if not value or not value.strip():
        return ValidationResult(False, error="Date is required")

    try:
        parsed = datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except ValueError:
        return ValidationResult(False, error="Invalid date format")

    today = today or date.today()
    if parsed > today:
        return ValidationResult(False, error="Date cannot be in the future")
    if parsed < _two_years_before(today):
        return ValidationResult(warning="Date is more than 2 years ago")
    return ValidationResult()


def validate_reference(reference: str) -> ValidationResult:
    if not reference or not reference.strip():
        return ValidationResult(warning="Reference is empty")
    return ValidationResult()


def validate_journal_entry(entry: JournalEntryDraft, today: Optional[date] = None) -> EntryValidation:
    """Validate every field of a draft entry plus the one-sided debit/credit rule."""
    validation = EntryValidation(
        results={
            "date": validate_date(entry.date, today=today),
            "account": validate_account(entry.account),
            "debit": validate_amount(entry.debit, "Debit"),
            "credit": validate_amount(entry.credit, "Credit"),
            "reference": validate_reference(entry.reference),
        }
    )

    if entry.debit > 0 and entry.credit > 0:
        validation.results["debit"] = ValidationResult(False, error="Entry cannot have both debit and credit")
    elif entry.debit == 0 and entry.credit == 0:
        validation.results["debit"] = ValidationResult(False, error="Entry must have either debit or credit")

    return validation


def check_for_duplicates(
    entries: Iterable[JournalEntry],
    candidate: JournalEntryDraft,
    current_id: Optional[str] = None,
) -> bool:
    """True when another entry has the same date, account, amounts and description."""
    for entry in entries:
        if entry.id == current_id:
            continue
        if (
            entry.date.isoformat() == candidate.date.strip()
            and entry.account == candidate.account
            and abs(entry.debit - candidate.debit) < EPSILON
            and abs(entry.credit - candidate.credit) < EPSILON
            and entry.description == candidate.description
        ):
            return True
    return False
