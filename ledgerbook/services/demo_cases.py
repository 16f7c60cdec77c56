"""
Demo reconciliation cases.

Seven teaching scenarios for March 2024, each a bank statement plus the
cash journal entries the books recorded for the same period. The journal
entries are period movements only; the session's starting balance is the
reconciled cash position carried in from February.
"""
from __future__ import annotations

import datetime
from typing import Dict, List, Tuple

from ledgerbook.core.config import CASH_ACCOUNT
from ledgerbook.models.journal_entries import JournalEntry
from ledgerbook.models.reconciliation import (
    BankEntryType,
    BankStatementEntry,
    DemoCase,
    DemoCaseType,
    ReconciliationSession,
)
from ledgerbook.services.errors import DemoCaseNotFoundError

STATEMENT_DATE = datetime.date(2024, 3, 31)

DEPOSIT = BankEntryType.DEPOSIT
WITHDRAWAL = BankEntryType.WITHDRAWAL
FEE = BankEntryType.FEE
INTEREST = BankEntryType.INTEREST


def _day(day: int) -> datetime.date:
    return datetime.date(2024, 3, day)


def _bank(entry_id, day, description, reference, amount, balance, type_) -> BankStatementEntry:
    # Deposits and interest credit the account; everything else debits it
    inflow = type_ in (DEPOSIT, INTEREST)
    return BankStatementEntry(
        id=entry_id,
        date=_day(day),
        description=description,
        reference=reference,
        withdrawal=0.0 if inflow else amount,
        deposit=amount if inflow else 0.0,
        balance=balance,
        type=type_,
    )


def _cash(entry_id, day, description, reference, debit=0.0, credit=0.0) -> JournalEntry:
    return JournalEntry(
        id=entry_id,
        date=_day(day),
        account=CASH_ACCOUNT,
        description=description,
        debit=debit,
        credit=credit,
        reference=reference,
    )


# (case type, name, description, learning objective, starting balance, ending balance, notes)
_CASE_INFO: List[Tuple[DemoCaseType, str, str, str, float, float, str]] = [
    (
        DemoCaseType.PERFECT,
        "Case 1: Perfect Reconciliation",
        "All transactions match perfectly between books and bank statement.",
        "Learn the basic reconciliation process when everything matches.",
        10000, 12500,
        "",
    ),
    (
        DemoCaseType.OUTSTANDING_CHECKS,
        "Case 2: Outstanding Checks",
        "Company wrote checks that haven't cleared the bank yet.",
        "Understand timing differences - outstanding checks reduce book balance but not bank balance yet.",
        15000, 14300,
        "Checks #2004 and #2005 written but not yet cleared.",
    ),
    (
        DemoCaseType.DEPOSITS_IN_TRANSIT,
        "Case 3: Deposits in Transit",
        "Deposits recorded in books but not yet processed by bank.",
        "Recognize deposits in transit - recorded by company but bank hasn't processed yet.",
        8000, 9500,
        "Deposit of $2,000 made on March 31 but not yet on bank statement.",
    ),
    (
        DemoCaseType.BANK_FEES,
        "Case 4: Bank Fees & Interest",
        "Bank charged fees and credited interest that aren't in books yet.",
        "Learn to identify and record bank-initiated adjustments (fees and interest).",
        5000, 6935,
        "Bank fees and interest not yet recorded in books.",
    ),
    (
        DemoCaseType.NSF_CHECK,
        "Case 5: NSF (Bad) Check",
        "Customer check was returned due to insufficient funds.",
        "Handle returned checks - requires adjustment to accounts receivable.",
        10000, 8750,
        "Customer check bounced - needs adjustment.",
    ),
    (
        DemoCaseType.BANK_ERROR,
        "Case 6: Bank Error",
        "Bank incorrectly processed a check twice.",
        "Identify bank errors - contact bank for correction, no book adjustment needed.",
        12000, 11050,
        "Bank processed Check #4001 twice - this is a bank error.",
    ),
    (
        DemoCaseType.COMPLEX,
        "Case 7: Complex Reconciliation",
        "Real-world scenario with multiple types of discrepancies.",
        "Apply all reconciliation concepts together in a complex situation.",
        15000, 14815,
        "Complex scenario: outstanding checks, deposits in transit, multiple bank fees, and interest.",
    ),
]


def _statement_lines() -> Dict[str, List[BankStatementEntry]]:
    return {
        "demo-case-1": [
            _bank("bank-1-1", 5, "Customer Payment - Invoice 1001", "DEP001", 1500, 11500, DEPOSIT),
            _bank("bank-1-2", 10, "Check #1001 - Office Supplies", "CHK1001", 500, 11000, WITHDRAWAL),
            _bank("bank-1-3", 15, "Customer Payment - Invoice 1002", "DEP002", 2000, 13000, DEPOSIT),
            _bank("bank-1-4", 20, "Check #1002 - Rent Payment", "CHK1002", 1200, 11800, WITHDRAWAL),
            _bank("bank-1-5", 25, "Customer Payment - Invoice 1003", "DEP003", 700, 12500, DEPOSIT),
        ],
        "demo-case-2": [
            _bank("bank-2-1", 10, "Customer Payment", "DEP001", 2000, 17000, DEPOSIT),
            _bank("bank-2-2", 15, "Check #2001 - Utilities", "CHK2001", 300, 16700, WITHDRAWAL),
            _bank("bank-2-3", 20, "Check #2002 - Insurance", "CHK2002", 900, 15800, WITHDRAWAL),
            _bank("bank-2-4", 25, "Check #2003 - Supplies", "CHK2003", 1500, 14300, WITHDRAWAL),
        ],
        "demo-case-3": [
            _bank("bank-3-1", 8, "Customer Payment - ABC Corp", "DEP001", 1500, 9500, DEPOSIT),
        ],
        "demo-case-4": [
            _bank("bank-4-1", 15, "Customer Payment", "DEP001", 2000, 7000, DEPOSIT),
            _bank("bank-4-2", 31, "Monthly Maintenance Fee", "FEE001", 35, 6965, FEE),
            _bank("bank-4-3", 31, "Interest Income", "INT001", 30, 6995, INTEREST),
            _bank("bank-4-4", 28, "Wire Transfer Fee", "FEE002", 25, 6970, FEE),
            _bank("bank-4-5", 29, "Overdraft Protection Fee", "FEE003", 35, 6935, FEE),
        ],
        "demo-case-5": [
            _bank("bank-5-1", 10, "Customer Payment - XYZ Inc", "DEP001", 1200, 11200, DEPOSIT),
            _bank("bank-5-2", 15, "Check #3001 - Vendor Payment", "CHK3001", 500, 10700, WITHDRAWAL),
            # The bank reports the returned check as a fee line
            _bank("bank-5-3", 20, "NSF Return - XYZ Inc Check", "NSF001", 1200, 9500, FEE),
            _bank("bank-5-4", 20, "NSF Fee", "FEE001", 35, 9465, FEE),
            _bank("bank-5-5", 25, "Customer Payment - ABC Corp", "DEP002", 2500, 11965, DEPOSIT),
            _bank("bank-5-6", 30, "Check #3002 - Payroll", "CHK3002", 3215, 8750, WITHDRAWAL),
        ],
        "demo-case-6": [
            _bank("bank-6-1", 12, "Check #4001 - Office Rent", "CHK4001", 1200, 10800, WITHDRAWAL),
            _bank("bank-6-2", 12, "Check #4001 - Office Rent (DUPLICATE)", "CHK4001", 1200, 9600, WITHDRAWAL),
            _bank("bank-6-3", 20, "Customer Payment", "DEP001", 3500, 13100, DEPOSIT),
            _bank("bank-6-4", 28, "Check #4002 - Utilities", "CHK4002", 250, 12850, WITHDRAWAL),
            _bank("bank-6-5", 30, "ATM Withdrawal", "ATM001", 1800, 11050, WITHDRAWAL),
        ],
        "demo-case-7": [
            _bank("bank-7-1", 5, "Customer Payment - Corp A", "DEP001", 5000, 20000, DEPOSIT),
            _bank("bank-7-2", 10, "Check #5001 - Vendor Payment", "CHK5001", 2500, 17500, WITHDRAWAL),
            _bank("bank-7-3", 15, "Check #5002 - Equipment", "CHK5002", 1200, 16300, WITHDRAWAL),
            _bank("bank-7-4", 20, "Customer Payment - Corp B", "DEP002", 3500, 19800, DEPOSIT),
            _bank("bank-7-5", 25, "Check #5003 - Payroll", "CHK5003", 4800, 15000, WITHDRAWAL),
            _bank("bank-7-6", 31, "Monthly Service Fee", "FEE001", 35, 14965, FEE),
            _bank("bank-7-7", 31, "Interest Income", "INT001", 50, 15015, INTEREST),
            _bank("bank-7-8", 28, "Wire Transfer Fee", "FEE002", 25, 14990, FEE),
            _bank("bank-7-9", 29, "Check Printing Fee", "FEE003", 15, 14975, FEE),
            _bank("bank-7-10", 30, "ATM Fee", "FEE004", 10, 14965, FEE),
            _bank("bank-7-11", 22, "Check #5004 - Marketing", "CHK5004", 150, 14815, WITHDRAWAL),
        ],
    }


def _journal_lines() -> Dict[str, List[JournalEntry]]:
    return {
        "demo-case-1": [
            _cash("je-1-1", 5, "Customer Payment - Invoice 1001", "DEP001", debit=1500),
            _cash("je-1-2", 10, "Check #1001 - Office Supplies", "CHK1001", credit=500),
            _cash("je-1-3", 15, "Customer Payment - Invoice 1002", "DEP002", debit=2000),
            _cash("je-1-4", 20, "Check #1002 - Rent Payment", "CHK1002", credit=1200),
            _cash("je-1-5", 25, "Customer Payment - Invoice 1003", "DEP003", debit=700),
        ],
        "demo-case-2": [
            _cash("je-2-1", 10, "Customer Payment", "DEP001", debit=2000),
            _cash("je-2-2", 15, "Check #2001 - Utilities", "CHK2001", credit=300),
            _cash("je-2-3", 20, "Check #2002 - Insurance", "CHK2002", credit=900),
            _cash("je-2-4", 25, "Check #2003 - Supplies", "CHK2003", credit=1500),
            _cash("je-2-5", 28, "Check #2004 - Marketing (Outstanding)", "CHK2004", credit=500),
            _cash("je-2-6", 30, "Check #2005 - Consulting Fees (Outstanding)", "CHK2005", credit=800),
        ],
        "demo-case-3": [
            _cash("je-3-1", 8, "Customer Payment - ABC Corp", "DEP001", debit=1500),
            _cash("je-3-2", 31, "End of Month Deposit (In Transit)", "DEP002", debit=2000),
        ],
        "demo-case-4": [
            _cash("je-4-1", 15, "Customer Payment", "DEP001", debit=2000),
        ],
        "demo-case-5": [
            _cash("je-5-1", 10, "Customer Payment - XYZ Inc", "DEP001", debit=1200),
            _cash("je-5-2", 15, "Check #3001 - Vendor Payment", "CHK3001", credit=500),
            _cash("je-5-3", 25, "Customer Payment - ABC Corp", "DEP002", debit=2500),
            _cash("je-5-4", 30, "Check #3002 - Payroll", "CHK3002", credit=3215),
        ],
        "demo-case-6": [
            _cash("je-6-1", 12, "Check #4001 - Office Rent", "CHK4001", credit=1200),
            _cash("je-6-2", 20, "Customer Payment", "DEP001", debit=3500),
            _cash("je-6-3", 28, "Check #4002 - Utilities", "CHK4002", credit=250),
            _cash("je-6-4", 30, "ATM Withdrawal", "ATM001", credit=1800),
        ],
        "demo-case-7": [
            _cash("je-7-1", 5, "Customer Payment - Corp A", "DEP001", debit=5000),
            _cash("je-7-2", 10, "Check #5001 - Vendor Payment", "CHK5001", credit=2500),
            _cash("je-7-3", 15, "Check #5002 - Equipment", "CHK5002", credit=1200),
            _cash("je-7-4", 20, "Customer Payment - Corp B", "DEP002", debit=3500),
            _cash("je-7-5", 25, "Check #5003 - Payroll", "CHK5003", credit=4800),
            _cash("je-7-6", 22, "Check #5004 - Marketing", "CHK5004", credit=150),
            _cash("je-7-7", 28, "Check #5005 - Office Supplies (Outstanding)", "CHK5005", credit=450),
            _cash("je-7-8", 30, "Check #5006 - Professional Fees (Outstanding)", "CHK5006", credit=750),
            _cash("je-7-9", 31, "Late Day Deposit (In Transit)", "DEP003", debit=1800),
        ],
    }


def generate_demo_cases() -> List[DemoCase]:
    """Build fresh copies of all seven demo cases, in teaching order."""
    statements = _statement_lines()
    cases = []
    for number, (case_type, name, description, objective, start, end, notes) in enumerate(_CASE_INFO, 1):
        session_id = f"demo-case-{number}"
        session = ReconciliationSession(
            id=session_id,
            date=STATEMENT_DATE,
            month="March",
            year="2024",
            starting_balance=start,
            ending_balance=end,
            bank_statement_entries=statements[session_id],
            notes=notes,
        )
        cases.append(
            DemoCase(
                id=case_type,
                name=name,
                description=description,
                learning_objective=objective,
                session=session,
            )
        )
    return cases


def get_demo_case(case_id: str) -> DemoCase:
    """Look up a case by its type (``nsf_check``) or session id (``demo-case-5``)."""
    for case in generate_demo_cases():
        if case.id.value == case_id or case.session.id == case_id:
            return case
    raise DemoCaseNotFoundError(case_id)


def get_demo_case_journal_entries(session_id: str) -> List[JournalEntry]:
    """Cash journal entries for a demo session; unknown ids yield an empty list."""
    return _journal_lines().get(session_id, [])
