"""
Financial report calculations.

Every report is a straight aggregate over journal lines (and, where noted,
opening balances) grouped by account. Account classification uses the
numbering bands of the chart of accounts.
"""
from __future__ import annotations

from collections import OrderedDict
from typing import Dict, List, Optional, Sequence

from ledgerbook.core.config import EPSILON
from ledgerbook.models.journal_entries import JournalEntry, OpeningBalanceEntry
from ledgerbook.models.reports import (
    AccountAmount,
    AccountLedger,
    BalanceSheet,
    FinancialSummary,
    LedgerLine,
    ProfitAndLoss,
    TrialBalance,
    TrialBalanceRow,
)
from ledgerbook.services.chart_of_accounts import (
    CHART_OF_ACCOUNTS,
    AccountType,
    account_code,
    get_account_by_code,
)


def _in_band(account: str, low: int, high: int) -> bool:
    code = account_code(account)
    if not code.isdigit():
        return False
    return low <= int(code) < high


def calculate_account_balance(
    code: str,
    journal_entries: Sequence[JournalEntry],
    opening_balances: Sequence[OpeningBalanceEntry] = (),
) -> float:
    """Debit-positive balance of one chart-of-accounts code."""
    if get_account_by_code(code) is None:
        return 0.0

    opening = sum(e.debit - e.credit for e in opening_balances if e.account_code == code)
    movement = sum(e.debit - e.credit for e in journal_entries if e.account_code == code)
    return opening + movement


def _total_for_type(
    account_type: AccountType,
    journal_entries: Sequence[JournalEntry],
    opening_balances: Sequence[OpeningBalanceEntry],
    credit_normal: bool,
) -> float:
    total = 0.0
    for account in CHART_OF_ACCOUNTS:
        if account.type != account_type or account.is_parent:
            continue
        balance = calculate_account_balance(account.code, journal_entries, opening_balances)
        total += abs(balance) if credit_normal else balance
    return total


def calculate_total_assets(journal_entries, opening_balances=()) -> float:
    return _total_for_type(AccountType.ASSET, journal_entries, opening_balances, credit_normal=False)


def calculate_total_liabilities(journal_entries, opening_balances=()) -> float:
    return _total_for_type(AccountType.LIABILITY, journal_entries, opening_balances, credit_normal=True)


def calculate_total_equity(journal_entries, opening_balances=()) -> float:
    return _total_for_type(AccountType.EQUITY, journal_entries, opening_balances, credit_normal=True)


def calculate_total_revenue(journal_entries, opening_balances=()) -> float:
    return _total_for_type(AccountType.REVENUE, journal_entries, opening_balances, credit_normal=True)


def calculate_total_expenses(journal_entries, opening_balances=()) -> float:
    return _total_for_type(AccountType.EXPENSE, journal_entries, opening_balances, credit_normal=False)


def check_books_balanced(
    total_assets: float,
    total_liabilities: float,
    total_equity: float,
    net_income: float,
) -> bool:
    return abs(total_assets - (total_liabilities + total_equity + net_income)) < EPSILON


def check_opening_balanced(opening_balances: Sequence[OpeningBalanceEntry]) -> bool:
    total_debits = sum(e.debit for e in opening_balances)
    total_credits = sum(e.credit for e in opening_balances)
    return abs(total_debits - total_credits) < EPSILON


def check_journal_balanced(journal_entries: Sequence[JournalEntry]) -> bool:
    total_debits = sum(e.debit for e in journal_entries)
    total_credits = sum(e.credit for e in journal_entries)
    return abs(total_debits - total_credits) < EPSILON


def build_ledger(
    journal_entries: Sequence[JournalEntry],
    opening_balances: Sequence[OpeningBalanceEntry] = (),
    account: Optional[str] = None,
) -> List[AccountLedger]:
    """
    Per-account ledgers with running balances, in date order.

    Accounts appear in order of first use. Opening balances seed each
    account's running balance. Pass ``account`` to build a single ledger.
    """
    openings: Dict[str, float] = {}
    for entry in opening_balances:
        openings[entry.account] = openings.get(entry.account, 0.0) + entry.debit - entry.credit

    grouped: "OrderedDict[str, List[JournalEntry]]" = OrderedDict()
    for name in openings:
        grouped.setdefault(name, [])
    for entry in journal_entries:
        grouped.setdefault(entry.account, []).append(entry)

    ledgers: List[AccountLedger] = []
    for name, entries in grouped.items():
        if account is not None and name != account:
            continue
        balance = openings.get(name, 0.0)
        lines: List[LedgerLine] = []
        # sorted() is stable, so same-day entries keep their input order
        for entry in sorted(entries, key=lambda e: e.date):
            balance += entry.debit - entry.credit
            lines.append(
                LedgerLine(
                    date=entry.date,
                    description=entry.description,
                    reference=entry.reference,
                    debit=entry.debit,
                    credit=entry.credit,
                    balance=balance,
                )
            )
        ledgers.append(
            AccountLedger(
                account=name,
                opening_balance=openings.get(name, 0.0),
                entries=lines,
                closing_balance=balance,
            )
        )
    return ledgers


def build_trial_balance(
    journal_entries: Sequence[JournalEntry],
    opening_balances: Sequence[OpeningBalanceEntry] = (),
) -> TrialBalance:
    totals: "OrderedDict[str, List[float]]" = OrderedDict()
    for entry in list(opening_balances) + list(journal_entries):
        bucket = totals.setdefault(entry.account, [0.0, 0.0])
        bucket[0] += entry.debit
        bucket[1] += entry.credit

    rows = [TrialBalanceRow(account=name, debit=d, credit=c) for name, (d, c) in totals.items()]
    total_debit = sum(r.debit for r in rows)
    total_credit = sum(r.credit for r in rows)
    return TrialBalance(
        rows=rows,
        total_debit=total_debit,
        total_credit=total_credit,
        is_balanced=abs(total_debit - total_credit) < EPSILON,
    )


def _group(entries, predicate, sign) -> List[AccountAmount]:
    amounts: "OrderedDict[str, float]" = OrderedDict()
    for entry in entries:
        if predicate(entry.account):
            amounts[entry.account] = amounts.get(entry.account, 0.0) + sign(entry)
    return [AccountAmount(account=name, amount=value) for name, value in amounts.items()]


def build_profit_and_loss(journal_entries: Sequence[JournalEntry]) -> ProfitAndLoss:
    """Revenue 4000-4999, cost of goods sold 5000-5999, expenses 6000-7999."""
    credit_positive = lambda e: e.credit - e.debit  # noqa: E731
    debit_positive = lambda e: e.debit - e.credit  # noqa: E731

    revenue = _group(journal_entries, lambda a: _in_band(a, 4000, 5000), credit_positive)
    cogs = _group(journal_entries, lambda a: _in_band(a, 5000, 6000), debit_positive)
    expenses = _group(journal_entries, lambda a: _in_band(a, 6000, 8000), debit_positive)

    total_revenue = sum(a.amount for a in revenue)
    total_cogs = sum(a.amount for a in cogs)
    total_expenses = sum(a.amount for a in expenses)
    gross_profit = total_revenue - total_cogs

    return ProfitAndLoss(
        revenue=revenue,
        cost_of_goods_sold=cogs,
        expenses=expenses,
        total_revenue=total_revenue,
        total_cost_of_goods_sold=total_cogs,
        total_expenses=total_expenses,
        gross_profit=gross_profit,
        net_income=gross_profit - total_expenses,
    )


def build_balance_sheet(
    journal_entries: Sequence[JournalEntry],
    opening_balances: Sequence[OpeningBalanceEntry] = (),
) -> BalanceSheet:
    """Assets debit-positive; liabilities and equity credit-positive."""
    entries = list(opening_balances) + list(journal_entries)
    credit_positive = lambda e: e.credit - e.debit  # noqa: E731
    debit_positive = lambda e: e.debit - e.credit  # noqa: E731

    assets = _group(entries, lambda a: _in_band(a, 1000, 2000), debit_positive)
    liabilities = _group(entries, lambda a: _in_band(a, 2000, 3000), credit_positive)
    equity = _group(entries, lambda a: _in_band(a, 3000, 4000), credit_positive)

    total_assets = sum(a.amount for a in assets)
    total_liabilities = sum(a.amount for a in liabilities)
    total_equity = sum(a.amount for a in equity)
    return BalanceSheet(
        assets=assets,
        liabilities=liabilities,
        equity=equity,
        total_assets=total_assets,
        total_liabilities=total_liabilities,
        total_equity=total_equity,
        unclosed_earnings=total_assets - total_liabilities - total_equity,
    )


def build_financial_summary(
    journal_entries: Sequence[JournalEntry],
    opening_balances: Sequence[OpeningBalanceEntry] = (),
) -> FinancialSummary:
    total_assets = calculate_total_assets(journal_entries, opening_balances)
    total_liabilities = calculate_total_liabilities(journal_entries, opening_balances)
    total_equity = calculate_total_equity(journal_entries, opening_balances)
    total_revenue = calculate_total_revenue(journal_entries, opening_balances)
    total_expenses = calculate_total_expenses(journal_entries, opening_balances)
    net_income = total_revenue - total_expenses

    return FinancialSummary(
        total_entries=len(journal_entries),
        total_assets=total_assets,
        total_liabilities=total_liabilities,
        total_equity=total_equity,
        total_revenue=total_revenue,
        total_expenses=total_expenses,
        net_income=net_income,
        is_balanced=check_books_balanced(total_assets, total_liabilities, total_equity, net_income),
        last_entry_date=max((e.date for e in journal_entries), default=None),
        opening_balance_count=len(opening_balances),
        is_opening_balanced=check_opening_balanced(opening_balances),
    )


def format_currency(amount: float) -> str:
    """Render a USD amount, e.g. ``$1,234.50`` or ``-$35.00``."""
    amount = round(amount, 2)
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"
