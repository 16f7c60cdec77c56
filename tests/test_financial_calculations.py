"""
Tests for financial reports and the chart of accounts.
"""

from datetime import date

import pytest

from ledgerbook.models.journal_entries import JournalEntry, OpeningBalanceEntry
from ledgerbook.services.chart_of_accounts import (
    AccountType,
    account_code,
    get_account,
    get_account_by_code,
    get_account_by_name,
    get_account_hierarchy,
    get_account_options,
    get_sub_accounts,
)
from ledgerbook.services.financial_calculations import (
    build_balance_sheet,
    build_financial_summary,
    build_ledger,
    build_profit_and_loss,
    build_trial_balance,
    calculate_account_balance,
    calculate_total_assets,
    calculate_total_equity,
    calculate_total_expenses,
    calculate_total_liabilities,
    calculate_total_revenue,
    check_books_balanced,
    check_journal_balanced,
    check_opening_balanced,
    format_currency,
)


def entry(entry_id, day, account, debit=0.0, credit=0.0, description=""):
    return JournalEntry(
        id=entry_id,
        date=date(2024, 1, day),
        account=account,
        description=description,
        debit=debit,
        credit=credit,
    )


JOURNAL = [
    entry("je1", 5, "1011 - Cash", debit=1000, description="Consulting invoice paid"),
    entry("je2", 5, "4010 - Service Revenue", credit=1000),
    entry("je3", 10, "6210 - Rent Expense", debit=400),
    entry("je4", 10, "1011 - Cash", credit=400, description="January rent"),
    entry("je5", 12, "5010 - Materials", debit=100),
    entry("je6", 12, "2011 - Accounts Payable", credit=100),
]

OPENING = [
    OpeningBalanceEntry(id="ob1", account="1011 - Cash", debit=5000, date=date(2024, 1, 1)),
    OpeningBalanceEntry(id="ob2", account="3010 - Owner's Capital", credit=5000, date=date(2024, 1, 1)),
]


class TestChartOfAccounts:

    def test_account_code(self):
        assert account_code("1011 - Cash") == "1011"
        assert account_code("6920") == "6920"

    def test_lookups(self):
        assert get_account_by_code("1011").name == "Cash"
        assert get_account_by_name("bank fees").code == "6920"
        assert get_account("4030 - Interest Income").type == AccountType.REVENUE
        assert get_account("Accounts Receivable").code == "1020"
        assert get_account_by_code("9999") is None

    def test_sub_accounts(self):
        codes = [a.code for a in get_sub_accounts("1010")]
        assert codes == ["1011", "1012", "1020", "1030", "1040"]

    def test_hierarchy(self):
        assert get_account_hierarchy("1011") == "Assets > Current Assets > Cash"
        assert get_account_hierarchy("1000") == "Assets"
        assert get_account_hierarchy("0000") == ""

    def test_options_exclude_parents(self):
        options = get_account_options()
        assert "1011 - Cash" in options
        assert "1010 - Current Assets" not in options


class TestBalances:

    def test_account_balance_includes_opening(self):
        assert calculate_account_balance("1011", JOURNAL, OPENING) == 5600
        assert calculate_account_balance("1011", JOURNAL) == 600

    def test_unknown_account_is_zero(self):
        assert calculate_account_balance("9999", JOURNAL, OPENING) == 0.0

    def test_totals_by_type(self):
        assert calculate_total_assets(JOURNAL, OPENING) == 5600
        assert calculate_total_liabilities(JOURNAL, OPENING) == 100
        assert calculate_total_equity(JOURNAL, OPENING) == 5000
        assert calculate_total_revenue(JOURNAL, OPENING) == 1000
        assert calculate_total_expenses(JOURNAL, OPENING) == 500

    def test_books_balanced(self):
        assert check_books_balanced(5600, 100, 5000, 500) is True
        assert check_books_balanced(5600, 100, 5000, 400) is False

    def test_journal_and_opening_checks(self):
        assert check_journal_balanced(JOURNAL) is True
        assert check_journal_balanced(JOURNAL[:1]) is False
        assert check_opening_balanced(OPENING) is True
        assert check_opening_balanced(OPENING[:1]) is False


class TestReports:

    def test_ledger_running_balance(self):
        (cash,) = build_ledger(JOURNAL, OPENING, account="1011 - Cash")

        assert cash.opening_balance == 5000
        assert [line.balance for line in cash.entries] == [6000, 5600]
        assert cash.closing_balance == 5600

    def test_ledger_sorts_by_date(self):
        entries = [entry("late", 20, "1011 - Cash", debit=5), entry("early", 2, "1011 - Cash", debit=10)]
        (cash,) = build_ledger(entries)
        assert [line.debit for line in cash.entries] == [10, 5]
        assert [line.balance for line in cash.entries] == [10, 15]

    def test_ledger_covers_every_account(self):
        accounts = [ledger.account for ledger in build_ledger(JOURNAL, OPENING)]
        assert accounts == [
            "1011 - Cash",
            "3010 - Owner's Capital",
            "4010 - Service Revenue",
            "6210 - Rent Expense",
            "5010 - Materials",
            "2011 - Accounts Payable",
        ]

    def test_trial_balance(self):
        trial = build_trial_balance(JOURNAL, OPENING)

        cash = next(r for r in trial.rows if r.account == "1011 - Cash")
        assert (cash.debit, cash.credit) == (6000, 400)
        assert trial.total_debit == trial.total_credit == 6500
        assert trial.is_balanced is True

    def test_profit_and_loss(self):
        pnl = build_profit_and_loss(JOURNAL)

        assert [(a.account, a.amount) for a in pnl.revenue] == [("4010 - Service Revenue", 1000)]
        assert pnl.total_cost_of_goods_sold == 100
        assert pnl.total_expenses == 400
        assert pnl.gross_profit == 900
        assert pnl.net_income == 500

    def test_balance_sheet(self):
        sheet = build_balance_sheet(JOURNAL, OPENING)

        assert sheet.total_assets == 5600
        assert sheet.total_liabilities == 100
        assert sheet.total_equity == 5000
        assert sheet.unclosed_earnings == 500

    def test_financial_summary(self):
        summary = build_financial_summary(JOURNAL, OPENING)

        assert summary.total_entries == 6
        assert summary.net_income == 500
        assert summary.is_balanced is True
        assert summary.last_entry_date == date(2024, 1, 12)
        assert summary.opening_balance_count == 2
        assert summary.is_opening_balanced is True

    def test_empty_summary(self):
        summary = build_financial_summary([])
        assert summary.last_entry_date is None
        assert summary.is_balanced is True


class TestFormatCurrency:

    @pytest.mark.parametrize(
        "amount,expected",
        [
            (1234.5, "$1,234.50"),
            (-35, "-$35.00"),
            (0, "$0.00"),
            (1000000, "$1,000,000.00"),
            (-0.001, "$0.00"),
        ],
    )
    def test_format(self, amount, expected):
        assert format_currency(amount) == expected
