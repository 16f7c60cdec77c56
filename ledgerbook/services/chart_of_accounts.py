"""
Standard chart of accounts.

Codes follow the usual numbering bands:
1000-1999 assets, 2000-2999 liabilities, 3000-3999 equity,
4000-4999 revenue, 5000-5999 cost of goods sold, 6000-7999 expenses.
Parent accounts group sub-accounts and cannot be posted to.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional


class AccountType(str, Enum):
    ASSET = "Asset"
    LIABILITY = "Liability"
    EQUITY = "Equity"
    REVENUE = "Revenue"
    EXPENSE = "Expense"


@dataclass(frozen=True)
class COAAccount:
    code: str
    name: str
    type: AccountType
    is_parent: bool = False
    parent_code: Optional[str] = None
    description: str = ""

    @property
    def label(self) -> str:
        """Posting label as used on journal lines, e.g. ``1011 - Cash``."""
        return f"{self.code} - {self.name}"


def _acct(code, name, type_, parent=None, is_parent=False, description=""):
    return COAAccount(
        code=code,
        name=name,
        type=type_,
        is_parent=is_parent,
        parent_code=parent,
        description=description,
    )


A, L, E, R, X = (
    AccountType.ASSET,
    AccountType.LIABILITY,
    AccountType.EQUITY,
    AccountType.REVENUE,
    AccountType.EXPENSE,
)

CHART_OF_ACCOUNTS: List[COAAccount] = [
    # Assets
    _acct("1000", "Assets", A, is_parent=True, description="All company assets"),
    _acct("1010", "Current Assets", A, "1000", True, "Assets convertible to cash within one year"),
    _acct("1011", "Cash", A, "1010", description="Cash on hand and in bank"),
    _acct("1012", "Petty Cash", A, "1010", description="Small cash fund for minor expenses"),
    _acct("1020", "Accounts Receivable", A, "1010", description="Money owed by customers"),
    _acct("1030", "Inventory", A, "1010", description="Goods available for sale"),
    _acct("1040", "Prepaid Expenses", A, "1010", description="Expenses paid in advance"),
    _acct("1100", "Fixed Assets", A, "1000", True, "Long-term tangible assets"),
    _acct("1110", "Office Equipment", A, "1100", description="Computers, furniture, machinery"),
    _acct("1120", "Vehicles", A, "1100", description="Company vehicles"),
    _acct("1130", "Buildings", A, "1100", description="Real estate properties"),
    _acct("1140", "Accumulated Depreciation", A, "1100", description="Total depreciation of fixed assets"),
    # Liabilities
    _acct("2000", "Liabilities", L, is_parent=True, description="All company liabilities"),
    _acct("2010", "Current Liabilities", L, "2000", True, "Obligations due within one year"),
    _acct("2011", "Accounts Payable", L, "2010", description="Money owed to suppliers"),
    _acct("2020", "Accrued Expenses", L, "2010", description="Expenses incurred but not yet paid"),
    _acct("2030", "Sales Tax Payable", L, "2010", description="Sales tax collected from customers"),
    _acct("2040", "Payroll Tax Payable", L, "2010", description="Taxes withheld from employee wages"),
    _acct("2100", "Long-term Liabilities", L, "2000", True, "Obligations due after one year"),
    _acct("2110", "Bank Loan", L, "2100", description="Long-term loans from banks"),
    _acct("2120", "Mortgage Payable", L, "2100", description="Real estate mortgages"),
    # Equity
    _acct("3000", "Equity", E, is_parent=True, description="Owner's equity and retained earnings"),
    _acct("3010", "Owner's Capital", E, "3000", description="Initial and additional capital invested"),
    _acct("3020", "Owner's Drawings", E, "3000", description="Money withdrawn by owner"),
    _acct("3030", "Retained Earnings", E, "3000", description="Accumulated profits"),
    # Revenue
    _acct("4000", "Revenue", R, is_parent=True, description="All income sources"),
    _acct("4010", "Service Revenue", R, "4000", description="Income from services provided"),
    _acct("4020", "Product Sales", R, "4000", description="Income from product sales"),
    _acct("4030", "Interest Income", R, "4000", description="Interest earned on investments"),
    _acct("4040", "Other Income", R, "4000", description="Miscellaneous income"),
    # Cost of goods sold
    _acct("5000", "Cost of Goods Sold", X, is_parent=True, description="Direct costs of producing goods/services"),
    _acct("5010", "Materials", X, "5000", description="Raw materials and supplies"),
    _acct("5020", "Direct Labor", X, "5000", description="Wages for production staff"),
    _acct("5030", "Shipping & Delivery", X, "5000", description="Costs to deliver products"),
    # Operating expenses
    _acct("6000", "Operating Expenses", X, is_parent=True, description="Ongoing business expenses"),
    _acct("6100", "Payroll Expenses", X, "6000", True, "All employee-related costs"),
    _acct("6110", "Salaries & Wages", X, "6100", description="Employee compensation"),
    _acct("6120", "Payroll Taxes", X, "6100", description="Employer portion of payroll taxes"),
    _acct("6130", "Employee Benefits", X, "6100", description="Health insurance, retirement plans"),
    _acct("6200", "Facilities Expenses", X, "6000", True, "Office and building costs"),
    _acct("6210", "Rent Expense", X, "6200", description="Office or building rent"),
    _acct("6220", "Utilities", X, "6200", description="Electricity, water, internet"),
    _acct("6230", "Property Tax", X, "6200", description="Real estate taxes"),
    _acct("6240", "Repairs & Maintenance", X, "6200", description="Building maintenance costs"),
    _acct("6300", "Office & Administrative", X, "6000", True, "General office expenses"),
    _acct("6310", "Office Supplies", X, "6300", description="Stationery, printer supplies"),
    _acct("6320", "Software & Subscriptions", X, "6300", description="Software licenses and SaaS"),
    _acct("6330", "Telephone & Internet", X, "6300", description="Communication costs"),
    _acct("6340", "Postage & Shipping", X, "6300", description="Mailing and shipping costs"),
    _acct("6400", "Professional Services", X, "6000", True, "External professional fees"),
    _acct("6410", "Legal Fees", X, "6400", description="Attorney and legal services"),
    _acct("6420", "Accounting Fees", X, "6400", description="Bookkeeping and audit fees"),
    _acct("6430", "Consulting Fees", X, "6400", description="Business consulting services"),
    _acct("6500", "Marketing & Sales", X, "6000", True, "Marketing and advertising costs"),
    _acct("6510", "Advertising", X, "6500", description="Online and offline ads"),
    _acct("6520", "Marketing Materials", X, "6500", description="Brochures, business cards"),
    _acct("6530", "Website & SEO", X, "6500", description="Website hosting and optimization"),
    _acct("6600", "Travel & Entertainment", X, "6000", True, "Business travel costs"),
    _acct("6610", "Travel Expenses", X, "6600", description="Flights, hotels, transportation"),
    _acct("6620", "Meals & Entertainment", X, "6600", description="Business meals and client entertainment"),
    _acct("6900", "Other Operating Expenses", X, "6000", True, "Miscellaneous operating costs"),
    _acct("6910", "Insurance", X, "6900", description="Business insurance premiums"),
    _acct("6920", "Bank Fees", X, "6900", description="Banking service charges"),
    _acct("6930", "Depreciation Expense", X, "6900", description="Asset depreciation"),
    _acct("6940", "Bad Debt Expense", X, "6900", description="Uncollectible accounts"),
    # Other income and expenses
    _acct("7000", "Other Income & Expenses", X, is_parent=True, description="Non-operating items"),
    _acct("7010", "Interest Expense", X, "7000", description="Interest on loans and debt"),
    _acct("7020", "Loss on Asset Disposal", X, "7000", description="Loss from selling assets"),
    _acct("7030", "Gain on Asset Disposal", R, "7000", description="Gain from selling assets"),
]

_BY_CODE = {account.code: account for account in CHART_OF_ACCOUNTS}


def account_code(account: str) -> str:
    """Extract the code from a label such as ``1011 - Cash``."""
    return account.split("-")[0].strip()


def get_account_by_code(code: str) -> Optional[COAAccount]:
    return _BY_CODE.get(code)


def get_account_by_name(name: str) -> Optional[COAAccount]:
    wanted = name.strip().lower()
    for account in CHART_OF_ACCOUNTS:
        if account.name.lower() == wanted:
            return account
    return None


def get_account(label: str) -> Optional[COAAccount]:
    """Resolve a posting label (``1011 - Cash``), a bare code, or a name."""
    return get_account_by_code(account_code(label)) or get_account_by_name(label)


def get_sub_accounts(parent_code: str) -> List[COAAccount]:
    return [account for account in CHART_OF_ACCOUNTS if account.parent_code == parent_code]


def get_account_hierarchy(code: str) -> str:
    """Path from the top-level parent, e.g. ``Assets > Current Assets > Cash``."""
    account = get_account_by_code(code)
    if account is None:
        return ""
    if account.parent_code is None or get_account_by_code(account.parent_code) is None:
        return account.name
    return f"{get_account_hierarchy(account.parent_code)} > {account.name}"


def get_account_options() -> List[str]:
    """Posting labels of all leaf accounts."""
    return [account.label for account in CHART_OF_ACCOUNTS if not account.is_parent]
