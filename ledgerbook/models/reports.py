"""Financial report models."""
import datetime
from typing import List, Optional

from pydantic import Field

from ledgerbook.models.base import LBBaseModel


class LedgerLine(LBBaseModel):
    date: datetime.date
    description: str = ""
    reference: str = ""
    debit: float = 0.0
    credit: float = 0.0
    balance: float


class AccountLedger(LBBaseModel):
    account: str
    opening_balance: float = 0.0
    entries: List[LedgerLine] = Field(default_factory=list)
    closing_balance: float = 0.0


class TrialBalanceRow(LBBaseModel):
    account: str
    debit: float = 0.0
    credit: float = 0.0


class TrialBalance(LBBaseModel):
    rows: List[TrialBalanceRow] = Field(default_factory=list)
    total_debit: float = 0.0
    total_credit: float = 0.0
    is_balanced: bool = True


class AccountAmount(LBBaseModel):
    account: str
    amount: float


class ProfitAndLoss(LBBaseModel):
    revenue: List[AccountAmount] = Field(default_factory=list)
    cost_of_goods_sold: List[AccountAmount] = Field(default_factory=list)
    expenses: List[AccountAmount] = Field(default_factory=list)
    total_revenue: float = 0.0
    total_cost_of_goods_sold: float = 0.0
    total_expenses: float = 0.0
    gross_profit: float = 0.0
    net_income: float = 0.0


class BalanceSheet(LBBaseModel):
    assets: List[AccountAmount] = Field(default_factory=list)
    liabilities: List[AccountAmount] = Field(default_factory=list)
    equity: List[AccountAmount] = Field(default_factory=list)
    total_assets: float = 0.0
    total_liabilities: float = 0.0
    total_equity: float = 0.0
    # Assets minus liabilities and equity; current-period earnings live here
    # until they are closed to retained earnings.
    unclosed_earnings: float = 0.0


class FinancialSummary(LBBaseModel):
    total_entries: int = 0
    total_assets: float = 0.0
    total_liabilities: float = 0.0
    total_equity: float = 0.0
    total_revenue: float = 0.0
    total_expenses: float = 0.0
    net_income: float = 0.0
    is_balanced: bool = True
    last_entry_date: Optional[datetime.date] = None
    opening_balance_count: int = 0
    is_opening_balanced: bool = True
