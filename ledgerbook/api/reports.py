"""Financial report, chart of accounts and journal validation routes."""
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Query

from ledgerbook.models.reports import (
    AccountLedger,
    BalanceSheet,
    FinancialSummary,
    ProfitAndLoss,
    TrialBalance,
)
from ledgerbook.models.requests import ReportRequest, ValidateEntryRequest
from ledgerbook.services.chart_of_accounts import (
    CHART_OF_ACCOUNTS,
    get_account_hierarchy,
    get_account_options,
)
from ledgerbook.services.financial_calculations import (
    build_balance_sheet,
    build_financial_summary,
    build_ledger,
    build_profit_and_loss,
    build_trial_balance,
)
from ledgerbook.services.validation import check_for_duplicates, validate_journal_entry

router = APIRouter(tags=["Reports"])


@router.post("/reports/ledger", response_model=List[AccountLedger])
def ledger(payload: ReportRequest, account: Optional[str] = Query(None)):
    return build_ledger(payload.journal_entries, payload.opening_balances, account=account)


@router.post("/reports/trial-balance", response_model=TrialBalance)
def trial_balance(payload: ReportRequest):
    return build_trial_balance(payload.journal_entries, payload.opening_balances)


@router.post("/reports/profit-loss", response_model=ProfitAndLoss)
def profit_and_loss(payload: ReportRequest):
    return build_profit_and_loss(payload.journal_entries)


@router.post("/reports/balance-sheet", response_model=BalanceSheet)
def balance_sheet(payload: ReportRequest):
    return build_balance_sheet(payload.journal_entries, payload.opening_balances)


@router.post("/reports/summary", response_model=FinancialSummary)
def financial_summary(payload: ReportRequest):
    return build_financial_summary(payload.journal_entries, payload.opening_balances)


@router.get("/accounts")
def list_accounts() -> Dict[str, Any]:
    """Chart of accounts with hierarchy paths and the postable labels."""
    return {
        "accounts": [
            {
                "code": account.code,
                "name": account.name,
                "type": account.type.value,
                "is_parent": account.is_parent,
                "parent_code": account.parent_code,
                "hierarchy": get_account_hierarchy(account.code),
            }
            for account in CHART_OF_ACCOUNTS
        ],
        "options": get_account_options(),
    }


@router.post("/journal-entries/validate")
def validate_entry(payload: ValidateEntryRequest) -> Dict[str, Any]:
    result = validate_journal_entry(payload.entry).to_dict()
    result["is_duplicate"] = check_for_duplicates(
        payload.existing_entries, payload.entry, payload.current_id
    )
    return result
