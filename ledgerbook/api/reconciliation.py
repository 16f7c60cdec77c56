"""Bank reconciliation API routes."""
from typing import List

from fastapi import APIRouter, Depends

from ledgerbook.api.deps import get_reconciliation_settings, get_workflow
from ledgerbook.core.config import ReconciliationSettings
from ledgerbook.models.reconciliation import (
    AdjustmentResult,
    DemoCase,
    ReconciliationReport,
    ReconciliationSession,
)
from ledgerbook.models.requests import (
    AdjustmentRequest,
    AutoMatchResponse,
    BookBalanceResponse,
    DemoCaseDetail,
    JournalEntriesRequest,
    ManualMatchRequest,
    SessionRequest,
    UnmatchRequest,
)
from ledgerbook.reconciliation_engine import calculate_book_balance
from ledgerbook.services.demo_cases import (
    generate_demo_cases,
    get_demo_case,
    get_demo_case_journal_entries,
)
from ledgerbook.services.financial_calculations import format_currency
from ledgerbook.services.journal_entries import apply_adjustment
from ledgerbook.workflows.reconciliation import ReconciliationWorkflow

router = APIRouter(prefix="/reconciliation", tags=["Reconciliation"])


@router.get("/demo-cases", response_model=List[DemoCase])
def list_demo_cases():
    return generate_demo_cases()


@router.get("/demo-cases/{case_id}", response_model=DemoCaseDetail)
def demo_case_detail(case_id: str):
    case = get_demo_case(case_id)
    return DemoCaseDetail(case=case, journal_entries=get_demo_case_journal_entries(case.session.id))


@router.post("/book-balance", response_model=BookBalanceResponse)
def book_balance(
    payload: JournalEntriesRequest,
    settings: ReconciliationSettings = Depends(get_reconciliation_settings),
):
    balance = calculate_book_balance(payload.journal_entries, settings)
    return BookBalanceResponse(book_balance=balance, formatted=format_currency(balance))


@router.post("/auto-match", response_model=AutoMatchResponse)
def auto_match(payload: SessionRequest, workflow: ReconciliationWorkflow = Depends(get_workflow)):
    session, new_matches = workflow.auto_match(payload.session, payload.journal_entries)
    return AutoMatchResponse(session=session, new_matches=new_matches)


@router.post("/manual-match", response_model=ReconciliationSession)
def manual_match(payload: ManualMatchRequest, workflow: ReconciliationWorkflow = Depends(get_workflow)):
    return workflow.manual_match(
        payload.session,
        payload.journal_entries,
        payload.bank_entry_id,
        payload.journal_entry_id,
    )


@router.post("/unmatch", response_model=ReconciliationSession)
def unmatch(payload: UnmatchRequest, workflow: ReconciliationWorkflow = Depends(get_workflow)):
    return workflow.unmatch(payload.session, payload.journal_entries, payload.match_id)


@router.post("/evaluate", response_model=ReconciliationReport)
def evaluate(payload: SessionRequest, workflow: ReconciliationWorkflow = Depends(get_workflow)):
    return workflow.evaluate(payload.session, payload.journal_entries)


@router.post("/adjustments", response_model=AdjustmentResult)
def create_adjustment(
    payload: AdjustmentRequest,
    settings: ReconciliationSettings = Depends(get_reconciliation_settings),
):
    return apply_adjustment(payload.discrepancy, payload.entry_date, settings)


@router.post("/complete", response_model=ReconciliationSession)
def complete(payload: SessionRequest, workflow: ReconciliationWorkflow = Depends(get_workflow)):
    return workflow.complete(payload.session, payload.journal_entries)


@router.post("/approve", response_model=ReconciliationSession)
def approve(payload: SessionRequest, workflow: ReconciliationWorkflow = Depends(get_workflow)):
    return workflow.approve(payload.session)
