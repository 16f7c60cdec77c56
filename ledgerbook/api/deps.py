"""FastAPI dependencies for Ledgerbook services."""
from ledgerbook.core.config import ReconciliationSettings, get_settings
from ledgerbook.workflows.reconciliation import ReconciliationWorkflow


def get_reconciliation_settings() -> ReconciliationSettings:
    return get_settings()


def get_workflow() -> ReconciliationWorkflow:
    return ReconciliationWorkflow(get_settings())
