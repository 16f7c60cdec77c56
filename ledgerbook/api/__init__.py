from fastapi import APIRouter

from ledgerbook.api.reconciliation import router as reconciliation_router
from ledgerbook.api.reports import router as reports_router

v1_router = APIRouter(prefix="/v1", tags=["v1"])
v1_router.include_router(reconciliation_router)
v1_router.include_router(reports_router)

__all__ = ["v1_router"]
