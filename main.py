"""
Ledgerbook - FastAPI Backend

Double-entry bookkeeping reports and bank reconciliation.

Run Instructions:
-----------------
1. Install dependencies:
   pip install -e ".[test]"

2. Run the app locally with uvicorn:
   uvicorn main:app --host 0.0.0.0 --port 8000 --reload

3. Test /health endpoint:
   curl http://localhost:8000/health

4. Load a demo case and auto-match it:
   curl http://localhost:8000/v1/reconciliation/demo-cases/perfect
"""
import time
import uuid

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from ledgerbook import __version__
from ledgerbook.api import v1_router
from ledgerbook.core.config import get_settings
from ledgerbook.services.errors import LedgerbookError
from ledgerbook.services.logging import log_error, log_request, logger
from ledgerbook.services.metrics import get_metrics, record_error, record_request

app = FastAPI(
    title="Ledgerbook API",
    description="""
    Ledgerbook API v1 - Bookkeeping & Bank Reconciliation

    ## Bank Reconciliation
    - Auto-match bank statement lines to cash journal entries (100-point scoring)
    - Manual match / unmatch
    - Discrepancy classification: outstanding checks, deposits in transit,
      bank fees, interest, NSF checks
    - Reconciliation summary and balanced-entry adjustments
    - Session sign-off: in-progress, completed, approved

    ## Reports
    - Ledger with running balances, trial balance
    - Profit & loss, balance sheet, financial summary

    All endpoints are stateless: the caller sends the session and journal
    entries with each request and stores what comes back.
    """,
    version=__version__,
)

app.include_router(v1_router)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log requests and record metrics."""

    async def dispatch(self, request: Request, call_next):
        start_time = time.time()
        client_id = request.client.host if request.client else "unknown"

        try:
            response = await call_next(request)
        except Exception as e:
            record_error("exception", request.url.path)
            log_error("request_exception", str(e), {"path": request.url.path, "method": request.method})
            raise

        duration_ms = (time.time() - start_time) * 1000
        log_request(
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=duration_ms,
            client_id=client_id,
        )
        record_request(request.method, request.url.path, response.status_code, duration_ms)
        if response.status_code >= 400:
            record_error(f"http_{response.status_code}", request.url.path)
        return response


app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(LedgerbookError)
async def ledgerbook_exception_handler(request: Request, exc: LedgerbookError):
    """Handle all LedgerbookErrors with structured responses."""
    log_error(exc.code.value, str(exc), {"path": request.url.path, **exc.context})
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Handle unhandled exceptions with a structured response."""
    error_id = f"err_{uuid.uuid4().hex[:12]}"
    record_error("unhandled_exception", request.url.path)
    log_error(
        "unhandled_exception",
        str(exc),
        {"path": request.url.path, "method": request.method, "error_id": error_id},
        exception=exc,
    )
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "error_id": error_id,
            "message": "An unexpected error occurred. Please try again or contact support.",
        },
    )


@app.on_event("startup")
async def startup_event():
    settings = get_settings()
    logger.info(f"Ledgerbook {__version__} started (cash account: {settings.cash_account})")


@app.get(
    "/health",
    tags=["System"],
    summary="Health Check",
    description="Check API health and version",
)
def health():
    return {"status": "ok", "service": "ledgerbook", "version": __version__}


@app.get(
    "/metrics",
    tags=["System"],
    summary="Get Metrics",
    description="Get API performance and usage metrics",
)
def metrics_endpoint():
    """
    Get API metrics.

    Returns:
    - Uptime information
    - Request statistics by endpoint and status
    - Error statistics
    - Reconciliation run statistics
    - Performance metrics (response times)
    """
    return get_metrics()
