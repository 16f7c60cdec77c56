"""
Ledgerbook Error Handling

Specific error types with user-friendly messages and debugging context.
"""
from typing import Optional, Dict, Any
from fastapi import HTTPException
from enum import Enum


class ErrorCode(str, Enum):
    """Standardized error codes for client handling."""
    # Input errors (400s)
    INVALID_CONFIG = "INVALID_CONFIG"
    MATCH_NOT_FOUND = "MATCH_NOT_FOUND"
    ENTRY_NOT_FOUND = "ENTRY_NOT_FOUND"
    DISCREPANCY_NOT_FOUND = "DISCREPANCY_NOT_FOUND"
    DEMO_CASE_NOT_FOUND = "DEMO_CASE_NOT_FOUND"
    DUPLICATE_MATCH = "DUPLICATE_MATCH"
    INVALID_SESSION_STATE = "INVALID_SESSION_STATE"
    ADJUSTMENT_NOT_SUPPORTED = "ADJUSTMENT_NOT_SUPPORTED"

    # Processing errors (500s)
    UNBALANCED_ENTRY = "UNBALANCED_ENTRY"
    RECONCILIATION_FAILED = "RECONCILIATION_FAILED"


STATUS_MAP: Dict[ErrorCode, int] = {
    ErrorCode.INVALID_CONFIG: 400,
    ErrorCode.MATCH_NOT_FOUND: 404,
    ErrorCode.ENTRY_NOT_FOUND: 404,
    ErrorCode.DISCREPANCY_NOT_FOUND: 404,
    ErrorCode.DEMO_CASE_NOT_FOUND: 404,
    ErrorCode.DUPLICATE_MATCH: 409,
    ErrorCode.INVALID_SESSION_STATE: 409,
    ErrorCode.ADJUSTMENT_NOT_SUPPORTED: 422,
    ErrorCode.UNBALANCED_ENTRY: 500,
    ErrorCode.RECONCILIATION_FAILED: 500,
}


class LedgerbookError(Exception):
    """Base exception with structured error info."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        detail: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.detail = detail
        self.context = context or {}
        super().__init__(message)

    @property
    def status_code(self) -> int:
        return STATUS_MAP.get(self.code, 500)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to API response format."""
        result = {
            "error": self.code.value,
            "message": self.message
        }
        if self.detail:
            result["detail"] = self.detail
        if self.context:
            result["context"] = self.context
        return result


class ConfigError(LedgerbookError):
    """Error in configuration."""

    def __init__(self, field: str, detail: str):
        super().__init__(
            code=ErrorCode.INVALID_CONFIG,
            message=f"Invalid configuration for '{field}'",
            detail=detail,
            context={"field": field}
        )


class DuplicateMatchError(LedgerbookError):
    """A bank line or journal entry is already part of a match."""

    def __init__(self, bank_entry_id: str, journal_entry_id: str):
        super().__init__(
            code=ErrorCode.DUPLICATE_MATCH,
            message="One of these items is already matched",
            detail="Unmatch the existing pair before matching either item again",
            context={"bank_entry_id": bank_entry_id, "journal_entry_id": journal_entry_id}
        )


class MatchNotFoundError(LedgerbookError):
    def __init__(self, match_id: str):
        super().__init__(
            code=ErrorCode.MATCH_NOT_FOUND,
            message=f"Match '{match_id}' not found",
            context={"match_id": match_id}
        )


class EntryNotFoundError(LedgerbookError):
    """A bank line or cash journal entry id is not part of the session."""

    def __init__(self, kind: str, entry_id: str):
        super().__init__(
            code=ErrorCode.ENTRY_NOT_FOUND,
            message=f"{kind.capitalize()} entry '{entry_id}' not found",
            context={"kind": kind, "entry_id": entry_id}
        )


class DiscrepancyNotFoundError(LedgerbookError):
    def __init__(self, discrepancy_id: str):
        super().__init__(
            code=ErrorCode.DISCREPANCY_NOT_FOUND,
            message=f"Discrepancy '{discrepancy_id}' not found",
            context={"discrepancy_id": discrepancy_id}
        )


class DemoCaseNotFoundError(LedgerbookError):
    def __init__(self, case_id: str):
        super().__init__(
            code=ErrorCode.DEMO_CASE_NOT_FOUND,
            message=f"Demo case '{case_id}' not found",
            context={"case_id": case_id}
        )


class SessionStateError(LedgerbookError):
    """Illegal reconciliation session status transition."""

    def __init__(self, session_id: str, status: str, detail: str):
        super().__init__(
            code=ErrorCode.INVALID_SESSION_STATE,
            message=f"Session '{session_id}' cannot leave status '{status}'",
            detail=detail,
            context={"session_id": session_id, "status": status}
        )


class AdjustmentNotSupportedError(LedgerbookError):
    """No automatic posting rule exists for this discrepancy type."""

    def __init__(self, discrepancy_type: str, detail: str):
        super().__init__(
            code=ErrorCode.ADJUSTMENT_NOT_SUPPORTED,
            message=f"Cannot create an adjustment entry for '{discrepancy_type}'",
            detail=detail,
            context={"discrepancy_type": discrepancy_type}
        )


class UnbalancedAdjustmentError(LedgerbookError):
    def __init__(self, total_debit: float, total_credit: float):
        super().__init__(
            code=ErrorCode.UNBALANCED_ENTRY,
            message="Adjustment entries do not balance",
            detail=f"Debits {total_debit:.2f} != credits {total_credit:.2f}",
            context={"total_debit": total_debit, "total_credit": total_credit}
        )


class ReconciliationError(LedgerbookError):
    """Error during reconciliation."""

    def __init__(self, stage: str, detail: str):
        super().__init__(
            code=ErrorCode.RECONCILIATION_FAILED,
            message=f"Reconciliation failed at {stage}",
            detail=detail,
            context={"stage": stage}
        )


def to_http_exception(error: LedgerbookError) -> HTTPException:
    """Convert LedgerbookError to HTTPException."""
    return HTTPException(
        status_code=error.status_code,
        detail=error.to_dict()
    )
