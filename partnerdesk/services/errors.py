"""Application errors and the structured result returned by workflow entry points."""

from enum import Enum

from pydantic import BaseModel


class ErrorCode(str, Enum):
    """Failure categories surfaced to callers."""

    VALIDATION_ERROR = "validation_error"
    NOT_FOUND = "not_found"
    INVALID_STATE = "invalid_state"
    INVALID_AMOUNT = "invalid_amount"
    INSUFFICIENT_BALANCE = "insufficient_balance"
    STORE_ERROR = "store_error"


HTTP_STATUS_BY_CODE = {
    ErrorCode.VALIDATION_ERROR: 422,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.INVALID_STATE: 409,
    ErrorCode.INVALID_AMOUNT: 409,
    ErrorCode.INSUFFICIENT_BALANCE: 409,
    ErrorCode.STORE_ERROR: 503,
}


class AppError(Exception):
    """Base application error."""

    def __init__(self, message: str, code: ErrorCode, http_status: int | None = None):
        self.message = message
        self.code = code
        self.http_status = http_status or HTTP_STATUS_BY_CODE[code]
        super().__init__(message)


class ReceivableNotFoundError(AppError):
    """Referenced receivable does not exist."""

    def __init__(self, message: str = "Receivable record not found."):
        super().__init__(message, ErrorCode.NOT_FOUND)


class PayableNotFoundError(AppError):
    """Referenced payable does not exist."""

    def __init__(self, message: str = "Payable record not found."):
        super().__init__(message, ErrorCode.NOT_FOUND)


class PaymentNotPendingError(AppError):
    """Receivable is no longer pending."""

    def __init__(self, message: str = "This payment is not pending."):
        super().__init__(message, ErrorCode.INVALID_STATE)


class OverCollectionError(AppError):
    """Collected amount exceeds the remaining balance."""

    def __init__(
        self, message: str = "Collected amount cannot be greater than the pending amount."
    ):
        super().__init__(message, ErrorCode.INVALID_AMOUNT)


class InsufficientBalanceError(AppError):
    """Wallet cannot cover a payout."""

    def __init__(self, message: str = "Insufficient wallet balance."):
        super().__init__(message, ErrorCode.INSUFFICIENT_BALANCE)


class TransactionConflictError(AppError):
    """Transaction kept conflicting with concurrent writers."""

    def __init__(self, message: str = "Transaction could not be completed due to concurrent updates."):
        super().__init__(message, ErrorCode.STORE_ERROR)


class ActionResult(BaseModel):
    """Outcome of a mutating workflow call.

    Callers check `success`; on failure `code` and `error` say why.
    """

    success: bool
    message: str | None = None
    error: str | None = None
    code: ErrorCode | None = None

    @classmethod
    def ok(cls, message: str | None = None) -> "ActionResult":
        return cls(success=True, message=message)

    @classmethod
    def fail(cls, code: ErrorCode, error: str) -> "ActionResult":
        return cls(success=False, code=code, error=error)

    @classmethod
    def from_error(cls, error: AppError) -> "ActionResult":
        return cls.fail(error.code, error.message)

    @property
    def http_status(self) -> int:
        if self.success or self.code is None:
            return 200
        return HTTP_STATUS_BY_CODE[self.code]


def unexpected_error(exc: Exception) -> ActionResult:
    """Wrap a backing-store failure into a generic result."""
    detail = str(exc) or exc.__class__.__name__
    return ActionResult.fail(ErrorCode.STORE_ERROR, f"An unexpected error occurred: {detail}")


__all__ = [
    "ErrorCode",
    "AppError",
    "ReceivableNotFoundError",
    "PayableNotFoundError",
    "PaymentNotPendingError",
    "OverCollectionError",
    "InsufficientBalanceError",
    "TransactionConflictError",
    "ActionResult",
    "unexpected_error",
]
