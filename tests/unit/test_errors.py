"""Unit tests for error types and ActionResult."""

from partnerdesk.services.errors import (
    ActionResult,
    ErrorCode,
    InsufficientBalanceError,
    OverCollectionError,
    ReceivableNotFoundError,
    TransactionConflictError,
    unexpected_error,
)


class TestActionResult:
    """Test ActionResult helpers."""

    def test_ok_result(self):
        result = ActionResult.ok("Payment collected successfully.")

        assert result.success is True
        assert result.error is None
        assert result.code is None
        assert result.http_status == 200

    def test_from_error_copies_code_and_message(self):
        result = ActionResult.from_error(OverCollectionError())

        assert result.success is False
        assert result.code == ErrorCode.INVALID_AMOUNT
        assert result.error == "Collected amount cannot be greater than the pending amount."
        assert result.http_status == 409

    def test_http_status_per_code(self):
        assert ActionResult.from_error(ReceivableNotFoundError()).http_status == 404
        assert ActionResult.from_error(InsufficientBalanceError()).http_status == 409
        assert ActionResult.fail(ErrorCode.VALIDATION_ERROR, "bad").http_status == 422
        assert ActionResult.fail(ErrorCode.STORE_ERROR, "down").http_status == 503

    def test_json_shape(self):
        payload = ActionResult.from_error(ReceivableNotFoundError()).model_dump(mode="json")

        assert payload == {
            "success": False,
            "message": None,
            "error": "Receivable record not found.",
            "code": "not_found",
        }


class TestUnexpectedError:
    """Test the generic store-failure wrapper."""

    def test_carries_underlying_message(self):
        result = unexpected_error(RuntimeError("connection refused"))

        assert result.code == ErrorCode.STORE_ERROR
        assert result.error == "An unexpected error occurred: connection refused"

    def test_falls_back_to_exception_name(self):
        result = unexpected_error(TimeoutError())

        assert result.error == "An unexpected error occurred: TimeoutError"

    def test_wraps_conflict_error(self):
        result = unexpected_error(TransactionConflictError())

        assert "concurrent updates" in result.error
        assert result.http_status == 503
