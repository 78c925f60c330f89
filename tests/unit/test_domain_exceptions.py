"""Tests for domain exceptions (error_code, message, details)."""

from assetverse.core.exception_handlers import error_body, status_for
from assetverse.domain.exceptions import (
    AssetverseException,
    AuthorizationException,
    CompanyAlreadyExistsException,
    OutOfStockException,
    PackageLimitException,
    PaymentProviderException,
    ResourceNotFoundException,
    UserAlreadyExistsException,
    ValidationException,
    WriteConflictException,
)


def test_base_exception_defaults_error_code_to_class_name() -> None:
    exc = AssetverseException("Something failed")
    assert exc.error_code == "AssetverseException"
    assert exc.details == {}
    assert str(exc) == "Something failed"


def test_validation_exception_field() -> None:
    exc = ValidationException("Bad quantity", field="productQuantity")
    assert exc.error_code == "VALIDATION_ERROR"
    assert exc.details == {"field": "productQuantity"}


def test_authorization_exception_context() -> None:
    exc = AuthorizationException("No", resource="asset", action="delete")
    assert exc.error_code == "FORBIDDEN"
    assert exc.details == {"resource": "asset", "action": "delete"}


def test_not_found_message() -> None:
    exc = ResourceNotFoundException("asset", "a1")
    assert exc.message == "asset not found: a1"
    assert exc.details == {"resource_type": "asset", "resource_id": "a1"}


def test_payment_provider_reason_is_optional() -> None:
    assert PaymentProviderException("down").details == {}
    assert PaymentProviderException("down", reason="timeout").details == {"reason": "timeout"}


def test_status_mapping() -> None:
    assert status_for(OutOfStockException("a1").error_code) == 400
    assert status_for(PackageLimitException(5, 5).error_code) == 403
    assert status_for(UserAlreadyExistsException().error_code) == 409
    assert status_for(CompanyAlreadyExistsException("Acme").error_code) == 409
    assert status_for(WriteConflictException().error_code) == 409
    assert status_for("SOMETHING_NEW") == 400


def test_error_body_omits_empty_details() -> None:
    assert error_body("Nope", "FORBIDDEN", 403) == {
        "error": "Nope",
        "code": "FORBIDDEN",
        "statusCode": 403,
    }
    assert error_body("Bad", "VALIDATION_ERROR", 400, {"field": "x"})["details"] == {"field": "x"}
