"""Domain exceptions for the AssetVerse application.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class AssetverseException(Exception):
    """Base exception for all AssetVerse application errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code (stable per failure kind).
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)


class ValidationException(AssetverseException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(AssetverseException):
    """Raised when authentication fails (missing, invalid or expired token; unknown email)."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "UNAUTHORIZED")


class AuthorizationException(AssetverseException):
    """Raised when the caller's role or ownership does not allow the operation."""

    def __init__(
        self,
        message: str = "Forbidden",
        resource: str | None = None,
        action: str | None = None,
    ) -> None:
        """Initialize with message and optional resource/action context.

        Args:
            message: Human-readable reason.
            resource: Optional resource type (e.g. 'asset', 'request').
            action: Optional action that was attempted (e.g. 'approve').
        """
        details: dict[str, Any] = {}
        if resource:
            details["resource"] = resource
        if action:
            details["action"] = action
        super().__init__(message, "FORBIDDEN", details)


class ResourceNotFoundException(AssetverseException):
    """Raised when a referenced document is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'asset', 'user').
            resource_id: The ID (or natural key) that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class InvalidStateException(AssetverseException):
    """Raised when a document is not in the state the transition requires."""

    def __init__(self, resource_type: str, current: str, expected: str) -> None:
        super().__init__(
            f"{resource_type} is {current}; expected {expected}",
            "INVALID_STATE",
            {"resource_type": resource_type, "current": current, "expected": expected},
        )


class OutOfStockException(AssetverseException):
    """Raised when an asset has no available units left."""

    def __init__(self, asset_id: str) -> None:
        super().__init__(
            "Asset has no available units",
            "OUT_OF_STOCK",
            {"asset_id": asset_id},
        )


class PackageLimitException(AssetverseException):
    """Raised when affiliating another employee would exceed the HR package limit."""

    def __init__(self, package_limit: int, current_employees: int) -> None:
        super().__init__(
            "Employee limit of current package reached; upgrade to add employees",
            "PACKAGE_LIMIT",
            {"package_limit": package_limit, "current_employees": current_employees},
        )


class NotAffiliatedException(AssetverseException):
    """Raised when direct assignment targets an employee without an active affiliation."""

    def __init__(self, employee_email: str, company_name: str) -> None:
        super().__init__(
            f"{employee_email} is not an active employee of {company_name}",
            "NOT_AFFILIATED",
            {"employee_email": employee_email, "company_name": company_name},
        )


class DuplicateRequestException(AssetverseException):
    """Raised when the employee already has a pending request for the asset."""

    def __init__(self, asset_id: str) -> None:
        super().__init__(
            "A pending request for this asset already exists",
            "DUPLICATE_REQUEST",
            {"asset_id": asset_id},
        )


class AlreadyAssignedException(AssetverseException):
    """Raised when the asset is already assigned to the employee."""

    def __init__(self, asset_id: str, employee_email: str) -> None:
        super().__init__(
            "Asset is already assigned to this employee",
            "ALREADY_ASSIGNED",
            {"asset_id": asset_id, "employee_email": employee_email},
        )


class UserAlreadyExistsException(AssetverseException):
    """Raised when signing up with an email that is already registered."""

    def __init__(self) -> None:
        super().__init__("Email is already registered", "USER_EXISTS", {})


class CompanyAlreadyExistsException(AssetverseException):
    """Raised when an HR signs up with a company name another HR account holds."""

    def __init__(self, company_name: str) -> None:
        super().__init__(
            "Company name is already registered",
            "COMPANY_EXISTS",
            {"company_name": company_name},
        )


class AssetInUseException(AssetverseException):
    """Raised when deleting an asset that still has units out on assignment."""

    def __init__(self, asset_id: str, assigned_units: int) -> None:
        super().__init__(
            "Asset has units out on assignment",
            "ASSET_IN_USE",
            {"asset_id": asset_id, "assigned_units": assigned_units},
        )


class AlreadyUpgradedException(AssetverseException):
    """Raised when an HR account with a payment on record tries to purchase again."""

    def __init__(self, hr_email: str) -> None:
        super().__init__(
            "Package already purchased for this account",
            "ALREADY_UPGRADED",
            {"hr_email": hr_email},
        )


class PaymentNotCompletedException(AssetverseException):
    """Raised when confirming a checkout session that is not paid."""

    def __init__(self, session_id: str, payment_status: str | None) -> None:
        super().__init__(
            "Payment has not been completed",
            "PAYMENT_NOT_COMPLETED",
            {"session_id": session_id, "payment_status": payment_status},
        )


class PaymentAlreadyRecordedException(AssetverseException):
    """Raised when a checkout session has already been confirmed."""

    def __init__(self, session_id: str) -> None:
        super().__init__(
            "Payment for this session has already been recorded",
            "PAYMENT_ALREADY_RECORDED",
            {"session_id": session_id},
        )


class PaymentProviderException(AssetverseException):
    """Raised when the payment processor call fails."""

    def __init__(self, message: str, reason: str | None = None) -> None:
        details = {"reason": reason} if reason else {}
        super().__init__(message, "PAYMENT_PROVIDER_ERROR", details)


class PaymentProviderUnavailableException(AssetverseException):
    """Raised when no payment processor is configured."""

    def __init__(self) -> None:
        super().__init__(
            "Payment processor is not configured",
            "PAYMENT_PROVIDER_UNAVAILABLE",
        )


class WriteConflictException(AssetverseException):
    """Raised when a conditional write loses to a concurrent writer (optimistic lock).

    Stores raise this when any precondition of a commit fails; nothing from
    that commit is applied.
    """

    def __init__(self, message: str = "Document was modified by another request; retry.") -> None:
        super().__init__(message, "CONFLICT")
