"""
Domain Exceptions

Business rule violations and domain-specific errors. They are translated to
HTTP responses by the handlers in commerce_hub.api.exception_handlers.
"""

from typing import Any


class DomainException(Exception):
    """
    Base exception for all domain-related errors.
    """

    def __init__(self, message: str, code: str | None = None, details: dict[str, Any] | None = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code (e.g., "ENTITY_NOT_FOUND")
            details: Additional context about the error
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__.upper()
        self.details = details or {}


class ValidationException(DomainException):
    """Raised when input fails a business-level validation."""

    def __init__(self, message: str, field: str | None = None, details: dict[str, Any] | None = None):
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, "VALIDATION_ERROR", details)
        self.field = field


class EntityNotFoundException(DomainException):
    """Raised when an entity does not exist within the requesting tenant."""

    def __init__(self, entity_type: str, entity_id: Any, message: str | None = None):
        self.entity_type = entity_type
        self.entity_id = entity_id
        msg = message or f"{entity_type} not found"
        super().__init__(
            msg,
            "ENTITY_NOT_FOUND",
            {"entity_type": entity_type, "entity_id": str(entity_id)},
        )


class InsufficientInputException(DomainException):
    """Raised when an operation receives fewer inputs than it needs (e.g. comparing one product)."""

    def __init__(self, message: str, required: int, received: int):
        self.required = required
        self.received = received
        super().__init__(
            message,
            "INSUFFICIENT_INPUT",
            {"required": required, "received": received},
        )


class TenantInactiveException(DomainException):
    """Raised when a soft-disabled tenant is asked to serve traffic."""

    def __init__(self, tenant_id: Any):
        self.tenant_id = tenant_id
        super().__init__("Tenant is disabled", "TENANT_INACTIVE", {"tenant_id": str(tenant_id)})


class CapabilityRequiredException(DomainException):
    """
    Raised when an AI capability fails on a path that has no safe fallback
    (quote generation, product comparison).
    """

    def __init__(self, capability: str, message: str | None = None):
        self.capability = capability
        super().__init__(
            message or f"Failed to generate {capability}",
            "CAPABILITY_UNAVAILABLE",
            {"capability": capability},
        )
