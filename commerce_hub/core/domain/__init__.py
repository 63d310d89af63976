from commerce_hub.core.domain.exceptions import (
    CapabilityRequiredException,
    DomainException,
    EntityNotFoundException,
    InsufficientInputException,
    TenantInactiveException,
    ValidationException,
)

__all__ = [
    "CapabilityRequiredException",
    "DomainException",
    "EntityNotFoundException",
    "InsufficientInputException",
    "TenantInactiveException",
    "ValidationException",
]
