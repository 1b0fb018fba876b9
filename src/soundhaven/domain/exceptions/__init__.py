"""Domain exceptions."""

from typing import Any


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    # Hey future me, message is stored as an attribute so handlers can read it without
    # parsing str(exception). Don't raise this directly - use a specific subclass.
    def __init__(self, message: str, *args: Any) -> None:
        super().__init__(message, *args)
        self.message = message


class EntityNotFoundException(DomainException):
    """Raised when an entity is not found.

    HTTP Status: 404
    """

    def __init__(self, entity_type: str, entity_id: Any) -> None:
        super().__init__(f"{entity_type} with id {entity_id} not found")
        self.entity_type = entity_type
        self.entity_id = entity_id


class ValidationException(DomainException):
    """Raised when input violates an entity invariant.

    HTTP Status: 422
    """

    pass


class DuplicateEntityException(DomainException):
    """Raised when trying to create a duplicate entity.

    HTTP Status: 409

    The repositories raise this when the storage layer rejects an insert on a unique
    key. IdentityProvisioner catches it and treats it as "already provisioned".
    """

    def __init__(self, entity_type: str, entity_id: Any) -> None:
        super().__init__(f"{entity_type} with id {entity_id} already exists")
        self.entity_type = entity_type
        self.entity_id = entity_id


class AuthorizationError(DomainException):
    """Caller is not allowed to perform this action.

    HTTP Status: 403
    """

    pass


class ConfigurationError(DomainException):
    """Application misconfiguration.

    HTTP Status: 503
    """

    pass


class ProvisionError(DomainException):
    """User provisioning failed for a reason other than a duplicate key.

    Raised when storage is unavailable or rejects the insert for any other reason.
    Duplicate-key conflicts are NOT provisioning errors - a concurrent request
    already created the user, which is exactly the outcome we wanted.

    HTTP Status: 500
    """

    def __init__(self, external_id: str, reason: str) -> None:
        super().__init__(f"Failed to provision user {external_id}: {reason}")
        self.external_id = external_id
        self.reason = reason


__all__ = [
    "AuthorizationError",
    "ConfigurationError",
    "DomainException",
    "DuplicateEntityException",
    "EntityNotFoundException",
    "ProvisionError",
    "ValidationException",
]
