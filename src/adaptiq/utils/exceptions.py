"""Custom exceptions for Adaptiq."""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorSeverity(str, Enum):
    """Error severity levels."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """Error categories for classification."""
    DATABASE = "database"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    CONFIGURATION = "configuration"
    BUSINESS_LOGIC = "business_logic"


class AdaptiqException(Exception):
    """Base exception for Adaptiq."""

    def __init__(
        self,
        message: str,
        error_code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        details: Optional[Dict[str, Any]] = None,
        user_message: Optional[str] = None,
        recoverable: bool = True,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.category = category
        self.severity = severity
        self.details = details or {}
        self.user_message = user_message or self._generate_user_message()
        self.recoverable = recoverable

    def _generate_user_message(self) -> str:
        """Generate user-friendly error message."""
        if self.category == ErrorCategory.DATABASE:
            return "We're having trouble accessing your data. Please try again shortly."
        elif self.category == ErrorCategory.VALIDATION:
            return "Please check your input and try again."
        elif self.category == ErrorCategory.NOT_FOUND:
            return "We couldn't find what you were looking for."
        elif self.category == ErrorCategory.CONFLICT:
            return "That already exists."
        else:
            return "Something went wrong. Please try again or contact support if the problem persists."

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/API responses."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "user_message": self.user_message,
            "category": self.category.value,
            "severity": self.severity.value,
            "details": self.details,
            "recoverable": self.recoverable,
        }


# Database Exceptions
class DatabaseException(AdaptiqException):
    """Base exception for database errors."""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault("error_code", "DATABASE_ERROR")
        super().__init__(message=message, category=ErrorCategory.DATABASE, **kwargs)


class DatabaseConnectionException(DatabaseException):
    """Exception for database connection failures."""

    def __init__(self, **kwargs):
        kwargs.setdefault("error_code", "DATABASE_CONNECTION_FAILED")
        kwargs.setdefault("severity", ErrorSeverity.CRITICAL)
        kwargs.setdefault("recoverable", False)
        super().__init__(message="Failed to connect to database", **kwargs)


class DataIntegrityException(DatabaseException):
    """Exception for data integrity violations."""

    def __init__(self, table: str, constraint: str, **kwargs):
        kwargs.setdefault("error_code", "DATA_INTEGRITY_VIOLATION")
        kwargs.setdefault("severity", ErrorSeverity.HIGH)
        super().__init__(
            message=f"Data integrity violation in table {table}: {constraint}",
            **kwargs
        )
        self.details.update({"table": table, "constraint": constraint})


# Validation Exceptions
class ValidationException(AdaptiqException):
    """Base exception for validation errors."""

    def __init__(self, message: str, field: Optional[str] = None, **kwargs):
        kwargs.setdefault("error_code", "VALIDATION_ERROR")
        super().__init__(message=message, category=ErrorCategory.VALIDATION, **kwargs)
        if field:
            self.details["field"] = field


class InvalidInputException(ValidationException):
    """Exception for invalid input data."""

    def __init__(self, field: str, value: Any, expected: str, **kwargs):
        kwargs.setdefault("error_code", "INVALID_INPUT")
        super().__init__(
            message=f"Invalid value for {field}: expected {expected}, got {type(value).__name__}",
            field=field,
            **kwargs
        )
        self.details.update({"value": str(value), "expected": expected})


# Resource Exceptions
class ResourceNotFoundException(AdaptiqException):
    """Exception for missing resources."""

    def __init__(self, resource: str, identifier: str, **kwargs):
        kwargs.setdefault("error_code", "RESOURCE_NOT_FOUND")
        kwargs.setdefault("severity", ErrorSeverity.LOW)
        super().__init__(
            message=f"{resource} not found: {identifier}",
            category=ErrorCategory.NOT_FOUND,
            **kwargs
        )
        self.details.update({"resource": resource, "identifier": identifier})


class ProfileNotFoundException(ResourceNotFoundException):
    """Exception raised when a user has no learner profile."""

    def __init__(self, user_id: str, **kwargs):
        kwargs.setdefault("error_code", "PROFILE_NOT_FOUND")
        kwargs.setdefault("user_message", "No learner profile exists for this user yet.")
        super().__init__(resource="Learner profile", identifier=user_id, **kwargs)


class ResourceConflictException(AdaptiqException):
    """Exception for resources that already exist."""

    def __init__(self, resource: str, identifier: str, **kwargs):
        kwargs.setdefault("error_code", "RESOURCE_CONFLICT")
        kwargs.setdefault("severity", ErrorSeverity.LOW)
        super().__init__(
            message=f"{resource} already exists: {identifier}",
            category=ErrorCategory.CONFLICT,
            **kwargs
        )
        self.details.update({"resource": resource, "identifier": identifier})


class ProfileAlreadyExistsException(ResourceConflictException):
    """Exception raised when creating a second profile for a user."""

    def __init__(self, user_id: str, **kwargs):
        kwargs.setdefault("error_code", "PROFILE_ALREADY_EXISTS")
        kwargs.setdefault("user_message", "A learner profile already exists for this user.")
        super().__init__(resource="Learner profile", identifier=user_id, **kwargs)


# Configuration Exceptions
class ConfigurationException(AdaptiqException):
    """Exception for configuration errors."""

    def __init__(self, message: str, config_key: Optional[str] = None, **kwargs):
        kwargs.setdefault("error_code", "CONFIGURATION_ERROR")
        kwargs.setdefault("severity", ErrorSeverity.HIGH)
        kwargs.setdefault("recoverable", False)
        super().__init__(message=message, category=ErrorCategory.CONFIGURATION, **kwargs)
        if config_key:
            self.details["config_key"] = config_key
