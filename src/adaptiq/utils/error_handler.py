"""Centralised error handling for the Adaptiq API."""

import traceback
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Union

from fastapi import Request, status
from fastapi.exceptions import HTTPException, RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..logging_config import get_logger
from .exceptions import (
    AdaptiqException,
    DatabaseConnectionException,
    DatabaseException,
    DataIntegrityException,
    ErrorCategory,
    ErrorSeverity,
    InvalidInputException,
    ResourceNotFoundException,
)

logger = get_logger(__name__)


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


class ErrorHandler:
    """Centralized error handling system."""

    def __init__(self):
        self.error_counts: Dict[str, int] = {}
        self.recent_errors: list = []
        self.max_recent_errors = 100

    async def handle_exception(self, request: Request, exc: Exception) -> JSONResponse:
        """Handle any exception and return appropriate JSON response."""
        error_id = str(uuid.uuid4())
        error_info = self._process_exception(exc, error_id)

        self._log_error(error_info, request, exc)
        self._track_error(error_info)

        return self._create_error_response(error_info)

    def _process_exception(self, exc: Exception, error_id: str) -> Dict[str, Any]:
        """Process exception into standardized error information."""
        if isinstance(exc, AdaptiqException):
            return self._from_custom(exc, error_id)
        elif isinstance(exc, SQLAlchemyError):
            return self._handle_sqlalchemy_error(exc, error_id)
        elif isinstance(exc, (RequestValidationError, ValidationError)):
            return self._handle_validation_error(exc, error_id)
        elif isinstance(exc, (HTTPException, StarletteHTTPException)):
            return self._handle_http_error(exc, error_id)
        else:
            return self._handle_unknown_error(exc, error_id)

    def _from_custom(self, exc: AdaptiqException, error_id: str) -> Dict[str, Any]:
        info = exc.to_dict()
        info.update({
            "error_id": error_id,
            "http_status": self._get_http_status(exc),
            "timestamp": _timestamp(),
        })
        return info

    def _handle_sqlalchemy_error(self, exc: SQLAlchemyError, error_id: str) -> Dict[str, Any]:
        """Handle SQLAlchemy database errors."""
        if isinstance(exc, IntegrityError):
            constraint = str(exc.orig) if getattr(exc, "orig", None) is not None else "unknown"
            custom = DataIntegrityException(table="unknown", constraint=constraint)
        elif isinstance(exc, OperationalError):
            custom = DatabaseConnectionException()
        else:
            custom = DatabaseException(
                message=f"Database error: {exc}",
                details={"original_error": str(exc)}
            )
        return self._from_custom(custom, error_id)

    def _handle_validation_error(
        self,
        exc: Union[RequestValidationError, ValidationError],
        error_id: str
    ) -> Dict[str, Any]:
        """Handle validation errors."""
        errors = exc.errors()
        field = errors[0]["loc"][-1] if errors and errors[0]["loc"] else "unknown"
        custom = InvalidInputException(
            field=str(field),
            value="invalid",
            expected="valid input",
            details={"validation_errors": [
                {"loc": [str(part) for part in error.get("loc", ())], "msg": error.get("msg")}
                for error in errors
            ]}
        )
        info = self._from_custom(custom, error_id)
        info["http_status"] = status.HTTP_422_UNPROCESSABLE_ENTITY
        return info

    def _handle_http_error(
        self,
        exc: Union[HTTPException, StarletteHTTPException],
        error_id: str
    ) -> Dict[str, Any]:
        """Handle HTTP exceptions."""
        if exc.status_code == 404:
            info = self._from_custom(
                ResourceNotFoundException(resource="Resource", identifier=str(exc.detail)),
                error_id
            )
            info["http_status"] = status.HTTP_404_NOT_FOUND
            return info

        return {
            "error_id": error_id,
            "error_code": f"HTTP_{exc.status_code}",
            "message": str(exc.detail),
            "user_message": str(exc.detail),
            "category": ErrorCategory.BUSINESS_LOGIC.value,
            "severity": ErrorSeverity.MEDIUM.value,
            "details": {},
            "recoverable": True,
            "http_status": exc.status_code,
            "timestamp": _timestamp(),
        }

    def _handle_unknown_error(self, exc: Exception, error_id: str) -> Dict[str, Any]:
        """Handle unknown/unexpected errors."""
        return {
            "error_id": error_id,
            "error_code": "UNKNOWN_ERROR",
            "message": f"Unexpected error: {exc}",
            "user_message": "An unexpected error occurred. Please try again or contact support.",
            "category": ErrorCategory.BUSINESS_LOGIC.value,
            "severity": ErrorSeverity.HIGH.value,
            "details": {
                "exception_type": type(exc).__name__,
                "exception_message": str(exc)
            },
            "recoverable": True,
            "http_status": status.HTTP_500_INTERNAL_SERVER_ERROR,
            "timestamp": _timestamp(),
        }

    def _get_http_status(self, exc: AdaptiqException) -> int:
        """Get appropriate HTTP status code for custom exception."""
        if exc.category == ErrorCategory.VALIDATION:
            return status.HTTP_400_BAD_REQUEST
        elif exc.category == ErrorCategory.NOT_FOUND:
            return status.HTTP_404_NOT_FOUND
        elif exc.category == ErrorCategory.CONFLICT:
            return status.HTTP_409_CONFLICT
        elif exc.category == ErrorCategory.DATABASE:
            if exc.severity == ErrorSeverity.CRITICAL:
                return status.HTTP_503_SERVICE_UNAVAILABLE
            return status.HTTP_500_INTERNAL_SERVER_ERROR
        else:
            return status.HTTP_500_INTERNAL_SERVER_ERROR

    def _log_error(self, error_info: Dict[str, Any], request: Request, exc: Exception) -> None:
        """Log error with appropriate level and context."""
        severity = ErrorSeverity(error_info["severity"])

        log_context = {
            "error_id": error_info["error_id"],
            "error_code": error_info["error_code"],
            "category": error_info["category"],
            "severity": error_info["severity"],
            "recoverable": error_info["recoverable"],
            "http_status": error_info["http_status"],
            "request_method": request.method,
            "request_path": str(request.url.path),
        }

        if severity in (ErrorSeverity.HIGH, ErrorSeverity.CRITICAL):
            log_context["exception_type"] = type(exc).__name__
            log_context["exception_message"] = str(exc)
            log_context["traceback"] = "".join(
                traceback.format_exception(type(exc), exc, exc.__traceback__)
            )

        if severity == ErrorSeverity.CRITICAL:
            logger.critical("Critical error occurred", **log_context)
        elif severity == ErrorSeverity.HIGH:
            logger.error("High severity error occurred", **log_context)
        elif severity == ErrorSeverity.MEDIUM:
            logger.warning("Medium severity error occurred", **log_context)
        else:
            logger.info("Low severity error occurred", **log_context)

    def _track_error(self, error_info: Dict[str, Any]) -> None:
        """Track error statistics."""
        error_code = error_info["error_code"]
        self.error_counts[error_code] = self.error_counts.get(error_code, 0) + 1

        self.recent_errors.append({
            "error_id": error_info["error_id"],
            "error_code": error_code,
            "category": error_info["category"],
            "severity": error_info["severity"],
            "timestamp": error_info["timestamp"]
        })

        if len(self.recent_errors) > self.max_recent_errors:
            self.recent_errors.pop(0)

    def _create_error_response(self, error_info: Dict[str, Any]) -> JSONResponse:
        """Create JSON error response."""
        response_data = {
            "error": {
                "error_id": error_info["error_id"],
                "error_code": error_info["error_code"],
                "message": error_info["user_message"],
                "category": error_info["category"],
                "details": error_info["details"],
                "recoverable": error_info["recoverable"],
                "timestamp": error_info["timestamp"]
            }
        }

        if error_info["severity"] in (ErrorSeverity.HIGH.value, ErrorSeverity.CRITICAL.value):
            response_data["error"]["support_reference"] = error_info["error_id"]

        return JSONResponse(status_code=error_info["http_status"], content=response_data)

    def get_error_stats(self) -> Dict[str, Any]:
        """Get error handling statistics."""
        return {
            "total_errors": sum(self.error_counts.values()),
            "error_counts_by_code": dict(self.error_counts),
            "recent_errors_count": len(self.recent_errors),
            "most_common_errors": sorted(
                self.error_counts.items(),
                key=lambda x: x[1],
                reverse=True
            )[:10]
        }

    def get_recent_errors(self, limit: int = 50) -> list:
        """Get recent errors."""
        return self.recent_errors[-limit:]

    def clear_stats(self) -> None:
        """Clear error statistics."""
        self.error_counts.clear()
        self.recent_errors.clear()


# Process-wide error statistics shared by the registered handlers
error_handler = ErrorHandler()


async def adaptiq_exception_handler(request: Request, exc: AdaptiqException) -> JSONResponse:
    """Handle custom Adaptiq exceptions."""
    return await error_handler.handle_exception(request, exc)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle FastAPI validation exceptions."""
    return await error_handler.handle_exception(request, exc)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle HTTP exceptions."""
    return await error_handler.handle_exception(request, exc)


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle all other exceptions."""
    return await error_handler.handle_exception(request, exc)


def get_error_handler_health() -> Dict[str, Any]:
    """Get health status of error handling system."""
    stats = error_handler.get_error_stats()
    recent_critical_errors = [
        err for err in error_handler.get_recent_errors(10)
        if err["severity"] == ErrorSeverity.CRITICAL.value
    ]

    return {
        "status": "healthy" if not recent_critical_errors else "degraded",
        "total_errors": stats["total_errors"],
        "recent_critical_errors": len(recent_critical_errors),
        "most_common_error": stats["most_common_errors"][0] if stats["most_common_errors"] else None
    }
