from typing import Dict, Any, Optional
from datetime import datetime, timezone
from fastapi import status
from sqlalchemy.exc import SQLAlchemyError
import asyncio
import logging

logger = logging.getLogger(__name__)


class BaseCustomException(Exception):
    """Base class for custom exceptions"""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.error_code = error_code
        super().__init__(self.message)


class ValidationError(BaseCustomException):
    """Exception for validation errors"""

    def __init__(
        self,
        message: str = "Validation failed",
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            details=details,
            error_code=error_code or "VALIDATION_ERROR"
        )


class NotFoundError(BaseCustomException):
    """Exception for resource not found errors"""

    def __init__(
        self,
        message: str = "Resource not found",
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            details=details,
            error_code=error_code or "NOT_FOUND_ERROR"
        )


class DatabaseError(BaseCustomException):
    """Exception for database errors"""

    def __init__(
        self,
        message: str = "Database operation failed",
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details=details,
            error_code=error_code or "DATABASE_ERROR"
        )


class RetrievalError(DatabaseError):
    """Exception for a failed read against the visit store"""

    def __init__(
        self,
        message: str = "Failed to retrieve data",
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None
    ):
        super().__init__(
            message=message,
            details=details,
            error_code=error_code or "RETRIEVAL_ERROR"
        )
        self.status_code = status.HTTP_503_SERVICE_UNAVAILABLE


class DataIntegrityError(BaseCustomException):
    """Exception for rows whose joined reference cannot be resolved"""

    def __init__(
        self,
        message: str = "Data integrity violation",
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details=details,
            error_code=error_code or "DATA_INTEGRITY_ERROR"
        )


def create_error_response(
    exception: BaseCustomException,
    request_id: Optional[str] = None
) -> Dict[str, Any]:
    """Create standardized error response"""
    response = {
        "error": exception.__class__.__name__.replace("Error", " Error"),
        "message": exception.message,
        "error_code": exception.error_code,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "request_id": request_id
    }

    if exception.details:
        response["details"] = exception.details

    return response


# Failures the driver can raise below SQLAlchemy, e.g. a refused asyncpg connect
STORE_ERRORS = (SQLAlchemyError, OSError, asyncio.TimeoutError)


def _is_connection_error(error: Exception) -> bool:
    return isinstance(error, ConnectionError) or "connection" in str(error).lower()


def _is_timeout(error: Exception) -> bool:
    return isinstance(error, asyncio.TimeoutError) or "timeout" in str(error).lower()


def handle_retrieval_error(error: Exception, operation: str = "read") -> RetrievalError:
    """Handle store read errors and convert to RetrievalError"""
    logger.error(f"Retrieval error during {operation}: {error!r}")

    error_message = "Failed to retrieve data"
    if _is_connection_error(error):
        error_message = "Database connection failed"
    elif _is_timeout(error):
        error_message = "Database operation timed out"

    return RetrievalError(
        message=error_message,
        details={"operation": operation, "original_error": str(error)}
    )


def handle_database_error(error: Exception, operation: str = "database operation") -> DatabaseError:
    """Handle store write errors and convert to DatabaseError"""
    logger.error(f"Database error during {operation}: {error!r}")

    error_message = "Database operation failed"
    if _is_connection_error(error):
        error_message = "Database connection failed"
    elif "constraint" in str(error).lower():
        error_message = "Database constraint violation"

    return DatabaseError(
        message=error_message,
        details={"operation": operation, "original_error": str(error)},
        error_code="DATABASE_OPERATION_ERROR"
    )


class ErrorHandler:
    """Context manager that turns driver errors into store failures.

    Usable as ``with`` around reads and ``async with`` around writes; the
    async form rolls the session back before re-raising.
    """

    def __init__(
        self,
        operation: str,
        default_exception_class: type = RetrievalError,
        session=None
    ):
        self.operation = operation
        self.default_exception_class = default_exception_class
        self.session = session

    def _convert(self, exc_val: Exception) -> BaseCustomException:
        if issubclass(self.default_exception_class, RetrievalError):
            return handle_retrieval_error(exc_val, self.operation)
        if issubclass(self.default_exception_class, DatabaseError):
            return handle_database_error(exc_val, self.operation)
        logger.error(f"Error in {self.operation}: {exc_val}")
        return self.default_exception_class(
            message=str(exc_val),
            details={"operation": self.operation, "original_error": str(exc_val)}
        )

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is not None and issubclass(exc_type, STORE_ERRORS):
            raise self._convert(exc_val) from exc_val
        return False  # Don't suppress exceptions

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if exc_type is not None and issubclass(exc_type, STORE_ERRORS):
            if self.session is not None:
                await self.session.rollback()
            raise self._convert(exc_val) from exc_val
        return False
