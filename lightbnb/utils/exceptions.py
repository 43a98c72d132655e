"""
Custom exception classes for the LightBnB data-access layer.
Every failure carries an HTTP status code so a route layer can return it unchanged.
"""

from typing import Any, Dict, Optional, List
from fastapi import HTTPException, status
from sqlalchemy.exc import (
    DBAPIError,
    DisconnectionError,
    IntegrityError,
    InterfaceError,
    SQLAlchemyError,
    TimeoutError as PoolTimeoutError,
)


class APIException(HTTPException):
    """Base API exception class."""
    
    def __init__(
        self,
        status_code: int,
        detail: str,
        error_code: Optional[str] = None,
        headers: Optional[Dict[str, Any]] = None
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error_code = error_code
    
    def __str__(self) -> str:
        return f"{self.error_code}: {self.detail}"


class ValidationError(APIException):
    """Invalid arguments passed to a gateway operation."""
    
    def __init__(
        self,
        detail: str,
        field_errors: Optional[List[Dict[str, str]]] = None
    ):
        super().__init__(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=detail,
            error_code="VALIDATION_ERROR"
        )
        self.field_errors = field_errors or []


class DatabaseError(APIException):
    """Base class for failures raised while talking to the database."""
    
    def __init__(self, status_code: int, detail: str, error_code: str):
        super().__init__(status_code=status_code, detail=detail, error_code=error_code)


class ConstraintViolationError(DatabaseError):
    """Unique, foreign key or not-null constraint rejected a write."""
    
    def __init__(self, detail: str, constraint: Optional[str] = None):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=detail,
            error_code="CONSTRAINT_VIOLATION"
        )
        self.constraint = constraint


class DatabaseConnectionError(DatabaseError):
    """The pool could not hand out a working connection."""
    
    def __init__(self, detail: str = "Database temporarily unavailable"):
        super().__init__(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=detail,
            error_code="DATABASE_UNAVAILABLE"
        )


class QueryExecutionError(DatabaseError):
    """Any other statement failure."""
    
    def __init__(self, detail: str = "Query execution failed"):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
            error_code="QUERY_FAILED"
        )


def _extract_constraint_name(exception: IntegrityError) -> Optional[str]:
    orig = getattr(exception, "orig", None)
    # asyncpg exposes the constraint on the wrapped driver error
    for candidate in (orig, getattr(orig, "__cause__", None)):
        name = getattr(candidate, "constraint_name", None)
        if name:
            return name
    return None


def translate_database_error(exception: Exception, action: str) -> APIException:
    """
    Map a SQLAlchemy exception onto the typed failure hierarchy.
    
    Args:
        exception: Exception raised by the driver or the ORM
        action: Short description of what was attempted, used in the detail
        
    Returns:
        APIException subclass to raise in place of the original
    """
    if isinstance(exception, APIException):
        return exception
    
    if isinstance(exception, IntegrityError):
        constraint = _extract_constraint_name(exception)
        detail = f"Failed to {action}: constraint violation"
        if constraint:
            detail += f" ({constraint})"
        return ConstraintViolationError(detail, constraint=constraint)
    
    if isinstance(exception, (PoolTimeoutError, DisconnectionError, InterfaceError)):
        return DatabaseConnectionError(f"Failed to {action}: database unavailable")
    
    if isinstance(exception, DBAPIError) and exception.connection_invalidated:
        return DatabaseConnectionError(f"Failed to {action}: connection lost")
    
    if isinstance(exception, OSError):
        return DatabaseConnectionError(f"Failed to {action}: {exception}")
    
    if isinstance(exception, SQLAlchemyError):
        return QueryExecutionError(f"Failed to {action}")
    
    return QueryExecutionError(f"Failed to {action}: {type(exception).__name__}")
