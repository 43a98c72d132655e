"""
Utility modules for the LightBnB data-access layer.
"""

from lightbnb.utils.exceptions import (
    APIException,
    ValidationError,
    ConstraintViolationError,
    DatabaseConnectionError,
    QueryExecutionError,
    translate_database_error,
)

__all__ = [
    "APIException",
    "ValidationError",
    "ConstraintViolationError",
    "DatabaseConnectionError",
    "QueryExecutionError",
    "translate_database_error",
]
