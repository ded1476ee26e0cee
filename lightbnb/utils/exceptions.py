"""
Custom exception classes for the LightBnB data-access layer.
Every failure leaving a repository is one of these, so callers can tell a
failed query apart from an empty result.
"""

from typing import Optional


class LightBnBError(Exception):
    """Base data-access exception class."""
    
    error_code = "LIGHTBNB_ERROR"
    
    def __init__(self, detail: str, error_code: Optional[str] = None):
        super().__init__(detail)
        self.detail = detail
        if error_code:
            self.error_code = error_code


class QueryFailedError(LightBnBError):
    """A database statement failed to execute."""
    
    error_code = "QUERY_FAILED"
    
    def __init__(self, operation: str, original: Optional[BaseException] = None):
        detail = f"Query failed during {operation}"
        if original is not None:
            detail += f": {original}"
        super().__init__(detail)
        self.operation = operation
        self.original = original


class DuplicateResourceError(LightBnBError):
    """Duplicate resource exception."""
    
    error_code = "CONFLICT"
    
    def __init__(self, resource: str, identifier: str):
        super().__init__(f"{resource} with identifier '{identifier}' already exists")
        self.resource = resource
        self.identifier = identifier


class ValidationError(LightBnBError, ValueError):
    """Domain validation failed before any SQL was issued."""
    
    error_code = "VALIDATION_ERROR"
