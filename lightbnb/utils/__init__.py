"""
Utility modules for the LightBnB data-access layer.
"""

from .exceptions import (
    LightBnBError,
    QueryFailedError,
    DuplicateResourceError,
    ValidationError
)

__all__ = [
    "LightBnBError",
    "QueryFailedError",
    "DuplicateResourceError",
    "ValidationError",
]
