"""
Domain error classes for the User Management Service.

These error classes provide explicit, typed exceptions that map cleanly to API responses.
Validators themselves never raise them; they are raised when a caller asks a
failed validation result to be turned into an exception.
"""

from typing import Dict, Any, List, Optional

from .types import FieldError


class DomainError(Exception):
    """
    Base class for all domain errors.
    
    Domain errors are explicit business logic errors that should be mapped
    to appropriate HTTP responses by the handler layer.
    """
    
    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}


class ValidationError(DomainError):
    """
    Raised when input validation fails.
    
    Maps to HTTP 400 Bad Request.
    Details contain every field-level validation error under 'errors'.
    """
    
    def __init__(self, message: str, errors: List[FieldError]):
        super().__init__('VALIDATION_ERROR', message, {'errors': list(errors)})
        self.errors = list(errors)

    @property
    def fields(self) -> List[str]:
        """Names of the fields that failed, in reporting order."""
        return [error['field'] for error in self.errors]


# HTTP status codes for domain error codes
STATUS_CODE_MAP = {
    'VALIDATION_ERROR': 400,
}


def status_code_for(error: DomainError) -> int:
    """Map a domain error to its HTTP status code (500 when unknown)."""
    return STATUS_CODE_MAP.get(error.code, 500)
