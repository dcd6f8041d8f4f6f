"""
Shared type definitions for the User Management Service.

This module defines TypedDict classes for validated request values and the
structured errors produced when validation fails.
"""

from typing import TypedDict, Literal, List, Dict, Any

# Roles a user may be assigned through a profile update
UserRole = Literal['user', 'admin']

# Validation error codes
ErrorCode = Literal[
    'MISSING_FIELD',
    'TYPE_MISMATCH',
    'OUT_OF_RANGE',
    'FORMAT_INVALID',
    'ENUM_INVALID',
    'CROSS_FIELD_INVALID'
]


class IdParam(TypedDict):
    """Validated user ID path parameter."""
    id: int


class UserUpdate(TypedDict, total=False):
    """Validated partial update payload. Omitted fields stay omitted."""
    name: str
    email: str
    role: UserRole


class FieldError(TypedDict):
    """A single field-level validation failure."""
    field: str
    code: ErrorCode
    message: str


class ErrorResponse(TypedDict):
    """Standard error response structure."""
    code: str
    message: str
    details: Dict[str, Any]


class ValidationErrorDetails(TypedDict):
    """Details payload of a VALIDATION_ERROR response."""
    errors: List[FieldError]
