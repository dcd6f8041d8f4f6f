"""
Response helper functions for Lambda handlers.

These functions create consistent HTTP responses. All error responses share
one shape so clients can report every field problem at once.
"""

import json
from typing import Dict, Any, List

from .errors import DomainError, status_code_for
from .types import ErrorResponse, FieldError, ValidationErrorDetails


def create_error_response(
    status_code: int,
    code: str,
    message: str,
    details: Dict[str, Any]
) -> Dict[str, Any]:
    """
    Create an error HTTP response with consistent structure.
    
    All error responses follow the format:
    {
        "code": "ERROR_CODE",
        "message": "Human-readable message",
        "details": { ... }
    }
    
    Args:
        status_code: HTTP status code (400, 500, etc.)
        code: Error code string (VALIDATION_ERROR, INTERNAL_ERROR, etc.)
        message: Human-readable error message
        details: Additional error context (field errors, etc.)
        
    Returns:
        Lambda proxy integration response object
    """
    body: ErrorResponse = {
        'code': code,
        'message': message,
        'details': details
    }
    return {
        'statusCode': status_code,
        'headers': {
            'Content-Type': 'application/json'
        },
        'body': json.dumps(body)
    }


def create_validation_error_response(
    errors: List[FieldError],
    message: str = 'Invalid request data'
) -> Dict[str, Any]:
    """
    Create a 400 response enumerating field errors.
    
    Args:
        errors: Field errors as returned by a validator
        message: Human-readable summary
        
    Returns:
        Lambda proxy integration response object
    """
    details: ValidationErrorDetails = {'errors': list(errors)}
    return create_error_response(400, 'VALIDATION_ERROR', message, dict(details))


def create_domain_error_response(error: DomainError) -> Dict[str, Any]:
    """Create the response for a raised domain error."""
    return create_error_response(
        status_code_for(error),
        error.code,
        error.message,
        error.details
    )
