"""Input validation for the user resource."""

from .validation import (
    ValidationResult,
    validate_id_param,
    validate_user_update,
    validate_email_format,
    EMAIL_PATTERN,
    EMPTY_UPDATE_ERROR_FIELD,
    EMPTY_UPDATE_MESSAGE,
    VALID_ROLES
)

from .request import (
    validate_id_path_parameter,
    validate_update_body
)

__all__ = [
    'ValidationResult',
    'validate_id_param',
    'validate_user_update',
    'validate_email_format',
    'EMAIL_PATTERN',
    'EMPTY_UPDATE_ERROR_FIELD',
    'EMPTY_UPDATE_MESSAGE',
    'VALID_ROLES',
    'validate_id_path_parameter',
    'validate_update_body',
]
