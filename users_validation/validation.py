"""
User request validation.

This module implements input validation for the user resource:
- the user ID path parameter, coerced to a positive integer
- the partial profile update payload (name, email, role)

Every validator is a pure function. It never raises for bad input and never
modifies its argument; it returns a ValidationResult holding either the
normalized value or every field error found.

Follows steering rules:
- Explicit over implicit
- Fail fast on invalid input
- Return detailed validation errors
"""

import math
import re
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Mapping, Optional, Tuple

from users_shared.errors import ValidationError
from users_shared.types import ErrorCode, FieldError, IdParam, UserUpdate


# Email regex pattern (RFC 5322 simplified)
# Validates: local-part@domain with basic character restrictions; the domain
# needs at least one dot, so single-label hosts like 'localhost' are rejected
EMAIL_PATTERN = re.compile(
    r'^[a-zA-Z0-9.!#$%&\'*+/=?^_`{|}~-]+@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)+$'
)

# Decimal numeric literal accepted for the ID parameter ("42", "+42", "42.0", "4e1")
NUMERIC_PATTERN = re.compile(r'^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$')

# Unsigned hexadecimal, binary and octal literals ("0x10", "0b11", "0o7")
RADIX_PATTERN = re.compile(r'^0(?:[xX][0-9a-fA-F]+|[bB][01]+|[oO][0-7]+)$')

# Outside these decimal exponents a value no longer fits a double:
# above it is rejected, below it rounds to zero
MAX_NUMERIC_EXPONENT = 308
MIN_NUMERIC_EXPONENT = -324

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 255
EMAIL_MAX_LENGTH = 255

VALID_ROLES = ('user', 'admin')

UPDATE_FIELDS = ('name', 'email', 'role')

# The empty-update error is reported against 'name' for compatibility with
# existing clients, even though it concerns the payload as a whole.
EMPTY_UPDATE_ERROR_FIELD = 'name'
EMPTY_UPDATE_MESSAGE = 'At least one field must be provided to update'


class ValidationResult:
    """
    Outcome of a validation call.

    Exactly one of `value` and `errors` is meaningful: a successful result
    carries the normalized value and no errors, a failed one carries the
    errors and a `None` value.
    """

    def __init__(self, value: Any = None, errors: Optional[List[FieldError]] = None):
        self.errors: List[FieldError] = list(errors or [])
        self.value = None if self.errors else value

    @classmethod
    def success(cls, value: Any) -> 'ValidationResult':
        return cls(value=value)

    @classmethod
    def failure(cls, errors: List[FieldError]) -> 'ValidationResult':
        if not errors:
            raise ValueError('A failed validation result needs at least one error')
        return cls(errors=errors)

    @property
    def ok(self) -> bool:
        return not self.errors

    def raise_for_errors(self, message: str = 'Invalid request data') -> Any:
        """
        Return the normalized value, or raise ValidationError if validation failed.

        For callers that map DomainError to responses in one place instead of
        inspecting results.
        """
        if self.errors:
            raise ValidationError(message, self.errors)
        return self.value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValidationResult):
            return NotImplemented
        return self.value == other.value and self.errors == other.errors

    def __repr__(self) -> str:
        if self.ok:
            return f'ValidationResult(value={self.value!r})'
        return f'ValidationResult(errors={self.errors!r})'


def _error(field: str, code: ErrorCode, message: str) -> FieldError:
    return {'field': field, 'code': code, 'message': message}


def _coerce_number(value: Any) -> Optional[Decimal]:
    """
    Convert a raw value to an exact Decimal, or None if it is not numeric.

    Strings follow the usual numeric-string conversion of web clients: a
    blank string is 0, and 0x/0b/0o literals are read in their radix.
    Booleans are rejected even though they are ints in Python.
    """
    if isinstance(value, bool):
        return None

    if isinstance(value, int):
        number = Decimal(value)
    elif isinstance(value, float):
        if not math.isfinite(value):
            return None
        number = Decimal(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return Decimal(0)
        if RADIX_PATTERN.match(text):
            return Decimal(int(text, 0))
        if not NUMERIC_PATTERN.match(text):
            return None
        try:
            number = Decimal(text)
        except InvalidOperation:
            return None
    else:
        return None

    if number and number.adjusted() > MAX_NUMERIC_EXPONENT:
        return None
    if number and number.adjusted() < MIN_NUMERIC_EXPONENT:
        # Underflows to zero as a double would
        return Decimal(0)
    return number


def validate_id_param(params: Any) -> ValidationResult:
    """
    Validate the user ID path parameter.

    Performs the following validations:
    1. id is present
    2. id coerces to a number (numeric strings are accepted)
    3. id is a whole number
    4. id is greater than zero

    Args:
        params: Path parameters mapping holding 'id', or the raw id value itself

    Returns:
        ValidationResult whose value is {'id': <int>} on success.

    Examples:
        >>> validate_id_param({'id': '7'}).value
        {'id': 7}

        >>> validate_id_param({'id': '0'}).errors
        [{'field': 'id', 'code': 'OUT_OF_RANGE', 'message': 'ID must be greater than 0'}]
    """
    if isinstance(params, Mapping):
        raw = params.get('id')
    else:
        raw = params

    if raw is None:
        return ValidationResult.failure([
            _error('id', 'MISSING_FIELD', 'Field is required')
        ])

    number = _coerce_number(raw)
    if number is None:
        return ValidationResult.failure([
            _error('id', 'TYPE_MISMATCH', 'ID must be a number')
        ])

    if number != number.to_integral_value():
        return ValidationResult.failure([
            _error('id', 'TYPE_MISMATCH', 'ID must be an integer')
        ])

    if number <= 0:
        return ValidationResult.failure([
            _error('id', 'OUT_OF_RANGE', 'ID must be greater than 0')
        ])

    result: IdParam = {'id': int(number)}
    return ValidationResult.success(result)


def _validate_name(value: Any) -> Tuple[Optional[str], Optional[FieldError]]:
    if not isinstance(value, str):
        return None, _error('name', 'TYPE_MISMATCH', 'Name must be a string')

    name = value.strip()
    if len(name) < NAME_MIN_LENGTH:
        return None, _error(
            'name', 'OUT_OF_RANGE', f'Name must be at least {NAME_MIN_LENGTH} characters'
        )
    if len(name) > NAME_MAX_LENGTH:
        return None, _error(
            'name', 'OUT_OF_RANGE', f'Name must be at most {NAME_MAX_LENGTH} characters'
        )
    return name, None


def _validate_email(value: Any) -> Tuple[Optional[str], Optional[FieldError]]:
    if not isinstance(value, str):
        return None, _error('email', 'TYPE_MISMATCH', 'Email must be a string')

    email = value.strip().lower()
    if not EMAIL_PATTERN.match(email):
        return None, _error('email', 'FORMAT_INVALID', 'Invalid email format')
    if len(email) > EMAIL_MAX_LENGTH:
        return None, _error(
            'email', 'OUT_OF_RANGE', f'Email must be at most {EMAIL_MAX_LENGTH} characters'
        )
    return email, None


def _validate_role(value: Any) -> Tuple[Optional[str], Optional[FieldError]]:
    # No case folding or coercion: 'Admin' and 1 are both rejected
    if not isinstance(value, str) or value not in VALID_ROLES:
        return None, _error(
            'role', 'ENUM_INVALID', f'Role must be one of: {", ".join(sorted(VALID_ROLES))}'
        )
    return value, None


_FIELD_VALIDATORS = {
    'name': _validate_name,
    'email': _validate_email,
    'role': _validate_role,
}


def _check_not_empty(update: Dict[str, Any]) -> List[FieldError]:
    """Cross-field rule, applied to the normalized update after field checks pass."""
    if update:
        return []
    return [_error(EMPTY_UPDATE_ERROR_FIELD, 'CROSS_FIELD_INVALID', EMPTY_UPDATE_MESSAGE)]


def validate_user_update(payload: Any) -> ValidationResult:
    """
    Validate a partial user update payload.

    Performs the following validations:
    1. payload is an object
    2. name, if present, is a string of 2-255 characters after trimming
    3. email, if present, is a valid address after trimming and lower-casing,
       at most 255 characters long
    4. role, if present, is exactly 'user' or 'admin'
    5. at least one of the fields above is present

    Unknown keys are ignored. Field errors are collected rather than stopping
    at the first one. Whether the caller may set a given role is not checked
    here.

    Args:
        payload: Decoded request body

    Returns:
        ValidationResult whose value holds only the fields that were present,
        normalized.

    Examples:
        >>> validate_user_update({'email': ' USER@Example.COM '}).value
        {'email': 'user@example.com'}

        >>> validate_user_update({}).errors
        [{'field': 'name', 'code': 'CROSS_FIELD_INVALID', 'message': 'At least one field must be provided to update'}]
    """
    if not isinstance(payload, Mapping):
        return ValidationResult.failure([
            _error('body', 'TYPE_MISMATCH', 'Request body must be an object')
        ])

    errors: List[FieldError] = []
    update: UserUpdate = {}

    for field in UPDATE_FIELDS:
        if field not in payload:
            continue
        value, error = _FIELD_VALIDATORS[field](payload[field])
        if error:
            errors.append(error)
        else:
            update[field] = value

    if errors:
        return ValidationResult.failure(errors)

    errors = _check_not_empty(update)
    if errors:
        return ValidationResult.failure(errors)

    return ValidationResult.success(update)


def validate_email_format(email: Any) -> bool:
    """
    Validate email format using regex.

    Uses a simplified RFC 5322 pattern that covers most common email formats.

    Examples:
        >>> validate_email_format('user@example.com')
        True

        >>> validate_email_format('invalid-email')
        False
    """
    if not email or not isinstance(email, str):
        return False

    return EMAIL_PATTERN.match(email.strip()) is not None
