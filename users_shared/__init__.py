"""Shared utilities for User Management Service."""

from .types import (
    UserRole,
    ErrorCode,
    IdParam,
    UserUpdate,
    FieldError,
    ErrorResponse,
    ValidationErrorDetails
)

from .errors import (
    DomainError,
    ValidationError,
    status_code_for
)

from .responses import (
    create_error_response,
    create_validation_error_response,
    create_domain_error_response
)

from .config import load_config

from .logger import StructuredLogger, create_logger

from .metrics import MetricsClient, create_metrics_client

__all__ = [
    # Types
    'UserRole',
    'ErrorCode',
    'IdParam',
    'UserUpdate',
    'FieldError',
    'ErrorResponse',
    'ValidationErrorDetails',
    # Errors
    'DomainError',
    'ValidationError',
    'status_code_for',
    # Responses
    'create_error_response',
    'create_validation_error_response',
    'create_domain_error_response',
    # Config
    'load_config',
    # Telemetry
    'StructuredLogger',
    'create_logger',
    'MetricsClient',
    'create_metrics_client',
]
