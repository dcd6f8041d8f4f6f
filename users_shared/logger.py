"""
Structured logging utility for Lambda handlers.

This module provides a logging utility that writes one JSON object per line
with a correlation ID, so validation failures can be traced across services.

Follows steering rules:
- Log request lifecycle with correlation ID
- Log errors with context (no sensitive data)
- Use consistent log format
"""

import json
import time
from typing import Dict, Any, Optional
from datetime import datetime, timezone

from ulid import ULID

from .config import load_config
from .metrics import create_metrics_client, MetricsClient


# Sensitive field names that should never be logged (compared lower-cased)
SENSITIVE_FIELDS = {
    'password',
    'token',
    'secret',
    'apikey',
    'api_key',
    'authorization',
    'auth',
    'credentials',
    'privatekey',
    'private_key',
    'accesstoken',
    'access_token',
    'refreshtoken',
    'refresh_token',
    'sessionid',
    'session_id'
}


class StructuredLogger:
    """
    Structured logger for Lambda handlers.
    
    Usage:
        logger = StructuredLogger(correlation_id='abc-123', operation='users-profile-update')
        logger.log_validation_error(errors=[...])
        logger.publish_metrics()
    """
    
    def __init__(
        self,
        correlation_id: str,
        operation: str,
        metrics: Optional[MetricsClient] = None
    ):
        self.correlation_id = correlation_id
        self.operation = operation
        self.start_time = time.time()
        self.metrics = metrics or MetricsClient(operation, enabled=False)
    
    def _sanitize_data(self, data: Any) -> Any:
        """
        Redact sensitive fields from log data, recursing into dicts and lists.
        """
        if isinstance(data, list):
            return [self._sanitize_data(item) for item in data]
        if not isinstance(data, dict):
            return data
        
        sanitized = {}
        for key, value in data.items():
            if isinstance(key, str) and key.lower() in SENSITIVE_FIELDS:
                sanitized[key] = '[REDACTED]'
            else:
                sanitized[key] = self._sanitize_data(value)
        
        return sanitized
    
    def _latency_ms(self) -> int:
        return int((time.time() - self.start_time) * 1000)
    
    def _log(self, event: str, **kwargs: Any) -> None:
        log_entry = {
            'timestamp': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
            'correlationId': self.correlation_id,
            'operation': self.operation,
            'event': event,
            **self._sanitize_data(kwargs)
        }
        
        # stdout is collected by CloudWatch Logs
        print(json.dumps(log_entry, default=str))
    
    def log_validation_error(self, errors: Any, **additional_fields: Any) -> None:
        """
        Log validation error event and count it.
        
        Args:
            errors: Validation error details (list of field errors or a mapping)
            **additional_fields: Additional fields to include in log
            
        Example:
            logger.log_validation_error(
                errors=[{'field': 'email', 'code': 'FORMAT_INVALID', 'message': 'Invalid email format'}]
            )
        """
        self._log(
            'validation_error',
            errors=errors,
            latencyMs=self._latency_ms(),
            **additional_fields
        )
        
        self.metrics.emit_error(error_code='VALIDATION_ERROR')
        if isinstance(errors, list):
            self.metrics.emit_field_errors(len(errors))
    
    def log_info(self, message: str, **additional_fields: Any) -> None:
        """
        Log informational event.
        
        Example:
            logger.log_info(message='update_validated', fields=['name'])
        """
        self._log(
            'info',
            message=message,
            **additional_fields
        )
    
    def publish_metrics(self) -> None:
        """Publish all accumulated metrics. Safe to call with none pending."""
        self.metrics.publish()


def create_logger(
    event: Dict[str, Any],
    operation: str,
    config: Optional[Dict[str, Any]] = None
) -> StructuredLogger:
    """
    Create a structured logger from a Lambda event.
    
    The correlation ID is the API Gateway request ID; when the event carries
    none, a fresh ULID is used so log lines can still be grouped.
    
    Args:
        event: API Gateway Lambda proxy integration event
        operation: Operation name for metrics (e.g., 'users-profile-update')
        config: Configuration as returned by load_config() (loaded when omitted)
        
    Returns:
        StructuredLogger instance
    """
    if config is None:
        config = load_config()
    
    request_context = event.get('requestContext') or {}
    correlation_id = request_context.get('requestId') or str(ULID())
    
    return StructuredLogger(
        correlation_id,
        operation,
        metrics=create_metrics_client(operation, config)
    )
